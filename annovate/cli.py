"""CLI entry point for Annovate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from annovate.config import AnnovateConfig, load_config
from annovate.config.loader import DEFAULT_CONFIG_TEMPLATE, PROJECT_CONFIG_NAME
from annovate.report import build_report
from annovate.store import (
    AnnoContainer,
    AnnotationFile,
    Annotation,
    AnnovateError,
    format_timestamp,
)

app = typer.Typer(
    name="anno",
    help="Annovate: manage your files' metadata.",
)

config_app = typer.Typer(help="Manage Annovate configuration.")
app.add_typer(config_app, name="config")

MISSING_VALUE = "<missing-value>"
MISSING_CONTEXT = "<missing-context>"


@dataclass
class _Session:
    config: AnnovateConfig
    meta_file: str | None = None
    meta_outfile: str | None = None
    context: str | None = None


# Global state
_session: _Session | None = None


def _get_session() -> _Session:
    if _session is None:
        return _Session(config=load_config())
    return _session


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", help="Path to annovate.yaml")
    ] = None,
    meta_file: Annotated[
        str | None,
        typer.Option("--meta-file", "-m", help="Annotation file to use (default ./.annovate)"),
    ] = None,
    meta_outfile: Annotated[
        str | None,
        typer.Option("--meta-outfile", "-M", help="Write changes here instead of the meta file"),
    ] = None,
    context: Annotated[
        str | None, typer.Option("--context", "-C", help="Context for new entries")
    ] = None,
) -> None:
    """Global options."""
    global _session
    try:
        cfg = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    _setup_logging(cfg.log_level)
    _session = _Session(
        config=cfg, meta_file=meta_file, meta_outfile=meta_outfile, context=context
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _meta_path(directory: Path | None = None) -> Path:
    session = _get_session()
    if session.meta_file:
        return Path(session.meta_file)
    if directory is not None:
        return directory / session.config.meta_file
    return Path(session.config.meta_file)


def _new_context() -> str:
    """Context for entries written by this invocation."""
    session = _get_session()
    if session.context:
        return session.context
    stamp = format_timestamp(session.config.timestamp_format)
    return f"{session.config.context_prefix}, {stamp}"


def _open(path: Path | None = None) -> AnnotationFile:
    cfg = _get_session().config
    path = path or _meta_path()
    try:
        return AnnotationFile.open(
            path,
            creation_reason=cfg.creation_reason,
            timestamp_format=cfg.timestamp_format,
        )
    except AnnovateError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _save(anno_file: AnnotationFile) -> None:
    outfile = _get_session().meta_outfile
    try:
        anno_file.save_as(outfile or anno_file.path)
    except AnnovateError as e:
        rprint(
            f"[red]{escape('[FATAL]')}[/red] Failed to write annovate file to disk: "
            f"{escape(str(e))}"
        )
        raise typer.Exit(1)


def _warn(msg: str) -> None:
    rprint(f"[yellow]Warning:[/yellow] {escape(msg)}")


def _pairs(values: list[str] | None) -> list[tuple[str, str]]:
    """Split a flat KEY VALUE KEY VALUE ... list into pairs."""
    values = values or []
    if len(values) % 2:
        rprint("[red]Error:[/red] Expected KEY VALUE pairs, got an odd number of arguments")
        raise typer.Exit(1)
    return list(zip(values[::2], values[1::2]))


def _flag(value: bool, default: bool) -> bool:
    return value or default


def _display_rows(
    rows: list[tuple[str, str, str]],
    headers: tuple[str, str, str],
    title: str,
    with_context: bool,
) -> None:
    """Display (name, value, context) rows as a Rich table."""
    table = Table(title=escape(title))
    table.add_column(escape(headers[0]), style="cyan")
    table.add_column(escape(headers[1]))
    if with_context:
        table.add_column(escape(headers[2]), style="dim")
    for name, value, context in rows:
        cells = [escape(name), escape(value)]
        if with_context:
            cells.append(escape(context))
        table.add_row(*cells)
    rprint(table)


def _display_container(
    container: AnnoContainer, title: str, with_context: bool, show_duplicates: bool
) -> None:
    if not show_duplicates:
        container = container.latest_entries()
    rows = [(a.key, a.value, a.context) for a in container]
    _display_rows(rows, ("Key", "Value", "Context"), title, with_context)


def _file_annotations_or_exit(anno_file: AnnotationFile, filename: str) -> AnnoContainer:
    annotations = anno_file.store.file_annotations(filename)
    if annotations is None:
        rprint(f"[red]Error:[/red] {escape(filename)} has no annotations")
        raise typer.Exit(1)
    return annotations


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def new(
    dirname: str = typer.Argument(..., help="Directory to create"),
) -> None:
    """Create a new directory and put an annovate file into it."""
    directory = Path(dirname)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        rprint(f"[red]Error:[/red] Failed to create new directory: {escape(str(e))}")
        raise typer.Exit(1)
    anno_file = _open(_meta_path(directory))
    rprint(f"[green]Created[/green] {escape(str(anno_file.path))}")


@app.command()
def query(
    filename: str = typer.Argument(..., help="File to show annotations for"),
    keys: Annotated[list[str] | None, typer.Argument(help="Only show these keys")] = None,
    show_all: bool = typer.Option(False, "--all", "-a", help="Include overwritten entries"),
    show_context: bool = typer.Option(False, "--show-context", "-c", help="Also print context"),
) -> None:
    """List (specific or all) annotations of a file."""
    cfg = _get_session().config
    anno_file = _open()
    annotations = _file_annotations_or_exit(anno_file, filename)
    if keys:
        annotations = annotations.with_keys(keys)
    _display_container(
        annotations,
        filename,
        _flag(show_context, cfg.display.show_context),
        _flag(show_all, cfg.display.show_duplicates),
    )


@app.command("query-dir")
def query_dir(
    keys: Annotated[list[str] | None, typer.Argument(help="Only show these keys")] = None,
    show_all: bool = typer.Option(False, "--all", "-a", help="Include overwritten entries"),
    show_context: bool = typer.Option(False, "--show-context", "-c", help="Also print context"),
) -> None:
    """List (specific or all) annotations of the directory."""
    cfg = _get_session().config
    anno_file = _open()
    annotations = anno_file.store.directory_annotations()
    if keys:
        annotations = annotations.with_keys(keys)
    _display_container(
        annotations,
        "Directory",
        _flag(show_context, cfg.display.show_context),
        _flag(show_all, cfg.display.show_duplicates),
    )


@app.command()
def put(
    filename: str = typer.Argument(..., help="File to annotate"),
    pairs: Annotated[list[str] | None, typer.Argument(help="KEY VALUE pairs")] = None,
) -> None:
    """Add key-value pairs for a single file."""
    entries = _pairs(pairs)
    anno_file = _open()
    context = _new_context()
    for key, value in entries:
        anno_file.store.add_file_annotation(filename, Annotation(key, value, context))
    _save(anno_file)


@app.command("put-batch")
def put_batch(
    key: str = typer.Argument(..., help="Key to set"),
    value: str = typer.Argument(..., help="Value to set"),
    filenames: Annotated[list[str] | None, typer.Argument(help="Files to annotate")] = None,
) -> None:
    """Add one common key-value pair for several files."""
    anno_file = _open()
    context = _new_context()
    for filename in filenames or []:
        anno_file.store.add_file_annotation(filename, Annotation(key, value, context))
    _save(anno_file)


@app.command("put-dir")
def put_dir(
    pairs: Annotated[list[str] | None, typer.Argument(help="KEY VALUE pairs")] = None,
) -> None:
    """Add key-value pairs for the directory."""
    entries = _pairs(pairs)
    anno_file = _open()
    context = _new_context()
    for key, value in entries:
        anno_file.store.add_directory_annotation(Annotation(key, value, context))
    _save(anno_file)


@app.command(name="list")
def list_cmd(
    key: Annotated[str | None, typer.Argument(help="Key to list (default: description)")] = None,
    show_all: bool = typer.Option(False, "--all", "-a", help="Include overwritten entries"),
    show_context: bool = typer.Option(False, "--show-context", "-c", help="Also print context"),
    dotfiles: bool = typer.Option(False, "--dotfiles", "-d", help="Include dotfiles"),
) -> None:
    """Show the value of one key for every annotated file."""
    cfg = _get_session().config
    key = key or cfg.list_key
    include_dotfiles = _flag(dotfiles, cfg.include_dotfiles)
    show_duplicates = _flag(show_all, cfg.display.show_duplicates)

    anno_file = _open()
    rows: list[tuple[str, str, str]] = []
    for filename in sorted(anno_file.store.list_files()):
        if not include_dotfiles and filename.startswith("."):
            continue
        matches = anno_file.store.file_annotations(filename).with_keys([key])
        if not show_duplicates:
            matches = matches.latest_entries()
        if not matches:
            rows.append((filename, MISSING_VALUE, MISSING_CONTEXT))
        rows.extend((filename, a.value, a.context) for a in matches)

    _display_rows(
        rows,
        ("Filename", key, "Context"),
        f"Files ({len(rows)})",
        _flag(show_context, cfg.display.show_context),
    )


def _echo_values(container: AnnoContainer, key: str, show_all: bool) -> None:
    if show_all:
        for anno in container.with_keys([key]):
            typer.echo(anno.value)
        return
    latest = container.latest(key)
    if latest is not None:
        typer.echo(latest.value)


@app.command()
def get(
    filename: str = typer.Argument(..., help="File to read from"),
    key: str = typer.Argument(..., help="Key to print"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Print overwritten values too"),
) -> None:
    """Print the value for a single key (and nothing more) for a file."""
    anno_file = _open()
    annotations = _file_annotations_or_exit(anno_file, filename)
    _echo_values(annotations, key, show_all)


@app.command("get-dir")
def get_dir(
    key: str = typer.Argument(..., help="Key to print"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Print overwritten values too"),
) -> None:
    """Print the value for a single key (and nothing more) for the directory."""
    anno_file = _open()
    _echo_values(anno_file.store.directory_annotations(), key, show_all)


@app.command()
def copy(
    source: str = typer.Argument(..., help="File to copy annotations from"),
    target: str = typer.Argument(..., help="File to copy annotations to"),
    keys: Annotated[list[str] | None, typer.Argument(help="Keys to copy (default: all)")] = None,
) -> None:
    """Copy the current key-value pairs of one file to another."""
    anno_file = _open()
    annotations = _file_annotations_or_exit(anno_file, source)
    if keys:
        annotations = annotations.with_keys(keys)
        for key in keys:
            if annotations.latest(key) is None:
                _warn(f"No matching entries found for key `{key}`")

    context = f"copy from {source}"
    copied = 0
    for anno in annotations.latest_entries():
        anno_file.store.add_file_annotation(target, Annotation(anno.key, anno.value, context))
        copied += 1
    _save(anno_file)
    rprint(f"[green]Copied[/green] {copied} entr{'y' if copied == 1 else 'ies'} to {escape(target)}")


@app.command("rm-file-key")
def rm_file_key(
    filename: str = typer.Argument(..., help="File to remove keys from"),
    keys: Annotated[list[str] | None, typer.Argument(help="Keys to remove")] = None,
) -> None:
    """Remove all annotations for a file that have specific keys."""
    anno_file = _open()
    for key in keys or []:
        if not anno_file.store.remove_file_annotation_entries(filename, key):
            _warn(f"No matching entries found for key `{key}`")
    _save(anno_file)


@app.command("rm-dir-key")
def rm_dir_key(
    keys: Annotated[list[str] | None, typer.Argument(help="Keys to remove")] = None,
) -> None:
    """Remove all annotations for the directory that have specific keys."""
    anno_file = _open()
    for key in keys or []:
        if not anno_file.store.remove_directory_annotation_entries(key):
            _warn(f"No matching entries found for key `{key}`")
    _save(anno_file)


@app.command("drop-file")
def drop_file(
    filenames: Annotated[list[str] | None, typer.Argument(help="Files to forget")] = None,
) -> None:
    """Remove the metadata of specific files completely."""
    anno_file = _open()
    for filename in filenames or []:
        if not anno_file.store.drop_file_annotations(filename):
            _warn(f"File is not in annotations: {filename}")
    _save(anno_file)


@app.command()
def report(
    path: Annotated[str, typer.Argument(help="Directory to compare")] = ".",
    dotfiles: bool = typer.Option(False, "--dotfiles", "-d", help="Include dotfiles"),
) -> None:
    """Show which files have (=) or lack (-) metadata, and which are gone (+)."""
    cfg = _get_session().config
    directory = Path(path)
    meta = _meta_path(directory)
    anno_file = _open(meta)
    try:
        result = build_report(
            anno_file.store,
            directory,
            include_dotfiles=_flag(dotfiles, cfg.include_dotfiles),
            exclude=[meta.name],
        )
    except AnnovateError as e:
        rprint(f"[red]Error:[/red] Failed to read directory: {escape(str(e))}")
        raise typer.Exit(1)

    for name in result.common:
        typer.echo(f"= {name}")
    for name in result.annotated_only:
        typer.echo(f"+ {name}")
    for name in result.unannotated:
        typer.echo(f"- {name}")


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_session().config
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default annovate.yaml in current directory."""
    target = Path(PROJECT_CONFIG_NAME)
    if target.exists() and not force:
        rprint(f"[yellow]{target} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
