"""Compare the files annotated in a store with the files present on disk."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from annovate.store.models import AnnoIOError, AnnotationStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryReport:
    """Result of comparing store entries against a directory listing."""

    common: tuple[str, ...] = ()
    annotated_only: tuple[str, ...] = ()
    unannotated: tuple[str, ...] = ()


def _list_directory(directory: Path) -> set[str]:
    try:
        return {entry.name for entry in directory.iterdir()}
    except OSError as e:
        raise AnnoIOError("list", directory, e) from e


def build_report(
    store: AnnotationStore,
    directory: Path,
    include_dotfiles: bool = False,
    exclude: Iterable[str] = (),
) -> DirectoryReport:
    """Classify names as annotated and present, annotated but missing, or
    present without annotations.

    Dotfiles on disk are ignored unless *include_dotfiles* is set; names in
    *exclude* (typically the annotation file itself) are never reported.
    """
    skip = set(exclude)
    on_disk = {
        name
        for name in _list_directory(directory)
        if name not in skip and (include_dotfiles or not name.startswith("."))
    }
    annotated = {name for name in store.list_files() if name not in skip}

    report = DirectoryReport(
        common=tuple(sorted(on_disk & annotated)),
        annotated_only=tuple(sorted(annotated - on_disk)),
        unannotated=tuple(sorted(on_disk - annotated)),
    )
    logger.debug(
        "report for %s: %d common, %d annotated only, %d unannotated",
        directory,
        len(report.common),
        len(report.annotated_only),
        len(report.unannotated),
    )
    return report
