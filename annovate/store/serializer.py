"""Render an AnnotationStore back into the annotation file format."""

from __future__ import annotations

from collections.abc import Iterable

from annovate.store.lexer import LEADER_CONTEXT, LEADER_FILE, LEADER_KEY, LEADER_VALUE
from annovate.store.models import Annotation, AnnotationStore


def render_annotation(anno: Annotation) -> list[str]:
    """Lines for one annotation: key, one value line per embedded line, context."""
    lines = [f"{LEADER_KEY}{anno.key}"]
    lines.extend(f"{LEADER_VALUE}{part}" for part in anno.value.split("\n"))
    lines.append(f"{LEADER_CONTEXT}{anno.context}")
    return lines


def _render_all(annotations: Iterable[Annotation]) -> list[str]:
    lines: list[str] = []
    for anno in annotations:
        lines.extend(render_annotation(anno))
    return lines


def serialize(store: AnnotationStore) -> str:
    """Full file contents for *store*: directory entries, then file sections."""
    lines = _render_all(store.directory_annotations())
    for name, annotations in store.file_sections():
        lines.append(f"{LEADER_FILE}{name}")
        lines.extend(_render_all(annotations))
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
