"""Annotation store: file format, in-memory model and persistence."""

from annovate.store.bootstrap import CREATION_KEY, create_annotation_file, format_timestamp
from annovate.store.file import AnnotationFile
from annovate.store.lexer import classify_line
from annovate.store.models import (
    AnnoContainer,
    AnnoIOError,
    Annotation,
    AnnotationStore,
    AnnovateError,
    FileTable,
    ParseError,
)
from annovate.store.parser import ParserState, next_state, parse_lines, parse_text
from annovate.store.serializer import render_annotation, serialize

__all__ = [
    "CREATION_KEY",
    "AnnoContainer",
    "AnnoIOError",
    "Annotation",
    "AnnotationFile",
    "AnnotationStore",
    "AnnovateError",
    "FileTable",
    "ParseError",
    "ParserState",
    "classify_line",
    "create_annotation_file",
    "format_timestamp",
    "next_state",
    "parse_lines",
    "parse_text",
    "render_annotation",
    "serialize",
]
