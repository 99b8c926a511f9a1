"""Annovate - per-file and per-directory metadata kept in a flat annotation file."""

from annovate.config import AnnovateConfig, load_config
from annovate.report import DirectoryReport, build_report
from annovate.store import (
    AnnoContainer,
    AnnoIOError,
    Annotation,
    AnnotationFile,
    AnnotationStore,
    AnnovateError,
    ParseError,
    parse_text,
    serialize,
)

__version__ = "0.1.0"

__all__ = [
    "AnnoContainer",
    "AnnoIOError",
    "Annotation",
    "AnnotationFile",
    "AnnotationStore",
    "AnnovateConfig",
    "AnnovateError",
    "DirectoryReport",
    "ParseError",
    "build_report",
    "load_config",
    "parse_text",
    "serialize",
]
