"""Creation of fresh annotation files."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from annovate.store.models import AnnoIOError, Annotation, AnnotationStore
from annovate.store.serializer import serialize

logger = logging.getLogger(__name__)

CREATION_KEY = "creation time"
DEFAULT_CREATION_REASON = "new annovate file"
DEFAULT_TIMESTAMP_FORMAT = "%d.%m.%Y %H:%M:%S"


def format_timestamp(fmt: str = DEFAULT_TIMESTAMP_FORMAT, now: datetime | None = None) -> str:
    """Local time formatted with *fmt*."""
    return (now or datetime.now()).strftime(fmt)


def create_annotation_file(
    path: Path,
    creation_reason: str = DEFAULT_CREATION_REASON,
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
) -> bool:
    """Create *path* holding only a `creation time` entry if it is missing.

    Returns True when a new file was written.
    """
    if path.exists():
        return False

    store = AnnotationStore()
    store.add_directory_annotation(
        Annotation(CREATION_KEY, format_timestamp(timestamp_format), creation_reason)
    )
    try:
        path.write_text(serialize(store), encoding="utf-8", newline="")
    except OSError as e:
        raise AnnoIOError("create", path, e) from e
    logger.info("created annotation file %s", path)
    return True
