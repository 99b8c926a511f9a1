"""AnnotationFile: binds an AnnotationStore to its file on disk."""

from __future__ import annotations

import logging
from pathlib import Path

from annovate.store.bootstrap import (
    DEFAULT_CREATION_REASON,
    DEFAULT_TIMESTAMP_FORMAT,
    create_annotation_file,
)
from annovate.store.models import AnnoIOError, AnnotationStore
from annovate.store.parser import parse_text
from annovate.store.serializer import serialize

logger = logging.getLogger(__name__)


class AnnotationFile:
    """An annotation file loaded into memory.

    The file is read once by open() and rewritten in full by save(); no
    handle is kept in between, so concurrent writers are not detected.
    """

    def __init__(self, path: Path, store: AnnotationStore) -> None:
        self.path = path
        self.store = store

    @classmethod
    def open(
        cls,
        path: Path | str,
        creation_reason: str = DEFAULT_CREATION_REASON,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ) -> AnnotationFile:
        """Load *path*, creating a fresh annotation file first if it is missing.

        Raises ParseError for malformed content and AnnoIOError when the
        file cannot be created or read.
        """
        path = Path(path)
        create_annotation_file(path, creation_reason, timestamp_format)
        try:
            with path.open(encoding="utf-8", newline="") as f:
                text = f.read()
        except OSError as e:
            raise AnnoIOError("read", path, e) from e
        store = parse_text(text)
        logger.debug("loaded %s (%d files)", path, len(store.list_files()))
        return cls(path, store)

    def save(self) -> Path:
        """Overwrite the source file with the current store."""
        return self.save_as(self.path)

    def save_as(self, path: Path | str) -> Path:
        """Write the current store to *path*, replacing any existing content."""
        dest = Path(path)
        content = serialize(self.store)
        try:
            dest.write_text(content, encoding="utf-8", newline="")
        except OSError as e:
            raise AnnoIOError("write", dest, e) from e
        logger.info("wrote %s (%d bytes)", dest, len(content))
        return dest
