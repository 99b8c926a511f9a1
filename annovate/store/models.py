"""In-memory model for annotation files."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path


class AnnovateError(Exception):
    """Base class for annotation store errors."""


class ParseError(AnnovateError):
    """A line starts with an unknown leader or one used out of sequence."""

    def __init__(self, line: int, char: str) -> None:
        self.line = line
        self.char = char
        super().__init__(f"Invalid token `{char}` at the beginning of line {line}")


class AnnoIOError(AnnovateError):
    """Wraps an OSError raised while reading, writing or creating a file."""

    def __init__(self, operation: str, path: Path | str, cause: OSError) -> None:
        self.operation = operation
        self.path = Path(path)
        super().__init__(f"{operation} {path} failed: {cause}")
        self.__cause__ = cause


@dataclass(frozen=True)
class Annotation:
    """A single key/value record with its provenance note."""

    key: str
    value: str
    context: str


class AnnoContainer(Sequence[Annotation]):
    """Ordered annotation list; later entries overwrite earlier ones per key."""

    def __init__(self, annotations: Iterable[Annotation] = ()) -> None:
        self._items: list[Annotation] = list(annotations)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return AnnoContainer(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Annotation]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AnnoContainer):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"AnnoContainer({self._items!r})"

    def append(self, anno: Annotation) -> None:
        self._items.append(anno)

    def remove_key(self, key: str) -> bool:
        """Drop every entry for *key*. Returns True if anything was removed."""
        kept = [a for a in self._items if a.key != key]
        removed = len(kept) < len(self._items)
        self._items = kept
        return removed

    def latest(self, key: str) -> Annotation | None:
        """Current entry for *key*: the last one written, or None."""
        for anno in reversed(self._items):
            if anno.key == key:
                return anno
        return None

    def latest_entries(self) -> AnnoContainer:
        """One entry per key (the newest), kept in file order."""
        newest = {a.key: i for i, a in enumerate(self._items)}
        return AnnoContainer(
            a for i, a in enumerate(self._items) if newest[a.key] == i
        )

    def with_keys(self, keys: Iterable[str]) -> AnnoContainer:
        """Subset holding only entries whose key is in *keys*."""
        wanted = set(keys)
        return AnnoContainer(a for a in self._items if a.key in wanted)


class FileTable:
    """Filename -> AnnoContainer map with explicit registration.

    A name is known only once registered; a registered name may hold an
    empty container, which is distinct from not being registered at all.
    """

    def __init__(self) -> None:
        self._entries: dict[str, AnnoContainer] = {}

    def register(self, name: str) -> AnnoContainer:
        """Register *name* if needed and return its container."""
        if name not in self._entries:
            self._entries[name] = AnnoContainer()
        return self._entries[name]

    def reset(self, name: str) -> AnnoContainer:
        """Register *name* with a fresh empty container, replacing any entries."""
        self._entries[name] = AnnoContainer()
        return self._entries[name]

    def get(self, name: str) -> AnnoContainer | None:
        return self._entries.get(name)

    def drop(self, name: str) -> bool:
        return self._entries.pop(name, None) is not None

    def names(self) -> list[str]:
        return list(self._entries)

    def items(self) -> Iterator[tuple[str, AnnoContainer]]:
        return iter(self._entries.items())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileTable):
            return NotImplemented
        return self._entries == other._entries


class AnnotationStore:
    """Directory-level annotations plus per-file annotations for one file."""

    def __init__(self) -> None:
        self._directory = AnnoContainer()
        self._files = FileTable()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnnotationStore):
            return NotImplemented
        return self._directory == other._directory and self._files == other._files

    def __repr__(self) -> str:
        return (
            f"AnnotationStore(directory={len(self._directory)} entries, "
            f"files={len(self._files)})"
        )

    # -- queries -----------------------------------------------------------

    def directory_annotations(self) -> AnnoContainer:
        return AnnoContainer(self._directory)

    def file_annotations(self, name: str) -> AnnoContainer | None:
        """Annotations of *name*, or None if the file was never registered."""
        entries = self._files.get(name)
        if entries is None:
            return None
        return AnnoContainer(entries)

    def list_files(self) -> list[str]:
        return self._files.names()

    def has_file(self, name: str) -> bool:
        return name in self._files

    def file_sections(self) -> Iterator[tuple[str, AnnoContainer]]:
        """Registered files with their annotations, in registration order."""
        return self._files.items()

    # -- mutation ----------------------------------------------------------

    def reset_file(self, name: str) -> None:
        """Register *name* with no annotations, discarding any it had."""
        self._files.reset(name)

    def add_directory_annotation(self, anno: Annotation) -> None:
        self._directory.append(anno)

    def add_file_annotation(self, name: str, anno: Annotation) -> None:
        self._files.register(name).append(anno)

    def remove_directory_annotation_entries(self, key: str) -> bool:
        return self._directory.remove_key(key)

    def remove_file_annotation_entries(self, name: str, key: str) -> bool:
        entries = self._files.get(name)
        if entries is None:
            return False
        return entries.remove_key(key)

    def drop_file_annotations(self, name: str) -> bool:
        return self._files.drop(name)
