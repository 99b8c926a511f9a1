"""Tests for Annotation, AnnoContainer, FileTable and AnnotationStore."""

from __future__ import annotations

import dataclasses

import pytest

from annovate.store import AnnoContainer, Annotation, AnnotationStore, FileTable


def _anno(key: str, value: str = "v", context: str = "c") -> Annotation:
    return Annotation(key, value, context)


# ── Annotation ───────────────────────────────────────────────────────


def test_annotation_is_frozen():
    a = _anno("k")
    with pytest.raises(dataclasses.FrozenInstanceError):
        a.value = "other"


# ── AnnoContainer ────────────────────────────────────────────────────


class TestAnnoContainer:
    def test_keeps_insertion_order(self):
        c = AnnoContainer([_anno("a"), _anno("b"), _anno("a", "2")])
        assert [a.key for a in c] == ["a", "b", "a"]

    def test_latest_returns_last_occurrence(self):
        c = AnnoContainer([_anno("a", "1"), _anno("b"), _anno("a", "2")])
        assert c.latest("a").value == "2"

    def test_latest_missing_key(self):
        assert AnnoContainer([_anno("a")]).latest("zzz") is None

    def test_latest_entries_one_per_key_in_file_order(self):
        c = AnnoContainer([_anno("a", "1"), _anno("b", "1"), _anno("a", "2")])
        assert [(a.key, a.value) for a in c.latest_entries()] == [("b", "1"), ("a", "2")]

    def test_remove_key_removes_all_entries(self):
        c = AnnoContainer([_anno("a", "1"), _anno("b"), _anno("a", "2"), _anno("c")])
        assert c.remove_key("a") is True
        assert [a.key for a in c] == ["b", "c"]

    def test_remove_missing_key(self):
        c = AnnoContainer([_anno("a")])
        assert c.remove_key("b") is False
        assert len(c) == 1

    def test_with_keys_filters(self):
        c = AnnoContainer([_anno("a"), _anno("b"), _anno("c")])
        assert [a.key for a in c.with_keys(["a", "c"])] == ["a", "c"]

    def test_equality_with_list(self):
        assert AnnoContainer([_anno("a")]) == [_anno("a")]

    def test_slice_returns_container(self):
        c = AnnoContainer([_anno("a"), _anno("b")])
        assert isinstance(c[:1], AnnoContainer)
        assert c[:1] == [_anno("a")]


# ── FileTable ────────────────────────────────────────────────────────


class TestFileTable:
    def test_register_is_idempotent(self):
        table = FileTable()
        first = table.register("a.txt")
        first.append(_anno("k"))
        assert table.register("a.txt") is first
        assert len(table.get("a.txt")) == 1

    def test_reset_discards_existing_entries(self):
        table = FileTable()
        table.register("a.txt").append(_anno("k"))
        table.register("b.txt")
        assert len(table.reset("a.txt")) == 0
        assert len(table.get("a.txt")) == 0
        assert table.names() == ["a.txt", "b.txt"]

    def test_unregistered_lookup_is_none(self):
        assert FileTable().get("missing") is None

    def test_drop(self):
        table = FileTable()
        table.register("a.txt")
        assert table.drop("a.txt") is True
        assert table.drop("a.txt") is False
        assert "a.txt" not in table

    def test_names_in_registration_order(self):
        table = FileTable()
        for name in ["c", "a", "b"]:
            table.register(name)
        assert table.names() == ["c", "a", "b"]


# ── AnnotationStore ──────────────────────────────────────────────────


class TestAnnotationStore:
    def test_add_file_annotation_registers_file(self):
        store = AnnotationStore()
        store.add_file_annotation("a.txt", _anno("k"))
        assert "a.txt" in store.list_files()
        assert store.has_file("a.txt")

    def test_drop_then_lookup_reports_not_found(self):
        store = AnnotationStore()
        store.add_file_annotation("a.txt", _anno("k"))
        assert store.drop_file_annotations("a.txt") is True
        assert store.file_annotations("a.txt") is None
        assert store.drop_file_annotations("a.txt") is False

    def test_registered_but_empty_differs_from_missing(self):
        store = AnnotationStore()
        store.add_file_annotation("a.txt", _anno("k"))
        store.remove_file_annotation_entries("a.txt", "k")
        annotations = store.file_annotations("a.txt")
        assert annotations is not None
        assert len(annotations) == 0

    def test_remove_directory_entries(self, sample_store):
        sample_store.add_directory_annotation(_anno("owner", "alice"))
        sample_store.add_directory_annotation(_anno("tag"))
        sample_store.add_directory_annotation(_anno("owner", "bob"))
        assert sample_store.remove_directory_annotation_entries("owner") is True
        keys = [a.key for a in sample_store.directory_annotations()]
        assert keys == ["creation time", "tag"]
        assert sample_store.remove_directory_annotation_entries("owner") is False

    def test_remove_file_entries_keeps_survivor_order(self, sample_store):
        sample_store.add_file_annotation("report.pdf", _anno("zeta"))
        assert sample_store.remove_file_annotation_entries("report.pdf", "status") is True
        keys = [a.key for a in sample_store.file_annotations("report.pdf")]
        assert keys == ["description", "zeta"]

    def test_remove_from_unknown_file_is_noop(self, sample_store):
        assert sample_store.remove_file_annotation_entries("nope.txt", "status") is False
        assert not sample_store.has_file("nope.txt")

    def test_queries_return_copies(self, sample_store):
        view = sample_store.file_annotations("report.pdf")
        view.append(_anno("injected"))
        assert sample_store.file_annotations("report.pdf").latest("injected") is None
        d = sample_store.directory_annotations()
        d.remove_key("creation time")
        assert len(sample_store.directory_annotations()) == 1

    def test_equality(self, sample_store):
        other = AnnotationStore()
        assert sample_store != other
        other.add_directory_annotation(_anno("creation time", "19.10.2026 14:03:07", "new annovate file"))
        assert sample_store != other
