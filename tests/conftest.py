"""Shared test fixtures for Annovate."""

import pytest

from annovate.config.models import AnnovateConfig
from annovate.store import Annotation, AnnotationStore

SAMPLE_FILE = """\
>creation time
=19.10.2026 14:03:07
<new annovate file
>owner
=alice
<annovate program, 19.10.2026 14:04:00
@report.pdf
>description
=Quarterly report
=second page missing
<annovate program, 19.10.2026 14:05:00
>status
=draft
<annovate program, 19.10.2026 14:05:00
@notes.txt
>status
=final
<copy from report.pdf
"""


@pytest.fixture
def sample_text():
    return SAMPLE_FILE


@pytest.fixture
def sample_store():
    store = AnnotationStore()
    store.add_directory_annotation(Annotation("creation time", "19.10.2026 14:03:07", "new annovate file"))
    store.add_file_annotation("report.pdf", Annotation("description", "Quarterly report", "ctx 1"))
    store.add_file_annotation("report.pdf", Annotation("status", "draft", "ctx 1"))
    store.add_file_annotation("report.pdf", Annotation("status", "final", "ctx 2"))
    store.add_file_annotation("notes.txt", Annotation("description", "line one\nline two", "ctx 3"))
    return store


@pytest.fixture
def sample_config():
    return AnnovateConfig()


@pytest.fixture
def meta_file(tmp_path):
    """An existing annotation file inside a temp directory."""
    path = tmp_path / ".annovate"
    path.write_text(SAMPLE_FILE, encoding="utf-8")
    return path
