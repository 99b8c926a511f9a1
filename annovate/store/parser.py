"""Leader state machine that turns annotation file lines into a store."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from annovate.store.lexer import (
    EMPTY_LEADER,
    LEADER_CONTEXT,
    LEADER_FILE,
    LEADER_KEY,
    LEADER_VALUE,
    classify_line,
)
from annovate.store.models import Annotation, AnnotationStore, ParseError

logger = logging.getLogger(__name__)


class ParserState(Enum):
    START = "start"
    AFTER_HEADER = "after_header"
    AFTER_KEY = "after_key"
    AFTER_VALUE = "after_value"
    AFTER_CLOSE = "after_close"


_BETWEEN_ANNOTATIONS = frozenset(
    {ParserState.START, ParserState.AFTER_HEADER, ParserState.AFTER_CLOSE}
)
_INSIDE_ANNOTATION = frozenset({ParserState.AFTER_KEY, ParserState.AFTER_VALUE})

# leader -> (states it may follow, state it leads to)
_TRANSITIONS: dict[str, tuple[frozenset[ParserState], ParserState]] = {
    LEADER_FILE: (_BETWEEN_ANNOTATIONS, ParserState.AFTER_HEADER),
    LEADER_KEY: (_BETWEEN_ANNOTATIONS, ParserState.AFTER_KEY),
    LEADER_VALUE: (_INSIDE_ANNOTATION, ParserState.AFTER_VALUE),
    LEADER_CONTEXT: (_INSIDE_ANNOTATION, ParserState.AFTER_CLOSE),
}


def next_state(state: ParserState, leader: str, line_no: int) -> ParserState:
    """Return the state reached by reading *leader* in *state*.

    Raises ParseError for unknown leaders and for leaders that may not
    follow the previous line.
    """
    rule = _TRANSITIONS.get(leader)
    if rule is None:
        raise ParseError(line_no, leader)
    allowed, target = rule
    if state not in allowed:
        raise ParseError(line_no, leader)
    return target


def parse_lines(lines: Iterable[str]) -> AnnotationStore:
    """Build an AnnotationStore from raw lines (without line terminators)."""
    store = AnnotationStore()
    state = ParserState.START
    current_file: str | None = None
    pending_key = ""
    pending_value: list[str] = []
    line_no = 0

    for line_no, line in enumerate(lines, start=1):
        leader, rest = classify_line(line)
        state = next_state(state, leader, line_no)

        if leader == LEADER_FILE:
            store.reset_file(rest)
            current_file = rest
        elif leader == LEADER_KEY:
            pending_key = rest
            pending_value = []
        elif leader == LEADER_VALUE:
            pending_value.append(rest)
        else:
            anno = Annotation(pending_key, "\n".join(pending_value), rest)
            if current_file is None:
                store.add_directory_annotation(anno)
            else:
                store.add_file_annotation(current_file, anno)

    if state in _INSIDE_ANNOTATION:
        raise ParseError(line_no + 1, EMPTY_LEADER)

    logger.debug(
        "parsed %d lines: %d directory annotations, %d files",
        line_no,
        len(store.directory_annotations()),
        len(store.list_files()),
    )
    return store


def parse_text(text: str) -> AnnotationStore:
    """Parse the full contents of an annotation file."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return parse_lines(lines)
