"""Line classification for the annotation file format."""

from __future__ import annotations

# Leader reported for empty lines; never a legal leader in the format.
EMPTY_LEADER = " "

LEADER_FILE = "@"
LEADER_KEY = ">"
LEADER_VALUE = "="
LEADER_CONTEXT = "<"


def classify_line(line: str) -> tuple[str, str]:
    """Split *line* into its leader character and right-stripped remainder."""
    if not line:
        return EMPTY_LEADER, ""
    return line[0], line[1:].rstrip()
