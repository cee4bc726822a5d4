"""
Graph-item key grammar.

The upstream dependency graph does not expose a documented schema for its
items; the only stable handle is the textual rendering of each item:

    GraphItemImpl(key=<key>, requestedCoordinates=<coords>, dependencies=[...])

where <key> is a ``|``-separated list:

    group | name | version-or-build-type | attribute segments...

Project (sibling module) keys look like ``:|:feature-one|debug|...`` for
Android modules and ``:|:shared|org.gradle.category>library,...|...`` for
plain JVM modules. This grammar follows the upstream tooling and may change
with it; GRAPH_ITEM_GRAMMAR_VERSION names the version the parser targets.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from buildlens.shared.domain.exceptions import GraphItemParseError

GRAPH_ITEM_GRAMMAR_VERSION = "agp-8/graph-item-key-1"

KEY_MARKER = "key="
END_MARKER = ", requestedCoordinates="
SEGMENT_SEPARATOR = "|"
ATTRIBUTE_MARKER = ">"
ROOT_BUILD = ":"


@dataclass(frozen=True)
class GraphItemKey:
    """Fields of a parsed graph-item key."""

    raw: str
    group: str
    name: str
    version: str
    attributes: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_project_reference(self) -> bool:
        """Key points at a sibling module rather than an external coordinate."""
        return self.group in (ROOT_BUILD, "") or self.name.startswith(":")

    @property
    def third_segment_is_build_type(self) -> bool:
        """A bare token (no attribute marker) in the version slot is a build type."""
        return ATTRIBUTE_MARKER not in self.version


def extract_key(record: str) -> str:
    """
    Cut the key out of an item's textual record.

    Raises:
        GraphItemParseError: If either marker is missing
    """
    start = record.find(KEY_MARKER)
    if start == -1:
        raise GraphItemParseError(f"No '{KEY_MARKER}' marker in graph item record", {"record": record})

    start += len(KEY_MARKER)
    end = record.find(END_MARKER, start)
    if end == -1:
        raise GraphItemParseError(f"No '{END_MARKER.strip()}' marker in graph item record", {"record": record})

    return record[start:end]


def split_segments(key: str) -> List[str]:
    """Split on the separator, dropping trailing empty segments."""
    segments = key.split(SEGMENT_SEPARATOR)
    while segments and segments[-1] == "":
        segments.pop()
    return segments


def parse_key(key: str) -> GraphItemKey:
    """
    Parse a key into group, name, version and attribute segments.

    Raises:
        GraphItemParseError: If the key has fewer than three segments
    """
    segments = split_segments(key)
    if len(segments) < 3:
        raise GraphItemParseError(f"Graph item key has {len(segments)} segments, expected at least 3", {"key": key})

    return GraphItemKey(
        raw=key,
        group=segments[0],
        name=segments[1],
        version=segments[2],
        attributes=tuple(segments[3:]),
    )


def parse_record(record: str) -> GraphItemKey:
    """extract_key followed by parse_key."""
    return parse_key(extract_key(record))
