"""
Group Key Codec

Builds namespaced keys from hierarchical group paths. A group path is a
string or an ordered sequence of strings joined with GROUP_DELIMITER.
"""

from typing import Sequence, Union

GROUP_DELIMITER = "/"

# Reserved segment separating a group's own name from the keys stored in it.
KEY_MARKER = "__KEY__"

GroupPath = Union[str, Sequence[str]]


def normalize_group(segments: GroupPath) -> str:
    """
    Join group segments into a normalized group name.

    Empty segments are dropped and repeated delimiters collapse, so
    normalizing an already normalized name returns it unchanged.

    Args:
        segments: A single group string or an ordered sequence of them

    Returns:
        Normalized group name
    """
    if isinstance(segments, str):
        segments = [segments]

    parts = [
        part
        for segment in segments
        for part in segment.split(GROUP_DELIMITER)
        if part
    ]
    return GROUP_DELIMITER.join(parts)


def child_group(parent: GroupPath, child: GroupPath) -> str:
    """Nest ``child`` under ``parent``."""
    return normalize_group([normalize_group(parent), normalize_group(child)])


def namespaced_key(group: GroupPath, key: str) -> str:
    """
    Fully qualified key of ``key`` stored inside ``group``.

    Only the group is normalized. The key is appended verbatim so that keys
    differing only in delimiters stay distinct.
    """
    return group_key_prefix(group) + key


def group_key_prefix(group: GroupPath) -> str:
    """Prefix shared by every namespaced key of ``group``."""
    return normalize_group([normalize_group(group), KEY_MARKER]) + GROUP_DELIMITER
