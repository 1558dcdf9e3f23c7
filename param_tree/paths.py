"""
Path segment grammar for parameter names.

A path splits on "." into segments. A segment ending in "[]" addresses a list
of objects; the segments after it describe the fields of each element, e.g.
``list_of_objects[].key1``.
"""

from typing import List

LIST_MARKER = "[]"
SEPARATOR = "."


def split_path(path: str) -> List[str]:
    return path.split(SEPARATOR)


def strip_marker(segment: str) -> str:
    while segment.endswith(LIST_MARKER):
        segment = segment[: -len(LIST_MARKER)]
    return segment


def is_top_level(path: str) -> bool:
    return SEPARATOR not in path and LIST_MARKER not in path


def container_of(path: str) -> str:
    """
    Path of the container holding ``path``'s field: "" for top-level fields,
    ``object.key3`` for ``object.key3.key1``, ``list_of_objects[]`` for
    ``list_of_objects[].key1``.
    """
    head, sep, _ = path.rpartition(SEPARATOR)
    return head if sep else ""


def field_name(path: str) -> str:
    return strip_marker(split_path(path)[-1])


def owner_of(container: str) -> str:
    """Path of the parameter that declares ``container``."""
    return strip_marker(container)


def addresses_list(container: str) -> bool:
    return container.endswith(LIST_MARKER)
