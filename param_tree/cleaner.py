"""
Parameter tree cleaner.

Turns a flat, ordered mapping of dotted/bracketed parameter paths into the
nested example payload they describe:

    object            (object)     ->  {"object": {"key1": "43",
    object.key1       "43"                         "key3": {"key1": "hoho"}},
    object.key3       (object)          "list_of_objects": [{"key1": "John"}]}
    object.key3.key1  "hoho"
    list_of_objects   (object[])
    list_of_objects[].key1  "John"

The work happens in two passes: ParameterTree indexes every path under its
direct container, then materializes the nested value from that index.
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Set, Tuple

from param_tree.errors import ParameterTreeError
from param_tree.examples import ExampleGenerator, without_excluded
from param_tree.parameters import (
    ParameterDescriptor,
    ParameterKind,
    RawParameters,
    parameters_from_mapping,
)
from param_tree.paths import LIST_MARKER, addresses_list, container_of, field_name, owner_of, strip_marker

logger = logging.getLogger(__name__)

NestedValue = Any


class ParameterTree:
    """
    Index of parameter paths by their direct container.

    Nodes are keyed by path without a trailing "[]", so "a[]" and "a" name the
    same parameter and "a[].b" finds its owner either way. Missing parents are
    created as implicit object or object[] nodes; materialize() builds the
    nested example payload from the index.
    """

    def __init__(self, parameters: Dict[str, ParameterDescriptor], strict: bool = False):
        self.strict = strict
        self.nodes: Dict[str, ParameterDescriptor] = {}
        # container path -> field name -> node path, in first-occurrence order
        self.children: Dict[str, Dict[str, str]] = {}
        self._implicit: Set[str] = set()

        for path, descriptor in parameters.items():
            self._add(path, descriptor)

        self._check_containers()


# =========================
# Indexing
# =========================

    def _add(self, path: str, descriptor: ParameterDescriptor, implicit: bool = False):
        path = strip_marker(path)
        container = container_of(path)
        if container:
            self._ensure_owner(container)
        self._register(container, path, descriptor, implicit)

    def _ensure_owner(self, container: str):
        owner = owner_of(container)
        if owner in self.nodes:
            return

        implicit_type = "object[]" if addresses_list(container) else "object"
        logger.debug("Constructing implicit %s parameter %r", implicit_type, owner)
        self._add(owner, ParameterDescriptor(name=owner, type=implicit_type), implicit=True)

    def _register(self, container: str, path: str, descriptor: ParameterDescriptor, implicit: bool):
        fields = self.children.setdefault(container, {})
        name = field_name(path)
        existing = fields.get(name)

        if existing is None:
            fields[name] = path
            self.nodes[path] = descriptor
            if implicit:
                self._implicit.add(path)
        elif existing == path and path in self._implicit and not implicit:
            # explicit declaration arriving after one of its descendants
            self.nodes[path] = descriptor
            self._implicit.discard(path)
        else:
            logger.debug("Skipping %r: field %r already declared by %r", path, name, existing)

    def _check_containers(self):
        for container, fields in self.children.items():
            if not container:
                continue

            owner_path = owner_of(container)
            owner = self.nodes.get(owner_path)
            if owner is None:
                continue

            expected = ParameterKind.OBJECT_LIST if addresses_list(container) else ParameterKind.OBJECT
            if owner.kind is expected:
                continue

            first_child = next(iter(fields.values()))
            message = f"declared under {owner_path!r}, which has type {owner.type!r}"
            if self.strict:
                raise ParameterTreeError(first_child, message)
            logger.debug("Ignoring %r: %s", first_child, message)


# =========================
# Navigation
# =========================

    def child_container(self, path: str) -> Optional[str]:
        """Container that holds the fields of ``path``, or None for leaves."""
        kind = self.nodes[path].kind
        if kind is ParameterKind.OBJECT:
            return path
        if kind is ParameterKind.OBJECT_LIST:
            return path + LIST_MARKER
        return None

    def fields(self, container: str = "") -> List[Tuple[str, str, ParameterDescriptor]]:
        return [
            (name, path, self.nodes[path])
            for name, path in self.children.get(container, {}).items()
        ]

    def is_implicit(self, path: str) -> bool:
        return path in self._implicit


# =========================
# Materialization
# =========================

    def materialize(self) -> Dict[str, NestedValue]:
        return self._mapping("")

    def _mapping(self, container: str) -> Dict[str, NestedValue]:
        return {name: self._value(path, descriptor) for name, path, descriptor in self.fields(container)}

    def _value(self, path: str, descriptor: ParameterDescriptor) -> NestedValue:
        container = self.child_container(path)

        if descriptor.kind is ParameterKind.OBJECT:
            return self._mapping(container)

        if descriptor.kind is ParameterKind.OBJECT_LIST:
            # one representative element, whatever the declared example holds
            return [self._mapping(container)]

        return copy.deepcopy(descriptor.example)


def clean(parameters: RawParameters, strict: bool = False) -> Dict[str, NestedValue]:
    """
    Builds the nested example payload for an already-filtered parameter mapping.

    Entries flagged as excluded from examples must be removed beforehand
    (see without_excluded), otherwise they show up as regular fields.
    """
    return ParameterTree(parameters_from_mapping(parameters), strict=strict).materialize()


def clean_parameters(
    parameters: RawParameters,
    generator: Optional[ExampleGenerator] = None,
    strict: bool = False
) -> Dict[str, NestedValue]:
    """
    Full pipeline for raw extractor output: ingest, drop excluded parameters,
    fill in missing examples, then clean.
    """
    descriptors = without_excluded(parameters_from_mapping(parameters))
    descriptors = (generator or ExampleGenerator()).fill(descriptors)
    return clean(descriptors, strict=strict)
