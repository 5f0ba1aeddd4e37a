"""Schema.org type hierarchy: tree construction and inheritance queries."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any

from semgraph.errors import HierarchyIntegrityError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SchemaProperty:
    """One property declared by a schema type."""

    name: str
    required: bool = False
    description: str = ""
    example: str = ""


@dataclass(slots=True)
class SchemaTypeNode:
    """Node of the single-rooted schema type tree."""

    name: str
    parent: str | None
    properties: list[SchemaProperty] = field(default_factory=list)
    description: str = ""
    category: str = ""
    search_feature: str | None = None
    children: list["SchemaTypeNode"] = field(default_factory=list, repr=False)


def _coerce_node(raw: SchemaTypeNode | Mapping[str, Any]) -> SchemaTypeNode:
    if isinstance(raw, SchemaTypeNode):
        return SchemaTypeNode(
            name=raw.name,
            parent=raw.parent,
            properties=list(raw.properties),
            description=raw.description,
            category=raw.category,
            search_feature=raw.search_feature,
        )
    properties = [
        prop if isinstance(prop, SchemaProperty) else SchemaProperty(**prop)
        for prop in raw.get("properties", ())
    ]
    return SchemaTypeNode(
        name=raw["name"],
        parent=raw.get("parent"),
        properties=properties,
        description=raw.get("description", ""),
        category=raw.get("category", ""),
        search_feature=raw.get("search_feature"),
    )


def build_tree(flat_list: Iterable[SchemaTypeNode | Mapping[str, Any]]) -> SchemaTypeNode:
    """Build the type tree from a flat list and return its root.

    Raises HierarchyIntegrityError when names repeat, when there is not exactly
    one root, when a parent does not resolve, or when some nodes form a cycle.
    """

    by_name: dict[str, SchemaTypeNode] = {}
    for raw in flat_list:
        node = _coerce_node(raw)
        if node.name in by_name:
            raise HierarchyIntegrityError(f"Duplicate schema type: {node.name}")
        by_name[node.name] = node

    roots = [node for node in by_name.values() if node.parent is None]
    if not roots:
        raise HierarchyIntegrityError("Schema hierarchy has no root type")
    if len(roots) > 1:
        names = ", ".join(sorted(node.name for node in roots))
        raise HierarchyIntegrityError(f"Schema hierarchy has multiple roots: {names}")

    children_by_parent: dict[str, list[SchemaTypeNode]] = {}
    for node in by_name.values():
        if node.parent is None:
            continue
        if node.parent not in by_name:
            raise HierarchyIntegrityError(
                f"Schema type {node.name} references unknown parent {node.parent}"
            )
        children_by_parent.setdefault(node.parent, []).append(node)

    root = roots[0]
    attached = 0
    stack = [root]
    while stack:
        current = stack.pop()
        attached += 1
        current.children = list(children_by_parent.get(current.name, ()))
        stack.extend(current.children)

    if attached != len(by_name):
        raise HierarchyIntegrityError(
            f"Schema hierarchy contains a cycle ({len(by_name) - attached} types unreachable from {root.name})"
        )
    return root


class SchemaHierarchyIndex:
    """Read-only queries over a validated schema type tree."""

    def __init__(self, flat_list: Iterable[SchemaTypeNode | Mapping[str, Any]]) -> None:
        started = perf_counter()
        self.root = build_tree(flat_list)
        self._by_name: dict[str, SchemaTypeNode] = {node.name: node for node in self.walk()}
        logger.info(
            "semgraph.schema_index.built types=%s root=%s duration_ms=%.2f",
            len(self._by_name),
            self.root.name,
            (perf_counter() - started) * 1000.0,
        )

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def walk(self) -> Iterator[SchemaTypeNode]:
        """Yield every node in preorder, children in declaration order."""

        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_by_name(self, name: str) -> SchemaTypeNode | None:
        return self._by_name.get(name)

    def _require(self, name: str) -> SchemaTypeNode:
        node = self._by_name.get(name)
        if node is None:
            raise NotFoundError(f"Unknown schema type: {name}")
        return node

    def ancestors_of(self, name: str) -> list[SchemaTypeNode]:
        """Nodes from `name` itself up to the root."""

        chain: list[SchemaTypeNode] = []
        node: SchemaTypeNode | None = self._require(name)
        while node is not None:
            chain.append(node)
            node = self._by_name.get(node.parent) if node.parent else None
        return chain

    def is_a(self, name: str, ancestor: str) -> bool:
        if name not in self._by_name:
            return False
        return any(node.name == ancestor for node in self.ancestors_of(name))

    def properties_of(self, name: str, *, include_inherited: bool = False) -> list[SchemaProperty]:
        """Properties of a type; inherited ones come root-first, closest definition wins."""

        node = self._require(name)
        if not include_inherited:
            return list(node.properties)

        merged: dict[str, SchemaProperty] = {}
        for ancestor in reversed(self.ancestors_of(name)):
            for prop in ancestor.properties:
                merged[prop.name] = prop
        return list(merged.values())

    def required_properties_of(self, name: str) -> list[SchemaProperty]:
        return [prop for prop in self.properties_of(name, include_inherited=True) if prop.required]

    def descendant_count(self, name: str) -> int:
        count = 0
        stack = list(self._require(name).children)
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children)
        return count

    def search(self, query: str) -> list[SchemaTypeNode]:
        """Case-insensitive substring match over name, description, category and search feature."""

        needle = (query or "").strip().lower()
        if not needle:
            return list(self.walk())
        matches: list[SchemaTypeNode] = []
        for node in self.walk():
            haystack = (node.name, node.description, node.category, node.search_feature or "")
            if any(needle in value.lower() for value in haystack):
                matches.append(node)
        return matches

    def categories(self) -> list[str]:
        seen: list[str] = []
        for node in self.walk():
            if node.category and node.category not in seen:
                seen.append(node.category)
        return seen


@dataclass(slots=True)
class PropertyCompletion:
    """Required-property fill rate of one annotated entity."""

    filled: int
    total: int
    percent: int
    missing: list[str]


def property_completion(
    index: SchemaHierarchyIndex,
    schema_type: str,
    values: Mapping[str, str] | None,
    *,
    entity_name: str | None = None,
) -> PropertyCompletion:
    """Count required properties of `schema_type` that carry a non-blank value.

    The entity's own name satisfies a required `name` property.
    """

    provided = {key: str(value).strip() for key, value in (values or {}).items() if value is not None}
    if entity_name and entity_name.strip():
        provided.setdefault("name", entity_name.strip())

    required = [prop.name for prop in index.required_properties_of(schema_type)]
    missing = [name for name in required if not provided.get(name)]
    filled = len(required) - len(missing)
    percent = round(filled / len(required) * 100) if required else 100
    return PropertyCompletion(filled=filled, total=len(required), percent=percent, missing=missing)
