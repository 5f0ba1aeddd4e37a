"""JSON-LD documents for annotated entities."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from semgraph.schema.hierarchy import SchemaHierarchyIndex
from semgraph.schemas.entity import EntityRead
from semgraph.schemas.graph import JsonLdScript

SCHEMA_CONTEXT = "https://schema.org"


def _embed_value(value: str) -> Any:
    """Nested structure for JSON object/array text, the trimmed string otherwise."""

    text = value.strip()
    if text[:1] in ("{", "["):
        try:
            parsed = json.loads(text)
        except ValueError:
            return text
        if isinstance(parsed, (dict, list)):
            return parsed
    return text


def entity_json_ld(schema_type: str, properties: Mapping[str, str] | None) -> dict[str, Any]:
    document: dict[str, Any] = {"@context": SCHEMA_CONTEXT, "@type": schema_type}
    for key, value in (properties or {}).items():
        if key in ("@context", "@type") or value is None or not str(value).strip():
            continue
        document[key] = _embed_value(str(value))
    return document


def render_script(document: Mapping[str, Any]) -> str:
    body = json.dumps(document, ensure_ascii=False, indent=2)
    return f'<script type="application/ld+json">\n{body}\n</script>'


def graph_json_ld_scripts(entities: Iterable[EntityRead]) -> list[JsonLdScript]:
    """One script per entity that has a schema type and at least one property."""

    scripts: list[JsonLdScript] = []
    for entity in entities:
        schema_type = (entity.schema_type or "").strip()
        if not schema_type or not entity.schema_properties:
            continue
        document = entity_json_ld(schema_type, entity.schema_properties)
        scripts.append(
            JsonLdScript(
                entity_id=entity.id,
                schema_type=schema_type,
                document=document,
                script=render_script(document),
            )
        )
    return scripts


def template_json_ld(schema_index: SchemaHierarchyIndex, type_name: str) -> JsonLdScript:
    """Example document built from every property example of a catalog type."""

    properties = {
        prop.name: prop.example
        for prop in schema_index.properties_of(type_name, include_inherited=True)
        if prop.example
    }
    document = entity_json_ld(type_name, properties)
    return JsonLdScript(schema_type=type_name, document=document, script=render_script(document))
