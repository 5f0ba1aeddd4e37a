"""Controlled entity type system and its presentation lookup tables."""

from __future__ import annotations

from dataclasses import dataclass

from semgraph.errors import ValidationError

ENTITY_TYPE_VALUES: tuple[str, ...] = (
    "business",
    "product",
    "service",
    "place",
    "person",
    "website",
    "listing_profile",
    "review",
    "equipment",
    "specialty",
    "content",
)
ENTITY_TYPE_SET = set(ENTITY_TYPE_VALUES)

_ENTITY_TYPE_SYNONYMS: dict[str, str] = {
    "company": "business",
    "organization": "business",
    "organisation": "business",
    "empresa": "business",
    "produto": "product",
    "item": "product",
    "servico": "service",
    "serviço": "service",
    "location": "place",
    "local": "place",
    "address": "place",
    "pessoa": "person",
    "people": "person",
    "site": "website",
    "web_site": "website",
    "webpage": "website",
    "gbp": "listing_profile",
    "google_business_profile": "listing_profile",
    "listing": "listing_profile",
    "listing_profile": "listing_profile",
    "avaliacao": "review",
    "avaliação": "review",
    "rating": "review",
    "equipamento": "equipment",
    "especialidade": "specialty",
    "speciality": "specialty",
    "conteudo": "content",
    "conteúdo": "content",
    "article": "content",
    "blog": "content",
}

SUGGESTED_SCHEMA_TYPES: dict[str, tuple[str, ...]] = {
    "business": ("Organization", "Corporation", "LocalBusiness"),
    "product": ("Product", "IndividualProduct", "ProductGroup"),
    "service": ("Service", "ProfessionalService"),
    "place": ("Place", "LocalBusiness", "PostalAddress"),
    "person": ("Person",),
    "website": ("WebSite", "WebPage"),
    "listing_profile": ("LocalBusiness",),
    "review": ("Review", "AggregateRating"),
    "equipment": ("Product",),
    "specialty": ("Service", "MedicalProcedure"),
    "content": ("Article", "WebPage", "FAQPage"),
}


@dataclass(frozen=True, slots=True)
class Presentation:
    """Render hints the host UI resolves by entity type or predicate."""

    label: str
    icon: str
    color: str


_DEFAULT_COLOR = "hsl(250 85% 60%)"

_ENTITY_PRESENTATION: dict[str, Presentation] = {
    "business": Presentation("Business", "building", "hsl(250 85% 60%)"),
    "product": Presentation("Product", "package", "hsl(155 70% 42%)"),
    "service": Presentation("Service", "briefcase", "hsl(42 95% 52%)"),
    "place": Presentation("Place", "map-pin", "hsl(0 78% 55%)"),
    "person": Presentation("Person", "user", "hsl(215 92% 56%)"),
    "website": Presentation("Website", "globe", "hsl(260 90% 68%)"),
    "listing_profile": Presentation("Listing profile", "store", "hsl(155 70% 42%)"),
    "review": Presentation("Review", "star", "hsl(42 95% 52%)"),
    "equipment": Presentation("Equipment", "wrench", "hsl(215 92% 56%)"),
    "specialty": Presentation("Specialty", "award", "hsl(0 78% 55%)"),
    "content": Presentation("Content", "file-text", "hsl(260 90% 68%)"),
}

_RELATION_PRESENTATION: dict[str, Presentation] = {
    "offers": Presentation("offers", "arrow-right", "hsl(155 70% 42%)"),
    "owns": Presentation("owns", "key", "hsl(250 85% 60%)"),
    "located_in": Presentation("located in", "map-pin", "hsl(0 78% 55%)"),
    "works_at": Presentation("works at", "user", "hsl(215 92% 56%)"),
    "reviews": Presentation("reviews", "star", "hsl(42 95% 52%)"),
    "part_of": Presentation("part of", "layers", "hsl(260 90% 68%)"),
    "created": Presentation("created", "sparkles", "hsl(42 95% 52%)"),
}


def normalize_entity_type(raw_type: str | None) -> str:
    """Normalize to the controlled entity type list or raise ValidationError."""

    cleaned = _clean_text(raw_type).lower().replace("-", "_").replace(" ", "_")
    if not cleaned:
        raise ValidationError("Entity type is required.")
    if cleaned in ENTITY_TYPE_SET:
        return cleaned
    normalized = _ENTITY_TYPE_SYNONYMS.get(cleaned)
    if normalized is None:
        raise ValidationError(f"Unknown entity type: {raw_type!r}.")
    return normalized


def suggested_schema_types(entity_type: str) -> tuple[str, ...]:
    """Schema.org types offered for an entity type."""

    return SUGGESTED_SCHEMA_TYPES.get(entity_type, ())


def entity_presentation(entity_type: str) -> Presentation:
    """Resolve render hints for an entity type."""

    found = _ENTITY_PRESENTATION.get(entity_type)
    if found is not None:
        return found
    return Presentation(entity_type.replace("_", " ").title() or "Entity", "globe", _DEFAULT_COLOR)


def relation_presentation(predicate: str) -> Presentation:
    """Resolve render hints for a relation predicate."""

    found = _RELATION_PRESENTATION.get(predicate)
    if found is not None:
        return found
    return Presentation(predicate.replace("_", " "), "link", _DEFAULT_COLOR)


def _clean_text(value: str | None) -> str:
    if not value:
        return ""
    return " ".join(value.strip().split())
