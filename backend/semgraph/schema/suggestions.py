"""Static companion-entity and relation suggestion tables."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CompanionSuggestion:
    """Entity a graph containing the source type is expected to also have."""

    entity_type: str
    name: str
    reason: str
    description: str
    schema_type: str


@dataclass(frozen=True, slots=True)
class RelationSuggestion:
    """Triple shape expected between two entity types."""

    subject_type: str
    object_type: str
    predicate: str
    reason: str


COMPANION_SUGGESTIONS: dict[str, tuple[CompanionSuggestion, ...]] = {
    "business": (
        CompanionSuggestion(
            "product",
            "Main product",
            "Every business should declare what it sells",
            "Flagship product offered by the business.",
            "Product",
        ),
        CompanionSuggestion(
            "service",
            "Main service",
            "Services are declared alongside products",
            "Primary service provided by the business.",
            "Service",
        ),
        CompanionSuggestion(
            "place",
            "Business address",
            "A physical location strengthens local SEO",
            "Physical address and geographic location of the business.",
            "Place",
        ),
        CompanionSuggestion(
            "person",
            "Founder",
            "Personal authority reinforces E-E-A-T",
            "Founder, owner or main person responsible for the business.",
            "Person",
        ),
        CompanionSuggestion(
            "listing_profile",
            "Google Business Profile",
            "Presence on Google Maps",
            "Business listing used for local search.",
            "LocalBusiness",
        ),
        CompanionSuggestion(
            "website",
            "Official website",
            "The digital anchor of the brand",
            "Main website of the business.",
            "WebSite",
        ),
        CompanionSuggestion(
            "content",
            "Blog",
            "Authored content builds topical authority",
            "Articles published by the business.",
            "Article",
        ),
    ),
    "product": (
        CompanionSuggestion(
            "review",
            "Product reviews",
            "Reviews unlock star rich snippets",
            "Customer reviews of the product.",
            "Review",
        ),
        CompanionSuggestion(
            "content",
            "Product guide",
            "Supporting content explains the product",
            "Guide or article describing the product.",
            "Article",
        ),
    ),
    "service": (
        CompanionSuggestion(
            "place",
            "Service area",
            "Defines where the service is delivered",
            "Geographic area where the service is provided.",
            "Place",
        ),
        CompanionSuggestion(
            "review",
            "Testimonials",
            "Social proof improves conversion and SEO",
            "Customer testimonials about the service.",
            "Review",
        ),
        CompanionSuggestion(
            "person",
            "Responsible professional",
            "Professional credentials reinforce E-E-A-T",
            "Qualified professional who delivers the service.",
            "Person",
        ),
    ),
    "place": (
        CompanionSuggestion(
            "business",
            "Business at this place",
            "Links the location to a commercial entity",
            "Business operating at this location.",
            "Organization",
        ),
    ),
    "person": (
        CompanionSuggestion(
            "website",
            "Professional profile",
            "Links to the person's online authority",
            "Personal website or professional profile.",
            "WebPage",
        ),
        CompanionSuggestion(
            "content",
            "Author publications",
            "Authorship strengthens authority",
            "Articles written by this person.",
            "Article",
        ),
    ),
    "review": (
        CompanionSuggestion(
            "person",
            "Review author",
            "An identified author increases trust",
            "Person who wrote the review.",
            "Person",
        ),
    ),
    "website": (
        CompanionSuggestion(
            "content",
            "Main page",
            "Every important page should be an entity",
            "Main landing page of the website.",
            "WebPage",
        ),
    ),
    "listing_profile": (
        CompanionSuggestion(
            "place",
            "Listing address",
            "An address is mandatory on the profile",
            "Address registered on the business listing.",
            "Place",
        ),
        CompanionSuggestion(
            "review",
            "Google reviews",
            "Listing reviews are a local ranking factor",
            "Customer reviews on Google Maps.",
            "Review",
        ),
    ),
    "content": (
        CompanionSuggestion(
            "person",
            "Content author",
            "Authorship is an essential E-E-A-T factor",
            "Author responsible for the content.",
            "Person",
        ),
    ),
    "equipment": (
        CompanionSuggestion(
            "service",
            "Service using this equipment",
            "Equipment is meaningful through the service it enables",
            "Service delivered with this equipment.",
            "Service",
        ),
    ),
    "specialty": (
        CompanionSuggestion(
            "person",
            "Specialist",
            "Specialties are backed by a qualified professional",
            "Professional practicing this specialty.",
            "Person",
        ),
    ),
}

RELATION_SUGGESTIONS: tuple[RelationSuggestion, ...] = (
    RelationSuggestion("business", "product", "offers", "Declares the main offer"),
    RelationSuggestion("business", "service", "provides", "Declares a provided service"),
    RelationSuggestion("business", "place", "located_in", "Anchors the business geographically"),
    RelationSuggestion("business", "person", "founded_by", "Links personal authority"),
    RelationSuggestion("business", "listing_profile", "listed_on", "Connects to the business listing"),
    RelationSuggestion("business", "website", "has_website", "Digital anchor of the brand"),
    RelationSuggestion("business", "content", "publishes", "Content reinforces authority"),
    RelationSuggestion("person", "business", "works_at", "Reinforces E-E-A-T credentials"),
    RelationSuggestion("person", "website", "has_profile", "Online profile of the author"),
    RelationSuggestion("person", "content", "author_of", "Authorship is E-E-A-T"),
    RelationSuggestion("product", "review", "reviewed_by", "Enables review rich snippets"),
    RelationSuggestion("service", "place", "serves_area", "Defines the service area"),
    RelationSuggestion("service", "review", "reviewed_by", "Service testimonials"),
    RelationSuggestion("service", "person", "provided_by", "Responsible professional"),
    RelationSuggestion("listing_profile", "place", "located_in", "Listing address"),
    RelationSuggestion("listing_profile", "review", "reviewed_by", "Google reviews"),
    RelationSuggestion("review", "person", "written_by", "Review author"),
    RelationSuggestion("content", "person", "written_by", "Content author"),
    RelationSuggestion("website", "content", "contains", "Page of the site"),
    RelationSuggestion("equipment", "service", "used_in", "Equipment behind a service"),
    RelationSuggestion("specialty", "person", "practiced_by", "Specialist behind the specialty"),
)


def companion_blueprints() -> dict[str, CompanionSuggestion]:
    """First blueprint declared for each companion entity type."""

    lookup: dict[str, CompanionSuggestion] = {}
    for suggestions in COMPANION_SUGGESTIONS.values():
        for suggestion in suggestions:
            lookup.setdefault(suggestion.entity_type, suggestion)
    return lookup


def find_relation_suggestion(subject_type: str, object_type: str) -> RelationSuggestion | None:
    """First table entry for an exact subject/object type pair."""

    return next(
        (
            suggestion
            for suggestion in RELATION_SUGGESTIONS
            if suggestion.subject_type == subject_type and suggestion.object_type == object_type
        ),
        None,
    )
