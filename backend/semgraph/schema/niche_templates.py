"""Built-in niche template library."""

from __future__ import annotations

from semgraph.schemas.templates import (
    DataQuestion,
    NicheTemplate,
    ScopeQuestion,
    TemplateEntity,
    TemplateRelation,
)


def _e(
    name: str,
    entity_type: str,
    schema_type: str,
    description: str,
    placeholder: str = "",
) -> TemplateEntity:
    return TemplateEntity(
        name=name,
        placeholder=placeholder or name,
        entity_type=entity_type,
        schema_type=schema_type,
        description=description,
    )


def _r(subject_index: int, object_index: int, predicate: str) -> TemplateRelation:
    return TemplateRelation(subject_index=subject_index, object_index=object_index, predicate=predicate)


def _identity_questions(business_label: str, place_index: int) -> list[DataQuestion]:
    return [
        DataQuestion(
            key="business_name",
            prompt=f"What is the name of the {business_label}?",
            entity_index=0,
            field="name",
            required=True,
            placeholder="e.g. Acme",
        ),
        DataQuestion(
            key="location",
            prompt="Where is it located (city or neighborhood)?",
            entity_index=place_index,
            field="name",
            placeholder="e.g. Downtown Springfield",
        ),
    ]


RESTAURANT = NicheTemplate(
    key="restaurant",
    label="Restaurant",
    description="Restaurant with menu, chef, delivery and event space.",
    icon="utensils",
    entities=[
        _e("", "business", "Restaurant", "The restaurant itself", placeholder="Restaurant"),
        _e("Menu", "product", "Product", "Restaurant menu"),
        _e("Head Chef", "person", "Person", "Chef in charge of the kitchen"),
        _e("", "place", "PostalAddress", "Physical address", placeholder="Address"),
        _e("Google Business Profile", "listing_profile", "LocalBusiness", "Google listing"),
        _e("Official Website", "website", "WebSite", "Restaurant website"),
        _e("Signature Dish", "product", "Product", "House specialty"),
        _e("Google Reviews", "review", "AggregateRating", "Reviews on Google"),
        _e("Delivery Service", "service", "Service", "Order delivery"),
        _e("Event Space", "service", "Service", "Space for private events"),
    ],
    relations=[
        _r(0, 1, "offers"),
        _r(0, 2, "owns"),
        _r(0, 3, "located_in"),
        _r(0, 4, "related_to"),
        _r(0, 5, "owns"),
        _r(1, 6, "part_of"),
        _r(4, 7, "related_to"),
        _r(0, 8, "offers"),
        _r(0, 9, "offers"),
        _r(2, 6, "created"),
    ],
    scope_questions=[
        ScopeQuestion(key="has_delivery", prompt="Do you offer delivery?", default=True, entity_indices=[8]),
        ScopeQuestion(key="has_events", prompt="Do you host private events?", default=False, entity_indices=[9]),
    ],
    data_questions=_identity_questions("restaurant", 3),
)

CLINIC = NicheTemplate(
    key="clinic",
    label="Clinic / Health",
    description="Medical clinic with lead physician, exams and telemedicine.",
    icon="stethoscope",
    entities=[
        _e("", "business", "MedicalClinic", "The clinic itself", placeholder="Clinic"),
        _e("Lead Physician", "person", "Person", "Physician responsible for the clinic"),
        _e("Medical Consultation", "specialty", "MedicalProcedure", "Consultation service"),
        _e("", "place", "PostalAddress", "Clinic address", placeholder="Address"),
        _e("Google Business Profile", "listing_profile", "LocalBusiness", "Google listing"),
        _e("Official Website", "website", "WebSite", "Clinic website"),
        _e("Google Reviews", "review", "AggregateRating", "Reviews on Google"),
        _e("Exams", "service", "Service", "Diagnostic exams"),
        _e("Telemedicine", "service", "Service", "Online consultations"),
        _e("Health Blog", "content", "Article", "Health articles"),
    ],
    relations=[
        _r(0, 1, "owns"),
        _r(0, 2, "offers"),
        _r(0, 3, "located_in"),
        _r(0, 4, "related_to"),
        _r(0, 5, "owns"),
        _r(4, 6, "related_to"),
        _r(1, 2, "offers"),
        _r(0, 7, "offers"),
        _r(0, 8, "offers"),
        _r(5, 9, "part_of"),
    ],
    scope_questions=[
        ScopeQuestion(key="has_exams", prompt="Do you run exams on site?", default=True, entity_indices=[7]),
        ScopeQuestion(key="has_telemedicine", prompt="Do you offer telemedicine?", default=False, entity_indices=[8]),
        ScopeQuestion(key="has_blog", prompt="Do you publish a health blog?", default=True, entity_indices=[9]),
    ],
    data_questions=_identity_questions("clinic", 3)
    + [
        DataQuestion(
            key="physician_name",
            prompt="Who is the lead physician?",
            entity_index=1,
            field="name",
            placeholder="e.g. Dr. Jane Smith",
        )
    ],
)

ECOMMERCE = NicheTemplate(
    key="ecommerce",
    label="E-commerce",
    description="Online store with product categories, shipping and support.",
    icon="shopping-bag",
    entities=[
        _e("", "business", "OnlineStore", "The online store", placeholder="Store"),
        _e("Flagship Product", "product", "Product", "Best-selling product"),
        _e("Category A", "product", "ProductGroup", "Product category"),
        _e("Category B", "product", "ProductGroup", "Second product category"),
        _e("Store Website", "website", "WebSite", "Store website"),
        _e("Customer Reviews", "review", "AggregateRating", "Customer reviews"),
        _e("Shipping", "service", "Service", "Logistics and delivery"),
        _e("Customer Support", "service", "Service", "Customer care"),
        _e("Store Blog", "content", "Article", "Content blog"),
        _e("Warehouse", "place", "Place", "Fulfillment location", placeholder="Warehouse"),
    ],
    relations=[
        _r(0, 1, "offers"),
        _r(0, 2, "offers"),
        _r(0, 3, "offers"),
        _r(1, 2, "part_of"),
        _r(0, 4, "owns"),
        _r(1, 5, "reviewed_by"),
        _r(0, 6, "offers"),
        _r(0, 7, "offers"),
        _r(4, 8, "contains"),
        _r(6, 9, "located_in"),
    ],
    scope_questions=[
        ScopeQuestion(
            key="has_second_category",
            prompt="Do you sell more than one product category?",
            default=True,
            entity_indices=[3],
        ),
        ScopeQuestion(key="has_blog", prompt="Do you publish a store blog?", default=True, entity_indices=[8]),
    ],
    data_questions=_identity_questions("store", 9),
)

LAW_FIRM = NicheTemplate(
    key="law_firm",
    label="Law Firm",
    description="Law office with partner attorney and practice areas.",
    icon="scale",
    entities=[
        _e("", "business", "LegalService", "The law office", placeholder="Law Firm"),
        _e("Managing Partner", "person", "Person", "Lead attorney"),
        _e("Legal Consulting", "service", "Service", "Legal advice"),
        _e("Labor Law", "specialty", "Service", "Labor law practice"),
        _e("Civil Law", "specialty", "Service", "Civil law practice"),
        _e("", "place", "PostalAddress", "Office address", placeholder="Address"),
        _e("Google Business Profile", "listing_profile", "LocalBusiness", "Google listing"),
        _e("Official Website", "website", "WebSite", "Firm website"),
        _e("Google Reviews", "review", "AggregateRating", "Reviews on Google"),
        _e("Legal Blog", "content", "Article", "Legal articles"),
    ],
    relations=[
        _r(0, 1, "owns"),
        _r(0, 2, "offers"),
        _r(0, 3, "offers"),
        _r(0, 4, "offers"),
        _r(0, 5, "located_in"),
        _r(0, 6, "related_to"),
        _r(0, 7, "owns"),
        _r(6, 8, "related_to"),
        _r(7, 9, "contains"),
        _r(1, 9, "author_of"),
    ],
    scope_questions=[
        ScopeQuestion(key="practices_labor", prompt="Do you practice labor law?", default=True, entity_indices=[3]),
        ScopeQuestion(key="practices_civil", prompt="Do you practice civil law?", default=True, entity_indices=[4]),
        ScopeQuestion(key="has_blog", prompt="Do you publish legal articles?", default=False, entity_indices=[9]),
    ],
    data_questions=_identity_questions("law firm", 5),
)

GYM = NicheTemplate(
    key="gym",
    label="Gym / Fitness",
    description="Gym with trainers, classes and equipment.",
    icon="dumbbell",
    entities=[
        _e("", "business", "ExerciseGym", "The gym itself", placeholder="Gym"),
        _e("Head Trainer", "person", "Person", "Lead personal trainer"),
        _e("Strength Training", "service", "Service", "Weight training program"),
        _e("Group Classes", "service", "Service", "Collective classes"),
        _e("", "place", "PostalAddress", "Gym address", placeholder="Address"),
        _e("Google Business Profile", "listing_profile", "LocalBusiness", "Google listing"),
        _e("Official Website", "website", "WebSite", "Gym website"),
        _e("Google Reviews", "review", "AggregateRating", "Reviews on Google"),
        _e("Cardio Equipment", "equipment", "Product", "Treadmills and bikes"),
        _e("Personal Training", "service", "Service", "One-on-one coaching"),
    ],
    relations=[
        _r(0, 1, "owns"),
        _r(0, 2, "offers"),
        _r(0, 3, "offers"),
        _r(0, 4, "located_in"),
        _r(0, 5, "related_to"),
        _r(0, 6, "owns"),
        _r(5, 7, "related_to"),
        _r(8, 2, "used_in"),
        _r(0, 9, "offers"),
        _r(1, 9, "offers"),
    ],
    scope_questions=[
        ScopeQuestion(key="has_classes", prompt="Do you run group classes?", default=True, entity_indices=[3]),
        ScopeQuestion(
            key="has_personal_training",
            prompt="Do you offer personal training?",
            default=True,
            entity_indices=[1, 9],
        ),
    ],
    data_questions=_identity_questions("gym", 4),
)

AUTO_REPAIR = NicheTemplate(
    key="auto_repair",
    label="Auto Repair",
    description="Car repair shop with mechanic, diagnostics and parts.",
    icon="car",
    entities=[
        _e("", "business", "AutoRepair", "The repair shop", placeholder="Auto Repair Shop"),
        _e("Lead Mechanic", "person", "Person", "Mechanic in charge"),
        _e("Engine Diagnostics", "service", "Service", "Computerized diagnostics"),
        _e("Preventive Maintenance", "service", "Service", "Scheduled maintenance"),
        _e("", "place", "PostalAddress", "Shop address", placeholder="Address"),
        _e("Google Business Profile", "listing_profile", "LocalBusiness", "Google listing"),
        _e("Official Website", "website", "WebSite", "Shop website"),
        _e("Google Reviews", "review", "AggregateRating", "Reviews on Google"),
        _e("Diagnostic Scanner", "equipment", "Product", "OBD diagnostic scanner"),
        _e("Towing", "service", "Service", "Roadside towing"),
    ],
    relations=[
        _r(0, 1, "owns"),
        _r(0, 2, "offers"),
        _r(0, 3, "offers"),
        _r(0, 4, "located_in"),
        _r(0, 5, "related_to"),
        _r(0, 6, "owns"),
        _r(5, 7, "related_to"),
        _r(8, 2, "used_in"),
        _r(1, 3, "offers"),
        _r(0, 9, "offers"),
    ],
    scope_questions=[
        ScopeQuestion(key="has_towing", prompt="Do you offer towing?", default=False, entity_indices=[9]),
    ],
    data_questions=_identity_questions("repair shop", 4),
)

NICHE_TEMPLATES: tuple[NicheTemplate, ...] = (RESTAURANT, CLINIC, ECOMMERCE, LAW_FIRM, GYM, AUTO_REPAIR)


def get_niche_template(key: str) -> NicheTemplate | None:
    """Look up a built-in template by key; callers copy before mutating."""

    return next((template for template in NICHE_TEMPLATES if template.key == key), None)
