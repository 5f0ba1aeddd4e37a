"""Built-in read-only Schema.org type catalog."""

from __future__ import annotations

from functools import lru_cache

from semgraph.schema.hierarchy import SchemaHierarchyIndex, SchemaProperty, SchemaTypeNode

CATALOG_VERSION = "2026.10"


def _p(name: str, required: bool, description: str, example: str = "") -> SchemaProperty:
    return SchemaProperty(name=name, required=required, description=description, example=example)


def _t(
    name: str,
    parent: str | None,
    category: str,
    description: str,
    properties: list[SchemaProperty],
    search_feature: str | None = None,
) -> SchemaTypeNode:
    return SchemaTypeNode(
        name=name,
        parent=parent,
        properties=properties,
        description=description,
        category=category,
        search_feature=search_feature,
    )


SCHEMA_CATALOG: tuple[SchemaTypeNode, ...] = (
    _t(
        "Thing",
        None,
        "Core",
        "The most generic type of item.",
        [
            _p("name", True, "Name of the item", "Acme"),
            _p("description", False, "Short description of the item", "Family-owned bakery since 1990."),
            _p("url", False, "URL of the item", "https://example.com"),
            _p("image", False, "Image of the item", "https://example.com/photo.jpg"),
            _p("sameAs", False, "Reference pages that identify the item", '["https://www.wikidata.org/wiki/Q1"]'),
        ],
    ),
    # Organizations
    _t(
        "Organization",
        "Thing",
        "Organizations",
        "An organization such as a company, NGO or club.",
        [
            _p("url", True, "Main website URL", "https://example.com"),
            _p("logo", True, "Logo URL", "https://example.com/logo.png"),
            _p("foundingDate", False, "Date the organization was founded", "2015-03-10"),
            _p("founder", False, "Founder of the organization", "Jane Smith"),
            _p("numberOfEmployees", False, "Number of employees", "50-100"),
            _p(
                "contactPoint",
                False,
                "Contact point",
                '{"@type":"ContactPoint","telephone":"+1-555-0100","contactType":"customer service"}',
            ),
            _p("address", False, "Headquarters address", "1000 Main St"),
            _p("email", False, "Institutional email", "contact@example.com"),
            _p("areaServed", False, "Area served", "United States"),
            _p("knowsAbout", False, "Topics of expertise", "SEO, Digital Marketing"),
        ],
        "Logo",
    ),
    _t(
        "Corporation",
        "Organization",
        "Organizations",
        "A business corporation.",
        [_p("tickerSymbol", False, "Exchange ticker symbol", "ACME")],
    ),
    _t(
        "LocalBusiness",
        "Organization",
        "Organizations",
        "A physical business or branch of an organization.",
        [
            _p("image", True, "Main photo", "https://example.com/storefront.jpg"),
            _p(
                "address",
                True,
                "Full postal address",
                '{"@type":"PostalAddress","streetAddress":"123 Main St","addressLocality":"Springfield","postalCode":"12345"}',
            ),
            _p("telephone", True, "Phone number", "+1 555 0100"),
            _p("priceRange", False, "Price range", "$$"),
            _p(
                "openingHoursSpecification",
                False,
                "Opening hours",
                '{"@type":"OpeningHoursSpecification","dayOfWeek":["Monday","Tuesday"],"opens":"08:00","closes":"18:00"}',
            ),
            _p(
                "aggregateRating",
                False,
                "Average rating",
                '{"@type":"AggregateRating","ratingValue":"4.5","reviewCount":"120"}',
            ),
            _p("geo", False, "Coordinates", '{"@type":"GeoCoordinates","latitude":"40.71","longitude":"-74.00"}'),
            _p("paymentAccepted", False, "Accepted payment methods", "Cash, Credit Card"),
            _p("hasMap", False, "Map link", "https://maps.google.com/?q=..."),
        ],
        "Local business",
    ),
    _t(
        "FoodEstablishment",
        "LocalBusiness",
        "Organizations",
        "A food-related business.",
        [
            _p("servesCuisine", False, "Cuisine served", "Italian"),
            _p("acceptsReservations", False, "Whether reservations are accepted", "True"),
            _p("menu", False, "Menu URL", "https://example.com/menu"),
        ],
    ),
    _t(
        "Restaurant",
        "FoodEstablishment",
        "Organizations",
        "A restaurant.",
        [
            _p("servesCuisine", True, "Cuisine served", "Japanese"),
            _p("hasMenu", False, "Structured menu", '{"@type":"Menu","hasMenuSection":[]}'),
        ],
        "Local business",
    ),
    _t(
        "MedicalBusiness",
        "LocalBusiness",
        "Health",
        "A particular physical or virtual business of an organization for medical purposes.",
        [_p("medicalSpecialty", False, "Medical specialty", "Dermatology")],
    ),
    _t(
        "MedicalClinic",
        "MedicalBusiness",
        "Health",
        "A facility, often associated with a hospital, that provides outpatient care.",
        [
            _p("medicalSpecialty", True, "Medical specialty", "Cardiology"),
            _p("availableService", False, "Medical services offered", "Consultation"),
        ],
        "Local business",
    ),
    _t(
        "Dentist",
        "MedicalBusiness",
        "Health",
        "A dentist.",
        [],
        "Local business",
    ),
    _t(
        "Store",
        "LocalBusiness",
        "Organizations",
        "A retail good store.",
        [],
        "Local business",
    ),
    _t(
        "OnlineStore",
        "Organization",
        "Organizations",
        "An e-commerce business that sells online.",
        [_p("hasMerchantReturnPolicy", False, "Return policy", '{"@type":"MerchantReturnPolicy"}')],
        "Merchant listing",
    ),
    _t(
        "LegalService",
        "LocalBusiness",
        "Organizations",
        "A business providing legal services.",
        [_p("knowsAbout", False, "Practice areas", "Family law, Labor law")],
        "Local business",
    ),
    _t(
        "Attorney",
        "LegalService",
        "Organizations",
        "Professional service: attorney.",
        [],
    ),
    _t(
        "SportsActivityLocation",
        "LocalBusiness",
        "Organizations",
        "A sports location, such as a playing field.",
        [],
    ),
    _t(
        "ExerciseGym",
        "SportsActivityLocation",
        "Organizations",
        "A gym.",
        [_p("amenityFeature", False, "Amenities offered", "Sauna, Parking")],
        "Local business",
    ),
    _t(
        "AutomotiveBusiness",
        "LocalBusiness",
        "Organizations",
        "Car repair, sales, or parts.",
        [],
    ),
    _t(
        "AutoRepair",
        "AutomotiveBusiness",
        "Organizations",
        "Car repair business.",
        [],
        "Local business",
    ),
    _t(
        "ProfessionalService",
        "LocalBusiness",
        "Organizations",
        "Provider of professional services.",
        [],
    ),
    # People
    _t(
        "Person",
        "Thing",
        "People",
        "A person, alive, dead, undead or fictional.",
        [
            _p("jobTitle", False, "Job title", "Chief Executive Officer"),
            _p("worksFor", False, "Employer organization", '{"@type":"Organization","name":"Acme"}'),
            _p("alumniOf", False, "Alumni of", "State University"),
            _p("knowsAbout", False, "Topics of expertise", "Orthodontics"),
            _p("email", False, "Email", "jane@example.com"),
        ],
        "Profile page",
    ),
    # Places
    _t(
        "Place",
        "Thing",
        "Places",
        "Entities that have a somewhat fixed physical extension.",
        [
            _p("address", True, "Postal address", "123 Main St"),
            _p("geo", False, "Coordinates", '{"@type":"GeoCoordinates","latitude":"40.71","longitude":"-74.00"}'),
            _p("hasMap", False, "Map link", "https://maps.google.com/?q=..."),
        ],
    ),
    # Products and offers
    _t(
        "Product",
        "Thing",
        "Products",
        "Any offered product or service.",
        [
            _p("image", True, "Product image", "https://example.com/product.jpg"),
            _p("offers", True, "Offer details", '{"@type":"Offer","price":"99.90","priceCurrency":"USD"}'),
            _p("brand", False, "Brand", '{"@type":"Brand","name":"Acme"}'),
            _p("sku", False, "Stock keeping unit", "ACME-001"),
            _p("gtin13", False, "GTIN-13 code", "7891234567890"),
            _p("review", False, "A review of the product", '{"@type":"Review","reviewRating":{"ratingValue":"5"}}'),
            _p("aggregateRating", False, "Average rating", '{"@type":"AggregateRating","ratingValue":"4.8","reviewCount":"56"}'),
        ],
        "Product snippet",
    ),
    _t(
        "IndividualProduct",
        "Product",
        "Products",
        "A single, identifiable product instance.",
        [_p("serialNumber", False, "Serial number", "SN-1234")],
    ),
    _t(
        "ProductGroup",
        "Product",
        "Products",
        "A group of product variants.",
        [_p("variesBy", False, "Properties that vary between variants", "size, color")],
        "Product variants",
    ),
    # Intangibles
    _t(
        "Intangible",
        "Thing",
        "Intangibles",
        "A utility class for intangible things such as quantities and structured values.",
        [],
    ),
    _t(
        "Service",
        "Intangible",
        "Services",
        "A service provided by an organization.",
        [
            _p("provider", True, "Service provider", '{"@type":"Organization","name":"Acme"}'),
            _p("serviceType", False, "Type of service", "Plumbing"),
            _p("areaServed", False, "Area served", "Springfield"),
            _p("offers", False, "Offer details", '{"@type":"Offer","price":"150.00","priceCurrency":"USD"}'),
        ],
    ),
    _t(
        "Offer",
        "Intangible",
        "Products",
        "An offer to transfer rights to an item or to provide a service.",
        [
            _p("price", True, "Price", "99.90"),
            _p("priceCurrency", True, "Currency", "USD"),
            _p("availability", False, "Availability", "https://schema.org/InStock"),
        ],
    ),
    _t(
        "Rating",
        "Intangible",
        "Reviews",
        "A rating is an evaluation on a numeric scale.",
        [
            _p("ratingValue", True, "Rating value", "4.5"),
            _p("bestRating", False, "Highest value allowed", "5"),
        ],
    ),
    _t(
        "AggregateRating",
        "Rating",
        "Reviews",
        "The average rating based on multiple ratings or reviews.",
        [_p("reviewCount", True, "Number of reviews", "120")],
        "Review snippet",
    ),
    _t(
        "StructuredValue",
        "Intangible",
        "Intangibles",
        "Structured values are used when the value of a property has a more complex structure.",
        [],
    ),
    _t(
        "PostalAddress",
        "StructuredValue",
        "Places",
        "The mailing address.",
        [
            _p("streetAddress", True, "Street address", "123 Main St"),
            _p("addressLocality", True, "City", "Springfield"),
            _p("addressRegion", False, "State or region", "IL"),
            _p("postalCode", False, "Postal code", "62701"),
            _p("addressCountry", False, "Country", "US"),
        ],
    ),
    _t(
        "ItemList",
        "Intangible",
        "Navigation",
        "A list of items of any sort.",
        [_p("itemListElement", True, "Items in the list", '[{"@type":"ListItem","position":1}]')],
        "Carousel",
    ),
    _t(
        "BreadcrumbList",
        "ItemList",
        "Navigation",
        "A chain of linked web pages ending with the current page.",
        [],
        "Breadcrumb",
    ),
    # Creative works
    _t(
        "CreativeWork",
        "Thing",
        "Content",
        "The most generic kind of creative work.",
        [
            _p("author", False, "Author", '{"@type":"Person","name":"Jane Smith"}'),
            _p("datePublished", False, "Publication date", "2026-01-15"),
            _p("publisher", False, "Publisher", '{"@type":"Organization","name":"Acme"}'),
            _p("inLanguage", False, "Language", "en"),
        ],
    ),
    _t(
        "Article",
        "CreativeWork",
        "Content",
        "An article, such as a news article or piece of investigative report.",
        [
            _p("headline", True, "Headline", "How to choose a dentist"),
            _p("author", True, "Author", '{"@type":"Person","name":"Jane Smith"}'),
            _p("datePublished", True, "Publication date", "2026-01-15"),
            _p("dateModified", False, "Last modification date", "2026-02-01"),
        ],
        "Article",
    ),
    _t(
        "BlogPosting",
        "Article",
        "Content",
        "A blog post.",
        [],
        "Article",
    ),
    _t(
        "WebSite",
        "CreativeWork",
        "Web",
        "A set of related web pages.",
        [
            _p("url", True, "Home page URL", "https://example.com"),
            _p(
                "potentialAction",
                False,
                "Sitelinks search action",
                '{"@type":"SearchAction","target":"https://example.com/search?q={q}","query-input":"required name=q"}',
            ),
        ],
        "Sitelinks search box",
    ),
    _t(
        "WebPage",
        "CreativeWork",
        "Web",
        "A web page.",
        [
            _p("url", True, "Page URL", "https://example.com/about"),
            _p("breadcrumb", False, "Breadcrumb trail", '{"@type":"BreadcrumbList"}'),
            _p("lastReviewed", False, "Date the content was last reviewed", "2026-03-01"),
        ],
    ),
    _t(
        "FAQPage",
        "WebPage",
        "Web",
        "A page presenting one or more frequently asked questions.",
        [
            _p(
                "mainEntity",
                True,
                "Questions and answers",
                '[{"@type":"Question","name":"Do you deliver?","acceptedAnswer":{"@type":"Answer","text":"Yes."}}]',
            )
        ],
        "FAQ",
    ),
    _t(
        "Review",
        "CreativeWork",
        "Reviews",
        "A review of an item.",
        [
            _p("itemReviewed", True, "Item being reviewed", '{"@type":"LocalBusiness","name":"Acme"}'),
            _p("reviewRating", True, "Rating given", '{"@type":"Rating","ratingValue":"5"}'),
            _p("author", True, "Review author", '{"@type":"Person","name":"John Doe"}'),
            _p("reviewBody", False, "Review text", "Great service!"),
        ],
        "Review snippet",
    ),
    _t(
        "HowTo",
        "CreativeWork",
        "Content",
        "Instructions that explain how to achieve a result.",
        [_p("step", True, "Steps", '[{"@type":"HowToStep","text":"Preheat the oven."}]')],
        "How-to",
    ),
    _t(
        "VideoObject",
        "CreativeWork",
        "Content",
        "A video file.",
        [
            _p("thumbnailUrl", True, "Thumbnail URL", "https://example.com/thumb.jpg"),
            _p("uploadDate", True, "Upload date", "2026-01-15"),
        ],
        "Video",
    ),
    # Events and health
    _t(
        "Event",
        "Thing",
        "Events",
        "An event happening at a certain time and location.",
        [
            _p("startDate", True, "Start date", "2026-11-20T19:00"),
            _p("location", True, "Location", '{"@type":"Place","name":"Main Hall"}'),
            _p("endDate", False, "End date", "2026-11-20T22:00"),
            _p("organizer", False, "Organizer", '{"@type":"Organization","name":"Acme"}'),
        ],
        "Event",
    ),
    _t(
        "MedicalEntity",
        "Thing",
        "Health",
        "The most generic type of entity related to health and the practice of medicine.",
        [],
    ),
    _t(
        "MedicalProcedure",
        "MedicalEntity",
        "Health",
        "A process of care used in either a diagnostic, therapeutic or palliative capacity.",
        [
            _p("procedureType", False, "Type of procedure", "Surgical"),
            _p("howPerformed", False, "How the procedure is performed", "Under local anesthesia"),
        ],
    ),
)


@lru_cache(maxsize=4)
def _build_index(version: str) -> SchemaHierarchyIndex:
    return SchemaHierarchyIndex(SCHEMA_CATALOG)


def get_schema_index() -> SchemaHierarchyIndex:
    """Return the index built once for the current catalog version."""

    return _build_index(CATALOG_VERSION)
