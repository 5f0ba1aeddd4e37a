"""Unit tests for the recommendation engine and its actions."""

from __future__ import annotations

import unittest

from semgraph.errors import ValidationError
from semgraph.schema.catalog import get_schema_index
from semgraph.schemas.entity import EntityDraft, EntityRead
from semgraph.schemas.relation import RelationRead
from semgraph.services.graph_store import GraphStore
from semgraph.services.notifications import SWITCH_TAB_EVENT, CollectingNotificationSink, UiEventBus
from semgraph.services.recommendations import (
    PRIORITY_ORDER,
    apply_recommendation,
    dispatch_recommendation,
    recommend,
)
from semgraph.services.repository import InMemoryGraphRepository


def _entity(entity_id: str, name: str, entity_type: str, **extra) -> EntityRead:
    values = {
        "id": entity_id,
        "project_id": "project-001",
        "name": name,
        "entity_type": entity_type,
        "schema_type": None,
        "description": None,
        "schema_properties": {},
        "position_x": 0.0,
        "position_y": 0.0,
    }
    values.update(extra)
    return EntityRead(**values)


def _relation(relation_id: str, subject_id: str, predicate: str, object_id: str) -> RelationRead:
    return RelationRead(
        id=relation_id,
        project_id="project-001",
        subject_id=subject_id,
        predicate=predicate,
        object_id=object_id,
        confidence=None,
    )


def _sample_graph() -> tuple[list[EntityRead], list[RelationRead]]:
    entities = [
        _entity("a", "Acme", "business", schema_type="Organization", description="Hardware maker"),
        _entity("b", "Widget", "product"),
        _entity("c", "HQ", "place", schema_type="Place", description="Head office"),
    ]
    return entities, [_relation("r1", "a", "offers", "b")]


class RecommendTests(unittest.TestCase):
    def test_recommendations_are_grouped_by_priority_in_discovery_order(self) -> None:
        entities, relations = _sample_graph()
        recs = recommend(entities, relations)

        self.assertEqual(
            [(rec.kind, rec.entity_id or rec.suggested_entity_type or rec.predicate) for rec in recs],
            [
                ("disconnected", "c"),
                ("missing_schema", "b"),
                ("missing_description", "b"),
                ("suggested_entity", "service"),
                ("suggested_entity", "person"),
                ("suggested_entity", "listing_profile"),
                ("suggested_entity", "website"),
                ("suggested_entity", "content"),
                ("suggested_entity", "review"),
                ("low_relations", "a"),
                ("low_relations", "b"),
                ("suggested_relation", "located_in"),
            ],
        )
        ranks = [PRIORITY_ORDER[rec.priority] for rec in recs]
        self.assertEqual(ranks, sorted(ranks))

    def test_integrity_checks_follow_core_kinds_within_a_priority(self) -> None:
        entities = [
            _entity(
                "a",
                "Acme",
                "business",
                schema_type="Organization",
                description="Hardware maker",
                schema_properties={"url": "https://acme.test"},
            ),
            _entity("b", "Widget", "product"),
        ]
        relations = [_relation("r1", "a", "offers", "b"), _relation("r2", "a", "related_to", "a")]

        medium = [rec.kind for rec in recommend(entities, relations, get_schema_index()) if rec.priority == "medium"]

        self.assertEqual(medium[0], "missing_description")
        self.assertEqual(set(medium[1:-2]), {"suggested_entity"})
        self.assertEqual(medium[-2:], ["missing_required_properties", "self_reference"])

    def test_connected_and_annotated_entities_are_never_flagged(self) -> None:
        entities, relations = _sample_graph()
        recs = recommend(entities, relations)
        disconnected = {rec.entity_id for rec in recs if rec.kind == "disconnected"}
        missing_schema = {rec.entity_id for rec in recs if rec.kind == "missing_schema"}
        self.assertNotIn("a", disconnected)
        self.assertNotIn("b", disconnected)
        self.assertNotIn("a", missing_schema)
        self.assertNotIn("c", missing_schema)

    def test_suggested_entity_appears_once_per_type_with_blueprint(self) -> None:
        entities = [
            _entity("a", "Acme", "business", schema_type="Organization", description="x"),
            _entity("s", "Repairs", "service", schema_type="Service", description="x"),
        ]
        recs = [rec for rec in recommend(entities, []) if rec.kind == "suggested_entity"]
        suggested = [rec.suggested_entity_type for rec in recs]
        self.assertEqual(len(suggested), len(set(suggested)))
        place = next(rec for rec in recs if rec.suggested_entity_type == "place")
        self.assertEqual(place.source_entity_type, "business")
        self.assertEqual(place.suggested_name, "Business address")
        self.assertEqual(place.suggested_schema_type, "Place")

    def test_existing_typed_triple_suppresses_relation_suggestion(self) -> None:
        entities = [
            _entity("a", "Acme", "business", schema_type="Organization", description="x"),
            _entity("p", "Downtown", "place", schema_type="Place", description="x"),
        ]
        recs = recommend(entities, [])
        self.assertIn("suggested_relation", [rec.kind for rec in recs])
        recs = recommend(entities, [_relation("r1", "a", "located_in", "p")])
        self.assertNotIn("suggested_relation", [rec.kind for rec in recs])

    def test_self_reference_and_redundant_relations_are_flagged(self) -> None:
        entities, _ = _sample_graph()
        relations = [
            _relation("r1", "a", "offers", "b"),
            _relation("r2", "a", "offers", "b"),
            _relation("r3", "c", "related_to", "c"),
        ]
        recs = recommend(entities, relations)

        self_refs = [rec for rec in recs if rec.kind == "self_reference"]
        self.assertEqual([(rec.entity_id, rec.relation_id) for rec in self_refs], [("c", "r3")])
        self.assertEqual(self_refs[0].target_tab, "graph")

        redundant = [rec for rec in recs if rec.kind == "redundant_relation"]
        self.assertEqual([rec.relation_id for rec in redundant], ["r2"])
        self.assertEqual(redundant[0].target_tab, "triples")
        self.assertNotIn("c", {rec.entity_id for rec in recs if rec.kind == "disconnected"})

    def test_missing_required_properties_needs_a_schema_index(self) -> None:
        entities = [
            _entity(
                "a",
                "Acme",
                "business",
                schema_type="Organization",
                description="x",
                schema_properties={"url": "https://acme.test"},
            )
        ]
        self.assertNotIn("missing_required_properties", [rec.kind for rec in recommend(entities, [])])

        recs = recommend(entities, [], get_schema_index())
        missing = [rec for rec in recs if rec.kind == "missing_required_properties"]
        self.assertEqual(len(missing), 1)
        self.assertEqual(missing[0].missing_properties, ["logo"])
        self.assertEqual(missing[0].target_tab, "schema")

    def test_relations_with_unknown_endpoints_are_ignored(self) -> None:
        entities = [_entity("a", "Acme", "business", schema_type="Organization", description="x")]
        recs = recommend(entities, [_relation("r1", "a", "offers", "ghost")])
        self.assertEqual(recs[0].kind, "disconnected")

    def test_empty_graph_has_no_recommendations(self) -> None:
        self.assertEqual(recommend([], []), [])


class RecommendationActionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.notifier = CollectingNotificationSink()
        self.store = GraphStore(InMemoryGraphRepository(), "project-001", self.notifier)
        self.business, self.place = self.store.create_entities(
            [
                EntityDraft(name="Acme", entity_type="business", schema_type="Organization", description="x"),
                EntityDraft(name="Downtown", entity_type="place", schema_type="Place", description="x"),
            ]
        )
        self.events = UiEventBus()

    def test_go_fix_recommendation_switches_tab(self) -> None:
        received = []
        self.events.subscribe(received.append)
        rec = next(
            rec
            for rec in recommend(self.store.list_entities(), self.store.list_relations())
            if rec.kind == "disconnected"
        )

        event = dispatch_recommendation(rec, self.events, self.notifier)

        self.assertIsNotNone(event)
        self.assertEqual(event.name, SWITCH_TAB_EVENT)
        self.assertEqual(event.detail, {"tab": "graph"})
        self.assertEqual(received, [event])
        self.assertEqual(self.notifier.notifications[-1].title, "Opening the graph tab")

    def test_apply_suggested_relation_creates_triple(self) -> None:
        rec = next(
            rec
            for rec in recommend(self.store.list_entities(), self.store.list_relations())
            if rec.kind == "suggested_relation"
        )
        outcome = apply_recommendation(self.store, rec, self.events)

        self.assertEqual(len(outcome.relations), 1)
        relation = outcome.relations[0]
        self.assertEqual(
            (relation.subject_id, relation.predicate, relation.object_id),
            (self.business.id, "located_in", self.place.id),
        )
        self.assertEqual(self.events.emitted, [])
        with self.assertRaises(ValidationError):
            apply_recommendation(self.store, rec, self.events)

    def test_apply_go_fix_reports_target_tab(self) -> None:
        entity = self.store.create_entity(EntityDraft(name="Bare", entity_type="product"))
        rec = next(
            rec
            for rec in recommend(self.store.list_entities(), self.store.list_relations())
            if rec.kind == "missing_schema" and rec.entity_id == entity.id
        )
        outcome = apply_recommendation(self.store, rec, self.events)
        self.assertEqual(outcome.target_tab, "schema")
        self.assertEqual(self.events.emitted[-1].detail, {"tab": "schema"})


if __name__ == "__main__":
    unittest.main()
