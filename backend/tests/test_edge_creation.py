"""Unit tests for the drag-to-connect interaction flow."""

from __future__ import annotations

import unittest

from semgraph.errors import InvalidTransition, PartialFailure, ValidationError
from semgraph.schemas.entity import EntityDraft
from semgraph.services.edge_creation import EdgeCreationFlow, EdgeState
from semgraph.services.graph_store import GraphStore
from semgraph.services.notifications import CollectingNotificationSink
from semgraph.services.repository import InMemoryGraphRepository


class _FailingRelationRepository(InMemoryGraphRepository):
    def insert_relations(self, project_id, drafts):
        raise RuntimeError("constraint violated")


class EdgeCreationFlowTests(unittest.TestCase):
    def setUp(self) -> None:
        self.notifier = CollectingNotificationSink()
        self.store = GraphStore(InMemoryGraphRepository(), "project-001", self.notifier)
        self.source, self.target = self.store.create_entities(
            [
                EntityDraft(name="Acme", entity_type="business", position_x=50, position_y=60),
                EntityDraft(name="Widget", entity_type="product"),
            ]
        )
        self.flow = EdgeCreationFlow(self.store)

    def test_connect_two_entities(self) -> None:
        self.flow.begin_drag(self.source.id)
        self.assertIs(self.flow.state, EdgeState.CONNECTING)
        self.flow.release_on_entity(self.target.id)
        self.assertIs(self.flow.state, EdgeState.CONNECTED)

        relation = self.flow.confirm_connection("Offers", 0.9)

        self.assertEqual((relation.subject_id, relation.predicate, relation.object_id),
                         (self.source.id, "offers", self.target.id))
        self.assertIs(self.flow.state, EdgeState.IDLE)
        self.assertIsNone(self.flow.source_id)
        self.assertIsNone(self.flow.target_id)

    def test_failed_connection_returns_to_idle(self) -> None:
        self.store.create_relation(self.source.id, self.target.id, "offers")
        self.flow.begin_drag(self.source.id)
        self.flow.release_on_entity(self.target.id)
        with self.assertRaises(ValidationError):
            self.flow.confirm_connection("offers")
        self.assertIs(self.flow.state, EdgeState.IDLE)

    def test_unknown_entities_are_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            self.flow.begin_drag("missing-id")
        self.assertIs(self.flow.state, EdgeState.IDLE)

        self.flow.begin_drag(self.source.id)
        with self.assertRaises(ValidationError):
            self.flow.release_on_entity("missing-id")
        self.assertIs(self.flow.state, EdgeState.IDLE)
        self.assertIsNone(self.flow.source_id)

    def test_events_out_of_order_raise_invalid_transition(self) -> None:
        with self.assertRaises(InvalidTransition):
            self.flow.confirm_connection("offers")
        with self.assertRaises(InvalidTransition):
            self.flow.release_on_canvas(1, 2)

        self.flow.begin_drag(self.source.id)
        with self.assertRaises(InvalidTransition):
            self.flow.begin_drag(self.target.id)
        self.flow.release_on_canvas(10, 20)
        with self.assertRaises(InvalidTransition):
            self.flow.confirm_connection("offers")

    def test_cancel_clears_retained_state(self) -> None:
        self.flow.begin_drag(self.source.id)
        self.flow.release_on_canvas(10, 20)
        self.flow.cancel()
        self.assertIs(self.flow.state, EdgeState.IDLE)
        self.assertIsNone(self.flow.source_id)
        self.assertIsNone(self.flow.drop_point)

    def test_confirm_without_retained_endpoints_raises_invalid_transition(self) -> None:
        self.flow.state = EdgeState.CONNECTED
        with self.assertRaises(InvalidTransition):
            self.flow.confirm_connection("offers")

        self.flow.state = EdgeState.CREATING_COMPANION
        self.flow.source_id = self.source.id
        with self.assertRaises(InvalidTransition):
            self.flow.confirm_companion("offers", EntityDraft(name="Loose", entity_type="product"))
        self.assertEqual(len(self.store.list_entities()), 2)
        self.assertEqual(self.store.list_relations(), [])

    def test_companion_is_created_at_drop_point_and_linked(self) -> None:
        self.flow.begin_drag(self.source.id)
        self.flow.release_on_canvas(400, 250)

        result = self.flow.confirm_companion(
            "located in",
            EntityDraft(name="Downtown", entity_type="place", position_x=-1, position_y=-1),
        )

        self.assertEqual((result.entity.position_x, result.entity.position_y), (400.0, 250.0))
        self.assertEqual(
            (result.relation.subject_id, result.relation.predicate, result.relation.object_id),
            (self.source.id, "located_in", result.entity.id),
        )
        self.assertIs(self.flow.state, EdgeState.IDLE)

    def test_blank_companion_predicate_creates_nothing(self) -> None:
        self.flow.begin_drag(self.source.id)
        self.flow.release_on_canvas(400, 250)
        with self.assertRaises(ValidationError):
            self.flow.confirm_companion("  ", EntityDraft(name="Downtown", entity_type="place"))
        self.assertEqual(len(self.store.list_entities()), 2)
        self.assertIs(self.flow.state, EdgeState.IDLE)

    def test_companion_relation_failure_keeps_entity(self) -> None:
        notifier = CollectingNotificationSink()
        store = GraphStore(_FailingRelationRepository(), "project-001", notifier)
        source = store.create_entity(EntityDraft(name="Acme", entity_type="business"))
        flow = EdgeCreationFlow(store)
        flow.begin_drag(source.id)
        flow.release_on_canvas(400, 250)

        with self.assertRaises(PartialFailure) as ctx:
            flow.confirm_companion("located_in", EntityDraft(name="Downtown", entity_type="place"))

        self.assertEqual(ctx.exception.failed_step, "relation")
        created_id = ctx.exception.created_entity_ids[0]
        self.assertTrue(store.has_entity(created_id))
        self.assertEqual(store.list_relations(), [])
        self.assertEqual(notifier.failures[-1].title, "Entity created without its relation")
        self.assertIs(flow.state, EdgeState.IDLE)


if __name__ == "__main__":
    unittest.main()
