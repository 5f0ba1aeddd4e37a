"""Unit tests for graph connectivity and authority analysis."""

from __future__ import annotations

import unittest

from semgraph.schema.hierarchy import SchemaHierarchyIndex
from semgraph.schemas.entity import EntityRead
from semgraph.schemas.relation import RelationRead
from semgraph.services.analyzer import analyze, authority_scores, authority_tier, round_half_up


def _entity(entity_id: str, entity_type: str = "business", **extra) -> EntityRead:
    values = {
        "id": entity_id,
        "project_id": "project-001",
        "name": entity_id.upper(),
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


class AuthorityScoreTests(unittest.TestCase):
    def test_three_entities_one_relation(self) -> None:
        entities = [
            _entity("a", schema_type="Organization", description="Main company"),
            _entity("b", "product"),
            _entity("c", "place"),
        ]
        metrics = analyze(entities, [_relation("r1", "b", "offers", "c")])

        self.assertEqual(metrics.connected_ids, ["b", "c"])
        self.assertEqual([entity.id for entity in metrics.disconnected], ["a"])
        self.assertEqual(metrics.relation_count_by_entity, {"b": 1, "c": 1})
        self.assertAlmostEqual(metrics.scores.entity_count, 5.0)
        self.assertAlmostEqual(metrics.scores.relation_density, 25 / 4.5)
        self.assertAlmostEqual(metrics.scores.schema_coverage, 25 / 3)
        self.assertAlmostEqual(metrics.scores.connectivity, 2 / 3 * 25)
        self.assertEqual(metrics.authority_score, 36)
        self.assertEqual(metrics.authority_tier, "early")
        self.assertEqual(metrics.connectivity_pct, 67)
        self.assertEqual(metrics.schema_coverage_pct, 33)
        self.assertEqual(metrics.with_description, 1)
        self.assertEqual(metrics.unique_predicates, 1)

    def test_empty_graph_scores_zero(self) -> None:
        metrics = analyze([], [])
        self.assertEqual(metrics.authority_score, 0)
        self.assertEqual(metrics.authority_tier, "early")
        self.assertEqual(metrics.connectivity_pct, 0)
        self.assertEqual(metrics.schema_coverage_pct, 0)
        self.assertEqual(metrics.predicate_distribution, [])
        self.assertEqual(metrics.scores.relation_density, 0.0)

    def test_single_entity_has_no_density_score(self) -> None:
        scores = authority_scores(entity_count=1, relation_count=3, with_schema=1, disconnected_count=0)
        self.assertEqual(scores.relation_density, 0.0)
        self.assertEqual(scores.schema_coverage, 25.0)

    def test_sub_scores_are_capped(self) -> None:
        scores = authority_scores(entity_count=40, relation_count=500, with_schema=40, disconnected_count=0)
        self.assertEqual(
            (scores.entity_count, scores.relation_density, scores.schema_coverage, scores.connectivity),
            (25.0, 25.0, 25.0, 25.0),
        )

        entities = [_entity(f"e{index}", schema_type="Thing") for index in range(20)]
        relations = [
            _relation(f"r{index}", f"e{index}", "related_to", f"e{(index + 1) % 20}") for index in range(20)
        ] + [_relation(f"s{index}", f"e{index}", "part_of", f"e{(index + 2) % 20}") for index in range(20)]
        metrics = analyze(entities, relations)
        self.assertEqual(metrics.authority_score, 100)
        self.assertEqual(metrics.authority_tier, "strong")

    def test_rounding_and_tiers(self) -> None:
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(0.49), 0)
        self.assertEqual(authority_tier(70), "strong")
        self.assertEqual(authority_tier(69), "developing")
        self.assertEqual(authority_tier(40), "developing")
        self.assertEqual(authority_tier(39), "early")


class DistributionTests(unittest.TestCase):
    def test_predicate_distribution_keeps_top_eight_first_seen_on_ties(self) -> None:
        entities = [_entity(f"e{index}") for index in range(11)]
        relations = [
            _relation(f"r{index}", f"e{index}", f"p{index}", f"e{index + 1}") for index in range(10)
        ]
        relations.append(_relation("extra", "e0", "p3", "e5"))

        metrics = analyze(entities, relations)

        self.assertEqual(
            [(item.predicate, item.count) for item in metrics.predicate_distribution],
            [("p3", 2), ("p0", 1), ("p1", 1), ("p2", 1), ("p4", 1), ("p5", 1), ("p6", 1), ("p7", 1)],
        )
        self.assertEqual(metrics.unique_predicates, 10)
        limited = analyze(entities, relations, predicate_limit=2)
        self.assertEqual([item.predicate for item in limited.predicate_distribution], ["p3", "p0"])

    def test_type_distribution_is_sorted_by_count(self) -> None:
        entities = [_entity("a", "place"), _entity("b", "product"), _entity("c", "product")]
        metrics = analyze(entities, [])
        self.assertEqual(
            [(item.entity_type, item.count) for item in metrics.type_distribution],
            [("product", 2), ("place", 1)],
        )

    def test_relations_with_unknown_endpoints_are_skipped(self) -> None:
        entities = [_entity("a"), _entity("b", "product")]
        relations = [_relation("r1", "a", "offers", "b"), _relation("r2", "a", "offers", "ghost")]
        metrics = analyze(entities, relations)
        self.assertEqual(metrics.relation_count, 1)
        self.assertEqual(metrics.relation_count_by_entity, {"a": 1, "b": 1})
        self.assertNotIn("ghost", metrics.connected_ids)

    def test_schema_property_coverage_uses_required_properties(self) -> None:
        index = SchemaHierarchyIndex(
            [
                {"name": "Thing", "parent": None, "properties": [{"name": "name", "required": True}]},
                {
                    "name": "LocalBusiness",
                    "parent": "Thing",
                    "properties": [{"name": "address", "required": True}, {"name": "telephone"}],
                },
            ]
        )
        entities = [
            _entity("a", schema_type="LocalBusiness"),
            _entity("b", schema_type="NotInCatalog"),
            _entity("c", "place"),
        ]
        metrics = analyze(entities, [], schema_index=index)
        self.assertEqual(metrics.schema_property_coverage_pct, 50)
        self.assertEqual(analyze(entities, []).schema_property_coverage_pct, 0)


if __name__ == "__main__":
    unittest.main()
