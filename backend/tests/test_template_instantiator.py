"""Unit tests for niche template instantiation and generation."""

from __future__ import annotations

import unittest
from unittest.mock import patch

from semgraph.errors import NotFoundError, PartialFailure, ValidationError
from semgraph.schema.niche_templates import NICHE_TEMPLATES
from semgraph.schemas.templates import (
    DataQuestion,
    IndexedRelation,
    NicheTemplate,
    ScopeQuestion,
    TemplateEntity,
    TemplateRelation,
)
from semgraph.services import templates as templates_service
from semgraph.services.graph_store import GraphStore
from semgraph.services.notifications import CollectingNotificationSink
from semgraph.services.repository import InMemoryGraphRepository
from semgraph.services.templates import (
    circle_layout,
    compile_relations,
    generate_from_template,
    instantiate,
    list_templates,
    require_template,
    validate_template,
)


class _FailingRelationRepository(InMemoryGraphRepository):
    def insert_relations(self, project_id, drafts):
        raise RuntimeError("disk full")


def _ten_stub_template() -> NicheTemplate:
    types = [
        "business",
        "product",
        "person",
        "place",
        "listing_profile",
        "website",
        "product",
        "review",
        "service",
        "service",
    ]
    return NicheTemplate(
        key="bistro",
        label="Bistro",
        entities=[
            TemplateEntity(name=f"Stub {index}", entity_type=entity_type)
            for index, entity_type in enumerate(types)
        ],
        relations=[
            TemplateRelation(subject_index=0, object_index=1, predicate="offers"),
            TemplateRelation(subject_index=0, object_index=9, predicate="offers"),
            TemplateRelation(subject_index=2, object_index=9, predicate="works_at"),
            TemplateRelation(subject_index=0, object_index=8, predicate="offers"),
            TemplateRelation(subject_index=4, object_index=7, predicate="related_to"),
        ],
        scope_questions=[
            ScopeQuestion(key="has_specials", prompt="Daily specials?", entity_indices=[6]),
            ScopeQuestion(key="has_events", prompt="Events?", default=False, entity_indices=[9]),
        ],
        data_questions=[
            DataQuestion(key="business_name", prompt="Name?", entity_index=0, required=True),
            DataQuestion(key="chef_bio", prompt="Chef bio?", entity_index=2, field="description"),
        ],
    )


class TemplateInstantiationTests(unittest.TestCase):
    def test_declined_scope_removes_entities_and_touching_relations(self) -> None:
        template = _ten_stub_template()
        result = instantiate(
            template,
            scope_answers={"has_specials": False},
            data_answers={"business_name": "  Bistro Lumen  ", "chef_bio": ""},
        )

        self.assertEqual(len(result.entities), 8)
        self.assertEqual(result.removed_indices, [6, 9])
        self.assertEqual(
            [entity.name for entity in result.entities],
            ["Bistro Lumen", "Stub 1", "Stub 2", "Stub 3", "Stub 4", "Stub 5", "Stub 7", "Stub 8"],
        )
        self.assertEqual(
            [(rel.subject_index, rel.object_index, rel.predicate) for rel in result.relations],
            [(0, 1, "offers"), (0, 7, "offers"), (4, 6, "related_to")],
        )
        for relation in result.relations:
            self.assertTrue(0 <= relation.subject_index < len(result.entities))
            self.assertTrue(0 <= relation.object_index < len(result.entities))

    def test_instantiation_is_deterministic_and_does_not_mutate_template(self) -> None:
        template = _ten_stub_template()
        before = template.model_dump()
        answers = {"business_name": "Bistro Lumen", "chef_bio": "Trained in Lyon"}
        first = instantiate(template, {"has_events": True}, answers)
        second = instantiate(template, {"has_events": True}, answers)

        self.assertEqual(first.model_dump(), second.model_dump())
        self.assertEqual(template.model_dump(), before)
        self.assertEqual(len(first.entities), 10)
        self.assertEqual(first.entities[2].description, "Trained in Lyon")

    def test_remapped_index_outside_survivors_raises(self) -> None:
        def shifted(**fields):
            fields["object_index"] += 100
            return IndexedRelation(**fields)

        with patch.object(templates_service, "IndexedRelation", side_effect=shifted):
            with self.assertRaises(RuntimeError):
                instantiate(_ten_stub_template(), {"has_events": True}, {"business_name": "Bistro Lumen"})

    def test_required_data_answer_is_enforced(self) -> None:
        with self.assertRaises(ValidationError):
            instantiate(_ten_stub_template(), {}, {"business_name": "   "})

    def test_placeholder_fills_blank_names(self) -> None:
        template = NicheTemplate(
            key="solo",
            label="Solo",
            entities=[
                TemplateEntity(placeholder="Your business", entity_type="business"),
                TemplateEntity(entity_type="place", schema_type=" "),
            ],
        )
        result = instantiate(template)
        self.assertEqual([entity.name for entity in result.entities], ["Your business", "place"])
        self.assertIsNone(result.entities[1].schema_type)

    def test_layout_places_entities_on_a_circle(self) -> None:
        points = circle_layout(4, center=(0.0, 0.0), radius=100.0)
        expected = [(100.0, 0.0), (0.0, 100.0), (-100.0, 0.0), (0.0, -100.0)]
        for (x, y), (ex, ey) in zip(points, expected):
            self.assertAlmostEqual(x, ex)
            self.assertAlmostEqual(y, ey)
        self.assertEqual(circle_layout(0), [])


class TemplateValidationTests(unittest.TestCase):
    def test_out_of_range_relation_index_is_rejected(self) -> None:
        template = _ten_stub_template()
        template.relations.append(TemplateRelation(subject_index=0, object_index=10, predicate="offers"))
        with self.assertRaises(ValidationError):
            validate_template(template)
        with self.assertRaises(ValidationError):
            instantiate(template, {}, {"business_name": "X"})

    def test_bad_question_indices_and_duplicate_keys_are_rejected(self) -> None:
        template = _ten_stub_template()
        template.scope_questions.append(ScopeQuestion(key="ghost", prompt="?", entity_indices=[-1]))
        with self.assertRaises(ValidationError):
            validate_template(template)

        template = _ten_stub_template()
        template.data_questions.append(DataQuestion(key="has_events", prompt="?", entity_index=1))
        with self.assertRaises(ValidationError):
            validate_template(template)

        template = _ten_stub_template()
        template.entities[3].entity_type = "spaceship"
        with self.assertRaises(ValidationError):
            validate_template(template)

    def test_builtin_templates_are_valid(self) -> None:
        self.assertEqual(
            [summary.key for summary in list_templates()],
            [template.key for template in NICHE_TEMPLATES],
        )
        for template in NICHE_TEMPLATES:
            validate_template(template)
            self.assertEqual(len(template.entities), 10)
            result = instantiate(template, {}, {"business_name": "Acme"})
            self.assertEqual(result.entities[0].name, "Acme")

    def test_require_template_returns_a_private_copy(self) -> None:
        copy = require_template("restaurant")
        copy.entities.clear()
        self.assertEqual(len(require_template("restaurant").entities), 10)
        with self.assertRaises(NotFoundError):
            require_template("spaceport")


class TemplateGenerationTests(unittest.TestCase):
    def test_generate_persists_entities_then_relations(self) -> None:
        repository = InMemoryGraphRepository()
        store = GraphStore(repository, "project-001", CollectingNotificationSink())
        result = generate_from_template(
            store,
            _ten_stub_template(),
            {"has_specials": False},
            {"business_name": "Bistro Lumen"},
        )

        self.assertEqual(len(result.entities), 8)
        self.assertEqual(len(result.relations), 3)
        self.assertEqual(repository.calls, ["insert_entities", "insert_relations"])
        ids = [entity.id for entity in result.entities]
        self.assertEqual(
            [(ids.index(rel.subject_id), ids.index(rel.object_id)) for rel in result.relations],
            [(0, 1), (0, 7), (4, 6)],
        )

    def test_relation_failure_reports_created_entities(self) -> None:
        notifier = CollectingNotificationSink()
        store = GraphStore(_FailingRelationRepository(), "project-001", notifier)

        with self.assertRaises(PartialFailure) as ctx:
            generate_from_template(store, _ten_stub_template(), {}, {"business_name": "Bistro Lumen"})

        self.assertEqual(ctx.exception.failed_step, "relations")
        self.assertEqual(len(ctx.exception.created_entity_ids), 9)
        self.assertEqual(len(store.list_entities()), 9)
        self.assertEqual(store.list_relations(), [])
        self.assertEqual(notifier.failures[-1].title, "Template partially generated")

    def test_compile_relations_requires_matching_id_count(self) -> None:
        result = instantiate(_ten_stub_template(), {}, {"business_name": "X"})
        with self.assertRaises(ValidationError):
            compile_relations(result, ["only-one"])


if __name__ == "__main__":
    unittest.main()
