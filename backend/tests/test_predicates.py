"""Unit tests for predicate normalization and suggestions."""

import unittest

from semgraph.errors import ValidationError
from semgraph.schema.predicates import (
    SUGGESTED_PREDICATES,
    normalize_predicate_label,
    require_predicate,
    suggest_predicates,
)


class PredicateNormalizationTests(unittest.TestCase):
    def test_labels_are_snake_cased(self) -> None:
        self.assertEqual(normalize_predicate_label("  Located In. "), "located_in")
        self.assertEqual(normalize_predicate_label("works-at"), "works_at")
        self.assertEqual(normalize_predicate_label("Author   Of"), "author_of")
        self.assertEqual(normalize_predicate_label(None), "")

    def test_blank_predicate_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            require_predicate("  ..  ")
        self.assertEqual(require_predicate("Offers"), "offers")


class PredicateSuggestionTests(unittest.TestCase):
    def test_vocabulary_starts_with_core_predicates_without_duplicates(self) -> None:
        self.assertEqual(SUGGESTED_PREDICATES[0], "offers")
        self.assertIn("related_to", SUGGESTED_PREDICATES)
        self.assertIn("reviewed_by", SUGGESTED_PREDICATES)
        self.assertEqual(len(SUGGESTED_PREDICATES), len(set(SUGGESTED_PREDICATES)))

    def test_type_pair_ranks_known_predicate_first(self) -> None:
        ranked = suggest_predicates("business", "product")
        self.assertEqual(ranked[0], "offers")
        self.assertEqual(set(ranked), set(SUGGESTED_PREDICATES))

        ranked = suggest_predicates("person", "content")
        self.assertEqual(ranked[0], "author_of")

    def test_no_types_returns_vocabulary_order(self) -> None:
        self.assertEqual(suggest_predicates(), list(SUGGESTED_PREDICATES))


if __name__ == "__main__":
    unittest.main()
