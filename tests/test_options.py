from __future__ import annotations

import unittest

from taxonomy_widget.core.models import TaxonomyOptions, TaxonomyOptionsResolved
from taxonomy_widget.core.options import resolve


class ResolveTests(unittest.TestCase):
    def test_reached_at_the_cap(self) -> None:
        options = TaxonomyOptions(max_usages=2)
        self.assertTrue(resolve(options, [("a",), ("b",)]).max_usages_reached)
        self.assertFalse(resolve(options, [("a",)]).max_usages_reached)

    def test_no_cap(self) -> None:
        self.assertFalse(resolve(TaxonomyOptions(), [("a",)] * 50).max_usages_reached)
        self.assertFalse(resolve(TaxonomyOptions(max_usages=0), [("a",)]).max_usages_reached)

    def test_caller_options_are_carried(self) -> None:
        options = TaxonomyOptions(leafs_only=True, show_full_path=True, path_separator=" > ", placeholder="Pick")
        resolved = resolve(options, [])
        self.assertIsInstance(resolved, TaxonomyOptionsResolved)
        self.assertTrue(resolved.leafs_only)
        self.assertTrue(resolved.show_full_path)
        self.assertEqual(resolved.path_separator, " > ")
        self.assertEqual(resolved.placeholder, "Pick")

    def test_none_means_defaults(self) -> None:
        resolved = resolve(None, [])
        self.assertEqual(resolved.path_separator, " / ")
        self.assertFalse(resolved.max_usages_reached)

    def test_already_resolved_options_are_recomputed(self) -> None:
        resolved = resolve(TaxonomyOptions(max_usages=2), [("a",), ("b",)])
        self.assertTrue(resolved.max_usages_reached)
        again = resolve(resolved, [("a",)])
        self.assertFalse(again.max_usages_reached)
        self.assertEqual(again.max_usages, 2)
        self.assertTrue(resolve(again, [("a",), ("b",)]).max_usages_reached)

    def test_camel_case_aliases(self) -> None:
        options = TaxonomyOptions.model_validate({"leafsOnly": True, "maxUsages": 3, "pathSeparator": "|"})
        self.assertTrue(options.leafs_only)
        self.assertEqual(options.max_usages, 3)
        self.assertEqual(options.path_separator, "|")


if __name__ == "__main__":
    unittest.main()
