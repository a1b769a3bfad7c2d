import unittest

from catalog_routes.content.domain.models import BrandEntity, ProductEntity
from catalog_routes.validation.domain.severity import has_hard_issue, severity_of
from catalog_routes.validation.domain.validator import (
    count_issues,
    duplicate_groups,
    inspect_entity,
    mark_duplicates,
)


def findings_for(entities):
    return [inspect_entity(e) for e in entities]


class DuplicateDetectionTests(unittest.TestCase):
    def test_whitespace_and_case_variants_collide(self):
        findings = findings_for(
            [
                BrandEntity(id="b2", raw_slug="intel "),
                BrandEntity(id="b1", raw_slug="Intel"),
                BrandEntity(id="b3", raw_slug="cree"),
            ]
        )

        groups = duplicate_groups(findings)
        self.assertEqual(len(groups), 1)
        self.assertEqual(groups[0].entity_ids, ("b1", "b2"))
        self.assertEqual(groups[0].slug_key, "intel")

        marked = {f.entity_id: f for f in mark_duplicates(findings)}
        self.assertEqual(marked["b1"].issues, ("hasUpperCase", "duplicate"))
        self.assertEqual(marked["b2"].issues, ("hasWhitespace", "duplicate"))
        self.assertEqual(marked["b2"].duplicate_ids, ("b1", "b2"))
        self.assertEqual(marked["b3"].issues, ())
        self.assertTrue(marked["b1"].is_hard)

    def test_scopes_are_separate(self):
        findings = findings_for(
            [
                ProductEntity(id="p1", raw_slug="led", brand_ref="brand-a"),
                ProductEntity(id="p2", raw_slug="led", brand_ref="brand-b"),
                ProductEntity(id="p3", raw_slug="LED", brand_ref="brand-a"),
            ]
        )
        groups = duplicate_groups(findings)
        self.assertEqual([g.entity_ids for g in groups], [("p1", "p3")])
        self.assertEqual(groups[0].scope, "brand-a")

    def test_unroutable_slugs_are_not_grouped(self):
        findings = findings_for(
            [
                BrandEntity(id="b1", raw_slug=None),
                BrandEntity(id="b2", raw_slug="   "),
                BrandEntity(id="b3", raw_slug=""),
            ]
        )
        self.assertEqual(duplicate_groups(findings), [])
        counts = count_issues(mark_duplicates(findings))
        self.assertEqual(counts["missing"], 1)
        self.assertEqual(counts["empty"], 2)
        self.assertEqual(counts["duplicate"], 0)

    def test_result_does_not_depend_on_input_order(self):
        entities = [
            BrandEntity(id=f"b{i}", raw_slug=slug)
            for i, slug in enumerate(["a", "A ", "b", "c.pdf", "c", "d d", None])
        ]
        forward = mark_duplicates(findings_for(entities))
        backward = mark_duplicates(findings_for(list(reversed(entities))))
        self.assertEqual(forward, backward)
        self.assertEqual(count_issues(forward)["duplicate"], 4)


class SeverityTests(unittest.TestCase):
    def test_hard_and_soft(self):
        self.assertEqual(severity_of("missing"), "hard")
        self.assertEqual(severity_of("duplicate"), "hard")
        self.assertEqual(severity_of("hasUpperCase"), "soft")
        self.assertFalse(has_hard_issue(("hasExtension", "hasWhitespace")))
        self.assertTrue(has_hard_issue(("hasExtension", "empty")))


if __name__ == "__main__":
    unittest.main()
