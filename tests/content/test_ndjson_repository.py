import json
import unittest

from catalog_routes.content.application.ports import ContentRepositoryPort
from catalog_routes.content.infrastructure.ndjson_repository import NdjsonContentRepository
from catalog_routes.errors import ConfigurationError
from tests.utils.tempdir import managed_temp_dir

DOCUMENTS = [
    {"_id": "brand-cree", "_type": "brandBasic", "name": "Cree", "slug": {"current": "cree"}, "isActive": True},
    {"_id": "brand-old", "_type": "brandBasic", "name": "Old", "slug": {"current": "old"}, "isActive": False},
    {"_id": "drafts.brand-new", "_type": "brandBasic", "name": "New", "slug": {"current": "new"}},
    {"_id": "brand-intel", "_type": "brandBasic", "name": "Intel", "slug": {"current": "Intel "}},
    {"_id": "p2", "_type": "product", "title": "LED", "slug": {"current": "led"}, "brand": {"_ref": "brand-cree"}},
    {"_id": "p1", "_type": "product", "title": "Chip", "slug": {"current": "55555"}, "brand": {"_ref": "brand-intel"}},
    {"_id": "p-orphan", "_type": "product", "title": "Orphan", "slug": {"current": "orphan"}},
    {"_id": "a1", "_type": "article", "title": "News", "slug": {"current": "news"}},
    {"_id": "a2", "_type": "article", "title": "FAQ", "slug": {"current": "faq"}, "relatedBrands": [{"_ref": "brand-cree"}]},
    {"_id": "s1", "_type": "solution", "title": "Lighting", "slug": {"current": "lighting"}, "primaryBrand": {"_ref": "brand-cree"}},
]


def write_export(path, documents, extra_lines=()):
    with path.open("w", encoding="utf-8") as fp:
        for doc in documents:
            fp.write(json.dumps(doc, ensure_ascii=False) + "\n")
        for line in extra_lines:
            fp.write(line + "\n")


class NdjsonContentRepositoryTests(unittest.TestCase):
    def test_implements_repository_port(self):
        with managed_temp_dir("ndjson_port") as tmp:
            export = tmp / "export.ndjson"
            write_export(export, DOCUMENTS)
            self.assertIsInstance(NdjsonContentRepository(export), ContentRepositoryPort)

    def test_known_brand_slugs_skip_drafts_and_inactive(self):
        with managed_temp_dir("ndjson_brands") as tmp:
            export = tmp / "export.ndjson"
            write_export(export, DOCUMENTS)
            repo = NdjsonContentRepository(export)
            self.assertEqual(repo.get_known_brand_slugs(), ["cree", "Intel "])

    def test_products_resolve_brand_slug_and_skip_invalid(self):
        with managed_temp_dir("ndjson_products") as tmp:
            export = tmp / "export.ndjson"
            write_export(export, DOCUMENTS, extra_lines=["{not json", ""])
            repo = NdjsonContentRepository(export)
            products = repo.list_entities("product")

            self.assertEqual([p.id for p in products], ["p1", "p2"])
            self.assertEqual(products[0].brand_ref, "brand-intel")
            self.assertEqual(products[0].brand_slug, "Intel ")
            self.assertEqual(products[1].brand_slug, "cree")

    def test_support_is_articles_with_a_brand(self):
        with managed_temp_dir("ndjson_support") as tmp:
            export = tmp / "export.ndjson"
            write_export(export, DOCUMENTS)
            repo = NdjsonContentRepository(export)

            self.assertEqual([e.id for e in repo.list_entities("support")], ["a2"])
            self.assertEqual([e.id for e in repo.list_entities("article")], ["a1", "a2"])
            solutions = repo.list_entities("solution")
            self.assertEqual(solutions[0].brand_slug, "cree")

    def test_missing_export_is_configuration_error(self):
        with managed_temp_dir("ndjson_missing") as tmp:
            with self.assertRaises(ConfigurationError):
                NdjsonContentRepository(tmp / "nope.ndjson")

    def test_unknown_content_type(self):
        with managed_temp_dir("ndjson_unknown") as tmp:
            export = tmp / "export.ndjson"
            write_export(export, DOCUMENTS)
            with self.assertRaises(ValueError):
                NdjsonContentRepository(export).list_entities("category")


if __name__ == "__main__":
    unittest.main()
