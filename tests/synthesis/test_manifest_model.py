import unittest

from catalog_routes.content.domain.models import ContentKey
from catalog_routes.errors import ConfigurationError
from catalog_routes.synthesis.domain.models import SynthesisManifest


class SynthesisManifestTests(unittest.TestCase):
    def test_values_are_deduplicated_and_trimmed(self):
        manifest = SynthesisManifest(
            locales=("zh-CN", "en", "zh-CN"),
            brands=(" cree", "cree", ""),
            ids_by_type={"product": ("led", "led", "55555")},
        )
        self.assertEqual(manifest.locales, ("zh-CN", "en"))
        self.assertEqual(manifest.brands, ("cree",))
        self.assertEqual(manifest.ids_by_type["product"], ("led", "55555"))
        self.assertEqual(manifest.tuple_count, 4)

    def test_section_names_are_accepted_as_types(self):
        manifest = SynthesisManifest.from_dict(
            {"locales": ["en"], "brands": ["cree"], "ids": {"products": ["led"], "product": ["chip"]}}
        )
        self.assertEqual(manifest.ids_by_type, {"product": ("led", "chip")})

    def test_unsupported_type_is_rejected(self):
        with self.assertRaises(ConfigurationError):
            SynthesisManifest(locales=("en",), brands=("cree",), ids_by_type={"category": ("x",)})

    def test_from_dict_rejects_bad_shapes(self):
        with self.assertRaises(ConfigurationError):
            SynthesisManifest.from_dict(["en"])
        with self.assertRaises(ConfigurationError):
            SynthesisManifest.from_dict({"locales": "en", "brands": []})
        with self.assertRaises(ConfigurationError):
            SynthesisManifest.from_dict({"locales": [], "brands": [], "ids": ["led"]})

    def test_keys_cover_the_cross_product_in_order(self):
        manifest = SynthesisManifest(
            locales=("zh-CN", "en"),
            brands=("cree", "intel"),
            ids_by_type={"solution": ("lighting",), "product": ("led",)},
        )
        keys = list(manifest.keys())
        self.assertEqual(len(keys), manifest.tuple_count)
        self.assertEqual(keys[0], ContentKey(locale="zh-CN", content_type="product", item_id="led", brand_slug="cree"))
        self.assertEqual(keys[1], ContentKey(locale="zh-CN", content_type="solution", item_id="lighting", brand_slug="cree"))
        self.assertEqual(keys[-1].locale, "en")
        self.assertEqual(len(set(keys)), len(keys))

    def test_round_trip_through_dict(self):
        manifest = SynthesisManifest(locales=("en",), brands=("cree",), ids_by_type={"article": ("news",)})
        self.assertEqual(SynthesisManifest.from_dict(manifest.to_dict()), manifest)

    def test_with_locales(self):
        manifest = SynthesisManifest(locales=("en",), brands=("cree",), ids_by_type={"product": ("led",)})
        narrowed = manifest.with_locales(("ja",))
        self.assertEqual(narrowed.locales, ("ja",))
        self.assertEqual(narrowed.ids_by_type, manifest.ids_by_type)


if __name__ == "__main__":
    unittest.main()
