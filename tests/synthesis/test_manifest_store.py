import unittest

from catalog_routes.content.domain.models import ContentKey
from catalog_routes.synthesis.application.contracts import ArtifactEntry
from catalog_routes.synthesis.application.ports import ManifestStorePort
from catalog_routes.synthesis.infrastructure.manifest_store import SQLiteManifestStore
from tests.utils.tempdir import managed_temp_dir


def entry(item_id, origin="synthesized", locale="en"):
    key = ContentKey(locale=locale, content_type="product", item_id=item_id, brand_slug="cree")
    return ArtifactEntry(content_key=key, file_path=f"out/{locale}/brands/cree/products/{item_id}/index.html", origin=origin)


class SQLiteManifestStoreTests(unittest.TestCase):
    def test_replace_all_drops_previous_run(self):
        with managed_temp_dir("store_replace") as tmp:
            store = SQLiteManifestStore(tmp / "manifest.db")
            try:
                self.assertIsInstance(store, ManifestStorePort)
                store.replace_all([entry("a"), entry("b", origin="build")])
                store.replace_all([entry("c")])
                entries = store.list_entries()
            finally:
                store.close()

            self.assertEqual([e.content_key.item_id for e in entries], ["c"])
            self.assertEqual(entries[0].content_key.brand_slug, "cree")
            self.assertEqual(entries[0].to_dict()["origin"], "synthesized")

    def test_corrupt_database_is_moved_aside(self):
        with managed_temp_dir("store_recovery") as tmp:
            db_path = tmp / "manifest.db"
            db_path.write_bytes(b"this is not a sqlite database" * 20)

            store, recovered, backup = SQLiteManifestStore.create_with_recovery(db_path)
            try:
                store.replace_all([entry("a")])
                self.assertEqual(len(store.list_entries()), 1)
            finally:
                store.close()

            self.assertTrue(recovered)
            self.assertIsNotNone(backup)
            self.assertIn(".corrupt.", backup)


if __name__ == "__main__":
    unittest.main()
