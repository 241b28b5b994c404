import json
import tempfile
from pathlib import Path
from unittest import mock

from django.test import TestCase, override_settings

from navigation.conf import NavigationSettings
from navigation.services import NavigationCache, NavigationTree


class CacheTestMixin:
    def setUp(self):
        super().setUp()
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.cache_dir = Path(tmp.name) / "navigation"
        self.config = NavigationSettings(cache_enabled=True, cache_dir=self.cache_dir)

        # signals read the Django settings, keep them pointed at the same directory
        override = override_settings(DBMENU={"CACHE_ENABLED": True, "CACHE_DIR": self.cache_dir})
        override.enable()
        self.addCleanup(override.disable)

    def make_tree(self):
        return NavigationTree(config=self.config)


class NavigationCacheTests(CacheTestMixin, TestCase):
    def test_round_trip(self):
        cache = NavigationCache(self.cache_dir, enabled=True)
        tree = [{"id": 1, "label": "Home", "uri": "/", "children": [
            {"id": 2, "label": "About", "uri": "/about", "children": None},
        ]}]

        self.assertTrue(cache.put("main", tree))

        self.assertEqual(cache.get("main"), tree)
        payload = json.loads((self.cache_dir / "main.json").read_text(encoding="utf-8"))
        self.assertEqual(payload["format"], "dbmenu.navigation")
        self.assertEqual(payload["slot"], "main")

    def test_put_never_overwrites(self):
        cache = NavigationCache(self.cache_dir, enabled=True)
        first = [{"label": "First", "children": None}]

        self.assertTrue(cache.put("main", first))
        self.assertFalse(cache.put("main", [{"label": "Second", "children": None}]))

        self.assertEqual(cache.get("main"), first)

    def test_disabled_cache_does_nothing(self):
        cache = NavigationCache(self.cache_dir, enabled=False)

        self.assertFalse(cache.put("main", [{"label": "x", "children": None}]))
        self.assertIsNone(cache.get("main"))
        self.assertFalse(self.cache_dir.exists())

    def test_missing_directory_setting_does_nothing(self):
        cache = NavigationCache(None, enabled=True)

        self.assertFalse(cache.put("main", [{"label": "x", "children": None}]))
        self.assertIsNone(cache.get("main"))

    def test_unknown_slot_is_a_miss(self):
        self.assertIsNone(NavigationCache(self.cache_dir, enabled=True).get("footer"))

    def test_corrupt_file_is_a_miss(self):
        self.cache_dir.mkdir(parents=True)
        (self.cache_dir / "main.json").write_text("[{not json", encoding="utf-8")

        with self.assertLogs("navigation.services.cache", level="WARNING"):
            self.assertIsNone(NavigationCache(self.cache_dir, enabled=True).get("main"))

    def test_foreign_layout_is_a_miss(self):
        self.cache_dir.mkdir(parents=True)
        (self.cache_dir / "main.json").write_text(json.dumps([{"label": "x"}]), encoding="utf-8")

        with self.assertLogs("navigation.services.cache", level="WARNING"):
            self.assertIsNone(NavigationCache(self.cache_dir, enabled=True).get("main"))

    def test_unserialisable_tree_is_swallowed(self):
        cache = NavigationCache(self.cache_dir, enabled=True)

        with self.assertLogs("navigation.services.cache", level="WARNING"):
            self.assertFalse(cache.put("main", [{"label": "x", "children": object()}]))
        self.assertFalse((self.cache_dir / "main.json").exists())

    def test_write_failure_is_swallowed(self):
        # a plain file where the directory should be
        self.cache_dir.parent.mkdir(parents=True, exist_ok=True)
        self.cache_dir.write_text("", encoding="utf-8")
        cache = NavigationCache(self.cache_dir, enabled=True)

        with self.assertLogs("navigation.services.cache", level="WARNING"):
            self.assertFalse(cache.put("main", [{"label": "x", "children": None}]))

    def test_failed_write_leaves_slot_usable(self):
        cache = NavigationCache(self.cache_dir, enabled=True)
        tree = [{"label": "Home", "children": None}]

        with mock.patch("navigation.services.cache.os.link", side_effect=OSError("No space left on device")):
            with self.assertLogs("navigation.services.cache", level="WARNING"):
                self.assertFalse(cache.put("main", tree))

        # neither a partial slot file nor the scratch file is left behind
        self.assertEqual(list(self.cache_dir.iterdir()), [])

        self.assertTrue(cache.put("main", tree))
        self.assertEqual(cache.get("main"), tree)

    def test_slot_names_cannot_escape_directory(self):
        cache = NavigationCache(self.cache_dir, enabled=True)
        self.assertEqual(cache.slot_path("../../etc/passwd").parent, self.cache_dir)

    def test_invalidate_and_clear(self):
        cache = NavigationCache(self.cache_dir, enabled=True)
        cache.put("main", [{"label": "x", "children": None}])
        cache.put("footer", [{"label": "y", "children": None}])

        self.assertTrue(cache.invalidate("main"))
        self.assertFalse(cache.invalidate("main"))
        self.assertIsNone(cache.get("main"))

        self.assertEqual(cache.clear(), 1)
        self.assertIsNone(cache.get("footer"))


class GetNavigationArrayTests(CacheTestMixin, TestCase):
    def setUp(self):
        super().setUp()
        nav = self.make_tree()
        home = nav.add_nav_item("Home", "/")
        nav.add_nav_item("About", "/about", home)

    def test_cached_slot_is_served_without_queries(self):
        built = self.make_tree().get_navigation_array("/", slot="main")
        self.assertTrue((self.cache_dir / "main.json").exists())

        fresh = self.make_tree()
        with self.assertNumQueries(0):
            cached = fresh.get_navigation_array("/", slot="main")

        self.assertEqual(cached, built)
        self.assertEqual(cached[0]["children"][0]["label"], "About")

    def test_held_tree_skips_cache_lookup(self):
        nav = self.make_tree()
        first = nav.get_navigation_array("/", slot="main")
        (self.cache_dir / "main.json").unlink()

        with self.assertNumQueries(0):
            self.assertIs(nav.get_navigation_array("/", slot="main"), first)

        nav.forget("main")
        self.assertEqual(nav.get_navigation_array("/", slot="main"), first)

    def test_without_slot_nothing_is_cached(self):
        self.make_tree().get_navigation_array("/")
        self.assertFalse(self.cache_dir.exists())

    def test_empty_result_is_not_cached(self):
        nav = self.make_tree()
        self.assertIsNone(nav.get_navigation_array("/", parent_id=999, slot="missing"))
        self.assertFalse((self.cache_dir / "missing.json").exists())

    def test_changes_clear_cached_slots(self):
        nav = self.make_tree()
        nav.get_navigation_array("/", slot="main")
        self.assertTrue((self.cache_dir / "main.json").exists())

        nav.add_nav_item("Contact", "/contact")

        self.assertFalse((self.cache_dir / "main.json").exists())
        tree = self.make_tree().get_navigation_array("/", slot="main")
        self.assertEqual([n["label"] for n in tree], ["Home", "Contact"])

    def test_invalidation_can_be_switched_off(self):
        nav = self.make_tree()
        nav.get_navigation_array("/", slot="main")

        with override_settings(DBMENU={
            "CACHE_ENABLED": True, "CACHE_DIR": self.cache_dir, "INVALIDATE_ON_CHANGE": False,
        }):
            nav.add_nav_item("Contact", "/contact")

        # stale, by request
        tree = self.make_tree().get_navigation_array("/", slot="main")
        self.assertEqual([n["label"] for n in tree], ["Home"])
