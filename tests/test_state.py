import os
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from constants import DEFAULT_INTRANET_TEST_URL, INTRANET_TEST_URL_KEY, IPV6_TEST_URL, WHITELIST_KEY
from json_utils import json_loads
from routing import DuplicateEntryError, RoutingEntry
from state import AppState
from storage import JsonFileStore, MemoryStore, StoreError


class TestJsonFileStore(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "store.json")

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_missing_file_yields_defaults(self):
        store = JsonFileStore(self.path)
        self.assertEqual(store.get(WHITELIST_KEY, []), [])
        self.assertFalse(os.path.exists(self.path))

    def test_set_writes_through(self):
        JsonFileStore(self.path).set(INTRANET_TEST_URL_KEY, "http://nas.lan/")
        with open(self.path, "rb") as f:
            self.assertEqual(json_loads(f.read()), {INTRANET_TEST_URL_KEY: "http://nas.lan/"})
        self.assertEqual(JsonFileStore(self.path).get(INTRANET_TEST_URL_KEY), "http://nas.lan/")

    def test_corrupt_file_raises(self):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertRaises(StoreError):
            JsonFileStore(self.path)

    def test_non_object_file_raises(self):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("[1, 2]")
        with self.assertRaises(StoreError):
            JsonFileStore(self.path)

    def test_get_returns_a_copy(self):
        store = MemoryStore({WHITELIST_KEY: [{"domain": "a.com"}]})
        store.get(WHITELIST_KEY).append({"domain": "b.com"})
        self.assertEqual(len(store.get(WHITELIST_KEY)), 1)


class TestAppState(unittest.TestCase):
    def setUp(self):
        self.store = MemoryStore()
        self.state = AppState(self.store).load()

    def reload(self):
        return AppState(self.store).load()

    def test_defaults(self):
        self.assertEqual(len(self.state.table), 0)
        self.assertEqual(self.state.intranet_test_url, DEFAULT_INTRANET_TEST_URL)
        self.assertEqual(self.state.ipv6_probe_config().target_url, IPV6_TEST_URL)

    def test_add_site_uses_default_urls_and_persists(self):
        entry = self.state.add_site("example.com")
        self.assertEqual(entry.ipv6_site, "https://ipv6.example.com")
        self.assertEqual(entry.intranet_site, "http://intranet.example.com")
        self.assertEqual(self.reload().table[0], entry)

    def test_add_site_normalizes_given_urls(self):
        entry = self.state.add_site("example.com", "v6.example.com", "10.0.0.5:8080")
        self.assertEqual(entry.ipv6_site, "http://v6.example.com")
        self.assertEqual(entry.intranet_site, "http://10.0.0.5:8080")

    def test_add_duplicate_is_rejected(self):
        self.state.add_site("example.com")
        with self.assertRaises(DuplicateEntryError):
            self.state.add_site("example.com", "other", "other")
        self.assertEqual(len(self.reload().table), 1)

    def test_add_empty_domain_is_rejected(self):
        with self.assertRaises(ValueError):
            self.state.add_site("  ")

    def test_remove_site(self):
        self.state.add_site("example.com")
        self.state.add_site("example.org")
        self.assertEqual(self.state.remove_site("www.example.com"), 1)
        self.assertEqual([e.domain for e in self.reload().table], ["example.org"])
        self.assertEqual(self.state.remove_site("www.example.com"), 0)

    def test_delete_entry_is_one_based(self):
        self.state.add_site("a.com")
        self.state.add_site("b.com")
        self.assertEqual(self.state.delete_entry(2).domain, "b.com")
        self.assertEqual([e.domain for e in self.reload().table], ["a.com"])

    def test_delete_entry_out_of_range(self):
        self.state.add_site("a.com")
        for position in (0, 2):
            with self.assertRaises(IndexError):
                self.state.delete_entry(position)
        self.assertEqual(len(self.reload().table), 1)

    def test_set_intranet_test_url(self):
        self.assertEqual(self.state.set_intranet_test_url("nas.lan/ping"), "http://nas.lan/ping")
        reloaded = self.reload()
        self.assertEqual(reloaded.intranet_test_url, "http://nas.lan/ping")
        self.assertEqual(reloaded.intranet_probe_config(1.5).timeout, 1.5)

    def test_load_normalizes_stored_intranet_test_url(self):
        self.store.set(INTRANET_TEST_URL_KEY, "nas.lan/ping")
        state = self.reload()
        self.assertEqual(state.intranet_test_url, "http://nas.lan/ping")
        self.assertEqual(state.intranet_probe_config().target_url, "http://nas.lan/ping")

    def test_load_falls_back_on_blank_intranet_test_url(self):
        self.store.set(INTRANET_TEST_URL_KEY, "")
        self.assertEqual(self.reload().intranet_test_url, DEFAULT_INTRANET_TEST_URL)

    def test_set_empty_intranet_test_url_keeps_previous(self):
        with self.assertRaises(ValueError):
            self.state.set_intranet_test_url("")
        self.assertEqual(self.reload().intranet_test_url, DEFAULT_INTRANET_TEST_URL)

    def test_repair_urls_persists(self):
        self.store.set(
            WHITELIST_KEY,
            [
                {"domain": "a.com", "ipv6Site": "ipv6.a.com", "intranetSite": "intranet.a.com"},
                {"domain": "b.com", "ipv6Site": "https://ipv6.b.com", "intranetSite": "FTP://files.b.com"},
            ],
        )
        state = self.reload()
        self.assertEqual(state.repair_urls(), 2)
        records = self.store.get(WHITELIST_KEY)
        self.assertEqual(records[0]["ipv6Site"], "http://ipv6.a.com")
        self.assertEqual(records[0]["intranetSite"], "http://intranet.a.com")
        self.assertEqual(records[1]["intranetSite"], "FTP://files.b.com")
        self.assertEqual(state.repair_urls(), 0)

    def test_save_writes_both_keys(self):
        self.state.table.add(RoutingEntry("a.com", "http://intranet.a.com", "https://ipv6.a.com"))
        self.state.intranet_test_url = "http://nas.lan/"
        self.state.save()
        self.assertEqual(self.store.get(WHITELIST_KEY)[0]["domain"], "a.com")
        self.assertEqual(self.store.get(INTRANET_TEST_URL_KEY), "http://nas.lan/")

    def test_strict_matching_applies_to_loaded_table(self):
        self.state.add_site("example.com")
        state = AppState(self.store, domain_matching="strict").load()
        self.assertIsNone(state.table.find_match("notexample.com"))
        self.assertIsNotNone(self.reload().table.find_match("notexample.com"))


if __name__ == "__main__":
    unittest.main()
