"""Application state: the routing table and intranet test URL, with load/save."""

from typing import Optional

from constants import (
    DEFAULT_INTRANET_TEST_URL,
    INTRANET_PROBE_TIMEOUT,
    INTRANET_TEST_URL_KEY,
    IPV6_PROBE_TIMEOUT,
    IPV6_TEST_URL,
    WHITELIST_KEY,
)
from probe import ProbeConfig
from routing import RoutingEntry, RoutingTable
from urls import normalize


class AppState:
    """Owns the routing table and persists it after every mutation.

    Call :meth:`load` once before use; the add/remove/delete/repair and
    intranet URL operations write back to the store immediately.
    """

    def __init__(self, store, domain_matching: str = "loose", logger=None):
        self.store = store
        self.domain_matching = domain_matching
        self.logger = logger
        self.table = RoutingTable(domain_matching=domain_matching)
        self.intranet_test_url = DEFAULT_INTRANET_TEST_URL

    def load(self) -> "AppState":
        self.table = RoutingTable.from_records(self.store.get(WHITELIST_KEY, []), self.domain_matching)
        stored_url = self.store.get(INTRANET_TEST_URL_KEY, DEFAULT_INTRANET_TEST_URL)
        self.intranet_test_url = normalize(str(stored_url)) if stored_url else DEFAULT_INTRANET_TEST_URL
        return self

    def save(self) -> None:
        self.store.set(WHITELIST_KEY, self.table.to_records())
        self.store.set(INTRANET_TEST_URL_KEY, self.intranet_test_url)

    def _log(self, message: str) -> None:
        if self.logger:
            self.logger.log_access(message)

    def intranet_probe_config(self, timeout: float = INTRANET_PROBE_TIMEOUT) -> ProbeConfig:
        return ProbeConfig(self.intranet_test_url, timeout)

    @staticmethod
    def ipv6_probe_config(timeout: float = IPV6_PROBE_TIMEOUT) -> ProbeConfig:
        return ProbeConfig(IPV6_TEST_URL, timeout)

    def add_site(self, domain: str, ipv6_site: Optional[str] = None, intranet_site: Optional[str] = None) -> RoutingEntry:
        domain = domain.strip()
        if not domain:
            raise ValueError("Domain must not be empty")
        entry = RoutingEntry.create(
            domain,
            intranet_site or f"http://intranet.{domain}",
            ipv6_site or f"https://ipv6.{domain}",
        )
        self.table.add(entry)
        self.store.set(WHITELIST_KEY, self.table.to_records())
        self._log(f"added {entry.domain}: ipv6={entry.ipv6_site} intranet={entry.intranet_site}")
        return entry

    def remove_site(self, host: str) -> int:
        removed = self.table.remove_matching(host)
        self.store.set(WHITELIST_KEY, self.table.to_records())
        if removed:
            self._log(f"removed {removed} entr{'y' if removed == 1 else 'ies'} matching {host}")
        return removed

    def delete_entry(self, position: int) -> RoutingEntry:
        """Delete the entry at a 1-based ``position`` as shown by the list."""
        entry = self.table.pop(position - 1)
        self.store.set(WHITELIST_KEY, self.table.to_records())
        self._log(f"deleted {entry.domain}")
        return entry

    def set_intranet_test_url(self, url: str) -> str:
        if not url or not url.strip():
            raise ValueError("Intranet test URL must not be empty")
        self.intranet_test_url = normalize(url)
        self.store.set(INTRANET_TEST_URL_KEY, self.intranet_test_url)
        self._log(f"intranet test URL set to {self.intranet_test_url}")
        return self.intranet_test_url

    def repair_urls(self) -> int:
        fixed = self.table.repair()
        self.store.set(WHITELIST_KEY, self.table.to_records())
        self._log(f"repaired {fixed} URL(s)")
        return fixed
