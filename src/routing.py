"""Routing table of registered domains and their alternate sites."""

from typing import Dict, Iterator, List, Optional

from urls import has_scheme, normalize


class DuplicateEntryError(ValueError):
    pass


class RoutingEntry:
    __slots__ = ("domain", "intranet_site", "ipv6_site")

    def __init__(self, domain: str, intranet_site: str, ipv6_site: str):
        self.domain = domain
        self.intranet_site = intranet_site
        self.ipv6_site = ipv6_site

    @classmethod
    def create(cls, domain: str, intranet_site: str, ipv6_site: str) -> "RoutingEntry":
        return cls(domain.strip(), normalize(intranet_site), normalize(ipv6_site))

    @classmethod
    def from_record(cls, record: Dict[str, object]) -> "RoutingEntry":
        return cls(
            str(record.get("domain", "")),
            str(record.get("intranetSite", "")),
            str(record.get("ipv6Site", "")),
        )

    def to_record(self) -> Dict[str, str]:
        return {
            "domain": self.domain,
            "ipv6Site": self.ipv6_site,
            "intranetSite": self.intranet_site,
        }

    def repair(self) -> int:
        fixed = 0
        if not has_scheme(self.ipv6_site):
            self.ipv6_site = normalize(self.ipv6_site)
            fixed += 1
        if not has_scheme(self.intranet_site):
            self.intranet_site = normalize(self.intranet_site)
            fixed += 1
        return fixed

    def __eq__(self, other) -> bool:
        if not isinstance(other, RoutingEntry):
            return NotImplemented
        return (self.domain, self.intranet_site, self.ipv6_site) == (
            other.domain,
            other.intranet_site,
            other.ipv6_site,
        )

    def __repr__(self) -> str:
        return f"RoutingEntry({self.domain!r}, intranet={self.intranet_site!r}, ipv6={self.ipv6_site!r})"


class RoutingTable:
    def __init__(self, entries: Optional[List[RoutingEntry]] = None, domain_matching: str = "loose"):
        self.entries: List[RoutingEntry] = list(entries or [])
        self.domain_matching = domain_matching

    @classmethod
    def from_records(cls, records, domain_matching: str = "loose") -> "RoutingTable":
        entries = [RoutingEntry.from_record(r) for r in records or [] if isinstance(r, dict)]
        return cls(entries, domain_matching)

    def to_records(self) -> List[Dict[str, str]]:
        return [e.to_record() for e in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[RoutingEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> RoutingEntry:
        return self.entries[index]

    def _match(self, domain: str, host: str) -> bool:
        if self.domain_matching == "strict":
            return bool(domain) and (host == domain or host.endswith("." + domain))
        return domain in host

    def find_match(self, host: str) -> Optional[RoutingEntry]:
        h = host.lower()
        for entry in self.entries:
            if self._match(entry.domain.lower(), h):
                return entry
        return None

    def contains_domain(self, domain: str) -> bool:
        return any(e.domain == domain for e in self.entries)

    def add(self, entry: RoutingEntry) -> None:
        if self.contains_domain(entry.domain):
            raise DuplicateEntryError(f"Site {entry.domain} is already registered")
        self.entries.append(entry)

    def remove_matching(self, host: str) -> int:
        h = host.lower()
        before = len(self.entries)
        self.entries = [e for e in self.entries if not self._match(e.domain.lower(), h)]
        return before - len(self.entries)

    def pop(self, index: int) -> RoutingEntry:
        if index < 0 or index >= len(self.entries):
            raise IndexError(f"Invalid selection: {index + 1}")
        return self.entries.pop(index)

    def repair(self) -> int:
        return sum(e.repair() for e in self.entries)
