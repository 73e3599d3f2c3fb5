"""Reachability probes for intranet and IPv6 environments."""

from constants import NO_IPV6_MARKER
from http_client import TransportError, UrllibHttpClient
from interfaces import IProbe


class ProbeConfig:
    __slots__ = ("target_url", "timeout")

    def __init__(self, target_url: str, timeout: float):
        self.target_url = target_url
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"ProbeConfig({self.target_url!r}, timeout={self.timeout})"


class HttpProbe(IProbe):
    name = "http"

    def __init__(self, http_client=None, logger=None, statistics=None):
        self.http_client = http_client or UrllibHttpClient()
        self.logger = logger
        self.statistics = statistics

    def accepts(self, response) -> bool:
        return response.status == 200

    async def probe(self, config: ProbeConfig) -> bool:
        try:
            response = await self.http_client.get(config.target_url, config.timeout)
        except TransportError as e:
            if self.statistics:
                self.statistics.increment_probe_failures()
            if self.logger:
                self.logger.log_error(f"{self.name} probe failed for {config.target_url}: {e}")
            return False
        return self.accepts(response)


class IntranetProbe(HttpProbe):
    name = "intranet"


class IPv6Probe(HttpProbe):
    """Checks public IPv6 reachability against the test-ipv6 lookup endpoint.

    The endpoint answers 200 even when the client has no IPv6 address, so
    the body must be present and free of the "no address" marker.
    """

    name = "ipv6"

    def accepts(self, response) -> bool:
        if response.status != 200 or not response.body:
            return False
        return NO_IPV6_MARKER not in response.body
