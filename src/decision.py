"""Priority-ordered decision engine: intranet first, then IPv6."""

from enum import Enum
from typing import List, Optional

from probe import ProbeConfig
from routing import RoutingEntry


class DecisionState(Enum):
    START = "start"
    CHECKING_INTRANET = "checking-intranet"
    CHECKING_IPV6 = "checking-ipv6"
    RESOLVED = "resolved"


class DecisionResult:
    __slots__ = ("target_url", "via")

    def __init__(self, target_url: Optional[str] = None, via: Optional[str] = None):
        self.target_url = target_url
        self.via = via

    @property
    def is_redirect(self) -> bool:
        return self.target_url is not None

    def __eq__(self, other) -> bool:
        if not isinstance(other, DecisionResult):
            return NotImplemented
        return self.target_url == other.target_url

    def __hash__(self) -> int:
        return hash(self.target_url)


class Redirect(DecisionResult):
    def __init__(self, target_url: str, via: Optional[str] = None):
        super().__init__(target_url, via)

    def __repr__(self) -> str:
        return f"Redirect({self.target_url!r})"


class NoAction(DecisionResult):
    def __init__(self):
        super().__init__(None, None)

    def __repr__(self) -> str:
        return "NoAction()"


class DecisionRun:
    """A single, non-restartable pass through the probe sequence."""

    def __init__(self, engine: "DecisionEngine", entry: Optional[RoutingEntry]):
        self.engine = engine
        self.entry = entry
        self.state = DecisionState.START
        self.states: List[DecisionState] = [DecisionState.START]
        self.result: Optional[DecisionResult] = None

    def _advance(self, state: DecisionState) -> None:
        self.state = state
        self.states.append(state)

    def _resolve(self, result: DecisionResult) -> DecisionResult:
        self.result = result
        self._advance(DecisionState.RESOLVED)
        return result

    async def execute(self) -> DecisionResult:
        if self.state is not DecisionState.START:
            raise RuntimeError("decision run has already been executed")
        engine = self.engine
        if self.entry is None:
            return self._resolve(NoAction())

        self._advance(DecisionState.CHECKING_INTRANET)
        if await engine.intranet_probe.probe(engine.intranet_config):
            return self._resolve(Redirect(self.entry.intranet_site, "intranet"))

        self._advance(DecisionState.CHECKING_IPV6)
        if await engine.ipv6_probe.probe(engine.ipv6_config):
            return self._resolve(Redirect(self.entry.ipv6_site, "ipv6"))

        return self._resolve(NoAction())


class DecisionEngine:
    def __init__(
        self,
        intranet_probe,
        ipv6_probe,
        intranet_config: ProbeConfig,
        ipv6_config: ProbeConfig,
        logger=None,
        statistics=None,
    ):
        self.intranet_probe = intranet_probe
        self.ipv6_probe = ipv6_probe
        self.intranet_config = intranet_config
        self.ipv6_config = ipv6_config
        self.logger = logger
        self.statistics = statistics

    def start(self, entry: Optional[RoutingEntry]) -> DecisionRun:
        return DecisionRun(self, entry)

    async def decide(self, entry: Optional[RoutingEntry]) -> DecisionResult:
        return await self.start(entry).execute()

    async def route(self, table, host: str) -> DecisionResult:
        entry = table.find_match(host)
        result = await self.decide(entry)
        self._record(host, entry, result)
        return result

    async def classify(self) -> str:
        if await self.intranet_probe.probe(self.intranet_config):
            return "intranet"
        if await self.ipv6_probe.probe(self.ipv6_config):
            return "ipv6"
        return "none"

    def _record(self, host: str, entry: Optional[RoutingEntry], result: DecisionResult) -> None:
        stats = self.statistics
        if stats:
            stats.increment_runs()
        if entry is None:
            message = f"{host}: not registered, no redirect"
            if stats:
                stats.increment_unmatched()
        elif result.via == "intranet":
            message = f"{host}: intranet detected, redirecting to {result.target_url}"
            if stats:
                stats.increment_intranet_redirects()
        elif result.via == "ipv6":
            message = f"{host}: IPv6 detected, redirecting to {result.target_url}"
            if stats:
                stats.increment_ipv6_redirects()
        else:
            message = f"{host}: neither intranet nor IPv6, staying on current page"
            if stats:
                stats.increment_no_action()
        if self.logger:
            self.logger.log_access(message)
