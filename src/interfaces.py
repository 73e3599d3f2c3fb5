"""Core interfaces used by the SmartTunnel components."""

from abc import ABC, abstractmethod


class IHttpClient(ABC):
    @abstractmethod
    async def get(self, url: str, timeout: float):
        ...


class IProbe(ABC):
    @abstractmethod
    async def probe(self, config) -> bool:
        ...


class IKeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str, default=None):
        ...

    @abstractmethod
    def set(self, key: str, value) -> None:
        ...


class INavigator(ABC):
    @abstractmethod
    def navigate(self, url: str) -> None:
        ...


class ILogger(ABC):
    @abstractmethod
    def log_access(self, message: str) -> None:
        ...

    @abstractmethod
    def log_error(self, message: str) -> None:
        ...

    @abstractmethod
    def info(self, message: str) -> None:
        ...

    @abstractmethod
    def error(self, message: str) -> None:
        ...


class IStatistics(ABC):
    @abstractmethod
    def increment_runs(self) -> None:
        ...

    @abstractmethod
    def increment_unmatched(self) -> None:
        ...

    @abstractmethod
    def increment_intranet_redirects(self) -> None:
        ...

    @abstractmethod
    def increment_ipv6_redirects(self) -> None:
        ...

    @abstractmethod
    def increment_no_action(self) -> None:
        ...

    @abstractmethod
    def increment_probe_failures(self) -> None:
        ...

    @abstractmethod
    def increment_errors(self) -> None:
        ...

    @abstractmethod
    def get_stats_display(self) -> str:
        ...
