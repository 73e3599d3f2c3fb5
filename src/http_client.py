"""Blocking urllib fetches driven from the event loop."""

import asyncio
import http.client
import ssl
from concurrent.futures import ThreadPoolExecutor
from typing import Optional
from urllib.error import HTTPError
from urllib.request import Request, urlopen

from constants import PROBE_MAX_BODY, __version__
from interfaces import IHttpClient


class TransportError(OSError):
    pass


class HttpResponse:
    __slots__ = ("status", "body")

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body


class UrllibHttpClient(IHttpClient):
    def __init__(self, verify_tls: bool = True):
        self.verify_tls = verify_tls
        self.user_agent = f"SmartTunnel/{__version__}"

    def _context(self) -> Optional[ssl.SSLContext]:
        if self.verify_tls:
            return None
        return ssl._create_unverified_context()

    def _fetch(self, url: str, timeout: float) -> HttpResponse:
        req = Request(url, headers={"User-Agent": self.user_agent, "Cache-Control": "no-cache"})
        try:
            with urlopen(req, timeout=timeout, context=self._context()) as resp:
                raw = resp.read(PROBE_MAX_BODY)
                return HttpResponse(resp.status, raw.decode("utf-8", "ignore"))
        except HTTPError as e:
            try:
                raw = e.read(PROBE_MAX_BODY) or b""
            except Exception:
                raw = b""
            return HttpResponse(e.code, raw.decode("utf-8", "ignore"))

    async def get(self, url: str, timeout: float) -> HttpResponse:
        # A timed-out urlopen cannot be interrupted; its worker is abandoned
        # and ends on its own socket timeout. The per-call executor keeps it
        # out of the loop's default executor, which is joined at loop shutdown.
        loop = asyncio.get_running_loop()
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="smarttunnel-fetch")
        try:
            return await asyncio.wait_for(loop.run_in_executor(executor, self._fetch, url, timeout), timeout=timeout)
        except asyncio.TimeoutError:
            raise TransportError(f"timed out after {timeout}s: {url}") from None
        except (OSError, ValueError, http.client.HTTPException) as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e
        finally:
            executor.shutdown(wait=False)
