"""
HTTPS reachability probe for domain availability checking.

Issues a GET for ``/`` on the hostname itself. Any response at all, whatever
its status code, means the domain is in active use. Request errors (name
resolution, TLS, refused connections, hostnames that fail IDNA encoding) and
timeouts both count as an "available" vote. Redirects are not followed and
the body is never read.
"""

import asyncio
import time
from typing import Optional

import httpx

from .config import DEFAULT_HTTP_TIMEOUT_SECONDS
from .enums import ProbeMethod, ProbeState
from .models import ProbeOutcome
from .probe import elapsed_ms, is_simulated_available


class HTTPProbe:
    """Async HTTPS reachability probe."""

    method = ProbeMethod.HTTP

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        simulation_mode: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the HTTP probe.

        Args:
            timeout: Overall request timeout in seconds
            simulation_mode: If True, no real network requests are made
            transport: Optional httpx transport (used by tests)
        """
        self._timeout = timeout
        self._simulation_mode = simulation_mode
        self._transport = transport

    def build_url(self, hostname: str) -> str:
        return f"https://{hostname}/"

    async def probe(self, hostname: str) -> ProbeOutcome:
        """
        Request the hostname's root page and turn the result into a vote.

        - response received: RESOLVED, not available
        - request error: ERRORED, available
        - timeout: TIMED_OUT, available
        """
        start_time = time.perf_counter()

        if self._simulation_mode:
            return self._get_simulated_outcome(hostname, start_time)

        try:
            status_code = await asyncio.wait_for(
                self._fetch_status(self.build_url(hostname)),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            return ProbeOutcome(
                method=self.method,
                state=ProbeState.TIMED_OUT,
                available=True,
                detail=f"HTTPS request timed out after {self._timeout}s",
                duration_ms=elapsed_ms(start_time),
            )
        except (httpx.HTTPError, httpx.InvalidURL, OSError, UnicodeError) as e:
            return ProbeOutcome(
                method=self.method,
                state=ProbeState.ERRORED,
                available=True,
                detail=f"{type(e).__name__}: {e}",
                duration_ms=elapsed_ms(start_time),
            )

        return ProbeOutcome(
            method=self.method,
            state=ProbeState.RESOLVED,
            available=False,
            detail=f"HTTP {status_code}",
            duration_ms=elapsed_ms(start_time),
        )

    async def _fetch_status(self, url: str) -> int:
        """Open the response, keep only its status code, discard the body."""
        async with httpx.AsyncClient(
            verify=True,
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=False,
            transport=self._transport,
        ) as client:
            async with client.stream("GET", url) as response:
                return response.status_code

    def _get_simulated_outcome(self, hostname: str, start_time: float) -> ProbeOutcome:
        if is_simulated_available(hostname):
            return ProbeOutcome(
                method=self.method,
                state=ProbeState.ERRORED,
                available=True,
                detail="[SIMULATED] ConnectError",
                duration_ms=elapsed_ms(start_time),
            )
        return ProbeOutcome(
            method=self.method,
            state=ProbeState.RESOLVED,
            available=False,
            detail="[SIMULATED] HTTP 200",
            duration_ms=elapsed_ms(start_time),
        )
