"""
WHOIS reachability probe for domain availability checking.

This probe opens a plain TCP connection to a fixed WHOIS endpoint and
closes it again. It never sends a query and never reads a response, so its
signal is the same for every hostname in a batch: it is a coarse liveness
check of the WHOIS service, not a per-domain lookup.

Vote policy:
- connection established: not available
- connection timed out: not available
- connection failed immediately (refused, unreachable, ...): available
"""

import asyncio
import time

from .config import DEFAULT_WHOIS_TIMEOUT_SECONDS, WHOIS_HOST, WHOIS_PORT
from .enums import ProbeMethod, ProbeState
from .models import ProbeOutcome
from .probe import elapsed_ms


class WHOISProbe:
    """TCP reachability probe against the WHOIS endpoint."""

    method = ProbeMethod.WHOIS

    def __init__(
        self,
        timeout: float = DEFAULT_WHOIS_TIMEOUT_SECONDS,
        host: str = WHOIS_HOST,
        port: int = WHOIS_PORT,
        simulation_mode: bool = False,
    ) -> None:
        """
        Initialize the WHOIS probe.

        Args:
            timeout: Connect timeout in seconds
            host: WHOIS endpoint hostname
            port: WHOIS endpoint port
            simulation_mode: If True, no real connections are opened
        """
        self._timeout = timeout
        self._host = host
        self._port = port
        self._simulation_mode = simulation_mode

    @property
    def endpoint(self) -> str:
        return f"{self._host}:{self._port}"

    async def probe(self, hostname: str) -> ProbeOutcome:
        """
        Test connectivity to the WHOIS endpoint.

        The hostname only labels the outcome; the endpoint is fixed.
        """
        start_time = time.perf_counter()

        if self._simulation_mode:
            return ProbeOutcome(
                method=self.method,
                state=ProbeState.RESOLVED,
                available=False,
                detail=f"[SIMULATED] connected to {self.endpoint}",
                duration_ms=elapsed_ms(start_time),
            )

        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(self._host, self._port),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, TimeoutError):
            return ProbeOutcome(
                method=self.method,
                state=ProbeState.TIMED_OUT,
                available=False,
                detail=f"Connection to {self.endpoint} timed out after {self._timeout}s",
                duration_ms=elapsed_ms(start_time),
            )
        except OSError as e:
            return ProbeOutcome(
                method=self.method,
                state=ProbeState.ERRORED,
                available=True,
                detail=f"Socket error: {e}",
                duration_ms=elapsed_ms(start_time),
            )

        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            # The connection was already established; a failing close does not change the vote
            pass

        return ProbeOutcome(
            method=self.method,
            state=ProbeState.RESOLVED,
            available=False,
            detail=f"Connected to {self.endpoint}",
            duration_ms=elapsed_ms(start_time),
        )
