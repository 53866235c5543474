"""
DNS probe for domain availability checking.

Resolves the hostname's addresses (A and AAAA) through dnspython's async
resolver. Only an explicit NXDOMAIN answer counts as an "available" vote;
a successful resolution, a timeout and every other resolver error count
as "in use".
"""

import time
from typing import Optional

import dns.asyncresolver
import dns.exception
import dns.resolver

from .enums import ProbeMethod, ProbeState
from .models import ProbeOutcome
from .probe import elapsed_ms, is_simulated_available


class DNSProbe:
    """Async DNS resolution probe."""

    method = ProbeMethod.DNS

    def __init__(
        self,
        timeout: Optional[float] = None,
        simulation_mode: bool = False,
    ) -> None:
        """
        Initialize the DNS probe.

        Args:
            timeout: Resolution lifetime in seconds; None keeps the resolver default
            simulation_mode: If True, no real DNS queries are made
        """
        self._timeout = timeout
        self._simulation_mode = simulation_mode

    async def probe(self, hostname: str) -> ProbeOutcome:
        """
        Resolve the hostname and turn the answer into a vote.

        - resolved: RESOLVED, not available
        - NXDOMAIN: RESOLVED, available
        - timeout: TIMED_OUT, not available
        - any other resolver error: ERRORED, not available
        """
        start_time = time.perf_counter()

        if self._simulation_mode:
            return self._get_simulated_outcome(hostname, start_time)

        try:
            resolver = self._create_resolver()
            await resolver.resolve_name(hostname)
        except dns.resolver.NXDOMAIN:
            return ProbeOutcome(
                method=self.method,
                state=ProbeState.RESOLVED,
                available=True,
                detail="NXDOMAIN",
                duration_ms=elapsed_ms(start_time),
            )
        except dns.exception.Timeout as e:
            return ProbeOutcome(
                method=self.method,
                state=ProbeState.TIMED_OUT,
                available=False,
                detail=f"DNS resolution timed out: {e}",
                duration_ms=elapsed_ms(start_time),
            )
        except dns.exception.DNSException as e:
            return ProbeOutcome(
                method=self.method,
                state=ProbeState.ERRORED,
                available=False,
                detail=f"{type(e).__name__}: {e}",
                duration_ms=elapsed_ms(start_time),
            )

        return ProbeOutcome(
            method=self.method,
            state=ProbeState.RESOLVED,
            available=False,
            detail="resolved",
            duration_ms=elapsed_ms(start_time),
        )

    def _create_resolver(self) -> dns.asyncresolver.Resolver:
        resolver = dns.asyncresolver.Resolver()
        if self._timeout is not None:
            resolver.lifetime = self._timeout
        return resolver

    def _get_simulated_outcome(self, hostname: str, start_time: float) -> ProbeOutcome:
        available = is_simulated_available(hostname)
        return ProbeOutcome(
            method=self.method,
            state=ProbeState.RESOLVED,
            available=available,
            detail="[SIMULATED] NXDOMAIN" if available else "[SIMULATED] resolved",
            duration_ms=elapsed_ms(start_time),
        )
