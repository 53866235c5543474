"""
Probe interface shared by the DNS, WHOIS and HTTP probes.
"""

import time
from abc import abstractmethod
from typing import Protocol, runtime_checkable

from .enums import ProbeMethod
from .models import ProbeOutcome


@runtime_checkable
class Probe(Protocol):
    """Protocol defining the interface for availability probes."""

    method: ProbeMethod

    @abstractmethod
    async def probe(self, hostname: str) -> ProbeOutcome:
        """
        Probe a single hostname.

        Args:
            hostname: Canonical hostname to probe

        Returns:
            ProbeOutcome carrying the probe's execution state and vote
        """
        ...


def elapsed_ms(start_time: float) -> float:
    """Milliseconds elapsed since a ``time.perf_counter()`` reading."""
    return (time.perf_counter() - start_time) * 1000


def is_simulated_available(hostname: str) -> bool:
    """Simulation rule: names whose first label starts with 'available-' are free."""
    return hostname.split(".", 1)[0].startswith("available-")
