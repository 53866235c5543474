"""
Data models for the domain probe system.

This module defines the per-probe outcome record and the terminal
per-domain result returned to callers.
"""

from dataclasses import dataclass, field
from typing import Optional

from .enums import ProbeMethod, ProbeState


DOMAIN_CHECK_FAILED = "Unable to check domain availability"


@dataclass(frozen=True)
class ProbeOutcome:
    """
    Outcome of one probe against one hostname.

    ``available`` is the probe's boolean vote, already collapsed from its
    execution state under that probe's policy.
    """

    method: ProbeMethod
    state: ProbeState
    available: bool
    detail: Optional[str] = None
    duration_ms: float = 0.0

    @classmethod
    def failed(cls, method: ProbeMethod, detail: str, duration_ms: float = 0.0) -> "ProbeOutcome":
        """Outcome for a probe that raised instead of returning."""
        return cls(
            method=method,
            state=ProbeState.ERRORED,
            available=False,
            detail=detail,
            duration_ms=duration_ms,
        )


@dataclass
class DomainResult:
    """Terminal availability record for one hostname."""

    domain: str
    available: bool
    methods: dict[str, bool]
    error: Optional[str] = None
    outcomes: list[ProbeOutcome] = field(default_factory=list, compare=False, repr=False)

    @classmethod
    def failed(cls, domain: str) -> "DomainResult":
        """Result for a domain whose evaluation could not be completed."""
        return cls(
            domain=domain,
            available=False,
            methods={method.value: False for method in ProbeMethod},
            error=DOMAIN_CHECK_FAILED,
        )

    def to_dict(self, include_outcomes: bool = False) -> dict:
        """Convert to the JSON shape returned by the request boundary."""
        data = {
            "domain": self.domain,
            "available": self.available,
            "methods": {
                method.value: self.methods.get(method.value, False)
                for method in ProbeMethod
            },
        }
        if self.error is not None:
            data["error"] = self.error
        if include_outcomes:
            data["outcomes"] = [
                {
                    "method": outcome.method.value,
                    "state": outcome.state.value,
                    "available": outcome.available,
                    "detail": outcome.detail,
                    "duration_ms": round(outcome.duration_ms, 1),
                }
                for outcome in self.outcomes
            ]
        return data
