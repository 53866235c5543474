"""
Availability Prober for the domain probe system.

This module fans a batch of canonical hostnames out to the three probes
and reassembles the verdicts in input order:
- every hostname is evaluated concurrently with every other hostname
- within a hostname, the DNS, WHOIS and HTTP probes run concurrently
- a probe that raises is downgraded to a "not available" vote
- a hostname whose evaluation raises gets an error result; its siblings
  are unaffected

No state is kept between batches.
"""

import asyncio
import time
from typing import Iterable, Optional

from .audit_logger import AuditLogger
from .config import SystemConfig
from .dns_probe import DNSProbe
from .enums import LogLevel
from .http_probe import HTTPProbe
from .models import DomainResult, ProbeOutcome
from .probe import Probe, elapsed_ms
from .voting import VotingEngine
from .whois_probe import WHOISProbe


class AvailabilityProber:
    """
    Concurrent multi-signal availability prober.

    Probe implementations are injected; any probe left out is built from
    the system configuration.
    """

    def __init__(
        self,
        config: Optional[SystemConfig] = None,
        dns_probe: Optional[Probe] = None,
        whois_probe: Optional[Probe] = None,
        http_probe: Optional[Probe] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Initialize the prober.

        Args:
            config: System configuration (defaults are used if omitted)
            dns_probe: Optional DNS probe implementation
            whois_probe: Optional WHOIS reachability probe implementation
            http_probe: Optional HTTP reachability probe implementation
            logger: Optional audit logger
        """
        self._config = config or SystemConfig()
        self._logger = logger
        self._voting_engine = VotingEngine()

        probe_config = self._config.probes
        simulation_mode = self._config.simulation_mode

        self._probes: tuple[Probe, ...] = (
            dns_probe or DNSProbe(
                timeout=probe_config.dns_timeout_seconds,
                simulation_mode=simulation_mode,
            ),
            whois_probe or WHOISProbe(
                timeout=probe_config.whois_timeout_seconds,
                simulation_mode=simulation_mode,
            ),
            http_probe or HTTPProbe(
                timeout=probe_config.http_timeout_seconds,
                simulation_mode=simulation_mode,
            ),
        )

    async def probe_all(self, hostnames: Iterable[str]) -> list[DomainResult]:
        """
        Evaluate a batch of canonical hostnames.

        Args:
            hostnames: Ordered hostnames; duplicates are probed independently

        Returns:
            One DomainResult per hostname, in input order
        """
        hostnames = list(hostnames)
        start_time = time.perf_counter()

        self._log(
            LogLevel.INFO,
            f"Probing {len(hostnames)} domain(s)",
            {"domains": hostnames},
        )

        results = await asyncio.gather(
            *(self.check_domain(hostname) for hostname in hostnames)
        )

        self._log(
            LogLevel.INFO,
            "Batch completed",
            {
                "total": len(results),
                "available": sum(1 for r in results if r.available),
                "failed": sum(1 for r in results if r.error is not None),
                "duration_ms": round(elapsed_ms(start_time), 1),
            },
        )

        return list(results)

    async def check_domain(self, hostname: str) -> DomainResult:
        """
        Evaluate a single hostname.

        Never raises: a failure anywhere in the evaluation yields an error
        result with every method False.
        """
        try:
            return await self._evaluate(hostname)
        except Exception as e:
            if self._logger:
                self._logger.log_error(
                    "AvailabilityProber",
                    f"Domain evaluation failed for {hostname}",
                    error=e,
                    additional_data={"domain": hostname},
                )
            return DomainResult.failed(hostname)

    async def _evaluate(self, hostname: str) -> DomainResult:
        outcomes = await asyncio.gather(
            *(self._run_probe(probe, hostname) for probe in self._probes)
        )

        for outcome in outcomes:
            self._log(
                LogLevel.DEBUG,
                f"{outcome.method.value} probe {outcome.state.value} for {hostname}",
                {
                    "domain": hostname,
                    "available": outcome.available,
                    "detail": outcome.detail,
                    "duration_ms": round(outcome.duration_ms, 1),
                },
            )

        return self._voting_engine.build_domain_result(hostname, list(outcomes))

    async def _run_probe(self, probe: Probe, hostname: str) -> ProbeOutcome:
        """Run one probe; anything it raises becomes an ERRORED, not-available outcome."""
        start_time = time.perf_counter()
        try:
            return await probe.probe(hostname)
        except Exception as e:
            return ProbeOutcome.failed(
                probe.method,
                f"{type(e).__name__}: {e}",
                duration_ms=elapsed_ms(start_time),
            )

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "AvailabilityProber", message, data)

    @property
    def probes(self) -> tuple[Probe, ...]:
        """The DNS, WHOIS and HTTP probes, in that order."""
        return self._probes

    @property
    def voting_engine(self) -> VotingEngine:
        return self._voting_engine

    @property
    def config(self) -> SystemConfig:
        return self._config
