"""
Property-based tests for the availability prober.

Probes are replaced by in-memory fakes so batches run without network
access. Covers order preservation, duplicate handling, probe isolation,
domain-level isolation and concurrency.
"""

import asyncio
import string
from io import StringIO
from typing import Optional

from hypothesis import given, settings
from hypothesis import strategies as st

from domain_probe.audit_logger import AuditLogger
from domain_probe.enums import LogLevel, ProbeMethod, ProbeState
from domain_probe.models import DOMAIN_CHECK_FAILED, DomainResult, ProbeOutcome
from domain_probe.prober import AvailabilityProber


class FakeProbe:
    """Probe returning a fixed vote, optionally per hostname."""

    def __init__(
        self,
        method: ProbeMethod,
        available: bool = False,
        per_host: Optional[dict[str, bool]] = None,
        delay: float = 0.0,
    ) -> None:
        self.method = method
        self._available = available
        self._per_host = per_host or {}
        self._delay = delay
        self.calls: list[str] = []

    async def probe(self, hostname: str) -> ProbeOutcome:
        self.calls.append(hostname)
        if self._delay:
            await asyncio.sleep(self._delay)
        return ProbeOutcome(
            method=self.method,
            state=ProbeState.RESOLVED,
            available=self._per_host.get(hostname, self._available),
        )


class RaisingProbe:
    """Probe that always raises."""

    def __init__(self, method: ProbeMethod, fail_for: Optional[set[str]] = None) -> None:
        self.method = method
        self._fail_for = fail_for

    async def probe(self, hostname: str) -> ProbeOutcome:
        if self._fail_for is None or hostname in self._fail_for:
            raise RuntimeError("probe exploded")
        return ProbeOutcome(method=self.method, state=ProbeState.RESOLVED, available=True)


def build_prober(dns, whois, http, logger=None) -> AvailabilityProber:
    return AvailabilityProber(dns_probe=dns, whois_probe=whois, http_probe=http, logger=logger)


hostname_strategy = st.lists(
    st.text(alphabet=string.ascii_lowercase + string.digits, min_size=1, max_size=12),
    min_size=1,
    max_size=3,
).map(lambda labels: ".".join(labels) + ".com")


class TestOrderPreservation:
    """Results come back one per input, in input order."""

    def test_duplicates_are_probed_independently(self) -> None:
        dns = FakeProbe(ProbeMethod.DNS, per_host={"a.com": True})
        whois = FakeProbe(ProbeMethod.WHOIS)
        http = FakeProbe(ProbeMethod.HTTP, per_host={"a.com": True})
        prober = build_prober(dns, whois, http)

        results = asyncio.run(prober.probe_all(["b.com", "a.com", "b.com"]))

        assert [r.domain for r in results] == ["b.com", "a.com", "b.com"]
        assert dns.calls.count("b.com") == 2
        assert whois.calls.count("b.com") == 2
        assert http.calls.count("b.com") == 2
        assert results[1].available is True
        # Duplicate results are separate objects; their verdicts may differ on a live network
        assert results[0] is not results[2]

    @given(hostnames=st.lists(hostname_strategy, max_size=15))
    @settings(max_examples=50, deadline=None)
    def test_output_matches_input_order(self, hostnames: list[str]) -> None:
        dns = FakeProbe(ProbeMethod.DNS, available=True)
        whois = FakeProbe(ProbeMethod.WHOIS)
        http = FakeProbe(ProbeMethod.HTTP)
        prober = build_prober(dns, whois, http)

        results = asyncio.run(prober.probe_all(hostnames))

        assert [r.domain for r in results] == hostnames

    def test_out_of_order_completion_is_reassembled(self) -> None:
        """Slow hostnames finishing last still land at their input position."""

        class DelayedProbe(FakeProbe):
            async def probe(self, hostname: str) -> ProbeOutcome:
                await asyncio.sleep(0.05 if hostname == "slow.com" else 0.0)
                return await super().probe(hostname)

        prober = build_prober(
            DelayedProbe(ProbeMethod.DNS),
            FakeProbe(ProbeMethod.WHOIS),
            FakeProbe(ProbeMethod.HTTP),
        )

        results = asyncio.run(prober.probe_all(["slow.com", "fast.com"]))

        assert [r.domain for r in results] == ["slow.com", "fast.com"]

    def test_empty_batch(self) -> None:
        prober = build_prober(
            FakeProbe(ProbeMethod.DNS),
            FakeProbe(ProbeMethod.WHOIS),
            FakeProbe(ProbeMethod.HTTP),
        )
        assert asyncio.run(prober.probe_all([])) == []


class TestProbeIsolation:
    """A failing probe becomes a False vote and affects nothing else."""

    def test_raising_probe_votes_false_and_siblings_are_recorded(self) -> None:
        prober = build_prober(
            RaisingProbe(ProbeMethod.DNS),
            FakeProbe(ProbeMethod.WHOIS, available=True),
            FakeProbe(ProbeMethod.HTTP, available=True),
        )

        [result] = asyncio.run(prober.probe_all(["example.com"]))

        assert result.methods == {"dns": False, "whois": True, "http": True}
        assert result.available is True
        assert result.error is None

        dns_outcome = result.outcomes[0]
        assert dns_outcome.state == ProbeState.ERRORED
        assert "probe exploded" in dns_outcome.detail

    def test_raising_probe_does_not_affect_other_domains(self) -> None:
        prober = build_prober(
            FakeProbe(ProbeMethod.DNS, available=True),
            FakeProbe(ProbeMethod.WHOIS, available=True),
            RaisingProbe(ProbeMethod.HTTP, fail_for={"bad.com"}),
        )

        results = asyncio.run(prober.probe_all(["bad.com", "good.com"]))

        assert results[0].methods == {"dns": True, "whois": True, "http": False}
        assert results[1].methods == {"dns": True, "whois": True, "http": True}
        assert all(r.error is None for r in results)

    @given(failing=st.sampled_from(list(ProbeMethod)))
    @settings(max_examples=10, deadline=None)
    def test_any_single_failing_probe_is_isolated(self, failing: ProbeMethod) -> None:
        probes = {
            method: RaisingProbe(method) if method == failing else FakeProbe(method, available=True)
            for method in ProbeMethod
        }
        prober = build_prober(probes[ProbeMethod.DNS], probes[ProbeMethod.WHOIS], probes[ProbeMethod.HTTP])

        [result] = asyncio.run(prober.probe_all(["example.com"]))

        for method in ProbeMethod:
            assert result.methods[method.value] is (method != failing)
        assert result.available is True

    def test_all_probes_failing_is_not_available(self) -> None:
        prober = build_prober(
            RaisingProbe(ProbeMethod.DNS),
            RaisingProbe(ProbeMethod.WHOIS),
            RaisingProbe(ProbeMethod.HTTP),
        )

        [result] = asyncio.run(prober.probe_all(["example.com"]))

        assert result.available is False
        assert result.methods == {"dns": False, "whois": False, "http": False}
        assert result.error is None


class TestDomainIsolation:
    """A failure outside the probes produces an error result for that domain only."""

    def test_evaluation_failure_yields_error_result(self) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="json", output_stream=stream)
        prober = build_prober(
            FakeProbe(ProbeMethod.DNS, available=True),
            FakeProbe(ProbeMethod.WHOIS, available=True),
            FakeProbe(ProbeMethod.HTTP, available=True),
            logger=logger,
        )

        original = prober.voting_engine.build_domain_result

        def flaky_build(domain, outcomes):
            if domain == "broken.com":
                raise ValueError("unexpected")
            return original(domain, outcomes)

        prober.voting_engine.build_domain_result = flaky_build

        results = asyncio.run(prober.probe_all(["ok.com", "broken.com", "ok2.com"]))

        assert results[1] == DomainResult(
            domain="broken.com",
            available=False,
            methods={"dns": False, "whois": False, "http": False},
            error=DOMAIN_CHECK_FAILED,
        )
        assert results[0].available is True and results[0].error is None
        assert results[2].available is True and results[2].error is None

        errors = [e for e in logger.entries if e.level == LogLevel.ERROR]
        assert len(errors) == 1
        assert errors[0].data["domain"] == "broken.com"
        assert errors[0].data["error_type"] == "ValueError"

    def test_failed_result_serializes_error(self) -> None:
        data = DomainResult.failed("broken.com").to_dict()

        assert data == {
            "domain": "broken.com",
            "available": False,
            "methods": {"dns": False, "whois": False, "http": False},
            "error": "Unable to check domain availability",
        }


class TestConcurrency:
    """Domains and probes run concurrently rather than one after another."""

    def test_batch_runs_concurrently(self) -> None:
        delay = 0.2
        prober = build_prober(
            FakeProbe(ProbeMethod.DNS, delay=delay),
            FakeProbe(ProbeMethod.WHOIS, delay=delay),
            FakeProbe(ProbeMethod.HTTP, delay=delay),
        )

        async def timed_batch() -> float:
            loop = asyncio.get_running_loop()
            start = loop.time()
            await prober.probe_all([f"d{i}.com" for i in range(10)])
            return loop.time() - start

        elapsed = asyncio.run(timed_batch())

        # 30 sequential probes would take 6s
        assert elapsed < delay * 5


class TestEndToEndScenario:
    """A domain in use on every signal is reported as not available."""

    def test_in_use_domain(self) -> None:
        prober = build_prober(
            FakeProbe(ProbeMethod.DNS, available=False),
            FakeProbe(ProbeMethod.WHOIS, available=False),
            FakeProbe(ProbeMethod.HTTP, available=False),
        )

        results = asyncio.run(prober.probe_all(["example.com"]))

        assert [r.to_dict() for r in results] == [
            {
                "domain": "example.com",
                "available": False,
                "methods": {"dns": False, "whois": False, "http": False},
            }
        ]


class TestLogging:
    """Batch progress is logged through the audit logger."""

    def test_batch_start_and_completion_are_logged(self) -> None:
        logger = AuditLogger(output_format="text", output_stream=StringIO(), min_level=LogLevel.DEBUG)
        prober = build_prober(
            FakeProbe(ProbeMethod.DNS, available=True),
            FakeProbe(ProbeMethod.WHOIS),
            FakeProbe(ProbeMethod.HTTP, available=True),
            logger=logger,
        )

        asyncio.run(prober.probe_all(["a.com", "b.com"]))

        messages = [e.message for e in logger.entries]
        assert messages[0] == "Probing 2 domain(s)"
        assert messages[-1] == "Batch completed"
        assert logger.entries[-1].data["available"] == 2
        # One debug entry per probe per domain
        assert sum(1 for e in logger.entries if e.level == LogLevel.DEBUG) == 6
