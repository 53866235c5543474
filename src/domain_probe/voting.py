"""
Voting engine for domain availability determination.

Combines the three probe votes (DNS, WHOIS, HTTP) into one verdict by
simple majority: a domain is available when at least two probes say so.
With exactly three voters a tie cannot happen.
"""

from typing import Iterable, Mapping

from .enums import ProbeMethod
from .models import DomainResult, ProbeOutcome


MAJORITY_THRESHOLD = 2


class VotingEngine:
    """Majority vote over the probe outcomes of one hostname."""

    def evaluate(self, methods: Mapping[str, bool]) -> bool:
        """
        Decide availability from the per-method votes.

        Args:
            methods: Mapping of method name to its "available" vote

        Returns:
            True if at least two methods voted available
        """
        return count_available(methods) >= MAJORITY_THRESHOLD

    def collect_methods(self, outcomes: Iterable[ProbeOutcome]) -> dict[str, bool]:
        """
        Build the ``methods`` mapping from probe outcomes.

        Methods without an outcome vote False.
        """
        methods = {method.value: False for method in ProbeMethod}
        for outcome in outcomes:
            methods[outcome.method.value] = outcome.available
        return methods

    def build_domain_result(
        self,
        domain: str,
        outcomes: list[ProbeOutcome],
    ) -> DomainResult:
        """
        Build the terminal result for a hostname.

        ``available`` is derived from ``methods`` and nothing else.
        """
        methods = self.collect_methods(outcomes)
        return DomainResult(
            domain=domain,
            available=self.evaluate(methods),
            methods=methods,
            error=None,
            outcomes=list(outcomes),
        )


def count_available(methods: Mapping[str, bool]) -> int:
    """Number of methods that voted available."""
    return sum(1 for vote in methods.values() if vote)
