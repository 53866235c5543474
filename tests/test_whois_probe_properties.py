"""
Tests for the WHOIS reachability probe vote policy.

Connection attempts are patched so the timeout/error asymmetry can be
checked without network access: a timeout votes "in use", an immediate
connection error votes "available".
"""

import asyncio
import socket
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from domain_probe.config import WHOIS_HOST, WHOIS_PORT
from domain_probe.enums import ProbeMethod, ProbeState
from domain_probe.whois_probe import WHOISProbe


def connected_streams():
    writer = MagicMock()
    writer.wait_closed = AsyncMock()
    return MagicMock(), writer


class TestWHOISProbePolicy:
    """Connected and timed out vote False, connection errors vote True."""

    def test_connection_means_in_use(self) -> None:
        reader, writer = connected_streams()
        with patch("asyncio.open_connection", AsyncMock(return_value=(reader, writer))) as connect:
            outcome = asyncio.run(WHOISProbe().probe("example.com"))

        connect.assert_awaited_once_with(WHOIS_HOST, WHOIS_PORT)
        writer.close.assert_called_once()
        assert outcome.method == ProbeMethod.WHOIS
        assert outcome.state == ProbeState.RESOLVED
        assert outcome.available is False

    def test_timeout_means_in_use(self) -> None:
        async def never_connects(host, port):
            await asyncio.sleep(10)

        with patch("asyncio.open_connection", never_connects):
            outcome = asyncio.run(WHOISProbe(timeout=0.05).probe("example.com"))

        assert outcome.state == ProbeState.TIMED_OUT
        assert outcome.available is False

    def test_os_level_timeout_means_in_use(self) -> None:
        with patch("asyncio.open_connection", AsyncMock(side_effect=TimeoutError("ETIMEDOUT"))):
            outcome = asyncio.run(WHOISProbe().probe("example.com"))

        assert outcome.state == ProbeState.TIMED_OUT
        assert outcome.available is False

    @pytest.mark.parametrize(
        "error",
        [
            ConnectionRefusedError("refused"),
            OSError(101, "Network is unreachable"),
            socket.gaierror(-2, "Name or service not known"),
        ],
    )
    def test_connection_error_means_available(self, error: OSError) -> None:
        with patch("asyncio.open_connection", AsyncMock(side_effect=error)):
            outcome = asyncio.run(WHOISProbe().probe("example.com"))

        assert outcome.state == ProbeState.ERRORED
        assert outcome.available is True

    def test_failing_close_keeps_connected_vote(self) -> None:
        reader, writer = connected_streams()
        writer.wait_closed = AsyncMock(side_effect=ConnectionResetError())
        with patch("asyncio.open_connection", AsyncMock(return_value=(reader, writer))):
            outcome = asyncio.run(WHOISProbe().probe("example.com"))

        assert outcome.state == ProbeState.RESOLVED
        assert outcome.available is False


class TestWHOISProbeEndpoint:
    """The endpoint is fixed; the probed hostname never reaches the socket."""

    @given(hostname=st.sampled_from(["example.com", "available-x.net", "a.b.c.org"]))
    @settings(max_examples=10, deadline=None)
    def test_same_endpoint_for_every_hostname(self, hostname: str) -> None:
        reader, writer = connected_streams()
        with patch("asyncio.open_connection", AsyncMock(return_value=(reader, writer))) as connect:
            asyncio.run(WHOISProbe().probe(hostname))

        connect.assert_awaited_once_with(WHOIS_HOST, WHOIS_PORT)
        writer.write.assert_not_called()

    def test_default_endpoint(self) -> None:
        assert WHOISProbe().endpoint == "whois.internic.net:43"

    def test_simulation_makes_no_connections(self) -> None:
        with patch("asyncio.open_connection") as connect:
            outcome = asyncio.run(WHOISProbe(simulation_mode=True).probe("example.com"))

        connect.assert_not_called()
        assert outcome.state == ProbeState.RESOLVED
        assert outcome.available is False
