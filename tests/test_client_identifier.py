"""Tests for client identifier extraction behind proxies."""

import pytest
from starlette.requests import Request

from riddle_gate.core.rate_limit import resolve_client_identifier


def _request(peer: str | None, forwarded_for: str | None = None) -> Request:
    headers = []
    if forwarded_for is not None:
        headers.append((b"x-forwarded-for", forwarded_for.encode()))
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/check",
        "headers": headers,
        "client": (peer, 50000) if peer else None,
    }
    return Request(scope)


def test_depth_zero_uses_peer_and_ignores_header() -> None:
    request = _request("10.0.0.2", "6.6.6.6")

    assert resolve_client_identifier(request, 0) == "10.0.0.2"


@pytest.mark.parametrize(
    "depth, expected",
    [(1, "10.0.0.1"), (2, "1.1.1.1"), (5, "1.1.1.1")],
)
def test_depth_walks_back_the_forwarded_chain(depth: int, expected: str) -> None:
    request = _request("10.0.0.2", "1.1.1.1, 10.0.0.1")

    assert resolve_client_identifier(request, depth) == expected


def test_spoofed_leftmost_entries_are_not_trusted() -> None:
    # Client prepends a fake address; one proxy appends the real one
    request = _request("10.0.0.2", "8.8.8.8, 203.0.113.7")

    assert resolve_client_identifier(request, 1) == "203.0.113.7"


def test_missing_header_falls_back_to_peer() -> None:
    request = _request("10.0.0.2")

    assert resolve_client_identifier(request, 1) == "10.0.0.2"


def test_missing_peer_is_unknown() -> None:
    assert resolve_client_identifier(_request(None), 0) == "unknown"
