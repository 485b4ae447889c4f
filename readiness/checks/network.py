# ============================================================================
# NETWORK PROBES
# ============================================================================
# STATUS: Probes - HTTP and TCP reachability
# PURPOSE: Generic remote probes for registration by applications
# CREATED: 19 OCT 2026
# ============================================================================
"""
Network Probes

Factories returning async probes for remote dependencies:
- http_probe: Endpoint answers with the expected status
- tcp_probe: Port accepts connections

Status handling for http_probe:
    401 / 403            -> fail ("Authentication required")
    3xx                  -> fail ("Redirects to ...")
    other unexpected     -> fail ("HTTP <code>")
    missing header       -> fail ("Missing security headers: ...")
    not-found marker     -> fail ("200 response contains ...")
    over max_latency_ms  -> fail ("Slow response: ...")
    connect/timeout      -> fail
    other client errors  -> raised (ERROR result)
    otherwise            -> pass

Example:
    registry.add("api", http_probe("https://example.org/api/health"), timeout_seconds=5)

    # Post-deploy page check: security headers, soft 404s, slow responses
    registry.add(
        "home",
        http_probe(
            "https://example.org/",
            required_headers=SECURITY_HEADERS,
            not_found_markers=NOT_FOUND_MARKERS,
            max_latency_ms=2000,
        ),
        severity="WARNING",
    )
"""

import asyncio
import time
from typing import Awaitable, Callable, Iterable, Optional

import httpx

from readiness.core import ProbeOutcome

USER_AGENT = "launch-readiness-probe/1.0"

SECURITY_HEADERS = (
    "x-frame-options",
    "x-content-type-options",
    "strict-transport-security",
)

NOT_FOUND_MARKERS = ("404", "Not Found")


def http_probe(
    url: str,
    expected_status: int = 200,
    method: str = "GET",
    timeout_seconds: float = 10.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    required_headers: Iterable[str] = (),
    max_latency_ms: Optional[float] = None,
    not_found_markers: Iterable[str] = (),
) -> Callable[[], Awaitable[ProbeOutcome]]:
    """
    Probe that requests url and compares the response status.

    Redirects are not followed, so a redirect is reported as such.
    A response with the expected status can still fail when a required
    header is missing, the body contains a not-found marker, or the
    response took longer than max_latency_ms.

    Args:
        url: Endpoint to request
        expected_status: Status code that counts as a pass
        method: HTTP method
        timeout_seconds: httpx client timeout
        transport: Optional httpx transport (tests, proxies)
        required_headers: Header names that must be present
            (e.g. SECURITY_HEADERS)
        max_latency_ms: Slowest acceptable response
        not_found_markers: Body text that marks a soft 404
            (e.g. NOT_FOUND_MARKERS)
    """
    headers_needed = [h.lower() for h in required_headers]
    markers = list(not_found_markers)

    async def probe() -> ProbeOutcome:
        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=timeout_seconds,
                follow_redirects=False,
                headers={"User-Agent": USER_AGENT},
                transport=transport,
            ) as client:
                response = await client.request(method, url)

        except httpx.TimeoutException:
            return ProbeOutcome.fail(f"Request to {url} timed out", url=url)

        except httpx.ConnectError as e:
            return ProbeOutcome.fail(f"Cannot connect to {url}: {e}", url=url)

        latency_ms = round((time.perf_counter() - start) * 1000, 1)
        status_code = response.status_code
        details = {"url": url, "status_code": status_code, "latency_ms": latency_ms}

        if status_code in (401, 403) and status_code != expected_status:
            return ProbeOutcome.fail(
                f"Authentication required ({status_code})", **details
            )

        if 300 <= status_code < 400 and status_code != expected_status:
            location = response.headers.get("location", "unknown")
            return ProbeOutcome.fail(f"Redirects to {location}", **details)

        if status_code != expected_status:
            return ProbeOutcome.fail(f"HTTP {status_code}", **details)

        missing = [h for h in headers_needed if h not in response.headers]
        if missing:
            return ProbeOutcome.fail(
                f"Missing security headers: {', '.join(missing)}",
                missing_headers=missing,
                **details,
            )

        found = [m for m in markers if m in response.text]
        if found:
            return ProbeOutcome.fail(
                f"{status_code} response contains {found[0]!r}",
                markers=found,
                **details,
            )

        if max_latency_ms is not None and latency_ms > max_latency_ms:
            return ProbeOutcome.fail(
                f"Slow response: {latency_ms}ms exceeds {max_latency_ms}ms",
                **details,
            )

        return ProbeOutcome.ok(f"{status_code} OK", **details)

    return probe


def tcp_probe(
    host: str,
    port: int,
) -> Callable[[], Awaitable[ProbeOutcome]]:
    """
    Probe that opens (and immediately closes) a TCP connection.

    The check's own timeout bounds the connect attempt.
    """

    async def probe() -> ProbeOutcome:
        start = time.perf_counter()
        try:
            _, writer = await asyncio.open_connection(host, port)
        except OSError as e:
            return ProbeOutcome.fail(
                f"Cannot connect to {host}:{port}: {e}", host=host, port=port
            )

        latency_ms = round((time.perf_counter() - start) * 1000, 1)
        writer.close()
        await writer.wait_closed()

        return ProbeOutcome.ok(
            f"Connected to {host}:{port}",
            host=host,
            port=port,
            latency_ms=latency_ms,
        )

    return probe


__all__ = [
    "SECURITY_HEADERS",
    "NOT_FOUND_MARKERS",
    "http_probe",
    "tcp_probe",
]
