"""
Rate Limit Suite
Looks for any sign of rate limiting on a short sequential burst

Sends up to 10 GETs (bounded by active.maxRequestsPerSuite) one after
another to the first selected endpoint. No 429 and no rate-limit headers on
any response suggests rate limiting is missing or invisible to clients.
"""

from typing import List

from sentinel.core.model import Finding, Location

from .base import Suite

MAX_BURST = 10

RATE_LIMIT_HEADERS = (
    "retry-after",
    "x-ratelimit-limit",
    "x-ratelimit-remaining",
    "ratelimit-limit",
    "ratelimit-remaining",
    "ratelimit-policy",
)


class RateLimitSuite(Suite):
    name = "ratelimit"
    description = "Sends a short sequential burst and looks for 429s or rate-limit headers."
    active = True

    async def run(self, context) -> List[Finding]:
        endpoint = context.endpoints[0]
        burst = min(MAX_BURST, max(1, context.config.active.max_requests_per_suite))

        statuses = []
        signal_headers = {}
        url = ""
        for _ in range(burst):
            response = await context.http.request("GET", path=endpoint.path)
            url = response.url
            statuses.append(response.status_code)
            for header in RATE_LIMIT_HEADERS:
                if header in response.headers:
                    signal_headers.setdefault(header, response.headers[header])
            if response.status_code == 429:
                context.logger.debug(f"ratelimit: 429 after {len(statuses)} request(s)")
                return []

        if signal_headers:
            return []

        return [Finding(
            id="ratelimit.no_rate_limit_signals",
            title="No rate limiting observed",
            severity="low",
            description=(
                f"{burst} sequential requests to {endpoint.path} returned no 429 response and no "
                "rate-limit headers. Rate limiting may be missing or not exposed to clients."
            ),
            remediation=(
                "Enforce per-client rate limits and advertise them (429 with Retry-After, "
                "RateLimit-* headers)."
            ),
            evidence={"url": url, "requests": burst, "statuses": statuses},
            location=Location(method="GET", path=endpoint.path, url=url),
            suite=self.name,
            tags=("ratelimit",),
        )]
