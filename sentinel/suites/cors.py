"""
CORS Suite
Basic CORS misconfiguration checks on the base endpoint
"""

from typing import List

from sentinel.core.model import Finding, Location

from .base import Suite

# Never a legitimate origin of any target (.invalid is reserved, RFC 2606)
PROBE_ORIGIN = "https://sentinel.invalid"


class CorsSuite(Suite):
    name = "cors"
    description = "Performs basic CORS misconfiguration checks on the base endpoint."

    async def run(self, context) -> List[Finding]:
        findings = []
        response = await context.http.request("GET", path="/", headers={"origin": PROBE_ORIGIN})

        acao = response.headers.get("access-control-allow-origin")
        acc = response.headers.get("access-control-allow-credentials")
        location = Location(method="GET", path="/", url=response.url)

        if acao == "*" and acc == "true":
            findings.append(Finding(
                id="cors.wildcard_with_credentials",
                title="CORS allows credentials with wildcard origin",
                severity="high",
                description="Access-Control-Allow-Origin is '*' while Access-Control-Allow-Credentials is 'true'.",
                remediation="Do not combine a wildcard ACAO with credentials. Reflect only trusted origins.",
                evidence={"url": response.url, "acao": acao, "acc": acc},
                location=location,
                suite=self.name,
                tags=("cors",),
            ))

        # Reflection check is independent of the wildcard check
        if acao == PROBE_ORIGIN:
            findings.append(Finding(
                id="cors.origin_reflection",
                title="CORS reflects arbitrary Origin",
                severity="medium",
                description="Server reflected the Origin header value in Access-Control-Allow-Origin.",
                remediation="Validate Origin against an allowlist; avoid reflecting arbitrary origins.",
                evidence={"url": response.url, "origin": PROBE_ORIGIN, "acao": acao, "acc": acc},
                location=location,
                suite=self.name,
                tags=("cors",),
            ))

        return findings
