"""
Security Headers Suite
Checks selected endpoints for common HTTP security response headers

Passive: one GET per selected endpoint (capped by active.maxRequestsPerSuite).
Missing headers are aggregated across endpoints into a single finding per
rule, with the affected endpoints listed in the evidence. Header values are
not validated (e.g. no CSP parsing).
"""

from typing import Any, Dict, List

from sentinel.core.model import Finding

from .base import Suite


# Security headers rule table
SECURITY_HEADERS = {
    "strict-transport-security": {
        "id": "headers.missing_hsts",
        "title": "Missing HSTS",
        "severity": "medium",
        "description": "Without Strict-Transport-Security, clients may be downgraded to plaintext HTTP.",
        "remediation": "Send Strict-Transport-Security (e.g. max-age=31536000; includeSubDomains) on HTTPS responses.",
    },
    "x-content-type-options": {
        "id": "headers.missing_xcto",
        "title": "Missing X-Content-Type-Options",
        "severity": "low",
        "description": "Browsers may MIME-sniff responses into an executable content type.",
        "remediation": "Send X-Content-Type-Options: nosniff.",
    },
    "content-security-policy": {
        "id": "headers.missing_csp",
        "title": "Missing Content-Security-Policy",
        "severity": "low",
        "description": "No Content-Security-Policy restricts where content may be loaded from.",
        "remediation": "Send a restrictive Content-Security-Policy (for JSON APIs: default-src 'none'; frame-ancestors 'none').",
    },
    "referrer-policy": {
        "id": "headers.missing_referrer_policy",
        "title": "Missing Referrer-Policy",
        "severity": "low",
        "description": "URLs (and any tokens in them) may leak to third parties through the Referer header.",
        "remediation": "Send Referrer-Policy: no-referrer or strict-origin-when-cross-origin.",
    },
}


class HeadersSuite(Suite):
    name = "headers"
    description = "Checks for common HTTP security headers on the selected endpoints."

    async def run(self, context) -> List[Finding]:
        limit = max(1, context.config.active.max_requests_per_suite)
        endpoints = context.endpoints[:limit]
        affected: Dict[str, List[Dict[str, Any]]] = {header: [] for header in SECURITY_HEADERS}

        for endpoint in endpoints:
            response = await context.http.request("GET", path=endpoint.path)
            for header in SECURITY_HEADERS:
                if not response.headers.get(header):
                    affected[header].append({
                        "method": endpoint.method,
                        "path": endpoint.path,
                        "url": response.url,
                        "status": response.status_code,
                    })

        context.logger.debug(f"headers: probed {len(endpoints)} endpoint(s)")
        return generate_header_findings(affected, probed=len(endpoints), suite=self.name)


def generate_header_findings(affected: Dict[str, List[Dict[str, Any]]],
                             probed: int,
                             suite: str = "headers") -> List[Finding]:
    """Build one finding per rule that has at least one affected endpoint."""
    findings = []
    for header, rule in SECURITY_HEADERS.items():
        hits = affected.get(header) or []
        if not hits:
            continue
        findings.append(Finding(
            id=rule["id"],
            title=rule["title"],
            severity=rule["severity"],
            description=(
                f"{len(hits)} of {probed} probed endpoint(s) did not include the "
                f"{header} header. {rule['description']}"
            ),
            remediation=rule["remediation"],
            evidence={"header": header, "count": len(hits), "probed": probed, "affected": hits},
            suite=suite,
            tags=("headers",),
        ))
    return findings
