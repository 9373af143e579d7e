"""
Auth Suite
High-signal, low-risk checks around HTTP authentication behavior

Checks, all against auth.probePath (default "/"):
- Redirect safety: a cross-origin redirect on the probe can leak credentials
  through clients that follow redirects with their Authorization header
- 401 semantics: WWW-Authenticate should advertise the expected scheme
- Enforcement heuristic: compare the probe with and without credentials

GET only; redirects are never followed.

Known limitation: the enforcement heuristic reports a possible bypass
whenever the probe path answers 2xx without credentials. If the probe path is
intentionally public this is a false positive. Point auth.probePath at a
protected endpoint, or set auth.compareUnauthed to false.
"""

from typing import Dict, List, Optional, Tuple
from urllib.parse import urljoin, urlsplit

from sentinel.core.model import Finding, Location

from .base import Suite

DEFAULT_PORTS = {"http": 80, "https": 443}


def origin_of(url: str) -> Tuple[str, str, Optional[int]]:
    """Return (scheme, host, port) with the scheme's default port filled in.

    Raises ValueError for an unparsable port.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    return scheme, (parts.hostname or "").lower(), parts.port or DEFAULT_PORTS.get(scheme)


def credential_overrides(auth) -> Dict[str, str]:
    """Headers that blank out the configured credential for an 'unauthed' probe."""
    if auth.type in ("bearer", "basic"):
        return {"authorization": ""}
    if auth.type == "apiKey" and auth.api_key_header:
        return {auth.api_key_header: ""}
    return {}


class AuthSuite(Suite):
    name = "auth"
    description = "Checks HTTP auth semantics and basic auth enforcement behavior."

    async def run(self, context) -> List[Finding]:
        findings = []
        auth = context.config.auth
        base_url = context.config.target.base_url
        probe_path = auth.probe_path or "/"
        probe_url = urljoin(base_url, probe_path)

        # Auth header injection is handled by the HTTP client
        authed = await context.http.request("GET", path=probe_path)
        location = Location(method="GET", path=probe_path, url=probe_url)

        if authed.is_redirect:
            redirect = self._cross_origin_redirect(authed, base_url)
            if redirect:
                findings.append(Finding(
                    id="auth.redirect_cross_origin",
                    title="Cross-origin redirect observed on auth probe",
                    severity="medium",
                    description=(
                        "Auth probe returned a redirect to a different origin. Following redirects "
                        "with credentials can leak Authorization headers in naive clients."
                    ),
                    remediation=(
                        "Avoid redirecting authenticated endpoints across origins, or ensure clients "
                        "do not forward credentials across origins."
                    ),
                    evidence={"probeUrl": authed.url, "location": redirect, "status": authed.status_code},
                    location=location,
                    suite=self.name,
                    tags=("auth", "redirect"),
                ))

        if authed.status_code == 401 and not authed.headers.get("www-authenticate"):
            findings.append(Finding(
                id="auth.401_missing_www_authenticate",
                title="401 response missing WWW-Authenticate header",
                severity="low",
                description=(
                    "Endpoint returned 401 Unauthorized without a WWW-Authenticate header. This can "
                    "break clients and obscures the intended auth scheme."
                ),
                remediation="Return a WWW-Authenticate header on 401 responses (e.g. Bearer realm=\"api\").",
                evidence={"probeUrl": authed.url, "status": authed.status_code},
                location=location,
                suite=self.name,
                tags=("auth", "http"),
            ))

        if auth.type != "none" and auth.compare_unauthed:
            # Per-request headers override the injected credential
            unauthed = await context.http.request(
                "GET",
                path=probe_path,
                headers=credential_overrides(auth),
            )
            if authed.is_success and unauthed.is_success:
                findings.append(Finding(
                    id="auth.possible_bypass_probe",
                    title="Auth probe succeeded with and without credentials",
                    severity="medium",
                    description=(
                        "The auth probe endpoint returned success both with the configured credentials "
                        "and with credentials cleared. The endpoint may not be protected, or auth is "
                        "not enforced as expected. This is a false positive if the probe path is public."
                    ),
                    remediation=(
                        "Point auth.probePath at an endpoint that requires authentication, and make sure "
                        "auth is enforced server-side."
                    ),
                    evidence={
                        "probeUrl": probe_url,
                        "authedStatus": authed.status_code,
                        "unauthedStatus": unauthed.status_code,
                    },
                    location=location,
                    suite=self.name,
                    tags=("auth", "bypass"),
                ))

        return findings

    @staticmethod
    def _cross_origin_redirect(response, base_url: str) -> Optional[str]:
        """Return the resolved redirect target if it leaves the base URL's origin."""
        target = response.headers.get("location")
        if not target:
            return None
        try:
            resolved = urljoin(response.url, target)
            if origin_of(resolved) != origin_of(base_url):
                return resolved
        except ValueError:
            # Malformed Location values are ignored
            return None
        return None
