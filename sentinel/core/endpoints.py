"""
Endpoint selection (scope)

When an OpenAPI spec is available, pick a small, representative and
deterministic subset of operations to probe instead of the whole API surface.

Ranking: preferred paths first, then shorter paths, then "<method> <path>"
alphabetically. Falls back to GET / when scope is disabled, no API metadata
is available, or filtering leaves nothing.

Patterns are searched (re.search), not full-matched. They are assumed to be
valid regular expressions; the config schema rejects malformed ones.
"""

import re
from typing import TYPE_CHECKING, Iterable, List, Optional, Pattern

from .model import ROOT_ENDPOINT, Endpoint, LoadedApiSpec

if TYPE_CHECKING:
    from sentinel.config.schema import ScopeConfig


def _compile(patterns: Iterable[str]) -> List[Pattern[str]]:
    return [re.compile(p) for p in patterns if p.strip()]


def _matches_any(regexes: List[Pattern[str]], value: str) -> bool:
    return any(r.search(value) for r in regexes)


def normalize_endpoints(endpoints: Iterable[Endpoint]) -> List[Endpoint]:
    """Lowercase methods and drop duplicate (method, path) pairs, keeping the first."""
    seen = set()
    out: List[Endpoint] = []
    for endpoint in endpoints:
        normalized = Endpoint(endpoint.method.lower(), endpoint.path)
        if normalized in seen:
            continue
        seen.add(normalized)
        out.append(normalized)
    return out


def select_endpoints(policy: "ScopeConfig", api: Optional[LoadedApiSpec] = None) -> List[Endpoint]:
    """Select the ordered, bounded list of endpoints to probe. Never returns an empty list."""
    if not policy.enabled or api is None or not api.endpoints:
        return [ROOT_ENDPOINT]

    allowed_methods = {m.lower() for m in policy.methods}
    include = _compile(policy.include_paths)
    exclude = _compile(policy.exclude_paths)
    prefer = _compile(policy.prefer)

    candidates = [e for e in normalize_endpoints(api.endpoints) if e.method in allowed_methods]
    if include:
        candidates = [e for e in candidates if _matches_any(include, e.path)]
    if exclude:
        candidates = [e for e in candidates if not _matches_any(exclude, e.path)]

    candidates.sort(key=lambda e: (
        0 if _matches_any(prefer, e.path) else 1,
        len(e.path),
        e.key,
    ))

    selected = candidates[:max(1, policy.max_endpoints)]
    return selected or [ROOT_ENDPOINT]
