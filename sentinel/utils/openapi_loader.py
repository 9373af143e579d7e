"""
OpenAPI loader for Sentinel

Reads an OpenAPI/Swagger document from a file path or URL, parses it as JSON
or YAML, dereferences $ref pointers and extracts the (method, path) pairs the
endpoint selector works with.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import httpx
import yaml
from prance.util.resolver import RESOLVE_FILES, RESOLVE_HTTP, RESOLVE_INTERNAL, RefResolver
from prance.util.url import ResolutionError

from sentinel.core.errors import SpecLoadError
from sentinel.core.model import HTTP_METHODS, Endpoint, LoadedApiSpec

logger = logging.getLogger(__name__)


def is_url(source: str) -> bool:
    parsed = urlparse(source)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


async def read_text(source: str,
                    timeout: float = 30.0,
                    transport: Optional[httpx.AsyncBaseTransport] = None) -> str:
    """Fetch the raw document from a URL or read it from disk."""
    if is_url(source):
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True, transport=transport) as client:
            try:
                response = await client.get(source)
            except httpx.HTTPError as e:
                raise SpecLoadError(f"Failed to fetch OpenAPI spec: {e}", source) from e
        if not response.is_success:
            raise SpecLoadError(
                f"Failed to fetch OpenAPI spec: {response.status_code} {response.reason_phrase}",
                source,
            )
        return response.text

    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SpecLoadError(f"Failed to read OpenAPI spec: {source}: {e}", source) from e


def parse_spec_text(text: str, source: str) -> Dict[str, Any]:
    """Parse as JSON first, then YAML. The document must be a mapping."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise SpecLoadError(f"Failed to parse OpenAPI spec as JSON or YAML: {source}", source) from e

    if not isinstance(data, dict):
        raise SpecLoadError(f"Failed to parse OpenAPI spec as JSON or YAML: {source}", source)
    return data


def dereference(raw: Dict[str, Any], source: str) -> Dict[str, Any]:
    """Resolve every $ref so suites can consume the document directly."""
    base_url = source if is_url(source) else Path(source).resolve().as_uri()
    resolver = RefResolver(raw, base_url, resolve_types=RESOLVE_INTERNAL | RESOLVE_FILES | RESOLVE_HTTP)
    try:
        resolver.resolve_references()
    except ResolutionError as e:
        raise SpecLoadError(f"Failed to resolve OpenAPI references in {source}: {e}", source) from e
    return resolver.specs


def extract_endpoints(spec: Dict[str, Any]) -> List[Endpoint]:
    paths = spec.get("paths")
    if not isinstance(paths, dict):
        return []

    endpoints = []
    for path, item in paths.items():
        if not isinstance(item, dict):
            continue
        for key, operation in item.items():
            method = str(key).lower()
            # Skip non-operation keys (parameters, summary, servers, ...)
            if method not in HTTP_METHODS or not isinstance(operation, dict):
                continue
            endpoints.append(Endpoint(method, path))
    return endpoints


async def load_openapi(source: str,
                       timeout: float = 30.0,
                       transport: Optional[httpx.AsyncBaseTransport] = None) -> LoadedApiSpec:
    """Load, dereference and index an OpenAPI document.

    Raises:
        SpecLoadError: the document is unreachable, unparsable or has unresolvable references
    """
    text = await read_text(source, timeout=timeout, transport=transport)
    raw = parse_spec_text(text, source)
    spec = dereference(raw, source)
    endpoints = extract_endpoints(spec)
    logger.info(f"Loaded OpenAPI spec from {source}: {len(endpoints)} operation(s)")
    return LoadedApiSpec(source=source, spec=spec, endpoints=tuple(endpoints))
