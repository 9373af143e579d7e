"""
Suite registry for Sentinel
Maps enabled-suite flags to an ordered list of suite instances

Wiring only: no scan logic lives here. Flags that are absent default to
enabled, so individual suites stay free of config branching.
"""

import logging
from typing import Dict, List, Mapping, Optional, Type

from sentinel.suites import AuthSuite, CorsSuite, HeadersSuite, RateLimitSuite, Suite

logger = logging.getLogger(__name__)

# Execution order is fixed
SUITE_CATALOG: Dict[str, Type[Suite]] = {
    "headers": HeadersSuite,
    "cors": CorsSuite,
    "auth": AuthSuite,
    "ratelimit": RateLimitSuite,
}

# Accepted in configuration but intentionally not implemented (no exploit payloads)
UNIMPLEMENTED_SUITES = ("injection",)


def build_suites(enabled: Mapping[str, Optional[bool]], active_enabled: bool = True) -> List[Suite]:
    """Instantiate enabled suites in catalog order.

    Args:
        enabled: Suite name -> flag. Missing or None means enabled
        active_enabled: When False, suites that send request bursts are skipped

    Returns:
        Fresh suite instances; suites hold no state between runs
    """
    suites: List[Suite] = []
    for name, suite_cls in SUITE_CATALOG.items():
        flag = enabled.get(name)
        if flag is False:
            continue
        if suite_cls.active and not active_enabled:
            logger.debug(f"Skipping active suite '{name}' (active probing disabled)")
            continue
        suites.append(suite_cls())

    for name in UNIMPLEMENTED_SUITES:
        if enabled.get(name):
            logger.warning(f"Suite '{name}' is enabled in config but not available; ignoring")

    return suites


def available_suites() -> List[Dict[str, object]]:
    """Describe every known suite, for listing in the CLI."""
    return [
        {"name": name, "description": suite_cls.description, "active": suite_cls.active}
        for name, suite_cls in SUITE_CATALOG.items()
    ]
