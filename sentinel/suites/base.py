"""
Base suite interface
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

from sentinel.core.model import Finding

if TYPE_CHECKING:
    from sentinel.core.engine import SuiteContext


class Suite(ABC):
    """A stateless security check.

    Subclasses issue a bounded number of requests through ``context.http`` and
    return findings. HTTP-level conditions (non-2xx, missing headers) are
    findings; transport errors are left to propagate.
    """

    name: str = ""
    description: str = ""
    # Active suites send bursts of requests and are skipped when active.enabled is false
    active: bool = False

    @abstractmethod
    async def run(self, context: "SuiteContext") -> List[Finding]:
        """Run the suite once against the given context."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
