"""
ResolutionContext

This module provides the context management for dependency resolution.
The ResolutionContext tracks:

- The container performing the top-level resolution
- The identifiers currently being resolved, in order (cycle detection)

The context is stored in a ContextVar, so every thread (and every
asyncio task) gets its own in-progress path. Nested get() calls on other
containers join the same context; entries are keyed by container and
identifier, so equal identifiers in two containers are not a cycle.
"""

from contextvars import ContextVar
from typing import Any, List, Optional, Tuple, TYPE_CHECKING

from .exceptions import CircularDependencyError

if TYPE_CHECKING:
    from .container import Container


class ResolutionContext:
    """In-progress state of one top-level ``get()`` call.

    Attributes:
        container: The container that started the resolution
        resolving: Identifiers currently in the resolution chain, outermost first
        _owners: Container of each entry in ``resolving``

    Example (internal usage)::

        ctx = ResolutionContext(container)
        ctx.enter("app.user_service")
        ctx.enter("userServiceDefinition")
        ctx.enter("app.user_service")  # Raises CircularDependencyError
    """

    def __init__(self, container: Optional['Container'] = None):
        self.container = container
        self.resolving: List[str] = []
        self._owners: List[Any] = []

    def enter(self, identifier: str, owner: Optional[Any] = None) -> None:
        """Push an identifier onto the chain.

        Args:
            identifier: The identifier being resolved
            owner: The container resolving it (defaults to ``container``)

        Raises:
            CircularDependencyError: When the same container is already
                resolving the identifier further up the chain
        """
        entry = self._entry(identifier, owner)
        for index, existing in enumerate(zip(self._owners, self.resolving)):
            if existing[0] is entry[0] and existing[1] == identifier:
                raise CircularDependencyError(self.resolving[index:] + [identifier])
        self._owners.append(entry[0])
        self.resolving.append(identifier)

    def exit(self, identifier: str, owner: Optional[Any] = None) -> None:
        """Pop an identifier pushed by enter()."""
        entry = self._entry(identifier, owner)
        if self.resolving and self.resolving[-1] == identifier and self._owners[-1] is entry[0]:
            self.resolving.pop()
            self._owners.pop()

    @property
    def depth(self) -> int:
        return len(self.resolving)

    def _entry(self, identifier: str, owner: Optional[Any]) -> Tuple[Any, str]:
        return (owner if owner is not None else self.container), identifier


# Resolution context of the get() call currently running in this thread/task
_resolution_context: ContextVar[Optional[ResolutionContext]] = ContextVar(
    '_WIREBOX_RESOLUTION_CONTEXT',
    default=None
)
