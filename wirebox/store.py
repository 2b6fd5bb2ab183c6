"""
DefinitionStore

Holds registered definitions and the cache of constructed singletons.
"""

import logging
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class _Missing:
    """Sentinel type for absent definitions and cache entries"""

    def __repr__(self) -> str:
        return "MISSING"


# None is a legitimate definition and a legitimate cached instance
MISSING: Any = _Missing()


class DefinitionStore:
    """Identifier to definition mapping plus singleton cache.

    Invariant: a cached instance for an identifier was always produced
    from that identifier's current definition. ``register()`` evicts the
    cache entry of the identifier it overwrites.

    Attributes:
        _definitions: Dictionary mapping identifiers to raw definitions
        _singletons: Dictionary mapping identifiers to cached instances
    """

    def __init__(self):
        self._definitions: Dict[str, Any] = {}
        self._singletons: Dict[str, Any] = {}

    def register(self, identifier: str, definition: Any) -> None:
        """Insert or overwrite a definition and evict its cached singleton."""
        self._definitions[identifier] = definition
        self.evict(identifier)

    def contains(self, identifier: str) -> bool:
        return identifier in self._definitions

    def lookup(self, identifier: str) -> Any:
        """Registered definition, or MISSING."""
        return self._definitions.get(identifier, MISSING)

    def identifiers(self) -> List[str]:
        return list(self._definitions)

    def cache_get(self, identifier: str) -> Any:
        """Cached singleton, or MISSING."""
        return self._singletons.get(identifier, MISSING)

    def cache_put(self, identifier: str, instance: Any) -> None:
        self._singletons[identifier] = instance

    def evict(self, identifier: str) -> None:
        if self._singletons.pop(identifier, MISSING) is not MISSING:
            logger.debug("Evicted cached singleton for %s", identifier)
