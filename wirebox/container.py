"""
Container

This module provides the public DI container. It is the facade over the
engine's parts and is responsible for:

- Registering definitions and evicting stale singletons
- Returning cached singletons
- Auto-binding unregistered but constructible classes
- Detecting circular dependencies
- Translating resolution failures into ContainerError

Example::

    container = Container({
        "mailer_dsn": "smtp://localhost:1025",
        Mailer: {"type": Mailer, "arguments": {"dsn": "mailer_dsn"}},
    })
    mailer = container.get(Mailer)
"""

import logging
import threading
from typing import Any, Mapping, NoReturn, Optional, Type, TypeVar, overload

from .binder import ParameterBinder
from .definition import ConfigRecord, Factory, classify
from .exceptions import ContainerError, NotFoundError
from .identifiers import IdentifierLike, TypeLoader, identifier_for, is_constructible, is_interface
from .interface import ContainerInterface
from .lifecycle import Lifecycle
from .parameters import ParameterInspector
from .resolution_context import ResolutionContext, _resolution_context
from .resolver import DefinitionResolver
from .store import MISSING, DefinitionStore

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Container(ContainerInterface):
    """Dependency-injection container.

    Definitions registered with ``set()`` (or passed to the constructor) may be:

    - a string naming another identifier (alias) or a class (``"pkg.mod.Class"``)
    - a class, constructed with auto-wired constructor arguments
    - a callable factory, invoked with auto-wired arguments
    - a dict with ``type``/``arguments``/``singleton``/``factory`` keys
    - any other value, returned unchanged

    Records are transient unless ``singleton`` is true; every other shape
    is cached after its first resolution, bare factories included.

    The container registers itself under ``ContainerInterface`` and its own
    class, so services can declare it as a dependency.

    Attributes:
        _store: Definitions and singleton cache
        _loader: TypeLoader mapping class identifiers back to classes
        _inspector: Cached constructor/factory parameter specs
        _resolver: DefinitionResolver driving construction
        _autowire: Whether unregistered classes are auto-bound
        _lock: Re-entrant lock serializing get() and set()
    """

    def __init__(self, definitions: Optional[Mapping[IdentifierLike, Any]] = None, *, autowire: bool = True):
        """Initialize a container.

        Args:
            definitions: Initial definitions keyed by identifier or class (optional)
            autowire: If False, unregistered classes are never auto-bound.
                Defaults to True.
        """
        self._store = DefinitionStore()
        self._loader = TypeLoader()
        self._inspector = ParameterInspector(self._loader)
        self._resolver = DefinitionResolver(
            self, ParameterBinder(self), self._inspector, self._loader
        )
        self._autowire = autowire
        self._lock = threading.RLock()

        # Make the container itself injectable; explicit definitions override it
        for cls in (ContainerInterface, Container, type(self)):
            self._store.register(self._loader.remember(cls), self)

        if definitions:
            self.load_definitions(definitions)

    @overload
    def get(self, identifier: Type[T]) -> T: ...

    @overload
    def get(self, identifier: str) -> Any: ...

    def get(self, identifier: IdentifierLike) -> Any:
        """Resolve an identifier.

        Args:
            identifier: A string identifier or a class

        Returns:
            The resolved instance

        Raises:
            NotFoundError: When the identifier is neither registered nor an
                auto-bindable class. Never wrapped.
            ContainerError: For any other failure, with the original
                exception chained as ``__cause__``

        Example::

            service = container.get("app.user_service")
            mailer = container.get(Mailer)
        """
        requested = identifier if isinstance(identifier, type) else None
        with self._lock:
            if requested is not None:
                key = self._claim(requested)
            else:
                key = self._key(identifier)

            cached = self._store.cache_get(key)
            if cached is not MISSING:
                logger.debug("Returning cached singleton for %s", key)
                return cached

            # One context per thread/task, shared by every container it passes through
            ctx = _resolution_context.get()
            token = None
            if ctx is None:
                ctx = ResolutionContext(self)
                token = _resolution_context.set(ctx)

            try:
                ctx.enter(key, self)
                try:
                    return self._resolve(key, requested)
                finally:
                    ctx.exit(key, self)
            finally:
                if token is not None:
                    _resolution_context.reset(token)

    def has(self, identifier: IdentifierLike) -> bool:
        """Return True if the identifier has an explicit definition.

        Auto-bindable classes that were never registered return False.
        """
        return self._store.contains(self._key(identifier))

    def set(self, identifier: IdentifierLike, definition: Any) -> None:
        """Register or overwrite a definition.

        Any singleton cached for the identifier is evicted, so the next
        ``get()`` reflects the new definition.

        Example::

            container.set("app_name", "DI Playground App")
            container.set("app.mailer", Mailer)
            container.set("random_number", lambda: random.randint(1, 100))
        """
        key = self._key(identifier)
        if isinstance(definition, type):
            self._loader.remember(definition)
        with self._lock:
            previous = self._store.lookup(key)
            if previous is not MISSING and previous is not definition:
                self._forget(previous)
            self._store.register(key, definition)

    def load_definitions(self, definitions: Mapping[IdentifierLike, Any]) -> None:
        """Register every entry of a mapping, as ``set()`` would."""
        for identifier, definition in definitions.items():
            self.set(identifier, definition)

    def can_autowire(self, identifier: str) -> bool:
        """Return True if get() would auto-bind an unregistered identifier.

        Raises:
            ClassLoadError: When the owning module fails to import
        """
        return self._autowire and is_constructible(self._loader.load(identifier))

    def __getitem__(self, identifier: IdentifierLike) -> Any:
        return self.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, (str, type)) and self.has(identifier)

    def _key(self, identifier: IdentifierLike) -> str:
        if isinstance(identifier, type):
            return self._loader.remember(identifier)
        return identifier_for(identifier)

    def _claim(self, cls: Type) -> str:
        """Identifier of a class passed to get().

        A different class previously auto-bound under the same dotted path
        loses its cached instance, so ``get(cls)`` always returns a ``cls``.
        """
        key = self._loader.remember(cls)
        if not self._store.contains(key):
            cached = self._store.cache_get(key)
            if cached is not MISSING and type(cached) is not cls:
                self._store.evict(key)
        return key

    def _forget(self, raw: Any) -> None:
        """Drop cached parameter specs of a factory that is being replaced."""
        if isinstance(raw, Factory):
            raw = raw.function
        elif isinstance(raw, ConfigRecord):
            raw = raw.factory
        elif isinstance(raw, Mapping):
            raw = raw.get("factory")
        if callable(raw) and not isinstance(raw, type):
            self._inspector.forget(raw)

    def _resolve(self, key: str, requested: Optional[Type] = None) -> Any:
        if self._store.contains(key):
            raw = self._store.lookup(key)
        elif requested is not None:
            raw = self._autobind_class(key, requested)
        else:
            raw = self._autobind(key)

        logger.debug("Resolving %s", key)
        try:
            definition = classify(raw, self._store.contains, self._loader, key)
            instance = self._resolver.resolve(definition, key)
        except NotFoundError:
            raise
        except Exception as e:
            raise ContainerError(
                f"Error while resolving '{key}': {e}", identifier=key
            ) from e

        if definition.lifecycle is Lifecycle.SINGLETON:
            self._store.cache_put(key, instance)
            logger.debug("Cached singleton for %s", key)

        return instance

    def _autobind(self, key: str) -> Type:
        cls = self._loader.load(key) if self._autowire else None
        if cls is not None:
            return self._autobind_class(key, cls)
        self._not_found(key)

    def _autobind_class(self, key: str, cls: Type) -> Type:
        if not self._autowire:
            self._not_found(key)
        if is_interface(cls):
            raise NotFoundError(
                f"No definition found for interface: {key}.", identifier=key
            )
        logger.debug("Auto-binding %s to %r", key, cls)
        return cls

    def _not_found(self, key: str) -> NoReturn:
        registered = ", ".join(sorted(self._store.identifiers())) or "None"
        raise NotFoundError(
            f"No definition found for id: {key}\n"
            f"Registered identifiers: {registered}",
            identifier=key,
        )
