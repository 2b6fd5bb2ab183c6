"""
Definition

Data classes representing the shapes a service definition can take.

Callers register raw values (strings, classes, callables, dicts, anything
else); ``classify`` turns them into one of the variants below at resolution
time, because whether a string is an alias depends on what is registered
at that moment.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence, Type, Union, TYPE_CHECKING

from .lifecycle import Lifecycle

if TYPE_CHECKING:
    from .identifiers import TypeLoader
    from .parameters import ParameterSpec

RECORD_FIELDS = frozenset({"type", "arguments", "singleton", "factory"})


@dataclass(frozen=True)
class Alias:
    """Another identifier to resolve instead"""
    target: str

    @property
    def lifecycle(self) -> Lifecycle:
        return Lifecycle.SINGLETON


@dataclass(frozen=True)
class ConcreteType:
    """A class constructed with auto-wired constructor arguments"""
    type: Type
    parameters: Optional[Sequence['ParameterSpec']] = None  # Replaces introspection when given

    @property
    def lifecycle(self) -> Lifecycle:
        return Lifecycle.SINGLETON


@dataclass(frozen=True)
class Factory:
    """A callable invoked with auto-wired arguments"""
    function: Callable[..., Any]
    parameters: Optional[Sequence['ParameterSpec']] = None  # Replaces introspection when given

    @property
    def lifecycle(self) -> Lifecycle:
        return Lifecycle.SINGLETON


@dataclass(frozen=True)
class ConfigRecord:
    """Configuration record: class or factory plus named arguments.

    ``arguments`` apply to ``factory`` as well as to ``type``. A bare
    Factory binds its parameters without overrides; a record's factory is
    bound with the record's arguments as named overrides.
    """
    type: Union[Type, str, None] = None
    arguments: Mapping[str, Any] = field(default_factory=dict)
    singleton: bool = False
    factory: Optional[Callable[..., Any]] = None

    @property
    def lifecycle(self) -> Lifecycle:
        return Lifecycle.SINGLETON if self.singleton else Lifecycle.TRANSIENT

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> 'ConfigRecord':
        """Build a record from a dict, ignoring unrecognized keys."""
        return cls(
            type=record.get("type"),
            arguments=record.get("arguments") or {},
            singleton=bool(record.get("singleton", False)),
            factory=record.get("factory"),
        )


@dataclass(frozen=True)
class Literal:
    """A value returned unchanged"""
    value: Any

    @property
    def lifecycle(self) -> Lifecycle:
        return Lifecycle.SINGLETON


Definition = Union[Alias, ConcreteType, Factory, ConfigRecord, Literal]

DEFINITION_TYPES = (Alias, ConcreteType, Factory, ConfigRecord, Literal)


def classify(
    raw: Any,
    is_registered: Callable[[str], bool],
    loader: 'TypeLoader',
    identifier: Optional[str] = None,
) -> Definition:
    """Turn a raw registered value into a Definition variant.

    A string or class whose identifier is registered is an alias, unless
    it is the identifier being classified (``set(Database, Database)``
    constructs Database rather than looping on itself).

    Args:
        raw: The value passed to ``Container.set()``
        is_registered: Predicate telling whether an identifier is registered
        loader: TypeLoader used to recognize class names
        identifier: The identifier the value is registered under (optional)

    Returns:
        The Definition variant describing how to produce the value

    Raises:
        ClassLoadError: When a string names a module that fails to import

    Example::

        classify("mailer_dsn", container.has, loader)   # Alias if registered
        classify(Mailer, container.has, loader)         # ConcreteType
        classify(lambda: 42, container.has, loader)     # Factory
        classify({"type": Mailer}, container.has, loader)  # ConfigRecord
        classify(8080, container.has, loader)           # Literal
    """
    if isinstance(raw, DEFINITION_TYPES):
        return raw

    if isinstance(raw, str):
        if raw != identifier and is_registered(raw):
            return Alias(raw)
        cls = loader.load(raw)
        if cls is not None:
            return ConcreteType(cls)
        return Literal(raw)

    if isinstance(raw, type):
        type_id = loader.remember(raw)
        if type_id != identifier and is_registered(type_id):
            return Alias(type_id)
        return ConcreteType(raw)

    if callable(raw):
        return Factory(raw)

    if isinstance(raw, Mapping) and RECORD_FIELDS.intersection(raw.keys()):
        return ConfigRecord.from_mapping(raw)

    return Literal(raw)
