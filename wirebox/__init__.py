# Public API
import logging

from .container import Container
from .definition import Alias, ConcreteType, ConfigRecord, Factory, Literal, classify
from .exceptions import (
    CircularDependencyError,
    ClassLoadError,
    ContainerError,
    InvalidDefinitionError,
    NotFoundError,
    NotInstantiableError,
    UnresolvableDependencyError,
    WireboxError,
)
from .identifiers import identifier_for
from .interface import ContainerInterface
from .lifecycle import Lifecycle
from .parameters import ParameterSpec

__all__ = [
    "Container",
    "ContainerInterface",
    "Lifecycle",
    "identifier_for",
    # Definitions
    "Alias",
    "ConcreteType",
    "ConfigRecord",
    "Factory",
    "Literal",
    "ParameterSpec",
    "classify",
    # Exceptions
    "WireboxError",
    "NotFoundError",
    "ContainerError",
    "InvalidDefinitionError",
    "NotInstantiableError",
    "ClassLoadError",
    "UnresolvableDependencyError",
    "CircularDependencyError",
]

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
