"""
DefinitionResolver

Dispatches on the shape of a Definition and drives construction.
Class and factory shapes go through the ParameterBinder; aliases go back
through the container so that chains of any depth resolve and cache
like direct requests.
"""

import logging
from typing import Any, Callable, Mapping, Optional, Sequence, Type, TYPE_CHECKING

from .binder import ParameterBinder
from .definition import Alias, ConcreteType, ConfigRecord, Definition, Factory, Literal
from .exceptions import InvalidDefinitionError, NotInstantiableError, ClassLoadError
from .identifiers import TypeLoader, identifier_for, is_interface
from .parameters import ParameterInspector, ParameterSpec, describe_owner

if TYPE_CHECKING:
    from .container import Container

logger = logging.getLogger(__name__)


class DefinitionResolver:
    """Produces instances from classified definitions.

    Attributes:
        _container: Container used for alias resolution
        _binder: ParameterBinder producing constructor/factory arguments
        _inspector: ParameterInspector providing cached parameter specs
        _loader: TypeLoader for class names in configuration records
    """

    def __init__(
        self,
        container: 'Container',
        binder: ParameterBinder,
        inspector: ParameterInspector,
        loader: TypeLoader,
    ):
        self._container = container
        self._binder = binder
        self._inspector = inspector
        self._loader = loader

    def resolve(self, definition: Definition, identifier: str) -> Any:
        """Resolve a definition into an instance.

        Args:
            definition: The classified definition
            identifier: The identifier being resolved (for error context)

        Returns:
            The resolved instance

        Raises:
            InvalidDefinitionError: For malformed configuration records
            NotInstantiableError: For abstract classes and protocols
            ClassLoadError: For class names that cannot be loaded
            UnresolvableDependencyError: From the ParameterBinder
            NotFoundError: From nested resolution
        """
        if isinstance(definition, Alias):
            return self._container.get(definition.target)

        if isinstance(definition, ConcreteType):
            return self._construct(definition.type, definition.parameters, None, identifier)

        if isinstance(definition, Factory):
            return self._invoke(definition.function, definition.parameters, None)

        if isinstance(definition, ConfigRecord):
            return self._resolve_record(definition, identifier)

        if isinstance(definition, Literal):
            return definition.value

        raise InvalidDefinitionError(
            f"Unsupported definition for '{identifier}': {definition!r}",
            identifier=identifier,
        )

    def _resolve_record(self, record: ConfigRecord, identifier: str) -> Any:
        if record.factory is not None and callable(record.factory):
            return self._invoke(record.factory, None, record.arguments)

        cls = record.type
        if isinstance(cls, str):
            loaded = self._loader.load(cls)
            if loaded is None:
                raise ClassLoadError(
                    f"Class {cls} defined for '{identifier}' cannot be found or loaded.",
                    identifier=identifier,
                )
            cls = loaded
        elif not isinstance(cls, type):
            raise InvalidDefinitionError(
                f"Invalid record definition for '{identifier}'. "
                f"'type' key missing or invalid.",
                identifier=identifier,
            )

        return self._construct(cls, None, record.arguments, identifier)

    def _construct(
        self,
        cls: Type,
        parameters: Optional[Sequence[ParameterSpec]],
        overrides: Optional[Mapping[str, Any]],
        identifier: str,
    ) -> Any:
        if is_interface(cls):
            raise NotInstantiableError(
                f"Class {identifier_for(cls)} defined for '{identifier}' is not instantiable.",
                identifier=identifier,
            )

        if parameters is None:
            parameters = self._inspector.for_class(cls)
        values = self._binder.bind(parameters, overrides, owner=describe_owner(cls))
        logger.debug("Constructing %s for %s", identifier_for(cls), identifier)
        return _call(cls, parameters, values)

    def _invoke(
        self,
        function: Callable[..., Any],
        parameters: Optional[Sequence[ParameterSpec]],
        overrides: Optional[Mapping[str, Any]],
    ) -> Any:
        if parameters is None:
            parameters = self._inspector.for_callable(function)
        values = self._binder.bind(parameters, overrides, owner=describe_owner(function))
        return _call(function, parameters, values)


def _call(target: Callable[..., Any], parameters: Sequence[ParameterSpec], values: Sequence[Any]) -> Any:
    args = []
    kwargs = {}
    for spec, value in zip(parameters, values):
        if spec.keyword_only:
            kwargs[spec.name] = value
        else:
            args.append(value)
    return target(*args, **kwargs)
