"""
ParameterBinder

Turns ParameterSpecs into concrete argument values.

For each parameter, in declaration order, the first matching rule wins:

1. Named override (a registered identifier is resolved, anything else is literal)
2. Non-builtin declared type that is registered or auto-bindable
3. Default value
4. ``None`` for nullable parameters
5. UnresolvableDependencyError

Explicit configuration beats type-driven auto-wiring, which beats defaults.
"""

from typing import Any, List, Mapping, Optional, Sequence, TYPE_CHECKING

from .exceptions import UnresolvableDependencyError
from .parameters import ParameterSpec

if TYPE_CHECKING:
    from .container import Container


class ParameterBinder:
    """Binds constructor/factory parameters against a container.

    Attributes:
        _container: Container used for recursive resolution
    """

    def __init__(self, container: 'Container'):
        self._container = container

    def bind(
        self,
        parameters: Sequence[ParameterSpec],
        overrides: Optional[Mapping[str, Any]] = None,
        owner: str = "<factory>",
    ) -> List[Any]:
        """Produce argument values for the given parameters.

        Args:
            parameters: Parameter specs in declaration order
            overrides: Named argument values or identifiers to resolve
            owner: Constructor/factory name used in error messages

        Returns:
            One value per parameter, in the same order

        Raises:
            UnresolvableDependencyError: When a parameter matches no rule
            NotFoundError: Propagated from nested resolution
        """
        overrides = overrides or {}
        return [self._bind_one(spec, overrides, owner) for spec in parameters]

    def _bind_one(self, spec: ParameterSpec, overrides: Mapping[str, Any], owner: str) -> Any:
        if spec.name in overrides:
            value = overrides[spec.name]
            if isinstance(value, str) and self._container.has(value):
                return self._container.get(value)
            return value

        if spec.type_id is not None and not spec.is_builtin:
            if self._container.has(spec.type_id) or self._container.can_autowire(spec.type_id):
                return self._container.get(spec.type_id)

        if spec.has_default:
            return spec.default

        if spec.nullable:
            return None

        raise UnresolvableDependencyError(
            f"Unresolvable dependency for parameter '{spec.name}' in {owner}",
            parameter=spec.name,
            owner=owner,
        )
