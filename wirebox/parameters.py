"""
Parameter Specs

This module turns constructor and factory signatures into ParameterSpec
tuples the ParameterBinder works from. Introspection runs once per
class or callable; the result is cached by the ParameterInspector.

Callers that want to bypass introspection entirely pass an explicit
``parameters=`` list to ``ConcreteType`` or ``Factory``.
"""

import builtins
import inspect
import logging
import sys
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Type, Union

from .exceptions import NotInstantiableError
from .identifiers import TypeLoader, identifier_for

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)


@dataclass(frozen=True)
class ParameterSpec:
    """Statically known description of one formal parameter.

    Attributes:
        name: Parameter name, matched against named overrides
        type_id: Identifier of the declared type, None when untyped
        is_builtin: True for builtin and non-class annotations (never auto-wired)
        has_default: Whether a default value is available
        default: The default value (meaningful only when has_default)
        nullable: True for ``Optional[X]`` / ``X | None`` annotations
        kind: inspect.Parameter kind, used to pass keyword-only arguments by name
    """
    name: str
    type_id: Optional[str] = None
    is_builtin: bool = False
    has_default: bool = False
    default: Any = None
    nullable: bool = False
    kind: Any = inspect.Parameter.POSITIONAL_OR_KEYWORD

    @property
    def keyword_only(self) -> bool:
        return self.kind == inspect.Parameter.KEYWORD_ONLY


ParameterSpecs = Tuple[ParameterSpec, ...]


class ParameterInspector:
    """Builds and caches ParameterSpec tuples.

    Attributes:
        _loader: TypeLoader that remembers annotated classes so that
            annotation identifiers can be loaded back later
        _cache: Dictionary mapping classes/callables to their specs
    """

    def __init__(self, loader: TypeLoader):
        self._loader = loader
        self._cache: Dict[Any, ParameterSpecs] = {}

    def for_class(self, cls: Type) -> ParameterSpecs:
        """Specs of a class constructor, excluding ``self``.

        Raises:
            NotInstantiableError: When the constructor signature cannot be
                inspected (e.g. some builtin or C extension classes)
        """
        return self._cached(cls, lambda: self._inspect_class(cls))

    def for_callable(self, function: Callable[..., Any]) -> ParameterSpecs:
        """Specs of a factory callable.

        Raises:
            NotInstantiableError: When the signature cannot be inspected
        """
        return self._cached(function, lambda: self._inspect_callable(function))

    def forget(self, target: Any) -> None:
        """Drop the cached specs of a class or callable."""
        try:
            self._cache.pop(target, None)
        except TypeError:
            pass  # unhashable targets are never cached

    def _cached(self, target: Any, build: Callable[[], ParameterSpecs]) -> ParameterSpecs:
        try:
            return self._cache[target]
        except KeyError:
            pass
        except TypeError:
            # Unhashable callable instance
            return build()

        specs = build()
        self._cache[target] = specs
        return specs

    def _inspect_class(self, cls: Type) -> ParameterSpecs:
        init = cls.__init__
        if init is object.__init__:
            return ()

        try:
            sig = inspect.signature(init)
        except (ValueError, TypeError) as e:
            raise NotInstantiableError(
                f"Cannot inspect {cls.__name__}.__init__: {e}. "
                f"This may occur with built-in types or C extension classes."
            ) from e

        parameters = list(sig.parameters.values())[1:]  # drop self
        hints = self._resolve_type_hints(init)
        return self._build_specs(parameters, hints, init)

    def _inspect_callable(self, function: Callable[..., Any]) -> ParameterSpecs:
        try:
            sig = inspect.signature(function)
        except (ValueError, TypeError) as e:
            raise NotInstantiableError(
                f"Cannot inspect factory {_describe(function)}: {e}"
            ) from e

        target = function if inspect.isfunction(function) or inspect.ismethod(function) \
            else getattr(function, "__call__", function)
        hints = self._resolve_type_hints(target)
        return self._build_specs(list(sig.parameters.values()), hints, target)

    def _build_specs(self, parameters, hints: Dict[str, Any], owner: Any) -> ParameterSpecs:
        specs = []
        for param in parameters:
            # *args and **kwargs are never bound
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            has_default = param.default is not inspect.Parameter.empty
            annotation = hints.get(param.name, param.annotation)
            if annotation is inspect.Parameter.empty:
                specs.append(ParameterSpec(
                    name=param.name,
                    has_default=has_default,
                    default=param.default if has_default else None,
                    kind=param.kind,
                ))
                continue

            if isinstance(annotation, str):
                annotation = self._resolve_string_annotation(owner, annotation)

            type_id, is_builtin, nullable = self._describe_annotation(annotation)
            specs.append(ParameterSpec(
                name=param.name,
                type_id=type_id,
                is_builtin=is_builtin,
                has_default=has_default,
                default=param.default if has_default else None,
                nullable=nullable,
                kind=param.kind,
            ))
        return tuple(specs)

    def _describe_annotation(self, annotation: Any) -> Tuple[Optional[str], bool, bool]:
        """Return (type_id, is_builtin, nullable) for an annotation."""
        nullable = False
        if _is_union(annotation):
            members = [arg for arg in typing.get_args(annotation) if arg is not _NONE_TYPE]
            nullable = len(members) != len(typing.get_args(annotation))
            if len(members) != 1:
                # Multi-member unions are never auto-wired
                return None, True, nullable
            annotation = members[0]

        if annotation is None or annotation is _NONE_TYPE:
            return None, True, True

        if isinstance(annotation, typing.ForwardRef):
            annotation = annotation.__forward_arg__

        if isinstance(annotation, str):
            # Unresolvable forward reference: use the name as identifier
            name, optional = _strip_optional(annotation)
            return name, hasattr(builtins, name), nullable or optional

        if isinstance(annotation, type) and typing.get_origin(annotation) is None:
            type_id = self._loader.remember(annotation)
            return type_id, annotation.__module__ == "builtins", nullable

        # typing constructs: Any, List[int], Callable[...], TypeVar, ...
        return None, True, nullable

    @staticmethod
    def _resolve_type_hints(target: Any) -> Dict[str, Any]:
        """Resolve annotations with typing.get_type_hints().

        Returns an empty dict when resolution fails, so raw annotations
        are used instead.
        """
        try:
            return typing.get_type_hints(target)
        except (NameError, SyntaxError, TypeError, AttributeError, RecursionError):
            return {}

    @staticmethod
    def _resolve_string_annotation(owner: Any, annotation: str) -> Any:
        """Evaluate a string annotation in the owner's module namespace.

        Falls back to the string itself, which is then treated as a
        declared type identifier.
        """
        module = sys.modules.get(getattr(owner, "__module__", None) or "")
        namespace: Dict[str, Any] = dict(vars(module)) if module is not None else {}
        namespace.setdefault("Optional", Optional)
        namespace.setdefault("Union", Union)
        try:
            return eval(annotation, namespace)
        except Exception:
            logger.debug("Keeping unresolved annotation %r as identifier", annotation)
            return annotation


def _strip_optional(annotation: str) -> Tuple[str, bool]:
    """Split ``"Optional[X]"`` / ``"X | None"`` into ("X", True)."""
    text = annotation.strip()
    if text.startswith("Optional[") and text.endswith("]"):
        return text[len("Optional["):-1].strip(), True
    members = [member.strip() for member in text.split("|")]
    if len(members) == 2 and "None" in members:
        members.remove("None")
        return members[0], True
    return text, False


def _is_union(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    if origin is Union:
        return True
    union_type = getattr(types, "UnionType", None)
    return union_type is not None and origin is union_type


def _describe(function: Any) -> str:
    return getattr(function, "__qualname__", None) or repr(function)


def describe_owner(target: Any) -> str:
    """Human readable name of a constructor or factory, for error messages."""
    if isinstance(target, type):
        return f"{identifier_for(target)}.__init__"
    return _describe(target)
