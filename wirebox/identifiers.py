"""
Identifiers

Identifiers are plain strings. Classes are identified by their dotted
path (``"package.module.QualName"``), which is also the name the
TypeLoader imports them by.
"""

import importlib
import inspect
import logging
from typing import Any, Dict, Optional, Type, Union

from .exceptions import ClassLoadError

logger = logging.getLogger(__name__)

IdentifierLike = Union[str, Type]


def identifier_for(key: IdentifierLike) -> str:
    """Normalize an identifier or class to its string identifier.

    Args:
        key: A string identifier or a class

    Returns:
        The string itself, or ``"<module>.<qualname>"`` for a class

    Raises:
        TypeError: When key is neither a string nor a class

    Example::

        >>> identifier_for("app.mailer")
        'app.mailer'
        >>> identifier_for(collections.OrderedDict)
        'collections.OrderedDict'
    """
    if isinstance(key, str):
        return key
    if isinstance(key, type):
        return f"{key.__module__}.{key.__qualname__}"
    raise TypeError(
        f"Identifier must be a str or a class, got {type(key).__name__}"
    )


def is_interface(cls: Type) -> bool:
    """True for abstract classes and typing.Protocol classes."""
    return inspect.isabstract(cls) or bool(getattr(cls, "_is_protocol", False))


def is_constructible(cls: Any) -> bool:
    return isinstance(cls, type) and not is_interface(cls)


class TypeLoader:
    """Map class identifiers back to classes.

    Classes the container has already seen (used as keys, definitions or
    parameter annotations) are remembered, so local classes that cannot be
    imported by name still resolve. Anything else is imported by its
    dotted path.

    Attributes:
        _known: Dictionary mapping identifiers to remembered classes
    """

    def __init__(self):
        self._known: Dict[str, Type] = {}

    def remember(self, cls: Type) -> str:
        """Remember a class and return its identifier.

        When another class already answers to the same dotted path (a
        reloaded module, or a class built inside a function called twice),
        the newest class replaces it.
        """
        identifier = identifier_for(cls)
        previous = self._known.get(identifier)
        if previous is not cls:
            if previous is not None:
                logger.debug("Rebinding %s to a different class %r", identifier, cls)
            self._known[identifier] = cls
        return identifier

    def load(self, identifier: str) -> Optional[Type]:
        """Load the class named by an identifier.

        Args:
            identifier: Dotted path of the class

        Returns:
            The class, or None when the identifier names no class

        Raises:
            ClassLoadError: When importing the owning module fails with
                anything other than ImportError
        """
        cls = self._known.get(identifier)
        if cls is not None:
            return cls

        parts = identifier.split(".")
        if len(parts) < 2 or not all(part.isidentifier() for part in parts):
            return None

        # Longest importable module prefix wins, the rest is an attribute path
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            try:
                module = importlib.import_module(module_name)
            except ImportError:
                continue
            except Exception as e:
                raise ClassLoadError(
                    f"Class {identifier} cannot be found or loaded: {e}",
                    identifier=identifier,
                ) from e

            target: Any = module
            for attribute in parts[split:]:
                target = getattr(target, attribute, None)
                if target is None:
                    return None
            if not isinstance(target, type):
                return None

            logger.debug("Loaded class %s from module %s", identifier, module_name)
            self._known[identifier] = target
            return target

        return None
