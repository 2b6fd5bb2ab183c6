"""
Container Interface

This module provides the ContainerInterface abstract interface.
Services that need to look things up lazily declare a parameter of this
type and receive the container that built them.
"""

from abc import ABC, abstractmethod
from typing import Any, Union, Type


class ContainerInterface(ABC):
    """Abstract interface for service containers.

    Example::

        class Plugins:
            def __init__(self, container: ContainerInterface):
                self._container = container

            def load(self, name: str):
                return self._container.get(f"plugins.{name}")
    """

    @abstractmethod
    def get(self, identifier: Union[str, Type]) -> Any:
        """Find an entry of the container by its identifier and return it.

        Raises:
            NotFoundError: No entry was found for this identifier
            ContainerError: Error while retrieving the entry
        """
        pass

    @abstractmethod
    def has(self, identifier: Union[str, Type]) -> bool:
        """Return True if the identifier has an explicit definition.

        ``has(id)`` returning True does not mean that ``get(id)`` will not
        raise. It does mean that ``get(id)`` will not raise NotFoundError
        for ``id`` itself.
        """
        pass
