"""
Test Configuration and Utilities

Common base classes and helper functions for wirebox tests
"""

import unittest
from typing import Any, Mapping, Optional

from wirebox import Container


class ContainerTestCase(unittest.TestCase):
    """
    Base test case class for wirebox tests.

    Creates a fresh container before each test, so no singleton or
    definition leaks from one test into the next.
    """

    definitions: Optional[Mapping[Any, Any]] = None

    def setUp(self):
        """Create an isolated container before each test"""
        self.container = create_container(self.definitions)


def create_container(definitions: Optional[Mapping[Any, Any]] = None, **kwargs) -> Container:
    """
    Create a container loaded with a copy of the given definitions.

    Args:
        definitions: Definitions keyed by identifier or class
        **kwargs: Container keyword arguments (e.g. autowire=False)

    Returns:
        A new Container

    Example:
        >>> container = create_container({"app_name": "Demo"})
        >>> container.get("app_name")
        'Demo'
    """
    return Container(dict(definitions or {}), **kwargs)


def root_cause(error: BaseException) -> BaseException:
    """Innermost exception of a ``__cause__`` chain."""
    while error.__cause__ is not None:
        error = error.__cause__
    return error
