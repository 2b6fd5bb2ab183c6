"""
Forward Reference (String Annotation) Tests

Tests for handling forward references and PEP 563 (from __future__ import annotations).
"""

from __future__ import annotations  # PEP 563: All annotations become strings

import sys
import os
import unittest
from typing import Optional

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from wirebox import ContainerError, UnresolvableDependencyError

from conftest import ContainerTestCase


# Test Fixtures
class Database:
    """Database fixture class."""

    def __init__(self):
        self.name = "TestDB"


class CacheService:
    """Cache service fixture class."""

    def __init__(self):
        self.data = {}


class UserRepository:
    """Repository with forward reference dependency."""

    def __init__(self, db: Database):  # Forward reference due to PEP 563
        self.db = db


class ServiceWithMultipleDeps:
    """Service with multiple forward reference dependencies."""

    def __init__(self, db: Database, cache: CacheService, name: str = "multi"):
        self.db = db
        self.cache = cache
        self.name = name


class DefinedLater:
    """Refers to a class defined further down the module."""

    def __init__(self, target: LateTarget):
        self.target = target


class LateTarget:
    pass


class ConfiguredByIdentifier:
    """Annotations naming registered identifiers rather than classes."""

    def __init__(self, mailer: app.mailer, backup: Optional[app.backup_mailer]):  # noqa: F821
        self.mailer = mailer
        self.backup = backup


class TestForwardReferences(ContainerTestCase):

    def test_string_annotation_is_auto_wired(self):
        repo = self.container.get(UserRepository)

        self.assertIsInstance(repo.db, Database)

    def test_multiple_string_annotations(self):
        service = self.container.get(ServiceWithMultipleDeps)

        self.assertIsInstance(service.db, Database)
        self.assertIsInstance(service.cache, CacheService)
        self.assertEqual(service.name, "multi")

    def test_class_defined_later(self):
        self.assertIsInstance(self.container.get(DefinedLater).target, LateTarget)

    def test_annotation_naming_registered_identifier(self):
        self.container.set("app.mailer", "smtp-mailer")

        service = self.container.get(ConfiguredByIdentifier)

        self.assertEqual(service.mailer, "smtp-mailer")
        self.assertIsNone(service.backup)

    def test_annotation_naming_unregistered_identifier(self):
        with self.assertRaises(ContainerError) as ctx:
            self.container.get(ConfiguredByIdentifier)

        self.assertIsInstance(ctx.exception.root_cause, UnresolvableDependencyError)
        self.assertEqual(ctx.exception.root_cause.parameter, "mailer")

    def test_local_class_annotation(self):
        """Local classes cannot be found by name; their parameters fall back to defaults."""

        class Local:
            pass

        class UsesLocal:
            def __init__(self, local: Local = None):
                self.local = local

        self.assertIsNone(self.container.get(UsesLocal).local)


if __name__ == '__main__':
    unittest.main()
