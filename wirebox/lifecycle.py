"""
Lifecycle Enum

Defines whether a resolved instance is cached
"""

from enum import Enum


class Lifecycle(Enum):
    """Lifecycle of resolved instances"""
    SINGLETON = "SINGLETON"
    TRANSIENT = "TRANSIENT"
