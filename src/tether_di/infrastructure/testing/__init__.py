"""
Testing utilities module.

Provides helpers for overriding bindings in tests of applications using tether-di.
"""

from .utilities import TestContainer, create_mock_container

__all__ = [
    "TestContainer",
    "create_mock_container",
]
