"""
Infrastructure layer - Tooling built on the container.

It depends on both Application and Domain layers.
"""

from . import testing

__all__ = [
    "testing",
]
