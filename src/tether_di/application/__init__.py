"""
Application layer - Use cases and orchestration.

This layer contains the use cases that orchestrate domain objects.
It depends only on the Domain layer.
"""

from .autowire import autowire, collect_constructor_dependencies
from .container import Container
from .instance_cache import InstanceCache
from .resolution_tracker import ResolutionTracker
from .scope import Scope

__all__ = [
    "Container",
    "Scope",
    "InstanceCache",
    "ResolutionTracker",
    "autowire",
    "collect_constructor_dependencies",
]
