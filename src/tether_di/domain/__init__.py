"""
Domain layer - Core models, errors and contracts.

This layer contains the value objects and rules of dependency resolution.
It has no dependencies on other layers.
"""

from .enums import Lifetime
from .exceptions import (
    CircularDependencyError,
    ContainerError,
    FactoryError,
    RegistrationError,
    ScopeError,
    UnresolvedDependencyError,
    describe_identifier,
)
from .interfaces import Factory, IContainer, IResolver, IScope
from .models import Binding, ResolutionContext
from .settings import ContainerSettings

# Rebuild Pydantic models to resolve forward references
Binding.model_rebuild()

__all__ = [
    # Enums
    "Lifetime",
    # Exceptions
    "ContainerError",
    "CircularDependencyError",
    "UnresolvedDependencyError",
    "FactoryError",
    "RegistrationError",
    "ScopeError",
    "describe_identifier",
    # Interfaces
    "Factory",
    "IContainer",
    "IResolver",
    "IScope",
    # Models
    "Binding",
    "ResolutionContext",
    # Settings
    "ContainerSettings",
]
