"""
tether-di: Framework-independent dependency resolution container.

Public API exports for the tether-di package.
"""

# Application exports
from tether_di.application.autowire import autowire
from tether_di.application.container import Container
from tether_di.application.scope import Scope

# Domain exports
from tether_di.domain.enums import Lifetime
from tether_di.domain.exceptions import (
    CircularDependencyError,
    ContainerError,
    FactoryError,
    RegistrationError,
    ScopeError,
    UnresolvedDependencyError,
)
from tether_di.domain.interfaces import IContainer, IResolver, IScope
from tether_di.domain.models import Binding
from tether_di.domain.settings import ContainerSettings

__version__ = "0.1.0"

__all__ = [
    # Container
    "Container",
    "Scope",
    "autowire",
    # Contracts
    "IContainer",
    "IResolver",
    "IScope",
    "Binding",
    "ContainerSettings",
    # Enums
    "Lifetime",
    # Exceptions
    "ContainerError",
    "CircularDependencyError",
    "UnresolvedDependencyError",
    "FactoryError",
    "RegistrationError",
    "ScopeError",
]
