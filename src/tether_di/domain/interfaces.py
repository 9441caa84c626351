from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Union

from tether_di.domain.enums import Lifetime
from tether_di.domain.models import Binding

Factory = Callable[["IResolver"], Any]


class IResolver(ABC):
    """Abstract interface for anything that can resolve identifiers.

    Both the root container and its scopes implement it; factories receive one.
    """

    @abstractmethod
    def resolve(self, identifier: Hashable) -> Any:
        """Resolve and return a fully constructed instance for the identifier.

        Args:
            identifier: The identifier to resolve.

        Raises:
            UnresolvedDependencyError: If no binding exists for the identifier.
            CircularDependencyError: If the identifier is already being resolved.
            FactoryError: If the bound factory raised.
        """

    @abstractmethod
    def resolve_all(self, identifiers: Iterable[Hashable]) -> List[Any]:
        """Resolve a sequence of identifiers, failing on the first error.

        Args:
            identifiers: The identifiers to resolve, in order.
        """

    @abstractmethod
    def create_scope(self) -> "IScope":
        """Create and return a new scope."""


class IScope(IResolver):
    """Abstract interface for a resolver owning scoped instances."""

    @abstractmethod
    def close(self) -> None:
        """Drop scoped instances and refuse further resolutions."""

    def __enter__(self) -> "IScope":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.close()
        return False


class IContainer(IResolver):
    """Abstract interface for dependency injection container operations."""

    @abstractmethod
    def register(
        self,
        identifier: Hashable,
        factory: Factory,
        lifetime: Union[Lifetime, str] = Lifetime.TRANSIENT,
    ) -> None:
        """Store or replace the binding for an identifier.

        Args:
            identifier: The identifier to bind.
            factory: Function receiving the resolver and returning an instance.
            lifetime: How long the built instance should be reused.
        """

    @abstractmethod
    def register_singletons(self, dependencies: Dict[Hashable, Factory]) -> None:
        """Register multiple singleton dependencies at once.

        Args:
            dependencies: A dictionary mapping identifiers to their factories.
        """

    @abstractmethod
    def register_transients(self, dependencies: Dict[Hashable, Factory]) -> None:
        """Register multiple transient dependencies at once.

        Args:
            dependencies: A dictionary mapping identifiers to their factories.
        """

    @abstractmethod
    def register_scoped(self, dependencies: Dict[Hashable, Factory]) -> None:
        """Register multiple scoped dependencies at once.

        Args:
            dependencies: A dictionary mapping identifiers to their factories.
        """

    @abstractmethod
    def is_registered(self, identifier: Hashable) -> bool:
        """Whether a binding exists for the identifier."""

    @abstractmethod
    def get_binding(self, identifier: Hashable) -> Optional[Binding]:
        """Return the current binding for the identifier, if any."""

    @abstractmethod
    def get_registry_copy(self) -> Dict[Hashable, Binding]:
        """Get a copy of the current registry of bindings."""

    @abstractmethod
    def clear(self) -> None:
        """Clear all bindings and cached instances from the container."""
