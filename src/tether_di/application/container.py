import logging
import threading
from contextlib import nullcontext
from typing import Any, ContextManager, Dict, Hashable, Iterable, List, Optional, Type, Union

from pydantic import ValidationError

from tether_di.application.autowire import autowire
from tether_di.application.instance_cache import InstanceCache
from tether_di.application.resolution_tracker import ResolutionTracker
from tether_di.application.scope import Scope
from tether_di.domain import (
    Binding,
    ContainerError,
    ContainerSettings,
    Factory,
    FactoryError,
    IContainer,
    IResolver,
    Lifetime,
    RegistrationError,
    ScopeError,
    UnresolvedDependencyError,
    describe_identifier,
)

logger = logging.getLogger(__name__)


class Container(IContainer):
    """Main dependency injection container.

    Maps identifiers to bindings and resolves object graphs from them.
    Supports singleton, transient, and scoped lifetimes.

    Attributes:
        settings: Behaviour switches (locking, override policy).
        _registry: Dictionary mapping identifiers to their bindings.
        _registry_lock: Guards registry reads and writes.
        _singletons: Cache for singleton instances.
        _tracker: Per-thread resolution chains for cycle detection.
    """

    def __init__(self, settings: Optional[ContainerSettings] = None) -> None:
        """Initialize the container with an empty registry.

        Args:
            settings: Container settings; read from the environment when omitted.
        """
        self.settings = settings if settings is not None else ContainerSettings()
        self._registry: Dict[Hashable, Binding] = {}
        self._registry_lock: ContextManager[Any] = (
            threading.RLock() if self.settings.thread_safe else nullcontext()
        )
        self._singletons = InstanceCache(thread_safe=self.settings.thread_safe)
        self._tracker = ResolutionTracker()

    def register(
        self,
        identifier: Hashable,
        factory: Factory,
        lifetime: Union[Lifetime, str] = Lifetime.TRANSIENT,
    ) -> None:
        """Store or replace the binding for an identifier.

        A later registration replaces an earlier one (last write wins) unless
        ``settings.allow_override`` is off. Replacing a binding drops any
        singleton built from the previous one.

        Args:
            identifier: Hashable key consumers resolve, usually a class or protocol.
            factory: Function receiving the resolver and returning an instance.
            lifetime: How long the built instance should be reused.

        Raises:
            RegistrationError: If the binding is invalid or overrides are disabled.

        Example:
            >>> container.register(Clock, lambda r: SystemClock(), Lifetime.SINGLETON)
            >>> container.register("greeting", lambda r: "hello")
        """
        try:
            # isinstance(x, Hashable) accepts tuples holding unhashable items
            hash(identifier)
            binding = Binding(identifier=identifier, factory=factory, lifetime=lifetime)
        except TypeError as e:
            raise RegistrationError(f"Identifier {describe_identifier(identifier)} is not hashable: {e}") from e
        except ValidationError as e:
            raise RegistrationError(f"Invalid binding for {describe_identifier(identifier)}: {e}") from e

        with self._registry_lock:
            previous = self._registry.get(binding.identifier)
            if previous is not None and not self.settings.allow_override:
                raise RegistrationError(
                    f"Identifier {describe_identifier(identifier)} is already registered "
                    f"with lifetime {previous.lifetime.value} and overrides are disabled"
                )
            self._registry[binding.identifier] = binding

        if previous is None:
            logger.debug("Registered %s as %s", describe_identifier(identifier), binding.lifetime)
            return

        self._singletons.evict(binding.identifier)
        log = logger.warning if self.settings.warn_on_override else logger.debug
        log(
            "Replaced binding for %s (%s -> %s)",
            describe_identifier(identifier),
            previous.lifetime,
            binding.lifetime,
        )

    def register_singletons(self, dependencies: Dict[Hashable, Factory]) -> None:
        """Register multiple singleton dependencies at once.

        Singleton dependencies are created once and shared by the container and
        all of its scopes.

        Args:
            dependencies: Dictionary mapping identifiers to factories.
                         Each factory receives the container and returns an instance.

        Example:
            >>> container.register_singletons({
            ...     DatabaseConfig: lambda c: DatabaseConfig.from_env(),
            ...     DatabaseConnection: lambda c: DatabaseConnection(c.resolve(DatabaseConfig)),
            ... })
        """
        for identifier, factory in dependencies.items():
            self.register(identifier, factory, Lifetime.SINGLETON)

    def register_transients(self, dependencies: Dict[Hashable, Factory]) -> None:
        """Register multiple transient dependencies at once.

        Transient dependencies are created fresh on each resolution.

        Args:
            dependencies: Dictionary mapping identifiers to factories.
        """
        for identifier, factory in dependencies.items():
            self.register(identifier, factory, Lifetime.TRANSIENT)

    def register_scoped(self, dependencies: Dict[Hashable, Factory]) -> None:
        """Register multiple scoped dependencies at once.

        Scoped dependencies are created once per scope and can only be resolved
        through a scope.

        Args:
            dependencies: Dictionary mapping identifiers to factories.
        """
        for identifier, factory in dependencies.items():
            self.register(identifier, factory, Lifetime.SCOPED)

    def register_instance(self, identifier: Hashable, instance: Any) -> None:
        """Bind an already constructed object as a singleton."""
        self.register(identifier, lambda _: instance, Lifetime.SINGLETON)

    def register_class(
        self,
        identifier: Hashable,
        implementation: Optional[Type] = None,
        lifetime: Union[Lifetime, str] = Lifetime.TRANSIENT,
    ) -> None:
        """Register a class whose constructor dependencies are auto-wired.

        Args:
            identifier: The identifier to bind.
            implementation: Class to construct; defaults to the identifier itself.
            lifetime: How long the built instance should be reused.

        Raises:
            RegistrationError: If the class cannot be auto-wired.

        Example:
            >>> container.register_class(UserRepository, SqlUserRepository, Lifetime.SINGLETON)
        """
        cls = implementation if implementation is not None else identifier
        self.register(identifier, autowire(cls), lifetime)

    def is_registered(self, identifier: Hashable) -> bool:
        with self._registry_lock:
            return identifier in self._registry

    def __contains__(self, identifier: Hashable) -> bool:
        return self.is_registered(identifier)

    def get_binding(self, identifier: Hashable) -> Optional[Binding]:
        with self._registry_lock:
            return self._registry.get(identifier)

    def get_registry_copy(self) -> Dict[Hashable, Binding]:
        """Get a copy of the registry.

        Returns:
            Shallow copy mapping identifiers to bindings.
        """
        with self._registry_lock:
            return self._registry.copy()

    def _lookup(self, identifier: Hashable) -> Binding:
        with self._registry_lock:
            binding = self._registry.get(identifier)
        if binding is None:
            raise UnresolvedDependencyError(identifier)
        return binding

    def resolve(self, identifier: Hashable) -> Any:
        """Resolve and return an instance for the identifier.

        Args:
            identifier: The identifier to resolve.

        Returns:
            Fully constructed instance.

        Raises:
            UnresolvedDependencyError: If no binding is registered.
            CircularDependencyError: If a circular dependency is detected.
            FactoryError: If the bound factory raised.
            ScopeError: If the binding is scoped.

        Example:
            >>> user_service = container.resolve(UserService)
        """
        return self.resolve_in(identifier, None)

    def resolve_all(self, identifiers: Iterable[Hashable]) -> List[Any]:
        """Resolve identifiers in order; the first failure propagates."""
        return [self.resolve(identifier) for identifier in identifiers]

    def resolve_in(self, identifier: Hashable, scope: Optional[Scope]) -> Any:
        """Resolve an identifier on behalf of a scope, or of the root when ``scope`` is None.

        Singleton factories always receive the root container so they can never
        capture scoped instances. Transient and scoped factories receive the
        resolver they were requested from.
        """
        binding = self._lookup(identifier)

        with self._tracker.track(identifier):
            if not binding.lifetime.is_cached:
                return self._build(binding, scope if scope is not None else self)

            if binding.lifetime == Lifetime.SINGLETON:
                return self._singletons.get_or_create(binding, lambda: self._build(binding, self))

            # Lifetime.SCOPED
            if scope is None:
                raise ScopeError(
                    f"Cannot resolve scoped dependency {describe_identifier(identifier)} "
                    "outside of a scope; use create_scope()"
                )
            return scope.instances.get_or_create(binding, lambda: self._build(binding, scope))

    def _build(self, binding: Binding, resolver: IResolver) -> Any:
        """Invoke a binding's factory, attaching the identifier to foreign errors."""
        try:
            return binding.factory(resolver)
        except ContainerError:
            raise
        except Exception as e:
            chain = self._tracker.current_chain()
            logger.debug(
                "Factory for %s failed while resolving %s",
                describe_identifier(binding.identifier),
                " -> ".join(describe_identifier(i) for i in chain),
                exc_info=True,
            )
            raise FactoryError(binding.identifier, e, chain) from e

    def create_scope(self) -> Scope:
        """Create a scope for scoped lifetimes.

        Scopes read this container's bindings and share its singletons but
        keep separate instances for scoped dependencies.

        Returns:
            New open scope.

        Example:
            >>> with container.create_scope() as scope:
            ...     ctx1 = scope.resolve(RequestContext)
            ...     ctx2 = scope.resolve(RequestContext)
            ...     assert ctx1 is ctx2
        """
        scope = Scope(self)
        logger.debug("Opened scope %s", id(scope))
        return scope

    def clear(self) -> None:
        """Clear all bindings and cached singletons."""
        with self._registry_lock:
            self._registry.clear()
        self._singletons.clear()
