from typing import Any, Callable, Dict, Hashable, Optional, Tuple, Union

from tether_di.application import Container
from tether_di.domain import ContainerSettings, Factory, IContainer, Lifetime


class TestContainer(Container):
    """Container for tests with dependency override capabilities.

    Starts from a copy of a parent container's bindings and settings, so
    overrides never leak back into the parent.

    Attributes:
        _parent_container: The container bindings were copied from.
        _overrides: Identifiers overridden in this container.

    Example:
        >>> def test_user_service():
        ...     with TestContainer(container) as test_container:
        ...         mock_email = MockEmailService()
        ...         test_container.mock_singleton(EmailService, mock_email)
        ...
        ...         service = test_container.resolve(UserService)
        ...         service.send_welcome_email(user)
        ...         assert mock_email.send_called
    """

    __test__ = False  # Tell pytest not to collect this class as a test

    def __init__(self, parent_container: Optional[IContainer] = None) -> None:
        """Initialize the test container.

        Args:
            parent_container: Optional container to copy bindings from.
                            If None, creates an empty container.
        """
        parent_settings: Optional[ContainerSettings] = getattr(parent_container, "settings", None)
        if parent_settings is None:
            parent_settings = ContainerSettings()
        # Overriding is the point of a test container
        super().__init__(parent_settings.model_copy(update={"allow_override": True}))
        self._parent_container = parent_container
        self._overrides: Dict[Hashable, Any] = {}
        self._load_parent_bindings()

    def _load_parent_bindings(self) -> None:
        if self._parent_container is None:
            return
        with self._registry_lock:
            self._registry = self._parent_container.get_registry_copy()

    def mock_singleton(self, identifier: Hashable, mock_instance: Any) -> None:
        """Replace a dependency with a fixed mock instance.

        Args:
            identifier: The identifier to mock.
            mock_instance: The mock instance to return.

        Example:
            >>> test_container.mock_singleton(DatabaseConnection, mock_db)
            >>> assert test_container.resolve(UserService).db is mock_db
        """
        self._overrides[identifier] = mock_instance
        self.register_instance(identifier, mock_instance)

    def mock_transient(self, identifier: Hashable, factory: Callable[[], Any]) -> None:
        """Replace a dependency with a factory called on every resolution.

        Args:
            identifier: The identifier to mock.
            factory: Zero-argument function returning a mock instance.
        """
        self._overrides[identifier] = factory
        self.register(identifier, lambda _: factory(), Lifetime.TRANSIENT)

    def override_registration(
        self,
        identifier: Hashable,
        factory: Factory,
        lifetime: Union[Lifetime, str] = Lifetime.TRANSIENT,
    ) -> None:
        """Override a binding with a custom factory and lifetime.

        Example:
            >>> test_container.override_registration(
            ...     CacheService,
            ...     lambda c: InMemoryCacheService(),  # Instead of Redis
            ...     Lifetime.SINGLETON,
            ... )
        """
        self._overrides[identifier] = factory
        self.register(identifier, factory, lifetime)

    @property
    def overridden(self) -> Tuple[Hashable, ...]:
        """Identifiers currently overridden in this container."""
        return tuple(self._overrides)

    def reset_overrides(self) -> None:
        """Remove all overrides and restore the parent's bindings."""
        self._overrides.clear()
        self._singletons.clear()
        if self._parent_container is not None:
            self._load_parent_bindings()
        else:
            with self._registry_lock:
                self._registry.clear()

    def __enter__(self) -> "TestContainer":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.reset_overrides()
        return False


def create_mock_container(*singletons: Tuple[Hashable, Any]) -> TestContainer:
    """Create a test container with pre-configured mock singletons.

    Args:
        *singletons: Tuples of (identifier, mock_instance).

    Returns:
        TestContainer with mocked dependencies.

    Example:
        >>> test_container = create_mock_container(
        ...     (DatabaseConnection, mock_db),
        ...     (CacheService, mock_cache),
        ... )
    """
    container = TestContainer()

    for identifier, mock_instance in singletons:
        container.mock_singleton(identifier, mock_instance)

    return container
