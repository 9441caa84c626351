"""Application layer - Scoped resolution."""

import logging
import threading
import weakref
from typing import TYPE_CHECKING, Any, Hashable, Iterable, List, Optional

from tether_di.application.instance_cache import InstanceCache
from tether_di.domain import IScope, ScopeError

if TYPE_CHECKING:
    from tether_di.application.container import Container

logger = logging.getLogger(__name__)


class Scope(IScope):
    """Child resolver owning the instances of scoped bindings.

    A scope reads the live registry of its root container and shares its
    singletons, but keeps a private cache for ``Lifetime.SCOPED`` bindings.
    Closing a scope drops that cache and closes any nested scopes.

    Attributes:
        _container: The root container holding bindings and singletons.
        _parent: The enclosing scope, if this one is nested.
        _instances: Cache for scoped instances of this scope.
        _children: Nested scopes still open.

    Example:
        >>> with container.create_scope() as scope:
        ...     ctx1 = scope.resolve(RequestContext)
        ...     ctx2 = scope.resolve(RequestContext)
        ...     assert ctx1 is ctx2
    """

    def __init__(self, container: "Container", parent: Optional["Scope"] = None) -> None:
        self._container = container
        self._parent = parent
        self._instances = InstanceCache(thread_safe=container.settings.thread_safe)
        self._children: "weakref.WeakSet[Scope]" = weakref.WeakSet()
        self._children_lock = threading.Lock()
        self._closed = False

    @property
    def container(self) -> "Container":
        return self._container

    @property
    def parent(self) -> Optional["Scope"]:
        return self._parent

    @property
    def instances(self) -> InstanceCache:
        return self._instances

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise ScopeError("Cannot resolve from a scope that has been closed.")

    def resolve(self, identifier: Hashable) -> Any:
        """Resolve an identifier within this scope.

        Scoped bindings are cached per scope; singletons come from the root
        container; transients are built fresh with this scope as resolver.

        Raises:
            ScopeError: If the scope is closed.
        """
        self._ensure_open()
        return self._container.resolve_in(identifier, self)

    def resolve_all(self, identifiers: Iterable[Hashable]) -> List[Any]:
        return [self.resolve(identifier) for identifier in identifiers]

    def create_scope(self) -> "Scope":
        """Create a nested scope with its own scoped instances.

        The nested scope is closed together with this one.
        """
        self._ensure_open()
        child = Scope(self._container, parent=self)
        with self._children_lock:
            self._children.add(child)
        logger.debug("Opened nested scope %s under %s", id(child), id(self))
        return child

    def close(self) -> None:
        """Close nested scopes and drop every scoped instance.

        Closing an already closed scope does nothing.
        """
        if self._closed:
            return
        self._closed = True

        with self._children_lock:
            children = list(self._children)
            self._children.clear()
        for child in children:
            child.close()

        self._instances.close()
        logger.debug("Closed scope %s", id(self))
