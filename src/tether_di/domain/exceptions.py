from typing import Any, Hashable, List, Optional, Sequence


def describe_identifier(identifier: Any) -> str:
    """Render an identifier for error and log messages.

    Classes, protocols and functions are shown by ``__name__``; anything else
    (string tags, enum members, tuples) by ``str()``.
    """
    name = getattr(identifier, "__name__", None)
    if isinstance(name, str):
        return name
    return str(identifier)


class ContainerError(Exception):
    """Base exception for container errors."""


class UnresolvedDependencyError(ContainerError):
    """Raised when no binding is registered for the requested identifier.

    Attributes:
        identifier: The identifier that could not be resolved.
    """

    def __init__(self, identifier: Hashable) -> None:
        self.identifier = identifier
        super().__init__(f"No binding registered for identifier: {describe_identifier(identifier)}")


class CircularDependencyError(ContainerError):
    """Raised when a resolution chain revisits an identifier.

    Attributes:
        dependency_chain: Active resolution chain ending with the repeated identifier.
    """

    def __init__(self, dependency_chain: Sequence[Hashable]) -> None:
        self.dependency_chain: List[Hashable] = list(dependency_chain)
        message = f"Circular dependency detected: {' -> '.join(describe_identifier(i) for i in self.dependency_chain)}"
        super().__init__(message)

    @property
    def cycle(self) -> List[Hashable]:
        """The part of the chain that forms the loop, from first occurrence to repeat."""
        if not self.dependency_chain:
            return []
        repeated = self.dependency_chain[-1]
        return self.dependency_chain[self.dependency_chain.index(repeated) :]


class FactoryError(ContainerError):
    """Raised when a bound factory itself fails.

    The original exception is kept untouched as ``__cause__``.

    Attributes:
        identifier: The identifier whose factory raised.
        resolution_chain: Active resolution chain at the time of failure.
    """

    def __init__(
        self,
        identifier: Hashable,
        cause: BaseException,
        resolution_chain: Optional[Sequence[Hashable]] = None,
    ) -> None:
        self.identifier = identifier
        self.resolution_chain: List[Hashable] = list(resolution_chain or [identifier])
        message = (
            f"Factory for {describe_identifier(identifier)} failed: {type(cause).__name__}: {cause}"
        )
        super().__init__(message)

    @property
    def original(self) -> Optional[BaseException]:
        """The exception raised by the factory."""
        return self.__cause__


class RegistrationError(ContainerError):
    """Raised for invalid registrations.

    This occurs when:
    - The factory is not callable or the identifier is not hashable.
    - An unknown lifetime value is provided.
    - Overriding an existing binding while overrides are disabled.
    - A class cannot be auto-wired.
    """


class ScopeError(ContainerError):
    """Raised for invalid scope operations.

    This occurs when:
    - Resolving a scoped binding from the root container.
    - Resolving from a scope that has already been closed.
    """
