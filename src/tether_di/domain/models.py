from typing import TYPE_CHECKING, Any, Callable, Hashable, List

from pydantic import BaseModel, ConfigDict, Field

from tether_di.domain.enums import Lifetime
from tether_di.domain.exceptions import CircularDependencyError

if TYPE_CHECKING:
    from tether_di.domain.interfaces import IResolver


class Binding(BaseModel):
    """Value object associating an identifier with a factory and a lifetime.

    Attributes:
        identifier: The key consumers resolve (a class, protocol or tag).
        factory: Function that receives the resolver and returns an instance.
        lifetime: How long the instance should live.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    identifier: Hashable = Field(..., description="The identifier the binding satisfies.")
    factory: Callable[["IResolver"], Any] = Field(..., description="The factory building the instance.")
    lifetime: Lifetime = Field(default=Lifetime.TRANSIENT, description="The lifetime of the binding.")


class ResolutionContext(BaseModel):
    """Tracks the chain of identifiers being resolved by one top-level call.

    Attributes:
        stack: Identifiers currently being resolved, outermost first.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    stack: List[Any] = Field(
        default_factory=list,
        description="Stack of identifiers currently being resolved.",
    )

    def push(self, identifier: Hashable) -> None:
        """Add an identifier to the chain.

        Raises:
            CircularDependencyError: If the identifier is already in the chain.
        """
        if identifier in self.stack:
            raise CircularDependencyError(self.stack + [identifier])
        self.stack.append(identifier)

    def pop(self) -> None:
        """Remove the most recent identifier from the chain."""
        if self.stack:
            self.stack.pop()

    def chain(self) -> List[Hashable]:
        """Return a copy of the active chain."""
        return list(self.stack)

    @property
    def is_empty(self) -> bool:
        return not self.stack
