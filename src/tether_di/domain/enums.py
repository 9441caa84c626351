from enum import Enum


class Lifetime(str, Enum):
    """Defines how long a resolved instance is reused.

    Attributes:
        TRANSIENT: New instance created on each resolution.
        SCOPED: Single instance per scope (e.g., per unit of work).
        SINGLETON: Single instance per container.
    """

    TRANSIENT = "transient"
    SCOPED = "scoped"
    SINGLETON = "singleton"

    def __str__(self) -> str:
        return self.value

    @property
    def is_cached(self) -> bool:
        """Whether instances of this lifetime are kept in an instance cache."""
        return self is not Lifetime.TRANSIENT
