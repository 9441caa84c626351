import inspect
from typing import Any, Callable, List, Tuple, Type, get_type_hints

from tether_di.domain import IResolver, RegistrationError


def collect_constructor_dependencies(cls: Type) -> List[Tuple[str, Any]]:
    """Return the (parameter name, type hint) pairs a class constructor requires.

    Parameters with default values and ``*args``/``**kwargs`` are skipped.

    Args:
        cls: The class to inspect.

    Raises:
        RegistrationError: If a required parameter lacks a type hint or the
            hints cannot be evaluated.
    """
    if not inspect.isclass(cls):
        raise RegistrationError(f"Cannot auto-wire {cls!r}: only classes can be auto-wired.")

    if cls.__init__ is object.__init__:
        return []

    try:
        signature = inspect.signature(cls.__init__)
        type_hints = get_type_hints(cls.__init__)
    except Exception as e:
        raise RegistrationError(f"Cannot inspect constructor of {cls.__name__}: {e}") from e

    dependencies = []
    for param_name, param in signature.parameters.items():
        if param_name == "self":
            continue

        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue

        # Let defaults apply
        if param.default is not inspect.Parameter.empty:
            continue

        if param_name not in type_hints:
            raise RegistrationError(
                f"Cannot auto-wire {cls.__name__}: parameter '{param_name}' lacks type hint "
                "and has no default value."
            )

        dependencies.append((param_name, type_hints[param_name]))

    return dependencies


def autowire(cls: Type) -> Callable[[IResolver], Any]:
    """Build a factory that constructs ``cls`` with its dependencies resolved.

    The constructor is inspected once, here; the returned factory resolves each
    required parameter by its type hint through the resolver it is given.

    Args:
        cls: The class to construct.

    Returns:
        Factory suitable for ``Container.register``.

    Example:
        >>> class UserService:
        ...     def __init__(self, db: DatabaseConnection, logger: Logger):
        ...         self.db = db
        ...         self.logger = logger
        >>>
        >>> container.register(UserService, autowire(UserService))
    """
    dependencies = collect_constructor_dependencies(cls)

    def factory(resolver: IResolver) -> Any:
        kwargs = {param_name: resolver.resolve(param_type) for param_name, param_type in dependencies}
        return cls(**kwargs)

    factory.__name__ = f"autowire_{cls.__name__}"
    factory.__qualname__ = factory.__name__
    return factory
