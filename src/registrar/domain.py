"""Value types shared by registries and the directory."""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Protocol, TYPE_CHECKING, Union

if TYPE_CHECKING:
    from registrar.registry import Registry

__all__ = ["Resolver", "ResolverLike", "ResolverEntry", "Registration"]


class Resolver(Protocol):
    """Constructs a value, given access to the registry it was resolved from.

    Any callable taking the registry as its single positional argument
    satisfies this protocol.
    """

    def __call__(self, registry: "Registry") -> Any: ...


ResolverLike = Union[Resolver, Callable[[], Any]]
"""Anything that can be registered: a :class:`Resolver`, or a callable
taking no required arguments (``dict``, ``lambda: "Fred"``, a class with
defaulted constructor arguments)."""


@dataclass(frozen=True)
class ResolverEntry:
    """A registered resolver together with its instantiation mode.

    Attributes:
        resolver: The callable producing the value.
        singleton: Whether the first produced value is cached and reused.
        accepts_registry: Whether the resolver is called with the registry.
    """

    resolver: ResolverLike
    singleton: bool
    accepts_registry: bool

    @classmethod
    def of(cls, resolver: ResolverLike, singleton: bool = False) -> "ResolverEntry":
        """Create an entry, deciding once how the resolver is to be called.

        Example:
            >>> ResolverEntry.of(lambda: "Fred").accepts_registry
            False
            >>> ResolverEntry.of(lambda registry: registry.resolve("name")).accepts_registry
            True
            >>> ResolverEntry.of(dict).accepts_registry
            False
        """
        return cls(resolver, singleton, _accepts_registry(resolver))

    def invoke(self, registry: "Registry") -> Any:
        if self.accepts_registry:
            return self.resolver(registry)
        return self.resolver()


@dataclass(frozen=True)
class Registration:
    """One entry of a bootstrap batch.

    Attributes:
        name: The name the resolver is registered under.
        resolver: The callable producing the value.
        singleton: Whether the resolver runs at most once.
    """

    name: str
    resolver: ResolverLike
    singleton: bool = False


def _accepts_registry(resolver: ResolverLike) -> bool:
    """Check whether a resolver requires the registry as an argument.

    Only a required positional parameter asks for the registry. Defaulted
    parameters and ``*args`` are left alone, and callables whose signature
    cannot be inspected are called without arguments.

    Example:
        >>> _accepts_registry(lambda: 1)              # False
        >>> _accepts_registry(lambda r: 1)            # True
        >>> _accepts_registry(lambda r=None: 1)       # False
        >>> _accepts_registry(list)                   # False
    """
    try:
        sig = inspect.signature(resolver)
    except (TypeError, ValueError):
        return False

    return any(
        p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        and p.default is inspect.Parameter.empty
        for p in sig.parameters.values()
    )
