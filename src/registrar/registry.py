"""Registration and resolution of named resolvers."""

import inspect
import logging
import threading
from typing import Any, Callable, Optional

from registrar.domain import ResolverEntry, ResolverLike
from registrar.errors import NotRegistered

__all__ = ["Registry", "inferred_name"]

logger = logging.getLogger(__name__)

FACTORY_PREFIX = "make_"


def inferred_name(target: Callable) -> str:
    """Name a resolver after the callable it was declared with.

    Factory functions lose their 'make_' prefix; classes and other
    functions keep their own name.

    Example:
        >>> inferred_name(make_mailer)   # Returns "mailer"
        >>> inferred_name(Mailer)        # Returns "Mailer"
    """
    name = target.__name__
    if inspect.isfunction(target) and name.startswith(FACTORY_PREFIX):
        return name[len(FACTORY_PREFIX):]
    return name


class Registry:
    """Named resolvers with optional once-only instantiation.

    A resolver is invoked each time its name is resolved, unless it was
    registered as a singleton, in which case its first result is cached and
    returned from then on. Values injected with :meth:`instance` are cached
    directly and take priority over any registered resolver.

    The registry lock only guards the two maps. A singleton is built under
    a lock of its own name, so concurrent first resolutions build it once
    while resolvers in other registries, or for other names, keep running.

    Example:
        >>> registry = Registry()
        >>> registry.register("name", lambda: "Fred")
        >>> registry.singleton("mailer", lambda r: Mailer(r.resolve("name")))
        >>> registry.resolve("mailer") is registry.resolve("mailer")
        True
    """

    def __init__(self):
        self._resolvers: dict[str, ResolverEntry] = {}
        self._singletons: dict[str, Any] = {}
        self._building: dict[str, threading.RLock] = {}
        self._lock = threading.Lock()

    def register(self, name: str, resolver: ResolverLike, singleton: bool = False):
        """Register a resolver under a name, replacing any previous one.

        Args:
            name: The name the resolver is registered under.
            resolver: Callable producing the value. It is given this registry
                if it has a required positional parameter.
            singleton: If True, the resolver runs at most once and its result
                is reused.
        """
        entry = ResolverEntry.of(resolver, singleton)
        with self._lock:
            if name in self._resolvers:
                logger.debug("Overwriting resolver for %r", name)
            self._resolvers[name] = entry
        logger.debug("Registered %r (singleton=%s)", name, singleton)

    def registered(self, name: str) -> bool:
        """Determine whether a resolver has been registered under a name.

        Injected instances are not considered.
        """
        with self._lock:
            return name in self._resolvers

    def singleton(self, name: str, resolver: ResolverLike):
        """Register a resolver whose first result is cached and reused."""
        self.register(name, resolver, True)

    def instance(self, name: str, value: Any):
        """Register an existing value as the resolved instance for a name.

        The value is returned by :meth:`resolve` without consulting any
        resolver registered under the same name.
        """
        with self._lock:
            self._singletons[name] = value
        logger.debug("Stored instance for %r", name)

    def resolve(self, name: str) -> Any:
        """Resolve a name to a value.

        Args:
            name: The name to resolve.

        Returns:
            The cached instance for the name if there is one, otherwise the
            result of invoking its resolver.

        Raises:
            NotRegistered: If the name has no cached instance and no resolver.
        """
        with self._lock:
            if name in self._singletons:
                return self._singletons[name]

            entry = self._resolvers.get(name)
            if entry is None:
                raise NotRegistered(name)

            if entry.singleton:
                building = self._building.setdefault(name, threading.RLock())

        if not entry.singleton:
            return entry.invoke(self)

        with building:
            with self._lock:
                if name in self._singletons:
                    return self._singletons[name]

            value = entry.invoke(self)

            with self._lock:
                # An instance injected while building wins.
                value = self._singletons.setdefault(name, value)
            logger.debug("Cached singleton %r", name)
            return value

    def provides(self, name: Optional[str] = None, singleton: bool = False) -> Callable:
        """Decorator to register a function as a resolver.

        Args:
            name: Optional name to register under; defaults to the function
                name with any 'make_' prefix removed.
            singleton: If True, the resolver runs at most once.

        Returns:
            A decorator that registers the function and returns it unchanged.

        Example:
            @registry.provides(singleton=True)
            def make_mailer(registry) -> Mailer:
                return Mailer(registry.resolve("transport"))
        """

        def decorator(func):
            self.register(name or inferred_name(func), func, singleton)
            return func

        return decorator
