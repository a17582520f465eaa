"""Facade multiplexing named registries.

A :class:`RegistryDirectory` owns any number of :class:`Registry` instances,
keyed by name and created on first reference. Calls that do not name a
registry are forwarded to the default one, so the common case reads:

    >>> directory = get_directory()
    >>> directory.bootstrap([Registration("name", lambda: "Fred")])
    >>> directory.resolve("name")
    'Fred'
    >>> directory.directory("models").register("user", User)
"""

import logging
import threading
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional, Union

from registrar.domain import Registration, ResolverLike
from registrar.registry import Registry

__all__ = ["DEFAULT_REGISTRY", "RegistryDirectory", "get_directory"]

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY = "default"

BootstrapEntries = Union[
    Mapping[str, Mapping[str, Any]],
    Iterable[Union[Registration, Mapping[str, Any], tuple]],
]


class RegistryDirectory:
    """Named registries, with ambient access to a default one.

    Attributes:
        default: Name of the registry used by :meth:`bootstrap` and by the
            forwarding methods.
    """

    def __init__(self, default: str = DEFAULT_REGISTRY):
        self.default = default
        self._registries: dict[str, Registry] = {}
        self._lock = threading.Lock()

    def directory(self, name: Optional[str] = None) -> Registry:
        """Get the registry with the given name, creating it on first reference.

        Args:
            name: Registry name. Defaults to the default registry.

        Returns:
            The same :class:`Registry` instance on every call with this name.
        """
        name = self.default if name is None else name
        with self._lock:
            registry = self._registries.get(name)
            if registry is None:
                registry = self._registries[name] = Registry()
                logger.debug("Created registry %r", name)
            return registry

    def bootstrap(self, entries: BootstrapEntries):
        """Register a batch of resolvers in the default registry.

        Entries are registered in order, so a later entry replaces an earlier
        one with the same name.

        Args:
            entries: :class:`Registration` objects, ``(name, resolver[, singleton])``
                tuples, mappings with ``name``, ``resolver`` and optional
                ``singleton`` keys, or a single mapping from name to
                ``{"resolver": ..., "singleton": ...}``.

        Raises:
            TypeError: If an entry has none of these shapes.

        Example:
            >>> directory.bootstrap({
            ...     "name": {"resolver": lambda: "Fred"},
            ...     "mailer": {"resolver": make_mailer, "singleton": True},
            ... })
        """
        registry = self.directory()
        count = 0
        for registration in _registrations(entries):
            registry.register(registration.name, registration.resolver, registration.singleton)
            count += 1
        logger.info("Bootstrapped %d entries into registry %r", count, self.default)

    def register(self, name: str, resolver: ResolverLike, singleton: bool = False):
        self.directory().register(name, resolver, singleton)

    def registered(self, name: str) -> bool:
        return self.directory().registered(name)

    def singleton(self, name: str, resolver: ResolverLike):
        self.directory().singleton(name, resolver)

    def instance(self, name: str, value: Any):
        self.directory().instance(name, value)

    def resolve(self, name: str) -> Any:
        return self.directory().resolve(name)

    def provides(self, name: Optional[str] = None, singleton: bool = False) -> Callable:
        return self.directory().provides(name, singleton)


def _registrations(entries: BootstrapEntries) -> Iterable[Registration]:
    if isinstance(entries, Mapping):
        for name, value in entries.items():
            yield Registration(name, value["resolver"], value.get("singleton", False))
        return

    for entry in entries:
        if isinstance(entry, Registration):
            yield entry
        elif isinstance(entry, Mapping):
            yield Registration(entry["name"], entry["resolver"], entry.get("singleton", False))
        elif isinstance(entry, tuple) and len(entry) in (2, 3):
            yield Registration(*entry)
        else:
            raise TypeError(
                f"Bootstrap entry {entry!r} is not a Registration, a mapping "
                "or a (name, resolver[, singleton]) tuple"
            )


_directory: Optional[RegistryDirectory] = None
_directory_lock = threading.Lock()


def get_directory() -> RegistryDirectory:
    """Get the process-wide directory, creating it on first use."""
    global _directory
    with _directory_lock:
        if _directory is None:
            _directory = RegistryDirectory()
        return _directory
