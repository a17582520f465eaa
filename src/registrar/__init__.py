"""Registrar: a minimal inversion-of-control registry.

Registrar maps names to resolvers: callables that construct a value when the
name is resolved. Resolvers are given the registry they were resolved from,
so they can resolve their own dependencies by name. A resolver registered as
a singleton runs at most once and its first result is reused.

Basic Usage:
    >>> from registrar import Registry
    >>>
    >>> registry = Registry()
    >>> registry.register("name", lambda: "Fred")
    >>> registry.singleton("greeting", lambda r: f"Hello {r.resolve('name')}")
    >>> registry.resolve("greeting")
    'Hello Fred'

Several independent registries can be kept in a directory, which forwards
calls that do not name a registry to its default one:
    >>> from registrar import get_directory
    >>>
    >>> directory = get_directory()
    >>> directory.bootstrap({"name": {"resolver": lambda: "Fred"}})
    >>> directory.resolve("name")
    'Fred'
    >>> directory.directory("models").register("user", User)

The package consists of:
    - registry: Registration and resolution of named resolvers
    - directory: The facade over named registries
    - domain: Value types (Resolver, ResolverEntry, Registration)
    - errors: Package-specific exceptions
"""

from registrar.directory import DEFAULT_REGISTRY, RegistryDirectory, get_directory
from registrar.domain import Registration, Resolver, ResolverEntry, ResolverLike
from registrar.errors import NotRegistered, RegistryError
from registrar.registry import Registry

__all__ = [
    "DEFAULT_REGISTRY",
    "NotRegistered",
    "Registration",
    "Registry",
    "RegistryDirectory",
    "RegistryError",
    "Resolver",
    "ResolverEntry",
    "ResolverLike",
    "get_directory",
]
