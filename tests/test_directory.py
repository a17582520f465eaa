import itertools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from registrar import (
    DEFAULT_REGISTRY,
    NotRegistered,
    Registration,
    Registry,
    RegistryDirectory,
    get_directory,
)


@pytest.fixture
def directory() -> RegistryDirectory:
    return RegistryDirectory()


def test_directory_returns_same_registry_for_same_name(directory):
    models = directory.directory("models")

    assert isinstance(models, Registry)
    assert directory.directory("models") is models
    assert directory.directory("views") is not models


def test_default_registry_is_named_default(directory):
    assert directory.directory() is directory.directory(DEFAULT_REGISTRY)
    assert DEFAULT_REGISTRY == "default"


def test_named_registries_are_independent(directory):
    directory.directory("models").register("user", lambda: "model user")

    assert directory.directory("models").resolve("user") == "model user"
    assert not directory.registered("user")
    with pytest.raises(NotRegistered):
        directory.resolve("user")


def test_ambient_calls_forward_to_default_registry(directory):
    default = directory.directory("default")

    directory.register("name", lambda: "Fred")
    directory.singleton("mailer", lambda r: {"sender": r.resolve("name")})
    directory.instance("port", 25)

    assert default.registered("name")
    assert directory.registered("mailer")
    assert directory.resolve("name") == default.resolve("name") == "Fred"
    assert directory.resolve("mailer") is default.resolve("mailer")
    assert default.resolve("port") == 25


def test_ambient_provides_registers_in_default_registry(directory):
    @directory.provides(singleton=True)
    def make_mailer():
        return object()

    assert directory.directory().registered("mailer")
    assert directory.resolve("mailer") is directory.resolve("mailer")


def test_bootstrap_scenario(directory):
    directory.bootstrap(
        [
            Registration("a", lambda: "X"),
            Registration("b", lambda: 42, singleton=True),
        ]
    )

    assert directory.resolve("a") == "X"
    assert directory.resolve("b") == 42

    directory.register("a", lambda: "Y")
    assert directory.resolve("a") == "Y"


def test_bootstrap_accepts_mappings_with_names(directory):
    count = itertools.count(1)
    directory.bootstrap(
        [
            {"name": "plain", "resolver": lambda: next(count)},
            {"name": "once", "resolver": lambda: object(), "singleton": True},
        ]
    )

    assert directory.resolve("plain") == 1
    assert directory.resolve("plain") == 2
    assert directory.resolve("once") is directory.resolve("once")


def test_bootstrap_accepts_mapping_keyed_by_name(directory):
    directory.bootstrap(
        {
            "name": {"resolver": lambda: "Fred"},
            "mailer": {"resolver": lambda r: [r.resolve("name")], "singleton": True},
        }
    )

    assert directory.resolve("mailer") == ["Fred"]
    assert directory.resolve("mailer") is directory.resolve("mailer")


def test_bootstrap_later_entries_overwrite_earlier(directory):
    directory.bootstrap(
        [
            Registration("a", lambda: "first", singleton=True),
            Registration("a", lambda: "second"),
        ]
    )

    assert directory.resolve("a") == "second"
    assert directory.resolve("a") == "second"


def test_bootstrap_entry_without_resolver_raises(directory):
    with pytest.raises(KeyError, match="resolver"):
        directory.bootstrap([{"name": "a"}])


def test_bootstrap_accepts_name_resolver_tuples(directory):
    directory.bootstrap([("a", lambda: "X"), ("b", lambda: object(), True)])

    assert directory.resolve("a") == "X"
    assert directory.resolve("b") is directory.resolve("b")


def test_bootstrap_rejects_unrecognised_entries(directory):
    with pytest.raises(TypeError, match="is not a Registration"):
        directory.bootstrap(["a"])


def test_bootstrap_logs_entry_count(directory, caplog):
    with caplog.at_level(logging.INFO, logger="registrar"):
        directory.bootstrap([Registration("a", lambda: 1), Registration("b", lambda: 2)])

    assert "Bootstrapped 2 entries into registry 'default'" in caplog.text


def test_custom_default_registry_name():
    directory = RegistryDirectory(default="app")
    directory.bootstrap([Registration("a", lambda: "X")])

    assert directory.directory("app").resolve("a") == "X"
    assert not directory.directory("default").registered("a")


def test_concurrent_first_access_creates_one_registry(directory):
    barrier = threading.Barrier(8)

    def lookup(_):
        barrier.wait()
        return directory.directory("shared")

    with ThreadPoolExecutor(max_workers=8) as executor:
        registries = list(executor.map(lookup, range(8)))

    assert all(registry is registries[0] for registry in registries)


def test_get_directory_returns_process_wide_directory():
    directory = get_directory()

    assert isinstance(directory, RegistryDirectory)
    assert get_directory() is directory
