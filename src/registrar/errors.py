__all__ = ["RegistryError", "NotRegistered"]


class RegistryError(Exception):
    """Base class for errors raised by registrar."""

    pass


class NotRegistered(RegistryError, KeyError):
    """Raised when a name has neither a cached instance nor a registered resolver."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return (
            f"Error resolving [{self.name}]. "
            "No resolver has been registered in the registry."
        )
