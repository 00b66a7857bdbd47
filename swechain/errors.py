"""Registered chain errors and RPC status errors."""

from __future__ import annotations

import enum
from dataclasses import dataclass

ROOT_CODESPACE = "sdk"

_registry: dict[tuple[str, int], "RegisteredError"] = {}


@dataclass(frozen=True)
class RegisteredError:
    """An error kind identified by its codespace and code."""

    codespace: str
    code: int
    description: str

    def wrap(self, message: str = "") -> "ChainError":
        """Return an exception of this kind carrying extra context."""
        return ChainError(self, message)


class ChainError(Exception):
    """An exception raised for a registered error kind."""

    def __init__(self, registered: RegisteredError, message: str = "") -> None:
        self.registered = registered
        self.message = message
        super().__init__(str(self))

    @property
    def codespace(self) -> str:
        return self.registered.codespace

    @property
    def code(self) -> int:
        return self.registered.code

    def matches(self, registered: RegisteredError) -> bool:
        """Tell whether this error is of the given registered kind."""
        return self.registered == registered

    def __str__(self) -> str:
        if not self.message:
            return self.registered.description
        return f"{self.message}: {self.registered.description}"


def register(codespace: str, code: int, description: str) -> RegisteredError:
    """Register a new error kind; each (codespace, code) pair may be used once."""
    key = (codespace, code)
    existing = _registry.get(key)
    if existing is not None:
        raise ValueError(
            f"error with code {code} is already registered: {existing.description!r}"
        )
    error = RegisteredError(codespace, code, description)
    _registry[key] = error
    return error


class StatusCode(enum.IntEnum):
    """RPC status codes."""

    OK = 0
    CANCELED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16

    @property
    def label(self) -> str:
        if self is StatusCode.OK:
            return "OK"
        return "".join(part.capitalize() for part in self.name.split("_"))


class StatusError(Exception):
    """An RPC error with a status code; equal when code and message are equal."""

    def __init__(self, code: StatusCode, message: str) -> None:
        self.code = StatusCode(code)
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"rpc error: code = {self.code.label} desc = {self.message}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StatusError):
            return NotImplemented
        return self.code == other.code and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.code, self.message))


ERR_UNAUTHORIZED = register(ROOT_CODESPACE, 4, "unauthorized")
ERR_INVALID_ADDRESS = register(ROOT_CODESPACE, 7, "invalid address")
ERR_INVALID_REQUEST = register(ROOT_CODESPACE, 18, "invalid request")
ERR_KEY_NOT_FOUND = register(ROOT_CODESPACE, 22, "key not found")
ERR_LOGIC = register(ROOT_CODESPACE, 35, "internal logic error")