"""Typed key-value collections and pagination over them."""

from __future__ import annotations

import copy
from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Iterator, TypeVar

DEFAULT_LIMIT = 100
_UINT64_MAX = (1 << 64) - 1

K = TypeVar("K")
V = TypeVar("V")


class NotFoundError(LookupError):
    """Raised when a collection holds no value for the requested key."""


@dataclass(frozen=True)
class _KeyCodec:
    name: str
    encode: Callable[[Any], bytes]
    check: Callable[[Any], None]


def _check_string(key: Any) -> None:
    if not isinstance(key, str):
        raise TypeError(f"string key expected, got {type(key).__name__}")


def _check_uint64(key: Any) -> None:
    if not isinstance(key, int) or isinstance(key, bool):
        raise TypeError(f"integer key expected, got {type(key).__name__}")
    if not 0 <= key <= _UINT64_MAX:
        raise ValueError(f"key {key} out of uint64 range")


STRING_KEY = _KeyCodec("string", lambda key: key.encode("utf-8"), _check_string)
UINT64_KEY = _KeyCodec("uint64", lambda key: key.to_bytes(8, "big"), _check_uint64)


def _as_prefix(prefix: str | bytes) -> bytes:
    return prefix.encode("utf-8") if isinstance(prefix, str) else bytes(prefix)


class Item(Generic[V]):
    """A single stored value."""

    def __init__(self, prefix: str | bytes, name: str) -> None:
        self.prefix = _as_prefix(prefix)
        self.name = name
        self._value: V | None = None
        self._present = False

    def get(self) -> V:
        if not self._present:
            raise NotFoundError(f"collections: not found: {self.name}")
        return copy.deepcopy(self._value)

    def set(self, value: V) -> None:
        self._value = copy.deepcopy(value)
        self._present = True

    def has(self) -> bool:
        return self._present


class Map(Generic[K, V]):
    """Values stored under typed keys, iterated in key order."""

    def __init__(
        self, prefix: str | bytes, name: str, key_codec: _KeyCodec = STRING_KEY
    ) -> None:
        self.prefix = _as_prefix(prefix)
        self.name = name
        self.key_codec = key_codec
        self._entries: dict[K, V] = {}

    def get(self, key: K) -> V:
        self.key_codec.check(key)
        try:
            return copy.deepcopy(self._entries[key])
        except KeyError:
            raise NotFoundError(f"collections: not found: key '{key}' in {self.name}") from None

    def set(self, key: K, value: V) -> None:
        self.key_codec.check(key)
        self._entries[key] = copy.deepcopy(value)

    def has(self, key: K) -> bool:
        self.key_codec.check(key)
        return key in self._entries

    def remove(self, key: K) -> None:
        self.key_codec.check(key)
        self._entries.pop(key, None)

    def items(self) -> Iterator[tuple[K, V]]:
        """Yield (key, value) pairs in ascending key order."""
        return self._ordered(reverse=False)

    def _ordered(self, reverse: bool) -> Iterator[tuple[K, V]]:
        for key in sorted(self._entries, key=self.key_codec.encode, reverse=reverse):
            yield key, copy.deepcopy(self._entries[key])

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[K]:
        return (key for key, _ in self._ordered(reverse=False))


class Sequence:
    """A monotonically increasing counter starting at zero."""

    def __init__(self, prefix: str | bytes, name: str) -> None:
        self.prefix = _as_prefix(prefix)
        self.name = name
        self._value = 0

    def next(self) -> int:
        """Return the current value and advance the counter."""
        value = self._value
        self._value = value + 1
        return value

    def peek(self) -> int:
        return self._value

    def set(self, value: int) -> None:
        _check_uint64(value)
        self._value = value


@dataclass(frozen=True)
class PageRequest:
    key: bytes | None = None
    offset: int = 0
    limit: int = 0
    count_total: bool = False
    reverse: bool = False


@dataclass(frozen=True)
class PageResponse:
    next_key: bytes | None = None
    total: int = 0


def paginate(collection: Map, page: PageRequest | None = None) -> tuple[list, PageResponse]:
    """Return one page of a map's values and the cursor for the next page.

    A zero limit means the default limit and also counts the total.
    """
    page = replace(page) if page is not None else PageRequest()
    limit, count_total = page.limit, page.count_total
    if limit == 0:
        limit = DEFAULT_LIMIT
        count_total = True
    if page.key and page.offset > 0:
        raise ValueError("invalid request, either offset or key is expected, got both")

    encode = collection.key_codec.encode
    entries = list(collection._ordered(reverse=page.reverse))

    if page.key:
        if page.reverse:
            remaining = [(k, v) for k, v in entries if encode(k) <= page.key]
        else:
            remaining = [(k, v) for k, v in entries if encode(k) >= page.key]
        next_key = encode(remaining[limit][0]) if len(remaining) > limit else None
        return [v for _, v in remaining[:limit]], PageResponse(next_key=next_key)

    end = page.offset + limit
    next_key = encode(entries[end][0]) if len(entries) > end else None
    total = len(entries) if count_total else 0
    values = [v for _, v in entries[page.offset:end]]
    return values, PageResponse(next_key=next_key, total=total)