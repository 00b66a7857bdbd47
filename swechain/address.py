"""Bech32 account addresses and module account derivation."""

from __future__ import annotations

import hashlib

DEFAULT_PREFIX = "cosmos"
MAX_ADDRESS_LENGTH = 255
_MAX_BECH32_LENGTH = 1023
_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_GENERATORS = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)


class AddressError(ValueError):
    """Raised when an address cannot be encoded or decoded."""


def _polymod(values: list[int]) -> int:
    checksum = 1
    for value in values:
        top = checksum >> 25
        checksum = ((checksum & 0x1FFFFFF) << 5) ^ value
        for bit, generator in enumerate(_GENERATORS):
            if (top >> bit) & 1:
                checksum ^= generator
    return checksum


def _expand_hrp(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _create_checksum(hrp: str, data: list[int]) -> list[int]:
    polymod = _polymod(_expand_hrp(hrp) + data + [0] * 6) ^ 1
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]


def _convert_bits(data, from_bits: int, to_bits: int, pad: bool) -> list[int]:
    acc = 0
    bits = 0
    result = []
    max_value = (1 << to_bits) - 1
    for value in data:
        if value < 0 or value >> from_bits:
            raise AddressError("invalid data range")
        acc = (acc << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            result.append((acc >> bits) & max_value)
    if pad:
        if bits:
            result.append((acc << (to_bits - bits)) & max_value)
    elif bits >= from_bits or (acc << (to_bits - bits)) & max_value:
        raise AddressError("invalid padding in bech32 data")
    return result


def _encode(hrp: str, data: bytes) -> str:
    five_bit = _convert_bits(data, 8, 5, pad=True)
    combined = five_bit + _create_checksum(hrp, five_bit)
    return hrp + "1" + "".join(_CHARSET[d] for d in combined)


def _decode(text: str) -> tuple[str, bytes]:
    if len(text) < 8 or len(text) > _MAX_BECH32_LENGTH:
        raise AddressError(f"invalid bech32 string length {len(text)}")
    if any(ord(c) < 33 or ord(c) > 126 for c in text):
        raise AddressError("invalid character in bech32 string")
    if text.lower() != text and text.upper() != text:
        raise AddressError("string not all lowercase or all uppercase")
    text = text.lower()
    separator = text.rfind("1")
    if separator < 1 or separator + 7 > len(text):
        raise AddressError(f"invalid separator index {separator}")
    hrp = text[:separator]
    try:
        data = [_CHARSET.index(c) for c in text[separator + 1:]]
    except ValueError:
        raise AddressError("invalid character in bech32 data part") from None
    if _polymod(_expand_hrp(hrp) + data) != 1:
        raise AddressError("invalid bech32 checksum")
    return hrp, bytes(_convert_bits(data[:-6], 5, 8, pad=False))


def _verify_format(data: bytes) -> None:
    if not data:
        raise AddressError("addresses cannot be empty")
    if len(data) > MAX_ADDRESS_LENGTH:
        raise AddressError(f"address max length is {MAX_ADDRESS_LENGTH}, got {len(data)}")


class Bech32Codec:
    """Converts account addresses between raw bytes and bech32 text."""

    def __init__(self, prefix: str = DEFAULT_PREFIX) -> None:
        self.prefix = prefix

    def string_to_bytes(self, text: str) -> bytes:
        """Decode a bech32 address carrying this codec's prefix."""
        if not text.strip():
            raise AddressError("empty address string is not allowed")
        hrp, data = _decode(text)
        if hrp != self.prefix:
            raise AddressError(
                f"hrp does not match bech32 prefix: expected '{self.prefix}' got '{hrp}'"
            )
        _verify_format(data)
        return data

    def bytes_to_string(self, data: bytes) -> str:
        """Encode raw address bytes; empty input gives an empty string."""
        if not data:
            return ""
        return _encode(self.prefix, bytes(data))


def module_address(name: str) -> bytes:
    """Derive the account address of a named module."""
    return hashlib.sha256(name.encode("utf-8")).digest()[:20]


def module_address_or_bech32(value: str, prefix: str = DEFAULT_PREFIX) -> bytes:
    """Decode value as a bech32 address, or derive a module address from it."""
    try:
        return Bech32Codec(prefix).string_to_bytes(value)
    except AddressError:
        return module_address(value)