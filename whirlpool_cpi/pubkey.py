"""Base58 encoding and the 32-byte public key type used by the program."""

from __future__ import annotations

from dataclasses import dataclass

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: index for index, char in enumerate(_ALPHABET)}

PUBKEY_LENGTH = 32


def b58encode(data: bytes) -> str:
    """Encode bytes as base58 text, keeping leading zero bytes as '1'."""
    data = bytes(data)
    stripped = data.lstrip(b"\x00")
    leading = len(data) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_ALPHABET[remainder])
    return "1" * leading + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode base58 text into bytes; raise ValueError on foreign characters."""
    number = 0
    for char in text:
        try:
            digit = _INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character {char!r}") from None
        number = number * 58 + digit
    leading = len(text) - len(text.lstrip("1"))
    body = number.to_bytes((number.bit_length() + 7) // 8, "big") if number else b""
    return b"\x00" * leading + body


@dataclass(frozen=True)
class Pubkey:
    """A 32-byte account address; the default value is all zeros."""

    raw: bytes = bytes(PUBKEY_LENGTH)

    def __post_init__(self) -> None:
        if not isinstance(self.raw, (bytes, bytearray, memoryview)):
            raise TypeError("a public key is built from bytes")
        raw = bytes(self.raw)
        if len(raw) != PUBKEY_LENGTH:
            raise ValueError(f"a public key is {PUBKEY_LENGTH} bytes, got {len(raw)}")
        object.__setattr__(self, "raw", raw)

    @classmethod
    def from_base58(cls, text: str) -> Pubkey:
        return cls(b58decode(text))

    def to_base58(self) -> str:
        return b58encode(self.raw)

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return self.to_base58()

    def __repr__(self) -> str:
        return f"Pubkey({self.to_base58()!r})"


WHIRLPOOL_PROGRAM_ID = Pubkey.from_base58("whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc")