"""Borsh binary reading and writing of the primitive types the program uses."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, TypeVar

from .pubkey import PUBKEY_LENGTH, Pubkey

T = TypeVar("T")


class BorshError(ValueError):
    """Raised when data cannot be read or a value cannot be written."""


class BorshReader:
    """Reads little-endian Borsh values from a byte buffer."""

    def __init__(self, data) -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def _take(self, size: int) -> bytes:
        if size < 0:
            raise BorshError("negative read size")
        end = self._offset + size
        if end > len(self._data):
            raise BorshError(
                f"unexpected end of data: need {size} bytes at offset {self._offset}, "
                f"have {self.remaining}"
            )
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def _int(self, size: int, signed: bool) -> int:
        return int.from_bytes(self._take(size), "little", signed=signed)

    def read_bool(self) -> bool:
        value = self._take(1)[0]
        if value > 1:
            raise BorshError(f"invalid bool byte {value}")
        return value == 1

    def read_u8(self) -> int:
        return self._int(1, False)

    def read_u16(self) -> int:
        return self._int(2, False)

    def read_u32(self) -> int:
        return self._int(4, False)

    def read_u64(self) -> int:
        return self._int(8, False)

    def read_u128(self) -> int:
        return self._int(16, False)

    def read_i32(self) -> int:
        return self._int(4, True)

    def read_i128(self) -> int:
        return self._int(16, True)

    def read_pubkey(self) -> Pubkey:
        return Pubkey(self._take(PUBKEY_LENGTH))

    def read_fixed(self, size: int) -> bytes:
        return self._take(size)

    def read_option(self, read_item: Callable[[BorshReader], T]) -> Optional[T]:
        tag = self.read_u8()
        if tag == 0:
            return None
        if tag == 1:
            return read_item(self)
        raise BorshError(f"invalid option tag {tag}")

    def read_vec(self, read_item: Callable[[BorshReader], T]) -> list[T]:
        count = self.read_u32()
        return [read_item(self) for _ in range(count)]


class BorshWriter:
    """Accumulates little-endian Borsh values."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def _int(self, value: int, size: int, signed: bool) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise BorshError(f"expected an integer, got {value!r}")
        try:
            self._buffer += value.to_bytes(size, "little", signed=signed)
        except OverflowError:
            kind = "i" if signed else "u"
            raise BorshError(f"{value} does not fit in {kind}{size * 8}") from None

    def write_bool(self, value: bool) -> None:
        self._buffer.append(1 if value else 0)

    def write_u8(self, value: int) -> None:
        self._int(value, 1, False)

    def write_u16(self, value: int) -> None:
        self._int(value, 2, False)

    def write_u32(self, value: int) -> None:
        self._int(value, 4, False)

    def write_u64(self, value: int) -> None:
        self._int(value, 8, False)

    def write_u128(self, value: int) -> None:
        self._int(value, 16, False)

    def write_i32(self, value: int) -> None:
        self._int(value, 4, True)

    def write_i128(self, value: int) -> None:
        self._int(value, 16, True)

    def write_pubkey(self, key: Pubkey) -> None:
        if not isinstance(key, Pubkey):
            raise BorshError(f"expected a Pubkey, got {key!r}")
        self._buffer += bytes(key)

    def write_fixed(self, data) -> None:
        self._buffer += bytes(data)

    def write_option(
        self, value: Optional[T], write_item: Callable[[BorshWriter, T], None]
    ) -> None:
        if value is None:
            self._buffer.append(0)
        else:
            self._buffer.append(1)
            write_item(self, value)

    def write_vec(
        self, items: Iterable[T], write_item: Callable[[BorshWriter, T], None]
    ) -> None:
        items = list(items)
        self.write_u32(len(items))
        for item in items:
            write_item(self, item)

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)