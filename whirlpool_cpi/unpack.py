"""Decoding of raw tick array account data into plain Python values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .borsh import BorshReader
from .pubkey import WHIRLPOOL_PROGRAM_ID, Pubkey
from .state import (
    DISCRIMINATOR_LENGTH,
    NUM_REWARDS,
    TICK_ARRAY_SIZE,
    AccountDiscriminatorError,
    Tick,
)

# Little-endian u64 0xbb42076ebebd6145.
TICK_ARRAY_DISCRIMINATOR = bytes.fromhex("4561bdbe6e0742bb")


class ConstraintOwnerError(ValueError):
    """Raised when the account is not owned by the Whirlpool program."""


class AccountDiscriminatorMismatchError(AccountDiscriminatorError):
    """Raised when the account data is not a tick array."""


@dataclass(frozen=True)
class UnpackedTick:
    """A tick read from a tick array account."""

    initialized: bool = False
    liquidity_net: int = 0
    liquidity_gross: int = 0
    fee_growth_outside_a: int = 0
    fee_growth_outside_b: int = 0
    reward_growths_outside: tuple = (0,) * NUM_REWARDS

    @classmethod
    def decode(cls, reader: BorshReader) -> UnpackedTick:
        chunk = BorshReader(reader.read_fixed(Tick.LEN))
        return cls(
            initialized=chunk.read_bool(),
            liquidity_net=chunk.read_i128(),
            liquidity_gross=chunk.read_u128(),
            fee_growth_outside_a=chunk.read_u128(),
            fee_growth_outside_b=chunk.read_u128(),
            reward_growths_outside=tuple(chunk.read_u128() for _ in range(NUM_REWARDS)),
        )


def _default_ticks() -> tuple:
    return tuple(UnpackedTick() for _ in range(TICK_ARRAY_SIZE))


@dataclass(frozen=True)
class UnpackedTickArray:
    """The contents of a tick array account."""

    start_tick_index: int = 0
    ticks: tuple = field(default_factory=_default_ticks)
    whirlpool: Pubkey = Pubkey()


def unpack_tick_array(owner: Pubkey, data) -> UnpackedTickArray:
    """Decode a tick array account after checking its owner and discriminator."""
    if owner != WHIRLPOOL_PROGRAM_ID:
        raise ConstraintOwnerError(f"account owner {owner} is not the Whirlpool program")

    reader = BorshReader(data)
    if reader.read_fixed(DISCRIMINATOR_LENGTH) != TICK_ARRAY_DISCRIMINATOR:
        raise AccountDiscriminatorMismatchError("account data is not a TickArray")

    start_tick_index = reader.read_i32()
    ticks = tuple(UnpackedTick.decode(reader) for _ in range(TICK_ARRAY_SIZE))
    whirlpool = reader.read_pubkey()
    return UnpackedTickArray(
        start_tick_index=start_tick_index, ticks=ticks, whirlpool=whirlpool
    )