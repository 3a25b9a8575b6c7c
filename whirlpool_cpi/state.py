"""Account layouts and argument types of the Whirlpool program, with their codecs."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ClassVar, Sequence, TypeVar

from .borsh import BorshError, BorshReader, BorshWriter
from .pubkey import Pubkey

T = TypeVar("T")
E = TypeVar("E", bound=Enum)

NUM_REWARDS = 3
TICK_ARRAY_SIZE = 88
POSITION_BITMAP_SIZE = 32
DISCRIMINATOR_LENGTH = 8


class AccountDiscriminatorError(BorshError):
    """Raised when account data does not start with the expected discriminator."""


def account_discriminator(name: str) -> bytes:
    """The 8-byte prefix that identifies an account type by name."""
    return hashlib.sha256(f"account:{name}".encode()).digest()[:DISCRIMINATOR_LENGTH]


def _read_array(reader: BorshReader, size: int, decode: Callable[[BorshReader], T]) -> tuple:
    return tuple(decode(reader) for _ in range(size))


def _write_array(
    writer: BorshWriter, items: Sequence[T], size: int, encode: Callable[[BorshWriter, T], None]
) -> None:
    if len(items) != size:
        raise BorshError(f"expected {size} items, got {len(items)}")
    for item in items:
        encode(writer, item)


def _write_exact(writer: BorshWriter, data: bytes, size: int) -> None:
    if len(data) != size:
        raise BorshError(f"expected {size} bytes, got {len(data)}")
    writer.write_fixed(data)


def _encode_item(writer: BorshWriter, item) -> None:
    item.encode(writer)


def _decode_enum(cls: type[E], reader: BorshReader) -> E:
    variant = reader.read_u8()
    try:
        return cls(variant)
    except ValueError:
        raise BorshError(f"invalid {cls.__name__} variant {variant}") from None


def _encode_enum(member: Enum, writer: BorshWriter) -> None:
    writer.write_u8(member.value)


class _Account:
    """Anchor account: discriminator, Borsh fields, zero padding up to LEN."""

    LEN: ClassVar[int]
    DISCRIMINATOR: ClassVar[bytes]

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        cls.DISCRIMINATOR = account_discriminator(cls.__name__)

    @classmethod
    def _fields_reader(cls, data) -> BorshReader:
        data = bytes(data)
        if len(data) < DISCRIMINATOR_LENGTH:
            raise AccountDiscriminatorError("account data is too short for a discriminator")
        if data[:DISCRIMINATOR_LENGTH] != cls.DISCRIMINATOR:
            raise AccountDiscriminatorError(f"data is not a {cls.__name__} account")
        return BorshReader(data[DISCRIMINATOR_LENGTH:])

    def _serialize(self, encode_fields: Callable[[BorshWriter], None]) -> bytes:
        writer = BorshWriter()
        writer.write_fixed(self.DISCRIMINATOR)
        encode_fields(writer)
        return writer.to_bytes().ljust(self.LEN, b"\x00")


# Inner structs


@dataclass(frozen=True)
class WhirlpoolRewardInfo:
    mint: Pubkey = Pubkey()
    vault: Pubkey = Pubkey()
    authority: Pubkey = Pubkey()
    emissions_per_second_x64: int = 0
    growth_global_x64: int = 0

    @classmethod
    def decode(cls, reader: BorshReader) -> WhirlpoolRewardInfo:
        return cls(
            mint=reader.read_pubkey(),
            vault=reader.read_pubkey(),
            authority=reader.read_pubkey(),
            emissions_per_second_x64=reader.read_u128(),
            growth_global_x64=reader.read_u128(),
        )

    def encode(self, writer: BorshWriter) -> None:
        writer.write_pubkey(self.mint)
        writer.write_pubkey(self.vault)
        writer.write_pubkey(self.authority)
        writer.write_u128(self.emissions_per_second_x64)
        writer.write_u128(self.growth_global_x64)


@dataclass(frozen=True)
class Tick:
    """One tick in packed layout: 113 bytes."""

    LEN: ClassVar[int] = 113

    initialized: bool = False
    liquidity_net: int = 0
    liquidity_gross: int = 0
    fee_growth_outside_a: int = 0
    fee_growth_outside_b: int = 0
    reward_growths_outside: tuple = (0,) * NUM_REWARDS

    @classmethod
    def decode(cls, reader: BorshReader) -> Tick:
        return cls(
            initialized=reader.read_bool(),
            liquidity_net=reader.read_i128(),
            liquidity_gross=reader.read_u128(),
            fee_growth_outside_a=reader.read_u128(),
            fee_growth_outside_b=reader.read_u128(),
            reward_growths_outside=_read_array(reader, NUM_REWARDS, BorshReader.read_u128),
        )

    def encode(self, writer: BorshWriter) -> None:
        writer.write_bool(self.initialized)
        writer.write_i128(self.liquidity_net)
        writer.write_u128(self.liquidity_gross)
        writer.write_u128(self.fee_growth_outside_a)
        writer.write_u128(self.fee_growth_outside_b)
        _write_array(writer, self.reward_growths_outside, NUM_REWARDS, BorshWriter.write_u128)


@dataclass(frozen=True)
class PositionRewardInfo:
    growth_inside_checkpoint: int = 0
    amount_owed: int = 0

    @classmethod
    def decode(cls, reader: BorshReader) -> PositionRewardInfo:
        return cls(
            growth_inside_checkpoint=reader.read_u128(),
            amount_owed=reader.read_u64(),
        )

    def encode(self, writer: BorshWriter) -> None:
        writer.write_u128(self.growth_inside_checkpoint)
        writer.write_u64(self.amount_owed)


class LockType(Enum):
    PERMANENT = 0

    @classmethod
    def decode(cls, reader: BorshReader) -> LockType:
        return _decode_enum(cls, reader)

    def encode(self, writer: BorshWriter) -> None:
        _encode_enum(self, writer)


class LockTypeLabel(Enum):
    PERMANENT = 0

    @classmethod
    def decode(cls, reader: BorshReader) -> LockTypeLabel:
        return _decode_enum(cls, reader)

    def encode(self, writer: BorshWriter) -> None:
        _encode_enum(self, writer)


# Accounts


@dataclass
class WhirlpoolsConfig(_Account):
    LEN: ClassVar[int] = 8 + 96 + 4

    fee_authority: Pubkey = Pubkey()
    collect_protocol_fees_authority: Pubkey = Pubkey()
    reward_emissions_super_authority: Pubkey = Pubkey()
    default_protocol_fee_rate: int = 0

    @classmethod
    def from_bytes(cls, data) -> WhirlpoolsConfig:
        reader = cls._fields_reader(data)
        return cls(
            fee_authority=reader.read_pubkey(),
            collect_protocol_fees_authority=reader.read_pubkey(),
            reward_emissions_super_authority=reader.read_pubkey(),
            default_protocol_fee_rate=reader.read_u16(),
        )

    def to_bytes(self) -> bytes:
        return self._serialize(self._encode_fields)

    def _encode_fields(self, writer: BorshWriter) -> None:
        writer.write_pubkey(self.fee_authority)
        writer.write_pubkey(self.collect_protocol_fees_authority)
        writer.write_pubkey(self.reward_emissions_super_authority)
        writer.write_u16(self.default_protocol_fee_rate)


@dataclass
class FeeTier(_Account):
    LEN: ClassVar[int] = 8 + 32 + 4

    whirlpools_config: Pubkey = Pubkey()
    tick_spacing: int = 0
    default_fee_rate: int = 0

    @classmethod
    def from_bytes(cls, data) -> FeeTier:
        reader = cls._fields_reader(data)
        return cls(
            whirlpools_config=reader.read_pubkey(),
            tick_spacing=reader.read_u16(),
            default_fee_rate=reader.read_u16(),
        )

    def to_bytes(self) -> bytes:
        return self._serialize(self._encode_fields)

    def _encode_fields(self, writer: BorshWriter) -> None:
        writer.write_pubkey(self.whirlpools_config)
        writer.write_u16(self.tick_spacing)
        writer.write_u16(self.default_fee_rate)


def _default_whirlpool_rewards() -> tuple:
    return tuple(WhirlpoolRewardInfo() for _ in range(NUM_REWARDS))


@dataclass
class Whirlpool(_Account):
    LEN: ClassVar[int] = 8 + 261 + 384

    whirlpools_config: Pubkey = Pubkey()
    whirlpool_bump: bytes = bytes(1)
    tick_spacing: int = 0
    tick_spacing_seed: bytes = bytes(2)
    fee_rate: int = 0
    protocol_fee_rate: int = 0
    liquidity: int = 0
    sqrt_price: int = 0
    tick_current_index: int = 0
    protocol_fee_owed_a: int = 0
    protocol_fee_owed_b: int = 0
    token_mint_a: Pubkey = Pubkey()
    token_vault_a: Pubkey = Pubkey()
    fee_growth_global_a: int = 0
    token_mint_b: Pubkey = Pubkey()
    token_vault_b: Pubkey = Pubkey()
    fee_growth_global_b: int = 0
    reward_last_updated_timestamp: int = 0
    reward_infos: tuple = field(default_factory=_default_whirlpool_rewards)

    @classmethod
    def from_bytes(cls, data) -> Whirlpool:
        reader = cls._fields_reader(data)
        return cls(
            whirlpools_config=reader.read_pubkey(),
            whirlpool_bump=reader.read_fixed(1),
            tick_spacing=reader.read_u16(),
            tick_spacing_seed=reader.read_fixed(2),
            fee_rate=reader.read_u16(),
            protocol_fee_rate=reader.read_u16(),
            liquidity=reader.read_u128(),
            sqrt_price=reader.read_u128(),
            tick_current_index=reader.read_i32(),
            protocol_fee_owed_a=reader.read_u64(),
            protocol_fee_owed_b=reader.read_u64(),
            token_mint_a=reader.read_pubkey(),
            token_vault_a=reader.read_pubkey(),
            fee_growth_global_a=reader.read_u128(),
            token_mint_b=reader.read_pubkey(),
            token_vault_b=reader.read_pubkey(),
            fee_growth_global_b=reader.read_u128(),
            reward_last_updated_timestamp=reader.read_u64(),
            reward_infos=_read_array(reader, NUM_REWARDS, WhirlpoolRewardInfo.decode),
        )

    def to_bytes(self) -> bytes:
        return self._serialize(self._encode_fields)

    def _encode_fields(self, writer: BorshWriter) -> None:
        writer.write_pubkey(self.whirlpools_config)
        _write_exact(writer, self.whirlpool_bump, 1)
        writer.write_u16(self.tick_spacing)
        _write_exact(writer, self.tick_spacing_seed, 2)
        writer.write_u16(self.fee_rate)
        writer.write_u16(self.protocol_fee_rate)
        writer.write_u128(self.liquidity)
        writer.write_u128(self.sqrt_price)
        writer.write_i32(self.tick_current_index)
        writer.write_u64(self.protocol_fee_owed_a)
        writer.write_u64(self.protocol_fee_owed_b)
        writer.write_pubkey(self.token_mint_a)
        writer.write_pubkey(self.token_vault_a)
        writer.write_u128(self.fee_growth_global_a)
        writer.write_pubkey(self.token_mint_b)
        writer.write_pubkey(self.token_vault_b)
        writer.write_u128(self.fee_growth_global_b)
        writer.write_u64(self.reward_last_updated_timestamp)
        _write_array(writer, self.reward_infos, NUM_REWARDS, _encode_item)


def _default_ticks() -> tuple:
    return tuple(Tick() for _ in range(TICK_ARRAY_SIZE))


@dataclass
class TickArray(_Account):
    LEN: ClassVar[int] = 8 + 36 + Tick.LEN * TICK_ARRAY_SIZE

    start_tick_index: int = 0
    ticks: tuple = field(default_factory=_default_ticks)
    whirlpool: Pubkey = Pubkey()

    @classmethod
    def from_bytes(cls, data) -> TickArray:
        reader = cls._fields_reader(data)
        return cls(
            start_tick_index=reader.read_i32(),
            ticks=_read_array(reader, TICK_ARRAY_SIZE, Tick.decode),
            whirlpool=reader.read_pubkey(),
        )

    def to_bytes(self) -> bytes:
        return self._serialize(self._encode_fields)

    def _encode_fields(self, writer: BorshWriter) -> None:
        writer.write_i32(self.start_tick_index)
        _write_array(writer, self.ticks, TICK_ARRAY_SIZE, _encode_item)
        writer.write_pubkey(self.whirlpool)


def _default_position_rewards() -> tuple:
    return tuple(PositionRewardInfo() for _ in range(NUM_REWARDS))


@dataclass
class Position(_Account):
    LEN: ClassVar[int] = 8 + 136 + 72

    whirlpool: Pubkey = Pubkey()
    position_mint: Pubkey = Pubkey()
    liquidity: int = 0
    tick_lower_index: int = 0
    tick_upper_index: int = 0
    fee_growth_checkpoint_a: int = 0
    fee_owed_a: int = 0
    fee_growth_checkpoint_b: int = 0
    fee_owed_b: int = 0
    reward_infos: tuple = field(default_factory=_default_position_rewards)

    @classmethod
    def from_bytes(cls, data) -> Position:
        reader = cls._fields_reader(data)
        return cls(
            whirlpool=reader.read_pubkey(),
            position_mint=reader.read_pubkey(),
            liquidity=reader.read_u128(),
            tick_lower_index=reader.read_i32(),
            tick_upper_index=reader.read_i32(),
            fee_growth_checkpoint_a=reader.read_u128(),
            fee_owed_a=reader.read_u64(),
            fee_growth_checkpoint_b=reader.read_u128(),
            fee_owed_b=reader.read_u64(),
            reward_infos=_read_array(reader, NUM_REWARDS, PositionRewardInfo.decode),
        )

    def to_bytes(self) -> bytes:
        return self._serialize(self._encode_fields)

    def _encode_fields(self, writer: BorshWriter) -> None:
        writer.write_pubkey(self.whirlpool)
        writer.write_pubkey(self.position_mint)
        writer.write_u128(self.liquidity)
        writer.write_i32(self.tick_lower_index)
        writer.write_i32(self.tick_upper_index)
        writer.write_u128(self.fee_growth_checkpoint_a)
        writer.write_u64(self.fee_owed_a)
        writer.write_u128(self.fee_growth_checkpoint_b)
        writer.write_u64(self.fee_owed_b)
        _write_array(writer, self.reward_infos, NUM_REWARDS, _encode_item)


@dataclass
class PositionBundle(_Account):
    LEN: ClassVar[int] = 8 + 32 + 32 + 64

    position_bundle_mint: Pubkey = Pubkey()
    position_bitmap: bytes = bytes(POSITION_BITMAP_SIZE)

    @classmethod
    def from_bytes(cls, data) -> PositionBundle:
        reader = cls._fields_reader(data)
        return cls(
            position_bundle_mint=reader.read_pubkey(),
            position_bitmap=reader.read_fixed(POSITION_BITMAP_SIZE),
        )

    def to_bytes(self) -> bytes:
        return self._serialize(self._encode_fields)

    def _encode_fields(self, writer: BorshWriter) -> None:
        writer.write_pubkey(self.position_bundle_mint)
        _write_exact(writer, self.position_bitmap, POSITION_BITMAP_SIZE)


@dataclass
class WhirlpoolsConfigExtension(_Account):
    LEN: ClassVar[int] = 8 + 32 + 32 + 32 + 512

    whirlpools_config: Pubkey = Pubkey()
    config_extension_authority: Pubkey = Pubkey()
    token_badge_authority: Pubkey = Pubkey()

    @classmethod
    def from_bytes(cls, data) -> WhirlpoolsConfigExtension:
        reader = cls._fields_reader(data)
        return cls(
            whirlpools_config=reader.read_pubkey(),
            config_extension_authority=reader.read_pubkey(),
            token_badge_authority=reader.read_pubkey(),
        )

    def to_bytes(self) -> bytes:
        return self._serialize(self._encode_fields)

    def _encode_fields(self, writer: BorshWriter) -> None:
        writer.write_pubkey(self.whirlpools_config)
        writer.write_pubkey(self.config_extension_authority)
        writer.write_pubkey(self.token_badge_authority)


@dataclass
class TokenBadge(_Account):
    LEN: ClassVar[int] = 8 + 32 + 32 + 128

    whirlpools_config: Pubkey = Pubkey()
    token_mint: Pubkey = Pubkey()

    @classmethod
    def from_bytes(cls, data) -> TokenBadge:
        reader = cls._fields_reader(data)
        return cls(whirlpools_config=reader.read_pubkey(), token_mint=reader.read_pubkey())

    def to_bytes(self) -> bytes:
        return self._serialize(self._encode_fields)

    def _encode_fields(self, writer: BorshWriter) -> None:
        writer.write_pubkey(self.whirlpools_config)
        writer.write_pubkey(self.token_mint)


@dataclass
class LockConfig(_Account):
    LEN: ClassVar[int] = 8 + 32 + 32 + 32 + 8 + 1 + 128

    position: Pubkey = Pubkey()
    position_owner: Pubkey = Pubkey()
    whirlpool: Pubkey = Pubkey()
    locked_timestamp: int = 0
    lock_type: LockTypeLabel = LockTypeLabel.PERMANENT

    @classmethod
    def from_bytes(cls, data) -> LockConfig:
        reader = cls._fields_reader(data)
        return cls(
            position=reader.read_pubkey(),
            position_owner=reader.read_pubkey(),
            whirlpool=reader.read_pubkey(),
            locked_timestamp=reader.read_u64(),
            lock_type=LockTypeLabel.decode(reader),
        )

    def to_bytes(self) -> bytes:
        return self._serialize(self._encode_fields)

    def _encode_fields(self, writer: BorshWriter) -> None:
        writer.write_pubkey(self.position)
        writer.write_pubkey(self.position_owner)
        writer.write_pubkey(self.whirlpool)
        writer.write_u64(self.locked_timestamp)
        self.lock_type.encode(writer)


# Bumps


@dataclass(frozen=True)
class WhirlpoolBumps:
    whirlpool_bump: int = 0

    @classmethod
    def decode(cls, reader: BorshReader) -> WhirlpoolBumps:
        return cls(whirlpool_bump=reader.read_u8())

    def encode(self, writer: BorshWriter) -> None:
        writer.write_u8(self.whirlpool_bump)


@dataclass(frozen=True)
class OpenPositionBumps:
    position_bump: int = 0

    @classmethod
    def decode(cls, reader: BorshReader) -> OpenPositionBumps:
        return cls(position_bump=reader.read_u8())

    def encode(self, writer: BorshWriter) -> None:
        writer.write_u8(self.position_bump)


@dataclass(frozen=True)
class OpenPositionWithMetadataBumps:
    position_bump: int = 0
    metadata_bump: int = 0

    @classmethod
    def decode(cls, reader: BorshReader) -> OpenPositionWithMetadataBumps:
        return cls(position_bump=reader.read_u8(), metadata_bump=reader.read_u8())

    def encode(self, writer: BorshWriter) -> None:
        writer.write_u8(self.position_bump)
        writer.write_u8(self.metadata_bump)


# Remaining accounts


class AccountsType(Enum):
    TRANSFER_HOOK_A = 0
    TRANSFER_HOOK_B = 1
    TRANSFER_HOOK_REWARD = 2
    TRANSFER_HOOK_INPUT = 3
    TRANSFER_HOOK_INTERMEDIATE = 4
    TRANSFER_HOOK_OUTPUT = 5
    SUPPLEMENTAL_TICK_ARRAYS = 6
    SUPPLEMENTAL_TICK_ARRAYS_ONE = 7
    SUPPLEMENTAL_TICK_ARRAYS_TWO = 8

    @classmethod
    def decode(cls, reader: BorshReader) -> AccountsType:
        return _decode_enum(cls, reader)

    def encode(self, writer: BorshWriter) -> None:
        _encode_enum(self, writer)


@dataclass(frozen=True)
class RemainingAccountsSlice:
    accounts_type: AccountsType
    length: int

    @classmethod
    def decode(cls, reader: BorshReader) -> RemainingAccountsSlice:
        return cls(accounts_type=AccountsType.decode(reader), length=reader.read_u8())

    def encode(self, writer: BorshWriter) -> None:
        self.accounts_type.encode(writer)
        writer.write_u8(self.length)


@dataclass
class RemainingAccountsInfo:
    slices: list = field(default_factory=list)

    @classmethod
    def decode(cls, reader: BorshReader) -> RemainingAccountsInfo:
        return cls(slices=reader.read_vec(RemainingAccountsSlice.decode))

    def encode(self, writer: BorshWriter) -> None:
        writer.write_vec(self.slices, _encode_item)