"""Instruction definitions of the Whirlpool program and their data encoding."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional

from .borsh import BorshError, BorshReader, BorshWriter
from .contexts_v1 import AccountMeta, AccountsContext
from .contexts_v2 import get_context
from .pubkey import WHIRLPOOL_PROGRAM_ID, Pubkey
from .state import (
    DISCRIMINATOR_LENGTH,
    LockType,
    OpenPositionBumps,
    OpenPositionWithMetadataBumps,
    RemainingAccountsInfo,
    WhirlpoolBumps,
)


def instruction_discriminator(name: str) -> bytes:
    """The 8-byte prefix that identifies an instruction by its snake_case name."""
    return hashlib.sha256(f"global:{name}".encode()).digest()[:DISCRIMINATOR_LENGTH]


class ArgKind(Enum):
    """The type of one instruction argument."""

    U8 = "u8"
    U16 = "u16"
    I32 = "i32"
    U64 = "u64"
    U128 = "u128"
    BOOL = "bool"
    PUBKEY = "pubkey"
    WHIRLPOOL_BUMPS = "WhirlpoolBumps"
    OPEN_POSITION_BUMPS = "OpenPositionBumps"
    OPEN_POSITION_WITH_METADATA_BUMPS = "OpenPositionWithMetadataBumps"
    LOCK_TYPE = "LockType"
    REMAINING_ACCOUNTS_INFO = "Option<RemainingAccountsInfo>"

    @property
    def optional(self) -> bool:
        return self is ArgKind.REMAINING_ACCOUNTS_INFO

    def encode(self, writer: BorshWriter, value: Any) -> None:
        _ENCODERS[self](writer, value)

    def decode(self, reader: BorshReader) -> Any:
        return _DECODERS[self](reader)


def _write_bool(writer: BorshWriter, value: Any) -> None:
    if not isinstance(value, bool):
        raise TypeError(f"expected a bool, got {value!r}")
    writer.write_bool(value)


def _struct_encoder(cls: type) -> Callable[[BorshWriter, Any], None]:
    def encode(writer: BorshWriter, value: Any) -> None:
        if not isinstance(value, cls):
            raise TypeError(f"expected {cls.__name__}, got {value!r}")
        value.encode(writer)

    return encode


def _write_remaining_accounts_info(writer: BorshWriter, value: Any) -> None:
    writer.write_option(value, _struct_encoder(RemainingAccountsInfo))


_ENCODERS: dict = {
    ArgKind.U8: BorshWriter.write_u8,
    ArgKind.U16: BorshWriter.write_u16,
    ArgKind.I32: BorshWriter.write_i32,
    ArgKind.U64: BorshWriter.write_u64,
    ArgKind.U128: BorshWriter.write_u128,
    ArgKind.BOOL: _write_bool,
    ArgKind.PUBKEY: BorshWriter.write_pubkey,
    ArgKind.WHIRLPOOL_BUMPS: _struct_encoder(WhirlpoolBumps),
    ArgKind.OPEN_POSITION_BUMPS: _struct_encoder(OpenPositionBumps),
    ArgKind.OPEN_POSITION_WITH_METADATA_BUMPS: _struct_encoder(OpenPositionWithMetadataBumps),
    ArgKind.LOCK_TYPE: _struct_encoder(LockType),
    ArgKind.REMAINING_ACCOUNTS_INFO: _write_remaining_accounts_info,
}

_DECODERS: dict = {
    ArgKind.U8: BorshReader.read_u8,
    ArgKind.U16: BorshReader.read_u16,
    ArgKind.I32: BorshReader.read_i32,
    ArgKind.U64: BorshReader.read_u64,
    ArgKind.U128: BorshReader.read_u128,
    ArgKind.BOOL: BorshReader.read_bool,
    ArgKind.PUBKEY: BorshReader.read_pubkey,
    ArgKind.WHIRLPOOL_BUMPS: WhirlpoolBumps.decode,
    ArgKind.OPEN_POSITION_BUMPS: OpenPositionBumps.decode,
    ArgKind.OPEN_POSITION_WITH_METADATA_BUMPS: OpenPositionWithMetadataBumps.decode,
    ArgKind.LOCK_TYPE: LockType.decode,
    ArgKind.REMAINING_ACCOUNTS_INFO: lambda reader: reader.read_option(
        RemainingAccountsInfo.decode
    ),
}


@dataclass(frozen=True)
class Instruction:
    """A ready-to-send instruction: program, ordered accounts and data."""

    program_id: Pubkey
    accounts: tuple
    data: bytes


@dataclass(frozen=True)
class InstructionDef:
    """An instruction of the program: its name, accounts context and arguments."""

    name: str
    context_name: str
    args: tuple = ()

    @property
    def discriminator(self) -> bytes:
        return instruction_discriminator(self.name)

    @property
    def context(self) -> AccountsContext:
        return get_context(self.context_name)

    def arg_names(self) -> list[str]:
        return [arg_name for arg_name, _ in self.args]

    def encode_data(self, args: Optional[Mapping[str, Any]] = None) -> bytes:
        """Encode the discriminator followed by the arguments in declared order."""
        args = dict(args or {})
        unknown = sorted(set(args) - set(self.arg_names()))
        if unknown:
            raise ValueError(f"{self.name}: unknown arguments {', '.join(unknown)}")
        writer = BorshWriter()
        writer.write_fixed(self.discriminator)
        for arg_name, kind in self.args:
            if arg_name not in args:
                if not kind.optional:
                    raise ValueError(f"{self.name}: missing argument {arg_name}")
                value = None
            else:
                value = args[arg_name]
            kind.encode(writer, value)
        return writer.to_bytes()

    def decode_data(self, data) -> dict[str, Any]:
        """Decode instruction data produced for this instruction into its arguments."""
        reader = BorshReader(data)
        if reader.read_fixed(DISCRIMINATOR_LENGTH) != self.discriminator:
            raise BorshError(f"data is not a {self.name} instruction")
        values = {arg_name: kind.decode(reader) for arg_name, kind in self.args}
        if reader.remaining:
            raise BorshError(f"{self.name}: {reader.remaining} trailing bytes")
        return values

    def build(
        self,
        accounts: Mapping[str, Pubkey],
        args: Optional[Mapping[str, Any]] = None,
        remaining_accounts: Optional[Iterable[AccountMeta]] = None,
    ) -> Instruction:
        metas = self.context.to_account_metas(accounts, remaining_accounts)
        return Instruction(WHIRLPOOL_PROGRAM_ID, tuple(metas), self.encode_data(args))


def _def(name: str, context: str, *args: tuple) -> InstructionDef:
    return InstructionDef(name, context, tuple(args))


_RAI = ("remaining_accounts_info", ArgKind.REMAINING_ACCOUNTS_INFO)
_K = ArgKind

_INSTRUCTIONS = [
    _def(
        "initialize_config", "InitializeConfig",
        ("fee_authority", _K.PUBKEY),
        ("collect_protocol_fees_authority", _K.PUBKEY),
        ("reward_emissions_super_authority", _K.PUBKEY),
        ("default_protocol_fee_rate", _K.U16),
    ),
    _def(
        "initialize_pool", "InitializePool",
        ("bumps", _K.WHIRLPOOL_BUMPS), ("tick_spacing", _K.U16),
        ("initial_sqrt_price", _K.U128),
    ),
    _def("initialize_tick_array", "InitializeTickArray", ("start_tick_index", _K.I32)),
    _def(
        "initialize_fee_tier", "InitializeFeeTier",
        ("tick_spacing", _K.U16), ("default_fee_rate", _K.U16),
    ),
    _def("initialize_reward", "InitializeReward", ("reward_index", _K.U8)),
    _def(
        "set_reward_emissions", "SetRewardEmissions",
        ("reward_index", _K.U8), ("emissions_per_second_x64", _K.U128),
    ),
    _def(
        "open_position", "OpenPosition",
        ("bumps", _K.OPEN_POSITION_BUMPS),
        ("tick_lower_index", _K.I32), ("tick_upper_index", _K.I32),
    ),
    _def(
        "open_position_with_metadata", "OpenPositionWithMetadata",
        ("bumps", _K.OPEN_POSITION_WITH_METADATA_BUMPS),
        ("tick_lower_index", _K.I32), ("tick_upper_index", _K.I32),
    ),
    _def(
        "increase_liquidity", "ModifyLiquidity",
        ("liquidity_amount", _K.U128), ("token_max_a", _K.U64), ("token_max_b", _K.U64),
    ),
    _def(
        "decrease_liquidity", "ModifyLiquidity",
        ("liquidity_amount", _K.U128), ("token_min_a", _K.U64), ("token_min_b", _K.U64),
    ),
    _def("update_fees_and_rewards", "UpdateFeesAndRewards"),
    _def("collect_fees", "CollectFees"),
    _def("collect_reward", "CollectReward", ("reward_index", _K.U8)),
    _def("collect_protocol_fees", "CollectProtocolFees"),
    _def(
        "swap", "Swap",
        ("amount", _K.U64), ("other_amount_threshold", _K.U64),
        ("sqrt_price_limit", _K.U128), ("amount_specified_is_input", _K.BOOL),
        ("a_to_b", _K.BOOL),
    ),
    _def("close_position", "ClosePosition"),
    _def("set_default_fee_rate", "SetDefaultFeeRate", ("default_fee_rate", _K.U16)),
    _def(
        "set_default_protocol_fee_rate", "SetDefaultProtocolFeeRate",
        ("default_protocol_fee_rate", _K.U16),
    ),
    _def("set_fee_rate", "SetFeeRate", ("fee_rate", _K.U16)),
    _def("set_protocol_fee_rate", "SetProtocolFeeRate", ("protocol_fee_rate", _K.U16)),
    _def("set_fee_authority", "SetFeeAuthority"),
    _def("set_collect_protocol_fees_authority", "SetCollectProtocolFeesAuthority"),
    _def("set_reward_authority", "SetRewardAuthority", ("reward_index", _K.U8)),
    _def(
        "set_reward_authority_by_super_authority", "SetRewardAuthorityBySuperAuthority",
        ("reward_index", _K.U8),
    ),
    _def("set_reward_emissions_super_authority", "SetRewardEmissionsSuperAuthority"),
    _def(
        "two_hop_swap", "TwoHopSwap",
        ("amount", _K.U64), ("other_amount_threshold", _K.U64),
        ("amount_specified_is_input", _K.BOOL), ("a_to_b_one", _K.BOOL),
        ("a_to_b_two", _K.BOOL), ("sqrt_price_limit_one", _K.U128),
        ("sqrt_price_limit_two", _K.U128),
    ),
    _def("initialize_position_bundle", "InitializePositionBundle"),
    _def("initialize_position_bundle_with_metadata", "InitializePositionBundleWithMetadata"),
    _def("delete_position_bundle", "DeletePositionBundle"),
    _def(
        "open_bundled_position", "OpenBundledPosition",
        ("bundle_index", _K.U16), ("tick_lower_index", _K.I32), ("tick_upper_index", _K.I32),
    ),
    _def("close_bundled_position", "CloseBundledPosition", ("bundle_index", _K.U16)),
    _def(
        "open_position_with_token_extensions", "OpenPositionWithTokenExtensions",
        ("tick_lower_index", _K.I32), ("tick_upper_index", _K.I32),
        ("with_token_metadata_extension", _K.BOOL),
    ),
    _def("close_position_with_token_extensions", "ClosePositionWithTokenExtensions"),
    _def("lock_position", "LockPosition", ("lock_type", _K.LOCK_TYPE)),
    _def(
        "reset_position_range", "ResetPositionRange",
        ("new_tick_lower_index", _K.I32), ("new_tick_upper_index", _K.I32),
    ),
    # Token-extension (V2) instructions.
    _def("collect_fees_v2", "CollectFeesV2", _RAI),
    _def("collect_protocol_fees_v2", "CollectProtocolFeesV2", _RAI),
    _def("collect_reward_v2", "CollectRewardV2", ("reward_index", _K.U8), _RAI),
    _def(
        "decrease_liquidity_v2", "ModifyLiquidityV2",
        ("liquidity_amount", _K.U128), ("token_min_a", _K.U64), ("token_min_b", _K.U64),
        _RAI,
    ),
    _def(
        "increase_liquidity_v2", "ModifyLiquidityV2",
        ("liquidity_amount", _K.U128), ("token_max_a", _K.U64), ("token_max_b", _K.U64),
        _RAI,
    ),
    _def(
        "initialize_pool_v2", "InitializePoolV2",
        ("tick_spacing", _K.U16), ("initial_sqrt_price", _K.U128),
    ),
    _def("initialize_reward_v2", "InitializeRewardV2", ("reward_index", _K.U8)),
    _def(
        "set_reward_emissions_v2", "SetRewardEmissionsV2",
        ("reward_index", _K.U8), ("emissions_per_second_x64", _K.U128),
    ),
    _def(
        "swap_v2", "SwapV2",
        ("amount", _K.U64), ("other_amount_threshold", _K.U64),
        ("sqrt_price_limit", _K.U128), ("amount_specified_is_input", _K.BOOL),
        ("a_to_b", _K.BOOL), _RAI,
    ),
    _def(
        "two_hop_swap_v2", "TwoHopSwapV2",
        ("amount", _K.U64), ("other_amount_threshold", _K.U64),
        ("amount_specified_is_input", _K.BOOL), ("a_to_b_one", _K.BOOL),
        ("a_to_b_two", _K.BOOL), ("sqrt_price_limit_one", _K.U128),
        ("sqrt_price_limit_two", _K.U128), _RAI,
    ),
    _def("initialize_config_extension", "InitializeConfigExtension"),
    _def("set_config_extension_authority", "SetConfigExtensionAuthority"),
    _def("set_token_badge_authority", "SetTokenBadgeAuthority"),
    _def("initialize_token_badge", "InitializeTokenBadge"),
    _def("delete_token_badge", "DeleteTokenBadge"),
]

INSTRUCTIONS: Mapping[str, InstructionDef] = MappingProxyType(
    {definition.name: definition for definition in _INSTRUCTIONS}
)

_BY_DISCRIMINATOR: Mapping[bytes, InstructionDef] = MappingProxyType(
    {definition.discriminator: definition for definition in _INSTRUCTIONS}
)


def get_instruction(name: str) -> InstructionDef:
    """Look up an instruction by its snake_case name."""
    try:
        return INSTRUCTIONS[name]
    except KeyError:
        raise KeyError(f"unknown instruction {name!r}") from None


def build_instruction(
    name: str,
    accounts: Mapping[str, Pubkey],
    args: Optional[Mapping[str, Any]] = None,
    remaining_accounts: Optional[Iterable[AccountMeta]] = None,
) -> Instruction:
    """Build an instruction by name from named accounts and arguments."""
    return get_instruction(name).build(accounts, args, remaining_accounts)


def decode_instruction(data) -> tuple[InstructionDef, dict[str, Any]]:
    """Identify instruction data by its discriminator and decode its arguments."""
    data = bytes(data)
    if len(data) < DISCRIMINATOR_LENGTH:
        raise BorshError("instruction data is too short for a discriminator")
    definition = _BY_DISCRIMINATOR.get(data[:DISCRIMINATOR_LENGTH])
    if definition is None:
        raise BorshError("unknown instruction discriminator")
    return definition, definition.decode_data(data)