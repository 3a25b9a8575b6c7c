import pytest

from whirlpool_cpi.borsh import BorshError, BorshReader, BorshWriter
from whirlpool_cpi.pubkey import Pubkey
from whirlpool_cpi.state import (
    AccountDiscriminatorError,
    AccountsType,
    FeeTier,
    LockConfig,
    LockType,
    LockTypeLabel,
    OpenPositionBumps,
    OpenPositionWithMetadataBumps,
    Position,
    PositionBundle,
    PositionRewardInfo,
    RemainingAccountsInfo,
    RemainingAccountsSlice,
    Tick,
    TickArray,
    TokenBadge,
    Whirlpool,
    WhirlpoolBumps,
    WhirlpoolRewardInfo,
    WhirlpoolsConfig,
    WhirlpoolsConfigExtension,
    account_discriminator,
)


def key(n):
    return Pubkey(bytes([n]) * 32)


def test_tick_array_discriminator_matches_layout():
    assert account_discriminator("TickArray") == bytes.fromhex("4561bdbe6e0742bb")
    assert TickArray.DISCRIMINATOR == bytes.fromhex("4561bdbe6e0742bb")


@pytest.mark.parametrize(
    "account",
    [
        WhirlpoolsConfig(key(1), key(2), key(3), 300),
        FeeTier(key(4), 64, 3000),
        Whirlpool(
            whirlpools_config=key(1),
            whirlpool_bump=b"\xfe",
            tick_spacing=64,
            tick_spacing_seed=b"\x40\x00",
            fee_rate=3000,
            protocol_fee_rate=1300,
            liquidity=(1 << 100) + 5,
            sqrt_price=1 << 64,
            tick_current_index=-443636,
            protocol_fee_owed_a=11,
            protocol_fee_owed_b=22,
            token_mint_a=key(5),
            token_vault_a=key(6),
            fee_growth_global_a=33,
            token_mint_b=key(7),
            token_vault_b=key(8),
            fee_growth_global_b=44,
            reward_last_updated_timestamp=1_700_000_000,
            reward_infos=(
                WhirlpoolRewardInfo(key(9), key(10), key(11), 55, 66),
                WhirlpoolRewardInfo(),
                WhirlpoolRewardInfo(authority=key(12)),
            ),
        ),
        Position(
            whirlpool=key(1),
            position_mint=key(2),
            liquidity=12345,
            tick_lower_index=-128,
            tick_upper_index=128,
            fee_owed_a=7,
            reward_infos=(PositionRewardInfo(1, 2), PositionRewardInfo(), PositionRewardInfo(3, 4)),
        ),
        PositionBundle(key(3), bytes(range(32))),
        WhirlpoolsConfigExtension(key(1), key(2), key(3)),
        TokenBadge(key(4), key(5)),
        LockConfig(key(1), key(2), key(3), 99, LockTypeLabel.PERMANENT),
    ],
)
def test_account_round_trip(account):
    data = account.to_bytes()
    assert len(data) == type(account).LEN
    assert data[:8] == account_discriminator(type(account).__name__)
    assert type(account).from_bytes(data) == account


def test_tick_array_round_trip():
    ticks = list(TickArray().ticks)
    ticks[0] = Tick(True, -5, 5, 1, 2, (3, 4, 5))
    ticks[-1] = Tick(True, 1 << 120, 1 << 121, 0, 0, (0, 0, 1))
    array = TickArray(start_tick_index=-5632, ticks=tuple(ticks), whirlpool=key(9))
    data = array.to_bytes()
    assert len(data) == TickArray.LEN
    decoded = TickArray.from_bytes(data)
    assert decoded == array
    assert len(decoded.ticks) == 88


def test_tick_encoded_length_matches_len():
    writer = BorshWriter()
    Tick(True, -1, 1, 2, 3, (4, 5, 6)).encode(writer)
    assert len(writer.to_bytes()) == Tick.LEN


def test_whirlpools_config_from_wire_bytes():
    data = (
        account_discriminator("WhirlpoolsConfig")
        + bytes(key(1))
        + bytes(key(2))
        + bytes(key(3))
        + (300).to_bytes(2, "little")
    )
    config = WhirlpoolsConfig.from_bytes(data)
    assert config.fee_authority == key(1)
    assert config.reward_emissions_super_authority == key(3)
    assert config.default_protocol_fee_rate == 300


def test_wrong_discriminator():
    with pytest.raises(AccountDiscriminatorError):
        FeeTier.from_bytes(Whirlpool().to_bytes())


def test_data_too_short_for_discriminator():
    with pytest.raises(AccountDiscriminatorError):
        Position.from_bytes(b"\x01\x02")


def test_truncated_account():
    data = Position().to_bytes()[:50]
    with pytest.raises(BorshError):
        Position.from_bytes(data)


def test_invalid_tick_initialized_byte():
    data = bytearray(TickArray().to_bytes())
    data[12] = 2
    with pytest.raises(BorshError):
        TickArray.from_bytes(bytes(data))


def test_bitmap_wrong_length():
    with pytest.raises(BorshError):
        PositionBundle(key(1), b"\x00" * 31).to_bytes()


def test_remaining_accounts_wire_bytes():
    info = RemainingAccountsInfo(
        [
            RemainingAccountsSlice(AccountsType.TRANSFER_HOOK_A, 2),
            RemainingAccountsSlice(AccountsType.SUPPLEMENTAL_TICK_ARRAYS, 3),
        ]
    )
    writer = BorshWriter()
    info.encode(writer)
    assert writer.to_bytes() == b"\x02\x00\x00\x00\x00\x02\x06\x03"
    assert RemainingAccountsInfo.decode(BorshReader(writer.to_bytes())) == info


def test_accounts_type_unknown_variant():
    with pytest.raises(BorshError):
        AccountsType.decode(BorshReader(b"\x09"))


def test_accounts_type_last_variant():
    assert AccountsType.decode(BorshReader(b"\x08")) is AccountsType.SUPPLEMENTAL_TICK_ARRAYS_TWO


def test_lock_type_codec():
    writer = BorshWriter()
    LockType.PERMANENT.encode(writer)
    assert writer.to_bytes() == b"\x00"
    assert LockType.decode(BorshReader(b"\x00")) is LockType.PERMANENT
    with pytest.raises(BorshError):
        LockTypeLabel.decode(BorshReader(b"\x01"))


@pytest.mark.parametrize(
    "value, size",
    [
        (WhirlpoolBumps(255), 1),
        (OpenPositionBumps(7), 1),
        (OpenPositionWithMetadataBumps(1, 2), 2),
    ],
)
def test_bumps_round_trip(value, size):
    writer = BorshWriter()
    value.encode(writer)
    assert len(writer.to_bytes()) == size
    assert type(value).decode(BorshReader(writer.to_bytes())) == value


def test_trailing_padding_is_ignored():
    badge = TokenBadge(key(1), key(2))
    data = badge.to_bytes()
    assert data[8 + 64:] == bytes(TokenBadge.LEN - 72)
    assert TokenBadge.from_bytes(data + b"\x00" * 10) == badge