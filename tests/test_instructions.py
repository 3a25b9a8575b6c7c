import pytest
from hypothesis import given
from hypothesis import strategies as st

from whirlpool_cpi.borsh import BorshError
from whirlpool_cpi.contexts_v1 import AccountMeta
from whirlpool_cpi.instructions import (
    INSTRUCTIONS,
    ArgKind,
    Instruction,
    InstructionDef,
    build_instruction,
    decode_instruction,
    get_instruction,
    instruction_discriminator,
)
from whirlpool_cpi.pubkey import WHIRLPOOL_PROGRAM_ID, Pubkey
from whirlpool_cpi.state import (
    AccountsType,
    LockType,
    OpenPositionWithMetadataBumps,
    RemainingAccountsInfo,
    RemainingAccountsSlice,
    WhirlpoolBumps,
)


def key(n):
    return Pubkey(bytes([n]) * 32)


def accounts_for(definition):
    return {name: key(i + 1) for i, name in enumerate(definition.context.account_names())}


def test_swap_discriminator_matches_program():
    assert instruction_discriminator("swap") == bytes(
        [248, 198, 158, 145, 225, 117, 135, 200]
    )


def test_discriminators_are_unique():
    discriminators = {d.discriminator for d in INSTRUCTIONS.values()}
    assert len(discriminators) == len(INSTRUCTIONS)


def test_every_instruction_context_resolves():
    for definition in INSTRUCTIONS.values():
        assert definition.context.name == definition.context_name


def test_instruction_count_and_names():
    assert len(INSTRUCTIONS) == 50
    lock = get_instruction("lock_position")
    assert lock.name == "lock_position"
    assert lock.context_name == "LockPosition"
    two_hop = get_instruction("two_hop_swap_v2")
    assert two_hop.name == "two_hop_swap_v2"
    assert two_hop.context_name == "TwoHopSwapV2"


def test_tick_array_wire_bytes():
    data = get_instruction("initialize_tick_array").encode_data({"start_tick_index": -88})
    assert data[:8] == instruction_discriminator("initialize_tick_array")
    assert data[8:] == b"\xa8\xff\xff\xff"


def test_no_arg_instruction_is_just_discriminator():
    data = get_instruction("collect_fees").encode_data()
    assert data == instruction_discriminator("collect_fees")


def test_optional_remaining_accounts_defaults_to_none():
    definition = get_instruction("collect_fees_v2")
    data = definition.encode_data({})
    assert data[8:] == b"\x00"
    assert definition.decode_data(data) == {"remaining_accounts_info": None}


def test_swap_v2_round_trip_with_remaining_accounts():
    info = RemainingAccountsInfo(
        [
            RemainingAccountsSlice(AccountsType.TRANSFER_HOOK_A, 2),
            RemainingAccountsSlice(AccountsType.SUPPLEMENTAL_TICK_ARRAYS, 3),
        ]
    )
    args = {
        "amount": 1000,
        "other_amount_threshold": 1,
        "sqrt_price_limit": 2**64,
        "amount_specified_is_input": True,
        "a_to_b": False,
        "remaining_accounts_info": info,
    }
    definition, decoded = decode_instruction(get_instruction("swap_v2").encode_data(args))
    assert definition.name == "swap_v2"
    assert decoded == args


def test_struct_args_round_trip():
    args = {
        "bumps": OpenPositionWithMetadataBumps(position_bump=254, metadata_bump=253),
        "tick_lower_index": -128,
        "tick_upper_index": 128,
    }
    definition = get_instruction("open_position_with_metadata")
    assert definition.decode_data(definition.encode_data(args)) == args


def test_lock_position_round_trip():
    definition = get_instruction("lock_position")
    data = definition.encode_data({"lock_type": LockType.PERMANENT})
    assert data[8:] == b"\x00"
    assert definition.decode_data(data) == {"lock_type": LockType.PERMANENT}


def test_initialize_config_round_trip():
    args = {
        "fee_authority": key(1),
        "collect_protocol_fees_authority": key(2),
        "reward_emissions_super_authority": key(3),
        "default_protocol_fee_rate": 300,
    }
    definition, decoded = decode_instruction(
        get_instruction("initialize_config").encode_data(args)
    )
    assert definition.name == "initialize_config"
    assert decoded == args


@given(
    amount=st.integers(0, 2**64 - 1),
    threshold=st.integers(0, 2**64 - 1),
    limit=st.integers(0, 2**128 - 1),
    is_input=st.booleans(),
    a_to_b=st.booleans(),
)
def test_swap_round_trip(amount, threshold, limit, is_input, a_to_b):
    args = {
        "amount": amount,
        "other_amount_threshold": threshold,
        "sqrt_price_limit": limit,
        "amount_specified_is_input": is_input,
        "a_to_b": a_to_b,
    }
    data = get_instruction("swap").encode_data(args)
    assert len(data) == 8 + 8 + 8 + 16 + 1 + 1
    assert decode_instruction(data)[1] == args


def test_missing_argument_raises():
    with pytest.raises(ValueError, match="missing argument"):
        get_instruction("swap").encode_data({"amount": 1})


def test_unknown_argument_raises():
    with pytest.raises(ValueError, match="unknown arguments"):
        get_instruction("collect_fees").encode_data({"bogus": 1})


def test_bool_argument_must_be_bool():
    args = {
        "tick_lower_index": 0,
        "tick_upper_index": 64,
        "with_token_metadata_extension": 1,
    }
    with pytest.raises(TypeError):
        get_instruction("open_position_with_token_extensions").encode_data(args)


def test_struct_argument_type_checked():
    with pytest.raises(TypeError):
        get_instruction("initialize_pool").encode_data(
            {"bumps": 5, "tick_spacing": 64, "initial_sqrt_price": 1}
        )


def test_overflow_raises():
    with pytest.raises(BorshError):
        get_instruction("collect_reward").encode_data({"reward_index": 256})


def test_decode_unknown_discriminator():
    with pytest.raises(BorshError):
        decode_instruction(bytes(8))


def test_decode_short_data():
    with pytest.raises(BorshError):
        decode_instruction(b"\x01\x02")


def test_decode_trailing_bytes():
    data = get_instruction("collect_fees").encode_data() + b"\x00"
    with pytest.raises(BorshError, match="trailing"):
        decode_instruction(data)


def test_decode_data_wrong_instruction():
    data = get_instruction("collect_fees").encode_data()
    with pytest.raises(BorshError):
        get_instruction("close_position").decode_data(data)


def test_get_instruction_unknown():
    with pytest.raises(KeyError):
        get_instruction("no_such_instruction")


def test_build_orders_accounts_and_flags():
    definition = get_instruction("initialize_config")
    accounts = accounts_for(definition)
    args = {
        "fee_authority": key(9),
        "collect_protocol_fees_authority": key(9),
        "reward_emissions_super_authority": key(9),
        "default_protocol_fee_rate": 0,
    }
    instruction = build_instruction("initialize_config", accounts, args)
    assert isinstance(instruction, Instruction)
    assert instruction.program_id == WHIRLPOOL_PROGRAM_ID
    assert [m.pubkey for m in instruction.accounts] == [key(1), key(2), key(3)]
    assert [(m.is_signer, m.is_writable) for m in instruction.accounts] == [
        (True, True),
        (True, True),
        (False, False),
    ]
    assert decode_instruction(instruction.data)[1] == args


def test_build_appends_remaining_accounts():
    definition = get_instruction("swap_v2")
    extra = [AccountMeta(key(200), False, True), AccountMeta(key(201), False, False)]
    args = {
        "amount": 5,
        "other_amount_threshold": 0,
        "sqrt_price_limit": 0,
        "amount_specified_is_input": True,
        "a_to_b": True,
    }
    instruction = definition.build(accounts_for(definition), args, extra)
    assert len(instruction.accounts) == len(definition.context.account_names()) + 2
    assert list(instruction.accounts[-2:]) == extra


def test_build_missing_account_raises():
    definition = get_instruction("collect_fees")
    accounts = accounts_for(definition)
    del accounts["whirlpool"]
    with pytest.raises(ValueError, match="missing accounts"):
        definition.build(accounts)


def test_custom_definition_encodes():
    definition = InstructionDef("custom", "CollectFees", (("bumps", ArgKind.WHIRLPOOL_BUMPS),))
    data = definition.encode_data({"bumps": WhirlpoolBumps(7)})
    assert data[8:] == b"\x07"
    assert definition.decode_data(data) == {"bumps": WhirlpoolBumps(7)}