import pytest

from whirlpool_cpi.instructions import build_instruction, decode_instruction, get_instruction
from whirlpool_cpi.pubkey import Pubkey
from whirlpool_cpi.state import LockConfig, TickArray, Whirlpool
from whirlpool_cpi.versions import (
    AnchorVersion,
    UnsupportedInstructionError,
    account_types_for,
    build_instruction_for,
    instructions_for,
    supports,
)


def _accounts(instruction_name):
    names = get_instruction(instruction_name).context.account_names()
    return {name: Pubkey(bytes([index + 1]) * 32) for index, name in enumerate(names)}


def test_version_strings_resolve_to_enum():
    assert instructions_for("0.31.1") == instructions_for(AnchorVersion.V0_31_1)


def test_unknown_version_raises():
    with pytest.raises(ValueError):
        instructions_for("9.9.9")


@pytest.mark.parametrize("version", ["0.31.0", "0.31.1"])
def test_newer_versions_lack_lock_instructions(version):
    old = set(instructions_for("0.30.1"))
    new = set(instructions_for(version))
    assert old - new == {"lock_position", "reset_position_range"}
    assert new <= old


def test_instruction_order_preserved():
    old = [name for name in instructions_for("0.30.1") if name not in
           ("lock_position", "reset_position_range")]
    assert list(instructions_for("0.31.0")) == old


@pytest.mark.parametrize(
    "version, expected", [("0.30.1", True), ("0.31.0", False), ("0.31.1", False)]
)
def test_supports_lock_position(version, expected):
    assert supports(version, "lock_position") is expected
    assert supports(version, "LockConfig") is expected


@pytest.mark.parametrize("version", list(AnchorVersion))
def test_common_names_supported_everywhere(version):
    assert supports(version, "swap_v2")
    assert supports(version, "Whirlpool")
    assert not supports(version, "no_such_thing")


def test_account_types():
    assert account_types_for("0.30.1")["LockConfig"] is LockConfig
    assert "LockConfig" not in account_types_for("0.31.0")
    assert account_types_for("0.31.1")["TickArray"] is TickArray
    assert account_types_for("0.31.0")["Whirlpool"] is Whirlpool


@pytest.mark.parametrize("version", list(AnchorVersion))
def test_build_matches_generic_builder(version):
    accounts = _accounts("swap")
    args = {
        "amount": 1000,
        "other_amount_threshold": 0,
        "sqrt_price_limit": 4295048016,
        "amount_specified_is_input": True,
        "a_to_b": False,
    }
    built = build_instruction_for(version, "swap", accounts, args)
    assert built == build_instruction("swap", accounts, args)
    definition, decoded = decode_instruction(built.data)
    assert definition.name == "swap"
    assert decoded == args


def test_build_lock_position_on_old_version():
    accounts = _accounts("lock_position")
    from whirlpool_cpi.state import LockType

    built = build_instruction_for("0.30.1", "lock_position", accounts, {"lock_type": LockType.PERMANENT})
    _, decoded = decode_instruction(built.data)
    assert decoded == {"lock_type": LockType.PERMANENT}


def test_build_unsupported_instruction_raises():
    with pytest.raises(UnsupportedInstructionError):
        build_instruction_for(
            "0.31.1", "reset_position_range", _accounts("reset_position_range"),
            {"new_tick_lower_index": -64, "new_tick_upper_index": 64},
        )
    with pytest.raises(KeyError):
        build_instruction_for("0.31.0", "lock_position", _accounts("lock_position"))