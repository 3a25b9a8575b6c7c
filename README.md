# whirlpool_cpi

Pure-Python building blocks for working with the Whirlpool concentrated
liquidity program: base58 public keys, Borsh encoding, the program's account
layouts, the ordered account lists each instruction expects, and instruction
data encoding and decoding for each supported Anchor release.

There are no runtime dependencies.

## Installation

```
pip install whirlpool_cpi
```

To run the test suite:

```
pip install "whirlpool_cpi[test]"
pytest
```

## Modules

| Module | Purpose |
| --- | --- |
| `whirlpool_cpi.pubkey` | `Pubkey`, `b58encode` / `b58decode`, and `WHIRLPOOL_PROGRAM_ID` |
| `whirlpool_cpi.borsh` | `BorshReader` and `BorshWriter` for little-endian Borsh data; errors are `BorshError` (a `ValueError`) |
| `whirlpool_cpi.state` | Account types and instruction argument types, with `account_discriminator(name)` |
| `whirlpool_cpi.unpack` | `unpack_tick_array`, which checks owner and discriminator before decoding |
| `whirlpool_cpi.contexts_v1` / `contexts_v2` | Ordered account lists for every instruction, with signer and writable flags |
| `whirlpool_cpi.instructions` | Instruction definitions, data encoding and decoding, and instruction building |
| `whirlpool_cpi.versions` | Which instructions and account types each Anchor release provides |

## Public keys

```python
from whirlpool_cpi.pubkey import Pubkey, WHIRLPOOL_PROGRAM_ID

key = Pubkey.from_base58(str(WHIRLPOOL_PROGRAM_ID))
assert key == WHIRLPOOL_PROGRAM_ID
print(key.to_base58())
print(Pubkey())  # the all-zero key, "11111111111111111111111111111111"
```

A `Pubkey` must be exactly 32 bytes; anything else raises `ValueError`.
`b58decode` raises `ValueError` on characters outside the base58 alphabet.

## Accounts

`whirlpool_cpi.state` has `WhirlpoolsConfig`, `FeeTier`, `Whirlpool`,
`TickArray`, `Position`, `PositionBundle`, `WhirlpoolsConfigExtension`,
`TokenBadge` and `LockConfig`. Each reads and writes the full account data,
including the 8-byte discriminator; `to_bytes()` pads with zeros up to the
type's `LEN`.

```python
from whirlpool_cpi.state import Position, Whirlpool

pool = Whirlpool.from_bytes(account_data)
print(pool.tick_spacing, pool.sqrt_price, pool.tick_current_index)

position = Position(liquidity=10, tick_lower_index=-64, tick_upper_index=64)
assert Position.from_bytes(position.to_bytes()) == position
```

Data with the wrong prefix raises `AccountDiscriminatorError`.

Argument types for instructions are also here: `WhirlpoolBumps`,
`OpenPositionBumps`, `OpenPositionWithMetadataBumps`, `LockType`, and
`RemainingAccountsInfo` built from `RemainingAccountsSlice` entries whose
`accounts_type` is an `AccountsType` member.

## Tick arrays

```python
from whirlpool_cpi.unpack import (
    AccountDiscriminatorMismatchError,
    ConstraintOwnerError,
    unpack_tick_array,
)

try:
    tick_array = unpack_tick_array(owner, data)
except ConstraintOwnerError:
    ...  # owner is not WHIRLPOOL_PROGRAM_ID
except AccountDiscriminatorMismatchError:
    ...  # the data is not a TickArray

for tick in tick_array.ticks:  # always 88 ticks
    if tick.initialized:
        print(tick.liquidity_net, tick.liquidity_gross)
```

## Building instructions

Accounts are given by name, as listed in the instruction's context, and
arguments are given by name too:

```python
from whirlpool_cpi.contexts_v2 import get_context
from whirlpool_cpi.instructions import build_instruction, decode_instruction

print(get_context("Swap").account_names())

ix = build_instruction(
    "swap",
    accounts,   # mapping of account name -> Pubkey
    {
        "amount": 1_000_000,
        "other_amount_threshold": 0,
        "sqrt_price_limit": 4295048016,
        "amount_specified_is_input": True,
        "a_to_b": True,
    },
    [],         # extra AccountMeta entries appended after the named accounts
)

definition, args = decode_instruction(ix.data)
assert definition.name == "swap"
```

The result is an `Instruction` with `program_id`, `accounts` (a tuple of
`AccountMeta`) and `data`. Missing or unknown account names and arguments
raise `ValueError`. The `remaining_accounts_info` argument of the V2
instructions may be left out, in which case it is encoded as `None`.

## Anchor releases

`lock_position`, `reset_position_range` and the `LockConfig` account exist
only in the 0.30.1 interface.

```python
from whirlpool_cpi.versions import AnchorVersion, build_instruction_for, supports

for version in AnchorVersion:
    print(version.value, supports(version, "lock_position"))
```

`instructions_for(version)` and `account_types_for(version)` list what a
release provides. `build_instruction_for(version, name, accounts, args,
remaining_accounts)` raises `UnsupportedInstructionError` for names the
release lacks. Versions may be given as `AnchorVersion` members or as
strings such as `"0.31.1"`.

## What it does not do

This package only encodes and decodes data. It does not connect to a
cluster, fetch accounts, sign or send transactions, derive program
addresses, or simulate what the program does with an instruction.