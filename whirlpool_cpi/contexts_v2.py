"""Account lists of the token-extension (V2) Whirlpool instructions."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .contexts_v1 import V1_CONTEXTS, AccountsContext, AccountSpec


def _context(name: str, *entries: str, args: tuple = ()) -> AccountsContext:
    """Build a context from entries 'name' or 'name flags' (s=signer, w=mut)."""
    specs = []
    for entry in entries:
        account, _, flags = entry.partition(" ")
        specs.append(AccountSpec(account, "s" in flags, "w" in flags))
    return AccountsContext(name, tuple(specs), args)


# V2 instructions take extra remaining accounts (transfer hooks, supplemental
# tick arrays) that are described by a RemainingAccountsInfo argument.
_CONTEXTS = [
    _context(
        "CollectFeesV2",
        "whirlpool", "position_authority s", "position w", "position_token_account",
        "token_mint_a", "token_mint_b",
        "token_owner_account_a w", "token_vault_a w",
        "token_owner_account_b w", "token_vault_b w",
        "token_program_a", "token_program_b", "memo_program",
    ),
    _context(
        "CollectProtocolFeesV2",
        "whirlpools_config", "whirlpool w", "collect_protocol_fees_authority s",
        "token_mint_a", "token_mint_b", "token_vault_a w", "token_vault_b w",
        "token_destination_a w", "token_destination_b w",
        "token_program_a", "token_program_b", "memo_program",
    ),
    _context(
        "CollectRewardV2",
        "whirlpool", "position_authority s", "position w", "position_token_account",
        "reward_owner_account w", "reward_mint", "reward_vault w",
        "reward_token_program", "memo_program",
        args=("reward_index",),
    ),
    _context(
        "DeleteTokenBadge",
        "whirlpools_config", "whirlpools_config_extension", "token_badge_authority s",
        "token_mint", "token_badge w", "receiver w",
    ),
    _context(
        "ModifyLiquidityV2",
        "whirlpool w", "token_program_a", "token_program_b", "memo_program",
        "position_authority s", "position w", "position_token_account",
        "token_mint_a", "token_mint_b",
        "token_owner_account_a w", "token_owner_account_b w",
        "token_vault_a w", "token_vault_b w",
        "tick_array_lower w", "tick_array_upper w",
    ),
    _context(
        "InitializeConfigExtension",
        "config", "config_extension w", "funder sw", "fee_authority s", "system_program",
    ),
    _context(
        "InitializePoolV2",
        "whirlpools_config", "token_mint_a", "token_mint_b",
        "token_badge_a", "token_badge_b", "funder sw", "whirlpool w",
        "token_vault_a sw", "token_vault_b sw", "fee_tier",
        "token_program_a", "token_program_b", "system_program", "rent",
        args=("tick_spacing",),
    ),
    _context(
        "InitializeRewardV2",
        "reward_authority s", "funder sw", "whirlpool w", "reward_mint",
        "reward_token_badge", "reward_vault sw", "reward_token_program",
        "system_program", "rent",
        args=("reward_index",),
    ),
    _context(
        "InitializeTokenBadge",
        "whirlpools_config", "whirlpools_config_extension", "token_badge_authority s",
        "token_mint", "token_badge w", "funder sw", "system_program",
    ),
    _context(
        "SetConfigExtensionAuthority",
        "whirlpools_config", "whirlpools_config_extension w",
        "config_extension_authority s", "new_config_extension_authority",
    ),
    _context(
        "SetRewardEmissionsV2",
        "whirlpool w", "reward_authority s", "reward_vault",
        args=("reward_index",),
    ),
    _context(
        "SetTokenBadgeAuthority",
        "whirlpools_config", "whirlpools_config_extension",
        "config_extension_authority s", "new_token_badge_authority",
    ),
    _context(
        "SwapV2",
        "token_program_a", "token_program_b", "memo_program", "token_authority s",
        "whirlpool w", "token_mint_a", "token_mint_b",
        "token_owner_account_a w", "token_vault_a w",
        "token_owner_account_b w", "token_vault_b w",
        "tick_array_0 w", "tick_array_1 w", "tick_array_2 w", "oracle w",
    ),
    _context(
        "TwoHopSwapV2",
        "whirlpool_one w", "whirlpool_two w",
        "token_mint_input", "token_mint_intermediate", "token_mint_output",
        "token_program_input", "token_program_intermediate", "token_program_output",
        "token_owner_account_input w", "token_vault_one_input w",
        "token_vault_one_intermediate w", "token_vault_two_intermediate w",
        "token_vault_two_output w", "token_owner_account_output w",
        "token_authority s",
        "tick_array_one_0 w", "tick_array_one_1 w", "tick_array_one_2 w",
        "tick_array_two_0 w", "tick_array_two_1 w", "tick_array_two_2 w",
        "oracle_one w", "oracle_two w", "memo_program",
        args=(
            "amount",
            "other_amount_threshold",
            "amount_specified_is_input",
            "a_to_b_one",
            "a_to_b_two",
        ),
    ),
    _context(
        "OpenPositionWithTokenExtensions",
        "funder sw", "owner", "position w", "position_mint sw",
        "position_token_account w", "whirlpool", "token_2022_program",
        "system_program", "associated_token_program", "metadata_update_auth",
    ),
    _context(
        "ClosePositionWithTokenExtensions",
        "position_authority s", "receiver w", "position w", "position_mint w",
        "position_token_account w", "token_2022_program",
    ),
    _context(
        "LockPosition",
        "funder sw", "position_authority s", "position", "position_mint",
        "position_token_account w", "lock_config w", "whirlpool",
        "token_2022_program", "system_program",
    ),
    _context(
        "ResetPositionRange",
        "funder sw", "position_authority s", "whirlpool", "position w",
        "position_token_account", "system_program",
    ),
]

V2_CONTEXTS: Mapping[str, AccountsContext] = MappingProxyType(
    {context.name: context for context in _CONTEXTS}
)


def get_v2_context(name: str) -> AccountsContext:
    """Look up a token-extension instruction context by its type name."""
    try:
        return V2_CONTEXTS[name]
    except KeyError:
        raise KeyError(f"unknown context {name!r}") from None


def get_context(name: str) -> AccountsContext:
    """Look up any instruction context, original or token-extension."""
    context = V1_CONTEXTS.get(name) or V2_CONTEXTS.get(name)
    if context is None:
        raise KeyError(f"unknown context {name!r}")
    return context