"""Account lists of the original (non token-extension) Whirlpool instructions."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .pubkey import Pubkey


@dataclass(frozen=True)
class AccountMeta:
    """An account passed to an instruction."""

    pubkey: Pubkey
    is_signer: bool
    is_writable: bool


@dataclass(frozen=True)
class AccountSpec:
    """One named account slot of an instruction context."""

    name: str
    is_signer: bool = False
    is_writable: bool = False


@dataclass(frozen=True)
class AccountsContext:
    """The ordered accounts an instruction expects."""

    name: str
    accounts: tuple
    instruction_args: tuple = ()

    def account_names(self) -> list[str]:
        return [spec.name for spec in self.accounts]

    def to_account_metas(
        self,
        addresses: Mapping[str, Pubkey],
        remaining_accounts: Optional[Iterable[AccountMeta]] = None,
    ) -> list[AccountMeta]:
        """Order the given addresses as the context expects, then append the rest."""
        names = self.account_names()
        missing = [name for name in names if name not in addresses]
        if missing:
            raise ValueError(f"{self.name}: missing accounts {', '.join(missing)}")
        unknown = sorted(set(addresses) - set(names))
        if unknown:
            raise ValueError(f"{self.name}: unknown accounts {', '.join(unknown)}")
        metas = []
        for spec in self.accounts:
            address = addresses[spec.name]
            if not isinstance(address, Pubkey):
                raise TypeError(f"{self.name}.{spec.name} must be a Pubkey, got {address!r}")
            metas.append(AccountMeta(address, spec.is_signer, spec.is_writable))
        metas.extend(remaining_accounts or ())
        return metas


def _ctx(name: str, *entries: str, args: tuple = ()) -> AccountsContext:
    """Build a context from entries of the form 'name' or 'name flags' (s=signer, w=mut)."""
    specs = []
    for entry in entries:
        account, _, flags = entry.partition(" ")
        specs.append(AccountSpec(account, "s" in flags, "w" in flags))
    return AccountsContext(name, tuple(specs), args)


_CONTEXTS = [
    _ctx(
        "CloseBundledPosition",
        "bundled_position w", "position_bundle w", "position_bundle_token_account",
        "position_bundle_authority s", "receiver w",
    ),
    _ctx(
        "ClosePosition",
        "position_authority s", "receiver w", "position w", "position_mint w",
        "position_token_account w", "token_program",
    ),
    _ctx(
        "CollectFees",
        "whirlpool", "position_authority s", "position w", "position_token_account",
        "token_owner_account_a w", "token_vault_a w", "token_owner_account_b w",
        "token_vault_b w", "token_program",
    ),
    _ctx(
        "CollectProtocolFees",
        "whirlpools_config", "whirlpool w", "collect_protocol_fees_authority s",
        "token_vault_a w", "token_vault_b w", "token_destination_a w",
        "token_destination_b w", "token_program",
    ),
    _ctx(
        "CollectReward",
        "whirlpool", "position_authority s", "position w", "position_token_account",
        "reward_owner_account w", "reward_vault w", "token_program",
        args=("reward_index",),
    ),
    _ctx(
        "DeletePositionBundle",
        "position_bundle w", "position_bundle_mint w", "position_bundle_token_account w",
        "position_bundle_owner s", "receiver w", "token_program",
    ),
    _ctx(
        "ModifyLiquidity",
        "whirlpool w", "token_program", "position_authority s", "position w",
        "position_token_account", "token_owner_account_a w", "token_owner_account_b w",
        "token_vault_a w", "token_vault_b w", "tick_array_lower w", "tick_array_upper w",
    ),
    _ctx("InitializeConfig", "config sw", "funder sw", "system_program"),
    _ctx(
        "InitializeFeeTier",
        "config", "fee_tier w", "funder sw", "fee_authority s", "system_program",
        args=("tick_spacing",),
    ),
    _ctx(
        "InitializePool",
        "whirlpools_config", "token_mint_a", "token_mint_b", "funder sw", "whirlpool w",
        "token_vault_a sw", "token_vault_b sw", "fee_tier", "token_program",
        "system_program", "rent",
        args=("tick_spacing",),
    ),
    _ctx(
        "InitializePositionBundle",
        "position_bundle w", "position_bundle_mint sw", "position_bundle_token_account w",
        "position_bundle_owner", "funder sw", "token_program", "system_program", "rent",
        "associated_token_program",
    ),
    _ctx(
        "InitializePositionBundleWithMetadata",
        "position_bundle w", "position_bundle_mint sw", "position_bundle_metadata w",
        "position_bundle_token_account w", "position_bundle_owner", "funder sw",
        "metadata_update_auth", "token_program", "system_program", "rent",
        "associated_token_program", "metadata_program",
    ),
    _ctx(
        "InitializeReward",
        "reward_authority s", "funder sw", "whirlpool w", "reward_mint", "reward_vault sw",
        "token_program", "system_program", "rent",
        args=("reward_index",),
    ),
    _ctx("InitializeTickArray", "whirlpool", "funder sw", "tick_array w", "system_program"),
    _ctx(
        "OpenBundledPosition",
        "bundled_position w", "position_bundle w", "position_bundle_token_account",
        "position_bundle_authority s", "whirlpool", "funder sw", "system_program", "rent",
        args=("bundle_index",),
    ),
    _ctx(
        "OpenPosition",
        "funder sw", "owner", "position w", "position_mint sw", "position_token_account w",
        "whirlpool", "token_program", "system_program", "rent", "associated_token_program",
    ),
    _ctx(
        "OpenPositionWithMetadata",
        "funder sw", "owner", "position w", "position_mint sw",
        "position_metadata_account w", "position_token_account w", "whirlpool",
        "token_program", "system_program", "rent", "associated_token_program",
        "metadata_program", "metadata_update_auth",
    ),
    _ctx(
        "SetCollectProtocolFeesAuthority",
        "whirlpools_config w", "collect_protocol_fees_authority s",
        "new_collect_protocol_fees_authority",
    ),
    _ctx("SetDefaultFeeRate", "whirlpools_config", "fee_tier w", "fee_authority s"),
    _ctx("SetDefaultProtocolFeeRate", "whirlpools_config w", "fee_authority s"),
    _ctx("SetFeeAuthority", "whirlpools_config w", "fee_authority s", "new_fee_authority"),
    _ctx("SetFeeRate", "whirlpools_config", "whirlpool w", "fee_authority s"),
    _ctx("SetProtocolFeeRate", "whirlpools_config", "whirlpool w", "fee_authority s"),
    _ctx(
        "SetRewardAuthority",
        "whirlpool w", "reward_authority s", "new_reward_authority",
        args=("reward_index",),
    ),
    _ctx(
        "SetRewardAuthorityBySuperAuthority",
        "whirlpools_config", "whirlpool w", "reward_emissions_super_authority s",
        "new_reward_authority",
        args=("reward_index",),
    ),
    _ctx(
        "SetRewardEmissions",
        "whirlpool w", "reward_authority s", "reward_vault",
        args=("reward_index",),
    ),
    _ctx(
        "SetRewardEmissionsSuperAuthority",
        "whirlpools_config w", "reward_emissions_super_authority s",
        "new_reward_emissions_super_authority",
    ),
    _ctx(
        "Swap",
        "token_program", "token_authority s", "whirlpool w", "token_owner_account_a w",
        "token_vault_a w", "token_owner_account_b w", "token_vault_b w",
        "tick_array_0 w", "tick_array_1 w", "tick_array_2 w", "oracle w",
    ),
    _ctx(
        "TwoHopSwap",
        "token_program", "token_authority s", "whirlpool_one w", "whirlpool_two w",
        "token_owner_account_one_a w", "token_vault_one_a w",
        "token_owner_account_one_b w", "token_vault_one_b w",
        "token_owner_account_two_a w", "token_vault_two_a w",
        "token_owner_account_two_b w", "token_vault_two_b w",
        "tick_array_one_0 w", "tick_array_one_1 w", "tick_array_one_2 w",
        "tick_array_two_0 w", "tick_array_two_1 w", "tick_array_two_2 w",
        "oracle_one w", "oracle_two w",
    ),
    _ctx(
        "UpdateFeesAndRewards",
        "whirlpool w", "position w", "tick_array_lower", "tick_array_upper",
    ),
]

V1_CONTEXTS: Mapping[str, AccountsContext] = MappingProxyType(
    {context.name: context for context in _CONTEXTS}
)


def get_v1_context(name: str) -> AccountsContext:
    """Look up an original instruction context by its type name."""
    try:
        return V1_CONTEXTS[name]
    except KeyError:
        raise KeyError(f"unknown context {name!r}") from None