"""Differences between the published interface versions of the program."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Union

from .contexts_v1 import AccountMeta
from .instructions import INSTRUCTIONS, Instruction, InstructionDef
from .pubkey import Pubkey
from .state import (
    FeeTier,
    LockConfig,
    Position,
    PositionBundle,
    TickArray,
    TokenBadge,
    Whirlpool,
    WhirlpoolsConfig,
    WhirlpoolsConfigExtension,
)


class AnchorVersion(Enum):
    """A framework version the interface was published for."""

    V0_30_1 = "0.30.1"
    V0_31_0 = "0.31.0"
    V0_31_1 = "0.31.1"


class UnsupportedInstructionError(KeyError):
    """Raised when an instruction is not part of the requested interface version."""


# Position locking and range resetting are only exposed by the 0.30.1 interface.
_LOCK_INSTRUCTIONS = frozenset({"lock_position", "reset_position_range"})

_COMMON_ACCOUNT_TYPES = (
    WhirlpoolsConfig,
    FeeTier,
    Whirlpool,
    TickArray,
    Position,
    PositionBundle,
    WhirlpoolsConfigExtension,
    TokenBadge,
)


def _coerce(version: Union[AnchorVersion, str]) -> AnchorVersion:
    if isinstance(version, AnchorVersion):
        return version
    try:
        return AnchorVersion(version)
    except ValueError:
        known = ", ".join(member.value for member in AnchorVersion)
        raise ValueError(f"unsupported version {version!r}; known: {known}") from None


@lru_cache(maxsize=None)
def _instructions(version: AnchorVersion) -> Mapping[str, InstructionDef]:
    excluded = frozenset() if version is AnchorVersion.V0_30_1 else _LOCK_INSTRUCTIONS
    return MappingProxyType(
        {name: definition for name, definition in INSTRUCTIONS.items() if name not in excluded}
    )


@lru_cache(maxsize=None)
def _account_types(version: AnchorVersion) -> Mapping[str, type]:
    types = _COMMON_ACCOUNT_TYPES
    if version is AnchorVersion.V0_30_1:
        types = types + (LockConfig,)
    return MappingProxyType({cls.__name__: cls for cls in types})


def instructions_for(version: Union[AnchorVersion, str]) -> Mapping[str, InstructionDef]:
    """The instructions of a version, by name, in declaration order."""
    return _instructions(_coerce(version))


def account_types_for(version: Union[AnchorVersion, str]) -> Mapping[str, type]:
    """The account types of a version, by type name."""
    return _account_types(_coerce(version))


def supports(version: Union[AnchorVersion, str], name: str) -> bool:
    """Whether the version has an instruction or account type of this name."""
    resolved = _coerce(version)
    return name in _instructions(resolved) or name in _account_types(resolved)


def build_instruction_for(
    version: Union[AnchorVersion, str],
    name: str,
    accounts: Mapping[str, Pubkey],
    args: Optional[Mapping[str, Any]] = None,
    remaining_accounts: Optional[Iterable[AccountMeta]] = None,
) -> Instruction:
    """Build an instruction, refusing ones the version does not provide."""
    resolved = _coerce(version)
    definition = _instructions(resolved).get(name)
    if definition is None:
        raise UnsupportedInstructionError(
            f"instruction {name!r} is not available in version {resolved.value}"
        )
    return definition.build(accounts, args, remaining_accounts)