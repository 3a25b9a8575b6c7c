"""Public keys, Borsh codecs, account layouts and instruction encoding for the Whirlpool program."""

__version__ = "0.1.4"

__all__ = [
    "borsh",
    "contexts_v1",
    "contexts_v2",
    "instructions",
    "pubkey",
    "state",
    "unpack",
    "versions",
]