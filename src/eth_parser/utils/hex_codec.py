"""
Hex helpers for JSON-RPC quantities and event topics.
"""

import string

from web3 import Web3

from ..exceptions import DecodeError

# Transfer(address,address,uint256)
TRANSFER_EVENT_SIGNATURE = "Transfer(address,address,uint256)"
TRANSFER_EVENT_TOPIC: str = Web3.to_hex(Web3.keccak(text=TRANSFER_EVENT_SIGNATURE))

_HEX_DIGITS = frozenset(string.hexdigits)


def hex_to_int(value: str) -> int:
    """
    Decode a hex quantity such as ``"0x2a"`` into an integer.

    The ``0x`` prefix is optional, so ``"2a"`` decodes the same way.

    :param value: Hex string returned by the node
    :return: Decoded integer
    :raises DecodeError: If the value is not a non-empty hex string
    """
    if not isinstance(value, str):
        raise DecodeError(f"expected hex string, got {type(value).__name__}")

    digits = value[2:] if value[:2] in ("0x", "0X") else value
    if not digits or not set(digits) <= _HEX_DIGITS:
        raise DecodeError(f"invalid hex quantity: {value!r}")

    return int(digits, 16)


def format_address_for_topics(address: str) -> str:
    """
    Encode an address as a 32-byte topic value.

    Strips an optional ``0x``, lowercases, left-pads with zeros to 64 hex
    characters and re-adds the prefix.
    """
    digits = address.removeprefix("0x").lower()
    return "0x" + digits.rjust(64, "0")
