"""Shared helpers for the eth-parser service."""

from .hex_codec import TRANSFER_EVENT_TOPIC, format_address_for_topics, hex_to_int
from .rw_lock import ReadWriteLock

__all__ = [
    "TRANSFER_EVENT_TOPIC",
    "ReadWriteLock",
    "format_address_for_topics",
    "hex_to_int",
]
