"""
Ledger stack - in-memory stand-ins for the chain a vault lives on
"""

from .chain import BlockClock, SyncSummary
from .host import ExecutionHost
from .keystore import FilesystemKeyStore, KeyStoreError
from .state import AccountKind, Ledger, consume_message

__all__ = [
    "BlockClock",
    "SyncSummary",
    "ExecutionHost",
    "FilesystemKeyStore",
    "KeyStoreError",
    "AccountKind",
    "Ledger",
    "consume_message"
]
