"""
Block clock - monotonically increasing block counter
"""

import threading
from dataclasses import dataclass

from ..rules import check_clock


@dataclass(frozen=True)
class SyncSummary:
    block_num: int


class BlockClock:
    """Block height source; only ever moves forward"""

    def __init__(self, height: int = 0):
        self._height = check_clock(height, "height")
        self._lock = threading.Lock()

    def current_clock(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        """Produce ``blocks`` new blocks and return the new height"""
        if blocks <= 0:
            raise ValueError(f"Clock can only move forward, got {blocks} blocks")
        with self._lock:
            self._height = check_clock(self._height + blocks, "height")
            return self._height

    def sync_state(self) -> SyncSummary:
        return SyncSummary(block_num=self._height)
