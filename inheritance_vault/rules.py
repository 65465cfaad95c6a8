"""
Clock domain and deadline rules
"""

CLOCK_MAX = (1 << 64) - 1


def check_clock(value: int, name: str = "clock") -> int:
    """Validate a block height as an unsigned 64-bit integer"""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer block height, got {type(value).__name__}")
    if not (0 <= value <= CLOCK_MAX):
        raise ValueError(f"{name} out of u64 range: {value}")
    return value


def has_deadline_passed(deadline: int, now: int) -> bool:
    """True once the clock has reached the deadline"""
    return now >= deadline


def blocks_remaining(deadline: int, now: int) -> int:
    """Blocks left until the deadline is reached (0 once it has passed)"""
    if has_deadline_passed(deadline, now):
        return 0
    return deadline - now
