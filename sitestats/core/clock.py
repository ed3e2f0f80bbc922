import time
from typing import Optional


def now_ms(now: Optional[int] = None) -> int:
    """Current time in epoch milliseconds, or ``now`` when given"""
    if now is not None:
        return int(now)
    return int(time.time() * 1000)
