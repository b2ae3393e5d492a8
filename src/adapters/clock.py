"""System clock adapter - Implements Clock protocol."""

import time


class SystemClock:
    """
    Implements Clock protocol via the host wall clock.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def now(self) -> int:
        """Current UNIX time, truncated to whole seconds."""
        return int(time.time())
