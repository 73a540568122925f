"""Per-user rolling-window quota on AI analyses."""

import logging
from datetime import timedelta

from ..models import RateLimitStatus
from ..storage import Database
from .clock import Clock, utc_now

logger = logging.getLogger(__name__)


class RateLimiter:
    """Rolling-window rate limiter backed by the query_usage table.

    Each recorded query occupies one slot for exactly `window` after it was
    made, independent of calendar days and of other queries. All state lives
    in the database, so every process sees the same counts.

    check_status and record_query are not atomic together: two concurrent
    requests from the same user can both pass the check, overshooting the
    limit by at most the number of in-flight requests.
    """

    def __init__(
        self,
        db: Database,
        max_queries: int = 5,
        window: timedelta = timedelta(hours=24),
        clock: Clock = utc_now,
    ):
        self.db = db
        self.max_queries = max_queries
        self.window = window
        self._clock = clock

    async def check_status(self, user_id: str) -> RateLimitStatus:
        """Compute the user's quota state as of now."""
        now = self._clock()
        used, oldest = await self.db.get_query_window(user_id, now - self.window)

        # The oldest in-window query is the next one to free a slot
        reset_at = oldest + self.window if oldest is not None else now + self.window

        return RateLimitStatus(
            allowed=used < self.max_queries,
            remaining=max(0, self.max_queries - used),
            used=used,
            reset_at=reset_at,
        )

    async def record_query(self, user_id: str) -> None:
        """Charge one query to the user at the current time."""
        await self.db.record_query(user_id, self._clock())
        logger.debug(f"Recorded query for user {user_id}")
