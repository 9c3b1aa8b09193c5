"""
API Call Counter - daily limit shared by the Places and Directions clients
"""
from datetime import date
from typing import Dict, Optional
from shiptrack.config import settings
from shiptrack.errors import QuotaExceededError


class APICounter:
    """Per-day API call counter; the limit applies to the total across services"""

    def __init__(self, max_calls_per_day: Optional[int] = None):
        self.max_calls_per_day = (
            max_calls_per_day
            if max_calls_per_day is not None
            else settings.max_api_calls_per_day
        )
        self.call_count: Dict[str, int] = {}
        self.current_date = date.today()

    def _roll_over(self) -> None:
        # Reset counter if date changes
        today = date.today()
        if today != self.current_date:
            self.call_count.clear()
            self.current_date = today

    def total_calls(self) -> int:
        self._roll_over()
        return sum(self.call_count.values())

    def can_make_call(self) -> bool:
        """Check if another call fits in today's budget"""
        return self.total_calls() < self.max_calls_per_day

    def ensure_available(self, service: str) -> None:
        if not self.can_make_call():
            raise QuotaExceededError(
                f"API call limit exceeded for {service}. "
                f"Max calls per day: {self.max_calls_per_day}",
                status_code=429,
            )

    def record_call(self, service: str) -> None:
        """Record one API call"""
        self._roll_over()
        self.call_count[service] = self.call_count.get(service, 0) + 1

    def get_remaining_calls(self) -> int:
        return max(0, self.max_calls_per_day - self.total_calls())


# Global counter instance
api_counter = APICounter()
