"""Hydration log service."""

from dataclasses import dataclass
from uuid import uuid4

from wellness_tracker.domain.hydration import WaterLog
from wellness_tracker.services.collections import (
    InvalidInputError,
    WaterLogs,
    current_timestamp,
    total,
)

QUICK_ADD_AMOUNTS_ML = (250, 500)


@dataclass
class HydrationService:
    """Records water intake and undoes the latest entry."""

    logs: WaterLogs

    def add_water(self, amount_ml: int) -> WaterLog:
        """Append a water entry of the given volume."""
        if isinstance(amount_ml, bool) or amount_ml <= 0:
            raise InvalidInputError("Water amount must be a positive number of ml")
        entry = WaterLog(id=uuid4(), amount_ml=amount_ml, timestamp=current_timestamp())
        self.logs.append(entry)
        return entry

    def undo_last(self) -> WaterLog | None:
        """Remove the latest entry and return it, or None when empty."""
        if not self.logs.items:
            return None
        removed = self.logs.items[-1]
        self.logs.remove_last()
        return removed

    def total_ml(self) -> int:
        """Return the total volume logged."""
        return int(total(self.logs.items, "amount_ml"))
