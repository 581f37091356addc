from __future__ import annotations


class WipStatusValidator:
    """
    Status transition rules for WIP batches.

    Statuses are free text on the record; only the ones below carry rules.
    'cancelled' is accepted on stored records but no transition leads to it,
    since nothing would return the consumed materials.
    """

    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    _NEXT = {
        PLANNED: {IN_PROGRESS, ON_HOLD, COMPLETED},
        IN_PROGRESS: {ON_HOLD, COMPLETED},
        ON_HOLD: {IN_PROGRESS, COMPLETED},
        COMPLETED: set(),
        CANCELLED: set(),
    }

    @classmethod
    def can_transition(cls, current_status: str, new_status: str) -> bool:
        if new_status == cls.CANCELLED:
            return False
        allowed = cls._NEXT.get(current_status)
        if allowed is None:
            # free-text status without rules: anything but cancellation
            return True
        return new_status in allowed
