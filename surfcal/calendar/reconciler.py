# ABOUTME: Decides the calendar action for a day from its existing event and new window
# ABOUTME: Pure decision table; the orchestrator performs the actual calendar calls

from enum import Enum
from typing import Optional

from surfcal.weather.models import SurfWindow


class EventState(str, Enum):
    """State of the day's existing surf event"""
    NONE = "none"
    DEGRADED = "degraded"
    GOOD = "good"


class Action(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    RECOVER = "recover"
    DEGRADE = "degrade"
    NOOP = "noop"


_DECISIONS = {
    (EventState.NONE, True): Action.CREATE,
    (EventState.NONE, False): Action.NOOP,
    (EventState.GOOD, True): Action.UPDATE,
    (EventState.GOOD, False): Action.DEGRADE,
    (EventState.DEGRADED, True): Action.RECOVER,
    (EventState.DEGRADED, False): Action.NOOP,
}


def decide(existing_state: EventState, window: Optional[SurfWindow]) -> Action:
    """
    Choose what to do with the calendar for one day.

    Args:
        existing_state: State of the day's existing surf event
        window: Best window for the day, or None

    Returns:
        Action to apply
    """
    return _DECISIONS[(EventState(existing_state), window is not None)]
