"""Day Resolution - Pure functions deciding what a day actually contains.

A day key absent from the overrides is Inherited and shows the template,
whatever the template is at the time of the read. A present key is Explicit
and authoritative, even when every slot is empty.
"""

from datetime import date

from .dates import normalize_date_key, previous_day_key
from .models import DayContent, DayState, DietState, Explicit, Inherited


def day_state(state: DietState, day: "date | str") -> DayState:
    """Tagged state of one day.

    Raises:
        ValueError: If day is not a valid YYYY-MM-DD key
    """
    key = normalize_date_key(day)
    content = state.overrides.get(key)
    if content is None:
        return Inherited()
    return Explicit(content=content)


def resolve(state: DietState, day: "date | str") -> DayContent:
    """Effective content of a day: its override if any, else the template."""
    current = day_state(state, day)
    if isinstance(current, Explicit):
        return current.content
    return state.template


def is_materialized(state: DietState, day: "date | str") -> bool:
    """True once the day has its own explicit content."""
    return isinstance(day_state(state, day), Explicit)


def has_food(content: DayContent) -> bool:
    """True when any slot has at least one entry."""
    return not content.is_empty()


def needs_overwrite_confirmation(state: DietState, day: "date | str") -> bool:
    """True when replacing the day would discard explicit, non-empty content.

    Callers use this to ask before copying another day over this one.
    """
    current = day_state(state, day)
    return isinstance(current, Explicit) and has_food(current.content)


def previous_day_content(state: DietState, day: "date | str") -> DayContent:
    """Effective content of the calendar day before the given one."""
    return resolve(state, previous_day_key(day))
