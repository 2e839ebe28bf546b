"""Report Generation - Pure functions for generating reports.

All functions are pure: same input always produces same output, no side effects.
"""

import math
from datetime import date, timedelta

from .catalog import FoodCatalog
from .dates import parse_date_key, week_keys
from .models import DaySummary, DietState, WeeklyReport
from .nutrients import aggregate, count_resolved_entries
from .resolver import is_materialized, resolve


def generate_day_summary(state: DietState, day: str, catalog: FoodCatalog) -> DaySummary:
    """Generate a summary for a single day's effective content.

    Args:
        state: Current diet state
        day: Day key
        catalog: Food lookup

    Returns:
        DaySummary with totals for the day
    """
    content = resolve(state, day)
    return DaySummary(
        log_date=parse_date_key(day),
        totals=aggregate(content, catalog),
        entry_count=count_resolved_entries(content, catalog),
        materialized=is_materialized(state, day),
    )


def generate_weekly_report(
    state: DietState,
    catalog: FoodCatalog,
    week_start: date | None = None,
) -> WeeklyReport:
    """Generate a weekly report over seven effective days.

    Untouched days count with the template's content, the same as they
    would be shown.

    Args:
        state: Current diet state
        catalog: Food lookup
        week_start: Start date of the week (defaults to 6 days ago)

    Returns:
        WeeklyReport with daily summaries and aggregate metrics
    """
    if week_start is None:
        week_start = date.today() - timedelta(days=6)

    daily_summaries = [generate_day_summary(state, key, catalog) for key in week_keys(week_start)]

    total_calories = math.fsum(s.totals.calories for s in daily_summaries)
    days_with_food = sum(1 for s in daily_summaries if s.entry_count > 0)

    avg_daily_calories = total_calories / days_with_food if days_with_food > 0 else 0.0

    micronutrients: set[str] = set()
    for summary in daily_summaries:
        micronutrients.update(summary.totals.micronutrients)

    return WeeklyReport(
        week_start=week_start,
        week_end=week_start + timedelta(days=6),
        daily_summaries=daily_summaries,
        total_calories=total_calories,
        total_protein=math.fsum(s.totals.protein for s in daily_summaries),
        total_carbs=math.fsum(s.totals.carbs for s in daily_summaries),
        total_fat=math.fsum(s.totals.fat for s in daily_summaries),
        avg_daily_calories=round(avg_daily_calories, 1),
        days_with_food=days_with_food,
        micronutrients=frozenset(micronutrients),
    )
