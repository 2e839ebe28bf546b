"""MCP Server - Tool definitions for assistant integration.

Defines all MCP tools an assistant can invoke to log meals and edit the diet
plan. Every mutating tool persists the whole document after the change and
discards the change if the write fails.
"""

import logging
import os

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from ..core.dates import normalize_date_key, parse_date_key, previous_day_key, today_key
from ..core.goals import compare_to_goals
from ..core.models import DayContent, NutritionGoals
from ..core.mutations import add_template_food, remove_template_food
from ..core.nutrients import aggregate, describe_micronutrients
from ..core.reports import generate_weekly_report
from ..core.resolver import has_food
from .session import DietSession
from .storage import JsonFileStorage, StorageConfig


logger = logging.getLogger(__name__)

# Local single-user deployment: only loopback hosts are accepted
transport_security = TransportSecuritySettings(
    enable_dns_rebinding_protection=True,
    allowed_hosts=["localhost:*", "127.0.0.1:*"],
)

mcp = FastMCP(
    "mealplan",
    instructions="""Meal Plan - Personal diet plan and meal logging assistant.

Each day shows the base plan until something is logged or removed on that day;
from then on the day keeps its own content and later base plan edits do not
change it.

Use list_foods to find food ids before logging. After logging, show the
updated day summary. When copy_previous_day asks for confirmation, ask the
user before calling it again with confirm=true.""",
    stateless_http=True,
    transport_security=transport_security,
)

# Lazy-initialized session
_session: DietSession | None = None


def get_session() -> DietSession:
    """Get or create the diet session.

    Raises:
        RuntimeError: If the stored document cannot be loaded
    """
    global _session
    if _session is None:
        config = StorageConfig()
        if os.environ.get("MEALPLAN_DATA_FILE"):
            logger.info("Using data file from MEALPLAN_DATA_FILE: %s", config.path)
        _session = DietSession(JsonFileStorage(config))
    return _session


def set_session(session: DietSession | None) -> None:
    """Install a session (or clear it so the next call reloads)."""
    global _session
    _session = session


def _day_key(date_str: str | None) -> str:
    return today_key() if date_str is None else normalize_date_key(date_str)


def _content_payload(content: DayContent, session: DietSession) -> dict:
    """Meals with each entry's catalog details."""
    meals = {}
    for slot, entries in content.slots():
        items = []
        for entry in entries:
            food = session.catalog.lookup(entry.food_id)
            item = {"id": entry.id, "food_id": entry.food_id, "servings": entry.servings}
            if food is None:
                item["missing"] = True
            else:
                item.update({
                    "name": food.name,
                    "serving_size": food.serving_size,
                    "calories": food.calories * entry.servings,
                    "protein": food.protein * entry.servings,
                    "carbs": food.carbs * entry.servings,
                    "fat": food.fat * entry.servings,
                })
            items.append(item)
        meals[slot.value] = items
    return meals


def _summary_payload(content: DayContent, session: DietSession) -> dict:
    totals = aggregate(content, session.catalog)
    progress = compare_to_goals(totals, session.goals)
    return {
        "totals": {
            "calories": round(totals.calories),
            "protein": round(totals.protein, 1),
            "carbs": round(totals.carbs, 1),
            "fat": round(totals.fat, 1),
        },
        "progress": progress.model_dump(),
        "micronutrients": [
            f"{info.emoji} {info.name}" for info in describe_micronutrients(totals.micronutrients)
        ],
    }


def _day_payload(key: str, session: DietSession) -> dict:
    content = session.store.resolve(key)
    return {
        "date": key,
        "follows_plan": not session.store.is_materialized(key),
        "meals": _content_payload(content, session),
        "summary": _summary_payload(content, session),
    }


# ==================== Goal Tools ====================


@mcp.tool()
def set_goals(calories: float, protein: float, carbs: float, fat: float) -> str:
    """Configure the user's daily nutrition goals.

    Args:
        calories: Daily calorie target (e.g., 2000)
        protein: Daily protein target in grams (e.g., 150)
        carbs: Daily carbohydrate target in grams (e.g., 200)
        fat: Daily fat target in grams (e.g., 65)

    Returns:
        Confirmation message with stored goals
    """
    session = get_session()

    try:
        goals = NutritionGoals(calories=calories, protein=protein, carbs=carbs, fat=fat)
    except ValueError as e:
        return f"Invalid goals: {e}"

    if session.set_goals(goals):
        return f"Goals saved! {calories:g} cal, {protein:g}g protein, {carbs:g}g carbs, {fat:g}g fat"
    else:
        return "Failed to save goals. Please try again."


@mcp.tool()
def get_goals() -> dict:
    """Retrieve the user's daily nutrition goals."""
    return get_session().goals.model_dump()


# ==================== Catalog Tools ====================


@mcp.tool()
def list_foods() -> list[dict]:
    """List the foods in the catalog with their per-serving macros."""
    return [
        {
            "id": f.id,
            "name": f.name,
            "serving_size": f.serving_size,
            "calories": f.calories,
            "protein": f.protein,
            "carbs": f.carbs,
            "fat": f.fat,
            "micronutrients": f.micronutrients,
        }
        for f in get_session().catalog.foods()
    ]


# ==================== Logging Tools ====================


@mcp.tool()
def log_food(food_id: str, servings: float, meal: str, date_str: str | None = None) -> dict:
    """Add a food to a meal on a day (today by default).

    The first change to a day copies the base plan into it; the food is then
    added on top.

    Args:
        food_id: Catalog id of the food
        servings: Number of servings, must be positive
        meal: breakfast, lunch, dinner, postWorkout or snacks
        date_str: Day in YYYY-MM-DD format (defaults to today)

    Returns:
        The created entry and the updated day
    """
    session = get_session()
    previous = session.store.snapshot()

    try:
        key = _day_key(date_str)
        entry = session.store.log_food(key, meal, food_id, servings)
    except ValueError as e:
        return {"error": f"Invalid input: {e}"}

    if not session.commit(previous):
        return {"error": "Failed to save. Please try again."}

    result = {
        "entry": entry.model_dump(),
        "day": _day_payload(key, session),
    }
    if session.catalog.lookup(food_id) is None:
        result["warning"] = f"Food {food_id!r} is not in the catalog; it will not count toward totals."
    return result


@mcp.tool()
def remove_food(entry_id: str, meal: str, date_str: str | None = None) -> dict:
    """Remove a logged food from a meal on a day (today by default).

    Removing a food the day inherited from the base plan only changes that
    day, never the plan.

    Args:
        entry_id: The ID of the entry to remove
        meal: Meal the entry is in
        date_str: Day in YYYY-MM-DD format (defaults to today)

    Returns:
        The updated day
    """
    session = get_session()
    previous = session.store.snapshot()

    try:
        key = _day_key(date_str)
        session.store.remove_logged_food(key, meal, entry_id)
    except ValueError as e:
        return {"error": f"Invalid input: {e}"}

    if not session.commit(previous):
        return {"error": "Failed to save. Please try again."}

    return {"success": True, "day": _day_payload(key, session)}


@mcp.tool()
def copy_previous_day(date_str: str | None = None, confirm: bool = False) -> dict:
    """Copy what was eaten on the previous day onto a day (today by default).

    If the day already has its own logged food, nothing is changed unless
    confirm is true.

    Args:
        date_str: Destination day in YYYY-MM-DD format (defaults to today)
        confirm: Set after the user agreed to overwrite the day

    Returns:
        The updated day, or a confirmation request
    """
    session = get_session()

    try:
        key = _day_key(date_str)
        source_key = previous_day_key(key)
    except ValueError as e:
        return {"error": f"Invalid input: {e}"}

    if not has_food(session.store.resolve(source_key)):
        return {"error": f"Nothing to copy from {source_key}."}

    if session.store.needs_overwrite_confirmation(key) and not confirm:
        return {
            "confirmation_required": True,
            "message": f"{key} already has logged food. Copying {source_key} will replace it.",
        }

    previous = session.store.snapshot()
    session.store.copy_previous_day(key)

    if not session.commit(previous):
        return {"error": "Failed to save. Please try again."}

    return {"success": True, "copied_from": source_key, "day": _day_payload(key, session)}


# ==================== Plan Tools ====================


@mcp.tool()
def get_plan() -> dict:
    """Get the base plan shown on every day that has not been changed."""
    session = get_session()
    template = session.store.template
    return {
        "meals": _content_payload(template, session),
        "summary": _summary_payload(template, session),
    }


@mcp.tool()
def add_to_plan(food_id: str, servings: float, meal: str) -> dict:
    """Add a food to the base plan.

    Days that already have their own content are not affected.

    Args:
        food_id: Catalog id of the food
        servings: Number of servings, must be positive
        meal: breakfast, lunch, dinner, postWorkout or snacks

    Returns:
        The created entry and the updated plan
    """
    session = get_session()

    try:
        template, entry = add_template_food(session.store.template, meal, food_id, servings)
    except ValueError as e:
        return {"error": f"Invalid input: {e}"}

    previous = session.store.snapshot()
    session.store.update_template(template)

    if not session.commit(previous):
        return {"error": "Failed to save. Please try again."}

    return {"entry": entry.model_dump(), "plan": get_plan()}


@mcp.tool()
def remove_from_plan(entry_id: str, meal: str) -> dict:
    """Remove a food from the base plan.

    Args:
        entry_id: The ID of the plan entry
        meal: Meal the entry is in

    Returns:
        The updated plan
    """
    session = get_session()

    try:
        template = remove_template_food(session.store.template, meal, entry_id)
    except ValueError as e:
        return {"error": f"Invalid input: {e}"}

    previous = session.store.snapshot()
    session.store.update_template(template)

    if not session.commit(previous):
        return {"error": "Failed to save. Please try again."}

    return {"success": True, "plan": get_plan()}


# ==================== Query Tools ====================


@mcp.tool()
def get_today() -> dict:
    """Get today's meals with totals, goal progress and micronutrients."""
    session = get_session()
    return _day_payload(today_key(), session)


@mcp.tool()
def get_day(date_str: str) -> dict:
    """Get a specific day's meals.

    Args:
        date_str: Date in YYYY-MM-DD format

    Returns:
        Dictionary with date, meals, totals and goal progress
    """
    session = get_session()

    try:
        key = normalize_date_key(date_str)
    except ValueError:
        return {"error": "Invalid date format. Use YYYY-MM-DD."}

    return _day_payload(key, session)


@mcp.tool()
def get_weekly_report(week_start: str | None = None) -> dict:
    """Generate a weekly report over the effective content of seven days.

    Args:
        week_start: First day in YYYY-MM-DD format (defaults to 6 days ago)

    Returns:
        Dictionary with daily summaries, weekly totals and average calories
    """
    session = get_session()

    try:
        start = parse_date_key(week_start) if week_start else None
    except ValueError:
        return {"error": "Invalid date format. Use YYYY-MM-DD."}

    report = generate_weekly_report(session.store.snapshot(), session.catalog, start)

    return {
        "week_start": report.week_start.isoformat(),
        "week_end": report.week_end.isoformat(),
        "days_with_food": report.days_with_food,
        "daily_summaries": [
            {
                "date": s.log_date.isoformat(),
                "calories": round(s.totals.calories),
                "protein": round(s.totals.protein, 1),
                "carbs": round(s.totals.carbs, 1),
                "fat": round(s.totals.fat, 1),
                "entry_count": s.entry_count,
                "follows_plan": not s.materialized,
            }
            for s in report.daily_summaries
        ],
        "weekly_totals": {
            "calories": round(report.total_calories),
            "protein": round(report.total_protein, 1),
            "carbs": round(report.total_carbs, 1),
            "fat": round(report.total_fat, 1),
        },
        "avg_daily_calories": report.avg_daily_calories,
        "micronutrients": sorted(report.micronutrients),
    }
