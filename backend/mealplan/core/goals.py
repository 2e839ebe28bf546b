"""Goal Comparison - Pure functions comparing intake to daily goals."""

from .models import GoalProgress, MacroProgress, NutrientTotals, NutritionGoals


def macro_progress(value: float, goal: float) -> MacroProgress:
    """Compare one macro value with its goal.

    A zero goal yields a fraction of 0.0 rather than dividing by zero.
    """
    fraction = value / goal if goal > 0 else 0.0
    return MacroProgress(
        value=value,
        goal=goal,
        fraction=min(1.0, max(0.0, fraction)),
        remaining=goal - value,
    )


def compare_to_goals(totals: NutrientTotals, goals: NutritionGoals) -> GoalProgress:
    """Compare aggregated totals with the daily goals.

    Args:
        totals: Output of the nutrient aggregator
        goals: Daily goals

    Returns:
        GoalProgress with a clamped fraction and remaining amount per macro
    """
    return GoalProgress(
        calories=macro_progress(totals.calories, goals.calories),
        protein=macro_progress(totals.protein, goals.protein),
        carbs=macro_progress(totals.carbs, goals.carbs),
        fat=macro_progress(totals.fat, goals.fat),
    )
