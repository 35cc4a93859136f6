"""Salary / expense due-date predicates."""

from datetime import date

from asset_savings_sim.dates import day_of_week, days_in_month
from asset_savings_sim.params import FREQUENCY_MONTHLY, Expense


def _is_clamped_day(day: date, target_day: int) -> bool:
    """True on min(target_day, month length): day 31 falls on Feb 28/29, the 30th, etc."""
    return day.day == min(target_day, days_in_month(day.year, day.month))


def is_salary_due(day: date, salary_day: int) -> bool:
    return _is_clamped_day(day, salary_day)


def is_expense_due(expense: Expense, day: date) -> bool:
    if expense.frequency == FREQUENCY_MONTHLY:
        return _is_clamped_day(day, expense.day)
    return day_of_week(day) == expense.day_of_week
