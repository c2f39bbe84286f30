"""Task pricing

All amounts are in cents. Every intermediate result is rounded half-up to
a whole cent so that an invoice total equals the cost the elector budgets.
"""

from decimal import Decimal, ROUND_HALF_UP
from src.domain.project import Project

CENT = Decimal("1")


def task_value(hourly_rate: Decimal, estimation_minutes: int) -> Decimal:
    """hourly_rate * estimation_minutes / 60"""
    return (Decimal(hourly_rate) * Decimal(estimation_minutes) / Decimal(60)).quantize(
        CENT, rounding=ROUND_HALF_UP
    )


def project_commission(project: Project, value: Decimal) -> Decimal:
    return _percentage(value, project.project_percentage)


def contributor_commission(project: Project, value: Decimal) -> Decimal:
    return _percentage(value, project.contributor_percentage)


def task_commission(project: Project, value: Decimal) -> Decimal:
    """Total platform commission billed for a task of the given value"""
    return project_commission(project, value) + contributor_commission(project, value)


def task_cost(project: Project, hourly_rate: Decimal, estimation_minutes: int) -> Decimal:
    """What the project pays for a task: its value plus the platform commission"""
    value = task_value(hourly_rate, estimation_minutes)
    return value + task_commission(project, value)


def _percentage(value: Decimal, percentage: Decimal) -> Decimal:
    return (Decimal(value) * Decimal(percentage) / Decimal(100)).quantize(
        CENT, rounding=ROUND_HALF_UP
    )
