"""Date calculators — age breakdown."""

from nic_engine.calculators.age import age_at, days_in_month, today

__all__ = [
    "age_at",
    "days_in_month",
    "today",
]
