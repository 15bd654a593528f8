"""
Time spend calculator: checks how much time team members still have to log for a day.
"""

from .calculator import TimeSpendCalculator, aggregate_time_spent, remain_time_spend, expected_work_time, day_window

__all__ = ["TimeSpendCalculator", "aggregate_time_spent", "remain_time_spend", "expected_work_time", "day_window"]
