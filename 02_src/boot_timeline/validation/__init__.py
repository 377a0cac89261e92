"""Validation module."""

from .checks import check_activities, check_pass_data

__all__ = ["check_activities", "check_pass_data"]
