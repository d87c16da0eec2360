"""
Roll history module for the dice roller.
"""

from .roll_log import LoggedRoll, RollLog

__all__ = [
    "LoggedRoll",
    "RollLog",
]
