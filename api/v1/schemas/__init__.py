"""Re-export individual schema modules for easy imports."""

from .goals import GoalSetOut, ProfileIn

__all__ = [
    "GoalSetOut",
    "ProfileIn",
]
