"""Campus EV charging site planner."""

__version__ = "0.1.0"
