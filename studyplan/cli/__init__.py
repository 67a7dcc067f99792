"""Command-line interface for the study planner."""
