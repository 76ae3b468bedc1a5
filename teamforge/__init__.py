"""
Team Parallel Optimizer

Scores a team's tasks, subdivides overloaded roles into specialized
sub-roles and plans which tasks could run in parallel.
"""

__version__ = "1.0.0"
__author__ = "Synthetic Workforce Team"
