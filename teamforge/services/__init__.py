"""
Services package.

Contains the optimizer stages: analysis, expansion, allocation and planning.
"""

from teamforge.services.task_analyzer import TaskAnalyzer
from teamforge.services.expansion_advisor import (
    ExpansionAdvisor,
    calculate_role_workloads,
    distribute_workload,
)
from teamforge.services.task_allocator import TaskAllocator, utilization_status
from teamforge.services.phase_planner import PhasePlanner, group_tasks_by_phase

__all__ = [
    "TaskAnalyzer",
    "ExpansionAdvisor",
    "calculate_role_workloads",
    "distribute_workload",
    "TaskAllocator",
    "utilization_status",
    "PhasePlanner",
    "group_tasks_by_phase",
]
