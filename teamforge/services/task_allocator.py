"""
Task Allocation Service.

Moves large tasks onto role subdivisions and reports resulting utilization.
"""

import logging
from typing import List, Optional, Tuple

from teamforge.config import OptimizerSettings, get_settings
from teamforge.models.schemas import RoleSubdivision, Task, Team
from teamforge.services.expansion_advisor import calculate_role_workloads

logger = logging.getLogger(__name__)

MAX_SUBDIVISIONS_PER_TASK = 2
BUSY_THRESHOLD = 70.0
OVERLOADED_THRESHOLD = 90.0


class TaskAllocator:
    """Reassigns large tasks to subdivisions of their base roles."""

    def __init__(self, settings: Optional[OptimizerSettings] = None):
        """
        Initialize Task Allocator.

        Args:
            settings: Optimizer defaults (loaded from the environment if omitted)
        """
        self.settings = settings or get_settings().optimizer

    def reallocate(self, team: Team) -> Tuple[List[Task], str]:
        """
        Assign subdivisions to every task above the large-task threshold.

        Base role assignments are kept; subdivisions are added alongside them.

        Args:
            team: Team with role subdivisions already generated

        Returns:
            Tuple of (updated tasks, Markdown allocation report)
        """
        tasks = list(team.tasks)

        for task in tasks:
            hours = task.hours(self.settings.default_task_hours)
            if hours <= self.settings.large_task_hours:
                continue

            candidates = self._available_subdivisions(task, team)[:MAX_SUBDIVISIONS_PER_TASK]
            if not candidates:
                continue

            task.assigned_subdivision_ids = [sub.id for sub in candidates]
            share = hours / len(candidates) / self.settings.weekly_hours * 100
            for subdivision in candidates:
                subdivision.assigned_tasks.append(task.id)
                subdivision.current_workload = min(
                    subdivision.current_workload + share,
                    subdivision.workload_capacity,
                )

            logger.debug(
                f"Task {task.id} ({hours}h) assigned to subdivisions "
                f"{[sub.subdivision_name for sub in candidates]}"
            )

        report = self.generate_report(team, tasks)
        return tasks, report

    def _available_subdivisions(self, task: Task, team: Team) -> List[RoleSubdivision]:
        role_types = set()
        for role_id in task.assigned_roles:
            role = team.find_role(role_id)
            if role is not None:
                role_types.add(role.type)

        return [
            sub for sub in team.role_subdivisions
            if sub.parent_role_type in role_types
            and sub.current_workload < self.settings.subdivision_load_ceiling
        ]

    def generate_report(self, team: Team, tasks: List[Task]) -> str:
        """Render the allocation report as Markdown."""
        total = len(tasks)
        parallel = sum(1 for task in tasks if task.assigned_subdivision_ids)
        rate = parallel / total * 100 if total else 0.0

        lines = [
            "## Task Allocation Report",
            "",
            "**Task statistics**:",
            f"- Total tasks: {total}",
            f"- Parallel tasks: {parallel}",
            f"- Parallelization rate: {rate:.1f}%",
            "",
            "**Role utilization**:",
        ]

        workloads = calculate_role_workloads(
            team,
            weekly_hours=self.settings.weekly_hours,
            default_task_hours=self.settings.default_task_hours,
        )
        for role in team.roles:
            workload = workloads.get(role.id, 0.0)
            lines.append(f"- {role.name}: {workload:.1f}% {utilization_status(workload)}")

        if team.role_subdivisions:
            lines.append("")
            lines.append("**Role subdivisions**:")
            lines.append(f"- Subdivision count: {len(team.role_subdivisions)}")
            for sub in team.role_subdivisions:
                lines.append(
                    f"- {sub.subdivision_name}: {sub.specialization} "
                    f"(load: {sub.current_workload:.1f}%)"
                )

        return "\n".join(lines) + "\n"


def utilization_status(workload: float) -> str:
    """Bucket a workload percentage into normal, busy or overloaded."""
    if workload > OVERLOADED_THRESHOLD:
        return "overloaded"
    if workload >= BUSY_THRESHOLD:
        return "busy"
    return "normal"
