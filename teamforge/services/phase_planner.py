"""
Parallel Execution Planning Service.

Groups a team's tasks into ordered phases and, within each phase, into
groups of tasks that could run at the same time.
"""

import logging
from collections import Counter
from typing import List, Optional, Set

from teamforge.config import OptimizerSettings, get_settings
from teamforge.models.schemas import (
    ExecutionPhase,
    ParallelExecutionPlan,
    ParallelTaskGroup,
    Priority,
    ResourceAllocation,
    Task,
    Team,
)
from teamforge.roles import get_parallel_efficiency

logger = logging.getLogger(__name__)

MAX_HEADCOUNT = 20
MAX_SUBDIVISIONS_PER_ROLE_RATIO = 2
MAX_PARALLEL_TASK_RATIO = 0.7

RISK_TEAM_SIZE = "Team size is large; communication overhead is likely to increase"
RISK_SUBDIVISIONS = "Too many role subdivisions; coordination cost is likely to increase"
RISK_PARALLEL_RATIO = "High share of parallel tasks; integration risk is likely to increase"


class PhasePlanner:
    """
    Builds a parallel execution plan for a team.

    Grouping is a greedy first-fit pass over tasks in list order; it does
    not search for the minimum number of groups.
    """

    def __init__(self, settings: Optional[OptimizerSettings] = None):
        """
        Initialize Phase Planner.

        Args:
            settings: Optimizer defaults (loaded from the environment if omitted)
        """
        self.settings = settings or get_settings().optimizer

    def build_plan(self, team: Team) -> ParallelExecutionPlan:
        """
        Create the parallel execution plan for a team.

        A team without tasks or without roles gets an empty plan.

        Args:
            team: Team whose (possibly reallocated) tasks are planned

        Returns:
            ParallelExecutionPlan with phases, allocations and risk factors
        """
        total_time = sum(self._hours(task) for task in team.tasks)

        if not team.tasks or not team.roles:
            logger.info(f"Team {team.id} has no tasks or no roles; returning empty plan")
            phases: List[ExecutionPhase] = []
        else:
            phases = self.create_execution_phases(team)

        parallel_time = sum(phase.estimated_duration for phase in phases)
        improvement = total_time / parallel_time if parallel_time > 0 else 1.0

        return ParallelExecutionPlan(
            team_id=team.id,
            total_estimated_time=total_time,
            parallel_estimated_time=parallel_time,
            efficiency_improvement=improvement,
            execution_phases=phases,
            resource_allocation=self.create_resource_allocation(team),
            risk_factors=self.identify_risk_factors(team),
        )

    def create_execution_phases(self, team: Team) -> List[ExecutionPhase]:
        """Build one phase per non-empty priority bucket."""
        phases: List[ExecutionPhase] = []

        for index, tasks in enumerate(group_tasks_by_phase(team.tasks)):
            groups = self.create_parallel_groups(tasks, team)
            phase = ExecutionPhase(
                phase_name=f"Execution Phase {index + 1}",
                sequence_order=index + 1,
                parallel_tasks=groups,
                dependencies=[phases[-1].id] if phases else [],
                estimated_duration=max(group.estimated_duration for group in groups),
                critical_path=is_critical_path(tasks),
            )
            phases.append(phase)

        return phases

    def create_parallel_groups(self, tasks: List[Task], team: Team) -> List[ParallelTaskGroup]:
        """
        Partition a phase's tasks into conflict-free groups.

        Each unprocessed task seeds a group; later tasks join when they share
        no role with the group and have no dependency edge with any member.
        """
        groups: List[ParallelTaskGroup] = []
        processed: Set[str] = set()

        for seed in tasks:
            if seed.id in processed:
                continue

            members = [seed]
            claimed_roles = list(seed.assigned_roles)
            processed.add(seed.id)

            for candidate in tasks:
                if candidate.id in processed:
                    continue
                if set(candidate.assigned_roles) & set(claimed_roles):
                    continue
                if any(_depends(candidate, member) for member in members):
                    continue

                members.append(candidate)
                processed.add(candidate.id)
                claimed_roles.extend(
                    role_id for role_id in candidate.assigned_roles
                    if role_id not in claimed_roles
                )

            group = ParallelTaskGroup(
                group_name=f"Parallel Group {len(groups) + 1}",
                tasks=[member.id for member in members],
                assigned_roles=claimed_roles,
                estimated_duration=max(self._hours(member) for member in members),
                parallel_efficiency=group_parallel_efficiency(members, team),
                resource_conflicts=identify_resource_conflicts(members, team),
            )
            for member in members:
                member.parallel_group_id = group.id
            groups.append(group)

        logger.debug(f"Built {len(groups)} parallel group(s) from {len(tasks)} task(s)")
        return groups

    def create_resource_allocation(self, team: Team) -> List[ResourceAllocation]:
        """One weekly allocation per subdivision."""
        return [
            ResourceAllocation(
                role_subdivision_id=subdivision.id,
                allocated_hours=self.settings.weekly_hours,
                utilization_rate=subdivision.current_workload,
            )
            for subdivision in team.role_subdivisions
        ]

    def identify_risk_factors(self, team: Team) -> List[str]:
        risks: List[str] = []

        if len(team.roles) + len(team.role_subdivisions) > MAX_HEADCOUNT:
            risks.append(RISK_TEAM_SIZE)

        if len(team.role_subdivisions) > len(team.roles) * MAX_SUBDIVISIONS_PER_ROLE_RATIO:
            risks.append(RISK_SUBDIVISIONS)

        parallel_tasks = sum(1 for task in team.tasks if task.assigned_subdivision_ids)
        if parallel_tasks > len(team.tasks) * MAX_PARALLEL_TASK_RATIO:
            risks.append(RISK_PARALLEL_RATIO)

        return risks

    def _hours(self, task: Task) -> float:
        return task.hours(self.settings.default_task_hours)


def group_tasks_by_phase(tasks: List[Task]) -> List[List[Task]]:
    """
    Bucket tasks by priority tier.

    Order is urgent+important, then important, then everything else; empty
    buckets are skipped.
    """
    urgent_important = [t for t in tasks if t.priority == Priority.URGENT_IMPORTANT]
    important = [t for t in tasks if t.priority == Priority.NOT_URGENT_IMPORTANT]
    others = [
        t for t in tasks
        if t.priority not in (Priority.URGENT_IMPORTANT, Priority.NOT_URGENT_IMPORTANT)
    ]

    phases = [bucket for bucket in (urgent_important, important, others) if bucket]
    return phases or [tasks]


def is_critical_path(tasks: List[Task]) -> bool:
    return any(task.priority == Priority.URGENT_IMPORTANT for task in tasks)


def group_parallel_efficiency(tasks: List[Task], team: Team) -> float:
    """Mean role-type efficiency over the distinct roles in a group."""
    if len(tasks) <= 1:
        return 1.0

    role_ids = {role_id for task in tasks for role_id in task.assigned_roles}
    total = 0.0
    for role_id in role_ids:
        role = team.find_role(role_id)
        if role is not None:
            total += get_parallel_efficiency(role.type)

    return total / max(len(role_ids), 1)


def identify_resource_conflicts(tasks: List[Task], team: Team) -> List[str]:
    """Describe roles used by more than one task of a group."""
    usage = Counter(role_id for task in tasks for role_id in task.assigned_roles)
    conflicts = []
    for role_id, count in usage.items():
        if count > 1:
            role = team.find_role(role_id)
            name = role.name if role is not None else role_id
            conflicts.append(f"Role {name} is assigned to {count} parallel tasks")
    return conflicts


def _depends(a: Task, b: Task) -> bool:
    return b.id in a.dependencies or a.id in b.dependencies
