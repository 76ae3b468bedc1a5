"""
Team Expansion Service.

Decides when a team's roles should be subdivided into specialized sub-roles
and generates those subdivisions.
"""

import logging
import math
from typing import Dict, List, Optional

from teamforge.config import OptimizerSettings, get_settings
from teamforge.models.schemas import (
    DistributionStrategy,
    EfficiencyTargets,
    ExpansionNeed,
    ExpansionRules,
    RoleSubdivision,
    RoleType,
    TaskAnalysis,
    Team,
    TeamExpansionStrategy,
    TriggerConditions,
)
from teamforge.roles import (
    get_display_name,
    get_parallel_efficiency,
    get_specialization,
    is_relevant_task,
)

logger = logging.getLogger(__name__)

# Utilization each subdivision is sized for when splitting an overloaded role
TARGET_UTILIZATION = 80.0
MAX_REPETITIVE_SUGGESTION = 3
MAX_WORKLOAD_SUGGESTION = 4
MIN_DISTRIBUTION_WEIGHT = 0.1


def calculate_role_workloads(
    team: Team,
    weekly_hours: float = 40.0,
    default_task_hours: float = 8.0,
) -> Dict[str, float]:
    """
    Weekly workload percentage per base role.

    Each task's hours are split evenly over its assigned roles. Role ids that
    are not on the team are ignored.

    Args:
        team: Team whose roles and tasks are measured
        weekly_hours: Hours in a full working week
        default_task_hours: Hours assumed for tasks without an estimate

    Returns:
        Mapping of role id to workload percent
    """
    hours_by_role = {role.id: 0.0 for role in team.roles}

    for task in team.tasks:
        hours_per_role = task.hours(default_task_hours) / max(len(task.assigned_roles), 1)
        for role_id in task.assigned_roles:
            if role_id in hours_by_role:
                hours_by_role[role_id] += hours_per_role

    return {
        role_id: hours / weekly_hours * 100
        for role_id, hours in hours_by_role.items()
    }


class ExpansionAdvisor:
    """Evaluates expansion triggers and builds role subdivisions."""

    def __init__(self, settings: Optional[OptimizerSettings] = None):
        """
        Initialize Expansion Advisor.

        Args:
            settings: Optimizer defaults (loaded from the environment if omitted)
        """
        self.settings = settings or get_settings().optimizer

    def create_strategy(self, team: Team) -> TeamExpansionStrategy:
        """Build the default expansion strategy for a team."""
        settings = self.settings

        return TeamExpansionStrategy(
            team_id=team.id,
            trigger_conditions=TriggerConditions(
                min_repetitiveness_score=settings.min_repetitiveness_score,
                min_workload_score=settings.min_workload_score,
                max_single_role_workload=settings.max_single_role_workload,
                min_parallel_potential=settings.min_parallel_potential,
            ),
            expansion_rules=ExpansionRules(
                max_subdivisions_per_role=settings.max_subdivisions_per_role,
                workload_distribution_strategy=DistributionStrategy(
                    settings.workload_distribution_strategy
                ),
                priority_roles=[RoleType(role) for role in settings.priority_roles_list],
            ),
            efficiency_targets=EfficiencyTargets(
                target_parallel_efficiency=settings.target_parallel_efficiency,
                max_team_size=settings.max_team_size,
                min_efficiency_improvement=settings.min_efficiency_improvement,
            ),
        )

    def role_workloads(self, team: Team) -> Dict[str, float]:
        """Workload percent per role using the configured week length."""
        return calculate_role_workloads(
            team,
            weekly_hours=self.settings.weekly_hours,
            default_task_hours=self.settings.default_task_hours,
        )

    def should_expand(
        self,
        team: Team,
        analyses: List[TaskAnalysis],
        strategy: TeamExpansionStrategy,
    ) -> bool:
        """
        Whether any task or role crosses an expansion threshold.

        Args:
            team: Team being evaluated
            analyses: Task analyses for the team's tasks
            strategy: Thresholds to apply

        Returns:
            True if at least one trigger fires
        """
        triggers = strategy.trigger_conditions

        for analysis in analyses:
            if (
                analysis.repetitiveness_score >= triggers.min_repetitiveness_score
                or analysis.workload_score >= triggers.min_workload_score
                or analysis.subdivision_potential >= triggers.min_parallel_potential
            ):
                logger.debug(f"Task {analysis.task_id} triggers team expansion")
                return True

        overloaded = [
            role_id
            for role_id, workload in self.role_workloads(team).items()
            if workload > triggers.max_single_role_workload
        ]
        if overloaded:
            logger.debug(f"Overloaded roles trigger team expansion: {overloaded}")
            return True

        return False

    def compute_expansion_needs(
        self,
        team: Team,
        analyses: List[TaskAnalysis],
        strategy: TeamExpansionStrategy,
    ) -> List[ExpansionNeed]:
        """
        Determine which roles to subdivide and into how many units.

        Only roles whose type is in the strategy's priority list are emitted.

        Args:
            team: Team being evaluated
            analyses: Task analyses for the team's tasks
            strategy: Thresholds and expansion rules

        Returns:
            One ExpansionNeed per qualifying base role
        """
        triggers = strategy.trigger_conditions
        rules = strategy.expansion_rules
        workloads = self.role_workloads(team)
        analyses_by_task = {analysis.task_id: analysis for analysis in analyses}
        needs: List[ExpansionNeed] = []

        for role in team.roles:
            workload = workloads.get(role.id, 0.0)
            relevant_analyses = [
                analyses_by_task[task.id]
                for task in team.tasks
                if task.id in analyses_by_task
                and is_relevant_task(role.type, task.title, task.description)
            ]

            reasons: List[str] = []
            suggested = 1

            if workload > triggers.max_single_role_workload:
                reasons.append(f"workload overloaded ({workload:.1f}%)")
                suggested = math.ceil(workload / TARGET_UTILIZATION)

            repetitive_count = sum(
                1 for analysis in relevant_analyses
                if analysis.repetitiveness_score >= triggers.min_repetitiveness_score
            )
            if repetitive_count > 0:
                reasons.append(f"{repetitive_count} highly repetitive task(s)")
                suggested = max(suggested, min(repetitive_count, MAX_REPETITIVE_SUGGESTION))

            heavy_count = sum(
                1 for analysis in relevant_analyses
                if analysis.workload_score >= triggers.min_workload_score
            )
            if heavy_count > 1:
                reasons.append(f"{heavy_count} high-workload tasks")
                suggested = max(suggested, min(heavy_count, MAX_WORKLOAD_SUGGESTION))

            if not reasons or role.type not in rules.priority_roles:
                continue

            count = min(suggested, rules.max_subdivisions_per_role)
            needs.append(
                ExpansionNeed(
                    role_type=role.type,
                    reason="; ".join(reasons),
                    subdivision_count=count,
                    workload_distribution=self.distribute(count, strategy),
                )
            )

        logger.debug(f"Computed {len(needs)} expansion need(s) for team {team.id}")
        return needs

    def generate_subdivisions(
        self,
        need: ExpansionNeed,
        strategy: Optional[TeamExpansionStrategy] = None,
    ) -> List[RoleSubdivision]:
        """Create ``need.subdivision_count`` subdivisions of one role type."""
        base_name = get_display_name(need.role_type)
        efficiency = get_parallel_efficiency(need.role_type)

        return [
            RoleSubdivision(
                parent_role_type=need.role_type,
                subdivision_name=f"{base_name} {chr(64 + index)}",
                specialization=get_specialization(need.role_type, index),
                workload_capacity=100,
                current_workload=0,
                parallel_efficiency=efficiency,
            )
            for index in range(1, need.subdivision_count + 1)
        ]

    def expand_team(
        self,
        team: Team,
        analyses: List[TaskAnalysis],
        strategy: TeamExpansionStrategy,
    ) -> List[RoleSubdivision]:
        """Generate subdivisions for every expansion need of the team."""
        subdivisions: List[RoleSubdivision] = []
        for need in self.compute_expansion_needs(team, analyses, strategy):
            logger.info(
                f"Subdividing {need.role_type.value} into {need.subdivision_count}: {need.reason}"
            )
            subdivisions.extend(self.generate_subdivisions(need, strategy))
        return subdivisions

    def distribute(self, count: int, strategy: TeamExpansionStrategy) -> List[float]:
        """Workload percentages for ``count`` subdivisions under the strategy's policy."""
        return distribute_workload(count, strategy.expansion_rules.workload_distribution_strategy)


def distribute_workload(count: int, policy: DistributionStrategy) -> List[float]:
    """
    Split 100% of a workload across ``count`` units.

    Args:
        count: Number of units
        policy: even, capacity_based (each unit 10% lighter than the previous)
            or skill_based (each unit 10% heavier than the previous)

    Returns:
        ``count`` percentages summing to 100
    """
    if count < 1:
        return []

    if policy == DistributionStrategy.CAPACITY_BASED:
        weights = [1 - i * 0.1 for i in range(count)]
    elif policy == DistributionStrategy.SKILL_BASED:
        weights = [0.8 + i * 0.1 for i in range(count)]
    else:
        weights = [1.0] * count

    weights = [max(weight, MIN_DISTRIBUTION_WEIGHT) for weight in weights]
    total = sum(weights)
    return [weight / total * 100 for weight in weights]
