"""
Parallel optimization coordinator.

Runs the optimizer stages over a team in a single synchronous pass:
analyze -> strategize -> [expand -> reallocate] -> plan.
"""

from dataclasses import dataclass
from typing import Optional

from teamforge.config import OptimizerSettings, get_settings
from teamforge.core.reports import build_optimization_report
from teamforge.models.schemas import ParallelExecutionPlan, Task, TaskAnalysis, Team
from teamforge.services.expansion_advisor import ExpansionAdvisor
from teamforge.services.phase_planner import PhasePlanner
from teamforge.services.task_allocator import TaskAllocator
from teamforge.services.task_analyzer import TaskAnalyzer
from teamforge.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class OptimizationResult:
    """Outcome of one optimization pass."""

    team: Team
    allocation_report: Optional[str] = None
    expanded: bool = False


class ParallelOptimizationCoordinator:
    """
    Orchestrates the optimizer stages over a caller-owned team.

    Each stage writes its result back onto the team before the next stage
    runs; the same team object is returned.
    """

    def __init__(
        self,
        settings: Optional[OptimizerSettings] = None,
        analyzer: Optional[TaskAnalyzer] = None,
        advisor: Optional[ExpansionAdvisor] = None,
        allocator: Optional[TaskAllocator] = None,
        planner: Optional[PhasePlanner] = None,
    ):
        self.settings = settings or get_settings().optimizer
        self.analyzer = analyzer or TaskAnalyzer(self.settings.default_task_hours)
        self.advisor = advisor or ExpansionAdvisor(self.settings)
        self.allocator = allocator or TaskAllocator(self.settings)
        self.planner = planner or PhasePlanner(self.settings)

    def analyze_task(self, task: Task) -> TaskAnalysis:
        """Score a single task."""
        return self.analyzer.analyze(task)

    def optimize_team(self, team: Team) -> OptimizationResult:
        """
        Run the full optimization pass.

        Args:
            team: Team to optimize; updated in place

        Returns:
            OptimizationResult with the team and, if the team was expanded,
            the allocation report
        """
        log = logger.bind(team_id=team.id)

        team.task_analyses = self.analyzer.analyze_all(team)
        log.info("tasks_analyzed", count=len(team.task_analyses))

        if team.expansion_strategy is None:
            team.expansion_strategy = self.advisor.create_strategy(team)
        strategy = team.expansion_strategy

        result = OptimizationResult(team=team)

        if self.advisor.should_expand(team, team.task_analyses, strategy):
            team.role_subdivisions = self.advisor.expand_team(
                team, team.task_analyses, strategy
            )
            log.info("team_expanded", subdivisions=len(team.role_subdivisions))

            tasks, report = self.allocator.reallocate(team)
            team.tasks = tasks
            result.allocation_report = report
            result.expanded = True
            log.info(
                "tasks_reallocated",
                parallel_tasks=sum(1 for task in tasks if task.assigned_subdivision_ids),
            )

        team.parallel_execution_plan = self.build_plan(team)
        self._check_targets(team, log)
        return result

    def build_plan(self, team: Team) -> ParallelExecutionPlan:
        """Build the execution plan without analyzing or expanding the team."""
        plan = self.planner.build_plan(team)
        logger.info(
            "execution_plan_created",
            team_id=team.id,
            serial_hours=plan.total_estimated_time,
            parallel_hours=plan.parallel_estimated_time,
            improvement=round(plan.efficiency_improvement, 2),
            phases=len(plan.execution_phases),
        )
        for risk in plan.risk_factors:
            logger.warning("parallel_risk", team_id=team.id, risk=risk)
        return plan

    def get_optimization_report(self, team: Team) -> str:
        """Render the optimization report, optimizing first if no plan exists."""
        if team.parallel_execution_plan is None:
            self.optimize_team(team)
        return build_optimization_report(team)

    def _check_targets(self, team: Team, log) -> None:
        plan = team.parallel_execution_plan
        targets = team.expansion_strategy.efficiency_targets

        if plan.execution_phases and plan.efficiency_improvement < targets.min_efficiency_improvement:
            log.warning(
                "efficiency_below_target",
                improvement=round(plan.efficiency_improvement, 2),
                minimum=targets.min_efficiency_improvement,
            )

        headcount = len(team.roles) + len(team.role_subdivisions)
        if headcount > targets.max_team_size:
            log.warning(
                "team_size_above_target",
                headcount=headcount,
                maximum=targets.max_team_size,
            )


def create_coordinator(settings: Optional[OptimizerSettings] = None) -> ParallelOptimizationCoordinator:
    """Factory function to create a coordinator."""
    return ParallelOptimizationCoordinator(settings=settings)
