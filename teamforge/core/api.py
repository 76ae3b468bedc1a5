"""
Optimizer REST API.

Implements the optimization endpoints:
- /tasks/analyze
- /teams/optimize
- /teams/plan
- /teams/report
- /workload/distribution
"""

from fastapi import APIRouter, Depends, status

from teamforge.core.optimizer import ParallelOptimizationCoordinator, create_coordinator
from teamforge.models.schemas import (
    DistributionRequest,
    DistributionResponse,
    ErrorResponse,
    OptimizationReportResponse,
    OptimizeTeamResponse,
    ParallelExecutionPlan,
    Task,
    TaskAnalysis,
    Team,
)
from teamforge.services.expansion_advisor import distribute_workload
from teamforge.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["optimizer"])


# =============================================================================
# Dependencies
# =============================================================================

def get_coordinator() -> ParallelOptimizationCoordinator:
    """Dependency to get the optimization coordinator."""
    return create_coordinator()


# =============================================================================
# Endpoints
# =============================================================================

@router.post(
    "/tasks/analyze",
    response_model=TaskAnalysis,
    responses={422: {"description": "Invalid task"}},
)
async def analyze_task(
    task: Task,
    coordinator: ParallelOptimizationCoordinator = Depends(get_coordinator),
) -> TaskAnalysis:
    """
    Score a single task for repetitiveness, workload, complexity and
    subdivision potential.
    """
    return coordinator.analyze_task(task)


@router.post(
    "/teams/optimize",
    response_model=OptimizeTeamResponse,
    responses={500: {"model": ErrorResponse, "description": "Internal error"}},
)
async def optimize_team(
    team: Team,
    coordinator: ParallelOptimizationCoordinator = Depends(get_coordinator),
) -> OptimizeTeamResponse:
    """
    Run the full optimization pass over a team.

    Analyzes every task, subdivides roles when thresholds are crossed,
    reallocates large tasks and builds the parallel execution plan.

    **Example Request:**
    ```json
    {
        "name": "Checkout Revamp",
        "roles": [{"id": "dev-1", "name": "Developer", "type": "developer"}],
        "tasks": [
            {"title": "Develop payment module", "description": "develop code",
             "priority": "urgent_important", "assigned_roles": ["dev-1"],
             "estimated_hours": 40}
        ]
    }
    ```
    """
    result = coordinator.optimize_team(team)
    logger.info("team_optimized", team_id=team.id, expanded=result.expanded)

    return OptimizeTeamResponse(
        team=result.team,
        allocation_report=result.allocation_report,
        expanded=result.expanded,
    )


@router.post("/teams/plan", response_model=ParallelExecutionPlan)
async def plan_team(
    team: Team,
    coordinator: ParallelOptimizationCoordinator = Depends(get_coordinator),
) -> ParallelExecutionPlan:
    """Build an execution plan for the team as given, without expansion."""
    return coordinator.build_plan(team)


@router.post("/teams/report", response_model=OptimizationReportResponse)
async def team_report(
    team: Team,
    coordinator: ParallelOptimizationCoordinator = Depends(get_coordinator),
) -> OptimizationReportResponse:
    """Render the optimization report, optimizing the team first if needed."""
    return OptimizationReportResponse(
        team_id=team.id,
        report=coordinator.get_optimization_report(team),
    )


@router.post(
    "/workload/distribution",
    response_model=DistributionResponse,
    status_code=status.HTTP_200_OK,
)
async def workload_distribution(request: DistributionRequest) -> DistributionResponse:
    """Preview how work would be split across ``count`` subdivisions."""
    return DistributionResponse(
        strategy=request.strategy,
        distribution=distribute_workload(request.count, request.strategy),
    )
