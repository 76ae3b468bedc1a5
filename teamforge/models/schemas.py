"""
Pydantic schemas for teams, tasks and parallel execution plans.

Defines the data passed between the optimizer stages and the API.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _new_id() -> str:
    return str(uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Enums
# =============================================================================

class RoleType(str, Enum):
    """Closed set of role types a team can contain."""
    ANALYST = "analyst"
    RESEARCHER = "researcher"
    DESIGNER = "designer"
    DEVELOPER = "developer"
    TESTER = "tester"
    PROJECT_MANAGER = "project_manager"
    DOMAIN_EXPERT = "domain_expert"
    STRATEGIST = "strategist"
    COMMUNICATOR = "communicator"
    QUALITY_ASSURER = "quality_assurer"
    RISK_MANAGER = "risk_manager"
    INNOVATOR = "innovator"


class Priority(str, Enum):
    """Eisenhower priority tiers, highest first."""
    URGENT_IMPORTANT = "urgent_important"
    NOT_URGENT_IMPORTANT = "not_urgent_important"
    URGENT_NOT_IMPORTANT = "urgent_not_important"
    NOT_URGENT_NOT_IMPORTANT = "not_urgent_not_important"


class TaskStatus(str, Enum):
    """Task lifecycle status."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"
    CANCELLED = "cancelled"


class DistributionStrategy(str, Enum):
    """How workload is split across new subdivisions."""
    EVEN = "even"
    CAPACITY_BASED = "capacity_based"
    SKILL_BASED = "skill_based"


# =============================================================================
# Base Schemas
# =============================================================================

class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# =============================================================================
# Team Members & Work
# =============================================================================

class Role(BaseSchema):
    """A named capability unit on a team."""

    id: str = Field(default_factory=_new_id)
    name: str
    type: RoleType
    description: str = ""
    skills: List[str] = Field(default_factory=list)
    responsibilities: List[str] = Field(default_factory=list)
    expertise_level: int = Field(default=5, ge=1, le=10)
    is_active: bool = True
    created_at: datetime = Field(default_factory=_now)


class Task(BaseSchema):
    """A unit of work assigned to one or more roles."""

    id: str = Field(default_factory=_new_id)
    title: str
    description: str = ""
    priority: Priority = Priority.NOT_URGENT_NOT_IMPORTANT
    assigned_roles: List[str] = Field(default_factory=list)
    dependencies: List[str] = Field(default_factory=list)
    status: TaskStatus = TaskStatus.PENDING
    estimated_hours: Optional[float] = Field(None, ge=0)
    actual_hours: Optional[float] = Field(None, ge=0)
    deliverables: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    # Written by the optimizer
    assigned_subdivision_ids: List[str] = Field(default_factory=list)
    parallel_group_id: Optional[str] = None

    @field_validator("assigned_roles", "dependencies")
    @classmethod
    def validate_unique_ids(cls, v: List[str]) -> List[str]:
        return list(dict.fromkeys(v))

    def hours(self, default: float = 8.0) -> float:
        """Estimated hours, falling back to ``default`` when unset."""
        return self.estimated_hours if self.estimated_hours else default


class TaskAnalysis(BaseSchema):
    """Heuristic scores computed for a single task."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    task_id: str
    repetitiveness_score: float = Field(ge=0, le=10)
    workload_score: float = Field(ge=0, le=10)
    complexity_score: float = Field(ge=0, le=10)
    parallelizable: bool
    subdivision_potential: float = Field(ge=0, le=10)
    estimated_hours: float = Field(ge=0)
    skill_requirements: List[str] = Field(min_length=1)
    created_at: datetime = Field(default_factory=_now)


class RoleSubdivision(BaseSchema):
    """A specialized sub-unit of a base role type."""

    id: str = Field(default_factory=_new_id)
    parent_role_type: RoleType
    subdivision_name: str
    specialization: str
    assigned_tasks: List[str] = Field(default_factory=list)
    workload_capacity: float = Field(default=100, ge=0, le=100)
    current_workload: float = Field(default=0, ge=0, le=100)
    parallel_efficiency: float = Field(ge=0, le=2)
    created_at: datetime = Field(default_factory=_now)


# =============================================================================
# Expansion Strategy
# =============================================================================

class TriggerConditions(BaseSchema):
    """Thresholds that trigger a team expansion."""

    min_repetitiveness_score: float = Field(ge=0, le=10)
    min_workload_score: float = Field(ge=0, le=10)
    max_single_role_workload: float = Field(ge=0, le=100)
    min_parallel_potential: float = Field(ge=0, le=10)


class ExpansionRules(BaseSchema):
    """Limits on how roles may be subdivided."""

    max_subdivisions_per_role: int = Field(ge=1, le=10)
    workload_distribution_strategy: DistributionStrategy
    priority_roles: List[RoleType]


class EfficiencyTargets(BaseSchema):
    """Target efficiency figures for the expanded team."""

    target_parallel_efficiency: float = Field(ge=1, le=5)
    max_team_size: int = Field(ge=3, le=50)
    min_efficiency_improvement: float = Field(ge=0, le=5)


class TeamExpansionStrategy(BaseSchema):
    """Fixed thresholds and rules governing role subdivision."""

    id: str = Field(default_factory=_new_id)
    team_id: str
    trigger_conditions: TriggerConditions
    expansion_rules: ExpansionRules
    efficiency_targets: EfficiencyTargets
    created_at: datetime = Field(default_factory=_now)


class ExpansionNeed(BaseSchema):
    """A role type that should be subdivided, and into how many units."""

    role_type: RoleType
    reason: str
    subdivision_count: int = Field(ge=1)
    workload_distribution: List[float] = Field(default_factory=list)


# =============================================================================
# Parallel Execution Plan
# =============================================================================

class ResourceAllocation(BaseSchema):
    """Weekly allocation for one subdivision."""

    id: str = Field(default_factory=_new_id)
    role_subdivision_id: str
    allocated_hours: float = Field(ge=0)
    utilization_rate: float = Field(ge=0, le=100)


class ParallelTaskGroup(BaseSchema):
    """Tasks that share no role and no dependency edge."""

    id: str = Field(default_factory=_new_id)
    group_name: str
    tasks: List[str]
    assigned_roles: List[str] = Field(default_factory=list)
    estimated_duration: float = Field(ge=0)
    parallel_efficiency: float = Field(ge=0, le=2)
    resource_conflicts: List[str] = Field(default_factory=list)


class ExecutionPhase(BaseSchema):
    """An ordered bucket of parallel task groups."""

    id: str = Field(default_factory=_new_id)
    phase_name: str
    sequence_order: int = Field(ge=1)
    parallel_tasks: List[ParallelTaskGroup]
    dependencies: List[str] = Field(default_factory=list)
    estimated_duration: float = Field(ge=0)
    critical_path: bool = False


class ParallelExecutionPlan(BaseSchema):
    """Serial vs. parallel timing and the phase structure for a team."""

    id: str = Field(default_factory=_new_id)
    team_id: str
    total_estimated_time: float = Field(ge=0)
    parallel_estimated_time: float = Field(ge=0)
    efficiency_improvement: float = Field(ge=0)
    execution_phases: List[ExecutionPhase] = Field(default_factory=list)
    resource_allocation: List[ResourceAllocation] = Field(default_factory=list)
    risk_factors: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now)


# =============================================================================
# Team
# =============================================================================

class Team(BaseSchema):
    """Caller-owned aggregate updated in place by each optimizer stage."""

    id: str = Field(default_factory=_new_id)
    name: str
    problem_id: Optional[str] = None
    roles: List[Role] = Field(default_factory=list)
    tasks: List[Task] = Field(default_factory=list)
    coordinator_id: Optional[str] = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    task_analyses: List[TaskAnalysis] = Field(default_factory=list)
    role_subdivisions: List[RoleSubdivision] = Field(default_factory=list)
    expansion_strategy: Optional[TeamExpansionStrategy] = None
    parallel_execution_plan: Optional[ParallelExecutionPlan] = None

    def find_role(self, role_id: str) -> Optional[Role]:
        """Look up a base role by id."""
        for role in self.roles:
            if role.id == role_id:
                return role
        return None


# =============================================================================
# API Schemas
# =============================================================================

class OptimizeTeamResponse(BaseSchema):
    """Response for a full optimization pass."""

    team: Team
    allocation_report: Optional[str] = None
    expanded: bool


class OptimizationReportResponse(BaseSchema):
    """Rendered optimization report."""

    team_id: str
    report: str


class DistributionRequest(BaseSchema):
    """Request for a workload distribution preview."""

    count: int = Field(..., ge=1, le=50)
    strategy: DistributionStrategy = DistributionStrategy.CAPACITY_BASED


class DistributionResponse(BaseSchema):
    """Workload percentages per subdivision."""

    strategy: DistributionStrategy
    distribution: List[float]


class ErrorResponse(BaseSchema):
    """Error response schema."""

    error: str
    message: str
    detail: Optional[str] = None
