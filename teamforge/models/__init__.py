"""
Data models package.

Contains Pydantic schemas for teams, tasks and execution plans.
"""

from teamforge.models.schemas import (
    DistributionStrategy,
    EfficiencyTargets,
    ExecutionPhase,
    ExpansionNeed,
    ExpansionRules,
    ParallelExecutionPlan,
    ParallelTaskGroup,
    Priority,
    ResourceAllocation,
    Role,
    RoleSubdivision,
    RoleType,
    Task,
    TaskAnalysis,
    TaskStatus,
    Team,
    TeamExpansionStrategy,
    TriggerConditions,
)

__all__ = [
    # Enums
    "DistributionStrategy",
    "Priority",
    "RoleType",
    "TaskStatus",
    # Team
    "Role",
    "Task",
    "Team",
    # Analysis & expansion
    "TaskAnalysis",
    "RoleSubdivision",
    "ExpansionNeed",
    "TeamExpansionStrategy",
    "TriggerConditions",
    "ExpansionRules",
    "EfficiencyTargets",
    # Plan
    "ParallelExecutionPlan",
    "ExecutionPhase",
    "ParallelTaskGroup",
    "ResourceAllocation",
]
