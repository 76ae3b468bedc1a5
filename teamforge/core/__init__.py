"""
Core package.

Contains the optimization coordinator, reports and API router.
"""

from teamforge.core.optimizer import (
    OptimizationResult,
    ParallelOptimizationCoordinator,
    create_coordinator,
)
from teamforge.core.reports import build_optimization_report
from teamforge.core.api import router as optimizer_router

__all__ = [
    "OptimizationResult",
    "ParallelOptimizationCoordinator",
    "create_coordinator",
    "build_optimization_report",
    "optimizer_router",
]
