"""
Roles package.

Contains constant lookup tables keyed by role type.
"""

from teamforge.roles.catalog import (
    ROLE_DISPLAY_NAMES,
    ROLE_PARALLEL_EFFICIENCY,
    ROLE_SPECIALIZATIONS,
    get_display_name,
    get_parallel_efficiency,
    get_specialization,
    is_relevant_task,
)

__all__ = [
    "ROLE_DISPLAY_NAMES",
    "ROLE_PARALLEL_EFFICIENCY",
    "ROLE_SPECIALIZATIONS",
    "get_display_name",
    "get_parallel_efficiency",
    "get_specialization",
    "is_relevant_task",
]
