"""
Shared fixtures for optimizer tests.
"""

import pytest

from teamforge.config import OptimizerSettings
from teamforge.models.schemas import Priority, Role, RoleType, Task, Team


@pytest.fixture
def settings():
    """Optimizer settings with default values."""
    return OptimizerSettings()


@pytest.fixture
def developer():
    return Role(id="dev-1", name="Developer", type=RoleType.DEVELOPER)


@pytest.fixture
def tester():
    return Role(id="qa-1", name="Test Engineer", type=RoleType.TESTER)


@pytest.fixture
def designer():
    return Role(id="ux-1", name="Designer", type=RoleType.DESIGNER)


@pytest.fixture
def make_task():
    """Factory for tasks with sensible defaults."""

    def _make(task_id, title="Task", description="", roles=None, hours=8,
              priority=Priority.NOT_URGENT_NOT_IMPORTANT, dependencies=None):
        return Task(
            id=task_id,
            title=title,
            description=description,
            priority=priority,
            assigned_roles=roles or [],
            dependencies=dependencies or [],
            estimated_hours=hours,
        )

    return _make


@pytest.fixture
def overloaded_team(developer, tester, designer, make_task):
    """Three roles; the developer carries three 40-hour development tasks."""
    tasks = [
        make_task(
            f"task-{i}",
            title=f"Develop service {i}",
            description="develop code for the service",
            roles=["dev-1"],
            hours=40,
            priority=Priority.URGENT_IMPORTANT,
        )
        for i in range(1, 4)
    ]
    return Team(id="team-1", name="Platform Team", roles=[developer, tester, designer], tasks=tasks)
