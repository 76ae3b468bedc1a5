"""
Unit tests for the Phase Planner.
"""

from collections import Counter

import pytest

from teamforge.models.schemas import (
    ExpansionNeed,
    Priority,
    Role,
    RoleSubdivision,
    RoleType,
    Team,
)
from teamforge.services.expansion_advisor import ExpansionAdvisor
from teamforge.services.phase_planner import (
    RISK_PARALLEL_RATIO,
    RISK_SUBDIVISIONS,
    RISK_TEAM_SIZE,
    PhasePlanner,
    group_tasks_by_phase,
)


@pytest.fixture
def planner(settings):
    return PhasePlanner(settings)


@pytest.fixture
def roles(developer, tester, designer):
    return [developer, tester, designer]


def _group_of(plan, task_id):
    for phase in plan.execution_phases:
        for group in phase.parallel_tasks:
            if task_id in group.tasks:
                return phase, group
    raise AssertionError(f"{task_id} not planned")


class TestGrouping:
    """Tests for conflict-free group building."""

    def test_disjoint_roles_share_group(self, planner, roles, make_task):
        team = Team(
            name="T",
            roles=roles,
            tasks=[
                make_task("t1", roles=["dev-1"]),
                make_task("t2", roles=["qa-1"]),
                make_task("t3", roles=["dev-1"]),
            ],
        )

        plan = planner.build_plan(team)

        phase1, group1 = _group_of(plan, "t1")
        phase2, group2 = _group_of(plan, "t2")
        phase3, group3 = _group_of(plan, "t3")
        assert group1.id == group2.id
        assert group3.id != group1.id
        assert phase1.id == phase3.id
        assert len(plan.execution_phases) == 1
        assert len(phase1.parallel_tasks) == 2

    def test_dependency_splits_group(self, planner, roles, make_task):
        team = Team(
            name="T",
            roles=roles,
            tasks=[
                make_task("t1", roles=["dev-1"]),
                make_task("t2", roles=["qa-1"], dependencies=["t1"]),
            ],
        )

        plan = planner.build_plan(team)

        assert _group_of(plan, "t1")[1].id != _group_of(plan, "t2")[1].id

    def test_dependency_between_joiners(self, planner, roles, make_task):
        """A task depending on a non-seed member does not join that group."""
        team = Team(
            name="T",
            roles=roles,
            tasks=[
                make_task("a", roles=["dev-1"]),
                make_task("b", roles=["qa-1"], dependencies=["c"]),
                make_task("c", roles=["ux-1"]),
            ],
        )

        plan = planner.build_plan(team)

        assert _group_of(plan, "a")[1].tasks == ["a", "b"]
        assert _group_of(plan, "c")[1].tasks == ["c"]

    def test_group_roles_and_duration(self, planner, roles, make_task):
        team = Team(
            name="T",
            roles=roles,
            tasks=[
                make_task("t1", roles=["dev-1"], hours=10),
                make_task("t2", roles=["qa-1", "ux-1"], hours=30),
            ],
        )

        plan = planner.build_plan(team)
        group = plan.execution_phases[0].parallel_tasks[0]

        assert group.tasks == ["t1", "t2"]
        assert group.assigned_roles == ["dev-1", "qa-1", "ux-1"]
        assert group.estimated_duration == 30
        assert group.resource_conflicts == []
        assert group.group_name == "Parallel Group 1"

    def test_repeated_role_is_not_a_conflict(self, planner, roles, make_task):
        team = Team(name="T", roles=roles, tasks=[make_task("t1", roles=["dev-1", "dev-1"])])

        group = planner.build_plan(team).execution_phases[0].parallel_tasks[0]

        assert group.assigned_roles == ["dev-1"]
        assert group.resource_conflicts == []

    def test_group_efficiency(self, planner, roles, make_task):
        team = Team(
            name="T",
            roles=roles,
            tasks=[
                make_task("t1", roles=["dev-1"]),
                make_task("t2", roles=["qa-1"]),
                make_task("t3", roles=["dev-1"]),
            ],
        )

        plan = planner.build_plan(team)

        assert _group_of(plan, "t1")[1].parallel_efficiency == pytest.approx(1.7)
        assert _group_of(plan, "t3")[1].parallel_efficiency == 1.0

    def test_parallel_group_id_written(self, planner, roles, make_task):
        team = Team(name="T", roles=roles, tasks=[make_task("t1", roles=["dev-1"])])

        plan = planner.build_plan(team)

        assert team.tasks[0].parallel_group_id == plan.execution_phases[0].parallel_tasks[0].id


class TestPhases:
    """Tests for phase construction."""

    def test_priority_buckets(self, make_task):
        tasks = [
            make_task("low", priority=Priority.NOT_URGENT_NOT_IMPORTANT),
            make_task("top", priority=Priority.URGENT_IMPORTANT),
            make_task("mid", priority=Priority.URGENT_NOT_IMPORTANT),
        ]

        buckets = group_tasks_by_phase(tasks)

        assert [[t.id for t in bucket] for bucket in buckets] == [["top"], ["low", "mid"]]

    def test_phase_order_and_dependencies(self, planner, roles, make_task):
        team = Team(
            name="T",
            roles=roles,
            tasks=[
                make_task("c", priority=Priority.NOT_URGENT_NOT_IMPORTANT, roles=["dev-1"]),
                make_task("b", priority=Priority.NOT_URGENT_IMPORTANT, roles=["dev-1"]),
                make_task("a", priority=Priority.URGENT_IMPORTANT, roles=["dev-1"]),
            ],
        )

        phases = planner.build_plan(team).execution_phases

        assert [p.sequence_order for p in phases] == [1, 2, 3]
        assert [p.parallel_tasks[0].tasks for p in phases] == [["a"], ["b"], ["c"]]
        assert phases[0].dependencies == []
        assert phases[1].dependencies == [phases[0].id]
        assert phases[2].dependencies == [phases[1].id]
        assert phases[0].phase_name == "Execution Phase 1"

    def test_critical_path(self, planner, roles, make_task):
        team = Team(
            name="T",
            roles=roles,
            tasks=[
                make_task("a", priority=Priority.URGENT_IMPORTANT),
                make_task("b", priority=Priority.URGENT_NOT_IMPORTANT),
            ],
        )

        phases = planner.build_plan(team).execution_phases

        assert phases[0].critical_path is True
        assert phases[1].critical_path is False

    def test_phase_duration_is_max_group(self, planner, roles, make_task):
        team = Team(
            name="T",
            roles=roles,
            tasks=[
                make_task("t1", roles=["dev-1"], hours=10),
                make_task("t2", roles=["dev-1"], hours=25),
            ],
        )

        phase = planner.build_plan(team).execution_phases[0]

        assert [g.estimated_duration for g in phase.parallel_tasks] == [10, 25]
        assert phase.estimated_duration == 25


class TestPlanTotals:
    """Tests for serial/parallel totals."""

    def test_improvement_ratio(self, planner, roles, make_task):
        team = Team(
            name="T",
            roles=roles,
            tasks=[
                make_task("t1", roles=["dev-1"], hours=20),
                make_task("t2", roles=["qa-1"], hours=20),
                make_task("t3", roles=["ux-1"], hours=10),
                make_task("t4", priority=Priority.URGENT_IMPORTANT, hours=None),
            ],
        )

        plan = planner.build_plan(team)

        assert plan.total_estimated_time == 58
        assert plan.parallel_estimated_time == 28
        assert plan.efficiency_improvement == pytest.approx(58 / 28)

    def test_single_task_phases(self, planner, roles, make_task):
        team = Team(
            name="T",
            roles=roles,
            tasks=[
                make_task("a", priority=Priority.URGENT_IMPORTANT, hours=12),
                make_task("b", priority=Priority.NOT_URGENT_IMPORTANT, hours=30),
                make_task("c", hours=5),
            ],
        )

        plan = planner.build_plan(team)

        assert plan.total_estimated_time == plan.parallel_estimated_time == 47
        assert plan.efficiency_improvement == 1.0

    def test_empty_team(self, planner, roles):
        plan = planner.build_plan(Team(name="Empty", roles=roles))

        assert plan.execution_phases == []
        assert plan.total_estimated_time == 0
        assert plan.parallel_estimated_time == 0
        assert plan.efficiency_improvement == 1.0

    def test_team_without_roles(self, planner, make_task):
        plan = planner.build_plan(Team(name="No roles", tasks=[make_task("t1")]))

        assert plan.execution_phases == []
        assert plan.efficiency_improvement == 1.0


class TestPartition:
    """Every task lands in exactly one conflict-free group."""

    def test_partition(self, planner, roles, make_task):
        role_ids = ["dev-1", "qa-1", "ux-1"]
        priorities = list(Priority)
        tasks = []
        for i in range(24):
            task_roles = [role_ids[i % 3]] if i % 4 else [role_ids[i % 3], role_ids[(i + 1) % 3]]
            deps = [f"t{i - 1}"] if i % 5 == 0 and i else []
            tasks.append(
                make_task(
                    f"t{i}",
                    roles=task_roles,
                    dependencies=deps,
                    priority=priorities[i % 4],
                    hours=4 + i,
                )
            )
        team = Team(name="Big", roles=roles, tasks=tasks)

        plan = planner.build_plan(team)

        planned = Counter(
            task_id
            for phase in plan.execution_phases
            for group in phase.parallel_tasks
            for task_id in group.tasks
        )
        assert planned == Counter(task.id for task in tasks)

        by_id = {task.id: task for task in tasks}
        for phase in plan.execution_phases:
            for group in phase.parallel_tasks:
                members = [by_id[task_id] for task_id in group.tasks]
                seen_roles = Counter(r for m in members for r in m.assigned_roles)
                assert all(count == 1 for count in seen_roles.values())
                for a in members:
                    for b in members:
                        assert b.id not in a.dependencies
                assert 0 <= group.parallel_efficiency <= 2

        assert plan.efficiency_improvement >= 1.0


class TestResourcesAndRisks:
    """Tests for resource allocation and risk factors."""

    def test_resource_allocation(self, planner, settings, roles):
        need = ExpansionNeed(role_type=RoleType.DEVELOPER, reason="test", subdivision_count=2)
        subs = ExpansionAdvisor(settings).generate_subdivisions(need)
        subs[0].current_workload = 60
        team = Team(name="T", roles=roles, role_subdivisions=subs)

        allocations = planner.build_plan(team).resource_allocation

        assert [a.role_subdivision_id for a in allocations] == [s.id for s in subs]
        assert [a.allocated_hours for a in allocations] == [40, 40]
        assert [a.utilization_rate for a in allocations] == [60, 0]

    def test_no_risks_for_small_team(self, planner, roles, make_task):
        team = Team(name="T", roles=roles, tasks=[make_task("t1", roles=["dev-1"])])

        assert planner.build_plan(team).risk_factors == []

    def test_subdivision_and_parallel_risks(self, planner, developer, make_task):
        subs = [
            RoleSubdivision(
                parent_role_type=RoleType.DEVELOPER,
                subdivision_name=f"Developer {letter}",
                specialization="Backend API Development",
                parallel_efficiency=1.8,
            )
            for letter in "ABC"
        ]
        task = make_task("t1", roles=["dev-1"], hours=40)
        task.assigned_subdivision_ids = [subs[0].id]
        team = Team(name="T", roles=[developer], tasks=[task], role_subdivisions=subs)

        risks = planner.build_plan(team).risk_factors

        assert risks == [RISK_SUBDIVISIONS, RISK_PARALLEL_RATIO]

    def test_team_size_risk(self, planner):
        roles = [
            Role(id=f"r{i}", name=f"Analyst {i}", type=RoleType.ANALYST)
            for i in range(21)
        ]

        risks = planner.build_plan(Team(name="Huge", roles=roles)).risk_factors

        assert risks == [RISK_TEAM_SIZE]
