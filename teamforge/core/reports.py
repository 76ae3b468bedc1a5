"""
Markdown summaries of a team's parallel optimization state.
"""

from typing import List

from teamforge.models.schemas import Team


def build_optimization_report(team: Team) -> str:
    """
    Summarize analyses, strategy, subdivisions and plan for a team.

    Sections without data are left out.
    """
    lines: List[str] = [
        "## Parallel Optimization Report",
        "",
        f"**Team**: {team.name}",
        f"**Base roles**: {len(team.roles)}",
        f"**Role subdivisions**: {len(team.role_subdivisions)}",
        f"**Tasks**: {len(team.tasks)}",
        "",
    ]

    analyses = team.task_analyses
    if analyses:
        count = len(analyses)
        avg_repetitiveness = sum(a.repetitiveness_score for a in analyses) / count
        avg_workload = sum(a.workload_score for a in analyses) / count
        parallelizable = sum(1 for a in analyses if a.parallelizable)
        lines += [
            "**Task analysis**:",
            f"- Average repetitiveness: {avg_repetitiveness:.1f}/10",
            f"- Average workload: {avg_workload:.1f}/10",
            f"- Parallelizable tasks: {parallelizable}/{count}",
            f"- Parallelizable rate: {parallelizable / count * 100:.1f}%",
            "",
        ]

    strategy = team.expansion_strategy
    if strategy is not None:
        triggers = strategy.trigger_conditions
        lines += [
            "**Expansion strategy**:",
            f"- Repetitiveness threshold: {triggers.min_repetitiveness_score:g}/10",
            f"- Workload threshold: {triggers.min_workload_score:g}/10",
            f"- Max role workload: {triggers.max_single_role_workload:g}%",
            f"- Target parallel efficiency: "
            f"{strategy.efficiency_targets.target_parallel_efficiency:g}x",
            "",
        ]

    if team.role_subdivisions:
        lines.append("**Subdivisions**:")
        for sub in team.role_subdivisions:
            lines += [
                f"- {sub.subdivision_name}: {sub.specialization}",
                f"  capacity {sub.workload_capacity:g}%, load {sub.current_workload:.1f}%, "
                f"efficiency {sub.parallel_efficiency:g}x",
            ]
        lines.append("")

    plan = team.parallel_execution_plan
    if plan is not None:
        lines += [
            "**Execution plan**:",
            f"- Serial time: {plan.total_estimated_time:g} hours",
            f"- Parallel time: {plan.parallel_estimated_time:g} hours",
            f"- Efficiency improvement: {plan.efficiency_improvement * 100:.1f}%",
            f"- Phases: {len(plan.execution_phases)}",
        ]
        if plan.risk_factors:
            lines.append(f"- Risk factors: {len(plan.risk_factors)}")
            lines += [f"  - {risk}" for risk in plan.risk_factors]

    return "\n".join(lines).rstrip() + "\n"
