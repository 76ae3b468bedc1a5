"""
Task Analysis Service.

Scores tasks for repetitiveness, workload, complexity and subdivision potential
using keyword heuristics over the task text.
"""

import logging
from typing import List

from teamforge.models.schemas import Priority, Task, TaskAnalysis, Team

logger = logging.getLogger(__name__)

MAX_SCORE = 10.0


class TaskAnalyzer:
    """Computes heuristic scores for a single task."""

    # Terms that suggest batch or templated work
    REPETITIVE_KEYWORDS = [
        "重复", "批量", "批量处理", "多个", "每个", "所有", "统一", "标准化",
        "模板", "复制", "相同", "类似", "重复性", "批处理",
        "repeat", "repetitive", "batch", "bulk", "every", "uniform",
        "standardiz", "template", "duplicate", "identical", "similar",
    ]
    TITLE_BATCH_KEYWORDS = ["批量", "多个", "batch", "bulk", "multiple"]
    TITLE_REPEAT_KEYWORDS = ["重复", "统一", "repeat", "uniform"]

    COMPLEX_KEYWORDS = [
        "算法", "架构", "设计", "优化", "集成", "复杂", "高级",
        "创新", "研发", "分析", "建模", "框架", "系统",
        "algorithm", "architect", "design", "optimiz", "integrat", "complex",
        "advanced", "innovat", "research", "analy", "modeling", "framework",
        "system",
    ]

    SEQUENTIAL_KEYWORDS = [
        "顺序", "依次", "先后", "串行", "单一", "唯一", "集中", "统一处理", "整体",
        "sequential", "serial", "one by one", "single", "centraliz", "as a whole",
    ]
    PARALLEL_KEYWORDS = [
        "并行", "同时", "分别", "独立", "模块", "组件", "批量", "多个", "分组", "并发",
        "parallel", "simultaneous", "independent", "module", "component",
        "batch", "multiple", "concurren",
    ]

    SUBDIVISIBLE_KEYWORDS = [
        "模块", "组件", "部分", "阶段", "步骤", "层次", "分类", "分组", "多个", "各种", "不同",
        "module", "component", "section", "phase", "stage", "step", "layer",
        "categor", "group", "multiple", "various", "different",
    ]

    # Matched against space-padded text; short English tokens carry a
    # leading or trailing space so they only match at a word edge.
    SKILL_KEYWORDS = {
        "frontend_development": [
            "前端", "frontend", "front-end", "html", " css", "javascript", "react", "vue", "angular",
        ],
        "backend_development": [
            "后端", "backend", "back-end", " api", "数据库", "database", "sql",
            "java ", "python", " node",
        ],
        "testing": ["测试", " test", "质量", "quality", "验证", "verif", "检查", "inspect"],
        "design": [
            "设计", "design", " ui ", " ui/", "user interface", " ux", "界面", "用户体验",
            "原型", "prototype",
        ],
        "analysis": ["分析", "analy", "需求", "requirement", "业务", "business", "流程", "建模"],
        "project_management": [
            "管理", "manage", "协调", "coordinat", "计划", " plan", "进度", "schedule", "资源",
        ],
    }
    GENERAL_SKILL = "general"

    def __init__(self, default_task_hours: float = 8.0):
        """
        Initialize Task Analyzer.

        Args:
            default_task_hours: Hours assumed for tasks without an estimate
        """
        self.default_task_hours = default_task_hours

    def analyze(self, task: Task) -> TaskAnalysis:
        """
        Score a single task.

        Args:
            task: Task to analyze

        Returns:
            A new, immutable TaskAnalysis
        """
        analysis = TaskAnalysis(
            task_id=task.id,
            repetitiveness_score=self.calculate_repetitiveness(task),
            workload_score=self.calculate_workload(task),
            complexity_score=self.calculate_complexity(task),
            parallelizable=self.is_parallelizable(task),
            subdivision_potential=self.calculate_subdivision_potential(task),
            estimated_hours=self._hours(task),
            skill_requirements=self.extract_skill_requirements(task),
        )

        logger.debug(
            f"Analyzed task {task.id}: repetitiveness={analysis.repetitiveness_score}, "
            f"workload={analysis.workload_score}, potential={analysis.subdivision_potential}"
        )
        return analysis

    def analyze_all(self, team: Team) -> List[TaskAnalysis]:
        """Analyze every task of a team, in task order."""
        return [self.analyze(task) for task in team.tasks]

    def calculate_repetitiveness(self, task: Task) -> float:
        description = task.description.lower()
        title = task.title.lower()

        score = float(_count_matches(description, self.REPETITIVE_KEYWORDS))

        if _contains_any(title, self.TITLE_BATCH_KEYWORDS):
            score += 2
        if _contains_any(title, self.TITLE_REPEAT_KEYWORDS):
            score += 2

        hours = self._hours(task)
        if hours > 40:
            score += 2
        if hours > 80:
            score += 2

        return min(score, MAX_SCORE)

    def calculate_workload(self, task: Task) -> float:
        hours = self._hours(task)

        if hours <= 8:
            score = 2.0
        elif hours <= 16:
            score = 4.0
        elif hours <= 32:
            score = 6.0
        elif hours <= 64:
            score = 8.0
        else:
            score = 10.0

        if task.priority == Priority.URGENT_IMPORTANT:
            score += 1
        elif task.priority == Priority.NOT_URGENT_IMPORTANT:
            score += 0.5

        if len(task.dependencies) > 3:
            score += 1

        return min(score, MAX_SCORE)

    def calculate_complexity(self, task: Task) -> float:
        description = task.description.lower()

        score = 0.5 * _count_matches(description, self.COMPLEX_KEYWORDS)
        score += min(len(task.dependencies) * 0.5, 3)

        # An unassigned task still needs one role
        role_count = len(task.assigned_roles) or 1
        if role_count > 2:
            score += 1
        if role_count > 4:
            score += 1

        return min(score, MAX_SCORE)

    def is_parallelizable(self, task: Task) -> bool:
        description = task.description.lower()

        if _contains_any(description, self.SEQUENTIAL_KEYWORDS):
            return False
        if _contains_any(description, self.PARALLEL_KEYWORDS):
            return True

        return self._hours(task) > 16

    def calculate_subdivision_potential(self, task: Task) -> float:
        hours = self._hours(task)
        score = 0.0

        if hours > 16:
            score += 2
        if hours > 40:
            score += 3
        if hours > 80:
            score += 3

        score += 0.5 * _count_matches(task.description.lower(), self.SUBDIVISIBLE_KEYWORDS)

        if self.is_parallelizable(task):
            score += 2

        return min(score, MAX_SCORE)

    def extract_skill_requirements(self, task: Task) -> List[str]:
        text = f" {task.title.lower()} {task.description.lower()} "

        requirements = [
            skill
            for skill, keywords in self.SKILL_KEYWORDS.items()
            if _contains_any(text, keywords)
        ]
        return requirements or [self.GENERAL_SKILL]

    def _hours(self, task: Task) -> float:
        return task.hours(self.default_task_hours)


def _count_matches(text: str, keywords: List[str]) -> int:
    return sum(1 for keyword in keywords if keyword in text)


def _contains_any(text: str, keywords: List[str]) -> bool:
    return any(keyword in text for keyword in keywords)
