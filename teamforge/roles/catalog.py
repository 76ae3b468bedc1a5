"""
Role type lookup tables.

Display names, subdivision specializations, parallel-efficiency coefficients
and task-relevance keywords for every role type.
"""

from typing import Dict, List, Tuple

from teamforge.models.schemas import RoleType

DEFAULT_DISPLAY_NAME = "Specialist"
DEFAULT_SPECIALIZATION = "General Expertise"
DEFAULT_PARALLEL_EFFICIENCY = 1.2

ROLE_DISPLAY_NAMES: Dict[RoleType, str] = {
    RoleType.DEVELOPER: "Developer",
    RoleType.TESTER: "Test Engineer",
    RoleType.DESIGNER: "Designer",
    RoleType.ANALYST: "Systems Analyst",
    RoleType.RESEARCHER: "Researcher",
    RoleType.PROJECT_MANAGER: "Project Manager",
    RoleType.DOMAIN_EXPERT: "Domain Expert",
    RoleType.STRATEGIST: "Strategist",
    RoleType.COMMUNICATOR: "Communicator",
    RoleType.QUALITY_ASSURER: "Quality Assurer",
    RoleType.RISK_MANAGER: "Risk Manager",
    RoleType.INNOVATOR: "Innovator",
}

ROLE_SPECIALIZATIONS: Dict[RoleType, List[str]] = {
    RoleType.DEVELOPER: [
        "Frontend UI Development",
        "Backend API Development",
        "Database Design",
        "System Integration",
        "Performance Optimization",
    ],
    RoleType.TESTER: [
        "Functional Testing",
        "Performance Testing",
        "Test Automation",
        "Integration Testing",
        "User Acceptance Testing",
    ],
    RoleType.DESIGNER: [
        "User Interface Design",
        "User Experience Design",
        "Interaction Design",
        "Visual Design",
        "Prototyping",
    ],
    RoleType.ANALYST: [
        "Requirements Analysis",
        "Business Process Analysis",
        "Architecture Analysis",
        "Data Analysis",
        "Risk Analysis",
    ],
    RoleType.RESEARCHER: [
        "Market Research",
        "Technology Research",
        "Competitive Analysis",
        "User Research",
        "Feasibility Study",
    ],
    RoleType.PROJECT_MANAGER: [
        "Project Planning",
        "Schedule Management",
        "Resource Coordination",
        "Risk Control",
        "Team Management",
    ],
    RoleType.DOMAIN_EXPERT: [
        "Business Consulting",
        "Technical Guidance",
        "Standards Definition",
        "Best Practices",
        "Knowledge Transfer",
    ],
    RoleType.STRATEGIST: [
        "Strategic Planning",
        "Goal Setting",
        "Roadmap Design",
        "Decision Support",
        "Trend Analysis",
    ],
    RoleType.COMMUNICATOR: [
        "Internal Communication",
        "External Coordination",
        "Meeting Facilitation",
        "Information Flow",
        "Relationship Management",
    ],
    RoleType.QUALITY_ASSURER: [
        "Quality Standards",
        "Process Audit",
        "Quality Inspection",
        "Improvement Proposals",
        "Compliance Verification",
    ],
    RoleType.RISK_MANAGER: [
        "Risk Identification",
        "Risk Assessment",
        "Mitigation Strategy",
        "Monitoring & Alerts",
        "Incident Response",
    ],
    RoleType.INNOVATOR: [
        "Innovative Design",
        "Technology Exploration",
        "Proof of Concept",
        "Prototype Development",
        "Idea Realization",
    ],
}

# Developers split well; management work barely parallelizes.
ROLE_PARALLEL_EFFICIENCY: Dict[RoleType, float] = {
    RoleType.DEVELOPER: 1.8,
    RoleType.TESTER: 1.6,
    RoleType.DESIGNER: 1.4,
    RoleType.ANALYST: 1.2,
    RoleType.RESEARCHER: 1.3,
    RoleType.PROJECT_MANAGER: 1.1,
    RoleType.DOMAIN_EXPERT: 1.2,
    RoleType.STRATEGIST: 1.1,
    RoleType.COMMUNICATOR: 1.3,
    RoleType.QUALITY_ASSURER: 1.5,
    RoleType.RISK_MANAGER: 1.2,
    RoleType.INNOVATOR: 1.4,
}

# (description keywords, title keywords) marking a task as relevant to a role type.
# Role types without an entry treat every task as relevant.
ROLE_RELEVANCE_KEYWORDS: Dict[RoleType, Tuple[List[str], List[str]]] = {
    RoleType.DEVELOPER: (
        ["开发", "编程", "代码", "develop", "program", "code"],
        ["开发", "develop"],
    ),
    RoleType.TESTER: (
        ["测试", "验证", "质量", "test", "verif", "quality"],
        ["测试", "test"],
    ),
    RoleType.DESIGNER: (
        ["设计", "界面", "用户体验", "design", "interface", "user experience"],
        ["设计", "design"],
    ),
    RoleType.ANALYST: (
        ["分析", "需求", "建模", "analy", "requirement", "model"],
        ["分析", "analy"],
    ),
}


def get_display_name(role_type: RoleType) -> str:
    """Human-readable base name for a role type."""
    return ROLE_DISPLAY_NAMES.get(role_type, DEFAULT_DISPLAY_NAME)


def get_specialization(role_type: RoleType, index: int) -> str:
    """
    Specialization for the ``index``-th subdivision (1-based) of a role type.

    Cycles through the role's specialization list.
    """
    specializations = ROLE_SPECIALIZATIONS.get(role_type, [DEFAULT_SPECIALIZATION])
    return specializations[(index - 1) % len(specializations)]


def get_parallel_efficiency(role_type: RoleType) -> float:
    """Parallel-efficiency coefficient for a role type."""
    return ROLE_PARALLEL_EFFICIENCY.get(role_type, DEFAULT_PARALLEL_EFFICIENCY)


def is_relevant_task(role_type: RoleType, title: str, description: str) -> bool:
    """Whether a task's text marks it as work for the given role type."""
    keywords = ROLE_RELEVANCE_KEYWORDS.get(role_type)
    if keywords is None:
        return True

    description_keywords, title_keywords = keywords
    description = description.lower()
    title = title.lower()
    return (
        any(keyword in description for keyword in description_keywords)
        or any(keyword in title for keyword in title_keywords)
    )
