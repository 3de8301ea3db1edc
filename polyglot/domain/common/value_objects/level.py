from enum import StrEnum


class ProficiencyLevel(StrEnum):
    """Proficiency level of a learning path or a portfolio language."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
