from enum import Enum as PyEnum

# ------------------------------
# Closed tag types for resources
# ------------------------------
# Member values equal member names: that is what gets stored in the database
# and exchanged over JSON. Human-readable labels live in DISPLAY_NAMES.

class Category(str, PyEnum):
    """Subject area a resource belongs to."""
    LEADERSHIP = "LEADERSHIP"
    MANAGING_COMPLEXITY = "MANAGING_COMPLEXITY"


class Language(str, PyEnum):
    """Language the resource content is written or recorded in."""
    EN = "EN"
    IT = "IT"
    ES = "ES"


class Provider(str, PyEnum):
    """Who produced or hosts the resource."""
    SKILLA = "SKILLA"
    LINKEDIN = "LINKEDIN"
    PACK = "PACK"
    MENTOR = "MENTOR"


class Role(str, PyEnum):
    """Audience tag: which side of a mentoring relationship the resource targets."""
    MENTOR_COACH = "MENTOR_COACH"
    MENTEE_COACHEE = "MENTEE_COACHEE"


DISPLAY_NAMES: dict[PyEnum, str] = {
    Category.LEADERSHIP: "LEADERSHIP",
    Category.MANAGING_COMPLEXITY: "MANAGING COMPLEXITY",
    Language.EN: "English",
    Language.IT: "Italian",
    Language.ES: "Spanish",
    Provider.SKILLA: "Skilla",
    Provider.LINKEDIN: "LinkedIn",
    Provider.PACK: "Pack",
    Provider.MENTOR: "Mentor",
    Role.MENTOR_COACH: "MENTOR/COACH",
    Role.MENTEE_COACHEE: "MENTEE/COACHEE",
}


def display_name(tag: Category | Language | Provider | Role) -> str:
    """
    Return the human-readable label for a tag, e.g. Role.MENTOR_COACH -> "MENTOR/COACH".
    """
    return DISPLAY_NAMES[tag]
