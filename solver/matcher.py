"""Teacher matching: specialization rules with a positional fallback."""

from models.subject import Subject, SubjectCategory
from models.teacher import Teacher


class NoTeachersAvailable(Exception):
    """Matching was attempted against an empty teacher list."""


# Category → keyword that also counts as a specialization hit.
CATEGORY_KEYWORDS: dict[SubjectCategory, str] = {
    SubjectCategory.ART_EDUCATION: "art",
    SubjectCategory.PHYSICAL_EDUCATION: "physical",
}


def specialization_matches(subject: Subject, teacher: Teacher) -> bool:
    """True when one of the teacher's tags contains the subject's first name
    token or its category keyword (both case-insensitive)."""
    needles = [n for n in (subject.name_token, CATEGORY_KEYWORDS.get(subject.category)) if n]
    return any(
        needle in tag.lower()
        for tag in teacher.specialization
        for needle in needles
    )


class TeacherMatcher:
    """Picks the best-fit teacher for a subject.

    Usage:
        matcher = TeacherMatcher()
        teacher = matcher.match(subject, teachers, index=3)
    """

    def match(self, subject: Subject, teachers: list[Teacher], index: int = 0) -> Teacher:
        """First specialized teacher in catalog order, else ``teachers[index % n]``.

        ``index`` is the subject's position in the caller's subject list.
        """
        if not teachers:
            raise NoTeachersAvailable(
                f"No teachers available for subject '{subject.name}' ({subject.id})"
            )
        for teacher in teachers:
            if specialization_matches(subject, teacher):
                return teacher
        return teachers[index % len(teachers)]
