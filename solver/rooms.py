"""Room suggestions per subject category."""

import random
from typing import Optional

from models.subject import Subject, SubjectCategory

# Category → label template. "{n}" receives a cosmetic number; rooms are
# not tracked for conflicts.
ROOM_RULES: dict[SubjectCategory, str] = {
    SubjectCategory.ART_EDUCATION: "Art Studio {n}",
    SubjectCategory.PHYSICAL_EDUCATION: "Sports Ground",
    SubjectCategory.VOCATIONAL: "Workshop {n}",
    SubjectCategory.VALUE_EDUCATION: "Activity Hall",
}
GENERIC_ROOM = "Room {n}"

# Suffix ranges (inclusive)
GENERIC_ROOM_RANGE = (1, 20)
SPECIAL_ROOM_RANGE = (1, 3)


class RoomAdvisor:
    """Suggests a room label for a subject.

    ``rng`` can be seeded for reproducible labels.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def suggest(self, subject: Subject) -> str:
        template = ROOM_RULES.get(subject.category)
        if template is None:
            lo, hi = GENERIC_ROOM_RANGE
            return GENERIC_ROOM.format(n=self._rng.randint(lo, hi))
        if "{n}" not in template:
            return template
        lo, hi = SPECIAL_ROOM_RANGE
        return template.format(n=self._rng.randint(lo, hi))
