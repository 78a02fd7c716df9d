"""Tests for teacher matching, room advice and the greedy assignment engine."""

import logging
import random

import pytest

from models.generation_request import GenerationRequest
from models.subject import NepPriority, SubjectCategory
from models.timeslot import SlotType, TimeSlot
from solver.assignment import HEURISTIC_CONFIDENCE, AssignmentEngine, heuristic_timetable
from solver.matcher import NoTeachersAvailable, TeacherMatcher, specialization_matches
from solver.result import HeuristicTimetable, load_result
from solver.rooms import RoomAdvisor
from tests.builders import make_slots, make_subject, make_teacher


# ─── Teacher matcher ──────────────────────────────────────────────────────────

class TestTeacherMatcher:

    def test_name_token_substring_match(self):
        """'Mathematics' matches a tag 'Applied Mathematics' (case-insensitive)."""
        math = make_subject("m", "Mathematics")
        teachers = [make_teacher("t1", ["History"]), make_teacher("t2", ["applied MATHEMATICS"])]
        assert TeacherMatcher().match(math, teachers, 0).id == "t2"

    def test_first_matching_teacher_wins(self):
        sci = make_subject("s", "Science")
        teachers = [make_teacher("t1", ["Science"]), make_teacher("t2", ["Science"])]
        assert TeacherMatcher().match(sci, teachers, 1).id == "t1"

    def test_art_category_keyword(self):
        """Art subjects match any tag containing 'art'."""
        art = make_subject("a", "Visual Studies", SubjectCategory.ART_EDUCATION)
        teachers = [make_teacher("t1", ["Mathematics"]), make_teacher("t2", ["Fine Arts"])]
        assert TeacherMatcher().match(art, teachers, 0).id == "t2"

    def test_physical_category_keyword(self):
        pe = make_subject("p", "Sports", SubjectCategory.PHYSICAL_EDUCATION)
        teachers = [make_teacher("t1", ["English"]), make_teacher("t2", ["Physical Training"])]
        assert TeacherMatcher().match(pe, teachers, 0).id == "t2"

    def test_keyword_only_for_its_category(self):
        """A core subject does not pick up the 'art' keyword."""
        core = make_subject("c", "Civics", SubjectCategory.CORE)
        assert not specialization_matches(core, make_teacher("t", ["Art"]))

    def test_positional_fallback(self):
        """No match → teachers[index % len(teachers)]."""
        music = make_subject("mu", "Music", SubjectCategory.ELECTIVE)
        teachers = [make_teacher(f"t{i}", ["History"]) for i in range(3)]
        assert TeacherMatcher().match(music, teachers, 0).id == "t0"
        assert TeacherMatcher().match(music, teachers, 4).id == "t1"

    def test_empty_teacher_list_raises(self):
        with pytest.raises(NoTeachersAvailable):
            TeacherMatcher().match(make_subject("m", "Mathematics"), [], 0)


# ─── Room advisor ─────────────────────────────────────────────────────────────

class TestRoomAdvisor:

    @pytest.mark.parametrize("category,prefix", [
        (SubjectCategory.ART_EDUCATION, "Art Studio "),
        (SubjectCategory.VOCATIONAL, "Workshop "),
        (SubjectCategory.CORE, "Room "),
        (SubjectCategory.ELECTIVE, "Room "),
    ])
    def test_numbered_labels(self, category, prefix):
        label = RoomAdvisor().suggest(make_subject("x", "X", category))
        assert label.startswith(prefix)
        assert label[len(prefix):].isdigit()

    def test_fixed_labels(self):
        advisor = RoomAdvisor()
        assert advisor.suggest(make_subject("p", "PE", SubjectCategory.PHYSICAL_EDUCATION)) \
            == "Sports Ground"
        assert advisor.suggest(make_subject("v", "Values", SubjectCategory.VALUE_EDUCATION)) \
            == "Activity Hall"

    def test_generic_room_range(self):
        advisor = RoomAdvisor(random.Random(0))
        core = make_subject("c", "C")
        numbers = {int(advisor.suggest(core).split()[-1]) for _ in range(200)}
        assert min(numbers) >= 1
        assert max(numbers) <= 20

    def test_seeded_rng_is_reproducible(self):
        core = make_subject("c", "C")
        a = RoomAdvisor(random.Random(7))
        b = RoomAdvisor(random.Random(7))
        assert [a.suggest(core) for _ in range(5)] == [b.suggest(core) for _ in range(5)]


# ─── Assignment engine ────────────────────────────────────────────────────────

class TestAssignmentEngine:

    def test_scenario_all_on_day_one(
        self, scenario_subjects, scenario_teachers, scenario_slots, gen_request
    ):
        """3 subjects, 4 slots → all on day 1, in sorted-subject order."""
        result = AssignmentEngine().assign(
            scenario_subjects, scenario_teachers, scenario_slots, gen_request)
        assert [e.subject_id for e in result.entries] == ["math", "art", "pe"]
        assert [e.day_of_week for e in result.entries] == [1, 1, 1]
        assert [e.time_slot_id for e in result.entries] == ["p1", "p2", "p3"]
        assert all(e.teacher_id == "t1" for e in result.entries)
        assert result.dropped_count == 0

    def test_entries_carry_request_and_marker(
        self, scenario_subjects, scenario_teachers, scenario_slots, gen_request
    ):
        result = AssignmentEngine().assign(
            scenario_subjects, scenario_teachers, scenario_slots, gen_request)
        for e in result.entries:
            assert e.school_id == "s1"
            assert e.class_id == "10A"
            assert e.ai_confidence_score == HEURISTIC_CONFIDENCE
            assert e.room_number
        assert len({e.id for e in result.entries}) == len(result.entries)

    def test_priority_sort_is_stable(self, gen_request):
        subjects = [
            make_subject("low1", "L1", priority=NepPriority.LOW),
            make_subject("high1", "H1", priority=NepPriority.HIGH),
            make_subject("med1", "M1", priority=NepPriority.MEDIUM),
            make_subject("high2", "H2", priority=NepPriority.HIGH),
        ]
        result = AssignmentEngine().assign(
            subjects, [make_teacher("t", [])], make_slots(5), gen_request)
        assert [e.subject_id for e in result.entries] == ["high1", "high2", "med1", "low1"]

    def test_slot_walk_wraps_to_next_day(self, gen_request):
        subjects = [make_subject(f"s{i}", f"S{i}") for i in range(5)]
        result = AssignmentEngine().assign(
            subjects, [make_teacher("t", [])], make_slots(2), gen_request)
        assert [(e.day_of_week, e.time_slot_id) for e in result.entries] == [
            (1, "p1"), (1, "p2"), (2, "p1"), (2, "p2"), (3, "p1"),
        ]

    def test_non_regular_slots_skipped(self, mixed_slots, gen_request):
        subjects = [make_subject(f"s{i}", f"S{i}") for i in range(4)]
        result = AssignmentEngine().assign(
            subjects, [make_teacher("t", [])], mixed_slots, gen_request)
        assert {e.time_slot_id for e in result.entries} <= {"p1", "p2", "p3"}
        assert result.entries[3].day_of_week == 2

    def test_capacity_drops_low_priority(self, gen_request, caplog):
        """1 slot × 6 days, 8 subjects → the two lowest-priority subjects are dropped."""
        subjects = (
            [make_subject(f"low{i}", f"L{i}", priority=NepPriority.LOW) for i in range(2)]
            + [make_subject(f"high{i}", f"H{i}", priority=NepPriority.HIGH) for i in range(6)]
        )
        with caplog.at_level(logging.WARNING, logger="solver.assignment"):
            result = AssignmentEngine().assign(
                subjects, [make_teacher("t", [])], make_slots(1), gen_request)
        assert len(result.entries) == 6
        assert {e.subject_id for e in result.entries} == {f"high{i}" for i in range(6)}
        assert result.dropped_subject_ids == ["low0", "low1"]
        assert result.dropped_count == 2
        assert "Capacity exhausted" in caplog.text

    def test_unique_cells_and_entry_bound(self, gen_request):
        subjects = [make_subject(f"s{i}", f"S{i}") for i in range(20)]
        slots = make_slots(3)
        result = AssignmentEngine().assign(subjects, [make_teacher("t", [])], slots, gen_request)
        assert len(result.entries) == min(len(subjects), len(slots) * 6)
        assert len({e.cell_key for e in result.entries}) == len(result.entries)

    def test_zero_subjects(self, scenario_slots, gen_request):
        result = AssignmentEngine().assign([], [], scenario_slots, gen_request)
        assert result.entries == []
        assert result.dropped_subject_ids == []

    def test_zero_regular_slots_drops_everything(self, scenario_subjects, scenario_teachers,
                                                 gen_request):
        slots = [TimeSlot(id="b", start_time="10:00", end_time="10:15",
                          slot_type=SlotType.BREAK)]
        result = AssignmentEngine().assign(scenario_subjects, scenario_teachers, slots,
                                           gen_request)
        assert result.entries == []
        assert result.dropped_subject_ids == ["math", "art", "pe"]

    def test_no_teachers_raises(self, scenario_subjects, scenario_slots, gen_request):
        with pytest.raises(NoTeachersAvailable):
            AssignmentEngine().assign(scenario_subjects, [], scenario_slots, gen_request)

    def test_matcher_gets_input_index(self, gen_request):
        """Positional fallback uses the subject's input position, not its sorted one."""
        subjects = [
            make_subject("a", "Alpha", priority=NepPriority.LOW),
            make_subject("b", "Beta", priority=NepPriority.HIGH),
        ]
        teachers = [make_teacher("t0", []), make_teacher("t1", [])]
        result = AssignmentEngine().assign(subjects, teachers, make_slots(2), gen_request)
        by_subject = {e.subject_id: e.teacher_id for e in result.entries}
        assert by_subject == {"a": "t0", "b": "t1"}

    def test_inputs_not_mutated(self, scenario_subjects, scenario_teachers, scenario_slots,
                                gen_request):
        subjects = list(scenario_subjects)
        AssignmentEngine().assign(subjects, scenario_teachers, scenario_slots, gen_request)
        assert subjects == scenario_subjects

    def test_custom_confidence(self, scenario_subjects, scenario_teachers, scenario_slots,
                               gen_request):
        result = AssignmentEngine(confidence=0.5).assign(
            scenario_subjects, scenario_teachers, scenario_slots, gen_request)
        assert all(e.ai_confidence_score == 0.5 for e in result.entries)


class TestHeuristicTimetable:

    def test_wraps_result_with_stub_report(self, scenario_subjects, scenario_teachers,
                                           scenario_slots, gen_request):
        result = heuristic_timetable(
            AssignmentEngine(), scenario_subjects, scenario_teachers, scenario_slots,
            gen_request, fallback_score=75, reason="offline",
        )
        assert isinstance(result, HeuristicTimetable)
        assert result.provenance == "heuristic"
        assert result.report.overall_score == 75
        assert result.fallback_reason == "offline"
        assert len(result.entries) == 3

    def test_save_and_load_keeps_provenance(self, scenario_subjects, scenario_teachers,
                                            scenario_slots, gen_request, tmp_path):
        result = heuristic_timetable(
            AssignmentEngine(), scenario_subjects, scenario_teachers, scenario_slots,
            gen_request, fallback_score=75, reason="offline",
        )
        path = tmp_path / "result.json"
        result.save_json(path)
        loaded = load_result(path)
        assert isinstance(loaded, HeuristicTimetable)
        assert [e.id for e in loaded.entries] == [e.id for e in result.entries]
