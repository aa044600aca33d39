"""
학기/기수 수강 계획 테스트
"""
from datetime import date
import pytest
from services.semester_plan import (
    MAX_SUBJECTS_PER_TERM,
    MAX_SUBJECTS_PER_YEAR,
    PlanRuleViolation,
    Semester,
    SemesterPlan,
)
from utils.cohort_utils import Cohort


@pytest.fixture
def plan():
    """2025년 1학기(id 0) + 2학기(id 1)"""
    return SemesterPlan.default(2025)


def _fill(plan, semester_id, subject_ids):
    for subject_id in subject_ids:
        assert plan.assign_subject(subject_id, semester_id)


class TestDefaultPlan:

    def test_default_semesters_and_dates(self, plan):
        assert [(s.id, s.year, s.term, s.class_number) for s in plan.semesters] == [
            (0, 2025, 1, 1), (1, 2025, 2, 1),
        ]
        assert plan.get_dates(0) == (date(2024, 11, 15), date(2025, 5, 5))
        assert plan.get_dates(1) == (date(2025, 5, 15), date(2025, 11, 5))

    def test_empty_plan_rejected(self):
        with pytest.raises(ValueError):
            SemesterPlan([])


class TestAssignSubject:

    def test_term_limit(self, plan):
        _fill(plan, 0, range(1, MAX_SUBJECTS_PER_TERM + 1))

        with pytest.raises(PlanRuleViolation) as exc_info:
            plan.assign_subject(100, 0)

        assert exc_info.value.rule == 'term_limit'
        assert exc_info.value.current == 8
        assert plan.group_count(2025, 1) == 8
        assert not plan.is_assigned(100)

    def test_term_limit_shared_across_cohorts(self, plan):
        second = plan.add_cohort(0)
        _fill(plan, 0, range(1, 6))
        _fill(plan, second.id, range(6, 9))

        with pytest.raises(PlanRuleViolation) as exc_info:
            plan.assign_subject(100, second.id)

        assert exc_info.value.rule == 'term_limit'
        assert plan.group_count(2025, 1) == 8

    def test_year_limit_even_when_group_has_room(self, plan):
        _fill(plan, 0, range(1, 9))
        _fill(plan, 1, range(9, 15))
        assert plan.year_count(2025) == MAX_SUBJECTS_PER_YEAR

        with pytest.raises(PlanRuleViolation) as exc_info:
            plan.assign_subject(100, 1)

        assert exc_info.value.rule == 'year_limit'
        assert plan.group_count(2025, 2) == 6
        assert plan.year_count(2025) == 14

    def test_year_limit_is_per_calendar_year(self, plan):
        _fill(plan, 0, range(1, 9))
        _fill(plan, 1, range(9, 15))
        next_year = plan.add_semester(2026, 1)

        assert plan.assign_subject(100, next_year.id)

    def test_subject_assigned_once_in_whole_plan(self, plan):
        assert plan.assign_subject(7, 0)
        assert plan.assign_subject(7, 1) is False
        assert plan.assign_subject(7, 0) is False
        assert plan.assigned_ids() == [7]
        assert plan.find_semester_of(7) == 0

    def test_unknown_semester(self, plan):
        with pytest.raises(ValueError):
            plan.assign_subject(1, 42)

    def test_counts_never_exceed_caps(self, plan):
        cohort = plan.add_cohort(1)
        targets = [0, 1, cohort.id]
        for subject_id in range(1, 60):
            try:
                plan.assign_subject(subject_id, targets[subject_id % 3])
            except PlanRuleViolation:
                pass
            assert plan.group_count(2025, 1) <= 8
            assert plan.group_count(2025, 2) <= 8
            assert plan.year_count(2025) <= 14
            assert len(plan.assigned_ids()) == len(set(plan.assigned_ids()))


class TestUnassignAndRemove:

    def test_unassign_searches_group_only(self, plan):
        cohort = plan.add_cohort(0)
        plan.assign_subject(3, cohort.id)
        plan.assign_subject(4, 1)

        assert plan.unassign_subject(3, 0)
        assert not plan.is_assigned(3)
        assert plan.unassign_subject(4, 0) is False
        assert plan.is_assigned(4)

    def test_remove_subject_everywhere(self, plan):
        plan.assign_subject(3, 0)

        assert plan.remove_subject(3)
        assert plan.remove_subject(3) is False
        assert plan.subjects_in(0) == []


class TestSemesters:

    def test_add_semester_numbers_cohorts(self, plan):
        second = plan.add_semester(2025, 1)
        third = plan.add_cohort(0)

        assert second.id == 2 and second.class_number == 2
        assert third.id == 3 and third.class_number == 3
        assert [s.class_number for s in plan.group(2025, 1)] == [1, 2, 3]
        assert plan.get_dates(third.id) == (date(2024, 11, 15), date(2025, 5, 5))
        assert third.display_name == '2025년 1학기 3기'

    def test_add_semester_after_gap_uses_next_number(self, plan):
        second = plan.add_cohort(0)
        plan.add_cohort(0)
        plan.delete_semester(second.id)

        assert plan.add_cohort(0).class_number == 4

    def test_add_semester_invalid_term(self, plan):
        with pytest.raises(ValueError):
            plan.add_semester(2025, 3)

    def test_delete_last_semester_rejected(self):
        plan = SemesterPlan([Semester(0, 2025, 1)])

        with pytest.raises(PlanRuleViolation) as exc_info:
            plan.delete_semester(0, 0)

        assert exc_info.value.rule == 'last_semester'
        assert len(plan.semesters) == 1

    def test_delete_drops_assignments_and_dates(self, plan):
        plan.assign_subject(5, 1)
        plan.delete_semester(1, 0)

        assert not plan.is_assigned(5)
        assert 1 not in plan.dates
        assert plan.assign_subject(5, 0)

    def test_delete_selected_picks_sibling_cohort(self, plan):
        cohort = plan.add_cohort(0)

        assert plan.delete_semester(0, 0) == cohort.id

    def test_delete_selected_without_sibling_picks_last(self, plan):
        plan.add_semester(2026, 1)

        assert plan.delete_semester(0, 0) == 2

    def test_delete_unselected_keeps_selection(self, plan):
        assert plan.delete_semester(1, 0) == 0

    def test_set_dates(self, plan):
        plan.set_dates(0, start='2025-01-02')

        assert plan.get_dates(0) == (date(2025, 1, 2), date(2025, 5, 5))
        with pytest.raises(ValueError):
            plan.set_dates(0, end='2025-13-40')


class TestCohortMerge:

    def test_from_cohorts(self):
        plan = SemesterPlan.from_cohorts([Cohort(2025, 1, 1), Cohort(2025, 1, 2)])

        assert [s.display_name for s in plan.semesters] == ['2025년 1학기 1기', '2025년 1학기 2기']
        assert plan.get_dates(1) == (date(2024, 11, 15), date(2025, 5, 5))

    def test_merge_adds_missing_only_and_is_idempotent(self, plan):
        cohorts = [Cohort(2025, 1, 1), Cohort(2025, 1, 2), Cohort(2026, 2, 1)]

        added = plan.merge_cohorts(cohorts)
        assert [s.display_name for s in added] == ['2025년 1학기 2기', '2026년 2학기 1기']

        assert plan.merge_cohorts(cohorts) == []
        assert len(plan.semesters) == 4


class TestRecord:

    def test_record_round_trip(self, plan):
        plan.add_cohort(1)
        plan.assign_subject(10, 0)
        plan.assign_subject(11, 2)
        record = plan.to_record()

        assert record['semester_subjects'] == {'0': [10], '2': [11]}
        assert record['semester_dates']['0'] == {'start': '2024-11-15', 'end': '2025-05-05'}

        restored = SemesterPlan.from_record(record)
        assert restored.semesters == plan.semesters
        assert restored.assignments == plan.assignments
        assert restored.dates == plan.dates

    def test_from_record_drops_bad_entries(self, capsys):
        record = {
            'semesters': [
                {'id': 0, 'year': 2025, 'term': 1},
                {'id': 0, 'year': 2025, 'term': 2},
                {'id': 1, 'year': 2025, 'term': 5},
                {'year': 2025},
            ],
            'semester_subjects': {'0': [1, 2, 1], '9': [3]},
            'semester_dates': {'0': {'start': '2024-11-15', 'end': ''}, '9': {}},
        }
        plan = SemesterPlan.from_record(record)

        assert [s.id for s in plan.semesters] == [0]
        assert plan.semesters[0].class_number == 1
        assert plan.assignments == {0: [1, 2]}
        assert plan.get_dates(0) == (date(2024, 11, 15), None)
        assert '⚠️' in capsys.readouterr().out

    @pytest.mark.parametrize('extra', [
        {'semester_subjects': {'abc': [1]}},
        {'semester_subjects': {None: [1]}},
        {'semester_subjects': {'0': [None]}},
        {'semester_subjects': {'0': ['x']}},
        {'semester_subjects': {'0': 'oops'}},
        {'semester_subjects': ['0']},
        {'semester_dates': {'0': 'garbage'}},
        {'semester_dates': {'0': {'start': 20250101}}},
        {'semester_dates': {'abc': {}}},
        {'semester_dates': 'garbage'},
    ])
    def test_from_record_skips_malformed_keys_and_values(self, extra, capsys):
        record = {'semesters': [{'id': 0, 'year': 2025, 'term': 1}]}
        record.update(extra)

        plan = SemesterPlan.from_record(record)

        assert [s.id for s in plan.semesters] == [0]
        assert plan.assigned_ids() == []
        assert plan.get_dates(0) == (None, None)
        assert '⚠️' in capsys.readouterr().out

    def test_from_record_keeps_valid_entries_next_to_bad_ones(self, capsys):
        record = {
            'semesters': [{'id': 0, 'year': 2025, 'term': 1}, 'not-a-semester'],
            'semester_subjects': {'0': [1, None, '2', 'x'], 'abc': [3]},
            'semester_dates': {'0': {'start': '2024-11-15', 'end': 20250505}, '1x': {}},
        }

        plan = SemesterPlan.from_record(record)

        assert plan.assignments == {0: [1, 2]}
        assert plan.get_dates(0) == (None, None)
        assert capsys.readouterr().out.count('⚠️') >= 5

    def test_from_record_without_semesters_falls_back_to_default(self):
        plan = SemesterPlan.from_record({'semesters': []}, default_year=2030)

        assert [(s.year, s.term) for s in plan.semesters] == [(2030, 1), (2030, 2)]
