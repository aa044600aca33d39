"""
저장된 수강 계획 무결성 검사 테스트
"""
from services.plan_integrity import find_plan_issues
from services.semester_plan import SemesterPlan


class TestFindPlanIssues:

    def test_clean_plan(self):
        plan = SemesterPlan.default(2025)
        plan.assign_subject(1, 0)
        plan.assign_subject(2, 1)

        assert find_plan_issues(plan.to_record(), {1, 2}) == {}

    def test_reports_every_issue_type(self):
        record = {
            'semesters': [
                {'id': 0, 'year': 2025, 'term': 1},
                {'id': 1, 'year': 2025, 'term': 2},
                {'id': 1, 'year': 2026, 'term': 1},
                {'id': 2, 'year': 2025, 'term': 3},
            ],
            'semester_subjects': {
                '0': list(range(1, 10)),
                '1': [9] + list(range(10, 16)),
                '7': [100],
            },
            'semester_dates': {'0': {}, '8': {}},
        }

        issues = find_plan_issues(record, set(range(1, 15)))

        assert issues['duplicate_semester_id'] == ['1']
        assert len(issues['invalid_semester']) == 1
        assert issues['duplicate_subject'] == ['과목 9: 학기 0 / 1']
        assert issues['term_limit'] == ['2025년 1학기: 9/8']
        assert issues['year_limit'] == ['2025년: 15/14']
        assert issues['dangling_subject'] == ['과목 15 (학기 1)']
        assert issues['orphan_assignment_key'] == ['7']
        assert issues['orphan_date_key'] == ['8']
        assert 'empty_plan' not in issues

    def test_empty_plan(self):
        issues = find_plan_issues({'semesters': []}, set())

        assert list(issues) == ['empty_plan']

    def test_malformed_keys_are_reported_not_raised(self):
        record = {
            'semesters': [{'id': 0, 'year': 2025, 'term': 1}, 'broken'],
            'semester_subjects': {'abc': [1], '0': [None, 'x', 1], '1': 'oops'},
            'semester_dates': {'zz': {}, '0': 'garbage'},
        }

        issues = find_plan_issues(record, {1})

        assert issues['orphan_assignment_key'] == ['abc', '1']
        assert issues['orphan_date_key'] == ['zz']
        assert issues['dangling_subject'] == ["과목 None (학기 0)", "과목 'x' (학기 0)"]
        assert issues['invalid_semester'] == ["'broken'"]

    def test_invalid_class_start(self):
        record = SemesterPlan.default(2025).to_record()

        assert find_plan_issues(record, set(), class_start='2025년 1학기 1기') == {}
        issues = find_plan_issues(record, set(), class_start='2025년 1학기 1기,2025년')
        assert issues == {'invalid_class_start': ['2025년 1학기 1기,2025년']}
