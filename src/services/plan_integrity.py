"""
저장된 수강 계획 무결성 검사
불러올 때 조용히 건너뛰는 이상 데이터를 찾아 보고한다 (수정하지 않음)
"""
from collections import defaultdict
from utils.cohort_utils import validate_class_start
from .semester_plan import MAX_SUBJECTS_PER_TERM, MAX_SUBJECTS_PER_YEAR


ISSUE_TYPES = (
    'empty_plan',
    'invalid_semester',
    'duplicate_semester_id',
    'duplicate_subject',
    'term_limit',
    'year_limit',
    'dangling_subject',
    'orphan_assignment_key',
    'orphan_date_key',
    'invalid_class_start',
)


def _int_or_none(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _entries(record, key):
    value = record.get(key)
    return value if isinstance(value, dict) else {}


def find_plan_issues(record, known_subject_ids, class_start=None):
    """
    수강 계획 레코드 하나를 검사

    Args:
        record: StudentPlan.to_record() 결과
        known_subject_ids: 이 학생에게 보이는 과목 id 집합
        class_start: 학생의 개강반 문자열 (형식 검사용, 없으면 생략)

    Returns:
        dict: {issue_type: [설명, ...]}, 문제가 없는 항목은 포함하지 않음
    """
    issues = defaultdict(list)

    semesters = {}
    for raw in record.get('semesters') or []:
        try:
            semester_id = int(raw['id'])
            year = int(raw['year'])
            term = int(raw['term'])
        except (KeyError, TypeError, ValueError):
            issues['invalid_semester'].append(repr(raw))
            continue
        if term not in (1, 2):
            issues['invalid_semester'].append(repr(raw))
            continue
        if semester_id in semesters:
            issues['duplicate_semester_id'].append(str(semester_id))
            continue
        semesters[semester_id] = (year, term)

    if not semesters:
        issues['empty_plan'].append('학기가 없습니다')

    seen = {}
    group_counts = defaultdict(int)
    year_counts = defaultdict(int)
    for key, subject_ids in _entries(record, 'semester_subjects').items():
        semester_id = _int_or_none(key)
        if semester_id not in semesters:
            issues['orphan_assignment_key'].append(str(key))
            continue
        year, term = semesters[semester_id]
        if not isinstance(subject_ids, (list, tuple)):
            subject_ids = []
        for raw_id in subject_ids:
            subject_id = _int_or_none(raw_id)
            if subject_id is None:
                issues['dangling_subject'].append(f"과목 {raw_id!r} (학기 {semester_id})")
                continue
            if subject_id in seen:
                issues['duplicate_subject'].append(
                    f"과목 {subject_id}: 학기 {seen[subject_id]} / {semester_id}"
                )
                continue
            seen[subject_id] = semester_id
            if subject_id not in known_subject_ids:
                issues['dangling_subject'].append(f"과목 {subject_id} (학기 {semester_id})")
            group_counts[(year, term)] += 1
            year_counts[year] += 1

    for (year, term), count in sorted(group_counts.items()):
        if count > MAX_SUBJECTS_PER_TERM:
            issues['term_limit'].append(f"{year}년 {term}학기: {count}/{MAX_SUBJECTS_PER_TERM}")
    for year, count in sorted(year_counts.items()):
        if count > MAX_SUBJECTS_PER_YEAR:
            issues['year_limit'].append(f"{year}년: {count}/{MAX_SUBJECTS_PER_YEAR}")

    for key in _entries(record, 'semester_dates'):
        if _int_or_none(key) not in semesters:
            issues['orphan_date_key'].append(str(key))

    if class_start and not validate_class_start(class_start):
        issues['invalid_class_start'].append(class_start)

    return dict(issues)
