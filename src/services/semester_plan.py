"""
학기별 수강 계획 (기수 포함)

같은 (연도, 학기) 를 공유하는 학기들은 병행 기수로 하나의 '반기 그룹' 을 이룬다.
배정 과목 목록과 학기 기간은 기수(학기 레코드)마다 따로 관리하지만,
수강 한도는 그룹/연도 단위로 검사한다.

수강 한도 (배정 시점에만 검사, 불러온 데이터에는 소급 적용하지 않음):
  - 반기 그룹 합계 ≤ 8과목
  - 연도 합계 (1학기 + 2학기) ≤ 14과목
  - 한 과목은 계획 전체에서 한 번만 배정 가능
"""
from datetime import date
from utils.semester_utils import (
    validate_term, default_term_dates, term_label, parse_iso_date, format_iso_date,
)
from utils.cohort_utils import Cohort


MAX_SUBJECTS_PER_TERM = 8
MAX_SUBJECTS_PER_YEAR = 14


def _mapping(record, key):
    """레코드의 {학기 id: 값} 항목, dict 가 아니면 경고 후 빈 dict"""
    value = record.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        print(f"⚠️ 잘못된 {key} 데이터, 건너뜀: {value!r}")
        return {}
    return value


class PlanRuleViolation(ValueError):
    """수강 계획 규칙 위반 (상태는 변경되지 않음)"""

    def __init__(self, rule, message, current=None, limit=None):
        super().__init__(message)
        self.rule = rule          # "term_limit" / "year_limit" / "last_semester"
        self.current = current
        self.limit = limit


class Semester:
    """학기(기수) 하나"""

    def __init__(self, id, year, term, class_number=1, label='', months=''):
        year, term = validate_term(year, term)
        if int(class_number) < 1:
            raise ValueError(f"Invalid class number: {class_number}")
        self.id = int(id)
        self.year = year
        self.term = term
        self.class_number = int(class_number)
        self.label = label or ''
        self.months = months or ''

    @property
    def key(self):
        """반기 그룹 키 (year, term)"""
        return (self.year, self.term)

    @property
    def cohort(self):
        return Cohort(self.year, self.term, self.class_number)

    @property
    def display_name(self):
        return term_label(self.year, self.term, self.class_number)

    def to_dict(self):
        return {
            'id': self.id,
            'year': self.year,
            'term': self.term,
            'class_number': self.class_number,
            'label': self.label,
            'months': self.months,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            year=data['year'],
            term=data['term'],
            class_number=data.get('class_number') or 1,
            label=data.get('label', ''),
            months=data.get('months', ''),
        )

    def __eq__(self, other):
        if not isinstance(other, Semester):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"<Semester {self.id}: {self.display_name}>"


class SemesterPlan:
    """학생 한 명의 학기 / 배정 과목 / 기간 상태"""

    def __init__(self, semesters, assignments=None, dates=None):
        """
        Args:
            semesters: Semester 목록 (최소 1개)
            assignments: {semester_id: [subject_id, ...]}
            dates: {semester_id: {'start': date, 'end': date}}
        """
        if not semesters:
            raise ValueError("수강 계획에는 최소 1개의 학기가 필요합니다")
        self.semesters = list(semesters)
        self.assignments = {sid: list(ids) for sid, ids in (assignments or {}).items()}
        self.dates = {sid: dict(d) for sid, d in (dates or {}).items()}

    # ── 생성 ────────────────────────────────────────────────

    @classmethod
    def default(cls, year=None):
        """기본 계획: 해당 연도 1학기 + 2학기"""
        if year is None:
            year = date.today().year
        plan = cls([Semester(0, year, 1), Semester(1, year, 2)])
        for semester in plan.semesters:
            plan._set_default_dates(semester)
        return plan

    @classmethod
    def from_cohorts(cls, cohorts):
        """
        개강반 목록으로 새 계획 생성 (저장된 계획이 없을 때 기본 학기를 대체)

        Args:
            cohorts: Cohort 목록 (비어 있으면 안 됨)
        """
        semesters = [
            Semester(index, c.year, c.term, c.class_number)
            for index, c in enumerate(cohorts)
        ]
        plan = cls(semesters)
        for semester in plan.semesters:
            plan._set_default_dates(semester)
        return plan

    @classmethod
    def from_record(cls, record, default_year=None):
        """
        저장된 레코드(JSON) 에서 복원

        잘못된 학기 항목, 존재하지 않는 학기를 가리키는 배정/기간,
        중복 배정된 과목은 건너뛰고 경고를 출력한다.
        학기가 하나도 남지 않으면 기본 계획을 반환한다.
        """
        semesters = []
        seen_ids = set()
        for raw in record.get('semesters') or []:
            try:
                semester = Semester.from_dict(raw)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                print(f"⚠️ 잘못된 학기 데이터, 건너뜀: {raw!r} ({e})")
                continue
            if semester.id in seen_ids:
                print(f"⚠️ 중복된 학기 id, 건너뜀: {semester.id}")
                continue
            seen_ids.add(semester.id)
            semesters.append(semester)

        if not semesters:
            return cls.default(default_year)

        assignments = {}
        used = set()
        for key, subject_ids in _mapping(record, 'semester_subjects').items():
            try:
                semester_id = int(key)
            except (TypeError, ValueError):
                print(f"⚠️ 잘못된 학기 키의 배정 목록, 건너뜀: {key!r}")
                continue
            if semester_id not in seen_ids:
                print(f"⚠️ 존재하지 않는 학기의 배정 목록, 건너뜀: {semester_id}")
                continue
            if not isinstance(subject_ids, (list, tuple)):
                if subject_ids:
                    print(f"⚠️ 잘못된 배정 목록, 건너뜀: 학기 {semester_id} ({subject_ids!r})")
                subject_ids = []
            kept = []
            for raw_id in subject_ids:
                try:
                    subject_id = int(raw_id)
                except (TypeError, ValueError):
                    print(f"⚠️ 잘못된 과목 id, 건너뜀: {raw_id!r} (학기 {semester_id})")
                    continue
                if subject_id in used:
                    print(f"⚠️ 중복 배정된 과목, 건너뜀: {subject_id} (학기 {semester_id})")
                    continue
                used.add(subject_id)
                kept.append(subject_id)
            assignments[semester_id] = kept

        dates = {}
        for key, value in _mapping(record, 'semester_dates').items():
            try:
                semester_id = int(key)
            except (TypeError, ValueError):
                print(f"⚠️ 잘못된 학기 키의 기간, 건너뜀: {key!r}")
                continue
            if semester_id not in seen_ids:
                continue
            try:
                dates[semester_id] = {
                    'start': parse_iso_date((value or {}).get('start')),
                    'end': parse_iso_date((value or {}).get('end')),
                }
            except (AttributeError, ValueError) as e:
                print(f"⚠️ 잘못된 학기 기간, 건너뜀: 학기 {semester_id} ({e})")

        return cls(semesters, assignments, dates)

    def to_record(self):
        """저장용 레코드(JSON 호환), 현재 상태의 사본"""
        return {
            'semesters': [s.to_dict() for s in self.semesters],
            'semester_subjects': {
                str(sid): list(ids) for sid, ids in self.assignments.items()
            },
            'semester_dates': {
                str(sid): {
                    'start': format_iso_date(d.get('start')),
                    'end': format_iso_date(d.get('end')),
                }
                for sid, d in self.dates.items()
            },
        }

    # ── 조회 ────────────────────────────────────────────────

    def get_semester(self, semester_id):
        """
        Raises:
            ValueError: 존재하지 않는 학기
        """
        for semester in self.semesters:
            if semester.id == semester_id:
                return semester
        raise ValueError(f"존재하지 않는 학기입니다: {semester_id}")

    def has_semester(self, semester_id):
        return any(s.id == semester_id for s in self.semesters)

    def group(self, year, term):
        """같은 (연도, 학기) 의 기수 목록 (기수 순)"""
        members = [s for s in self.semesters if s.key == (year, term)]
        return sorted(members, key=lambda s: (s.class_number, s.id))

    def group_of(self, semester_id):
        semester = self.get_semester(semester_id)
        return self.group(semester.year, semester.term)

    def groups(self):
        """
        반기 그룹 목록 (연도/학기 순)

        Returns:
            list: [((year, term), [Semester, ...]), ...]
        """
        keys = sorted({s.key for s in self.semesters})
        return [(key, self.group(*key)) for key in keys]

    def subjects_in(self, semester_id):
        return list(self.assignments.get(semester_id, []))

    def group_count(self, year, term):
        return sum(len(self.assignments.get(s.id, [])) for s in self.group(year, term))

    def year_count(self, year):
        return sum(
            len(self.assignments.get(s.id, []))
            for s in self.semesters if s.year == year
        )

    def assigned_ids(self):
        return [subject_id for ids in self.assignments.values() for subject_id in ids]

    def is_assigned(self, subject_id):
        return any(subject_id in ids for ids in self.assignments.values())

    def find_semester_of(self, subject_id):
        """과목이 배정된 학기 id (없으면 None)"""
        for semester_id, ids in self.assignments.items():
            if subject_id in ids:
                return semester_id
        return None

    def has_cohort(self, cohort):
        return any(s.cohort == cohort for s in self.semesters)

    def get_dates(self, semester_id):
        """
        Returns:
            tuple: (start, end), 없으면 (None, None)
        """
        entry = self.dates.get(semester_id) or {}
        return (entry.get('start'), entry.get('end'))

    # ── 학기 추가/삭제 ──────────────────────────────────────

    def _next_semester_id(self):
        return max(s.id for s in self.semesters) + 1

    def _set_default_dates(self, semester):
        start, end = default_term_dates(semester.year, semester.term)
        self.dates[semester.id] = {'start': start, 'end': end}

    def add_semester(self, year, term, class_number=None):
        """
        학기(기수) 추가

        같은 (연도, 학기) 에 기수가 이미 있으면 다음 기수 번호를 붙인다.
        기간은 학기 기본 기간으로 채운다.

        Returns:
            Semester: 새로 추가된 학기
        """
        year, term = validate_term(year, term)
        if class_number is None:
            existing = self.group(year, term)
            class_number = max((s.class_number for s in existing), default=0) + 1

        semester = Semester(self._next_semester_id(), year, term, class_number)
        self.semesters.append(semester)
        self._set_default_dates(semester)
        return semester

    def add_cohort(self, semester_id):
        """지정한 학기와 같은 (연도, 학기) 에 기수 추가"""
        current = self.get_semester(semester_id)
        return self.add_semester(current.year, current.term)

    def delete_semester(self, semester_id, selected_id=None):
        """
        학기 삭제 (배정 목록/기간 함께 삭제)

        Args:
            semester_id: 삭제할 학기 id
            selected_id: 현재 선택된 학기 id

        Returns:
            int: 삭제 후 선택할 학기 id
                 - 삭제한 학기가 선택 중이었다면 같은 그룹의 다른 기수, 없으면 마지막 학기
                 - 아니라면 selected_id 그대로

        Raises:
            PlanRuleViolation: 마지막 남은 학기를 삭제하려는 경우
            ValueError: 존재하지 않는 학기
        """
        target = self.get_semester(semester_id)
        if len(self.semesters) <= 1:
            raise PlanRuleViolation(
                'last_semester',
                "최소 1개의 학기는 남아 있어야 합니다.",
                current=len(self.semesters),
                limit=1,
            )

        self.semesters = [s for s in self.semesters if s.id != semester_id]
        self.assignments.pop(semester_id, None)
        self.dates.pop(semester_id, None)

        if selected_id is not None and selected_id != semester_id:
            return selected_id

        siblings = self.group(target.year, target.term)
        if siblings:
            return siblings[0].id
        return self.semesters[-1].id

    # ── 과목 배정 ───────────────────────────────────────────

    def assign_subject(self, subject_id, semester_id):
        """
        과목을 학기에 배정

        Returns:
            bool: 배정되었으면 True, 이미 배정된 과목이면 False (변경 없음)

        Raises:
            PlanRuleViolation: 반기/연도 수강 한도 초과
            ValueError: 존재하지 않는 학기
        """
        semester = self.get_semester(semester_id)
        if self.is_assigned(subject_id):
            return False

        term_count = self.group_count(semester.year, semester.term)
        if term_count >= MAX_SUBJECTS_PER_TERM:
            raise PlanRuleViolation(
                'term_limit',
                f"한 학기에 최대 {MAX_SUBJECTS_PER_TERM}과목까지 수강 가능합니다. "
                f"({term_label(semester.year, semester.term)}: {term_count}/{MAX_SUBJECTS_PER_TERM})",
                current=term_count,
                limit=MAX_SUBJECTS_PER_TERM,
            )

        year_count = self.year_count(semester.year)
        if year_count >= MAX_SUBJECTS_PER_YEAR:
            raise PlanRuleViolation(
                'year_limit',
                f"{semester.year}년도에 최대 {MAX_SUBJECTS_PER_YEAR}과목까지 수강 가능합니다. "
                f"(1학기 + 2학기 합산 기준: {year_count}/{MAX_SUBJECTS_PER_YEAR})",
                current=year_count,
                limit=MAX_SUBJECTS_PER_YEAR,
            )

        self.assignments.setdefault(semester_id, []).append(subject_id)
        return True

    def unassign_subject(self, subject_id, semester_id):
        """
        배정 취소, semester_id 가 속한 반기 그룹 안에서만 찾는다

        Returns:
            bool: 취소되었으면 True
        """
        for semester in self.group_of(semester_id):
            ids = self.assignments.get(semester.id, [])
            if subject_id in ids:
                self.assignments[semester.id] = [i for i in ids if i != subject_id]
                return True
        return False

    def remove_subject(self, subject_id):
        """삭제된 과목을 모든 학기에서 제거"""
        removed = False
        for semester_id, ids in self.assignments.items():
            if subject_id in ids:
                self.assignments[semester_id] = [i for i in ids if i != subject_id]
                removed = True
        return removed

    # ── 기간 ────────────────────────────────────────────────

    def set_dates(self, semester_id, start=None, end=None):
        """
        학기 기간 수정 (None 인 값은 그대로 둠)

        Args:
            start, end: date 또는 'YYYY-MM-DD'
        """
        self.get_semester(semester_id)
        entry = self.dates.setdefault(semester_id, {'start': None, 'end': None})
        if start is not None:
            entry['start'] = parse_iso_date(start)
        if end is not None:
            entry['end'] = parse_iso_date(end)

    # ── 개강반 동기화 ───────────────────────────────────────

    def merge_cohorts(self, cohorts):
        """
        개강반 목록 중 계획에 없는 (연도, 학기, 기수) 만 학기로 추가

        같은 목록으로 여러 번 호출해도 결과가 같다.

        Returns:
            list[Semester]: 새로 추가된 학기
        """
        added = []
        for cohort in cohorts:
            if self.has_cohort(cohort):
                continue
            added.append(self.add_semester(cohort.year, cohort.term, cohort.class_number))
        return added

    def __repr__(self):
        return f"<SemesterPlan semesters={len(self.semesters)} assigned={len(self.assigned_ids())}>"
