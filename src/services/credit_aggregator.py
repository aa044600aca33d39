"""
학점 합산
학기 배정 과목 / 전적대 과목 / 자격증 / 독학사 → 분류별 학점 합계

합산 규칙:
  - 배정 과목, 전적대 과목: by_category[category] 에 더함
  - 독학사: by_category[credit_type] 에 더함 (self_study_total 은 참고용 합계)
  - 자격증: cert_total 에만 더함 (분류별 막대에는 반영되지 않음)
  - grand_total = sum(by_category) + cert_total
"""
import math
from collections import namedtuple
from models import SUBJECT_CATEGORIES


PracticumCount = namedtuple('PracticumCount', ['required', 'elective'])


class CreditTotals:
    """학점 합산 결과"""

    def __init__(self, by_category, cert_total, self_study_total):
        self.by_category = by_category
        self.cert_total = cert_total
        self.self_study_total = self_study_total

    @property
    def grand_total(self):
        return sum(self.by_category.values()) + self.cert_total

    def category_sum(self, categories):
        return sum(self.by_category.get(c, 0) for c in categories)

    def __eq__(self, other):
        if not isinstance(other, CreditTotals):
            return NotImplemented
        return (
            self.by_category == other.by_category
            and self.cert_total == other.cert_total
            and self.self_study_total == other.self_study_total
        )

    def __repr__(self):
        return (
            f"<CreditTotals {self.by_category} cert={self.cert_total} "
            f"self_study={self.self_study_total} total={self.grand_total}>"
        )


def resolve_assigned_subjects(assignments, subjects):
    """
    학기별 배정 과목 id → Subject 목록

    카탈로그에 없는 id 는 건너뛰고 경고만 출력한다.

    Args:
        assignments: {semester_id: [subject_id, ...]}
        subjects: Subject 목록 (공용 + 학생 소유)

    Returns:
        list: Subject 목록 (배정된 순서)
    """
    by_id = {s.id: s for s in subjects}
    resolved = []
    for semester_id, subject_ids in assignments.items():
        for subject_id in subject_ids:
            subject = by_id.get(subject_id)
            if subject is None:
                print(f"⚠️ 배정된 과목을 찾을 수 없음 (학기 {semester_id}, 과목 {subject_id})")
                continue
            resolved.append(subject)
    return resolved


def aggregate_credits(assigned_subjects, prior_subjects, certificates, self_study_entries):
    """
    모든 학점 출처를 분류별로 합산

    Args:
        assigned_subjects: 학기에 배정된 Subject 목록
        prior_subjects: PriorInstitutionSubject 목록
        certificates: CertificateCredit 목록
        self_study_entries: SelfStudyCredit 목록

    Returns:
        CreditTotals
    """
    by_category = {category: 0 for category in SUBJECT_CATEGORIES}

    for subject in assigned_subjects:
        by_category[subject.category] = by_category.get(subject.category, 0) + subject.credits

    for prior in prior_subjects:
        by_category[prior.category] = by_category.get(prior.category, 0) + prior.credits

    self_study_total = 0
    for entry in self_study_entries:
        by_category[entry.credit_type] = by_category.get(entry.credit_type, 0) + entry.credits
        self_study_total += entry.credits

    cert_total = sum(c.credits for c in certificates)

    return CreditTotals(by_category, cert_total, self_study_total)


def count_practicum(assigned_subjects, prior_subjects):
    """
    실습 과정 이수 요건 카운트

    전적대 전공 과목은 선택 과목 1개로 인정한다 (필수로는 인정하지 않음).

    Returns:
        PracticumCount: (required, elective)
    """
    required = sum(1 for s in assigned_subjects if s.subject_type == '필수')
    elective = sum(1 for s in assigned_subjects if s.subject_type == '선택')
    elective += sum(1 for p in prior_subjects if p.category == '전공')
    return PracticumCount(required, elective)


def progress_percent(earned, target):
    """
    진행률 (%), 0 ~ 100 사이, 소수점은 반올림

    Examples:
        >>> progress_percent(90, 51)
        100
        >>> progress_percent(20, 80)
        25
    """
    if target <= 0:
        return 100
    percent = int(math.floor(earned * 100 / target + 0.5))
    return max(0, min(percent, 100))
