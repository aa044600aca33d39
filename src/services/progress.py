"""
진행률 계산
이수 요건 프로필 + 학점 합산 결과 → 화면 표시용 진행 현황
"""
from collections import namedtuple
from .credit_aggregator import progress_percent


CategoryProgress = namedtuple('CategoryProgress', ['label', 'earned', 'target', 'percent'])
PracticumLine = namedtuple('PracticumLine', ['label', 'count', 'target', 'done'])


class ProgressReport:
    """진행 현황"""

    def __init__(self, profile, category_bars, total_credits, subject_count, practicum=None):
        self.profile = profile
        self.category_bars = category_bars
        self.total_credits = total_credits
        self.subject_count = subject_count
        self.practicum = practicum

    @property
    def total_target(self):
        return self.profile.total_target

    @property
    def subject_count_target(self):
        return self.profile.subject_count_target

    @property
    def percent(self):
        return progress_percent(self.total_credits, self.profile.total_target)

    @property
    def is_complete(self):
        return self.total_credits >= self.profile.total_target

    def to_dict(self):
        return {
            'profile': self.profile.name,
            'is_extended_program': self.profile.is_extended_program,
            'categories': [bar._asdict() for bar in self.category_bars],
            'total_credits': self.total_credits,
            'total_target': self.total_target,
            'percent': self.percent,
            'subject_count': self.subject_count,
            'subject_count_target': self.subject_count_target,
            'practicum': [line._asdict() for line in self.practicum] if self.practicum else None,
        }

    def format_lines(self):
        """콘솔 출력용 요약"""
        lines = []
        for bar in self.category_bars:
            lines.append(f"  {bar.label:4s} {bar.earned:3d} / {bar.target:3d}학점 ({bar.percent}%)")
        lines.append(f"  총 학점 {self.total_credits} / {self.total_target} ({self.percent}%)")
        if self.subject_count_target:
            lines.append(f"  총 과목 {self.subject_count} / {self.subject_count_target}개")
        if self.practicum:
            for line in self.practicum:
                mark = '✓' if line.done else ' '
                lines.append(f"  [{mark}] {line.label} {line.count} / {line.target}개")
        return lines


def project_progress(profile, totals, subject_count=0, practicum_count=None):
    """
    진행 현황 계산

    Args:
        profile: RequirementProfile
        totals: CreditTotals
        subject_count: 배정 과목 수 + 전적대 과목 수
        practicum_count: PracticumCount (실습 프로필일 때만 사용)

    Returns:
        ProgressReport
    """
    bars = []
    for target in profile.category_targets:
        earned = totals.category_sum(target.categories)
        bars.append(CategoryProgress(
            target.label, earned, target.target, progress_percent(earned, target.target)
        ))

    practicum = None
    if profile.practicum is not None:
        required = practicum_count.required if practicum_count else 0
        elective = practicum_count.elective if practicum_count else 0
        practicum = [
            PracticumLine('필수과목', required, profile.practicum.required,
                          required >= profile.practicum.required),
            PracticumLine('선택과목', elective, profile.practicum.elective,
                          elective >= profile.practicum.elective),
        ]

    return ProgressReport(profile, bars, totals.grand_total, subject_count, practicum)
