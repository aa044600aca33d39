#!/usr/bin/env python3
"""
수강 계획 무결성 검사 스크립트
저장된 모든 학생 계획의 이상 데이터(중복 배정, 한도 초과, 고아 키, 개강반 형식 등)를 찾는다
"""
import sys
import os
import argparse
from collections import defaultdict

# src 디렉터리를 Python 경로에 추가
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from database import Database
from repositories import PlanRepository, StudentRepository, SubjectRepository
from services.plan_integrity import ISSUE_TYPES, find_plan_issues


ISSUE_TITLES = {
    'empty_plan': '학기가 없는 계획',
    'invalid_semester': '잘못된 학기 항목',
    'duplicate_semester_id': '중복된 학기 id',
    'duplicate_subject': '여러 학기에 중복 배정된 과목',
    'term_limit': '반기 수강 한도 초과',
    'year_limit': '연간 수강 한도 초과',
    'dangling_subject': '존재하지 않는 과목',
    'orphan_assignment_key': '없는 학기의 배정 목록',
    'orphan_date_key': '없는 학기의 기간',
    'invalid_class_start': '형식이 잘못된 개강반',
}


class PlanIntegrityChecker:
    """수강 계획 무결성 검사기"""

    def __init__(self, session):
        self.session = session
        self.plan_repo = PlanRepository(session)
        self.student_repo = StudentRepository(session)
        self.subject_repo = SubjectRepository(session)

        # issue_type -> [(학생 이름, 설명), ...]
        self.issues = defaultdict(list)
        self.checked = 0

    def run(self, student_ids=None):
        """
        검사 실행

        Args:
            student_ids: 지정한 학생만 검사 (None 이면 전체)

        Returns:
            bool: 문제가 없으면 True
        """
        print(f"\n{'=' * 70}")
        print("수강 계획 무결성 검사")
        print(f"{'=' * 70}\n")

        print("단계 1: 저장된 계획 조회...")
        print("-" * 70)
        plans = self.plan_repo.get_all()
        if student_ids:
            plans = [p for p in plans if p.student_id in student_ids]
        print(f"계획 {len(plans)}건")

        print("\n단계 2: 계획별 검사...")
        print("-" * 70)
        for plan in plans:
            self._check_plan(plan)

        print("\n단계 3: 요약")
        print("-" * 70)
        return self._generate_summary()

    def _check_plan(self, plan):
        student = self.student_repo.get_by_id(plan.student_id)
        name = student.name if student else plan.student_id
        known_ids = {s.id for s in self.subject_repo.list_for_student(plan.student_id)}

        found = find_plan_issues(
            plan.to_record(), known_ids,
            class_start=student.class_start if student else None,
        )
        self.checked += 1
        if not found:
            print(f"  ✓ {name}")
            return

        total = sum(len(v) for v in found.values())
        print(f"  ✗ {name}: 문제 {total}건")
        for issue_type, details in found.items():
            for detail in details:
                self.issues[issue_type].append((name, detail))

    def _generate_summary(self):
        print(f"\n{'=' * 70}")
        print(f"{'최종 보고':^70}")
        print(f"{'=' * 70}\n")

        has_issues = False
        for index, issue_type in enumerate(ISSUE_TYPES, 1):
            entries = self.issues.get(issue_type)
            if not entries:
                continue
            has_issues = True
            print(f"【문제 {index}】{ISSUE_TITLES[issue_type]} ({len(entries)}건)")
            print("-" * 70)
            for name, detail in entries[:20]:
                print(f"  • {name}: {detail}")
            if len(entries) > 20:
                print(f"  ... 외 {len(entries) - 20}건")
            print()

        print("=" * 70)
        if has_issues:
            print(f"{'✗ 이상 데이터가 있습니다, 위 항목을 확인하세요':^70}")
        else:
            print(f"{'✓ 검사한 계획 ' + str(self.checked) + '건 모두 정상':^70}")
        print("=" * 70)
        return not has_issues


def parse_args(argv=None):
    """명령행 인자 파싱"""
    parser = argparse.ArgumentParser(
        description='저장된 수강 계획의 무결성 검사'
    )
    parser.add_argument(
        '--students',
        type=str,
        nargs='+',
        help='선택: 지정한 학생 id 만 검사'
    )
    return parser.parse_args(argv)


def main(argv=None):
    """메인 함수"""
    args = parse_args(argv)

    db = Database()
    session = db.get_session()
    try:
        checker = PlanIntegrityChecker(session)
        ok = checker.run(student_ids=args.students)
    finally:
        session.close()
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
