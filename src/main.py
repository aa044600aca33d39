"""
메인 프로그램
학생 수강 계획 점검용 명령행 도구
"""
import argparse
from database import Database
from services import PlanService
from utils.semester_utils import format_iso_date


def parse_args(argv=None):
    """명령행 인자 파싱"""
    parser = argparse.ArgumentParser(
        description='사회복지사 학점 플랜 관리 도구',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
사용 예:
  python src/main.py init-db                          # 테이블 생성
  python src/main.py report --student <학생 id>       # 이수 현황 출력
  python src/main.py sync-cohorts --student <학생 id>  # 개강반 → 학기 동기화
        """
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('init-db', help='테이블 생성 (없는 테이블만)')

    report = subparsers.add_parser('report', help='학생 이수 현황 출력 (저장하지 않음)')
    report.add_argument('--student', required=True, help='학생 id')

    sync = subparsers.add_parser('sync-cohorts', help='개강반 문자열로 빠진 학기 추가')
    sync.add_argument('--student', required=True, help='학생 id')
    sync.add_argument('--actor', default=None, help='활동 로그에 남길 관리자 이름')

    return parser.parse_args(argv)


def print_report(service):
    """이수 현황 출력"""
    student = service.student
    profile = service.profile
    report = service.progress()

    print(f"학생: {student.name} ({student.education_level or '학력 미입력'})")
    print(f"과정: {student.course_name or '과정 미배정'}")
    print(f"희망학위: {student.desired_degree or '-'}")
    print(f"적용 요건: {profile.name} (총 {profile.total_target}학점)")
    print()

    print("학기별 수강 계획")
    print("-" * 60)
    for (year, term), cohorts in service.plan.groups():
        group_count = service.plan.group_count(year, term)
        print(f"{year}년 {term}학기  ({group_count} / 8과목)")
        for semester in cohorts:
            start, end = service.plan.get_dates(semester.id)
            print(f"  {semester.class_number}기  {format_iso_date(start)} ~ {format_iso_date(end)}")
            for subject_id in service.plan.subjects_in(semester.id):
                subject = service.get_subject(subject_id)
                if subject is None:
                    print(f"    ⚠️ 찾을 수 없는 과목 {subject_id}")
                    continue
                print(f"    • {subject.name} ({subject.category} {subject.credits}학점)")
    print()

    print("이수 현황")
    print("-" * 60)
    totals = service.credit_totals()
    if profile.is_extended_program:
        print(f"  자격증 {totals.cert_total}학점 / 독학사 {totals.self_study_total}학점")
    for line in report.format_lines():
        print(line)


def main(argv=None):
    """메인 함수"""
    args = parse_args(argv)

    print("=" * 60)
    print("사회복지사 학점 플랜 관리 도구")
    print("=" * 60)

    db = Database()
    if not db.test_connection():
        print("\n데이터베이스 연결 실패, .env 설정을 확인하세요")
        return 1

    if args.command == 'init-db':
        return 0 if db.create_tables() else 1

    session = db.get_session()
    try:
        service = PlanService(session, args.student, actor_name=getattr(args, 'actor', None))
        if not service.load():
            return 1

        if args.command == 'report':
            # 조회 전용: 개강반 병합 결과는 출력에만 반영하고 저장하지 않음
            service.autosave.cancel()
            print_report(service)
        elif args.command == 'sync-cohorts':
            added = service.added_on_load + service.sync_cohorts()
            if added:
                print(f"✓ 학기 {len(added)}개 추가: {', '.join(s.display_name for s in added)}")
            else:
                print("추가할 학기가 없습니다")
            if not service.save():
                return 1
        # 대기 중인 자동 저장 반영
        service.flush()
    finally:
        session.close()

    print("\n" + "=" * 60)
    print("완료!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
