#!/usr/bin/env python3
"""
프리셋 데이터 가져오기 스크립트
YAML 파일에서 구법/신법 과목 프리셋과 독학사 프리셋을 읽어 데이터베이스에 저장

사용법:
  python scripts/import_presets.py --all
  python scripts/import_presets.py --files subject_presets
  python scripts/import_presets.py --validate                   # 모든 YAML 검사
  python scripts/import_presets.py --validate dokaksa_presets   # 지정한 파일만 검사
"""
import sys
import os
import argparse
import glob

# src 디렉터리를 Python 경로에 추가
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from database import Database
from services import CatalogService

# YAML 파일 디렉터리
DATA_DIR = os.path.join(os.path.dirname(__file__), '..', 'data', 'presets')


def find_yaml_files(names=None):
    """
    YAML 파일 찾기

    Args:
        names: 파일 이름 목록 (확장자 제외), 예: ["subject_presets"]
               None 이면 전체

    Returns:
        list: [(name, yaml_path), ...]
    """
    if names:
        files = []
        for name in names:
            yaml_path = os.path.join(DATA_DIR, f"{name}.yml")
            if os.path.exists(yaml_path):
                files.append((name, yaml_path))
            else:
                print(f"⚠️ YAML 파일을 찾을 수 없습니다: {yaml_path}")
        return files

    pattern = os.path.join(DATA_DIR, '*.yml')
    return [
        (os.path.splitext(os.path.basename(path))[0], path)
        for path in sorted(glob.glob(pattern))
    ]


def parse_args(argv=None):
    """명령행 인자 파싱"""
    parser = argparse.ArgumentParser(
        description='프리셋 데이터 가져오기 (YAML 파일)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
사용 예:
  python scripts/import_presets.py --all                        # 전체 가져오기
  python scripts/import_presets.py --files subject_presets      # 지정한 파일만
  python scripts/import_presets.py --validate                   # 전체 검사 (DB 불필요)
  python scripts/import_presets.py --validate dokaksa_presets   # 지정한 파일 검사
        """
    )

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        '--files',
        nargs='+',
        metavar='NAME',
        help='가져올 파일 이름 (확장자 제외)'
    )
    group.add_argument(
        '--all',
        action='store_true',
        help='data/presets/ 디렉터리의 모든 YAML 파일 가져오기'
    )
    group.add_argument(
        '--validate',
        nargs='*',
        metavar='NAME',
        help='YAML 형식만 검사하고 DB 에는 쓰지 않음. 이름을 생략하면 전체 검사'
    )

    return parser.parse_args(argv)


def run_validate(names):
    """
    schema 검사만 수행 (DB 연결 없음)

    Returns:
        bool: 모든 파일이 통과하면 True
    """
    print("=" * 60)
    print("YAML 파일 Schema 검사")
    print("=" * 60)

    yaml_files = find_yaml_files(names if names else None)
    if not yaml_files:
        print("YAML 파일이 없습니다")
        return False

    print(f"{len(yaml_files)}개 파일 검사:\n")

    all_passed = True
    for name, yaml_path in yaml_files:
        errors = CatalogService.validate_yaml(yaml_path)
        if errors:
            all_passed = False
            print(f"✗ {name}")
            for msg in errors:
                print(msg)
        else:
            print(f"✓ {name}")

    print()
    if all_passed:
        print("모든 파일 검사 통과 ✓")
    else:
        print("오류가 있는 파일을 수정한 뒤 다시 가져오세요 ✗")
    return all_passed


def main(argv=None):
    """메인 함수"""
    args = parse_args(argv)

    # --validate 모드: DB 불필요
    if args.validate is not None:
        return 0 if run_validate(args.validate) else 1

    print("=" * 60)
    print("프리셋 데이터 가져오기")
    print("=" * 60)

    # 1. YAML 파일 찾기
    if args.all:
        yaml_files = find_yaml_files()
        print("모드: 전체 가져오기")
    else:
        yaml_files = find_yaml_files(args.files)
        print(f"모드: 지정 파일 {args.files}")

    if not yaml_files:
        print("\nYAML 파일이 없습니다")
        return 1

    print(f"YAML 파일 {len(yaml_files)}개:")
    for name, path in yaml_files:
        print(f"  • {name}: {path}")
    print()

    # 2. 데이터베이스 초기화
    print("데이터베이스 연결 초기화...")
    db = Database()
    if not db.test_connection():
        print("\n데이터베이스 연결 실패, .env 설정을 확인하세요")
        return 1

    if not db.create_tables():
        print("\n테이블 생성 실패, 프로그램을 종료합니다")
        return 1
    print()

    # 3. 파일별 가져오기
    session = db.get_session()
    service = CatalogService(session)

    success_count = 0
    fail_count = 0

    try:
        for idx, (name, yaml_path) in enumerate(yaml_files, 1):
            print(f"\n[{idx}/{len(yaml_files)}] {name} 가져오기")
            print("-" * 60)

            try:
                stats = service.import_presets_from_yaml(yaml_path)
            except ValueError as e:
                print(f"✗ {name} 가져오기 실패: {e}")
                fail_count += 1
                continue

            if stats['failed_groups']:
                print(f"✗ 실패한 그룹: {stats['failed_groups']}")
                fail_count += 1
            else:
                success_count += 1
    finally:
        session.close()

    # 4. 요약
    print("\n" + "=" * 60)
    print(f"가져오기 완료! 성공: {success_count}, 실패: {fail_count}")
    print("=" * 60)
    return 0 if fail_count == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
