"""
과목 카탈로그 서비스
- YAML 프리셋 파일 검증/가져오기
- 학생 과목 목록 자동 채우기 (목록이 비어 있을 때 구법/신법 프리셋 사용)
- 독학사 학점 분류 판정
"""
import json
import os
import re
import yaml
from jsonschema import Draft7Validator
from models import Subject, SubjectPreset, SelfStudyPreset
from repositories import SubjectRepository, PresetRepository


_SCHEMA_PATH = os.path.join(
    os.path.dirname(__file__),       # src/services/
    '..', '..', 'data', 'presets', 'schema.json'
)

_SCHEMA = None  # 처음 사용할 때 로드


def _load_schema():
    """JSON Schema 로드 (모듈 단위로 한 번만 읽음)"""
    path = os.path.normpath(_SCHEMA_PATH)
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


# ── 독학사 전공 판정 ────────────────────────────────────────

def exact_major_match(preset_category, major):
    """학생 전공과 프리셋 분류가 글자 그대로 같은지"""
    return bool(major) and preset_category == major


def normalized_major_match(preset_category, major):
    """공백/대소문자 차이를 무시하고 비교"""
    if not major or not preset_category:
        return False

    def _norm(value):
        return re.sub(r'\s+', '', value).casefold()

    return _norm(preset_category) == _norm(major)


MAJOR_MATCHERS = {
    'exact': exact_major_match,
    'normalized': normalized_major_match,
}


def get_major_matcher(mode):
    """
    Args:
        mode: "exact" / "normalized"

    Raises:
        ValueError: 알 수 없는 방식
    """
    try:
        return MAJOR_MATCHERS[mode]
    except KeyError:
        raise ValueError(
            f"Invalid SELF_STUDY_MAJOR_MATCH: {mode}. Must be one of: {', '.join(MAJOR_MATCHERS)}"
        )


def classify_self_study_credit(stage, preset_categories, major, matcher=exact_major_match):
    """
    독학사 학점 분류 판정

    규칙:
    - 1단계 → 교양
    - 2단계 이상 → 프리셋 분류 중 하나가 학생 전공과 같으면 전공, 아니면 일반

    전공 비교는 기본적으로 정확히 일치해야 한다.
    (오타나 다른 표기는 일반으로 분류되므로 필요하면 normalized 방식을 쓴다)

    Args:
        stage: 단계 (1 ~ 4)
        preset_categories: 해당 과목 프리셋의 분류 목록
        major: 학생 전공 (자유 입력)
        matcher: 비교 함수

    Returns:
        str: "교양" / "전공" / "일반"
    """
    if int(stage) == 1:
        return '교양'
    for category in preset_categories:
        if matcher(category, major):
            return '전공'
    return '일반'


class CatalogService:
    """과목 카탈로그 서비스"""

    @staticmethod
    def validate_yaml(yaml_path):
        """
        프리셋 YAML 파일이 schema 에 맞는지 검사

        Args:
            yaml_path: YAML 파일 경로

        Returns:
            list[str]: 오류 목록 (비어 있으면 통과)

        Raises:
            FileNotFoundError: YAML 또는 schema 파일이 없는 경우
        """
        global _SCHEMA
        if _SCHEMA is None:
            _SCHEMA = _load_schema()

        with open(yaml_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        validator = Draft7Validator(_SCHEMA)
        errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))

        messages = []
        for err in errors:
            path = ' -> '.join(str(p) for p in err.absolute_path) or '(root)'
            messages.append(f"  [{path}] {err.message}")

        return messages

    def __init__(self, session):
        """
        Args:
            session: SQLAlchemy 데이터베이스 세션
        """
        self.session = session
        self.subject_repo = SubjectRepository(session)
        self.preset_repo = PresetRepository(session)

    # ── 프리셋 가져오기 ─────────────────────────────────────

    def import_presets_from_yaml(self, yaml_path):
        """
        YAML 파일의 프리셋을 가져온다 (같은 과정 종류/단계는 전체 교체)

        Args:
            yaml_path: YAML 파일 경로

        Returns:
            dict: 통계

        Raises:
            ValueError: schema 검증 실패
        """
        errors = CatalogService.validate_yaml(yaml_path)
        if errors:
            error_msg = '\n'.join(errors)
            raise ValueError(f"YAML 파일 검증 실패: {yaml_path}\n{error_msg}")

        with open(yaml_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        stats = {
            'subject_presets': 0,
            'dokaksa_presets': 0,
            'failed_groups': [],
        }

        for group in data.get('subject_presets', []):
            course_type = group['course_type']
            presets = [
                SubjectPreset(
                    course_type=course_type,
                    name=item['name'],
                    credits=item.get('credits', 3),
                    subject_type=item['subject_type'],
                    sort_order=item.get('sort_order', index),
                )
                for index, item in enumerate(group['subjects'], 1)
            ]
            if self.preset_repo.replace_subject_presets(course_type, presets):
                stats['subject_presets'] += len(presets)
                print(f"✓ {course_type} 과목 프리셋 {len(presets)}개")
            else:
                stats['failed_groups'].append(course_type)

        # 단계별로 모아서 교체
        by_stage = {}
        for group in data.get('dokaksa_presets', []):
            stage = group['stage']
            rows = by_stage.setdefault(stage, [])
            for index, item in enumerate(group['subjects'], 1):
                rows.append(SelfStudyPreset(
                    stage=stage,
                    category=group.get('category', '교양'),
                    name=item['name'],
                    credits=item.get('credits', 4),
                    subject_type=item['subject_type'],
                    sort_order=item.get('sort_order', index),
                ))

        for stage, presets in sorted(by_stage.items()):
            if self.preset_repo.replace_self_study_presets(stage, presets):
                stats['dokaksa_presets'] += len(presets)
                print(f"✓ 독학사 {stage}단계 프리셋 {len(presets)}개")
            else:
                stats['failed_groups'].append(f"{stage}단계")

        return stats

    # ── 학생 과목 자동 채우기 ───────────────────────────────

    def seed_student_subjects(self, student):
        """
        학생에게 보이는 과목이 하나도 없으면 과정 프리셋으로 채운다

        과정명에 "구법"/"신법" 이 없으면 아무것도 하지 않는다.

        Args:
            student: Student

        Returns:
            list[Subject]: 추가된 과목 (추가하지 않았으면 빈 목록)
        """
        if self.subject_repo.count_for_student(student.id) > 0:
            return []

        course_type = student.course.preset_type if student.course else None
        if course_type is None:
            return []

        presets = self.preset_repo.fetch_preset_subjects(course_type)
        if not presets:
            print(f"⚠️ {course_type} 과목 프리셋이 없습니다")
            return []

        subjects = [
            Subject(
                category='전공',
                name=preset.name,
                credits=preset.credits,
                type='실습' if '실습' in preset.name else '이론',
                subject_type=preset.subject_type,
                student_id=student.id,
            )
            for preset in presets
        ]
        inserted, failed = self.subject_repo.insert_batch(subjects)
        if failed:
            return []
        print(f"✓ {student.name} 학생에게 {course_type} 기본 과목 {inserted}개 추가")
        return subjects

    # ── 독학사 ──────────────────────────────────────────────

    def resolve_self_study_credit_type(self, stage, subject_name, major, matcher=exact_major_match):
        """
        단계 + 과목명으로 프리셋을 찾아 학점 분류 결정

        Returns:
            str: "교양" / "전공" / "일반"
        """
        presets = self.preset_repo.find_self_study_presets(stage, subject_name)
        return classify_self_study_credit(stage, [p.category for p in presets], major, matcher)
