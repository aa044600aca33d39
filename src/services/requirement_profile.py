"""
학력별 이수 요건 판정
학력 + 과정명 + 희망학위 → 목표 학점 프로필
"""
from collections import namedtuple


CategoryTarget = namedtuple('CategoryTarget', ['label', 'categories', 'target'])
PracticumRequirement = namedtuple('PracticumRequirement', ['required', 'elective'])


class RequirementProfile:
    """목표 학점 프로필 (저장하지 않는 파생 값)"""

    def __init__(self, name, total_target, category_targets,
                 subject_count_target=None, practicum=None):
        self.name = name
        self.total_target = total_target
        self.category_targets = list(category_targets)
        self.subject_count_target = subject_count_target
        self.practicum = practicum

    @property
    def is_extended_program(self):
        """분류가 둘 이상이면 확장 과정 (전적대/자격증/독학사 화면 노출 기준)"""
        return len(self.category_targets) > 1

    def target_for(self, category):
        for t in self.category_targets:
            if category in t.categories:
                return t.target
        return None

    def __repr__(self):
        targets = ', '.join(f"{t.label}:{t.target}" for t in self.category_targets)
        return f"<RequirementProfile {self.name} total={self.total_target} [{targets}]>"


# 과정명에 이 문자열이 있으면 실습 과정
PRACTICUM_MARKER = '실습'

DEGREE_BACHELOR = '학사'

# 중퇴군: 고졸 또는 2/3/4년제 중퇴
ATTRITION_LEVELS = ('고졸', '2년제중퇴', '3년제중퇴', '4년제중퇴')

# 졸업군
GRADUATE_LEVELS = ('2년제졸업', '3년제졸업', '4년제졸업')

# 학사 희망 시 확장 과정 A 가 적용되는 졸업 학력
BACHELOR_ELIGIBLE_GRADUATE_LEVELS = ('2년제졸업', '3년제졸업')

# 예전 학력 표기 → 현재 표기
EDUCATION_LEVEL_ALIASES = {
    '고등학교졸업': '고졸',
    '전문대졸업': '2년제졸업',
    '대학교졸업': '4년제졸업',
}


def _practicum_profile():
    return RequirementProfile(
        name='practicum',
        total_target=6,
        subject_count_target=6,
        category_targets=[CategoryTarget('전공', ('전공',), 6)],
        practicum=PracticumRequirement(required=4, elective=2),
    )


def _extended_profile_a():
    return RequirementProfile(
        name='extended_a',
        total_target=140,
        category_targets=[
            CategoryTarget('전공', ('전공',), 60),
            CategoryTarget('교양', ('교양',), 30),
            CategoryTarget('일반', ('일반',), 50),
        ],
    )


def _extended_profile_b():
    return RequirementProfile(
        name='extended_b',
        total_target=80,
        category_targets=[
            CategoryTarget('전공', ('전공',), 45),
            CategoryTarget('교양', ('교양',), 15),
            CategoryTarget('일반', ('일반',), 20),
        ],
    )


def _minimal_profile():
    return RequirementProfile(
        name='minimal',
        total_target=51,
        subject_count_target=8,
        category_targets=[CategoryTarget('전공', ('전공',), 51)],
    )


def normalize_education_level(education_level):
    """학력 값 정리 (공백 제거 + 예전 표기 변환)"""
    if not education_level:
        return None
    level = education_level.strip()
    return EDUCATION_LEVEL_ALIASES.get(level, level)


def classify_education_level(education_level):
    """
    학력 → 'attrition' / 'graduate' / None

    Examples:
        >>> classify_education_level('3년제중퇴')
        'attrition'
        >>> classify_education_level('4년제졸업')
        'graduate'
    """
    level = normalize_education_level(education_level)
    if level in ATTRITION_LEVELS:
        return 'attrition'
    if level in GRADUATE_LEVELS:
        return 'graduate'
    return None


def resolve_profile(education_level, course_name, desired_degree):
    """
    학생에게 적용할 이수 요건 프로필 결정

    판정 순서 (먼저 맞는 규칙 적용):
    1. 과정명에 '실습' 포함 → 실습 프로필 (학력 무관)
    2. 중퇴군 + 학사 희망 → 확장 A (140 = 전공 60 + 교양 30 + 일반 50)
    3. 중퇴군 → 확장 B (80 = 전공 45 + 교양 15 + 일반 20)
    4. 2/3년제 졸업 + 학사 희망 → 확장 A
    5. 그 외 (학력 미입력 포함) → 기본 프로필 (전공 51학점, 8과목)

    Args:
        education_level: 최종 학력 ("고졸", "2년제졸업" ...)
        course_name: 과정명 ("사회복지사2급(구법)" ...)
        desired_degree: 희망 학위 ("없음" / "전문학사" / "학사")

    Returns:
        RequirementProfile
    """
    if course_name and PRACTICUM_MARKER in course_name:
        return _practicum_profile()

    group = classify_education_level(education_level)
    wants_bachelor = (desired_degree or '').strip() == DEGREE_BACHELOR

    if group == 'attrition':
        if wants_bachelor:
            return _extended_profile_a()
        return _extended_profile_b()

    if group == 'graduate' and wants_bachelor:
        if normalize_education_level(education_level) in BACHELOR_ELIGIBLE_GRADUATE_LEVELS:
            return _extended_profile_a()

    return _minimal_profile()


def resolve_profile_for_student(student):
    """Student 모델에서 바로 프로필 계산"""
    return resolve_profile(
        student.education_level,
        student.course_name,
        student.desired_degree,
    )
