"""
개강반(기수) 문자열 변환

학생 정보의 class_start 필드는 여러 기수를 쉼표로 이어 붙인 문자열이다.

문법:
  class_start := token ("," token)*
  token       := <연도>"년" <학기>"학기" [<기수>"기"]

예:
  "2025년 1학기 1기,2025년 1학기 2기,2025년 2학기 1기"

기수를 생략한 토큰("2025년 1학기")은 1기로 본다.
형식이 잘못된 토큰은 건너뛰고 경고만 출력한다.
"""
import re
from collections import namedtuple
from .semester_utils import validate_term


Cohort = namedtuple('Cohort', ['year', 'term', 'class_number'])

_TOKEN_PATTERN = re.compile(
    r'^\s*(\d{4})\s*년\s*(\d)\s*학기(?:\s*(\d+)\s*기)?\s*$'
)


def parse_cohort_token(token):
    """
    기수 토큰 하나를 파싱

    Args:
        token: "2025년 1학기 2기" 형식 문자열

    Returns:
        Cohort: (year, term, class_number)

    Raises:
        ValueError: 형식이 잘못된 경우

    Examples:
        >>> parse_cohort_token("2025년 1학기 2기")
        Cohort(year=2025, term=1, class_number=2)
        >>> parse_cohort_token("2025년 2학기")
        Cohort(year=2025, term=2, class_number=1)
    """
    if not isinstance(token, str):
        raise ValueError(f"Invalid cohort token: {token!r}")

    match = _TOKEN_PATTERN.match(token)
    if not match:
        raise ValueError(f"Invalid cohort token: {token!r}")

    year, term = validate_term(match.group(1), match.group(2))
    class_number = int(match.group(3)) if match.group(3) else 1
    if class_number < 1:
        raise ValueError(f"Invalid class number in cohort token: {token!r}")

    return Cohort(year, term, class_number)


def format_cohort_token(cohort):
    """
    Cohort → "2025년 1학기 2기"

    Examples:
        >>> format_cohort_token(Cohort(2025, 1, 2))
        '2025년 1학기 2기'
    """
    year, term, class_number = cohort
    return f"{year}년 {term}학기 {class_number}기"


def parse_class_start(value):
    """
    class_start 문자열 전체를 파싱

    중복 토큰은 한 번만 반환하고, 순서는 입력 순서를 따른다.

    Args:
        value: class_start 문자열 (None 허용)

    Returns:
        list[Cohort]
    """
    if not value:
        return []

    cohorts = []
    seen = set()
    for raw in value.split(','):
        token = raw.strip()
        if not token:
            continue
        try:
            cohort = parse_cohort_token(token)
        except ValueError as e:
            print(f"⚠️ 개강반 형식 오류, 건너뜀: {e}")
            continue
        if cohort in seen:
            continue
        seen.add(cohort)
        cohorts.append(cohort)

    return cohorts


def format_class_start(cohorts):
    """
    list[Cohort] → class_start 문자열

    Examples:
        >>> format_class_start([Cohort(2025, 1, 1), Cohort(2025, 2, 1)])
        '2025년 1학기 1기,2025년 2학기 1기'
    """
    return ','.join(format_cohort_token(c) for c in cohorts)


def validate_class_start(value):
    """
    class_start 의 모든 토큰이 올바른지 검사

    Returns:
        bool
    """
    if not value:
        return True
    for raw in value.split(','):
        token = raw.strip()
        if not token:
            continue
        try:
            parse_cohort_token(token)
        except ValueError:
            return False
    return True
