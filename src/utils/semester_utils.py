"""
학기 관련 유틸 함수

학기 표기: (연도, 학기), 학기는 1 또는 2
- 1학기: 전년도 11월 15일 ~ 당해 5월 5일
- 2학기: 당해 5월 15일 ~ 11월 5일

학기 순서: ... < (2025, 1) < (2025, 2) < (2026, 1) < ...
"""
from datetime import date


VALID_TERMS = (1, 2)


def validate_term(year, term):
    """
    연도/학기 값 검증

    Args:
        year: 연도 (int 또는 숫자 문자열)
        term: 학기 (1 또는 2)

    Returns:
        tuple: (year, term), 정수로 변환된 값

    Raises:
        ValueError: 형식이 올바르지 않은 경우

    Examples:
        >>> validate_term("2025", 1)
        (2025, 1)
    """
    try:
        year = int(year)
        term = int(term)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid term: {year}-{term}")

    if year < 1900 or year > 2999:
        raise ValueError(f"Invalid year: {year}")
    if term not in VALID_TERMS:
        raise ValueError(f"Invalid term: {term}. Must be one of: 1, 2")

    return (year, term)


def default_term_dates(year, term):
    """
    학기 기본 기간 계산

    Args:
        year: 연도
        term: 학기 (1 또는 2)

    Returns:
        tuple: (start, end), datetime.date

    Examples:
        >>> default_term_dates(2025, 1)
        (datetime.date(2024, 11, 15), datetime.date(2025, 5, 5))
        >>> default_term_dates(2025, 2)
        (datetime.date(2025, 5, 15), datetime.date(2025, 11, 5))
    """
    year, term = validate_term(year, term)
    if term == 1:
        return (date(year - 1, 11, 15), date(year, 5, 5))
    return (date(year, 5, 15), date(year, 11, 5))


def term_label(year, term, class_number=None):
    """
    화면 표시용 학기 이름

    Examples:
        >>> term_label(2025, 1)
        '2025년 1학기'
        >>> term_label(2025, 1, 2)
        '2025년 1학기 2기'
    """
    label = f"{year}년 {term}학기"
    if class_number is not None:
        label += f" {class_number}기"
    return label


def parse_iso_date(value):
    """
    'YYYY-MM-DD' 문자열을 date 로 변환 (빈 값은 None)

    Raises:
        ValueError: 날짜 형식이 잘못된 경우
    """
    if value is None or value == '':
        return None
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid date: {value!r}")
    return date.fromisoformat(value)


def format_iso_date(value):
    """date → 'YYYY-MM-DD' (None 은 빈 문자열)"""
    if value is None:
        return ''
    return value.isoformat()
