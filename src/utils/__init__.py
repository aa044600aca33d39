"""
유틸 함수 모듈
"""
from .semester_utils import (
    validate_term,
    default_term_dates,
    term_label,
    parse_iso_date,
    format_iso_date,
)
from .cohort_utils import (
    Cohort,
    parse_cohort_token,
    format_cohort_token,
    parse_class_start,
    format_class_start,
    validate_class_start,
)

__all__ = [
    'validate_term',
    'default_term_dates',
    'term_label',
    'parse_iso_date',
    'format_iso_date',
    'Cohort',
    'parse_cohort_token',
    'format_cohort_token',
    'parse_class_start',
    'format_class_start',
    'validate_class_start',
]
