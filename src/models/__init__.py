"""
데이터 모델 패키지
"""
from sqlalchemy.orm import declarative_base

# ORM 기본 클래스
Base = declarative_base()

# 모델 export: 학생/과정
from .course import Course
from .student import Student

# 모델 export: 과목 카탈로그
from .subject import Subject, SUBJECT_CATEGORIES, SUBJECT_KINDS, SUBJECT_TYPES
from .subject_preset import SubjectPreset
from .self_study_preset import SelfStudyPreset

# 모델 export: 학점 인정
from .prior_subject import PriorInstitutionSubject
from .credit_cert import CertificateCredit
from .self_study_credit import SelfStudyCredit

# 모델 export: 수강 계획 / 로그
from .student_plan import StudentPlan
from .activity_log import ActivityLog

__all__ = [
    'Base',
    # 학생/과정
    'Course',
    'Student',
    # 과목 카탈로그
    'Subject',
    'SubjectPreset',
    'SelfStudyPreset',
    'SUBJECT_CATEGORIES',
    'SUBJECT_KINDS',
    'SUBJECT_TYPES',
    # 학점 인정
    'PriorInstitutionSubject',
    'CertificateCredit',
    'SelfStudyCredit',
    # 수강 계획 / 로그
    'StudentPlan',
    'ActivityLog',
]
