"""
데이터 접근 계층(Repository) 패키지
"""
from .student_repository import StudentRepository
from .subject_repository import SubjectRepository
from .credit_source_repository import CreditSourceRepository
from .plan_repository import PlanRepository
from .preset_repository import PresetRepository
from .activity_log_repository import ActivityLogRepository

__all__ = [
    'StudentRepository',
    'SubjectRepository',
    'CreditSourceRepository',
    'PlanRepository',
    'PresetRepository',
    'ActivityLogRepository',
]
