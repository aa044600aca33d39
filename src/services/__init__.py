"""
업무 로직(Service) 패키지
"""
from .requirement_profile import RequirementProfile, resolve_profile, resolve_profile_for_student
from .credit_aggregator import CreditTotals, aggregate_credits, count_practicum, progress_percent
from .semester_plan import Semester, SemesterPlan, PlanRuleViolation
from .progress import ProgressReport, project_progress
from .autosave import DebouncedAutosave, PollingScheduler
from .catalog_service import CatalogService
from .credit_bank_service import CreditBankService
from .plan_service import PlanService, ActionResult
from .plan_integrity import find_plan_issues

__all__ = [
    'RequirementProfile',
    'resolve_profile',
    'resolve_profile_for_student',
    'CreditTotals',
    'aggregate_credits',
    'count_practicum',
    'progress_percent',
    'Semester',
    'SemesterPlan',
    'PlanRuleViolation',
    'ProgressReport',
    'project_progress',
    'DebouncedAutosave',
    'PollingScheduler',
    'CatalogService',
    'CreditBankService',
    'PlanService',
    'ActionResult',
    'find_plan_issues',
]
