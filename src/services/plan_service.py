"""
학생 수강 계획 서비스
관리자 한 명이 학생 한 명의 계획을 편집하는 흐름을 묶는다

저장 방식:
  - 학기 추가/삭제, 과목 배정/취소, 기간 수정 → 메모리에서 바로 반영 후 자동 저장(debounce)
  - 과목 / 전적대 과목 / 자격증 / 독학사 추가·삭제 → 즉시 DB 저장, 성공한 경우에만 메모리 반영

동시 편집은 감지하지 않는다. 두 세션이 같은 학생을 편집하면 마지막 저장이 이긴다.
"""
from collections import namedtuple
from config import load_settings
from models import (
    Subject, PriorInstitutionSubject, CertificateCredit, SelfStudyCredit,
    SUBJECT_CATEGORIES, SUBJECT_KINDS, SUBJECT_TYPES,
)
from repositories import (
    StudentRepository, SubjectRepository, CreditSourceRepository,
    PlanRepository, ActivityLogRepository,
)
from utils.cohort_utils import parse_class_start
from utils.semester_utils import parse_iso_date
from .autosave import DebouncedAutosave
from .catalog_service import CatalogService, get_major_matcher
from .credit_aggregator import (
    aggregate_credits, count_practicum, resolve_assigned_subjects,
)
from .progress import project_progress
from .requirement_profile import resolve_profile_for_student
from .semester_plan import SemesterPlan, PlanRuleViolation


ActionResult = namedtuple('ActionResult', ['ok', 'message', 'value'], defaults=('', None))

SELF_STUDY_STAGES = (1, 2, 3, 4)


class PlanService:
    """학생 한 명의 수강 계획 편집 세션"""

    def __init__(self, session, student_id, actor_name=None, scheduler=None,
                 settings=None, credit_bank=None):
        """
        Args:
            session: SQLAlchemy 데이터베이스 세션
            student_id: 학생 id
            actor_name: 활동 로그에 남길 관리자 이름
            scheduler: 자동 저장 스케줄러 (None 이면 PollingScheduler, poll() 로 실행)
            settings: Settings (None 이면 환경 변수에서 로드)
            credit_bank: CreditBankService (학점은행 검색을 쓸 때만 필요)
        """
        self.session = session
        self.student_id = student_id
        self.settings = settings or load_settings()
        self.actor_name = actor_name or self.settings.actor_name
        self.credit_bank = credit_bank
        self.major_matcher = get_major_matcher(self.settings.self_study_major_match)

        self.student_repo = StudentRepository(session)
        self.subject_repo = SubjectRepository(session)
        self.credit_repo = CreditSourceRepository(session)
        self.plan_repo = PlanRepository(session)
        self.activity_repo = ActivityLogRepository(session)
        self.catalog = CatalogService(session)

        self.student = None
        self.subjects = []
        self.prior_subjects = []
        self.certificates = []
        self.self_study = []
        self.plan = None
        self.selected_semester_id = None
        self.added_on_load = []

        self.autosave = DebouncedAutosave(
            snapshot=self.plan_snapshot,
            write=self._write_plan,
            delay_ms=self.settings.autosave_delay_ms,
            scheduler=scheduler,
        )

    # ── 불러오기 ────────────────────────────────────────────

    def load(self):
        """
        학생 데이터와 수강 계획 로드

        흐름:
        1. 학생 조회
        2. 과목 목록 (비어 있으면 프리셋으로 채움)
        3. 전적대 과목 / 자격증 / 독학사
        4. 저장된 계획 + 개강반(class_start) 동기화

        Returns:
            bool: 학생을 찾았으면 True
        """
        self.student = self.student_repo.get_by_id(self.student_id)
        if self.student is None:
            print(f"✗ 학생을 찾을 수 없습니다: {self.student_id}")
            return False

        self.subjects = self.subject_repo.list_for_student(self.student_id)
        if not self.subjects and self.catalog.seed_student_subjects(self.student):
            self.subjects = self.subject_repo.list_for_student(self.student_id)

        self.prior_subjects = self.credit_repo.list_prior_subjects(self.student_id)
        self.certificates = self.credit_repo.list_certificates(self.student_id)
        self.self_study = self.credit_repo.list_self_study(self.student_id)

        cohorts = parse_class_start(self.student.class_start)
        stored = self.plan_repo.load_plan(self.student_id)
        if stored is not None:
            self.plan = SemesterPlan.from_record(stored.to_record())
            self.added_on_load = self.plan.merge_cohorts(cohorts)
            if self.added_on_load:
                names = [s.display_name for s in self.added_on_load]
                print(f"✓ 개강반에서 학기 {len(names)}개 추가: {names}")
                self.autosave.touch()
        elif cohorts:
            self.plan = SemesterPlan.from_cohorts(cohorts)
        else:
            self.plan = SemesterPlan.default()

        self.selected_semester_id = self.plan.semesters[0].id
        return True

    def sync_cohorts(self):
        """
        개강반 문자열을 다시 읽어 빠진 학기만 추가 (여러 번 호출해도 결과 동일)

        Returns:
            list[Semester]: 새로 추가된 학기
        """
        added = self.plan.merge_cohorts(parse_class_start(self.student.class_start))
        if added:
            self.autosave.touch()
        return added

    # ── 파생 값 ─────────────────────────────────────────────

    @property
    def profile(self):
        return resolve_profile_for_student(self.student)

    def assigned_subjects(self):
        return resolve_assigned_subjects(self.plan.assignments, self.subjects)

    def credit_totals(self):
        return aggregate_credits(
            self.assigned_subjects(), self.prior_subjects, self.certificates, self.self_study,
        )

    def practicum_count(self):
        return count_practicum(self.assigned_subjects(), self.prior_subjects)

    def progress(self):
        """
        Returns:
            ProgressReport
        """
        profile = self.profile
        assigned = self.assigned_subjects()
        practicum = None
        if profile.practicum is not None:
            practicum = count_practicum(assigned, self.prior_subjects)
        return project_progress(
            profile,
            aggregate_credits(assigned, self.prior_subjects, self.certificates, self.self_study),
            subject_count=len(assigned) + len(self.prior_subjects),
            practicum_count=practicum,
        )

    def get_subject(self, subject_id):
        for subject in self.subjects:
            if subject.id == subject_id:
                return subject
        return None

    # ── 자동 저장 ───────────────────────────────────────────

    def plan_snapshot(self):
        return self.plan.to_record()

    def _write_plan(self, record):
        return self.plan_repo.save_plan(self.student_id, record)

    def poll(self):
        """
        기한이 지난 자동 저장을 현재 스레드에서 실행 (편집 루프에서 주기적으로 호출)

        Returns:
            bool: 아직 저장 대기 중인 변경이 있으면 True
        """
        return self.autosave.poll()

    def flush(self):
        """대기 중인 자동 저장을 바로 실행"""
        return self.autosave.flush()

    def save(self):
        """변경 여부와 관계없이 현재 계획을 바로 저장"""
        self.autosave.touch()
        return self.autosave.flush()

    def _log(self, action, target_type=None, target_name=None, detail=None):
        self.activity_repo.log_activity(
            self.actor_name, action,
            target_type=target_type, target_name=target_name, detail=detail,
        )

    # ── 학기 ────────────────────────────────────────────────

    def select_semester(self, semester_id):
        self.plan.get_semester(semester_id)
        self.selected_semester_id = semester_id

    def add_semester(self, year, term):
        try:
            semester = self.plan.add_semester(year, term)
        except ValueError as e:
            return ActionResult(False, f"학기 추가 실패: {e}")
        self.selected_semester_id = semester.id
        self.autosave.touch()
        self._log('학기 추가', 'semester', self.student.name, semester.display_name)
        return ActionResult(True, '', semester)

    def add_cohort(self, semester_id):
        try:
            semester = self.plan.add_cohort(semester_id)
        except ValueError as e:
            return ActionResult(False, f"기수 추가 실패: {e}")
        self.selected_semester_id = semester.id
        self.autosave.touch()
        self._log('기수 추가', 'semester', self.student.name, semester.display_name)
        return ActionResult(True, '', semester)

    def delete_semester(self, semester_id):
        try:
            name = self.plan.get_semester(semester_id).display_name
            self.selected_semester_id = self.plan.delete_semester(
                semester_id, self.selected_semester_id
            )
        except ValueError as e:
            return ActionResult(False, str(e))
        self.autosave.touch()
        self._log('학기 삭제', 'semester', self.student.name, name)
        return ActionResult(True, '', self.selected_semester_id)

    def set_semester_dates(self, semester_id, start=None, end=None):
        try:
            self.plan.set_dates(semester_id, start=start, end=end)
        except ValueError as e:
            return ActionResult(False, f"기간 수정 실패: {e}")
        self.autosave.touch()
        return ActionResult(True)

    # ── 과목 배정 ───────────────────────────────────────────

    def assign_subject(self, subject_id, semester_id):
        """
        과목을 학기에 배정

        Returns:
            ActionResult: 한도 초과 시 ok=False 와 안내 메시지
        """
        if self.get_subject(subject_id) is None:
            return ActionResult(False, '존재하지 않는 과목입니다.')
        try:
            assigned = self.plan.assign_subject(subject_id, semester_id)
        except PlanRuleViolation as e:
            return ActionResult(False, str(e), e)
        except ValueError as e:
            return ActionResult(False, str(e))
        if not assigned:
            return ActionResult(False, '이미 배정된 과목입니다.')
        self.autosave.touch()
        return ActionResult(True)

    def unassign_subject(self, subject_id, semester_id):
        try:
            removed = self.plan.unassign_subject(subject_id, semester_id)
        except ValueError as e:
            return ActionResult(False, str(e))
        if not removed:
            return ActionResult(False, '선택한 학기에 배정되지 않은 과목입니다.')
        self.autosave.touch()
        return ActionResult(True)

    # ── 즉시 저장: 과목 ─────────────────────────────────────

    @staticmethod
    def _check_entry(name, credits, category=None):
        if not (name or '').strip():
            return '이름을 입력하세요.'
        if category is not None and category not in SUBJECT_CATEGORIES:
            return f"잘못된 분류입니다: {category}"
        if isinstance(credits, bool) or not isinstance(credits, int) or credits <= 0:
            return '학점은 1 이상이어야 합니다.'
        return None

    def add_custom_subject(self, name, category='전공', credits=3, type='이론', subject_type=None):
        """학생 전용 과목 추가"""
        error = self._check_entry(name, credits, category)
        if error is None and type not in SUBJECT_KINDS:
            error = f"잘못된 과목 유형입니다: {type}"
        if error is None and subject_type is not None and subject_type not in SUBJECT_TYPES:
            error = f"잘못된 이수 구분입니다: {subject_type}"
        if error:
            return ActionResult(False, error)

        subject = self.subject_repo.insert(Subject(
            category=category,
            name=name.strip(),
            credits=credits,
            type=type,
            subject_type=subject_type,
            student_id=self.student_id,
        ))
        if subject is None:
            return ActionResult(False, f"추가 실패: {name.strip()}")
        self.subjects.append(subject)
        self._log('과목 추가', 'subject', subject.name, f"{category} {credits}학점")
        return ActionResult(True, '', subject)

    def delete_subject(self, subject_id):
        """
        학생 전용 과목 삭제, 모든 학기 배정에서도 제거

        공용 과목은 삭제할 수 없다.
        """
        subject = self.get_subject(subject_id)
        if subject is None:
            return ActionResult(False, '존재하지 않는 과목입니다.')
        if not subject.is_owned_by(self.student_id):
            return ActionResult(False, '공용 과목은 삭제할 수 없습니다.')

        name = subject.name
        remaining = [s for s in self.subjects if s.id != subject_id]
        if not self.subject_repo.delete_owned(subject_id, self.student_id):
            return ActionResult(False, f"삭제 실패: {name}")

        self.subjects = remaining
        if self.plan.remove_subject(subject_id):
            self.autosave.touch()
        self._log('과목 삭제', 'subject', name)
        return ActionResult(True)

    # ── 즉시 저장: 전적대 과목 ──────────────────────────────

    def add_prior_subject(self, name, category='전공', credits=3):
        error = self._check_entry(name, credits, category)
        if error:
            return ActionResult(False, error)
        entry = self.credit_repo.insert(PriorInstitutionSubject(
            student_id=self.student_id,
            category=category,
            name=name.strip(),
            credits=credits,
        ))
        if entry is None:
            return ActionResult(False, f"추가 실패: {name.strip()}")
        self.prior_subjects.append(entry)
        self._log('전적대 과목 추가', 'prior_subject', entry.name, f"{category} {credits}학점")
        return ActionResult(True, '', entry)

    def delete_prior_subject(self, entry_id):
        entry = next((p for p in self.prior_subjects if p.id == entry_id), None)
        if entry is None:
            return ActionResult(False, '존재하지 않는 항목입니다.')
        name = entry.name
        remaining = [p for p in self.prior_subjects if p.id != entry_id]
        if not self.credit_repo.delete_prior_subject(entry_id, self.student_id):
            return ActionResult(False, f"삭제 실패: {name}")
        self.prior_subjects = remaining
        self._log('전적대 과목 삭제', 'prior_subject', name)
        return ActionResult(True)

    def search_credit_bank(self, query):
        """학점은행 과목 검색 (전적대 과목명 입력 보조), 실패 시 빈 목록"""
        if self.credit_bank is None:
            return []
        return self.credit_bank.search_subjects(query)

    # ── 즉시 저장: 자격증 ───────────────────────────────────

    def add_certificate(self, name, credits=3, acquired_date=None):
        error = self._check_entry(name, credits)
        if error:
            return ActionResult(False, error)
        try:
            acquired = parse_iso_date(acquired_date)
        except ValueError:
            return ActionResult(False, f"잘못된 취득일입니다: {acquired_date}")
        entry = self.credit_repo.insert(CertificateCredit(
            student_id=self.student_id,
            name=name.strip(),
            credits=credits,
            acquired_date=acquired,
        ))
        if entry is None:
            return ActionResult(False, f"추가 실패: {name.strip()}")
        self.certificates.append(entry)
        self._log('자격증 추가', 'certificate', entry.name, f"{credits}학점")
        return ActionResult(True, '', entry)

    def delete_certificate(self, entry_id):
        entry = next((c for c in self.certificates if c.id == entry_id), None)
        if entry is None:
            return ActionResult(False, '존재하지 않는 항목입니다.')
        name = entry.name
        remaining = [c for c in self.certificates if c.id != entry_id]
        if not self.credit_repo.delete_certificate(entry_id, self.student_id):
            return ActionResult(False, f"삭제 실패: {name}")
        self.certificates = remaining
        self._log('자격증 삭제', 'certificate', name)
        return ActionResult(True)

    # ── 즉시 저장: 독학사 ───────────────────────────────────

    def add_self_study(self, stage, subject_name, credits=4):
        """
        독학사 학점 추가, 등록 시점에 학점 분류(credit_type) 결정
        """
        if stage not in SELF_STUDY_STAGES:
            return ActionResult(False, f"잘못된 단계입니다: {stage}")
        error = self._check_entry(subject_name, credits)
        if error:
            return ActionResult(False, error)

        name = subject_name.strip()
        credit_type = self.catalog.resolve_self_study_credit_type(
            stage, name, self.student.major, self.major_matcher,
        )
        entry = self.credit_repo.insert(SelfStudyCredit(
            student_id=self.student_id,
            stage=stage,
            subject_name=name,
            credits=credits,
            credit_type=credit_type,
        ))
        if entry is None:
            return ActionResult(False, f"추가 실패: {name}")
        self.self_study.append(entry)
        self._log('독학사 추가', 'self_study', name, f"{stage}단계 {credit_type} {credits}학점")
        return ActionResult(True, '', entry)

    def delete_self_study(self, entry_id):
        entry = next((d for d in self.self_study if d.id == entry_id), None)
        if entry is None:
            return ActionResult(False, '존재하지 않는 항목입니다.')
        name = entry.subject_name
        remaining = [d for d in self.self_study if d.id != entry_id]
        if not self.credit_repo.delete_self_study(entry_id, self.student_id):
            return ActionResult(False, f"삭제 실패: {name}")
        self.self_study = remaining
        self._log('독학사 삭제', 'self_study', name)
        return ActionResult(True)
