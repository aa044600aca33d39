"""
데이터 접근 계층 테스트
"""
from models import ActivityLog, CertificateCredit, Subject
from repositories import (
    ActivityLogRepository,
    CreditSourceRepository,
    PlanRepository,
    SubjectRepository,
)


class TestSubjectRepository:

    def test_visible_subjects_are_global_plus_own(self, session, make_student, make_subjects):
        make_subjects(2)
        owner = make_student(name='학생1')
        other = make_student(name='학생2')
        repo = SubjectRepository(session)
        repo.insert(Subject(category='일반', name='개인 과목', credits=2, student_id=owner.id))

        assert repo.count_for_student(owner.id) == 3
        assert repo.count_for_student(other.id) == 2

    def test_delete_owned_ignores_global_and_foreign(self, session, make_student, make_subjects):
        global_id = make_subjects(1)[0].id
        owner = make_student(name='학생1')
        other = make_student(name='학생2')
        repo = SubjectRepository(session)
        own_id = repo.insert(Subject(category='전공', name='개인 과목', credits=3, student_id=owner.id)).id

        assert repo.delete_owned(global_id, owner.id) is False
        assert repo.delete_owned(own_id, other.id) is False
        assert repo.delete_owned(own_id, owner.id) is True
        assert repo.get_by_id(own_id) is None

    def test_insert_failure_returns_none(self, session, capsys):
        repo = SubjectRepository(session)

        assert repo.insert(Subject(category='전공', name='음수 학점', credits=-1)) is None
        assert '✗' in capsys.readouterr().out
        assert session.query(Subject).count() == 0


class TestPlanRepository:

    def test_upsert_keeps_one_row(self, session, make_student):
        student = make_student()
        repo = PlanRepository(session)
        record = {
            'semesters': [{'id': 0, 'year': 2025, 'term': 1, 'class_number': 1}],
            'semester_subjects': {'0': [1]},
            'semester_dates': {},
        }

        assert repo.save_plan(student.id, record)
        record['semester_subjects'] = {'0': [1, 2]}
        assert repo.save_plan(student.id, record)

        assert repo.count() == 1
        assert repo.load_plan(student.id).to_record()['semester_subjects'] == {'0': [1, 2]}


class TestCreditSourceRepository:

    def test_delete_scoped_to_student(self, session, make_student):
        owner = make_student(name='학생1')
        other = make_student(name='학생2')
        repo = CreditSourceRepository(session)
        cert_id = repo.insert(CertificateCredit(student_id=owner.id, name='자격증', credits=4)).id

        assert repo.delete_certificate(cert_id, other.id) is False
        assert len(repo.list_certificates(owner.id)) == 1
        assert repo.delete_certificate(cert_id, owner.id) is True
        assert repo.list_certificates(owner.id) == []


class TestActivityLogRepository:

    def test_log_and_list(self, session):
        repo = ActivityLogRepository(session)

        assert repo.log_activity(None, '과목 추가', 'subject', '사회복지개론', '전공 3학점')

        entry = repo.list_recent()[0]
        assert entry.user_name == '알 수 없음'
        assert entry.action == '과목 추가'
        assert session.query(ActivityLog).count() == 1
