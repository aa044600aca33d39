"""
학점 인정 데이터 접근 계층
전적대 이수 과목 / 학점인정 자격증 / 독학사, 추가/삭제 즉시 저장
"""
from sqlalchemy.exc import SQLAlchemyError
from models import PriorInstitutionSubject, CertificateCredit, SelfStudyCredit


class CreditSourceRepository:
    """학점 인정 데이터 접근 클래스"""

    def __init__(self, session):
        """
        Args:
            session: SQLAlchemy 데이터베이스 세션
        """
        self.session = session

    def _list(self, model, student_id):
        return self.session.query(model).filter(
            model.student_id == student_id
        ).order_by(model.created_at, model.id).all()

    def insert(self, entry):
        """
        항목 추가 (전적대 과목 / 자격증 / 독학사 공통)

        Returns:
            추가된 객체 또는 None (실패 시)
        """
        try:
            self.session.add(entry)
            self.session.commit()
            return entry
        except SQLAlchemyError as e:
            self.session.rollback()
            print(f"✗ 추가 실패 {entry!r}: {e}")
            return None

    def _delete(self, model, entry_id, student_id):
        try:
            deleted = self.session.query(model).filter(
                model.id == entry_id,
                model.student_id == student_id,
            ).delete(synchronize_session='fetch')
            self.session.commit()
            return deleted > 0
        except SQLAlchemyError as e:
            self.session.rollback()
            print(f"✗ 삭제 실패 {model.__tablename__} {entry_id}: {e}")
            return False

    # 전적대 이수 과목
    def list_prior_subjects(self, student_id):
        return self._list(PriorInstitutionSubject, student_id)

    def delete_prior_subject(self, entry_id, student_id):
        return self._delete(PriorInstitutionSubject, entry_id, student_id)

    # 학점인정 자격증
    def list_certificates(self, student_id):
        return self._list(CertificateCredit, student_id)

    def delete_certificate(self, entry_id, student_id):
        return self._delete(CertificateCredit, entry_id, student_id)

    # 독학사
    def list_self_study(self, student_id):
        return self._list(SelfStudyCredit, student_id)

    def delete_self_study(self, entry_id, student_id):
        return self._delete(SelfStudyCredit, entry_id, student_id)
