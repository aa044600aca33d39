"""
Subject 데이터 접근 계층
공용 과목 + 학생 소유 과목 조회/추가/삭제
"""
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from models import Subject


class SubjectRepository:
    """Subject 데이터 접근 클래스"""

    def __init__(self, session):
        """
        Args:
            session: SQLAlchemy 데이터베이스 세션
        """
        self.session = session

    def list_for_student(self, student_id):
        """
        학생에게 보이는 과목 목록 (공용 + 본인 소유)

        Returns:
            Subject 목록 (id 순)
        """
        return self.session.query(Subject).filter(
            or_(Subject.student_id.is_(None), Subject.student_id == student_id)
        ).order_by(Subject.id).all()

    def count_for_student(self, student_id):
        return self.session.query(Subject).filter(
            or_(Subject.student_id.is_(None), Subject.student_id == student_id)
        ).count()

    def get_by_id(self, subject_id):
        return self.session.query(Subject).filter(Subject.id == subject_id).first()

    def insert(self, subject):
        """
        과목 추가

        Returns:
            Subject 또는 None (실패 시)
        """
        try:
            self.session.add(subject)
            self.session.commit()
            return subject
        except SQLAlchemyError as e:
            self.session.rollback()
            print(f"✗ 과목 추가 실패 {subject.name}: {e}")
            return None

    def insert_batch(self, subjects):
        """
        과목 일괄 추가

        Returns:
            tuple: (성공 수, 실패 수)
        """
        try:
            self.session.add_all(subjects)
            self.session.commit()
            return len(subjects), 0
        except SQLAlchemyError as e:
            self.session.rollback()
            print(f"✗ 과목 일괄 추가 실패: {e}")
            return 0, len(subjects)

    def delete_owned(self, subject_id, student_id):
        """
        학생 소유 과목 삭제 (공용 과목은 삭제하지 않음)

        Returns:
            bool: 삭제되었으면 True
        """
        try:
            deleted = self.session.query(Subject).filter(
                Subject.id == subject_id,
                Subject.student_id == student_id,
            ).delete(synchronize_session='fetch')
            self.session.commit()
            return deleted > 0
        except SQLAlchemyError as e:
            self.session.rollback()
            print(f"✗ 과목 삭제 실패 {subject_id}: {e}")
            return False
