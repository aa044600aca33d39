"""
StudentPlan 데이터 접근 계층
학생당 1행, 저장 시 행 전체를 교체 (student_id 기준 upsert)
"""
from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from models import StudentPlan


class PlanRepository:
    """StudentPlan 데이터 접근 클래스"""

    def __init__(self, session):
        """
        Args:
            session: SQLAlchemy 데이터베이스 세션
        """
        self.session = session

    def load_plan(self, student_id):
        """
        Returns:
            StudentPlan 또는 None (아직 저장된 적 없음)
        """
        return self.session.query(StudentPlan).filter(
            StudentPlan.student_id == student_id
        ).first()

    def save_plan(self, student_id, record):
        """
        수강 계획 저장 (upsert)

        Args:
            student_id: 학생 id
            record: {'semesters': [...], 'semester_subjects': {...}, 'semester_dates': {...}}

        Returns:
            bool: 저장 성공 여부
        """
        try:
            plan = self.load_plan(student_id)
            if plan is None:
                plan = StudentPlan(student_id=student_id)
                self.session.add(plan)
            plan.semesters = record['semesters']
            plan.semester_subjects = record['semester_subjects']
            plan.semester_dates = record['semester_dates']
            plan.updated_at = datetime.now()
            self.session.commit()
            return True
        except SQLAlchemyError as e:
            self.session.rollback()
            print(f"✗ 수강 계획 저장 실패 {student_id}: {e}")
            return False

    def get_all(self):
        return self.session.query(StudentPlan).all()

    def count(self):
        return self.session.query(StudentPlan).count()
