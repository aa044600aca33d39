"""
Student 데이터 접근 계층 (읽기 전용)
"""
from models import Student


class StudentRepository:
    """Student 조회 클래스"""

    def __init__(self, session):
        """
        Args:
            session: SQLAlchemy 데이터베이스 세션
        """
        self.session = session

    def get_by_id(self, student_id):
        """
        Returns:
            Student 또는 None
        """
        return self.session.query(Student).filter(Student.id == student_id).first()

    def get_all(self):
        return self.session.query(Student).order_by(Student.created_at).all()
