"""
StudentPlan 데이터 모델
학생 1명당 1행, 학기 목록 / 학기별 배정 과목 / 학기별 기간을 통째로 저장 (upsert)

JSON 구조:
  semesters:         [{"id": 0, "year": 2025, "term": 1, "class_number": 1, "label": "", "months": ""}, ...]
  semester_subjects: {"0": [12, 15], "1": [3]}
  semester_dates:    {"0": {"start": "2024-11-15", "end": "2025-05-05"}}
"""
from sqlalchemy import Column, String, Integer, JSON, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from . import Base


class StudentPlan(Base):
    """학생 수강 계획 테이블"""
    __tablename__ = 'student_plans'

    id = Column(Integer, primary_key=True, autoincrement=True)

    # 학생당 1행 (upsert 기준 키)
    student_id = Column(String(36), ForeignKey('students.id', ondelete='CASCADE'), nullable=False, unique=True)

    semesters = Column(JSON, nullable=False)
    semester_subjects = Column(JSON, nullable=False)
    semester_dates = Column(JSON, nullable=False)

    updated_at = Column(DateTime, default=datetime.now, nullable=False)

    student = relationship("Student", back_populates="plan")

    def to_record(self):
        return {
            'semesters': self.semesters or [],
            'semester_subjects': self.semester_subjects or {},
            'semester_dates': self.semester_dates or {},
        }

    def __repr__(self):
        count = len(self.semesters or [])
        return f"<StudentPlan student={self.student_id} semesters={count}>"
