"""
PriorInstitutionSubject 데이터 모델
전적대(이전 교육기관) 이수 과목, 학기 배정과 무관하게 항상 분류별 학점에 합산
"""
import uuid
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, CheckConstraint
from datetime import datetime
from . import Base


class PriorInstitutionSubject(Base):
    """전적대 이수 과목 테이블"""
    __tablename__ = 'student_prev_subjects'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    student_id = Column(String(36), ForeignKey('students.id', ondelete='CASCADE'), nullable=False, index=True)

    category = Column(String(10), nullable=False)   # "전공" / "교양" / "일반"
    name = Column(String(255), nullable=False)
    credits = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=datetime.now, nullable=False)

    __table_args__ = (
        CheckConstraint('credits > 0', name='ck_prev_subject_credits_positive'),
    )

    def __repr__(self):
        return f"<PriorInstitutionSubject {self.name} [{self.category} {self.credits}]>"
