"""
SelfStudyCredit 데이터 모델
독학사 취득 학점

credit_type 은 등록 시점에 결정된다 (services.catalog_service.classify_self_study_credit 참고):
  - 1단계 → 교양
  - 2단계 이상 → 프리셋 분류가 학생 전공과 같으면 전공, 아니면 일반
"""
import uuid
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, CheckConstraint
from datetime import datetime
from . import Base


class SelfStudyCredit(Base):
    """독학사 학점 테이블"""
    __tablename__ = 'student_dokaksa'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    student_id = Column(String(36), ForeignKey('students.id', ondelete='CASCADE'), nullable=False, index=True)

    stage = Column(Integer, nullable=False)              # 1 ~ 4 단계
    subject_name = Column(String(255), nullable=False)
    credits = Column(Integer, nullable=False)
    credit_type = Column(String(10), nullable=False)     # "전공" / "일반" / "교양"

    created_at = Column(DateTime, default=datetime.now, nullable=False)

    __table_args__ = (
        CheckConstraint('stage BETWEEN 1 AND 4', name='ck_dokaksa_stage_range'),
        CheckConstraint('credits > 0', name='ck_dokaksa_credits_positive'),
    )

    @property
    def stage_label(self):
        return f"{self.stage}단계"

    def __repr__(self):
        return f"<SelfStudyCredit {self.stage_label} {self.subject_name} [{self.credit_type} {self.credits}]>"
