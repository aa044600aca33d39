"""
CertificateCredit 데이터 모델
학점인정 자격증, 분류 없이 총 학점에만 더해짐
"""
import uuid
from sqlalchemy import Column, String, Integer, Date, DateTime, ForeignKey, CheckConstraint
from datetime import datetime
from . import Base


class CertificateCredit(Base):
    """학점인정 자격증 테이블"""
    __tablename__ = 'student_credit_certs'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    student_id = Column(String(36), ForeignKey('students.id', ondelete='CASCADE'), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    credits = Column(Integer, nullable=False)
    acquired_date = Column(Date, nullable=True)

    created_at = Column(DateTime, default=datetime.now, nullable=False)

    __table_args__ = (
        CheckConstraint('credits > 0', name='ck_cert_credits_positive'),
    )

    def __repr__(self):
        return f"<CertificateCredit {self.name} ({self.credits})>"
