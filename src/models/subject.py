"""
Subject 데이터 모델
수강 과목 (전공/교양/일반)

소유 구분:
  - student_id 가 NULL → 전체 학생에게 보이는 공용 과목 (학생 화면에서 수정/삭제 불가)
  - student_id 가 있음 → 해당 학생이 직접 추가한 과목
"""
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from . import Base


SUBJECT_CATEGORIES = ('전공', '교양', '일반')
SUBJECT_KINDS = ('이론', '실습')
SUBJECT_TYPES = ('필수', '선택')


class Subject(Base):
    """과목 테이블"""
    __tablename__ = 'subjects'

    # 기본키: 자동 증가 정수
    id = Column(Integer, primary_key=True, autoincrement=True)

    # 과목 정보
    category = Column(String(10), nullable=False)               # "전공" / "교양" / "일반"
    name = Column(String(255), nullable=False)
    credits = Column(Integer, nullable=False, default=3)
    type = Column(String(10), nullable=False, default='이론')   # "이론" / "실습"
    subject_type = Column(String(10), nullable=True)            # "필수" / "선택" / NULL

    # 소유 학생 (NULL = 공용 과목)
    student_id = Column(String(36), ForeignKey('students.id', ondelete='CASCADE'), nullable=True, index=True)

    created_at = Column(DateTime, default=datetime.now, nullable=False)

    student = relationship("Student")

    __table_args__ = (
        CheckConstraint('credits > 0', name='ck_subject_credits_positive'),
    )

    @property
    def ownership(self):
        """'global' 또는 'student'"""
        return 'global' if self.student_id is None else 'student'

    def is_owned_by(self, student_id):
        return self.student_id is not None and self.student_id == student_id

    def __repr__(self):
        return f"<Subject {self.id}: {self.name} [{self.category} {self.credits}]>"

    def __str__(self):
        return f"{self.name} ({self.category}, {self.credits}학점)"
