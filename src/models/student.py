"""
Student 데이터 모델
학생 기본 정보 (학력, 전공, 희망학위, 개강반)

학생 등록/수정 화면은 이 패키지 범위 밖이며, 여기서는 읽기 전용으로 사용한다.
"""
import uuid
from sqlalchemy import Column, String, Integer, Boolean, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from . import Base


class Student(Base):
    """학생 테이블"""
    __tablename__ = 'students'

    # 기본키: uuid 문자열
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # 기본 정보
    name = Column(String(50), nullable=False)
    phone = Column(String(20), nullable=True)

    # 학력 / 전공 / 희망학위
    education_level = Column(String(20), nullable=True)   # "고졸", "2년제중퇴", ..., "4년제졸업"
    major = Column(String(100), nullable=True)            # 자유 입력 (독학사 전공 판정에 사용)
    desired_degree = Column(String(10), nullable=True)    # "없음" / "전문학사" / "학사"

    # 과정
    course_id = Column(Integer, ForeignKey('courses.id', ondelete='SET NULL'), nullable=True, index=True)
    status = Column(String(10), default='등록', nullable=False)
    manager_name = Column(String(50), nullable=True)

    # 개강반(기수): "2025년 1학기 1기,2025년 2학기 1기" 형식
    class_start = Column(Text, nullable=True)
    target_completion_date = Column(Date, nullable=True)
    all_care = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    # 관계
    course = relationship("Course", back_populates="students")
    plan = relationship(
        "StudentPlan",
        back_populates="student",
        uselist=False,
        cascade="all, delete-orphan"  # 학생 삭제 시 수강 계획도 삭제
    )

    @property
    def course_name(self):
        return self.course.name if self.course else None

    def __repr__(self):
        return f"<Student {self.id}: {self.name}>"

    def __str__(self):
        return f"{self.name} ({self.education_level or '학력 미입력'})"
