"""
Course 데이터 모델
교육 과정 (예: 사회복지사2급(구법), 사회복지사 실습)
"""
from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from . import Base


class Course(Base):
    """과정 테이블"""
    __tablename__ = 'courses'

    # 기본키: 자동 증가 정수
    id = Column(Integer, primary_key=True, autoincrement=True)

    # 과정명: 프리셋 종류(구법/신법)와 실습 여부가 이름으로 판별됨
    name = Column(String(100), nullable=False)

    created_at = Column(DateTime, default=datetime.now, nullable=False)

    # 관계: 일대다 → Student
    students = relationship("Student", back_populates="course")

    @property
    def preset_type(self):
        """
        과정명에서 프리셋 종류 추출

        Returns:
            str | None: "구법" / "신법" / None
        """
        for course_type in ('구법', '신법'):
            if course_type in (self.name or ''):
                return course_type
        return None

    def __repr__(self):
        return f"<Course {self.id}: {self.name}>"

    def __str__(self):
        return self.name
