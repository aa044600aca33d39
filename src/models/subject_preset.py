"""
SubjectPreset 데이터 모델
과정 종류(구법/신법)별 기본 과목 목록, 학생 과목 목록이 비어 있을 때 자동으로 채워짐
"""
from sqlalchemy import Column, String, Integer, DateTime, Index
from datetime import datetime
from . import Base


class SubjectPreset(Base):
    """과목 프리셋 테이블"""
    __tablename__ = 'subject_presets'

    id = Column(Integer, primary_key=True, autoincrement=True)

    course_type = Column(String(10), nullable=False)    # "구법" / "신법"
    name = Column(String(255), nullable=False)
    credits = Column(Integer, nullable=False, default=3)
    subject_type = Column(String(10), nullable=False)   # "필수" / "선택"
    sort_order = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.now, nullable=False)

    __table_args__ = (
        Index('ix_subject_presets_type_order', 'course_type', 'sort_order'),
    )

    def to_dict(self):
        return {
            'name': self.name,
            'credits': self.credits,
            'subject_type': self.subject_type,
            'sort_order': self.sort_order,
        }

    def __repr__(self):
        return f"<SubjectPreset {self.course_type} {self.name} ({self.subject_type})>"
