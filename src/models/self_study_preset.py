"""
SelfStudyPreset 데이터 모델
독학사 단계별 과목 프리셋 (category = 교양 또는 학과명)
"""
from sqlalchemy import Column, String, Integer, DateTime, Index
from datetime import datetime
from . import Base


class SelfStudyPreset(Base):
    """독학사 프리셋 테이블"""
    __tablename__ = 'dokaksa_presets'

    id = Column(Integer, primary_key=True, autoincrement=True)

    stage = Column(Integer, nullable=False)                        # 1 ~ 4
    category = Column(String(50), nullable=False, default='교양')  # "교양" 또는 "심리학" 등 학과명
    name = Column(String(255), nullable=False)
    credits = Column(Integer, nullable=False, default=4)
    subject_type = Column(String(10), nullable=False)              # "필수" / "선택" / "전공"
    sort_order = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.now, nullable=False)

    __table_args__ = (
        Index('ix_dokaksa_presets_stage_category', 'stage', 'category'),
    )

    def to_dict(self):
        return {
            'stage': self.stage,
            'category': self.category,
            'name': self.name,
            'credits': self.credits,
            'subject_type': self.subject_type,
            'sort_order': self.sort_order,
        }

    def __repr__(self):
        return f"<SelfStudyPreset {self.stage}단계 {self.category} {self.name}>"
