"""
ActivityLog 데이터 모델
관리자 활동 로그 (감사 기록)
"""
import uuid
from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime
from . import Base


class ActivityLog(Base):
    """활동 로그 테이블"""
    __tablename__ = 'activity_logs'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    user_name = Column(String(50), nullable=False)
    action = Column(String(50), nullable=False)       # "과목 추가", "학기 삭제" ...
    target_type = Column(String(30), nullable=True)   # "subject", "semester" ...
    target_name = Column(String(255), nullable=True)
    detail = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.now, nullable=False, index=True)

    def __repr__(self):
        return f"<ActivityLog {self.user_name}: {self.action} {self.target_name or ''}>"
