"""
활동 로그 기록
실패해도 예외를 던지지 않는다, 원래 작업을 막거나 되돌리지 않음
"""
from sqlalchemy.exc import SQLAlchemyError
from models import ActivityLog


class ActivityLogRepository:
    """활동 로그 데이터 접근 클래스"""

    def __init__(self, session):
        """
        Args:
            session: SQLAlchemy 데이터베이스 세션
        """
        self.session = session

    def log_activity(self, user_name, action, target_type=None, target_name=None, detail=None):
        """
        활동 로그 한 건 기록

        Returns:
            bool: 기록 성공 여부
        """
        try:
            self.session.add(ActivityLog(
                user_name=user_name or '알 수 없음',
                action=action,
                target_type=target_type,
                target_name=target_name,
                detail=detail,
            ))
            self.session.commit()
            return True
        except SQLAlchemyError as e:
            self.session.rollback()
            print(f"⚠️ 활동 로그 기록 실패 ({action}): {e}")
            return False

    def list_recent(self, limit=100):
        return self.session.query(ActivityLog).order_by(
            ActivityLog.created_at.desc()
        ).limit(limit).all()
