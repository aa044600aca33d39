"""
프리셋 데이터 접근 계층
구법/신법 과목 프리셋, 독학사 프리셋
"""
from sqlalchemy.exc import SQLAlchemyError
from models import SubjectPreset, SelfStudyPreset


class PresetRepository:
    """프리셋 데이터 접근 클래스"""

    def __init__(self, session):
        """
        Args:
            session: SQLAlchemy 데이터베이스 세션
        """
        self.session = session

    def fetch_preset_subjects(self, course_type):
        """
        과정 종류별 과목 프리셋

        Args:
            course_type: "구법" / "신법"

        Returns:
            SubjectPreset 목록 (sort_order 순)
        """
        return self.session.query(SubjectPreset).filter(
            SubjectPreset.course_type == course_type
        ).order_by(SubjectPreset.sort_order, SubjectPreset.id).all()

    def fetch_self_study_presets(self, stage=None):
        """
        독학사 프리셋

        Args:
            stage: 단계 (None 이면 전체)

        Returns:
            SelfStudyPreset 목록 (단계, 분류, sort_order 순)
        """
        query = self.session.query(SelfStudyPreset)
        if stage is not None:
            query = query.filter(SelfStudyPreset.stage == stage)
        return query.order_by(
            SelfStudyPreset.stage, SelfStudyPreset.category,
            SelfStudyPreset.sort_order, SelfStudyPreset.id,
        ).all()

    def find_self_study_presets(self, stage, name):
        """단계 + 과목명으로 독학사 프리셋 검색 (같은 과목명이 여러 학과에 있을 수 있음)"""
        return self.session.query(SelfStudyPreset).filter(
            SelfStudyPreset.stage == stage,
            SelfStudyPreset.name == name,
        ).order_by(SelfStudyPreset.id).all()

    def replace_subject_presets(self, course_type, presets):
        """
        과정 종류의 과목 프리셋 전체 교체

        Returns:
            bool: 성공 여부
        """
        try:
            self.session.query(SubjectPreset).filter(
                SubjectPreset.course_type == course_type
            ).delete(synchronize_session=False)
            self.session.add_all(presets)
            self.session.commit()
            return True
        except SQLAlchemyError as e:
            self.session.rollback()
            print(f"✗ 과목 프리셋 교체 실패 {course_type}: {e}")
            return False

    def replace_self_study_presets(self, stage, presets):
        """
        단계별 독학사 프리셋 전체 교체

        Returns:
            bool: 성공 여부
        """
        try:
            self.session.query(SelfStudyPreset).filter(
                SelfStudyPreset.stage == stage
            ).delete(synchronize_session=False)
            self.session.add_all(presets)
            self.session.commit()
            return True
        except SQLAlchemyError as e:
            self.session.rollback()
            print(f"✗ 독학사 프리셋 교체 실패 {stage}단계: {e}")
            return False
