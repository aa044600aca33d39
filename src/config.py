"""
환경 설정
.env 파일과 환경 변수에서 설정값을 읽어온다
"""
import os
from dotenv import load_dotenv

# .env 파일의 환경 변수 로드
load_dotenv()


class Settings:
    """애플리케이션 설정"""

    def __init__(self):
        # 데이터베이스
        self.database_url = os.getenv('DATABASE_URL')
        self.db_host = os.getenv('DB_HOST')
        self.db_port = os.getenv('DB_PORT', '3306')
        self.db_name = os.getenv('DB_NAME')
        self.db_user = os.getenv('DB_USER')
        self.db_password = os.getenv('DB_PASSWORD')

        # 수강 계획 자동 저장 (debounce, 밀리초)
        self.autosave_delay_ms = int(os.getenv('PLAN_AUTOSAVE_DELAY_MS', '800'))

        # 독학사 전공 판정 방식: exact | normalized
        self.self_study_major_match = os.getenv('SELF_STUDY_MAJOR_MATCH', 'exact')

        # 학점은행 과목 검색
        self.credit_bank_base_url = os.getenv('CREDIT_BANK_BASE_URL', 'https://www.cb.or.kr')
        self.credit_bank_timeout = int(os.getenv('CREDIT_BANK_TIMEOUT', '30'))

        # 활동 로그에 기록할 기본 사용자 이름
        self.actor_name = os.getenv('ACTIVITY_ACTOR_NAME', '알 수 없음')

    def build_database_url(self):
        """
        데이터베이스 접속 URL 생성

        DATABASE_URL 이 있으면 그대로 사용하고,
        없으면 DB_* 설정으로 MySQL URL 을 만든다.

        Raises:
            ValueError: 필수 설정이 누락된 경우
        """
        if self.database_url:
            return self.database_url

        if not all([self.db_host, self.db_name, self.db_user, self.db_password]):
            raise ValueError(
                "데이터베이스 설정이 불완전합니다! .env 파일에 다음 항목이 모두 있는지 확인하세요:\n"
                "DB_HOST, DB_PORT, DB_NAME, DB_USER, DB_PASSWORD (또는 DATABASE_URL)"
            )

        return (
            f"mysql+pymysql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


def load_settings():
    """현재 환경 변수 기준으로 Settings 생성"""
    return Settings()
