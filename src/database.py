"""
데이터베이스 연결 관리
"""
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import sessionmaker
from config import load_settings
from models import Base


class Database:
    """데이터베이스 연결 관리 클래스"""

    def __init__(self, database_url=None):
        """
        Args:
            database_url: 접속 URL. 없으면 환경 변수 설정을 사용
        """
        self.engine = None
        self.Session = None
        self._init_engine(database_url)

    def _init_engine(self, database_url):
        """데이터베이스 엔진 초기화"""
        if database_url is None:
            database_url = load_settings().build_database_url()

        if database_url.startswith('sqlite'):
            # SQLite (테스트/로컬) 는 커넥션 풀 옵션이 필요 없음
            self.engine = create_engine(database_url, echo=False)
        else:
            self.engine = create_engine(
                database_url,
                pool_pre_ping=True,      # 사용 전 ping 으로 연결 확인
                pool_recycle=3600,       # 1시간 후 연결 재생성
                echo=False,              # True 로 두면 모든 SQL 출력 (디버깅용)
            )

        self.Session = sessionmaker(bind=self.engine)

    def test_connection(self):
        """데이터베이스 연결 테스트"""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                print("✓ 데이터베이스 연결 성공!")
                print(f"접속 대상: {self.engine.url.render_as_string(hide_password=True)}")
                return True
        except Exception as e:
            print(f"✗ 데이터베이스 연결 실패: {e}")
            return False

    def create_tables(self):
        """모든 테이블 생성 (없는 테이블만 생성)"""
        try:
            Base.metadata.create_all(self.engine)
            print("✓ 테이블 생성/확인 완료!")
            inspector = inspect(self.engine)
            existing_tables = inspector.get_table_names()
            expected_tables = [t.name for t in Base.metadata.sorted_tables]
            missing = [t for t in expected_tables if t not in existing_tables]
            if missing:
                print(f"⚠️ 생성되지 않은 테이블: {missing}")
                return False
            print(f"  확인된 테이블 {len(expected_tables)}개: {expected_tables}")
            return True
        except Exception as e:
            print(f"✗ 테이블 생성 실패: {e}")
            return False

    def reset_tables(self):
        """모든 테이블 삭제 후 재생성 (위험! 모든 데이터가 삭제됨)"""
        try:
            print("모든 테이블 삭제 중...")
            Base.metadata.drop_all(self.engine)
            print("모든 테이블 재생성 중...")
            Base.metadata.create_all(self.engine)
            print("✓ 테이블 재생성 완료!")
            return True
        except Exception as e:
            print(f"✗ 테이블 재생성 실패: {e}")
            return False

    def get_session(self):
        """데이터베이스 세션 반환"""
        return self.Session()
