"""
학점은행 과목 검색 서비스
전적대 이수 과목 이름 입력을 돕기 위한 외부 검색, 결과는 자유 텍스트로만 사용
"""
import re
import time
import requests
from config import load_settings


_RESULT_PATTERN = re.compile(
    r"""fnReturnData\s*\(\s*['"]([^'"]+)['"]\s*,\s*['"]([^'"]+)['"]\s*\)"""
)


def parse_search_results(html):
    """
    검색 결과 HTML 에서 과목 목록 추출

    fnReturnData('00001538', '사회복지개론') 형태의 호출을 찾는다.

    Returns:
        list: [{'id': ..., 'name': ...}, ...]
    """
    return [
        {'id': m.group(1), 'name': m.group(2)}
        for m in _RESULT_PATTERN.finditer(html or '')
    ]


class CreditBankService:
    """학점은행 과목 검색 클래스"""

    SEARCH_PAGE = '/creditbank/stuHelp/nStuHelp7_1.do'
    SEARCH_ENDPOINT = '/cmmn/popup/nEtcGrMajorYomokSearch.do'
    USER_AGENT = 'Mozilla/5.0 (compatible)'

    # 세션 쿠키 재사용 시간 (초)
    COOKIE_TTL = 60 * 10

    def __init__(self, base_url=None, timeout=None, clock=time.monotonic):
        settings = load_settings()
        self.base_url = (base_url or settings.credit_bank_base_url).rstrip('/')
        self.timeout = timeout or settings.credit_bank_timeout
        self.clock = clock
        self.session = requests.Session()
        self.session.headers['User-Agent'] = self.USER_AGENT
        self._cookie_fetched_at = None

    def _ensure_session_cookie(self):
        """검색 페이지를 한 번 열어 세션 쿠키를 받아 둔다 (10분간 재사용)"""
        now = self.clock()
        if self._cookie_fetched_at is not None and now - self._cookie_fetched_at < self.COOKIE_TTL:
            return
        response = self.session.get(self.base_url + self.SEARCH_PAGE, timeout=self.timeout)
        response.raise_for_status()
        self._cookie_fetched_at = now

    def search_subjects(self, query):
        """
        과목명 검색

        Args:
            query: 검색어

        Returns:
            list: [{'id': ..., 'name': ...}, ...], 실패하면 빈 목록
        """
        query = (query or '').strip()
        if not query:
            return []

        form = {
            'm_szGrId': 'A',
            'm_szMajorId': 'AGAE',
            'm_szGrIdOri': 'A',
            'm_szMajorIdOri': 'AGAE',
            'm_szEtcYomokNm': query,
        }

        try:
            self._ensure_session_cookie()
            response = self.session.post(
                self.base_url + self.SEARCH_ENDPOINT,
                data=form,
                headers={'Referer': self.base_url + self.SEARCH_PAGE},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return parse_search_results(response.text)
        except requests.exceptions.RequestException as e:
            print(f"✗ 학점은행 검색 실패 ({query}): {e}")
            return []
