"""
ERP 코어 - 한국수출입은행 환율 API 클라이언트

한국수출입은행 현재환율 API(AP01)에서 위안화(CNH) 매매기준율을 조회합니다.
API 실패는 예외로 올리지 않고 로그를 남긴 뒤 None 을 반환하며,
호출자는 환율 결정 정책(당일 → 최근 → 기본값)으로 넘어갑니다.
"""

from datetime import date
from typing import Any, Iterable, Optional
import logging

import requests

from erp_core.config import ExchangeRateConfig, get_config
from erp_core.domain.currency import last_business_day, resolve_rate
from erp_core.domain.value_objects import ExchangeRateSnapshot
from erp_core.utils.utils import kst_date

logger = logging.getLogger(__name__)

CNY_UNIT = "CNH"
SOURCE_BANK = "api_bank"

# result 코드 (1: 성공)
RESULT_MESSAGES = {
    2: "DATA 코드 오류",
    3: "인증코드 오류",
    4: "일일제한횟수 마감",
}


def parse_exim_response(payload: Any) -> Optional[float]:
    """
    API 응답에서 위안화 매매기준율 추출

    Args:
        payload: API 응답 JSON (통화별 항목의 리스트)

    Returns:
        1 CNY 당 KRW, 응답이 올바르지 않으면 None
    """
    if not isinstance(payload, list) or not payload:
        logger.error("한국수출입은행 API 응답 형식 오류")
        return None

    first = payload[0] if isinstance(payload[0], dict) else {}
    result_code = first.get("result")
    if result_code != 1:
        logger.error(f"한국수출입은행 API 오류: {RESULT_MESSAGES.get(result_code, 'Unknown error')}")
        return None

    for item in payload:
        if isinstance(item, dict) and item.get("cur_unit") == CNY_UNIT and item.get("deal_bas_r"):
            # 매매기준율은 쉼표가 포함된 문자열
            try:
                rate = float(str(item["deal_bas_r"]).replace(",", ""))
            except ValueError:
                logger.error(f"매매기준율 해석 실패: {item['deal_bas_r']!r}")
                return None
            return rate if rate > 0 else None

    logger.warning("응답에 CNH 환율이 없습니다")
    return None


class EximRateClient:
    """한국수출입은행 환율 API 클라이언트"""

    def __init__(self, config: Optional[ExchangeRateConfig] = None):
        """
        Args:
            config: 환율 API 설정 (None 이면 전역 설정 사용)
        """
        self.config = config or get_config().exchange_rate

    def fetch_cny_rate(self, search_date: Optional[date] = None) -> Optional[float]:
        """
        위안화 환율 조회

        Args:
            search_date: 조회 날짜, None 이면 KST 기준 가장 최근 영업일

        Returns:
            1 CNY 당 KRW, 실패 시 None
        """
        if not self.config.api_key:
            logger.error("KOREA_EXIM_API_KEY 가 설정되지 않았습니다")
            return None

        if search_date is None:
            search_date = last_business_day(kst_date())

        params = {
            "authkey": self.config.api_key,
            "searchdate": search_date.strftime("%Y%m%d"),
            "data": "AP01",
        }

        try:
            res = requests.get(self.config.base_url, params=params, timeout=self.config.timeout_seconds)
            res.raise_for_status()
            payload = res.json()
        except requests.exceptions.HTTPError as http_err:
            logger.error(f"한국수출입은행 API HTTP 오류: {http_err}")
            return None
        except requests.exceptions.RequestException as req_err:
            logger.error(f"한국수출입은행 API 요청 실패: {req_err}")
            return None
        except ValueError as json_err:
            logger.error(f"한국수출입은행 API 응답 JSON 파싱 실패: {json_err}")
            return None

        rate = parse_exim_response(payload)
        if rate is not None:
            logger.info(f"환율 조회 성공: 1 CNY = {rate} KRW ({params['searchdate']})")
        return rate

    def current_rate(self, today: Optional[date] = None,
                     history: Iterable[ExchangeRateSnapshot] = ()) -> ExchangeRateSnapshot:
        """
        오늘 사용할 환율

        API 조회에 성공하면 그 값을, 실패하면 보유 이력에서 결정합니다.

        Args:
            today: 기준 날짜 (None 이면 KST 오늘)
            history: 보유 중인 환율 스냅샷

        Returns:
            ExchangeRateSnapshot
        """
        today = today or kst_date()
        rate = self.fetch_cny_rate(last_business_day(today))
        if rate is not None:
            return ExchangeRateSnapshot(rate=rate, as_of_date=today, source=SOURCE_BANK)
        return resolve_rate(today, history)
