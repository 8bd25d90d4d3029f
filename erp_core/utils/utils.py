"""
ERP 코어 - 유틸리티 모듈

로거 설정, 한국 표준시(KST) 변환, 날짜 파싱 유틸리티 함수를 제공합니다.
"""

import datetime
import logging
from typing import Optional, Union

from pytz import FixedOffset, utc

# 한국 표준시 (UTC+9, 서머타임 없음)
KST = FixedOffset(9 * 60)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

DateLike = Union[datetime.datetime, datetime.date, str]

logger = logging.getLogger(__name__)


def setup_logger(log_level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    erp_core 로거 설정

    여러 번 호출해도 핸들러가 중복되지 않도록 기존 핸들러를 교체합니다.

    Args:
        log_level: 로그 레벨 이름 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: 로그 파일 경로 (None 이면 콘솔만 사용)

    Returns:
        설정된 erp_core 로거
    """
    root = logging.getLogger("erp_core")
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.propagate = False
    return root


def now_utc() -> datetime.datetime:
    """현재 시각 (UTC, tz-aware)"""
    return datetime.datetime.now(utc)


def to_kst(dt: datetime.datetime) -> datetime.datetime:
    """
    시각을 한국 표준시로 변환

    naive datetime 은 UTC 시각으로 간주합니다. 호스트 로컬 시간대에 의존하지 않기 위함입니다.

    Args:
        dt: 변환할 시각

    Returns:
        KST 기준 tz-aware datetime
    """
    if dt.tzinfo is None:
        dt = utc.localize(dt)
    return dt.astimezone(KST)


def kst_date(value: Optional[Union[datetime.datetime, datetime.date]] = None) -> datetime.date:
    """
    KST 기준 달력 날짜

    Args:
        value: 기준 시각 또는 날짜, None 이면 현재 시각

    Returns:
        KST 달력 날짜
    """
    if value is None:
        value = now_utc()
    if isinstance(value, datetime.datetime):
        return to_kst(value).date()
    return value


def parse_datetime(value: DateLike) -> Optional[datetime.datetime]:
    """
    날짜/시각 값을 tz-aware datetime 으로 변환

    Args:
        value: datetime, date 또는 ISO 8601 문자열 ('Z' 접미사 허용)

    Returns:
        tz-aware datetime, 해석할 수 없으면 None
    """
    if isinstance(value, datetime.datetime):
        return value if value.tzinfo is not None else utc.localize(value)

    if isinstance(value, datetime.date):
        # 날짜만 주어지면 KST 자정으로 해석
        return KST.localize(datetime.datetime(value.year, value.month, value.day))

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = utc.localize(parsed)
    return parsed
