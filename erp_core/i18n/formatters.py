"""
ERP 코어 - 다국어 표시 형식

날짜, 숫자, 통화, 전화번호, 상대 시간을 언어별 문법으로 표시합니다.

- 날짜는 항상 한국 표준시(KST) 기준으로 표시
- 반올림은 0에서 먼 쪽으로 (ROUND_HALF_UP)
- 지원하지 않는 언어는 한국어로 처리
"""

from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional, Union
import math
import re

from pytz import utc

from erp_core.utils.utils import now_utc, parse_datetime, to_kst
from .locales import Locale, MessageKey, resolve_locale, translate

LocaleLike = Optional[Union[str, Locale]]

CURRENCY_SYMBOLS: Dict[str, str] = {
    "KRW": "₩",
    "CNY": "¥",
    "USD": "$",
}

# 소수점 없이 표시하는 통화
ZERO_DECIMAL_CURRENCIES = frozenset({"KRW"})

FILE_SIZE_UNITS = ("KB", "MB", "GB", "TB")


def _round(value: Union[int, float, Decimal], places: int) -> Decimal:
    exponent = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)
    return rounded.copy_abs() if rounded.is_zero() else rounded


def _grouped(value: Union[int, float, Decimal], places: int) -> str:
    """천 단위 구분 후 소수점 places 자리 문자열, NaN 과 무한대는 기호로 표시"""
    number = Decimal(str(value))
    if number.is_nan():
        return "NaN"
    if number.is_infinite():
        return "-∞" if number.is_signed() else "∞"
    return f"{_round(number, places):,.{places}f}"


def _to_datetime(value: Any) -> Optional[datetime]:
    # 숫자는 epoch 밀리초
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            return None
        return datetime.fromtimestamp(value / 1000, tz=utc)
    return parse_datetime(value)


# ── 날짜 ─────────────────────────────────────────────

def format_date(value: Any, locale: LocaleLike = None) -> str:
    """
    날짜 표시 (예: 2024년 8월 23일, 2024年8月23日)

    Args:
        value: datetime, date, ISO 8601 문자열 또는 epoch 밀리초
        locale: 언어

    Returns:
        표시 문자열. None 이면 빈 문자열, 해석할 수 없으면 "Invalid Date"
    """
    if value is None:
        return ""

    if isinstance(value, date) and not isinstance(value, datetime):
        day = value
    else:
        parsed = _to_datetime(value)
        if parsed is None:
            return translate(MessageKey.INVALID_DATE, locale)
        day = to_kst(parsed).date()

    return translate(MessageKey.DATE_LONG, locale, year=day.year, month=day.month, day=day.day)


def format_date_time(value: Any, locale: LocaleLike = None) -> str:
    """날짜와 시각 표시 (예: 2024년 8월 23일 19:30)"""
    if value is None:
        return ""

    parsed = _to_datetime(value)
    if parsed is None:
        return translate(MessageKey.INVALID_DATE, locale)

    local = to_kst(parsed)
    return translate(MessageKey.DATE_TIME, locale, year=local.year, month=local.month, day=local.day,
                     hour=local.hour, minute=local.minute)


def format_relative_time(value: Any, locale: LocaleLike = None, now: Optional[datetime] = None) -> str:
    """
    상대 시간 표시 (예: 방금 전, 30분 전, 3시간 전, 2일 전)

    미래 시각은 상대 표현 대신 format_date 로 표시합니다.

    Args:
        value: 표시할 시각
        locale: 언어
        now: 기준 시각, None 이면 현재 시각

    Returns:
        표시 문자열. None 이면 빈 문자열, value 나 now 를 해석할 수 없으면 "Invalid Date"
    """
    if value is None:
        return ""

    parsed = _to_datetime(value)
    if parsed is None:
        return translate(MessageKey.INVALID_DATE, locale)

    reference = parse_datetime(now) if now is not None else now_utc()
    if reference is None:
        return translate(MessageKey.INVALID_DATE, locale)
    seconds = (reference - parsed).total_seconds()

    if seconds < 0:
        return format_date(parsed, locale)
    if seconds < 60:
        return translate(MessageKey.JUST_NOW, locale)

    minutes = int(seconds // 60)
    if minutes < 60:
        return translate(MessageKey.MINUTES_AGO, locale, n=minutes)

    hours = minutes // 60
    if hours < 24:
        return translate(MessageKey.HOURS_AGO, locale, n=hours)

    return translate(MessageKey.DAYS_AGO, locale, n=hours // 24)


# ── 숫자/통화 ────────────────────────────────────────

def format_number(value: Union[int, float, Decimal], locale: LocaleLike = None) -> str:
    """
    숫자 표시

    천 단위 구분, 소수점은 최대 2자리까지 (끝의 0은 생략)

    Args:
        value: 숫자
        locale: 언어 (두 언어 모두 같은 구분 기호 사용)
    """
    text = _grouped(value, 2)
    if "." not in text:
        return text
    return text.rstrip("0").rstrip(".")


def format_currency(amount: Union[int, float, Decimal], currency_code: str = "KRW",
                    locale: LocaleLike = None) -> str:
    """
    통화 표시 (예: ₩10,000, ¥100.00, $99.99)

    KRW 는 소수점 없이, 그 외 통화는 소수점 둘째 자리까지 표시합니다.
    음수는 기호 뒤, 숫자 바로 앞에 부호를 붙입니다 (예: ₩-1,000).
    기호가 없는 통화는 코드로 표시합니다 (예: EUR 1,000.00).

    Args:
        amount: 금액
        currency_code: ISO 4217 통화 코드
        locale: 언어
    """
    code = (currency_code or "KRW").upper()
    places = 0 if code in ZERO_DECIMAL_CURRENCIES else 2
    number = _grouped(amount, places)

    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{code} {number}"
    return f"{symbol}{number}"


def format_percent(value: Union[int, float, Decimal], locale: LocaleLike = None, decimals: int = 1) -> str:
    """백분율 표시 (0.125 → 12.5%)"""
    percent = Decimal(str(value)) * 100
    return f"{_grouped(percent, decimals)}%"


def format_file_size(size_bytes: int, locale: LocaleLike = None) -> str:
    """
    파일 크기 표시 (1024 단위)

    Returns:
        예) "0 바이트", "1.50 KB", "2.00 MB"
    """
    if size_bytes < 0:
        raise ValueError(f"파일 크기는 음수일 수 없습니다: {size_bytes}")

    bytes_unit = translate(MessageKey.FILE_SIZE_BYTES, locale)
    if size_bytes == 0:
        return f"0 {bytes_unit}"

    exponent = 0
    while exponent < len(FILE_SIZE_UNITS) and size_bytes >= 1024 ** (exponent + 1):
        exponent += 1

    unit = bytes_unit if exponent == 0 else FILE_SIZE_UNITS[exponent - 1]
    return f"{size_bytes / 1024 ** exponent:.2f} {unit}"


# ── 전화번호 ─────────────────────────────────────────

def _phone_groups(digits: str) -> Optional[tuple]:
    """숫자만 남긴 전화번호를 국번 단위로 나눔, 알 수 없는 형식이면 None"""
    if len(digits) == 11 and digits.startswith("01"):
        return digits[:3], digits[3:7], digits[7:]
    if len(digits) == 10:
        if digits.startswith("02"):
            return digits[:2], digits[2:6], digits[6:]
        return digits[:3], digits[3:6], digits[6:]
    return None


def format_phone_number(raw: Optional[str], locale: LocaleLike = None) -> str:
    """
    전화번호 표시

    한국어에서만 하이픈 위치를 다시 잡습니다.
    - 11자리 휴대전화: 010-1234-5678
    - 10자리 휴대전화: 010-123-4567
    - 서울: 02-1234-5678
    - 기타 지역번호: 031-123-4567

    알 수 없는 형식이거나 중국어이면 입력을 그대로 반환합니다.
    """
    if not raw:
        return ""

    if resolve_locale(locale) is not Locale.KO:
        return raw

    groups = _phone_groups(re.sub(r"\D", "", raw))
    if groups is None:
        return raw
    return "-".join(groups)


def mask_phone_number(raw: Optional[str]) -> str:
    """전화번호 가운데 자리 마스킹 (010-****-5678)"""
    if not raw:
        return ""

    groups = _phone_groups(re.sub(r"\D", "", raw))
    if groups is None:
        return raw

    head, middle, tail = groups
    return f"{head}-{'*' * len(middle)}-{tail}"


# ── 도메인 값 ────────────────────────────────────────

_STATUS_KEYS = {
    "PAID": MessageKey.STATUS_PAID,
    "SHIPPED": MessageKey.STATUS_SHIPPED,
    "DONE": MessageKey.STATUS_DONE,
    "REFUNDED": MessageKey.STATUS_REFUNDED,
}


def format_order_status(status: Any, locale: LocaleLike = None) -> str:
    """주문 상태 표시 이름, 알 수 없는 상태는 그대로 반환"""
    code = getattr(status, "value", status)
    key = _STATUS_KEYS.get(str(code))
    return translate(key, locale) if key else str(code)


def format_exchange_rate(rate: float, locale: LocaleLike = None) -> str:
    """환율 표시 (예: 환율: 1 CNY = 178.50 KRW)"""
    return f"{translate(MessageKey.EXCHANGE_RATE, locale)}: 1 CNY = {_grouped(rate, 2)} KRW"
