"""
ERP 코어 - 통화 환산

KRW ↔ CNY 양방향 환산과 이중 통화 입력 동기화, 환율 결정 정책을 담당합니다.

환율은 항상 1 CNY 당 KRW 로 표현합니다.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Iterable, Optional, Union
import logging
import math

from .value_objects import DomainValidationError, ExchangeRateSnapshot

logger = logging.getLogger(__name__)

# 과거 환율이 전혀 없을 때 사용하는 기본 환율. 재무 합계가 이 값에 의존하므로 변경 금지.
DEFAULT_CNY_KRW_RATE = 178.50

Number = Union[int, float, Decimal]


class Currency(Enum):
    """지원 통화"""
    KRW = "KRW"
    CNY = "CNY"

    @classmethod
    def parse(cls, value: Union[str, Currency]) -> Currency:
        """문자열을 통화로 변환 (대소문자 무시)"""
        if isinstance(value, Currency):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise DomainValidationError(f"지원하지 않는 통화입니다: {value}")


@dataclass(frozen=True)
class Conversion:
    """환산 결과"""
    krw: float
    cny: float
    rate: float


def _check_rate(rate: Number) -> float:
    try:
        value = float(rate)
    except (TypeError, ValueError):
        raise DomainValidationError(f"환율은 숫자여야 합니다: {rate!r}")
    if not math.isfinite(value) or value <= 0:
        raise DomainValidationError(f"Exchange rate must be positive: {rate}")
    return value


def _check_amount(amount: Number) -> float:
    try:
        return float(amount)
    except (TypeError, ValueError):
        raise DomainValidationError(f"금액은 숫자여야 합니다: {amount!r}")


def convert(amount: Number, from_currency: Union[str, Currency], rate: Number) -> Conversion:
    """
    금액 환산

    Args:
        amount: 금액
        from_currency: 입력 금액의 통화 (KRW 또는 CNY)
        rate: 1 CNY 당 KRW

    Returns:
        Conversion(krw, cny, rate)

    Raises:
        DomainValidationError: 금액이 숫자가 아니거나 환율이 0 이하이거나 통화가 잘못된 경우
    """
    exchange_rate = _check_rate(rate)
    currency = Currency.parse(from_currency)
    value = _check_amount(amount)

    if currency is Currency.CNY:
        return Conversion(krw=value * exchange_rate, cny=value, rate=exchange_rate)
    return Conversion(krw=value, cny=value / exchange_rate, rate=exchange_rate)


# ── 표시 형식 ───────────────────────────────────────

def _quantize(amount: Number, places: int) -> Decimal:
    exponent = Decimal(1).scaleb(-places)
    quantized = Decimal(str(amount)).quantize(exponent, rounding=ROUND_HALF_UP)
    # -0 은 0 으로 표시
    return quantized.copy_abs() if quantized.is_zero() else quantized


def format_krw(amount: Number) -> str:
    """KRW 표시: 천 단위 구분, 소수점 없음"""
    return f"{_quantize(amount, 0):,}"


def format_cny(amount: Number) -> str:
    """CNY 표시: 소수점 둘째 자리 고정"""
    return f"{_quantize(amount, 2):,.2f}"


def parse_amount(text: Union[str, Number, None]) -> float:
    """
    사용자 입력 금액 파싱

    쉼표와 통화 기호를 제거하고, 해석할 수 없으면 0 을 반환합니다.
    """
    if text is None:
        return 0.0
    if isinstance(text, (int, float, Decimal)):
        value = float(text)
        return value if math.isfinite(value) else 0.0

    cleaned = str(text).replace(",", "").replace("₩", "").replace("¥", "").strip()
    try:
        value = float(Decimal(cleaned))
    except (InvalidOperation, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


class DualCurrencyField:
    """
    이중 통화 입력 동기화

    한쪽 입력을 수정하면 같은 환율로 반대쪽 값을 다시 계산합니다.
    편집 중인 쪽은 덮어쓰지 않으므로 반복 입력으로 반올림 오차가 누적되지 않습니다.
    """

    def __init__(self, rate: Number = DEFAULT_CNY_KRW_RATE, krw: Number = 0, cny: Number = 0):
        self.rate = _check_rate(rate)
        self.krw = float(krw)
        self.cny = float(cny)
        self.active: Optional[Currency] = None

    def edit_krw(self, value: Union[str, Number]) -> Conversion:
        """KRW 입력 수정 → CNY 재계산"""
        self.active = Currency.KRW
        result = convert(parse_amount(value), Currency.KRW, self.rate)
        self.krw = result.krw
        self.cny = result.cny
        return result

    def edit_cny(self, value: Union[str, Number]) -> Conversion:
        """CNY 입력 수정 → KRW 재계산"""
        self.active = Currency.CNY
        result = convert(parse_amount(value), Currency.CNY, self.rate)
        self.cny = result.cny
        self.krw = result.krw
        return result

    def blur(self) -> None:
        """입력 포커스 해제"""
        self.active = None

    def set_rate(self, rate: Number) -> None:
        """
        환율 변경

        마지막으로 편집한 쪽을 기준으로 반대쪽을 다시 계산합니다.
        """
        self.rate = _check_rate(rate)
        if self.active is Currency.CNY:
            self.krw = self.cny * self.rate
        else:
            self.cny = self.krw / self.rate

    @property
    def krw_display(self) -> str:
        return format_krw(self.krw) if self.krw else ""

    @property
    def cny_display(self) -> str:
        return format_cny(self.cny) if self.cny else ""

    def rate_label(self) -> str:
        return f"1 CNY = {self.rate:.2f} KRW"

    def __repr__(self) -> str:
        return f"DualCurrencyField(krw={self.krw}, cny={self.cny}, rate={self.rate})"


# ── 환율 결정 ───────────────────────────────────────

def default_rate_snapshot(today: date) -> ExchangeRateSnapshot:
    """기본 환율 스냅샷"""
    return ExchangeRateSnapshot(rate=DEFAULT_CNY_KRW_RATE, as_of_date=today, source="default")


def resolve_rate(today: date, history: Iterable[ExchangeRateSnapshot] = ()) -> ExchangeRateSnapshot:
    """
    오늘 사용할 환율 결정

    1. 오늘 날짜의 캐시된 환율
    2. 가장 최근의 과거 환율
    3. 기본 환율 (178.50)

    미래 날짜의 스냅샷은 무시합니다.

    Args:
        today: 기준 날짜
        history: 보유 중인 환율 스냅샷 목록

    Returns:
        사용할 환율 스냅샷
    """
    same_day: Optional[ExchangeRateSnapshot] = None
    latest_prior: Optional[ExchangeRateSnapshot] = None

    for snapshot in history:
        if snapshot.as_of_date == today:
            same_day = snapshot
        elif snapshot.as_of_date < today:
            if latest_prior is None or snapshot.as_of_date > latest_prior.as_of_date:
                latest_prior = snapshot

    if same_day is not None:
        logger.debug(f"당일 환율 사용: {same_day}")
        return same_day

    if latest_prior is not None:
        logger.warning(f"당일 환율 없음, 최근 환율 사용: {latest_prior}")
        return latest_prior

    logger.warning(f"환율 이력 없음, 기본 환율 사용: {DEFAULT_CNY_KRW_RATE}")
    return default_rate_snapshot(today)


def last_business_day(day: date) -> date:
    """
    가장 최근 영업일 (주말이면 직전 금요일)

    Args:
        day: 기준 날짜

    Returns:
        토요일/일요일이면 금요일, 그 외에는 그대로
    """
    weekday = day.weekday()
    if weekday == 5:
        return day - timedelta(days=1)
    if weekday == 6:
        return day - timedelta(days=2)
    return day
