"""
ERP 코어 - 식별자 생성기

주문번호와 SKU 를 생성하고 검증/파싱합니다.

주문번호: ORD-YYMMDD-NNN
- 날짜는 한국 표준시(UTC+9) 기준
- 순번은 호출자가 전달 (보통 저장소의 당일 주문 건수 + 1)
- 1000 이상의 순번은 자르지 않고 자릿수가 늘어남

SKU: [카테고리3]-[모델]-[색상3]-[브랜드3]-[HASH5]
- 같은 입력이라도 해시가 매번 달라짐 (동일 상품 변형 구분용)
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Union
import logging
import re
import secrets
import string

from erp_core.utils.utils import kst_date
from .value_objects import DomainValidationError

logger = logging.getLogger(__name__)

ORDER_PREFIX = "ORD"
SEPARATOR = "-"
SEQUENCE_DIGITS = 3

SKU_CODE_LENGTH = 3
SKU_MODEL_MAX_LENGTH = 20
SKU_HASH_LENGTH = 5
SKU_PAD_CHAR = "X"
SKU_HASH_ALPHABET = string.ascii_uppercase + string.digits

# 영문, 숫자, 한글 음절만 허용
_SKU_DISALLOWED = re.compile(r"[^A-Za-z0-9가-힣]")

_ORDER_NUMBER_PATTERN = re.compile(r"^ORD-(\d{2})(\d{2})(\d{2})-(\d{3,})$")

_SKU_PATTERN = re.compile(
    r"^([A-Z0-9가-힣]{3})-([A-Za-z0-9가-힣]+)-([A-Z0-9가-힣]{3})-([A-Z0-9가-힣]{3})-([A-Z0-9]{5})$"
)

DateInput = Optional[Union[datetime, date]]


@dataclass(frozen=True)
class ParsedOrderNumber:
    """주문번호 파싱 결과"""
    order_date: date
    sequence: int

    @property
    def date_key(self) -> str:
        return self.order_date.strftime("%y%m%d")


@dataclass(frozen=True)
class ParsedSKU:
    """SKU 파싱 결과"""
    category: str
    model: str
    color: str
    brand: str
    hash: str

    @property
    def prefix(self) -> str:
        """해시를 제외한 앞 4개 구간"""
        return SEPARATOR.join([self.category, self.model, self.color, self.brand])


# ── 주문번호 ────────────────────────────────────────

def order_date_key(reference_date: DateInput = None) -> str:
    """
    주문번호 날짜 구간 (YYMMDD, KST 기준)

    Args:
        reference_date: 기준 시각, None 이면 현재 시각

    Returns:
        YYMMDD 문자열
    """
    return kst_date(reference_date).strftime("%y%m%d")


def generate_order_number(sequence: int, reference_date: DateInput = None) -> str:
    """
    주문번호 생성

    Args:
        sequence: 당일 순번 (1 이상)
        reference_date: 기준 시각 (naive datetime 은 UTC 로 간주)

    Returns:
        ORD-YYMMDD-NNN 형식의 주문번호

    Raises:
        DomainValidationError: 순번이 1 미만이거나 정수가 아닌 경우
    """
    if isinstance(sequence, bool) or not isinstance(sequence, int):
        raise DomainValidationError(f"주문 순번은 정수여야 합니다: {sequence!r}")
    if sequence < 1:
        raise DomainValidationError(f"주문 순번은 1 이상이어야 합니다: {sequence}")

    date_key = order_date_key(reference_date)
    return SEPARATOR.join([ORDER_PREFIX, date_key, str(sequence).zfill(SEQUENCE_DIGITS)])


def parse_order_number(order_number: str) -> Optional[ParsedOrderNumber]:
    """
    주문번호 파싱

    Returns:
        ParsedOrderNumber, 형식이 맞지 않거나 존재하지 않는 날짜이면 None
    """
    if not isinstance(order_number, str):
        return None

    match = _ORDER_NUMBER_PATTERN.match(order_number)
    if not match:
        return None

    yy, mm, dd, seq = match.groups()
    try:
        order_date = date(2000 + int(yy), int(mm), int(dd))
    except ValueError:
        return None

    sequence = int(seq)
    if sequence < 1:
        return None

    return ParsedOrderNumber(order_date=order_date, sequence=sequence)


def is_valid_order_number(order_number: str) -> bool:
    """주문번호 유효성 검증"""
    return parse_order_number(order_number) is not None


def next_order_sequence(existing_numbers: Iterable[str], reference_date: DateInput = None) -> int:
    """
    다음 주문 순번 계산

    저장소에서 조회한 당일 주문번호 목록 중 가장 큰 순번 + 1 을 반환합니다.
    다른 날짜의 주문번호나 형식이 맞지 않는 값은 무시합니다.

    Args:
        existing_numbers: 기존 주문번호 목록
        reference_date: 기준 시각

    Returns:
        다음 순번 (기존 주문이 없으면 1)
    """
    date_key = order_date_key(reference_date)
    max_sequence = 0

    for order_number in existing_numbers:
        parsed = parse_order_number(order_number)
        if parsed is not None and parsed.date_key == date_key:
            max_sequence = max(max_sequence, parsed.sequence)

    return max_sequence + 1


# ── SKU ─────────────────────────────────────────────

def _sanitize(value: str) -> str:
    return _SKU_DISALLOWED.sub("", value)


def _code(value: str) -> str:
    """3자리 코드: 자르거나 X 로 채운 뒤 대문자화"""
    return _sanitize(value)[:SKU_CODE_LENGTH].ljust(SKU_CODE_LENGTH, SKU_PAD_CHAR).upper()


def _random_hash() -> str:
    return "".join(secrets.choice(SKU_HASH_ALPHABET) for _ in range(SKU_HASH_LENGTH))


def generate_sku(category: str, model: str, color: str, brand: str) -> str:
    """
    SKU 생성

    Args:
        category: 카테고리
        model: 모델명 (대소문자 유지, 최대 20자)
        color: 색상
        brand: 브랜드

    Returns:
        [CAT]-[모델]-[COL]-[BRA]-[HASH5] 형식의 SKU

    Raises:
        DomainValidationError: 필수값이 비어 있는 경우
    """
    fields = {"category": category, "model": model, "color": color, "brand": brand}
    missing = [name for name, value in fields.items()
               if not isinstance(value, str) or not value.strip()]
    if missing:
        raise DomainValidationError(f"SKU generation requires {', '.join(missing)}")

    model_part = _sanitize(model)[:SKU_MODEL_MAX_LENGTH]
    if not model_part:
        raise DomainValidationError(f"SKU model has no usable characters: {model!r}")

    sku = SEPARATOR.join([
        _code(category),
        model_part,
        _code(color),
        _code(brand),
        _random_hash(),
    ])
    logger.debug(f"SKU 생성: {sku}")
    return sku


def parse_sku(sku: str) -> Optional[ParsedSKU]:
    """
    SKU 파싱

    Returns:
        ParsedSKU, 형식이 맞지 않으면 None
    """
    if not isinstance(sku, str):
        return None

    match = _SKU_PATTERN.match(sku)
    if not match:
        return None

    category, model, color, brand, hash_ = match.groups()
    if len(model) > SKU_MODEL_MAX_LENGTH:
        return None

    return ParsedSKU(category=category, model=model, color=color, brand=brand, hash=hash_)


def validate_sku(sku: str) -> bool:
    """SKU 형식 검증"""
    return parse_sku(sku) is not None
