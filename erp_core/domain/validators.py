"""
ERP 코어 - 도메인 검증

주문/상품 생성 입력의 필드 단위 및 교차 필드 검증 규칙입니다.

모든 검증 함수는 예외를 던지지 않고, 첫 오류에서 멈추지 않고
해당되는 모든 오류를 모아 ValidationResult 로 반환합니다.
오류 메시지 문구는 UI 와 테스트가 그대로 사용하므로 변경하지 않습니다.
"""

from __future__ import annotations
from typing import Any, List, Mapping, Optional, Sequence
import logging
import math
import re

from .value_objects import ValidationResult

logger = logging.getLogger(__name__)

# 휴대전화 010-1234-5678, 서울 02-123-4567, 기타 지역 031-123-4567 (하이픈 선택)
_PHONE_PATTERNS = (
    re.compile(r"^01\d-?\d{3,4}-?\d{4}$"),
    re.compile(r"^02-?\d{3,4}-?\d{4}$"),
    re.compile(r"^0[3-9]\d-?\d{3,4}-?\d{4}$"),
)

# 개인통관고유부호: P + 숫자 12자리
_PCCC_PATTERN = re.compile(r"^P\d{12}$")
_PCCC_STRIP = re.compile(r"[\s\-_]")


def _get(data: Any, key: str, default: Any = None) -> Any:
    """매핑 또는 객체에서 값 조회"""
    if isinstance(data, Mapping):
        return data.get(key, default)
    return getattr(data, key, default)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _is_number(value: Any) -> bool:
    """bool 과 NaN, 무한대를 제외한 실수"""
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and math.isfinite(value))


def _is_whole_number(value: Any) -> bool:
    return _is_number(value) and float(value).is_integer()


def is_valid_phone_number(phone: str) -> bool:
    """한국 전화번호 형식 검증 (공백 무시)"""
    if not isinstance(phone, str):
        return False
    compact = re.sub(r"\s", "", phone)
    return any(pattern.match(compact) for pattern in _PHONE_PATTERNS)


def is_valid_pccc(pccc: str) -> bool:
    """개인통관고유부호 형식 검증"""
    return isinstance(pccc, str) and bool(_PCCC_PATTERN.match(pccc))


def validate_order(data: Any) -> ValidationResult:
    """
    주문 입력 검증

    검사 순서: 고객명 → 전화번호 → 통관부호 → 배송지 → 주문 상품

    Args:
        data: customer_name, customer_phone, pccc, shipping_address, items 를 가진
              매핑 또는 객체. items 의 각 항목은 매핑 또는 OrderItem

    Returns:
        ValidationResult
    """
    errors: List[str] = []

    if _is_blank(_get(data, "customer_name")):
        errors.append("Customer name is required")

    phone = _get(data, "customer_phone")
    if _is_blank(phone):
        errors.append("Customer phone is required")
    elif not is_valid_phone_number(phone):
        errors.append("Invalid phone number format")

    pccc = _get(data, "pccc")
    if _is_blank(pccc):
        errors.append("PCCC is required")
    elif not is_valid_pccc(pccc):
        errors.append("Invalid PCCC format")

    if _is_blank(_get(data, "shipping_address")):
        errors.append("Shipping address is required")

    items = _get(data, "items")
    if not items or not isinstance(items, Sequence) or isinstance(items, (str, bytes)):
        errors.append("Order must have at least one item")
    else:
        for index, item in enumerate(items, start=1):
            if _is_blank(_get(item, "product_id")):
                errors.append(f"Item {index}: Product ID is required")

            quantity = _get(item, "quantity")
            if not _is_whole_number(quantity) or quantity <= 0:
                errors.append("Item quantity must be positive")

            price = _get(item, "price")
            if not _is_number(price) or price < 0:
                errors.append("Item price cannot be negative")

    if errors:
        logger.debug(f"주문 검증 실패: {errors}")
    return ValidationResult.from_errors(errors)


def validate_product(data: Any) -> ValidationResult:
    """
    상품 입력 검증

    Args:
        data: category, name, model, color, brand, cost_cny, on_hand 를 가진 매핑 또는 객체

    Returns:
        ValidationResult
    """
    errors: List[str] = []

    for field_name, label in (("category", "Category"), ("name", "Name"), ("model", "Model"),
                              ("color", "Color"), ("brand", "Brand")):
        if _is_blank(_get(data, field_name)):
            errors.append(f"{label} is required")

    cost = _get(data, "cost_cny")
    if not _is_number(cost) or cost <= 0:
        errors.append("Cost must be positive")

    on_hand = _get(data, "on_hand")
    if on_hand is not None:
        if not _is_number(on_hand):
            errors.append("Stock must be a whole number")
        elif on_hand < 0:
            errors.append("Stock cannot be negative")
        elif not _is_whole_number(on_hand):
            errors.append("Stock must be a whole number")

    if errors:
        logger.debug(f"상품 검증 실패: {errors}")
    return ValidationResult.from_errors(errors)


# ── 개인통관고유부호 ────────────────────────────────

def normalize_pccc(pccc: str) -> Optional[str]:
    """
    통관부호 정규화

    공백/하이픈/밑줄 제거, 대문자화, 숫자 12자리만 있으면 P 를 붙입니다.

    Returns:
        정규화된 통관부호, 유효하지 않으면 None
    """
    if not isinstance(pccc, str) or not pccc:
        return None

    cleaned = _PCCC_STRIP.sub("", pccc).upper()
    if re.fullmatch(r"\d{12}", cleaned):
        cleaned = "P" + cleaned

    return cleaned if is_valid_pccc(cleaned) else None


def mask_pccc(pccc: str, show_last: int = 4) -> str:
    """
    통관부호 마스킹 (예: P-****-****-9012)

    Returns:
        마스킹된 통관부호, 유효하지 않으면 빈 문자열
    """
    normalized = normalize_pccc(pccc)
    if normalized is None:
        return ""

    digits = normalized[1:]
    mask_length = len(digits) - show_last
    if mask_length <= 0:
        return normalized

    masked = "*" * mask_length + digits[mask_length:]
    if show_last == 4:
        return f"P-{masked[0:4]}-{masked[4:8]}-{masked[8:12]}"
    return "P" + masked


def format_pccc_input(raw: str) -> str:
    """입력 중인 통관부호를 P-1234-5678-9012 형태로 정리"""
    if not raw:
        return ""

    numbers = re.sub(r"\D", "", raw)[:12]
    if not numbers:
        return "P"

    groups = [numbers[i:i + 4] for i in range(0, len(numbers), 4)]
    return "P-" + "-".join(groups)
