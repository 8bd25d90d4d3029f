"""
ERP 코어 - 값 객체 (Value Objects)

도메인 전반에서 공유하는 불변 값 객체와 예외 계층을 정의합니다.

예외 계층:
- DomainError: 모든 도메인 예외의 기반
- DomainValidationError: 잘못된 인자 (환율 0 이하, SKU 필수값 누락 등)
- InsufficientStockError: 재고 부족으로 조정 불가
- IllegalStateTransitionError: 허용되지 않는 주문 상태 전이

검증 함수는 예외를 던지지 않고 ValidationResult 를 반환합니다.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import List, Tuple
import logging

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """도메인 오류 기반 클래스"""
    pass


class DomainValidationError(DomainError):
    """도메인 검증 오류 (잘못된 인자)"""
    pass


class InsufficientStockError(DomainValidationError):
    """재고 부족 오류"""
    pass


class IllegalStateTransitionError(DomainError):
    """허용되지 않는 상태 전이"""
    pass


@dataclass(frozen=True)
class ValidationResult:
    """
    검증 결과 값 객체

    오류 메시지 문자열은 외부에 그대로 노출되므로 문구를 바꾸지 않습니다.
    """

    errors: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.errors, tuple):
            object.__setattr__(self, 'errors', tuple(self.errors))

    @classmethod
    def from_errors(cls, errors: List[str]) -> ValidationResult:
        """오류 목록으로 결과 생성"""
        return cls(tuple(errors))

    @property
    def is_valid(self) -> bool:
        """오류가 없으면 유효"""
        return not self.errors

    def __bool__(self) -> bool:
        return self.is_valid

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "errors": list(self.errors)}


@dataclass(frozen=True)
class ExchangeRateSnapshot:
    """
    환율 스냅샷 (1 CNY 당 KRW)

    외부 저장소나 API 에서 받아오는 값이며 코어가 소유하지 않습니다.
    """

    rate: float
    as_of_date: date
    source: str = "manual"

    def __post_init__(self):
        """객체 생성 후 검증"""
        if not isinstance(self.as_of_date, date):
            raise DomainValidationError(f"환율 기준일은 date 객체여야 합니다: {self.as_of_date!r}")

        try:
            rate = float(self.rate)
        except (TypeError, ValueError):
            raise DomainValidationError(f"환율은 숫자여야 합니다: {self.rate!r}")

        if not rate > 0 or rate == float('inf'):
            raise DomainValidationError(f"환율은 0보다 커야 합니다: {self.rate}")

        object.__setattr__(self, 'rate', rate)

    def __str__(self) -> str:
        return f"1 CNY = {self.rate:.2f} KRW ({self.as_of_date.isoformat()}, {self.source})"
