"""
ERP 코어 - 도메인 엔터티

주문(Order)과 상품(Product) 엔터티입니다.
엔터티의 상태는 외부에서 직접 대입할 수 없고, 명시적인 메서드로만 변경됩니다.

주문 상태 전이:
    PAID → SHIPPED → DONE
    SHIPPED → REFUNDED
    DONE → REFUNDED
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Union
import logging

from erp_core.config import get_config
from erp_core.utils.utils import now_utc
from .carriers import build_tracking_url
from .identifiers import generate_order_number, generate_sku
from .validators import validate_order, validate_product
from .value_objects import (
    DomainValidationError, IllegalStateTransitionError, InsufficientStockError
)

logger = logging.getLogger(__name__)


class OrderStatus(Enum):
    """주문 상태"""
    PAID = "PAID"            # 결제 완료
    SHIPPED = "SHIPPED"      # 배송 중
    DONE = "DONE"            # 완료
    REFUNDED = "REFUNDED"    # 환불

    def __str__(self) -> str:
        return self.value


# 상태별 허용되는 다음 상태
ORDER_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PAID: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DONE, OrderStatus.REFUNDED}),
    OrderStatus.DONE: frozenset({OrderStatus.REFUNDED}),
    OrderStatus.REFUNDED: frozenset(),
}


@dataclass(frozen=True)
class OrderItem:
    """주문 상품 항목"""
    product_id: str
    quantity: int
    price: float
    product_name: Optional[str] = None

    @classmethod
    def from_value(cls, value: Union[OrderItem, Mapping[str, Any]]) -> OrderItem:
        if isinstance(value, OrderItem):
            return value
        return cls(
            product_id=value["product_id"],
            quantity=int(value["quantity"]),
            price=value["price"],
            product_name=value.get("product_name"),
        )

    def subtotal(self) -> float:
        return self.quantity * self.price

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity": self.quantity,
            "price": self.price,
        }


class Order:
    """
    주문 엔터티 (집약 루트)

    책임:
    - 생성 시 입력 검증 및 주문번호 발급
    - 상태 전이 규칙 강제
    - 합계 금액/수량 계산 (저장하지 않고 매번 계산)
    - 배송 추적 URL 생성
    """

    def __init__(self, order_number: str, customer_name: str, customer_phone: str, pccc: str,
                 shipping_address: str, items: Tuple[OrderItem, ...],
                 created_at: Optional[datetime] = None):
        self._order_number = order_number
        self._status = OrderStatus.PAID
        self._customer_name = customer_name
        self._customer_phone = customer_phone
        self._pccc = pccc
        self._shipping_address = shipping_address
        self._items = tuple(items)

        self._courier_company: Optional[str] = None
        self._tracking_number: Optional[str] = None
        self._tracking_photo_url: Optional[str] = None
        self._refund_reason: Optional[str] = None

        self._created_at = created_at or now_utc()
        self._updated_at = self._created_at
        self._shipped_at: Optional[datetime] = None
        self._completed_at: Optional[datetime] = None
        self._refunded_at: Optional[datetime] = None

    @classmethod
    def create(cls, data: Mapping[str, Any], sequence: int = 1,
               reference_date: Optional[Union[datetime, date]] = None,
               order_number: Optional[str] = None) -> Order:
        """
        주문 생성

        Args:
            data: customer_name, customer_phone, pccc, shipping_address, items
            sequence: 당일 주문 순번 (저장소에서 조회한 값)
            reference_date: 주문번호 날짜 기준 시각, None 이면 현재 시각
            order_number: 이미 발급된 주문번호 (저장된 주문 복원용)

        Returns:
            PAID 상태의 주문

        Raises:
            DomainValidationError: 입력 검증 실패
        """
        validation = validate_order(data)
        if not validation.is_valid:
            raise DomainValidationError(f"Invalid order: {', '.join(validation.errors)}")

        created_at = reference_date if isinstance(reference_date, datetime) else None
        number = order_number or generate_order_number(sequence, reference_date)

        order = cls(
            order_number=number,
            customer_name=data["customer_name"],
            customer_phone=data["customer_phone"],
            pccc=data["pccc"],
            shipping_address=data["shipping_address"],
            items=tuple(OrderItem.from_value(item) for item in data["items"]),
            created_at=created_at,
        )
        logger.info(f"주문 생성: {order}")
        return order

    # ── 읽기 전용 속성 ───────────────────────────────

    @property
    def order_number(self) -> str:
        return self._order_number

    @property
    def status(self) -> OrderStatus:
        return self._status

    @property
    def customer_name(self) -> str:
        return self._customer_name

    @property
    def customer_phone(self) -> str:
        return self._customer_phone

    @property
    def pccc(self) -> str:
        return self._pccc

    @property
    def shipping_address(self) -> str:
        return self._shipping_address

    @property
    def items(self) -> Tuple[OrderItem, ...]:
        return self._items

    @property
    def courier_company(self) -> Optional[str]:
        return self._courier_company

    @property
    def tracking_number(self) -> Optional[str]:
        return self._tracking_number

    @property
    def tracking_photo_url(self) -> Optional[str]:
        return self._tracking_photo_url

    @property
    def refund_reason(self) -> Optional[str]:
        return self._refund_reason

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def shipped_at(self) -> Optional[datetime]:
        return self._shipped_at

    @property
    def completed_at(self) -> Optional[datetime]:
        return self._completed_at

    @property
    def refunded_at(self) -> Optional[datetime]:
        return self._refunded_at

    # ── 계산 ─────────────────────────────────────────

    def total_amount(self) -> float:
        """총 주문 금액 (수량 × 단가 합계)"""
        return sum(item.subtotal() for item in self._items)

    def total_items(self) -> int:
        """총 주문 수량"""
        return sum(item.quantity for item in self._items)

    # ── 상태 전이 ───────────────────────────────────

    def _transition(self, action: str, target: OrderStatus) -> None:
        if target not in ORDER_TRANSITIONS[self._status]:
            raise IllegalStateTransitionError(f"Cannot {action} order in {self._status.value} status")

    def ship(self, courier_company: str, tracking_number: str,
             tracking_photo_url: Optional[str] = None, at: Optional[datetime] = None) -> None:
        """배송 처리 (PAID 상태에서만 가능)"""
        self._transition("ship", OrderStatus.SHIPPED)

        if not courier_company or not tracking_number:
            raise DomainValidationError("택배사와 운송장 번호는 필수입니다")

        timestamp = at or now_utc()
        self._courier_company = courier_company
        self._tracking_number = tracking_number
        self._tracking_photo_url = tracking_photo_url
        self._status = OrderStatus.SHIPPED
        self._shipped_at = timestamp
        self._updated_at = timestamp

        logger.info(f"주문 배송: {self._order_number}, {courier_company} {tracking_number}")

    def complete(self, at: Optional[datetime] = None) -> None:
        """배송 완료 처리 (SHIPPED 상태에서만 가능)"""
        self._transition("complete", OrderStatus.DONE)

        timestamp = at or now_utc()
        self._status = OrderStatus.DONE
        self._completed_at = timestamp
        self._updated_at = timestamp

        logger.info(f"주문 완료: {self._order_number}")

    def refund(self, reason: str, at: Optional[datetime] = None) -> None:
        """환불 처리 (SHIPPED 또는 DONE 상태에서 가능)"""
        self._transition("refund", OrderStatus.REFUNDED)

        timestamp = at or now_utc()
        self._status = OrderStatus.REFUNDED
        self._refund_reason = reason
        self._refunded_at = timestamp
        self._updated_at = timestamp

        logger.info(f"주문 환불: {self._order_number}, 사유: {reason}")

    def can_edit(self) -> bool:
        """주문 내용 수정 가능 여부 (배송 전)"""
        return self._status is OrderStatus.PAID

    def tracking_url(self) -> Optional[str]:
        """배송 추적 URL, 알 수 없는 택배사이면 None"""
        return build_tracking_url(self._courier_company, self._tracking_number)

    def to_dict(self) -> Dict[str, Any]:
        def iso(value: Optional[datetime]) -> Optional[str]:
            return value.isoformat() if value else None

        return {
            "order_number": self._order_number,
            "status": self._status.value,
            "customer_name": self._customer_name,
            "customer_phone": self._customer_phone,
            "pccc": self._pccc,
            "shipping_address": self._shipping_address,
            "items": [item.to_dict() for item in self._items],
            "total_amount": self.total_amount(),
            "total_items": self.total_items(),
            "courier_company": self._courier_company,
            "tracking_number": self._tracking_number,
            "tracking_url": self.tracking_url(),
            "tracking_photo_url": self._tracking_photo_url,
            "shipped_at": iso(self._shipped_at),
            "completed_at": iso(self._completed_at),
            "refunded_at": iso(self._refunded_at),
            "refund_reason": self._refund_reason,
            "created_at": iso(self._created_at),
            "updated_at": iso(self._updated_at),
        }

    def __str__(self) -> str:
        return f"{self._order_number} {self._customer_name} [{self._status.value}]"

    def __repr__(self) -> str:
        return f"Order({self._order_number}, {self._status.value}, items={len(self._items)})"


class Product:
    """
    상품 엔터티

    책임:
    - 생성 시 입력 검증 및 SKU 발급
    - 재고 수량 관리 (음수 불가)
    - 재고 가치 계산
    """

    def __init__(self, sku: str, category: str, name: str, model: str, color: str, brand: str,
                 cost_cny: float, on_hand: int = 0):
        self._sku = sku
        self.category = category
        self.name = name
        self.model = model
        self.color = color
        self.brand = brand
        self._cost_cny = cost_cny
        self._on_hand = on_hand

    @classmethod
    def create(cls, data: Mapping[str, Any]) -> Product:
        """
        상품 생성

        Args:
            data: category, name, model, color, brand, cost_cny, on_hand

        Raises:
            DomainValidationError: 입력 검증 실패
        """
        validation = validate_product(data)
        if not validation.is_valid:
            raise DomainValidationError(f"Invalid product: {', '.join(validation.errors)}")

        sku = generate_sku(
            category=data["category"],
            model=data["model"],
            color=data["color"],
            brand=data["brand"],
        )
        return cls(
            sku=sku,
            category=data["category"],
            name=data["name"],
            model=data["model"],
            color=data["color"],
            brand=data["brand"],
            cost_cny=data["cost_cny"],
            on_hand=int(data.get("on_hand") or 0),
        )

    @property
    def sku(self) -> str:
        return self._sku

    @property
    def cost_cny(self) -> float:
        return self._cost_cny

    @property
    def on_hand(self) -> int:
        return self._on_hand

    def total_value(self) -> float:
        """재고 가치 (CNY)"""
        return self._on_hand * self._cost_cny

    def adjust_stock(self, delta: int) -> int:
        """
        재고 조정

        Args:
            delta: 증감 수량 (음수면 차감)

        Returns:
            조정 후 재고

        Raises:
            InsufficientStockError: 결과가 음수가 되는 경우 (재고는 변경되지 않음)
        """
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise DomainValidationError(f"재고 조정 수량은 정수여야 합니다: {delta!r}")

        new_quantity = self._on_hand + delta
        if new_quantity < 0:
            logger.warning(f"재고 부족: {self._sku} 보유 {self._on_hand}, 요청 {delta}")
            raise InsufficientStockError("Insufficient stock")

        self._on_hand = new_quantity
        logger.info(f"재고 조정: {self._sku} {delta:+d} → {new_quantity}")
        return new_quantity

    def is_low_stock(self, threshold: Optional[int] = None) -> bool:
        """
        저재고 여부

        Args:
            threshold: 저재고 기준 수량, None 이면 설정값 (INVENTORY.low_stock_threshold)
        """
        if threshold is None:
            threshold = get_config().inventory.low_stock_threshold
        return self._on_hand <= threshold

    def can_fulfill_order(self, quantity: int) -> bool:
        """주문 수량 충족 가능 여부"""
        return self._on_hand >= quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sku": self._sku,
            "category": self.category,
            "name": self.name,
            "model": self.model,
            "color": self.color,
            "brand": self.brand,
            "cost_cny": self._cost_cny,
            "on_hand": self._on_hand,
            "total_value": self.total_value(),
        }

    def __str__(self) -> str:
        return f"{self.name}({self._sku}) 재고 {self._on_hand:,}개"

    def __repr__(self) -> str:
        return f"Product(sku='{self._sku}', on_hand={self._on_hand})"
