"""
ERP 코어 - 도메인 서비스

여러 엔터티에 걸친 재고 규칙과 재고 지표 계산을 담당합니다.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import logging
import math

from erp_core.config import get_config
from .entities import OrderItem, Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockShortage:
    """재고 부족 항목"""
    product_id: str
    product_name: str
    requested: int
    available: int


@dataclass(frozen=True)
class LowStockItem:
    """주문 후 저재고가 되는 항목"""
    product_id: str
    product_name: str
    remaining: int
    threshold: int


@dataclass(frozen=True)
class StockCheckResult:
    """재고 가용성 검증 결과"""
    errors: Tuple[str, ...] = field(default_factory=tuple)
    warnings: Tuple[str, ...] = field(default_factory=tuple)
    insufficient: Tuple[StockShortage, ...] = field(default_factory=tuple)
    low_stock: Tuple[LowStockItem, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _threshold(value: Optional[int]) -> int:
    return get_config().inventory.low_stock_threshold if value is None else value


class InventoryDomainService:
    """
    재고 관련 도메인 서비스

    책임:
    - 주문 상품의 재고 가용성 검증
    - 저재고 상품 조회
    - 재고 회전율/안전 재고/재주문점 계산
    """

    @staticmethod
    def validate_stock_availability(products: Iterable[Product], items: Iterable[OrderItem],
                                    low_stock_threshold: Optional[int] = None) -> StockCheckResult:
        """
        재고 가용성 검증

        상품은 SKU 로 찾으며, 모든 항목을 검사한 뒤 오류와 경고를 한꺼번에 반환합니다.

        Args:
            products: 보유 상품 목록
            items: 주문 상품 항목 (product_id 는 상품 SKU)
            low_stock_threshold: 저재고 기준, None 이면 설정값

        Returns:
            StockCheckResult
        """
        threshold = _threshold(low_stock_threshold)
        product_map: Dict[str, Product] = {product.sku: product for product in products}

        errors: List[str] = []
        warnings: List[str] = []
        insufficient: List[StockShortage] = []
        low_stock: List[LowStockItem] = []

        for item in items:
            product = product_map.get(item.product_id)
            if product is None:
                errors.append(f"Product not found: {item.product_id}")
                continue

            if not product.can_fulfill_order(item.quantity):
                insufficient.append(StockShortage(
                    product_id=product.sku,
                    product_name=product.name,
                    requested=item.quantity,
                    available=product.on_hand,
                ))
                errors.append(
                    f"Insufficient stock for {product.name}: "
                    f"requested {item.quantity}, available {product.on_hand}"
                )

            remaining = product.on_hand - item.quantity
            if 0 <= remaining <= threshold:
                low_stock.append(LowStockItem(
                    product_id=product.sku,
                    product_name=product.name,
                    remaining=remaining,
                    threshold=threshold,
                ))
                warnings.append(
                    f"Low stock warning for {product.name}: "
                    f"{remaining} units remaining (threshold: {threshold})"
                )

        if errors:
            logger.warning(f"재고 검증 실패: {errors}")

        return StockCheckResult(
            errors=tuple(errors),
            warnings=tuple(warnings),
            insufficient=tuple(insufficient),
            low_stock=tuple(low_stock),
        )

    @staticmethod
    def low_stock_products(products: Iterable[Product], threshold: Optional[int] = None) -> List[Product]:
        """저재고 상품 목록"""
        limit = _threshold(threshold)
        return [product for product in products if product.is_low_stock(limit)]

    @staticmethod
    def inventory_turnover(sold_quantity: float, average_inventory: float, period_days: int = 30) -> float:
        """
        재고 회전율 (연환산)

        Args:
            sold_quantity: 기간 내 판매 수량
            average_inventory: 평균 재고
            period_days: 집계 기간 (일)

        Returns:
            연환산 회전율, 평균 재고가 0 이면 0
        """
        if average_inventory == 0:
            return 0.0
        if period_days <= 0:
            raise ValueError(f"집계 기간은 1일 이상이어야 합니다: {period_days}")

        return (sold_quantity / average_inventory) * (365 / period_days)

    @staticmethod
    def safety_stock(average_daily_demand: float, lead_time_days: float,
                     service_level_multiplier: float = 1.65) -> int:
        """
        안전 재고 수준

        리드타임 수요의 30% 를 변동성으로 가정합니다. 기본 배수 1.65 는 95% 서비스 수준입니다.
        """
        lead_time_demand = average_daily_demand * lead_time_days
        standard_deviation = math.sqrt(lead_time_demand * 0.3)
        return math.ceil(service_level_multiplier * standard_deviation)

    @staticmethod
    def reorder_point(average_daily_demand: float, lead_time_days: float, safety_stock: int) -> int:
        """재주문점 = 리드타임 수요 + 안전 재고"""
        return math.ceil(average_daily_demand * lead_time_days + safety_stock)

    @staticmethod
    def total_inventory_value(products: Sequence[Product]) -> float:
        """전체 재고 가치 (CNY)"""
        return sum(product.total_value() for product in products)
