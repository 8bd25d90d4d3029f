"""
ERP 코어 - 도메인 패키지

주문/상품 도메인 규칙을 한 곳에 모읍니다.

주요 엔터티:
- Order: 주문 정보 및 상태 전이 (PAID → SHIPPED → DONE, REFUNDED)
- Product: 상품 정보 및 재고 관리

도메인 모듈:
- identifiers: 주문번호/SKU 생성 및 파싱
- currency: KRW ↔ CNY 환산, 환율 결정
- validators: 주문/상품 입력 검증
- carriers: 택배사 및 배송 추적 URL

도메인 서비스:
- InventoryDomainService: 재고 가용성 검증 및 재고 지표
"""

from .value_objects import (
    DomainError,
    DomainValidationError,
    InsufficientStockError,
    IllegalStateTransitionError,
    ValidationResult,
    ExchangeRateSnapshot
)

from .identifiers import (
    generate_order_number,
    parse_order_number,
    is_valid_order_number,
    next_order_sequence,
    generate_sku,
    parse_sku,
    validate_sku,
    ParsedOrderNumber,
    ParsedSKU
)

from .currency import (
    Currency,
    Conversion,
    DualCurrencyField,
    DEFAULT_CNY_KRW_RATE,
    convert,
    format_krw,
    format_cny,
    resolve_rate,
    last_business_day
)

from .validators import (
    validate_order,
    validate_product,
    is_valid_phone_number,
    is_valid_pccc,
    normalize_pccc,
    mask_pccc
)

from .carriers import (
    Carrier,
    find_carrier,
    build_tracking_url
)

from .entities import (
    Order,
    OrderItem,
    OrderStatus,
    Product
)

from .services import (
    InventoryDomainService,
    StockCheckResult
)

__all__ = [
    # 엔터티
    'Order',
    'OrderItem',
    'OrderStatus',
    'Product',

    # 도메인 서비스
    'InventoryDomainService',
    'StockCheckResult',

    # 값 객체 / 예외
    'DomainError',
    'DomainValidationError',
    'InsufficientStockError',
    'IllegalStateTransitionError',
    'ValidationResult',
    'ExchangeRateSnapshot',

    # 식별자
    'generate_order_number',
    'parse_order_number',
    'is_valid_order_number',
    'next_order_sequence',
    'generate_sku',
    'parse_sku',
    'validate_sku',
    'ParsedOrderNumber',
    'ParsedSKU',

    # 통화
    'Currency',
    'Conversion',
    'DualCurrencyField',
    'DEFAULT_CNY_KRW_RATE',
    'convert',
    'format_krw',
    'format_cny',
    'resolve_rate',
    'last_business_day',

    # 검증
    'validate_order',
    'validate_product',
    'is_valid_phone_number',
    'is_valid_pccc',
    'normalize_pccc',
    'mask_pccc',

    # 택배사
    'Carrier',
    'find_carrier',
    'build_tracking_url'
]
