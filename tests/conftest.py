"""
테스트 공통 픽스처
"""

import logging

import pytest

from erp_core.config import reset_config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """설정 파일/환경변수 없이 기본 설정으로 실행"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ERP_CONFIG", raising=False)
    monkeypatch.delenv("KOREA_EXIM_API_KEY", raising=False)
    reset_config()
    yield
    reset_config()

    # CLI 테스트가 설정한 핸들러 정리
    erp_logger = logging.getLogger("erp_core")
    for handler in list(erp_logger.handlers):
        erp_logger.removeHandler(handler)
        handler.close()
    erp_logger.propagate = True
    erp_logger.setLevel(logging.NOTSET)


@pytest.fixture
def order_data():
    """유효한 주문 입력"""
    return {
        "customer_name": "김철수",
        "customer_phone": "010-1234-5678",
        "pccc": "P123456789012",
        "shipping_address": "서울시 강남구 테헤란로 123",
        "items": [
            {"product_id": "prod-1", "quantity": 2, "price": 5000},
            {"product_id": "prod-2", "quantity": 1, "price": 2000},
        ],
    }


@pytest.fixture
def product_data():
    """유효한 상품 입력"""
    return {
        "category": "Electronics",
        "name": "무선 이어폰",
        "model": "AirPods Pro",
        "color": "White",
        "brand": "Apple",
        "cost_cny": 850.0,
        "on_hand": 10,
    }
