"""
주문/상품 입력 검증 테스트
"""

import pytest

from erp_core.domain.entities import OrderItem
from erp_core.domain.validators import (
    validate_order, validate_product, is_valid_phone_number, is_valid_pccc,
    normalize_pccc, mask_pccc, format_pccc_input
)


class TestValidateOrder:

    def test_valid_order(self, order_data):
        result = validate_order(order_data)
        assert result.is_valid
        assert result.errors == ()

    def test_empty_customer_name(self, order_data):
        order_data["customer_name"] = ""
        result = validate_order(order_data)
        assert not result.is_valid
        assert "Customer name is required" in result.errors

    def test_errors_accumulate_in_order(self):
        result = validate_order({"items": []})
        assert result.errors == (
            "Customer name is required",
            "Customer phone is required",
            "PCCC is required",
            "Shipping address is required",
            "Order must have at least one item",
        )

    def test_invalid_formats(self, order_data):
        order_data["customer_phone"] = "12345"
        order_data["pccc"] = "P12345"
        result = validate_order(order_data)
        assert result.errors == ("Invalid phone number format", "Invalid PCCC format")

    def test_item_errors(self, order_data):
        order_data["items"] = [
            {"product_id": "", "quantity": 0, "price": -1},
            {"product_id": "prod-2", "quantity": 1, "price": 0},
        ]
        result = validate_order(order_data)
        assert result.errors == (
            "Item 1: Product ID is required",
            "Item quantity must be positive",
            "Item price cannot be negative",
        )

    @pytest.mark.parametrize("items", [5, "prod-1", {"product_id": "prod-1"}])
    def test_items_not_a_list(self, order_data, items):
        order_data["items"] = items
        assert validate_order(order_data).errors == ("Order must have at least one item",)

    @pytest.mark.parametrize("quantity", [1.5, float("nan"), float("inf"), True])
    def test_quantity_must_be_whole_and_finite(self, order_data, quantity):
        order_data["items"][0]["quantity"] = quantity
        assert validate_order(order_data).errors == ("Item quantity must be positive",)

    @pytest.mark.parametrize("price", [float("nan"), float("inf")])
    def test_price_must_be_finite(self, order_data, price):
        order_data["items"][1]["price"] = price
        assert validate_order(order_data).errors == ("Item price cannot be negative",)

    def test_accepts_order_items(self, order_data):
        order_data["items"] = [OrderItem("prod-1", 1, 1000)]
        assert validate_order(order_data).is_valid

    def test_to_dict(self, order_data):
        order_data["pccc"] = ""
        assert validate_order(order_data).to_dict() == {
            "is_valid": False,
            "errors": ["PCCC is required"],
        }


class TestValidateProduct:

    def test_valid_product(self, product_data):
        assert validate_product(product_data).is_valid

    def test_all_errors(self):
        result = validate_product({"cost_cny": 0, "on_hand": -1})
        assert result.errors == (
            "Category is required",
            "Name is required",
            "Model is required",
            "Color is required",
            "Brand is required",
            "Cost must be positive",
            "Stock cannot be negative",
        )

    def test_missing_cost(self, product_data):
        del product_data["cost_cny"]
        assert validate_product(product_data).errors == ("Cost must be positive",)

    def test_fractional_stock(self, product_data):
        product_data["on_hand"] = 1.5
        assert validate_product(product_data).errors == ("Stock must be a whole number",)

    @pytest.mark.parametrize("on_hand", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_stock(self, product_data, on_hand):
        product_data["on_hand"] = on_hand
        assert validate_product(product_data).errors == ("Stock must be a whole number",)

    @pytest.mark.parametrize("cost", [float("nan"), float("inf")])
    def test_non_finite_cost(self, product_data, cost):
        product_data["cost_cny"] = cost
        assert validate_product(product_data).errors == ("Cost must be positive",)

    def test_stock_is_optional(self, product_data):
        del product_data["on_hand"]
        assert validate_product(product_data).is_valid


class TestPhoneAndPCCC:

    @pytest.mark.parametrize("phone", [
        "010-1234-5678", "01012345678", "011-123-4567", "02-123-4567", "0212345678",
        "031-123-4567", "010 1234 5678",
    ])
    def test_valid_phone(self, phone):
        assert is_valid_phone_number(phone)

    @pytest.mark.parametrize("phone", ["", "12345", "010-12-5678", "+82-10-1234-5678", None])
    def test_invalid_phone(self, phone):
        assert not is_valid_phone_number(phone)

    def test_pccc_pattern(self):
        assert is_valid_pccc("P123456789012")
        assert not is_valid_pccc("p123456789012")
        assert not is_valid_pccc("P12345678901")
        assert not is_valid_pccc("123456789012")

    @pytest.mark.parametrize("raw,expected", [
        ("P123456789012", "P123456789012"),
        ("p-1234-5678-9012", "P123456789012"),
        ("123456789012", "P123456789012"),
        (" P 1234 5678 9012 ", "P123456789012"),
        ("P1234", None),
        ("", None),
    ])
    def test_normalize_pccc(self, raw, expected):
        assert normalize_pccc(raw) == expected

    def test_mask_pccc(self):
        assert mask_pccc("P123456789012") == "P-****-****-9012"
        assert mask_pccc("invalid") == ""

    @pytest.mark.parametrize("raw,expected", [
        ("", ""),
        ("P", "P"),
        ("1234", "P-1234"),
        ("P12345", "P-1234-5"),
        ("p1234567890123456", "P-1234-5678-9012"),
    ])
    def test_format_pccc_input(self, raw, expected):
        assert format_pccc_input(raw) == expected
