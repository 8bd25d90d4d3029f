"""
다국어 표시 형식 테스트
"""

from datetime import date, datetime, timedelta

import pytest
from pytz import utc

from erp_core.i18n.formatters import (
    format_currency, format_date, format_date_time, format_exchange_rate, format_file_size,
    format_number, format_order_status, format_percent, format_phone_number,
    format_relative_time, mask_phone_number
)
from erp_core.domain.entities import OrderStatus

NOW = datetime(2024, 8, 23, 12, 0, tzinfo=utc)


class TestFormatDate:

    def test_korean(self):
        assert format_date("2024-08-23T10:30:00Z", "ko") == "2024년 8월 23일"

    def test_chinese(self):
        assert format_date("2024-08-23T10:30:00Z", "zh-CN") == "2024年8月23日"

    def test_rendered_in_kst(self):
        assert format_date("2024-08-23T15:30:00Z", "ko") == "2024년 8월 24일"

    def test_date_object(self):
        assert format_date(date(2024, 1, 5), "zh-CN") == "2024年1月5日"

    def test_none(self):
        assert format_date(None, "ko") == ""

    def test_invalid(self):
        assert format_date("invalid", "ko") == "Invalid Date"

    def test_unsupported_locale_falls_back_to_korean(self):
        assert format_date("2024-08-23T10:30:00Z", "en-US") == "2024년 8월 23일"
        assert format_date("2024-08-23T10:30:00Z", None) == "2024년 8월 23일"

    def test_date_time(self):
        assert format_date_time("2024-08-23T10:30:00Z", "ko") == "2024년 8월 23일 19:30"
        assert format_date_time("2024-08-23T10:30:00Z", "zh-CN") == "2024年8月23日 19:30"


class TestFormatCurrency:

    def test_krw(self):
        assert format_currency(10000, "KRW", "ko") == "₩10,000"

    def test_cny(self):
        assert format_currency(100, "CNY", "zh-CN") == "¥100.00"

    def test_usd(self):
        assert format_currency(99.99, "USD", "ko") == "$99.99"

    def test_zero(self):
        assert format_currency(0, "KRW", "ko") == "₩0"

    def test_negative_keeps_sign(self):
        assert format_currency(-1000, "KRW", "ko") == "₩-1,000"

    def test_krw_rounds_half_up(self):
        assert format_currency(1234.5, "KRW", "ko") == "₩1,235"

    def test_unknown_currency_uses_code(self):
        assert format_currency(1000, "EUR", "ko") == "EUR 1,000.00"

    def test_non_finite_amount(self):
        assert format_currency(float("inf"), "KRW", "ko") == "₩∞"
        assert format_currency(float("-inf"), "CNY", "zh-CN") == "¥-∞"
        assert format_currency(float("nan"), "EUR", "ko") == "EUR NaN"


class TestFormatNumber:

    @pytest.mark.parametrize("value,expected", [
        (1234567, "1,234,567"),
        (1234.56, "1,234.56"),
        (1234.5, "1,234.5"),
        (1.005, "1.01"),
        (0, "0"),
        (-9876.543, "-9,876.54"),
        (100.0, "100"),
    ])
    def test_format(self, value, expected):
        assert format_number(value, "ko") == expected

    @pytest.mark.parametrize("value,expected", [
        (float("inf"), "∞"),
        (float("-inf"), "-∞"),
        (float("nan"), "NaN"),
    ])
    def test_non_finite(self, value, expected):
        assert format_number(value, "ko") == expected

    def test_chinese_same_grouping(self):
        assert format_number(1234567, "zh-CN") == "1,234,567"

    def test_percent(self):
        assert format_percent(0.125, "ko") == "12.5%"
        assert format_percent(0.5, "zh-CN", decimals=0) == "50%"

    @pytest.mark.parametrize("size,locale,expected", [
        (0, "ko", "0 바이트"),
        (0, "zh-CN", "0 字节"),
        (512, "ko", "512.00 바이트"),
        (1536, "ko", "1.50 KB"),
        (1024 ** 2, "zh-CN", "1.00 MB"),
        (5 * 1024 ** 5, "ko", "5120.00 TB"),
    ])
    def test_file_size(self, size, locale, expected):
        assert format_file_size(size, locale) == expected


class TestFormatPhoneNumber:

    @pytest.mark.parametrize("raw,expected", [
        ("01012345678", "010-1234-5678"),
        ("0101234567", "010-123-4567"),
        ("0212345678", "02-1234-5678"),
        ("0311234567", "031-123-4567"),
        ("010-1234-5678", "010-1234-5678"),
        ("010 1234 5678", "010-1234-5678"),
        ("123", "123"),
        ("", ""),
    ])
    def test_korean(self, raw, expected):
        assert format_phone_number(raw, "ko") == expected

    def test_chinese_unchanged(self):
        assert format_phone_number("01012345678", "zh-CN") == "01012345678"

    def test_mask(self):
        assert mask_phone_number("01012345678") == "010-****-5678"
        assert mask_phone_number("02-1234-5678") == "02-****-5678"
        assert mask_phone_number("123") == "123"
        assert mask_phone_number(None) == ""


class TestFormatRelativeTime:

    @pytest.mark.parametrize("delta,locale,expected", [
        (timedelta(seconds=30), "ko", "방금 전"),
        (timedelta(seconds=0), "zh-CN", "刚刚"),
        (timedelta(minutes=30), "ko", "30분 전"),
        (timedelta(minutes=15), "zh-CN", "15分钟前"),
        (timedelta(hours=3), "ko", "3시간 전"),
        (timedelta(hours=2), "zh-CN", "2小时前"),
        (timedelta(days=3), "ko", "3일 전"),
        (timedelta(days=1), "zh-CN", "1天前"),
        (timedelta(hours=23, minutes=59), "ko", "23시간 전"),
    ])
    def test_past(self, delta, locale, expected):
        assert format_relative_time(NOW - delta, locale, now=NOW) == expected

    def test_iso_string_input(self):
        assert format_relative_time("2024-08-23T11:30:00Z", "ko", now=NOW) == "30분 전"

    def test_future_falls_back_to_date(self):
        assert format_relative_time(NOW + timedelta(hours=24), "ko", now=NOW) == "2024년 8월 24일"

    def test_none(self):
        assert format_relative_time(None, "ko", now=NOW) == ""

    def test_unparseable_now(self):
        assert format_relative_time(NOW, "ko", now="not-a-date") == "Invalid Date"

    def test_default_now(self):
        assert format_relative_time(datetime.now(utc), "ko") == "방금 전"


class TestDomainLabels:

    def test_order_status(self):
        assert format_order_status(OrderStatus.SHIPPED, "ko") == "배송중"
        assert format_order_status("DONE", "zh-CN") == "已完成"
        assert format_order_status("UNKNOWN", "ko") == "UNKNOWN"

    def test_exchange_rate(self):
        assert format_exchange_rate(178.5, "ko") == "환율: 1 CNY = 178.50 KRW"
        assert format_exchange_rate(191.234, "zh-CN") == "汇率: 1 CNY = 191.23 KRW"

    def test_non_finite_percent_and_rate(self):
        assert format_percent(float("nan"), "ko") == "NaN%"
        assert format_exchange_rate(float("inf"), "ko") == "환율: 1 CNY = ∞ KRW"
