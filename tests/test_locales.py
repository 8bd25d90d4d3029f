"""
다국어 메시지 카탈로그 테스트
"""

import pytest

from erp_core.i18n.locales import (
    MESSAGES, Locale, MessageKey, detect_locale, is_supported_locale, resolve_locale, translate
)


def test_catalog_is_complete():
    for locale in Locale:
        assert set(MESSAGES[locale]) == set(MessageKey)


@pytest.mark.parametrize("value,expected", [
    ("ko", Locale.KO),
    ("zh-CN", Locale.ZH_CN),
    (Locale.ZH_CN, Locale.ZH_CN),
    ("en", Locale.KO),
    ("zh-cn", Locale.KO),
    (None, Locale.KO),
])
def test_resolve_locale(value, expected):
    assert resolve_locale(value) is expected


def test_is_supported_locale():
    assert is_supported_locale("ko")
    assert is_supported_locale("zh-CN")
    assert not is_supported_locale("ja")
    assert not is_supported_locale(None)


@pytest.mark.parametrize("header,expected", [
    ("zh-CN,zh;q=0.9,en;q=0.8", Locale.ZH_CN),
    ("ko-KR,ko;q=0.9", Locale.KO),
    ("en-US,en;q=0.9,zh-TW;q=0.8", Locale.ZH_CN),
    ("en-US", Locale.KO),
    ("", Locale.KO),
    (None, Locale.KO),
])
def test_detect_locale(header, expected):
    assert detect_locale(header) is expected


def test_translate_interpolates():
    assert translate(MessageKey.MINUTES_AGO, "ko", n=5) == "5분 전"
    assert translate(MessageKey.DAYS_AGO, Locale.ZH_CN, n=2) == "2天前"
    assert translate(MessageKey.JUST_NOW, "fr") == "방금 전"
