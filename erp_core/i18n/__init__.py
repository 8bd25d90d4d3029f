"""
ERP 코어 - 다국어 패키지

한국어(ko)/중국어 간체(zh-CN) 메시지와 표시 형식
"""

from .locales import (
    Locale,
    MessageKey,
    MESSAGES,
    DEFAULT_LOCALE,
    resolve_locale,
    detect_locale,
    is_supported_locale,
    translate
)

from .formatters import (
    format_date,
    format_date_time,
    format_relative_time,
    format_number,
    format_currency,
    format_percent,
    format_file_size,
    format_phone_number,
    mask_phone_number,
    format_order_status,
    format_exchange_rate
)

__all__ = [
    'Locale',
    'MessageKey',
    'MESSAGES',
    'DEFAULT_LOCALE',
    'resolve_locale',
    'detect_locale',
    'is_supported_locale',
    'translate',
    'format_date',
    'format_date_time',
    'format_relative_time',
    'format_number',
    'format_currency',
    'format_percent',
    'format_file_size',
    'format_phone_number',
    'mask_phone_number',
    'format_order_status',
    'format_exchange_rate'
]
