"""
ERP 코어 - 다국어 메시지 카탈로그

지원 언어는 한국어(ko)와 중국어 간체(zh-CN) 두 가지입니다.
메시지 키는 MessageKey 로 닫혀 있으며, 모든 언어에 모든 키의 번역이 있어야 합니다.
번역 누락은 모듈 로드 시점에 RuntimeError 로 드러납니다.
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, Optional, Union
import logging
import re

logger = logging.getLogger(__name__)


class Locale(Enum):
    """지원 언어"""
    KO = "ko"
    ZH_CN = "zh-CN"

    def __str__(self) -> str:
        return self.value


DEFAULT_LOCALE = Locale.KO

LOCALE_NAMES: Dict[Locale, str] = {
    Locale.KO: "한국어",
    Locale.ZH_CN: "中文",
}


class MessageKey(Enum):
    """메시지 키"""
    JUST_NOW = "just_now"
    MINUTES_AGO = "minutes_ago"
    HOURS_AGO = "hours_ago"
    DAYS_AGO = "days_ago"
    DATE_LONG = "date_long"
    DATE_TIME = "date_time"
    INVALID_DATE = "invalid_date"
    FILE_SIZE_BYTES = "file_size_bytes"
    STATUS_PAID = "status_paid"
    STATUS_SHIPPED = "status_shipped"
    STATUS_DONE = "status_done"
    STATUS_REFUNDED = "status_refunded"
    EXCHANGE_RATE = "exchange_rate"


MESSAGES: Dict[Locale, Dict[MessageKey, str]] = {
    Locale.KO: {
        MessageKey.JUST_NOW: "방금 전",
        MessageKey.MINUTES_AGO: "{n}분 전",
        MessageKey.HOURS_AGO: "{n}시간 전",
        MessageKey.DAYS_AGO: "{n}일 전",
        MessageKey.DATE_LONG: "{year}년 {month}월 {day}일",
        MessageKey.DATE_TIME: "{year}년 {month}월 {day}일 {hour:02d}:{minute:02d}",
        MessageKey.INVALID_DATE: "Invalid Date",
        MessageKey.FILE_SIZE_BYTES: "바이트",
        MessageKey.STATUS_PAID: "결제완료",
        MessageKey.STATUS_SHIPPED: "배송중",
        MessageKey.STATUS_DONE: "배송완료",
        MessageKey.STATUS_REFUNDED: "환불",
        MessageKey.EXCHANGE_RATE: "환율",
    },
    Locale.ZH_CN: {
        MessageKey.JUST_NOW: "刚刚",
        MessageKey.MINUTES_AGO: "{n}分钟前",
        MessageKey.HOURS_AGO: "{n}小时前",
        MessageKey.DAYS_AGO: "{n}天前",
        MessageKey.DATE_LONG: "{year}年{month}月{day}日",
        MessageKey.DATE_TIME: "{year}年{month}月{day}日 {hour:02d}:{minute:02d}",
        MessageKey.INVALID_DATE: "Invalid Date",
        MessageKey.FILE_SIZE_BYTES: "字节",
        MessageKey.STATUS_PAID: "已付款",
        MessageKey.STATUS_SHIPPED: "配送中",
        MessageKey.STATUS_DONE: "已完成",
        MessageKey.STATUS_REFUNDED: "已退款",
        MessageKey.EXCHANGE_RATE: "汇率",
    },
}


def _check_catalog() -> None:
    """모든 언어에 모든 메시지 키가 있는지 확인"""
    for locale in Locale:
        missing = [key.name for key in MessageKey if key not in MESSAGES.get(locale, {})]
        if missing:
            raise RuntimeError(f"번역 누락 ({locale.value}): {', '.join(missing)}")


_check_catalog()


def is_supported_locale(value: Optional[str]) -> bool:
    """지원 언어 코드 여부"""
    return any(locale.value == value for locale in Locale)


def resolve_locale(value: Optional[Union[str, Locale]]) -> Locale:
    """
    언어 코드 해석

    Args:
        value: 언어 코드 또는 Locale

    Returns:
        Locale, 지원하지 않거나 비어 있으면 한국어
    """
    if isinstance(value, Locale):
        return value
    for locale in Locale:
        if locale.value == value:
            return locale
    return DEFAULT_LOCALE


def detect_locale(accept_language: Optional[str]) -> Locale:
    """
    Accept-Language 헤더에서 언어 결정

    가중치(q)를 무시하고 앞에서부터 ko*/zh* 로 시작하는 첫 태그를 사용합니다.

    Args:
        accept_language: 예) "zh-CN,zh;q=0.9,en;q=0.8"

    Returns:
        Locale, 해당 태그가 없으면 한국어
    """
    if not accept_language:
        return DEFAULT_LOCALE

    for tag in re.split(r"\s*,\s*", accept_language.strip()):
        language = tag.split(";", 1)[0].strip().lower()
        if language.startswith("ko"):
            return Locale.KO
        if language.startswith("zh"):
            return Locale.ZH_CN

    return DEFAULT_LOCALE


def translate(key: MessageKey, locale: Optional[Union[str, Locale]] = None, **values) -> str:
    """
    메시지 번역

    Args:
        key: 메시지 키
        locale: 언어 (지원하지 않으면 한국어)
        **values: {이름} 자리 표시자에 넣을 값

    Returns:
        번역된 문자열
    """
    template = MESSAGES[resolve_locale(locale)][key]
    return template.format(**values) if values else template
