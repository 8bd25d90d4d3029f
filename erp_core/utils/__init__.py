"""
ERP 코어 - 유틸리티 모듈
로거 설정 및 한국 표준시(KST) 날짜 유틸리티
"""

from erp_core.utils.utils import setup_logger, now_utc, to_kst, kst_date, parse_datetime, KST

__all__ = ['setup_logger', 'now_utc', 'to_kst', 'kst_date', 'parse_datetime', 'KST']
