"""
ERP 코어 - API 패키지
한국수출입은행 환율 API 관련 모듈
"""

from erp_core.api.exim_client import EximRateClient, parse_exim_response

__all__ = [
    'EximRateClient',
    'parse_exim_response',
]
