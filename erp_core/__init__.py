"""
한중 무역 ERP 코어
"""

from erp_core.config import AppConfig, get_config
from erp_core.domain import Order, OrderStatus, Product, InventoryDomainService
from erp_core.api import EximRateClient

__all__ = [
    'AppConfig',
    'get_config',
    'Order',
    'OrderStatus',
    'Product',
    'InventoryDomainService',
    'EximRateClient',
]

__version__ = "1.0.0"
