"""
ERP 코어 - Config 패키지

설정 관리를 위한 통합 인터페이스를 제공합니다.

주요 구성 요소:
- models: 설정 데이터클래스들 (AppConfig, InventoryConfig 등)
- manager: 설정 파일 로딩 및 관리 (ConfigManager, get_config)

권장 사용법:
    from erp_core.config import get_config

    config = get_config()
    threshold = config.inventory.low_stock_threshold
    api_key = config.exchange_rate.api_key
"""

# 주요 공개 인터페이스
from .manager import (
    get_config,
    init_config,
    reset_config,
    ConfigManager,
    ConfigurationError
)
from .models import (
    AppConfig,
    LocaleConfig,
    InventoryConfig,
    ExchangeRateConfig,
    SystemConfig
)

# 공개 API
__all__ = [
    'get_config',
    'init_config',
    'reset_config',
    'ConfigManager',
    'ConfigurationError',

    # 설정 모델들
    'AppConfig',
    'LocaleConfig',
    'InventoryConfig',
    'ExchangeRateConfig',
    'SystemConfig'
]
