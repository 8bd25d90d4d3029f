"""
ERP 코어 - 설정 관리자

설정 파일 로딩, 파싱, 검증을 담당합니다.
YAML 파일과 AppConfig 객체 간의 변환을 처리합니다.

설정 파일 경로 결정 순서:
1. ConfigManager 에 전달한 경로
2. 환경변수 ERP_CONFIG
3. 작업 디렉터리의 erp_config.yaml

설정 파일이 없으면 기본값을 사용합니다.
"""

import yaml
import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union

from .models import (
    AppConfig, LocaleConfig, InventoryConfig, ExchangeRateConfig, SystemConfig, EXIM_BASE_URL
)

# 로깅 설정
logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "ERP_CONFIG"
API_KEY_ENV = "KOREA_EXIM_API_KEY"
DEFAULT_CONFIG_FILE = "erp_config.yaml"


class ConfigurationError(Exception):
    """설정 관련 오류"""
    pass


class ConfigManager:
    """설정 관리자 클래스"""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        설정 관리자 초기화

        Args:
            config_path: 설정 파일 경로 (None인 경우 ERP_CONFIG 또는 기본 경로 사용)
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_PATH_ENV) or Path.cwd() / DEFAULT_CONFIG_FILE

        self.config_path = Path(config_path)
        self._config: Optional[AppConfig] = None

        logger.debug(f"ConfigManager 초기화: {self.config_path}")

    def load_config(self) -> AppConfig:
        """설정 파일 로드 및 검증"""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    raw_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"YAML 파싱 오류: {e}")
            except OSError as e:
                raise ConfigurationError(f"설정 파일을 읽을 수 없습니다: {e}")

            if raw_config is None:
                raw_config = {}
            if not isinstance(raw_config, dict):
                raise ConfigurationError("설정 파일의 최상위는 매핑이어야 합니다")
            logger.info(f"설정 파일 로드 완료: {self.config_path}")
        else:
            logger.info(f"설정 파일 없음, 기본 설정 사용: {self.config_path}")
            raw_config = {}

        config = self._parse_config(raw_config)

        if not config.validate_all():
            raise ConfigurationError(f"설정 검증에 실패했습니다: {', '.join(config.get_validation_errors())}")

        self._config = config
        return config

    @staticmethod
    def _section(raw_config: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = raw_config.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"{name} 설정은 매핑이어야 합니다")
        return section

    def _parse_config(self, raw_config: Dict[str, Any]) -> AppConfig:
        """원본 설정을 AppConfig 객체로 변환"""
        # 언어 설정 파싱
        locale_config = self._section(raw_config, 'LOCALE')
        locale = LocaleConfig(
            default_locale=locale_config.get('DEFAULT_LOCALE', 'ko')
        )

        # 재고 설정 파싱
        inventory_config = self._section(raw_config, 'INVENTORY')
        inventory = InventoryConfig(
            low_stock_threshold=inventory_config.get('LOW_STOCK_THRESHOLD', 5)
        )

        # 환율 API 설정 파싱 (API 키는 환경변수 우선)
        rate_config = self._section(raw_config, 'EXCHANGE_RATE')
        exchange_rate = ExchangeRateConfig(
            api_key=os.environ.get(API_KEY_ENV) or rate_config.get('API_KEY') or '',
            base_url=rate_config.get('BASE_URL', EXIM_BASE_URL),
            timeout_seconds=rate_config.get('TIMEOUT_SECONDS', 10.0)
        )

        # 시스템 설정 파싱
        system_config = self._section(raw_config, 'SYSTEM')
        system = SystemConfig(
            log_level=str(system_config.get('LOG_LEVEL', 'INFO')).upper(),
            log_file=system_config.get('LOG_FILE')
        )

        return AppConfig(
            locale=locale,
            inventory=inventory,
            exchange_rate=exchange_rate,
            system=system
        )

    @property
    def config(self) -> AppConfig:
        """현재 로드된 설정 반환"""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def reload_config(self) -> AppConfig:
        """설정 다시 로드"""
        self._config = None
        return self.load_config()


# 전역 설정 관리자 인스턴스 (첫 사용 시 생성)
_config_manager: Optional[ConfigManager] = None


def init_config(config_path: Optional[Union[str, Path]] = None) -> AppConfig:
    """지정한 경로로 전역 설정을 다시 로드"""
    global _config_manager
    _config_manager = ConfigManager(config_path)
    return _config_manager.config


def get_config() -> AppConfig:
    """전역 설정 객체 반환"""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager.config


def reset_config() -> None:
    """전역 설정 초기화 (다음 get_config 호출 시 다시 로드)"""
    global _config_manager
    _config_manager = None
