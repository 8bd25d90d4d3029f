"""
ERP 코어 - 설정 모델 정의

모든 설정 데이터클래스를 정의합니다.
각 설정 클래스는 검증 로직을 포함합니다.
"""

import logging
from dataclasses import dataclass, field
from abc import ABC, abstractmethod
from typing import Optional

from erp_core.i18n.locales import is_supported_locale

# 로깅 설정
logger = logging.getLogger(__name__)

EXIM_BASE_URL = "https://oapi.koreaexim.go.kr/site/program/financial/exchangeJSON"


class ConfigValidator(ABC):
    """설정 검증을 위한 추상 클래스"""

    @abstractmethod
    def validate(self) -> bool:
        """설정 유효성 검증"""
        pass

    @abstractmethod
    def get_validation_errors(self) -> list[str]:
        """검증 오류 목록 반환"""
        pass


@dataclass
class LocaleConfig(ConfigValidator):
    """언어 설정 클래스"""
    default_locale: str = "ko"

    def validate(self) -> bool:
        """언어 설정 유효성 검증"""
        errors = self.get_validation_errors()
        if errors:
            logger.error(f"언어 설정 검증 실패: {', '.join(errors)}")
            return False
        return True

    def get_validation_errors(self) -> list[str]:
        """언어 설정 검증 오류 목록"""
        errors = []

        if not is_supported_locale(self.default_locale):
            errors.append(f"지원하지 않는 언어입니다: {self.default_locale} (ko, zh-CN 중 하나)")

        return errors


@dataclass
class InventoryConfig(ConfigValidator):
    """재고 설정 클래스"""
    low_stock_threshold: int = 5

    def validate(self) -> bool:
        """재고 설정 유효성 검증"""
        errors = self.get_validation_errors()
        if errors:
            logger.error(f"재고 설정 검증 실패: {', '.join(errors)}")
            return False
        return True

    def get_validation_errors(self) -> list[str]:
        """재고 설정 검증 오류 목록"""
        errors = []

        if isinstance(self.low_stock_threshold, bool) or not isinstance(self.low_stock_threshold, int):
            errors.append("저재고 기준은 정수여야 합니다")
        elif self.low_stock_threshold < 0:
            errors.append("저재고 기준은 0 이상이어야 합니다")

        return errors


@dataclass
class ExchangeRateConfig(ConfigValidator):
    """환율 API (한국수출입은행) 설정 클래스"""
    api_key: str = ""
    base_url: str = EXIM_BASE_URL
    timeout_seconds: float = 10.0

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def validate(self) -> bool:
        """환율 API 설정 유효성 검증"""
        errors = self.get_validation_errors()
        if errors:
            logger.error(f"환율 API 설정 검증 실패: {', '.join(errors)}")
            return False
        return True

    def get_validation_errors(self) -> list[str]:
        """환율 API 설정 검증 오류 목록"""
        errors = []

        if not self.base_url or not self.base_url.startswith('https://'):
            errors.append("BASE_URL이 유효하지 않습니다")

        if not isinstance(self.timeout_seconds, (int, float)) or self.timeout_seconds <= 0:
            errors.append("타임아웃은 0초보다 커야 합니다")

        return errors


@dataclass
class SystemConfig(ConfigValidator):
    """시스템 설정 클래스"""
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def validate(self) -> bool:
        """시스템 설정 유효성 검증"""
        errors = self.get_validation_errors()
        if errors:
            logger.error(f"시스템 설정 검증 실패: {', '.join(errors)}")
            return False
        return True

    def get_validation_errors(self) -> list[str]:
        """시스템 설정 검증 오류 목록"""
        errors = []

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level not in valid_log_levels:
            errors.append(f"로그 레벨은 {valid_log_levels} 중 하나여야 합니다")

        return errors


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    locale: LocaleConfig = field(default_factory=LocaleConfig)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    exchange_rate: ExchangeRateConfig = field(default_factory=ExchangeRateConfig)
    system: SystemConfig = field(default_factory=SystemConfig)

    def validate_all(self) -> bool:
        """모든 설정 검증"""
        configs = [self.locale, self.inventory, self.exchange_rate, self.system]

        all_valid = True
        for config in configs:
            if not config.validate():
                all_valid = False

        return all_valid

    def get_validation_errors(self) -> list[str]:
        """모든 설정의 검증 오류 목록"""
        errors = []
        for config in (self.locale, self.inventory, self.exchange_rate, self.system):
            errors.extend(config.get_validation_errors())
        return errors
