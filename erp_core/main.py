"""
ERP 코어 - 메인 스크립트
주문번호/SKU 발급, 환산, 표시 형식, 환율 조회를 명령행에서 실행합니다.
"""

import argparse
import logging
import sys
from datetime import date, datetime
from typing import List, Optional

from erp_core.api.exim_client import EximRateClient
from erp_core.config import ConfigurationError, init_config
from erp_core.domain.currency import DEFAULT_CNY_KRW_RATE, DualCurrencyField, convert, format_cny, format_krw
from erp_core.domain.identifiers import generate_order_number, generate_sku
from erp_core.domain.value_objects import DomainError
from erp_core.i18n import Locale, format_exchange_rate, format_phone_number
from erp_core.utils.utils import parse_datetime, setup_logger

logger = logging.getLogger("erp_core.main")


def _search_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y%m%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"날짜는 YYYYMMDD 형식이어야 합니다: {value}")


def _reference_datetime(value: str) -> datetime:
    parsed = parse_datetime(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"ISO 8601 시각이 아닙니다: {value}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    """명령행 인자 파서"""
    parser = argparse.ArgumentParser(prog='erp-core', description='한중 무역 ERP 코어 도구')

    # 기본 설정
    parser.add_argument('--log-level', type=str, default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='로그 레벨 (기본: 설정 파일의 SYSTEM.LOG_LEVEL)')
    parser.add_argument('--config', type=str, default=None,
                        help='설정 파일 경로 (기본: ERP_CONFIG 또는 ./erp_config.yaml)')

    subparsers = parser.add_subparsers(dest='command', required=True)

    order_parser = subparsers.add_parser('order-number', help='주문번호 발급')
    order_parser.add_argument('--sequence', type=int, required=True, help='당일 주문 순번 (1 이상)')
    order_parser.add_argument('--date', type=_reference_datetime, default=None,
                              help='기준 시각 (ISO 8601, 기본: 현재 시각)')

    sku_parser = subparsers.add_parser('sku', help='SKU 발급')
    sku_parser.add_argument('--category', required=True, help='카테고리')
    sku_parser.add_argument('--model', required=True, help='모델명')
    sku_parser.add_argument('--color', required=True, help='색상')
    sku_parser.add_argument('--brand', required=True, help='브랜드')

    convert_parser = subparsers.add_parser('convert', help='KRW ↔ CNY 환산')
    convert_parser.add_argument('amount', type=float, help='금액')
    convert_parser.add_argument('--from', dest='from_currency', type=str.upper, default='CNY',
                                choices=['KRW', 'CNY'], help='입력 통화')
    convert_parser.add_argument('--rate', type=float, default=DEFAULT_CNY_KRW_RATE,
                                help='1 CNY 당 KRW (기본: 178.50)')

    phone_parser = subparsers.add_parser('format-phone', help='전화번호 표시 형식')
    phone_parser.add_argument('raw', help='전화번호')
    phone_parser.add_argument('--locale', default=None, choices=[locale.value for locale in Locale],
                              help='언어 (기본: 설정 파일의 LOCALE.DEFAULT_LOCALE)')

    rate_parser = subparsers.add_parser('rate', help='한국수출입은행 위안화 환율 조회')
    rate_parser.add_argument('--date', type=_search_date, default=None,
                             help='기준 날짜 (YYYYMMDD, 기본: 오늘)')

    return parser


def run(args: argparse.Namespace, config) -> None:
    """하위 명령 실행"""
    if args.command == 'order-number':
        print(generate_order_number(args.sequence, args.date))

    elif args.command == 'sku':
        print(generate_sku(args.category, args.model, args.color, args.brand))

    elif args.command == 'convert':
        result = convert(args.amount, args.from_currency, args.rate)
        field = DualCurrencyField(rate=result.rate, krw=result.krw, cny=result.cny)
        print(f"KRW {format_krw(result.krw)}")
        print(f"CNY {format_cny(result.cny)}")
        print(field.rate_label())

    elif args.command == 'format-phone':
        print(format_phone_number(args.raw, args.locale or config.locale.default_locale))

    elif args.command == 'rate':
        client = EximRateClient(config.exchange_rate)
        snapshot = client.current_rate(today=args.date)
        print(format_exchange_rate(snapshot.rate, config.locale.default_locale))
        print(f"{snapshot.as_of_date.isoformat()} ({snapshot.source})")


def main(argv: Optional[List[str]] = None) -> int:
    """메인 함수"""
    # 명령행 인자 파싱
    args = build_parser().parse_args(argv)

    try:
        config = init_config(args.config)
    except ConfigurationError as e:
        setup_logger(args.log_level or 'INFO')
        logger.error(f"설정 로드 실패: {e}")
        return 1

    # 로그 설정 (명령행 인자가 있는 경우 우선 적용)
    setup_logger(args.log_level or config.system.log_level, config.system.log_file)

    try:
        run(args, config)
    except DomainError as e:
        logger.error(f"{args.command} 실행 실패: {e}")
        print(f"오류: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
