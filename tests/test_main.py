"""
명령행 인터페이스 테스트
"""

import pytest

from erp_core.api import exim_client
from erp_core.main import main


def test_order_number(capsys):
    assert main(["order-number", "--sequence", "1", "--date", "2024-08-23T15:00:00Z"]) == 0
    assert capsys.readouterr().out.strip() == "ORD-240824-001"


def test_order_number_invalid_sequence(capsys):
    assert main(["order-number", "--sequence", "0"]) == 1
    assert "오류" in capsys.readouterr().err


def test_order_number_invalid_date():
    with pytest.raises(SystemExit):
        main(["order-number", "--sequence", "1", "--date", "yesterday"])


def test_sku(capsys):
    assert main(["sku", "--category", "Phone", "--model", "Galaxy", "--color", "Black",
                 "--brand", "Samsung"]) == 0
    assert capsys.readouterr().out.strip().startswith("PHO-Galaxy-BLA-SAM-")


def test_sku_missing_field(capsys):
    assert main(["sku", "--category", " ", "--model", "Galaxy", "--color", "Black",
                 "--brand", "Samsung"]) == 1


def test_convert(capsys):
    assert main(["convert", "100", "--from", "cny"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "KRW 17,850",
        "CNY 100.00",
        "1 CNY = 178.50 KRW",
    ]


def test_convert_invalid_rate(capsys):
    assert main(["convert", "100", "--rate", "0"]) == 1


def test_format_phone(capsys):
    assert main(["format-phone", "0212345678"]) == 0
    assert capsys.readouterr().out.strip() == "02-1234-5678"


def test_format_phone_locale_from_config(tmp_path, capsys):
    config_file = tmp_path / "erp.yaml"
    config_file.write_text("LOCALE:\n  DEFAULT_LOCALE: zh-CN\n", encoding="utf-8")
    assert main(["--config", str(config_file), "format-phone", "01012345678"]) == 0
    assert capsys.readouterr().out.strip() == "01012345678"


def test_rate_without_api_key_uses_default(monkeypatch, capsys):
    monkeypatch.setattr(exim_client.requests, "get", lambda *args, **kwargs: pytest.fail("no request"))
    assert main(["rate", "--date", "20240823"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "환율: 1 CNY = 178.50 KRW",
        "2024-08-23 (default)",
    ]


def test_invalid_config(tmp_path):
    config_file = tmp_path / "erp.yaml"
    config_file.write_text("SYSTEM:\n  LOG_LEVEL: LOUD\n", encoding="utf-8")
    assert main(["--config", str(config_file), "format-phone", "0212345678"]) == 1
