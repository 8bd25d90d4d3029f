"""
한국수출입은행 환율 API 클라이언트 테스트
"""

from datetime import date

import pytest
import requests

from erp_core.api import exim_client
from erp_core.api.exim_client import EximRateClient, parse_exim_response
from erp_core.config import ExchangeRateConfig
from erp_core.domain.value_objects import ExchangeRateSnapshot

SAMPLE_RESPONSE = [
    {"result": 1, "cur_unit": "USD", "deal_bas_r": "1,336.5", "cur_nm": "미국 달러"},
    {"result": 1, "cur_unit": "CNH", "deal_bas_r": "186.72", "cur_nm": "위안화"},
]


class FakeResponse:

    def __init__(self, payload=None, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


@pytest.fixture
def config():
    return ExchangeRateConfig(api_key="test-key")


@pytest.fixture
def calls(monkeypatch):
    """requests.get 호출 기록, 응답은 테스트에서 지정"""
    recorded = {"response": FakeResponse(SAMPLE_RESPONSE), "requests": []}

    def fake_get(url, params=None, timeout=None):
        recorded["requests"].append({"url": url, "params": params, "timeout": timeout})
        response = recorded["response"]
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(exim_client.requests, "get", fake_get)
    return recorded


class TestParseResponse:

    def test_cnh_rate(self):
        assert parse_exim_response(SAMPLE_RESPONSE) == 186.72

    def test_comma_in_rate(self):
        payload = [{"result": 1, "cur_unit": "CNH", "deal_bas_r": "1,186.72"}]
        assert parse_exim_response(payload) == 1186.72

    @pytest.mark.parametrize("payload", [
        [],
        None,
        {"result": 1},
        [{"result": 3, "cur_unit": "CNH", "deal_bas_r": "186.72"}],
        [{"result": 1, "cur_unit": "USD", "deal_bas_r": "1,336.5"}],
        [{"result": 1, "cur_unit": "CNH", "deal_bas_r": "N/A"}],
    ])
    def test_invalid(self, payload):
        assert parse_exim_response(payload) is None


class TestFetch:

    def test_request_parameters(self, config, calls):
        rate = EximRateClient(config).fetch_cny_rate(date(2024, 8, 23))
        assert rate == 186.72

        request = calls["requests"][0]
        assert request["url"] == "https://oapi.koreaexim.go.kr/site/program/financial/exchangeJSON"
        assert request["params"] == {"authkey": "test-key", "searchdate": "20240823", "data": "AP01"}
        assert request["timeout"] == 10.0

    def test_missing_api_key(self, calls):
        assert EximRateClient(ExchangeRateConfig()).fetch_cny_rate(date(2024, 8, 23)) is None
        assert calls["requests"] == []

    def test_http_error(self, config, calls):
        calls["response"] = FakeResponse(status_code=500)
        assert EximRateClient(config).fetch_cny_rate(date(2024, 8, 23)) is None

    def test_network_error(self, config, calls):
        calls["response"] = requests.exceptions.ConnectionError("down")
        assert EximRateClient(config).fetch_cny_rate(date(2024, 8, 23)) is None

    def test_invalid_json(self, config, calls):
        calls["response"] = FakeResponse(ValueError("not json"))
        assert EximRateClient(config).fetch_cny_rate(date(2024, 8, 23)) is None

    def test_uses_global_config(self, monkeypatch, calls):
        monkeypatch.setenv("KOREA_EXIM_API_KEY", "env-key")
        EximRateClient().fetch_cny_rate(date(2024, 8, 23))
        assert calls["requests"][0]["params"]["authkey"] == "env-key"


class TestCurrentRate:

    def test_weekend_uses_friday(self, config, calls):
        snapshot = EximRateClient(config).current_rate(today=date(2024, 8, 25))
        assert calls["requests"][0]["params"]["searchdate"] == "20240823"
        assert snapshot == ExchangeRateSnapshot(186.72, date(2024, 8, 25), "api_bank")

    def test_falls_back_to_history(self, config, calls):
        calls["response"] = FakeResponse(status_code=503)
        history = [ExchangeRateSnapshot(190.1, date(2024, 8, 20), "api_bank")]
        snapshot = EximRateClient(config).current_rate(today=date(2024, 8, 23), history=history)
        assert snapshot.rate == 190.1

    def test_falls_back_to_default(self, calls):
        snapshot = EximRateClient(ExchangeRateConfig()).current_rate(today=date(2024, 8, 23))
        assert snapshot.rate == 178.50
        assert snapshot.source == "default"
