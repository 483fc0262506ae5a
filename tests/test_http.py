from __future__ import annotations

import httpx
import pytest

from crossbench._errors import APIError, ConfigurationError, FetchError, NotFoundError, RateLimitError, ServerError
from crossbench._http import FetchClient
from crossbench.config import DEFAULT_ENDPOINT, FetchSettings

URL = "https://example.test/models"


def _client(responses: list, delays: list[float]) -> FetchClient:
    calls = iter(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        item = next(calls)
        if isinstance(item, Exception):
            raise item
        return item

    return FetchClient(URL, retry_delay=2.0, transport=httpx.MockTransport(handler), sleep=delays.append)


class TestFetch:
    def test_success_first_try(self) -> None:
        delays: list[float] = []
        with _client([httpx.Response(200, content=b"[]")], delays) as client:
            assert client.fetch() == b"[]"
        assert delays == []

    def test_retries_server_error(self) -> None:
        delays: list[float] = []
        client = _client([httpx.Response(503, text="busy"), httpx.Response(200, content=b"[1]")], delays)
        assert client.fetch() == b"[1]"
        assert delays == [2.0]

    def test_retries_transport_error(self) -> None:
        delays: list[float] = []
        boom = httpx.ConnectError("refused")
        client = _client([boom, httpx.Response(200, content=b"[]")], delays)
        assert client.fetch() == b"[]"
        assert delays == [2.0]

    def test_empty_body_counts_as_failure(self) -> None:
        delays: list[float] = []
        client = _client([httpx.Response(200, content=b""), httpx.Response(200, content=b"[]")], delays)
        assert client.fetch() == b"[]"
        assert len(delays) == 1

    def test_gives_up_after_max_retries(self, caplog: pytest.LogCaptureFixture) -> None:
        delays: list[float] = []
        client = _client([httpx.Response(500, text="down")] * 3, delays)
        with pytest.raises(FetchError) as excinfo:
            client.fetch()
        assert excinfo.value.attempts == 3
        assert excinfo.value.endpoint == URL
        assert "500" in (excinfo.value.last_error or "")
        # no sleep after the final attempt
        assert delays == [2.0, 2.0]
        assert caplog.text.count("failed") == 3

    def test_not_found_is_retried_too(self) -> None:
        delays: list[float] = []
        client = _client([httpx.Response(404, text="gone")] * 3, delays)
        with pytest.raises(FetchError):
            client.fetch()


class TestConstruction:
    def test_rejects_zero_retries(self) -> None:
        with pytest.raises(ValueError):
            FetchClient(URL, max_retries=0)

    def test_rejects_non_http_endpoint(self) -> None:
        with pytest.raises(ConfigurationError):
            FetchClient("ftp://example.test")

    def test_default_endpoint(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CROSSBENCH_ENDPOINT", raising=False)
        assert FetchClient().endpoint == DEFAULT_ENDPOINT

    def test_endpoint_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CROSSBENCH_ENDPOINT", URL)
        assert FetchClient().endpoint == URL

    def test_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CROSSBENCH_MAX_RETRIES", "5")
        monkeypatch.setenv("CROSSBENCH_RETRY_DELAY", "0.5")
        settings = FetchSettings.from_env(URL)
        assert settings.max_retries == 5
        assert settings.retry_delay == 0.5
        client = FetchClient.from_settings(settings)
        assert client.endpoint == URL

    def test_bad_env_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CROSSBENCH_MAX_RETRIES", "many")
        with pytest.raises(ConfigurationError):
            FetchSettings.from_env(URL)


class TestStatusErrors:
    @pytest.mark.parametrize(
        ("status", "kind"),
        [(404, NotFoundError), (429, RateLimitError), (500, ServerError), (503, ServerError), (403, APIError)],
    )
    def test_from_status(self, status: int, kind: type[APIError]) -> None:
        err = APIError.from_status(URL, status, "Reason", "x" * 500)
        assert type(err) is kind
        assert err.endpoint == URL
        assert err.status_code == status
        assert len(err.response_body) == 500
        assert str(err).startswith(f"{URL} answered {status} Reason: ")
        assert len(str(err)) < 300
