"""Tests for the Typer CLI commands."""
import pytest
import typer
from typer.testing import CliRunner

from coinsight.cli import app as cli_app
from coinsight.cli import providers
from coinsight.errors import GatewayError
from coinsight.market import MarketDataClient

from .fakes import FakeGateway

runner = CliRunner()


@pytest.fixture
def feed(monkeypatch, mock_http_client, make_json_response, coins_markets_payload):
    """Point the CLI at a mock market-data provider."""
    state = {"status": 200, "payload": coins_markets_payload}

    def handler(request):
        return make_json_response(state["payload"], state["status"])

    monkeypatch.setattr(
        cli_app,
        "get_market_client",
        lambda: MarketDataClient(http_client=mock_http_client(handler)),
    )
    return state


def test_prices_prints_table(feed):
    result = runner.invoke(cli_app.app, ["prices"])

    assert result.exit_code == 0
    assert "Bitcoin" in result.output
    assert "BTC" in result.output
    assert "$65000" in result.output


def test_prices_reports_feed_error(feed):
    feed["status"] = 503
    feed["payload"] = {"status": "down"}

    result = runner.invoke(cli_app.app, ["prices"])

    assert result.exit_code == 1
    assert "HTTP 503" in result.output


def test_ask_sends_prompt_with_market_data(feed, monkeypatch):
    gateway = FakeGateway(reply="Dollar-cost average into BTC.")
    monkeypatch.setattr(cli_app, "get_gateway", lambda console: gateway)

    result = runner.invoke(cli_app.app, ["ask", "Should I buy bitcoin?"])

    assert result.exit_code == 0
    assert "Dollar-cost average into BTC." in result.output
    prompt = gateway.calls[0][-1].content
    assert "Bitcoin (BTC): $65000" in prompt
    assert gateway.closed


def test_ask_degrades_without_market_data(feed, monkeypatch):
    feed["status"] = 500
    gateway = FakeGateway()
    monkeypatch.setattr(cli_app, "get_gateway", lambda console: gateway)

    result = runner.invoke(cli_app.app, ["ask", "Anything new?"])

    assert result.exit_code == 0
    assert "asking without market data" in result.output
    assert "Crypto data:\n\n" in gateway.calls[0][-1].content


def test_ask_gateway_failure_exits_nonzero(feed, monkeypatch):
    gateway = FakeGateway(error=GatewayError("upstream timeout", gateway="openai"))
    monkeypatch.setattr(cli_app, "get_gateway", lambda console: gateway)

    result = runner.invoke(cli_app.app, ["ask", "Hello"])

    assert result.exit_code == 1
    assert "An error occurred. Please try again." in result.output
    assert "upstream timeout" in result.output
    assert "Advisor" not in result.output
    assert gateway.closed


def test_ask_rejects_blank_question(feed, monkeypatch):
    monkeypatch.setattr(cli_app, "get_gateway", lambda console: FakeGateway())

    result = runner.invoke(cli_app.app, ["ask", "   "])

    assert result.exit_code == 1
    assert "must not be empty" in result.output


def test_missing_advisor_prompt_override_exits(monkeypatch, tmp_path):
    monkeypatch.setenv("COINSIGHT_GATEWAY", "openai")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("COINSIGHT_ADVISOR_PROMPT", str(tmp_path / "missing.txt"))

    with pytest.raises(typer.Exit) as exc_info:
        providers.get_gateway()

    assert exc_info.value.exit_code == 1
