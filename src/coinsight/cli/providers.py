"""Collaborator factory functions for the CLI.

Centralizes creation of the market client and advisory gateway from
environment variables. Hides configuration details from command
implementations.
"""

import os

import typer
from rich.console import Console

from ..gateway import AgentGateway, create_agent_gateway
from ..market import DEFAULT_MARKET_URL, TRACKED_ASSETS, MarketDataClient
from ..prompts import get_advisor_prompt

_console = Console()


def get_market_client() -> MarketDataClient:
    """Create the market-data client from environment variables.

    Environment variables:
        COINSIGHT_MARKET_URL: Provider API root (default: CoinGecko v3)
        COINSIGHT_TRACKED_ASSETS: Comma-separated provider ids
            (default: bitcoin,ethereum,internet-computer,solana,ripple)
    """
    tracked = os.getenv("COINSIGHT_TRACKED_ASSETS")
    asset_ids = (
        [asset.strip() for asset in tracked.split(",") if asset.strip()]
        if tracked else list(TRACKED_ASSETS)
    )
    return MarketDataClient(
        base_url=os.getenv("COINSIGHT_MARKET_URL", DEFAULT_MARKET_URL),
        asset_ids=asset_ids,
    )


def get_gateway(console: Console | None = None) -> AgentGateway:
    """Create the advisory gateway from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        Gateway instance

    Raises:
        SystemExit: If the selected gateway is not configured

    Environment variables:
        COINSIGHT_GATEWAY: openai, deepseek, anthropic or http (default: openai)
        COINSIGHT_GATEWAY_URL: Backend endpoint (for http gateway)
        OPENAI_API_KEY: OpenAI API key (for openai gateway)
        OPENAI_CHAT_MODEL: OpenAI model (default: gpt-4o-mini)
        DEEPSEEK_API_KEY: DeepSeek API key (for deepseek gateway)
        ANTHROPIC_API_KEY: Anthropic API key (for anthropic gateway)
        ANTHROPIC_MODEL: Anthropic model (default: claude-sonnet-4-20250514)
        COINSIGHT_ADVISOR_PROMPT: File replacing the packaged advisor prompt
    """
    con = console or _console
    kind = os.getenv("COINSIGHT_GATEWAY", "openai").lower()

    if kind == "http":
        url = os.getenv("COINSIGHT_GATEWAY_URL")
        if not url:
            con.print("[red]Error: COINSIGHT_GATEWAY_URL not set in environment[/red]")
            raise typer.Exit(code=1)
        return create_agent_gateway("http", url=url)

    env_keys = {
        "openai": "OPENAI_API_KEY",
        "deepseek": "DEEPSEEK_API_KEY",
        "anthropic": "ANTHROPIC_API_KEY",
        "claude": "ANTHROPIC_API_KEY",
    }
    if kind not in env_keys:
        con.print(f"[red]Error: Unknown gateway: {kind}[/red]")
        raise typer.Exit(code=1)

    api_key = os.getenv(env_keys[kind])
    if not api_key:
        con.print(f"[red]Error: {env_keys[kind]} not set in environment[/red]")
        raise typer.Exit(code=1)

    try:
        system_prompt = get_advisor_prompt()
    except (FileNotFoundError, ValueError) as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    config = {"api_key": api_key, "system_prompt": system_prompt}
    if kind == "openai":
        config["model"] = os.getenv("OPENAI_CHAT_MODEL", "gpt-4o-mini")
    elif kind in ("anthropic", "claude"):
        config["model"] = os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-20250514")

    return create_agent_gateway(kind, **config)
