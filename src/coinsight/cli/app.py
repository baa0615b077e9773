"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..chat import ChatController
from ..errors import FeedError
from ..market import POLL_INTERVAL_SECONDS, MarketFeedPoller
from .providers import get_gateway, get_market_client

# Load environment variables
load_dotenv()

app = typer.Typer(
    name="coinsight",
    help="Crypto portfolio assistant with live market data",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()


@app.command()
def chat(
    interval: float = typer.Option(
        POLL_INTERVAL_SECONDS,
        "--interval",
        "-i",
        min=1.0,
        help="Seconds between market data refreshes"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive chat interface."""
    async def _chat():
        from ..ui import run_textual_tui

        gateway = get_gateway(console)
        client = get_market_client()
        poller = MarketFeedPoller(client.fetch_quotes, interval=interval)
        controller = ChatController(gateway, poller)

        try:
            await run_textual_tui(
                controller,
                log_level=log_level,
                subtitle=f"{gateway.name} | every {interval:g}s",
            )
        finally:
            await client.close()
            await gateway.close()
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


@app.command()
def prices():
    """Fetch and print the current prices of the tracked assets."""
    async def _prices():
        async with get_market_client() as client:
            try:
                quotes = await client.fetch_quotes()
            except FeedError as e:
                console.print(f"[red]Error: {e}[/red]")
                raise typer.Exit(code=1)

        if not quotes:
            console.print("[yellow]Provider returned no quotes[/yellow]")
            return

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("#", style="dim", width=3)
        table.add_column("Asset", style="cyan")
        table.add_column("Symbol", style="yellow", width=8)
        table.add_column("Price (USD)", style="green", justify="right")

        for i, quote in enumerate(quotes, 1):
            table.add_row(str(i), quote.name, quote.display_symbol, f"${quote.display_price}")

        console.print(table)

    asyncio.run(_prices())


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question for the advisor"),
):
    """Ask a single question, enriched with the current market snapshot."""
    async def _ask():
        gateway = get_gateway(console)
        client = get_market_client()
        controller = ChatController(gateway)
        failures: list[str] = []
        controller.set_debug_callback(
            lambda level, component, message: failures.append(message) if level == "error" else None
        )

        try:
            try:
                controller.update_snapshot(await client.fetch_quotes())
            except FeedError as e:
                console.print(f"[yellow]Warning: {e}; asking without market data[/yellow]")

            task = controller.submit(question)
            if task is None:
                console.print("[red]Error: question must not be empty[/red]")
                raise typer.Exit(code=1)

            with console.status("[dim]Thinking ...[/dim]"):
                await task

            reply = controller.last_reply()
            if reply is None:
                console.print(f"[red]{controller.messages[-1].content}[/red]")
                for failure in failures:
                    console.print(f"[dim]{escape(failure)}[/dim]")
                raise typer.Exit(code=1)

            console.print(Panel(Markdown(reply), title="Advisor", border_style="cyan"))
        finally:
            controller.close()
            await client.close()
            await gateway.close()

    asyncio.run(_ask())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
