"""
CLI interface for LLM Session.

Interactive multi-model chat plus a listing of the supported models and
their prices.
"""

import logging
import sys
from typing import List, Optional, Tuple

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from llm_session.cli.display import (
    color_for,
    display_cost_header,
    display_cost_line,
    display_cost_unavailable,
    display_error,
    display_response,
)
from llm_session.config.loader import DEFAULT_WIDTH, load_config
from llm_session.core.errors import LLMSessionError, NoInteractions, UnknownModel
from llm_session.core.session import Session, open_session
from llm_session.sdk import ADAPTERS, get_adapter
from llm_session.sdk.client import ClientConfig
from llm_session.sdk.transport import RequestsTransport

app = typer.Typer()
console = Console()

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1

PROMPT = "> "
QUIT_COMMAND = "/quit"


def parse_client_spec(spec: str) -> ClientConfig:
    """Parse ``PROVIDER[:key=value,...]`` into a ClientConfig.

    Values are read as YAML scalars, so ``max_tokens=2048`` is an int and
    ``temperature=0.7`` a float.
    """
    provider, _, raw_options = spec.partition(":")
    options = {}
    for item in filter(None, (part.strip() for part in raw_options.split(","))):
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected key=value in client '{spec}', got '{item}'")
        options[key.strip()] = yaml.safe_load(value)
    return ClientConfig.create(get_adapter(provider), **options)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """LLM Session CLI."""
    if ctx.invoked_subcommand is None:
        console.print("LLM Session - Use --help to see available commands")


@app.command()
def chat(
    client: Optional[List[str]] = typer.Option(
        None,
        "--client",
        "-c",
        help="Client as PROVIDER[:key=value,...], e.g. claude:model=opus (repeatable)"
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        help="YAML file listing the clients to chat with"
    ),
    width: Optional[int] = typer.Option(
        None,
        "--width",
        "-w",
        help="Wrap responses to this many columns"
    ),
    timeout: float = typer.Option(
        120.0,
        "--timeout",
        help="HTTP timeout in seconds"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log requests and session events"
    )
):
    """
    Chat with one or more models side by side.

    Every message is sent to each client in turn. Type /quit or send EOF to
    leave.
    """
    _configure_logging(verbose)

    configs: List[ClientConfig] = []
    wrap_width = DEFAULT_WIDTH
    try:
        if config:
            app_config = load_config(config)
            configs.extend(app_config.clients)
            wrap_width = app_config.display.width
        configs.extend(parse_client_spec(spec) for spec in client or [])
    except (FileNotFoundError, ValueError, yaml.YAMLError, LLMSessionError) as e:
        console.print(f"[red]Error:[/] {escape(str(e))}", soft_wrap=True)
        sys.exit(EXIT_CODE_FAIL)

    if not configs:
        console.print("[red]Error:[/] No clients given. Use --client or --config.")
        sys.exit(EXIT_CODE_FAIL)

    if width is not None:
        wrap_width = width

    transport = RequestsTransport(timeout=timeout)
    sessions = [open_session(client_config, transport) for client_config in configs]

    console.print(f"\nChat session started with {len(sessions)} models.")
    console.print(f"Type your messages and press Enter. Type {QUIT_COMMAND} to exit.\n")

    try:
        _chat_loop(sessions, wrap_width)
    finally:
        for session in sessions:
            session.close()

    console.print("\nChat session ended.")
    sys.exit(EXIT_CODE_PASS)


def _chat_loop(sessions: List[Session], width: int) -> None:
    while True:
        try:
            line = console.input(PROMPT)
        except EOFError:
            return

        text = line.strip()
        if not text:
            continue
        if text == QUIT_COMMAND:
            return

        results = [(session, _send(session, text)) for session in sessions]
        _display_results(results, width)
        _display_costs(sessions)


def _send(session: Session, text: str) -> Tuple[Optional[str], Optional[Exception]]:
    """Send ``text`` to one session, returning (reply, error)."""
    try:
        return session.send_message(text), None
    except LLMSessionError as e:
        return None, e


def _display_results(results, width: int) -> None:
    console.print()
    for index, (session, (reply, error)) in enumerate(results):
        color = color_for(index)
        if error is None:
            display_response(console, session.display_name, color, reply, width)
            continue
        if isinstance(error, UnknownModel) and error.response_text is not None:
            display_response(console, session.display_name, color, error.response_text, width)
        display_error(console, session.display_name, color, error)


def _display_costs(sessions: List[Session]) -> None:
    display_cost_header(console)
    for index, session in enumerate(sessions):
        color = color_for(index)
        try:
            latest = session.get_latest_cost()
        except NoInteractions:
            display_cost_unavailable(console, session.display_name, color)
            continue
        display_cost_line(console, session.display_name, color, latest, session.get_total_cost())
    console.print()


@app.command()
def models():
    """List supported models, their aliases and prices."""
    table = Table(title="Supported models (USD per 1M tokens)")
    table.add_column("Provider")
    table.add_column("Model")
    table.add_column("Aliases")
    table.add_column("Input", justify="right")
    table.add_column("Output", justify="right")

    seen = set()
    for adapter in ADAPTERS.values():
        if id(adapter) in seen:
            continue
        seen.add(id(adapter))
        aliases = adapter.aliases()
        for model, pricing in adapter.pricing_table().prices.items():
            model_aliases = ", ".join(alias for alias, target in aliases.items() if target == model)
            table.add_row(
                adapter.name,
                model,
                model_aliases,
                f"${pricing.input_per_million:,.2f}",
                f"${pricing.output_per_million:,.2f}",
            )

    console.print(table)


if __name__ == "__main__":
    app()
