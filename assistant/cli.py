"""Interactive chat shell: ``toolchat`` / ``python -m assistant``."""

from __future__ import annotations

import json
import logging
import logging.config
import sys
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape

from assistant.prompts import SYSTEM_PROMPT
from assistant.tools import build_tool_registry
from toolchat.service.chat_service import ChatService
from toolchat.service.config import ChatSettings, load_settings
from toolchat.service.errors import LLMConfigurationError, LLMError
from toolchat.session import ChatSession

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"


def configure_logging(level: str) -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"plain": {"format": "%(name)s: %(message)s"}},
            "handlers": {
                "rich": {
                    "()": "rich.logging.RichHandler",
                    "console": Console(stderr=True),
                    "show_path": False,
                    "formatter": "plain",
                },
            },
            "root": {"handlers": ["rich"], "level": level},
            "loggers": {
                # third-party HTTP chatter stays quiet unless debugging
                "httpx": {"level": "WARNING" if level != "DEBUG" else "DEBUG"},
            },
        }
    )


def _format_args(arguments: dict) -> str:
    return json.dumps(arguments, ensure_ascii=False)


def _stream_reply(service: ChatService, session: ChatSession, text: str, console: Console) -> None:
    mid_line = False
    for event in service.stream_turn(session, text):
        if event.event_type == "token":
            if not mid_line:
                console.print("[bold green]Agent:[/bold green] ", end="")
                mid_line = True
            console.print(event.text, end="", markup=False, highlight=False)
        elif event.event_type == "tool_start":
            if mid_line:
                console.print()
                mid_line = False
            console.print(
                f"[Tool] {event.data.get('tool_name')}({_format_args(event.data.get('arguments') or {})})",
                style="dim",
                markup=False,
                highlight=False,
            )
    console.print()


def _print_reply(service: ChatService, session: ChatSession, text: str, console: Console) -> None:
    result = service.run_turn(session, text)
    for tc in result.tool_calls:
        console.print(f"[Tool] {tc.name}({_format_args(tc.arguments)})", style="dim", markup=False, highlight=False)
    console.print("[bold green]Agent:[/bold green] ", end="")
    console.print(result.text, markup=False, highlight=False)


def run_chat(
    service: ChatService,
    session: ChatSession,
    console: Console,
    stream: bool = True,
    read_line: Optional[Callable[[str], str]] = None,
) -> None:
    """Read-eval-print loop until ``exit``, EOF or Ctrl-C."""
    read_line = read_line or console.input
    reply = _stream_reply if stream else _print_reply

    console.print("\n[bold]--- AI Agent Started ---[/bold]")
    console.print(f"Type '{EXIT_COMMAND}' to quit.")

    while True:
        try:
            text = read_line("\n[bold cyan]You:[/bold cyan] ")
        except (EOFError, KeyboardInterrupt):
            console.print("\nGood bye!")
            return

        # providers reject empty user text; anything else goes to the model as typed
        if not text.strip():
            continue
        if text.lower() == EXIT_COMMAND:
            console.print("Good bye!")
            return

        try:
            reply(service, session, text, console)
        except LLMError as exc:
            logger.debug("Turn failed", exc_info=True)
            console.print()
            console.print(f"[bold red]An error occurred:[/bold red] {type(exc).__name__}: {escape(str(exc))}", highlight=False)
        except KeyboardInterrupt:
            console.print("\n[dim]Interrupted.[/dim]")


def main() -> int:
    console = Console()
    try:
        settings: ChatSettings = load_settings()
        configure_logging(settings.log_level)
        service = ChatService.from_settings(settings)
        session = service.start_session(
            tools=build_tool_registry(settings=settings),
            system_prompt=SYSTEM_PROMPT,
        )
    except LLMConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {escape(str(exc))}", highlight=False)
        return 1

    console.print("Agent successfully configured!")
    logger.info("Using model %s", session.model_name)
    run_chat(service, session, console, stream=settings.stream)
    return 0


if __name__ == "__main__":
    sys.exit(main())
