"""Command line interface."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from gptcall.doctor import DoctorReport


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


def _build_messages(args: argparse.Namespace) -> list:
    from gptcall.llm.providers.base import ChatMessage

    messages = []
    if args.system:
        messages.append(ChatMessage(role="system", content=args.system))
    messages.append(ChatMessage(role="user", content=args.text))
    return messages


def _cmd_ask(args: argparse.Namespace) -> int:
    from gptcall.errors import CallError, ConfigurationError
    from gptcall.llm.client import CompletionClient
    from gptcall.retry import with_retries

    console = Console()
    try:
        client = CompletionClient.from_env()
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        return 2

    with client:
        complete = client.complete
        if args.retries > 1:
            complete = with_retries(client, max_tries=args.retries)
        try:
            text = complete(_build_messages(args))
        except CallError as exc:
            console.print(f"[red]{type(exc).__name__}:[/red] {exc}")
            return 1

    if args.json:
        console.print(json.dumps({"content": text}, indent=2))
    else:
        console.print(Panel(text, title="Assistant", expand=False))
    return 0


_STATUS_STYLE = {"ok": "green", "warn": "yellow", "fail": "red"}


def _doctor_table(report: DoctorReport) -> Table:
    table = Table(title="gptcall doctor")
    for column in ("Check", "Status", "Detail", "Hint"):
        table.add_column(column, overflow="fold", no_wrap=column == "Status")
    for check in report.checks:
        style = _STATUS_STYLE.get(check.status, "white")
        table.add_row(check.name, f"[{style}]{check.status.upper()}[/{style}]", check.detail, check.hint)
    return table


def _cmd_doctor(args: argparse.Namespace) -> int:
    from gptcall.doctor import run_doctor

    report = run_doctor()
    payload = json.dumps(report.as_dict(), indent=2)

    console = Console()
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload, encoding="utf-8")
    if args.json:
        console.print(payload)
    else:
        console.print(_doctor_table(report))
        failed = len(report.failures())
        if failed:
            console.print(f"[red]{failed} check(s) failed.[/red]")
        else:
            console.print("[green]All checks passed.[/green]")
    return 0 if report.ok else 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="gptcall")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_ask = sub.add_parser("ask", help="Send one user message and print the reply")
    p_ask.add_argument("text", help="User message content")
    p_ask.add_argument("--system", help="Optional system message sent first")
    p_ask.add_argument(
        "--retries",
        type=int,
        default=1,
        help="Total attempts on transport failure (default: 1, no retry)",
    )
    p_ask.add_argument("--json", action="store_true", help="Print raw JSON result")
    p_ask.set_defaults(func=_cmd_ask)

    p_doc = sub.add_parser(
        "doctor", help="Check local environment, dependencies, and secrets"
    )
    p_doc.add_argument("--json", action="store_true", help="Print raw JSON report")
    p_doc.add_argument("--output", help="Write JSON report to a file")
    p_doc.set_defaults(func=_cmd_doctor)

    return p


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    _configure_logging(args.verbose)
    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
