"""CLI for the study schedule service.

Developer CLI that talks to a running schedule API over HTTP, or serves
the API itself.
"""

import json
import sys
from dataclasses import dataclass
from typing import Any

import httpx
import typer
import uvicorn
from loguru import logger
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from studyplan.api.dependencies.caller import CALLER_HEADER
from studyplan.config.settings import settings

console = Console()

app = typer.Typer(
    name="studyplan",
    help="Study schedule CLI - author, grade and inspect the six-week schedule",
    add_completion=False,
)

REQUEST_TIMEOUT_SECONDS = 10.0


@dataclass
class ClientConfig:
    """Connection settings shared by every client command."""

    base_url: str
    caller: str
    debug: bool


def _setup_logging(debug: bool = False) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{file.name}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level="DEBUG" if debug else "WARNING",
        colorize=True,
    )


def _build_client(base_url: str) -> httpx.Client:
    return httpx.Client(base_url=base_url, timeout=REQUEST_TIMEOUT_SECONDS)


def _config(ctx: typer.Context) -> ClientConfig:
    return ctx.obj


def _print_error(title: str, message: str) -> None:
    console.print(
        Panel(
            Text(title, style="bold red"),
            subtitle=message,
            border_style="red",
        )
    )


def _request(ctx: typer.Context, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
    """Send one request to the schedule API and return the decoded body.

    Args:
        ctx: Typer context holding the ClientConfig
        method: HTTP method
        path: Path relative to the base URL
        payload: Optional JSON body

    Returns:
        Decoded JSON response body

    Raises:
        typer.Exit: On transport errors or error responses
    """
    config = _config(ctx)
    logger.debug(f"{method} {path}", caller=config.caller)

    try:
        with _build_client(config.base_url) as client:
            response = client.request(method, path, json=payload, headers={CALLER_HEADER: config.caller})
    except httpx.HTTPError as e:
        _print_error("Schedule API is not reachable", f"{config.base_url}: {e}")
        raise typer.Exit(1) from e

    if response.is_error:
        try:
            body = response.json()
        except ValueError:
            # Not our JSON error shape, e.g. a plain-text 500 from the server
            _print_error(f"HTTP {response.status_code}", response.text)
            raise typer.Exit(1) from None

        detail = body.get("detail", {}) if isinstance(body, dict) else body
        if isinstance(detail, dict):
            _print_error(detail.get("code", f"HTTP {response.status_code}"), detail.get("message", ""))
        else:
            _print_error(f"HTTP {response.status_code}", json.dumps(detail))
        raise typer.Exit(1)

    return response.json()


def _day_table(days: list[dict[str, Any]], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Week", justify="right")
    table.add_column("Day", justify="right")
    table.add_column("Kind")
    table.add_column("Done")
    table.add_column("Details")

    for day in days:
        if day["kind"] == "reading":
            details = f"{day['subject']} @ {day['time']}: {', '.join(day['topics'])}"
        elif day["kind"] == "exam":
            if day["is_completed"]:
                details = f"{day['title']} - grade {day['grade']} ({day['ipfs_link']})"
            else:
                started = "started" if day["start_time"] else "not started"
                details = f"{day['title']} - {len(day['questions'])} questions, {started}"
        else:
            details = ""
        table.add_row(
            str(day["week_number"]),
            str(day["day_number"]),
            day["kind"],
            "yes" if day["is_completed"] else "no",
            details,
        )
    return table


def _print_event(event: dict[str, Any]) -> None:
    console.print(Panel(JSON(json.dumps(event)), title=event["event"], border_style="green"))


@app.callback()
def main(
    ctx: typer.Context,
    caller: str = typer.Option(settings.owner_id, "--caller", "-c", help="Caller identity sent to the API"),
    base_url: str = typer.Option(settings.api_url, "--base-url", "-u", help="Schedule API base URL"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    _setup_logging(debug)
    ctx.obj = ClientConfig(base_url=base_url, caller=caller, debug=debug)


@app.command()
def serve(
    host: str = typer.Option(settings.server_host, "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(settings.server_port, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
) -> None:
    """Run the schedule API server."""
    logger.info(f"Starting schedule API on {host}:{port} (reload={reload})")
    uvicorn.run("studyplan.main:app", host=host, port=port, reload=reload)


@app.command()
def info(ctx: typer.Context) -> None:
    """Show the schedule owner and candidate."""
    body = _request(ctx, "GET", "/schedule")
    console.print(
        Panel(
            Text(body["candidate_name"], style="bold"),
            subtitle=f"owner: {body['owner']}",
            border_style="cyan",
        )
    )


@app.command()
def today(
    ctx: typer.Context,
    week: int = typer.Argument(..., help="Week number (1-6)"),
    day: int = typer.Argument(..., help="Day number (1-7)"),
) -> None:
    """Show one authored day."""
    body = _request(ctx, "GET", f"/schedule/days/{week}/{day}")
    console.print(_day_table([body], title=f"Week {week}, day {day}"))
    if body["kind"] == "exam" and body["questions"]:
        for index, question in enumerate(body["questions"], start=1):
            console.print(f"  {index}. {question}")


@app.command()
def week(
    ctx: typer.Context,
    week_number: int = typer.Argument(..., help="Week number (1-6)"),
) -> None:
    """Show all seven days of a week."""
    body = _request(ctx, "GET", f"/schedule/weeks/{week_number}")
    console.print(_day_table(body, title=f"Week {week_number}"))


@app.command()
def stats(ctx: typer.Context) -> None:
    """Show completion statistics for the whole schedule."""
    body = _request(ctx, "GET", "/schedule/stats")
    console.print(
        Panel(
            Text(body["percentage_display"], style="bold green"),
            subtitle=f"{body['completed_count']} of {body['total_count']} days completed",
            border_style="green",
        )
    )


@app.command("set-reading")
def set_reading(
    ctx: typer.Context,
    week: int = typer.Argument(..., help="Week number (1-6)"),
    day: int = typer.Argument(..., help="Day number (1-6)"),
    subject: str = typer.Option(..., "--subject", "-s", help="Subject studied"),
    topic: list[str] = typer.Option([], "--topic", "-t", help="Topic (repeatable)"),
    time: str = typer.Option("", "--time", help="Schedule label, e.g. 09:00-12:00"),
) -> None:
    """Author a reading day (owner only)."""
    event = _request(
        ctx,
        "PUT",
        f"/schedule/days/{week}/{day}/reading",
        {"subject": subject, "topics": topic, "time": time},
    )
    _print_event(event)


@app.command("set-exam")
def set_exam(
    ctx: typer.Context,
    week: int = typer.Argument(..., help="Week number (1-6)"),
    day: int = typer.Argument(7, help="Day number (must be 7)"),
    title: str = typer.Option(..., "--title", help="Exam title"),
    question: list[str] = typer.Option([], "--question", "-q", help="Question (repeatable)"),
) -> None:
    """Author an exam day (owner only)."""
    event = _request(
        ctx,
        "PUT",
        f"/schedule/days/{week}/{day}/exam",
        {"title": title, "questions": question},
    )
    _print_event(event)


@app.command()
def start(
    ctx: typer.Context,
    week: int = typer.Argument(..., help="Week number (1-6)"),
    day: int = typer.Argument(7, help="Day number (1-7)"),
) -> None:
    """Start a scheduled exam (any caller)."""
    _print_event(_request(ctx, "POST", f"/schedule/days/{week}/{day}/start"))


@app.command()
def complete(
    ctx: typer.Context,
    week: int = typer.Argument(..., help="Week number (1-6)"),
    day: int = typer.Argument(..., help="Day number (1-7)"),
    grade: str = typer.Option("", "--grade", "-g", help="Exam grade"),
    ipfs_link: str = typer.Option("", "--ipfs-link", help="Graded artifact reference"),
) -> None:
    """Mark a day completed (owner only)."""
    event = _request(
        ctx,
        "POST",
        f"/schedule/days/{week}/{day}/complete",
        {"grade": grade, "ipfs_link": ipfs_link},
    )
    _print_event(event)


@app.command()
def unmark(
    ctx: typer.Context,
    week: int = typer.Argument(..., help="Week number (1-6)"),
    day: int = typer.Argument(..., help="Day number (1-7)"),
) -> None:
    """Clear a day's completion (owner only)."""
    _print_event(_request(ctx, "POST", f"/schedule/days/{week}/{day}/unmark"))


@app.command()
def remove(
    ctx: typer.Context,
    week: int = typer.Argument(..., help="Week number (1-6)"),
    day: int = typer.Argument(..., help="Day number (1-7)"),
) -> None:
    """Reset a day so it can be authored again (owner only)."""
    _print_event(_request(ctx, "DELETE", f"/schedule/days/{week}/{day}"))


if __name__ == "__main__":
    app()
