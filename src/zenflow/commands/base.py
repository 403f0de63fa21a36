"""Shared CLI utilities."""

import asyncio
import logging
from functools import wraps

import click
from openai import OpenAIError

from ..clients.openai import OpenAIYogaClient
from ..config import Settings
from ..errors import ConfigError
from ..models.sequence import SequenceSnapshot
from ..services.safety import safety_report


def async_command(f):
    """Decorator to run async Click commands."""

    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def setup_logging(verbose: bool) -> None:
    """Configure logging for CLI runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # The HTTP stack is noisy at DEBUG
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def load_settings(ctx: click.Context) -> Settings:
    """Load settings from the environment, exiting on invalid values."""
    try:
        return Settings.from_env()
    except ConfigError as e:
        echo_error(str(e))
        ctx.exit(1)


def build_client(ctx: click.Context, settings: Settings) -> OpenAIYogaClient:
    """Create the AI client, exiting if the SDK cannot be configured."""
    try:
        return OpenAIYogaClient(settings)
    except OpenAIError as e:
        echo_error(f"Could not set up the OpenAI client: {e}")
        ctx.exit(1)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.echo(click.style("[OK] ", fg="green") + message)


def echo_error(message: str) -> None:
    """Print an error message."""
    click.echo(click.style("[ERROR] ", fg="red") + message)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(click.style("[INFO] ", fg="blue") + message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(click.style("[WARN] ", fg="yellow") + message)


def format_table(headers: list[str], rows: list[list[str]], padding: int = 2) -> str:
    """Format data as a simple table."""
    if not rows:
        return ""

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    lines = ["".join(h.ljust(widths[i] + padding) for i, h in enumerate(headers))]
    lines.append("".join("-" * w + " " * padding for w in widths))
    for row in rows:
        lines.append("".join(str(cell).ljust(widths[i] + padding) for i, cell in enumerate(row)))

    return "\n".join(line.rstrip() for line in lines)


def image_status(item) -> str:
    """Short label for an item's image state."""
    if item.image_loading:
        return "drawing..."
    if item.image_error:
        return "unavailable"
    if item.image_url:
        return "ready"
    return "none"


def echo_flow(snapshot: SequenceSnapshot, show_ids: bool = False) -> None:
    """Print the flow in order with its safety warnings."""
    click.echo()
    click.echo("=" * 60)
    click.echo(click.style(snapshot.title, bold=True))
    click.echo(snapshot.description)
    click.echo("=" * 60)

    if snapshot.is_empty:
        click.echo()
        click.echo("Empty Flow - add poses to build your anatomical sequence.")
        return

    for check in safety_report(snapshot):
        item = check.item
        pose = item.pose
        click.echo()
        if check.warning:
            echo_warning(check.warning)
        label = f"{check.position + 1}. {pose.name}"
        if show_ids:
            label += f"  [{item.canvas_id}]"
        click.echo(click.style(label, bold=True) + f"  ({pose.duration})")
        click.echo(
            f"   {pose.category.value} | {pose.difficulty.value} | "
            f"intensity {pose.intensity} | image: {image_status(item)}"
        )
        if pose.description:
            click.echo(f"   {pose.description}")
