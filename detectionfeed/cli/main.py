"""Click commands for detectionfeed."""

from __future__ import annotations

import asyncio
import json

import click

from detectionfeed import __version__
from detectionfeed.app import run_feed
from detectionfeed.config import load_config, validate_base_url
from detectionfeed.feed.view import build_feed_view, render_text


@click.group()
@click.version_option(__version__, prog_name="detectionfeed")
def cli() -> None:
    """Inspect the recent detections of a host."""


@cli.command()
@click.argument("device_id")
@click.option(
    "--toggle",
    "toggles",
    multiple=True,
    metavar="COMPOSITE_ID",
    help="Toggle a row's details after loading. Repeatable.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the feed view as JSON.")
@click.option("--base-url", default=None, help="Override DETECTIONFEED_SERVICE_BASE_URL.")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default=None,
    help="Override DETECTIONFEED_LOG_LEVEL.",
)
def show(
    device_id: str,
    toggles: tuple[str, ...],
    as_json: bool,
    base_url: str | None,
    log_level: str | None,
) -> None:
    """Load and print the detection feed for DEVICE_ID.

    The most recent detection is expanded by default. Exits with status 1
    when the feed could not be loaded.
    """
    try:
        config = load_config()
        if base_url:
            config.service.base_url = validate_base_url(base_url)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    if log_level:
        config.log.level = log_level

    controller = asyncio.run(run_feed(device_id, config=config))
    for composite_id in toggles:
        controller.toggle(composite_id)

    view = build_feed_view(controller.state, controller.expansion)
    if as_json:
        click.echo(json.dumps(view.to_dict(), indent=2))
    else:
        click.echo(render_text(view))

    if controller.state.is_failed:
        raise SystemExit(1)
