"""Generate flow command."""

import asyncio
from pathlib import Path

import click

from ..audio.player import SoundDevicePlayer, TimedPlayer
from ..clients.openai import decode_data_url
from ..services.studio import FlowStudio
from .base import (
    async_command,
    build_client,
    echo_error,
    echo_flow,
    echo_info,
    echo_success,
    echo_warning,
    load_settings,
)


@click.command()
@click.argument("intent")
@click.option(
    "--save-images",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to write generated pose images to",
)
@click.option("--practice", is_flag=True, help="Narrate the flow as a guided session")
@click.option(
    "--play/--no-play",
    default=False,
    help="Play narration on the audio device (needs zenflow[audio])",
)
@click.pass_context
@async_command
async def generate(ctx, intent: str, save_images: Path | None, practice: bool, play: bool):
    """Generate a yoga flow from a description of how you feel.

    INTENT is free text, e.g. "tight hips after a long flight".

    Examples:

        # Generate a flow
        zenflow generate "gentle morning flow for a stiff back"

        # Generate and narrate it, keeping the audio as a WAV file
        zenflow generate "wind down before sleep" --practice

        # Save the AI-drawn pose images
        zenflow generate "energizing core flow" --save-images ./images
    """
    settings = load_settings(ctx)
    client = build_client(ctx, settings)

    if play:
        player = SoundDevicePlayer()
    else:
        player = TimedPlayer(output_path=settings.output_dir / "narration.wav")

    studio = FlowStudio(client, player)

    echo_info(f"Designing a flow for: {intent}")
    snapshot = await studio.generate(intent)
    if snapshot is None:
        echo_error(studio.error or "Nothing to generate")
        ctx.exit(1)

    pending = studio.enricher.pending
    if pending:
        echo_info(f"Drawing {pending} pose image(s)...")
    report = await studio.enricher.wait()
    if report.failed:
        echo_warning(f"{report.failed} image(s) could not be drawn")

    snapshot = studio.snapshot()
    echo_flow(snapshot)

    if save_images:
        written = _save_images(snapshot, save_images)
        click.echo()
        echo_success(f"Saved {written} image(s) to {save_images}")

    if practice:
        click.echo()
        echo_info("Preparing your guided session...")
        task = asyncio.create_task(studio.toggle_practice())
        while studio.session.is_requesting or (studio.session.is_idle and not task.done()):
            await asyncio.sleep(0.1)

        if studio.session.script:
            click.echo()
            click.echo(studio.session.script)
            click.echo()
            if not play:
                echo_info(f"Narration saved to {settings.output_dir / 'narration.wav'}")

        await task
        if studio.error:
            echo_error(studio.error)
            ctx.exit(1)
        echo_success("Namaste")


def _save_images(snapshot, directory: Path) -> int:
    directory.mkdir(parents=True, exist_ok=True)
    written = 0
    for position, item in enumerate(snapshot.items, start=1):
        if not item.image_url:
            continue
        data = decode_data_url(item.image_url)
        if data is None:
            continue
        (directory / f"{position:02d}-{item.pose.id}.png").write_bytes(data)
        written += 1
    return written
