"""Interactive flow studio."""

import asyncio
import contextlib

import click
import questionary

from ..audio.player import SoundDevicePlayer, TimedPlayer
from ..data.pose_library import CATEGORY_FILTERS, filter_library
from ..services.studio import AppStatus, FlowStudio
from .base import (
    async_command,
    build_client,
    echo_error,
    echo_flow,
    echo_info,
    echo_success,
    load_settings,
)

ADD = "Add a pose from the library"
GENERATE = "Generate a flow with AI"
MOVE = "Move a pose"
REMOVE = "Remove a pose"
SHOW = "Show flow"
START = "Start practice"
STOP = "End session"
CLEAR = "Clear flow"
QUIT = "Quit"


@click.command()
@click.option(
    "--play/--no-play",
    default=False,
    help="Play narration on the audio device (needs zenflow[audio])",
)
@click.pass_context
@async_command
async def studio(ctx, play: bool):
    """Build a flow interactively.

    Add poses from the library or let the AI design a flow, rearrange them
    while pose images are drawn in the background, then start a narrated
    practice session.
    """
    settings = load_settings(ctx)
    player = SoundDevicePlayer() if play else TimedPlayer(
        output_path=settings.output_dir / "narration.wav"
    )
    flow = FlowStudio(build_client(ctx, settings), player)
    practice_task: asyncio.Task | None = None

    click.echo("\n" + click.style("ZenFlow Studio", bold=True))
    click.echo("=" * 40)

    while True:
        choices = _menu_choices(flow)
        action = await questionary.select("What next?", choices=choices).ask_async()

        if action is None or action == QUIT:
            break
        elif action == ADD:
            await _add_pose(flow)
        elif action == GENERATE:
            await _generate(flow)
        elif action == MOVE:
            await _move_pose(flow)
        elif action == REMOVE:
            await _remove_pose(flow)
        elif action == SHOW:
            echo_flow(flow.snapshot(), show_ids=True)
            if flow.session.script:
                click.echo()
                click.echo(flow.session.script)
        elif action == START:
            practice_task = asyncio.create_task(flow.toggle_practice())
            echo_info("Preparing your guided session...")
        elif action == STOP:
            flow.session.stop()
            echo_success("Session ended")
        elif action == CLEAR:
            if await questionary.confirm("Clear the whole flow?", default=False).ask_async():
                flow.clear()

        if flow.error:
            echo_error(flow.error)
            flow.error = None

    await _end_practice(flow, practice_task)


async def _end_practice(flow: FlowStudio, task: asyncio.Task | None) -> None:
    """Stop narration on exit, abandoning a request that has not returned."""
    if task is None:
        return
    if flow.session.is_playing:
        flow.session.stop()
    elif not task.done():
        task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


def _menu_choices(flow: FlowStudio) -> list[str]:
    choices = [ADD, GENERATE]
    if not flow.snapshot().is_empty:
        choices += [MOVE, REMOVE, SHOW]
        if flow.session.is_playing:
            choices.append(STOP)
        elif flow.session.is_idle:
            choices.append(START)
        choices.append(CLEAR)
    choices.append(QUIT)
    return choices


def _item_choices(flow: FlowStudio) -> list[questionary.Choice]:
    return [
        questionary.Choice(f"{i}. {item.name}", item.canvas_id)
        for i, item in enumerate(flow.snapshot().items, start=1)
    ]


async def _add_pose(flow: FlowStudio) -> None:
    category = await questionary.select("Category", choices=list(CATEGORY_FILTERS)).ask_async()
    if category is None:
        return
    search = await questionary.text("Search (blank for all):").ask_async()
    poses = filter_library(search or "", category)
    if not poses:
        echo_info("No poses match that search.")
        return

    pose = await questionary.select(
        "Pose",
        choices=[
            questionary.Choice(f"{p.name} ({p.difficulty.value}, {p.category.value})", p)
            for p in poses
        ],
    ).ask_async()
    if pose is not None:
        flow.add_pose(pose)
        echo_success(f"Added {pose.name}")


async def _generate(flow: FlowStudio) -> None:
    intent = await questionary.text(
        "Describe your feelings:", default=flow.intent
    ).ask_async()
    if intent is None:
        return

    echo_info("Designing your flow...")
    snapshot = await flow.generate(intent)
    if snapshot is not None and flow.status == AppStatus.IDLE:
        echo_flow(snapshot, show_ids=True)
        if flow.enricher.pending:
            echo_info(f"Drawing {flow.enricher.pending} pose image(s) in the background")


async def _move_pose(flow: FlowStudio) -> None:
    source = await questionary.select("Move which pose?", choices=_item_choices(flow)).ask_async()
    if source is None:
        return
    target = await questionary.select("To the place of:", choices=_item_choices(flow)).ask_async()
    if target is None:
        return
    if flow.move(source, target):
        echo_flow(flow.snapshot(), show_ids=True)


async def _remove_pose(flow: FlowStudio) -> None:
    canvas_id = await questionary.select("Remove which pose?", choices=_item_choices(flow)).ask_async()
    if canvas_id is not None and flow.remove(canvas_id):
        echo_success("Removed")
