"""Safety check command for hand-built flows."""

import click

from ..canvas.state import SequenceCanvas
from ..data.pose_library import get_pose
from ..services.safety import warnings_for
from .base import echo_error, echo_flow, echo_success, echo_warning


def _parse_move(value: str) -> tuple[int, int]:
    try:
        source, target = value.split(":")
        return int(source), int(target)
    except ValueError as e:
        raise click.BadParameter(f"expected FROM:TO positions, got {value!r}") from e


@click.command()
@click.argument("pose_ids", nargs=-1, required=True)
@click.option(
    "--move",
    "-m",
    "moves",
    multiple=True,
    help="Move the pose at position FROM to position TO (1-based), e.g. 3:1",
)
@click.option("--strict", is_flag=True, help="Exit with status 1 if any warning is raised")
@click.pass_context
def check(ctx, pose_ids: tuple[str, ...], moves: tuple[str, ...], strict: bool):
    """Build a flow from catalog pose ids and check its safety.

    Examples:

        # Check a flow in the given order
        zenflow check balasana marjaryasana sirsasana shavasana

        # Check what happens when the headstand is moved first
        zenflow check balasana marjaryasana sirsasana --move 3:1
    """
    canvas = SequenceCanvas()

    for pose_id in pose_ids:
        pose = get_pose(pose_id)
        if not pose:
            echo_error(f"Pose '{pose_id}' not found. See 'zenflow library list'.")
            ctx.exit(1)
        canvas.append(pose)

    for move in moves:
        source, target = _parse_move(move)
        ids = canvas.snapshot().canvas_ids
        if not (1 <= source <= len(ids) and 1 <= target <= len(ids)):
            echo_error(f"Move {move} is out of range for {len(ids)} poses")
            ctx.exit(1)
        canvas.reorder(ids[source - 1], ids[target - 1])

    snapshot = canvas.snapshot()
    echo_flow(snapshot)

    warnings = warnings_for(snapshot)
    click.echo()
    if warnings:
        echo_warning(f"{len(warnings)} pose(s) flagged")
        if strict:
            ctx.exit(1)
    else:
        echo_success("No safety warnings")
