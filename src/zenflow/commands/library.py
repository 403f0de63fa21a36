"""Pose library commands."""

import click

from ..data.pose_library import CATEGORY_FILTERS, filter_library, get_pose
from .base import echo_error, echo_info, format_table


@click.group()
def library():
    """Browse the built-in pose library."""
    pass


@library.command(name="list")
@click.option("--search", "-s", default="", help="Filter by pose name")
@click.option(
    "--category",
    "-c",
    type=click.Choice(CATEGORY_FILTERS, case_sensitive=False),
    default="All",
    help="Filter by category",
)
def list_poses(search: str, category: str):
    """List catalog poses, optionally filtered."""
    # click.Choice returns the canonical casing
    poses = filter_library(search, category)

    if not poses:
        echo_info("No poses match that search.")
        return

    headers = ["ID", "Name", "Category", "Difficulty", "Intensity", "Duration"]
    rows = [
        [
            pose.id,
            pose.name,
            pose.category.value,
            pose.difficulty.value,
            str(pose.intensity),
            pose.duration,
        ]
        for pose in poses
    ]

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(poses)} pose(s)")


@library.command()
@click.argument("pose_id")
@click.pass_context
def show(ctx, pose_id: str):
    """Show details of a catalog pose."""
    pose = get_pose(pose_id)
    if not pose:
        echo_error(f"Pose '{pose_id}' not found")
        ctx.exit(1)

    click.echo()
    click.echo("=" * 60)
    click.echo(f"{pose.name} ({pose.id})")
    click.echo("=" * 60)
    click.echo(f"{pose.category.value} | {pose.difficulty.value} | intensity {pose.intensity}/10")
    click.echo(f"Duration: {pose.duration}")
    click.echo()
    click.echo(pose.description)
    click.echo()
    click.echo("Why practice?")
    click.echo(f"  {pose.benefits}")
    click.echo("Breathing:")
    click.echo(f"  {pose.breathing_guidance}")
    if pose.image_url:
        click.echo()
        click.echo(f"Image: {pose.image_url}")
