"""Work journal CLI - record daily achievements."""

import json
import logging
import sys
from dataclasses import replace
from datetime import date
from typing import NoReturn

import click

from .adapters.file_blob import FileBlobStore
from .config import Config, load_config
from .core.achievements import Achievement, ValidationError, group_by_date
from .ports.blob_store import StorageError
from .repository import AchievementRepository


def get_repository(config: Config) -> AchievementRepository:
    """Build a repository over the configured data directory."""
    store = FileBlobStore(config.resolved_data_dir())
    return AchievementRepository(store, key=config.storage_key)


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _show_achievement(achievement: Achievement) -> None:
    click.echo(f"• {achievement.task}  [{achievement.id}]")
    if achievement.metric:
        click.echo(f"    metric: {achievement.metric}")
    if achievement.impact:
        click.echo(f"    impact: {achievement.impact}")


@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, help="Log storage activity")
@click.pass_context
def main(ctx, verbose: bool):
    """Work journal - record what you got done today."""
    config = load_config()
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = config


@main.command()
@click.argument("task")
@click.option("--metric", default="", help="Measurable result, e.g. '40% fewer errors'")
@click.option("--impact", default="", help="Why it mattered, in one line")
@click.option("--date", "day", default=None, help="Date as YYYY-MM-DD (default: today)")
@click.pass_obj
def add(config: Config, task: str, metric: str, impact: str, day: str | None):
    """Record an achievement."""
    try:
        with get_repository(config) as repo:
            achievement = repo.save(task, metric=metric, impact=impact, date=day)
    except (ValidationError, StorageError) as e:
        _fail(str(e))

    click.echo(f"Saved {achievement.id} for {achievement.date}.")


@main.command("list")
@click.option("--date", "day", default=None, help="Only show this date (YYYY-MM-DD)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_achievements(config: Config, day: str | None, as_json: bool):
    """List achievements grouped by date."""
    try:
        with get_repository(config) as repo:
            achievements = repo.list_for_date(day) if day else repo.list()
    except ValidationError as e:
        _fail(str(e))

    if as_json:
        click.echo(json.dumps([a.to_dict() for a in achievements], indent=2, ensure_ascii=False))
        return

    if not achievements:
        click.echo("No achievements recorded yet.")
        return

    for section_date, items in group_by_date(achievements):
        click.echo(f"\n{section_date}")
        for achievement in items:
            _show_achievement(achievement)


@main.command()
@click.pass_obj
def today(config: Config):
    """Show today's achievements."""
    with get_repository(config) as repo:
        achievements = repo.list_for_date(date.today())

    if not achievements:
        click.echo("Nothing recorded today yet.")
        return

    click.echo(f"{len(achievements)} recorded today:")
    for achievement in achievements:
        _show_achievement(achievement)


@main.command()
@click.argument("achievement_id")
@click.option("--task", default=None, help="New task text")
@click.option("--metric", default=None, help="New metric")
@click.option("--impact", default=None, help="New impact")
@click.option("--date", "day", default=None, help="New date (YYYY-MM-DD)")
@click.pass_obj
def edit(config: Config, achievement_id: str, task, metric, impact, day):
    """Edit an achievement."""
    changes = {
        name: value
        for name, value in (("task", task), ("metric", metric), ("impact", impact), ("date", day))
        if value is not None
    }

    try:
        with get_repository(config) as repo:
            existing = repo.get(achievement_id)
            if existing is None:
                _fail(f"No achievement with id {achievement_id}.")
            repo.update(replace(existing, **changes))
    except (ValidationError, StorageError) as e:
        _fail(str(e))

    click.echo(f"Updated {achievement_id}.")


@main.command()
@click.argument("achievement_id")
@click.pass_obj
def delete(config: Config, achievement_id: str):
    """Delete an achievement."""
    try:
        with get_repository(config) as repo:
            repo.delete(achievement_id)
    except StorageError as e:
        _fail(str(e))

    click.echo(f"Deleted {achievement_id}.")
