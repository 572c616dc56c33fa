"""Command-line entry points for Habitual."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .errors import HabitualError
from .logging_config import get_logger, setup_logging
from .services import analytics, completions, streaks, users

logger = get_logger("cli")


def _now() -> datetime:
    return datetime.now(timezone.utc)


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Habitual administration commands."""

    config = BaseConfig()
    setup_logging(config)
    ctx.obj = create_app_context(config)


@cli.command("init-db")
@click.pass_obj
def init_db(app: AppContext) -> None:
    """Create database tables."""

    click.echo(f"Database ready: {app.config.DATABASE_URL}")


@cli.command("create-user")
@click.argument("username")
@click.pass_obj
def create_user(app: AppContext, username: str) -> None:
    """Register USERNAME."""

    try:
        user = users.create_user(username, uow_factory=app.uow_factory)
    except HabitualError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Created user {user.id} ({user.username})")


@cli.command("complete")
@click.argument("habit_id", type=int)
@click.option("--user", "user_id", type=int, required=True, help="Owner of the habit")
@click.pass_obj
def complete(app: AppContext, habit_id: int, user_id: int) -> None:
    """Mark HABIT_ID complete for the current period."""

    try:
        completion = completions.record_completion(
            habit_id, user_id, _now(), uow_factory=app.uow_factory, tz=app.tz
        )
    except HabitualError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Recorded completion {completion.id} for period {completion.period_key}")


@cli.command("recompute-streak")
@click.argument("user_id", type=int)
@click.pass_obj
def recompute_streak(app: AppContext, user_id: int) -> None:
    """Rebuild USER_ID's overall streak from the completion history."""

    try:
        overall, longest = streaks.recompute_user_overall_streak(
            user_id, _now(), uow_factory=app.uow_factory, tz=app.tz
        )
    except HabitualError as exc:
        raise click.ClickException(str(exc)) from exc
    logger.info("Streak recomputed from CLI", extra={"user_id": user_id})
    click.echo(f"Overall streak: {overall} (longest {longest})")


@cli.command("stats")
@click.argument("user_id", type=int)
@click.option("--days", type=int, default=None, help="Heatmap window (defaults to HABITUAL_HEATMAP_DAYS)")
@click.pass_obj
def stats(app: AppContext, user_id: int, days: int | None) -> None:
    """Print USER_ID's totals, cached streak, and recent activity."""

    try:
        summary = analytics.user_analytics(
            user_id,
            _now(),
            uow_factory=app.uow_factory,
            tz=app.tz,
            heatmap_days=app.config.HEATMAP_DAYS if days is None else days,
        )
    except HabitualError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Active habits: {summary.total_habits}")
    click.echo(f"Completions: {summary.total_completions}")
    click.echo(f"Overall streak: {summary.current_streak} (longest {summary.longest_streak})")
    active = sum(1 for cell in summary.heatmap if cell.count)
    click.echo(f"Active days in last {len(summary.heatmap)}: {active}")


def main() -> None:  # pragma: no cover - console script shim
    cli()
