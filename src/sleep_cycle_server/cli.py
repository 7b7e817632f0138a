"""CLI entry point for sleep-cycle-server."""

import asyncio
from datetime import datetime, timedelta

import typer
import uvicorn
from pydantic import ValidationError

from sleep_cycle_server import __version__
from sleep_cycle_server.core.config import settings
from sleep_cycle_server.core.database import close_database, get_session, init_database
from sleep_cycle_server.domain.engine import (
    compute_sleep_now_recommendations,
    compute_wake_at_recommendations,
)
from sleep_cycle_server.domain.profile import DEFAULT_PROFILE, Gender, SleepProfile
from sleep_cycle_server.formatting import format_duration, format_time, format_time_range
from sleep_cycle_server.repositories.profile import SQLAlchemyProfileRepository
from sleep_cycle_server.schemas.profile import SleepProfileIn
from sleep_cycle_server.schemas.recommendations import (
    get_sleep_times_for_wake_date,
    get_wake_times_from_now,
)
from sleep_cycle_server.services.recommendations import RecommendationService

app = typer.Typer(
    name="sleep-cycle-server",
    help="Sleep-cycle based bedtime and wake time recommendations",
    no_args_is_help=True,
)

DATETIME_FORMATS = ["%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M", "%H:%M"]


def _build_profile(age: int, weight: float, height: float, gender: Gender) -> SleepProfile:
    try:
        profile_in = SleepProfileIn(age=age, weight_kg=weight, height_cm=height, gender=gender)
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e
    return profile_in.to_domain()


async def _load_stored_profile(user_id: str) -> SleepProfile:
    """Read a user's profile from the database, falling back to the default."""
    await init_database()
    try:
        async with get_session() as session:
            service = RecommendationService(SQLAlchemyProfileRepository(session))
            profile, _ = await service.get_profile(user_id)
    finally:
        await close_database()
    return profile


def _resolve_profile(
    user: str | None, age: int, weight: float, height: float, gender: Gender
) -> SleepProfile:
    if user:
        return asyncio.run(_load_stored_profile(user))
    return _build_profile(age, weight, height, gender)


def _resolve_time(value: datetime | None, now: datetime, upcoming: bool = False) -> datetime:
    """Attach today's date to a bare ``HH:MM`` value (parsed as 1900-01-01).

    With ``upcoming`` set, a bare time that has already passed today is
    moved to tomorrow.
    """
    if value is None:
        return now
    if value.year == 1900:
        resolved = now.replace(hour=value.hour, minute=value.minute, second=0, microsecond=0)
        if upcoming and resolved <= now:
            resolved += timedelta(days=1)
        return resolved
    return value


def _star(is_recommended: bool) -> str:
    return "*" if is_recommended else " "


@app.command()
def serve(
    host: str = typer.Option(None, help="Host to bind to (overrides config)"),
    port: int = typer.Option(None, help="Port to bind to (overrides config)"),
    reload: bool = typer.Option(False, help="Enable auto-reload for development"),
) -> None:
    """Start the API server.

    Example:
        sleep-cycle-server serve
        sleep-cycle-server serve --host 0.0.0.0 --port 8080 --reload
    """
    uvicorn.run(
        "sleep_cycle_server.app:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command("sleep-now")
def sleep_now(
    age: int = typer.Option(DEFAULT_PROFILE.age, help="Age in years"),
    weight: float = typer.Option(DEFAULT_PROFILE.weight_kg, help="Weight in kg"),
    height: float = typer.Option(DEFAULT_PROFILE.height_cm, help="Height in cm"),
    gender: Gender = typer.Option(DEFAULT_PROFILE.gender, help="Gender"),
    user: str = typer.Option(None, help="Use this user's stored profile instead"),
    at: datetime = typer.Option(None, formats=DATETIME_FORMATS, help="Bedtime (default: now)"),
    cycles: list[int] = typer.Option(None, "--cycles", "-c", help="Candidate cycle count"),
) -> None:
    """Show wake times for going to bed now.

    Example:
        sleep-cycle-server sleep-now --age 30 --weight 70 --height 170
    """
    profile = _resolve_profile(user, age, weight, height, gender)
    bedtime = _resolve_time(at, datetime.now().replace(second=0, microsecond=0))
    recs = compute_sleep_now_recommendations(
        profile, bedtime, cycles or settings.sleep_now_cycles
    )

    typer.echo(f"Going to bed at {format_time(bedtime)}, wake up at:")
    for opt in get_wake_times_from_now(recs):
        typer.echo(
            f"{_star(opt.is_recommended)} {format_time(opt.wake_date)}"
            f"  {opt.cycles} cycles"
            f"  {format_duration(opt.total_minutes)} asleep"
            f"  window {format_time_range(opt.window_start, opt.window_end)}"
        )


@app.command("wake-at")
def wake_at(
    wake_time: datetime = typer.Argument(..., formats=DATETIME_FORMATS, help="Target wake time"),
    age: int = typer.Option(DEFAULT_PROFILE.age, help="Age in years"),
    weight: float = typer.Option(DEFAULT_PROFILE.weight_kg, help="Weight in kg"),
    height: float = typer.Option(DEFAULT_PROFILE.height_cm, help="Height in cm"),
    gender: Gender = typer.Option(DEFAULT_PROFILE.gender, help="Gender"),
    user: str = typer.Option(None, help="Use this user's stored profile instead"),
    cycles: list[int] = typer.Option(None, "--cycles", "-c", help="Candidate cycle count"),
) -> None:
    """Show bedtimes for a target wake time.

    Example:
        sleep-cycle-server wake-at 07:00 --age 45 --gender female
    """
    profile = _resolve_profile(user, age, weight, height, gender)
    target = _resolve_time(
        wake_time, datetime.now().replace(second=0, microsecond=0), upcoming=True
    )
    recs = compute_wake_at_recommendations(profile, target, cycles or settings.wake_at_cycles)

    typer.echo(f"To wake up at {format_time(target)}, go to bed at:")
    for opt in get_sleep_times_for_wake_date(recs):
        typer.echo(
            f"{_star(opt.is_recommended)} {format_time(opt.sleep_date)}"
            f"  {opt.cycles} cycles"
            f"  {format_duration(opt.total_minutes)} asleep"
            f"  window {format_time_range(opt.window_start, opt.window_end)}"
        )


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"sleep-cycle-server v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
