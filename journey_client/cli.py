"""``journey`` command line entry point."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TypeVar

import click
import httpx

from .api.application.ports import JourneyApiError, TokenStore
from .api.infrastructure import JourneyApiClient, create_token_store
from .domain import categorize, display_percent, distance_remaining
from .domain.cities import CityGraph, UnknownCityError
from .models import JourneyCreateRequest, JourneyProgress, RunCreateRequest
from .services import get_city_graph
from .settings import Settings, get_settings

T = TypeVar("T")


def default_token_file() -> Path:
    return Path(click.get_app_dir("journey")) / "token.json"


@dataclass
class CliContext:
    settings: Settings
    token_store: TokenStore
    transport: Optional[httpx.AsyncBaseTransport] = None
    cities: Optional[CityGraph] = field(default=None)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CliContext":
        """Build a context whose token survives between invocations.

        Without Redis or an explicit ``token_file`` the token is kept in the
        per-user application directory.
        """

        redis_configured = bool(
            settings.upstash_redis_rest_url and settings.upstash_redis_rest_token
        )
        if settings.token_file is None and not redis_configured:
            settings = settings.model_copy(update={"token_file": default_token_file()})
        return cls(settings=settings, token_store=create_token_store(settings))

    def city_graph(self) -> CityGraph:
        if self.cities is None:
            self.cities = get_city_graph(self.settings.city_data_path)
        return self.cities

    def run(self, operation: Callable[[JourneyApiClient], Awaitable[T]]) -> T:
        async def _run() -> T:
            async with JourneyApiClient.from_settings(
                self.settings, self.token_store, transport=self.transport
            ) as client:
                return await operation(client)

        try:
            return asyncio.run(_run())
        except JourneyApiError as exc:
            raise click.ClickException(str(exc)) from exc


def _format_progress(progress: JourneyProgress) -> str:
    return (
        f"#{progress.id} {progress.name} [{progress.status.value}] "
        f"{progress.distance_completed_miles:.1f}/{progress.total_distance_miles:.1f} mi "
        f"({display_percent(progress):.0%}), "
        f"{distance_remaining(progress):.1f} mi to go"
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Track journeys against the journey service."""

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    if ctx.obj is None:
        ctx.obj = CliContext.from_settings(get_settings())


@cli.command()
@click.option("--email", prompt=True)
@click.option("--password", prompt=True, hide_input=True)
@click.pass_obj
def login(obj: CliContext, email: str, password: str) -> None:
    """Log in and store the access token."""

    obj.run(lambda client: client.login(email, password))
    click.echo("Logged in.")


@cli.command()
@click.pass_obj
def logout(obj: CliContext) -> None:
    """Forget the stored access token."""

    obj.token_store.clear()
    click.echo("Logged out.")


@cli.command()
@click.pass_obj
def journeys(obj: CliContext) -> None:
    """List active and completed journeys."""

    categories = categorize(obj.run(lambda client: client.fetch_all_journeys()))
    for title, group in (("Active", categories.active), ("Completed", categories.completed)):
        click.echo(f"{title}:")
        if not group:
            click.echo("  (none)")
        for journey in group:
            click.echo(f"  #{journey.id} {journey.name} ({journey.total_distance_miles:.1f} mi)")


@cli.command()
@click.pass_obj
def current(obj: CliContext) -> None:
    """Show progress of the current journey."""

    click.echo(_format_progress(obj.run(lambda client: client.fetch_current_journey())))


@cli.command()
@click.argument("journey_id", type=int)
@click.pass_obj
def progress(obj: CliContext, journey_id: int) -> None:
    """Show progress of one journey."""

    click.echo(
        _format_progress(obj.run(lambda client: client.fetch_journey_progress(journey_id)))
    )


@cli.command()
@click.argument("start")
@click.argument("dest")
@click.option("--name", default=None, help="Journey name; defaults to 'Start → Dest'.")
@click.pass_obj
def start(obj: CliContext, start: str, dest: str, name: Optional[str]) -> None:
    """Start a journey between two predefined cities."""

    request = _build_journey_request(obj.city_graph(), start, dest, name)
    journey = obj.run(lambda client: client.create_journey(request))
    click.echo(f"Started #{journey.id} {journey.name} ({journey.total_distance_miles:.1f} mi)")


@cli.command("log-run")
@click.argument("journey_id", type=int)
@click.argument("miles", type=float)
@click.option("--date", "run_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--mood", type=click.IntRange(1, 10), default=None)
@click.option("--activity", default="run", show_default=True)
@click.pass_obj
def log_run(
    obj: CliContext,
    journey_id: int,
    miles: float,
    run_date: Any,
    mood: Optional[int],
    activity: str,
) -> None:
    """Log a run against a journey."""

    if miles <= 0:
        raise click.BadParameter("must be greater than zero", param_hint="MILES")
    request = RunCreateRequest(
        journey_id=journey_id,
        distance_miles=miles,
        date=run_date.date() if run_date else date.today(),
        mood_rating=mood,
        activity_type=activity,
    )
    run = obj.run(lambda client: client.create_run(request))
    click.echo(f"Logged run #{run.id}: {run.distance_miles:.2f} mi on {run.date.isoformat()}")


@cli.command()
@click.pass_obj
def cities(obj: CliContext) -> None:
    """List the predefined cities."""

    for city in obj.city_graph().cities():
        click.echo(f"{city.id:<16} {city.label}")


@cli.command()
@click.argument("start")
@click.argument("dest")
@click.pass_obj
def distance(obj: CliContext, start: str, dest: str) -> None:
    """Print the distance in miles between two predefined cities."""

    graph = obj.city_graph()
    try:
        miles = graph.distance(start, dest)
    except UnknownCityError as exc:
        raise click.ClickException(f"Unknown city: {exc.args[0]}") from exc
    suffix = "" if graph.has_curated_distance(start, dest) or start == dest else " (estimated)"
    click.echo(f"{miles:.1f} mi{suffix}")


def _build_journey_request(
    graph: CityGraph, start: str, dest: str, name: Optional[str]
) -> JourneyCreateRequest:
    if start == dest:
        raise click.BadParameter("start and destination must differ", param_hint="DEST")
    try:
        return JourneyCreateRequest.between(graph, start, dest, name=name)
    except UnknownCityError as exc:
        raise click.ClickException(f"Unknown city: {exc.args[0]}") from exc
