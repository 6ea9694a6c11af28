"""Command line interface."""

from __future__ import annotations

import json

import httpx
from click.testing import CliRunner

from journey_client.cli import CliContext, cli
from journey_client.settings import Settings

from tests.builders import make_journey, make_progress, make_run
from tests.conftest import RecordingTokenStore, RecordingTransport


def _invoke(context: CliContext, *args: str, input: str | None = None):
    return CliRunner().invoke(cli, list(args), obj=context, input=input)


def test_current_prints_progress(settings: Settings) -> None:
    transport = RecordingTransport(lambda request: httpx.Response(200, json=make_progress()))
    context = CliContext(settings, RecordingTokenStore("abc123"), transport)

    result = _invoke(context, "current")

    assert result.exit_code == 0, result.output
    assert "#2 Charlotte → Atlanta [active]" in result.output
    assert "3.0/250.0 mi" in result.output
    assert "247.0 mi to go" in result.output
    assert transport.requests[0].url.path == "/api/v1/journeys/current"


def test_current_without_login_fails(settings: Settings) -> None:
    transport = RecordingTransport(lambda request: httpx.Response(200, json=make_progress()))
    context = CliContext(settings, RecordingTokenStore(), transport)

    result = _invoke(context, "current")

    assert result.exit_code == 1
    assert "log in first" in result.output
    assert transport.requests == []


def test_login_stores_token(settings: Settings) -> None:
    store = RecordingTokenStore()
    transport = RecordingTransport(
        lambda request: httpx.Response(200, json={"access_token": "abc123"})
    )

    result = _invoke(
        CliContext(settings, store, transport),
        "login",
        "--email",
        "runner@example.com",
        "--password",
        "hunter2",
    )

    assert result.exit_code == 0, result.output
    assert store.token == "abc123"


def test_logout_clears_token(settings: Settings) -> None:
    store = RecordingTokenStore("abc123")

    result = _invoke(CliContext(settings, store), "logout")

    assert result.exit_code == 0
    assert store.token is None


def test_journeys_lists_active_and_completed(settings: Settings) -> None:
    payload = [
        make_journey(id=1, name="Charlotte → Atlanta"),
        make_journey(id=2, name="Old one", status="archived"),
        make_journey(
            id=3, name="Done", status="completed", completed_at="2025-12-20T10:00:00Z"
        ),
    ]
    transport = RecordingTransport(lambda request: httpx.Response(200, json=payload))

    result = _invoke(CliContext(settings, RecordingTokenStore("abc123"), transport), "journeys")

    assert result.exit_code == 0, result.output
    assert "#1 Charlotte → Atlanta" in result.output
    assert "#3 Done" in result.output
    assert "Old one" not in result.output


def test_log_run_posts_calendar_date(settings: Settings) -> None:
    transport = RecordingTransport(lambda request: httpx.Response(201, json=make_run()))

    result = _invoke(
        CliContext(settings, RecordingTokenStore("abc123"), transport),
        "log-run",
        "2",
        "3.1",
        "--date",
        "2025-12-06",
        "--mood",
        "7",
    )

    assert result.exit_code == 0, result.output
    body = json.loads(transport.requests[0].content)
    assert body["date"] == "2025-12-06"
    assert body["journey_id"] == 2
    assert body["mood_rating"] == 7
    assert "Logged run #10" in result.output


def test_log_run_rejects_bad_mood(settings: Settings) -> None:
    result = _invoke(
        CliContext(settings, RecordingTokenStore("abc123")), "log-run", "2", "3.1", "--mood", "11"
    )

    assert result.exit_code == 2


def test_start_creates_journey_between_cities(settings: Settings) -> None:
    transport = RecordingTransport(lambda request: httpx.Response(201, json=make_journey(id=9)))

    result = _invoke(
        CliContext(settings, RecordingTokenStore("abc123"), transport),
        "start",
        "charlotte-nc",
        "atlanta-ga",
    )

    assert result.exit_code == 0, result.output
    body = json.loads(transport.requests[0].content)
    assert body["total_distance_miles"] == 245.0
    assert "Started #9" in result.output


def test_start_rejects_same_city(settings: Settings) -> None:
    result = _invoke(
        CliContext(settings, RecordingTokenStore("abc123")), "start", "charlotte-nc", "charlotte-nc"
    )

    assert result.exit_code == 2


def test_distance_marks_fallback_estimates(settings: Settings) -> None:
    context = CliContext(settings, RecordingTokenStore())

    curated = _invoke(context, "distance", "charlotte-nc", "atlanta-ga")
    fallback = _invoke(context, "distance", "nashville-tn", "richmond-va")
    unknown = _invoke(context, "distance", "charlotte-nc", "gotham")

    assert curated.output.strip() == "245.0 mi"
    assert fallback.output.strip() == "250.0 mi (estimated)"
    assert unknown.exit_code == 1
    assert "Unknown city: gotham" in unknown.output


def test_cities_lists_labels(settings: Settings) -> None:
    result = _invoke(CliContext(settings, RecordingTokenStore()), "cities")

    assert result.exit_code == 0
    assert "charlotte-nc" in result.output
    assert "Charlotte, NC" in result.output


def test_login_persists_between_invocations(
    settings: Settings, tmp_path, monkeypatch
) -> None:
    monkeypatch.setattr("journey_client.cli.click.get_app_dir", lambda name: str(tmp_path))

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/auth/login"):
            return httpx.Response(200, json={"access_token": "abc123"})
        return httpx.Response(200, json=[make_journey(id=1)])

    first = CliContext.from_settings(settings)
    first.transport = RecordingTransport(handler)
    logged_in = _invoke(first, "login", "--email", "runner@example.com", "--password", "hunter2")

    second = CliContext.from_settings(settings)
    second.transport = RecordingTransport(handler)
    listed = _invoke(second, "journeys")

    assert logged_in.exit_code == 0, logged_in.output
    assert listed.exit_code == 0, listed.output
    assert "#1 Charlotte → Atlanta" in listed.output
    assert second.transport.requests[0].headers["Authorization"] == "Bearer abc123"
    assert (tmp_path / "token.json").is_file()
