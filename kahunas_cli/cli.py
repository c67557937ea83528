"""Command-line interface for the Kahunas coaching platform."""

import argparse
import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import IntPrompt
from rich.table import Table

from kahunas_cli.cache import (
    read_calendar_cache,
    read_program_caches,
    write_calendar_cache,
    write_program_cache,
)
from kahunas_cli.client import KahunasClient
from kahunas_cli.config import (
    KahunasConfig,
    config_path,
    read_auth_config,
    read_config,
    read_workout_cache,
    resolve_base_url,
    resolve_cookie_header,
    resolve_csrf_token,
    resolve_token,
    resolve_user_uuid,
    resolve_web_base_url,
    workout_cache_path,
    write_config,
    write_workout_cache,
)
from kahunas_cli.dates import format_human_timestamp, is_iso_after_now, resolve_timezone
from kahunas_cli.days import resolve_workout_event_day_index
from kahunas_cli.errors import KahunasError
from kahunas_cli.events import (
    annotate_workout_event_summaries,
    enrich_workout_events,
    filter_workout_events,
    find_workout_preview_html_match,
    format_workout_events_output,
    sort_workout_events,
)
from kahunas_cli.models import WorkoutDaySummary, WorkoutEventSummary, WorkoutPlan
from kahunas_cli.responses import extract_user_uuid_from_checkins, resolve_token_expiry
from kahunas_cli.workouts import format_workout_summary, merge_workout_plans, pick_latest_workout

console = Console()
err_console = Console(stderr=True)


def setup_logging(debug: bool):
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # Request lines from httpx are noise unless debugging.
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def format_number(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def make_table(title: str | None, columns: list[tuple[str, str | None, str | None]]) -> Table:
    """Create a Rich table from column definitions."""
    table = Table(title=title)
    for name, style, justify in columns:
        table.add_column(name, style=style, justify=justify)
    return table


def load_settings(args) -> KahunasConfig:
    """Load .env and the config file, and set up logging."""
    load_dotenv()
    try:
        config = read_config()
    except KahunasError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    setup_logging(getattr(args, "debug", False) or config.debug)
    return config


def persist_token(token: str):
    """Store a refreshed token with its timestamps."""
    config = read_config()
    config.token = token
    config.token_updated_at = now_iso()
    config.token_expires_at = resolve_token_expiry(token)
    write_config(config)


def build_client(args, config: KahunasConfig) -> KahunasClient:
    return KahunasClient(
        token=resolve_token(config, getattr(args, "token", None)),
        base_url=resolve_base_url(config),
        web_base_url=resolve_web_base_url(config),
        csrf_token=resolve_csrf_token(config, getattr(args, "csrf", None)),
        cookie_header=resolve_cookie_header(config, getattr(args, "cookie", None)),
        on_token_refresh=persist_token,
    )


def resolve_time_zone(args, config: KahunasConfig) -> str:
    """Resolve the calendar time zone from CLI, environment, then config."""
    return resolve_timezone(
        getattr(args, "time_zone", None) or os.getenv("KAHUNAS_TIMEZONE") or config.timezone
    )


def to_jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", exclude_unset=True)
    if isinstance(data, list):
        return [to_jsonable(entry) for entry in data]
    if isinstance(data, dict):
        return {key: to_jsonable(value) for key, value in data.items()}
    return data


def output_json(data: Any, file_path: str | None = None):
    """Output JSON to stdout or a file."""
    output = json.dumps(to_jsonable(data), indent=2, default=str)
    if file_path:
        Path(file_path).write_text(output + "\n")
        console.print(f"[green]Data saved to {file_path}[/green]")
    else:
        print(output)


def print_response(response, raw: bool = False):
    """Print an API response body, pretty-printed when it is JSON."""
    if raw or response.json_data is None:
        print(response.text)
        return
    print(json.dumps(response.json_data, indent=2))


def remember_user_uuid(user_uuid: str | None):
    if not user_uuid:
        return
    config = read_config()
    if config.user_uuid != user_uuid:
        config.user_uuid = user_uuid
        write_config(config)


def require_user_uuid(args, config: KahunasConfig, client: KahunasClient) -> str:
    """Resolve the user uuid, discovering it from check-ins if needed."""
    user_uuid = resolve_user_uuid(config, getattr(args, "user_uuid", None)) or client.discover_user_uuid()
    if not user_uuid:
        raise KahunasError("Missing user uuid. Run 'kahunas checkins list' or pass --user-uuid.")
    remember_user_uuid(user_uuid)
    return user_uuid


def program_ids_of(events: list[dict]) -> list[str]:
    ids = []
    for entry in events:
        program_id = entry.get("program")
        if isinstance(program_id, str) and program_id and program_id not in ids:
            ids.append(program_id)
    return ids


def cmd_checkins_list(args):
    """List check-ins."""
    config = load_settings(args)

    try:
        with build_client(args, config) as client:
            response = client.list_checkins(page=args.page, rpp=args.rpp)
    except KahunasError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    remember_user_uuid(extract_user_uuid_from_checkins(response.json_data))
    print_response(response, args.raw)


def fetch_plans(client: KahunasClient, rpp: int) -> tuple[list[WorkoutPlan], Any]:
    """Programs from the API merged with the local workout cache."""
    plans = client.list_workout_plans(rpp=rpp)
    cache = read_workout_cache()
    if cache:
        plans = merge_workout_plans(plans, cache.plans)
    return plans, cache


def display_plans(plans: list[WorkoutPlan]):
    table = make_table(
        "Workout Programs",
        [
            ("#", "dim", "right"),
            ("Title", "cyan", None),
            ("Days", None, "right"),
            ("Updated", None, None),
            ("UUID", "dim", None),
        ],
    )
    for number, plan in enumerate(plans, start=1):
        updated = plan.updated_at_utc or plan.created_at_utc
        table.add_row(
            str(number),
            plan.title,
            str(plan.days) if plan.days else "-",
            datetime.fromtimestamp(updated).strftime("%Y-%m-%d %H:%M") if updated else "-",
            plan.uuid,
        )
    console.print(table)


def cmd_workout_list(args):
    """List workout programs."""
    config = load_settings(args)

    try:
        with build_client(args, config) as client:
            plans, cache = fetch_plans(client, args.rpp)
    except KahunasError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if args.output == "json":
        output = {
            "source": "api+cache" if cache else "api",
            "data": {"workout_plan": plans},
        }
        if cache:
            output["cache"] = {
                "updated_at": cache.updated_at,
                "count": len(cache.plans),
                "path": str(workout_cache_path()),
            }
        output_json(output, args.file)
        return

    if not plans:
        console.print("[yellow]No workout programs found.[/yellow]")
        return
    display_plans(plans)
    if cache:
        console.print(f"[dim]Cache updated {format_human_timestamp(cache.updated_at)}[/dim]")


def show_program(client: KahunasClient, plan: WorkoutPlan, raw: bool):
    console.print(f"Fetching [cyan]{format_workout_summary(plan)}[/cyan]", style="dim")
    print_response(client.fetch_workout_program(plan.uuid), raw)


def cmd_workout_latest(args):
    """Show the most recently updated workout program."""
    config = load_settings(args)

    try:
        with build_client(args, config) as client:
            plans, _ = fetch_plans(client, rpp=100)
            chosen = pick_latest_workout(plans)
            if chosen is None:
                raise KahunasError("No workout programs found.")
            show_program(client, chosen, args.raw)
    except KahunasError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


def cmd_workout_pick(args):
    """Pick a workout program interactively and show it."""
    config = load_settings(args)

    try:
        with build_client(args, config) as client:
            plans, _ = fetch_plans(client, args.rpp)
            if not plans:
                raise KahunasError("No workout programs found.")

            display_plans(plans)
            selection = IntPrompt.ask(
                f"Enter number (1-{len(plans)})",
                choices=[str(number) for number in range(1, len(plans) + 1)],
                show_choices=False,
            )
            show_program(client, plans[selection - 1], args.raw)
    except KahunasError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


def cmd_workout_program(args):
    """Show a workout program by uuid."""
    config = load_settings(args)

    try:
        with build_client(args, config) as client:
            print_response(client.fetch_workout_program(args.program_id), args.raw)
    except KahunasError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


def log_preview_sources(events: list[dict], program_details: dict[str, Any]):
    """Print where each event's preview HTML came from."""
    for entry in events:
        program_uuid = entry.get("program") if isinstance(entry.get("program"), str) else None
        program = program_details.get(program_uuid) if program_uuid else None
        match = find_workout_preview_html_match(entry, program)
        day_index = resolve_workout_event_day_index(entry, program)
        err_console.print(
            f"[dim]preview event={entry.get('id', 'unknown')} program={program_uuid or 'unknown'} "
            f"day_index={day_index if day_index is not None else 'none'} "
            f"source={match.source if match else 'not_found'}[/dim]"
        )


def display_workout_day(day: WorkoutDaySummary):
    """Display the sections and groups of a workout day."""
    if day.day_label:
        console.print(f"[bold]{day.day_label}[/bold]")

    for section in day.sections:
        table = make_table(
            section.label,
            [
                ("#", "dim", "right"),
                ("Exercise", "cyan", None),
                ("Sets", None, "right"),
                ("Reps", None, "right"),
                ("Rest", None, "right"),
                ("Notes", "dim", None),
            ],
        )
        for group in section.groups:
            for position, exercise in enumerate(group.exercises):
                name = exercise.name
                if group.type == "superset":
                    marker = "┌" if position == 0 else ("└" if position == len(group.exercises) - 1 else "│")
                    name = f"{marker} {name}"
                table.add_row(
                    format_number(exercise.order),
                    name,
                    format_number(exercise.sets),
                    exercise.reps or "-",
                    f"{format_number(exercise.rest_seconds)}s" if exercise.rest_seconds is not None else "-",
                    exercise.notes or "",
                )
        console.print(table)

    if day.total_volume_sets:
        totals = ", ".join(f"{entry.body_part} {format_number(entry.sets)}" for entry in day.total_volume_sets)
        console.print(f"[bold]Total sets:[/bold] {totals}")


def display_event_summaries(summaries: list[WorkoutEventSummary]):
    if not summaries:
        console.print("[yellow]No workout events found.[/yellow]")
        return

    for summary in summaries:
        event = summary.event
        console.print(f"\n[bold cyan]═══ {event.title or 'Workout'} ═══[/bold cyan]")
        if event.start:
            console.print(f"[dim]{format_human_timestamp(event.start)}[/dim]")
        if summary.program:
            console.print(f"Program: {summary.program.title or summary.program.uuid}")
        if summary.workout_day is None:
            console.print("[yellow]No workout day found for this event.[/yellow]")
            continue
        display_workout_day(summary.workout_day)


def load_calendar(args, config: KahunasConfig, client: KahunasClient) -> tuple[Any, str, str]:
    """Calendar payload, raw text and time zone, from the cache or the web app."""
    if args.cached:
        snapshot = read_calendar_cache()
        if snapshot is None:
            raise KahunasError("No cached calendar. Run 'kahunas workout sync' first.")
        return snapshot.payload, json.dumps(snapshot.payload), snapshot.timezone

    time_zone = resolve_time_zone(args, config)
    user_uuid = require_user_uuid(args, config, client)
    response = client.fetch_calendar_events(user_uuid, time_zone)
    return response.json_data, response.text, time_zone


def cmd_workout_events(args):
    """Show calendar workout events with their program day."""
    config = load_settings(args)

    try:
        with build_client(args, config) as client:
            payload, text, time_zone = load_calendar(args, config, client)
            if not isinstance(payload, list):
                print(text)
                return

            events = sort_workout_events(filter_workout_events(payload, args.program, args.workout))
            limited = events[-args.limit:] if args.limit > 0 else events
            if args.minimal:
                output_json(limited, args.file)
                return

            if args.cached:
                program_details = read_program_caches(program_ids_of(limited))
            else:
                cache = read_workout_cache()
                program_details = client.build_program_details(limited, cache.plans if cache else None)
    except KahunasError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if args.debug_preview:
        log_preview_sources(limited, program_details)

    if args.full:
        output_json(enrich_workout_events(limited, program_details), args.file)
        return

    formatted = format_workout_events_output(limited, program_details, time_zone, args.program, args.workout)
    if args.output == "json":
        output_json(formatted, args.file)
    else:
        display_event_summaries(annotate_workout_event_summaries(formatted.events))


def sync_events(client: KahunasClient, user_uuid: str, time_zone: str, plans: list[WorkoutPlan]) -> dict:
    """Fetch the calendar and programs, filling the local caches."""
    response = client.fetch_calendar_events(user_uuid, time_zone)
    write_calendar_cache(response.json_data, time_zone, user_uuid)
    if not isinstance(response.json_data, list):
        raise KahunasError("Unexpected calendar response.")

    events = sort_workout_events(filter_workout_events(response.json_data))
    program_details = client.build_program_details(events, plans) if events else {}
    for program_id, program in program_details.items():
        if isinstance(program, dict):
            write_program_cache(program_id, program)

    formatted = format_workout_events_output(events, program_details, time_zone)
    annotated = formatted.model_copy(update={"events": annotate_workout_event_summaries(formatted.events)})
    return {"updatedAt": now_iso(), **to_jsonable(annotated)}


def cmd_workout_sync(args):
    """Refresh the token and cache programs and calendar events locally."""
    config = load_settings(args)

    try:
        with build_client(args, config) as client:
            token_valid = bool(client.token) and bool(
                config.token_expires_at and is_iso_after_now(config.token_expires_at)
            )
            if not token_valid and client.can_refresh_token:
                console.print("Refreshing auth token...", style="dim")
                client.refresh_token()

            plans, cache = fetch_plans(client, rpp=100)
            events_cache = cache.events if cache else None

            if client.can_refresh_token:
                user_uuid = require_user_uuid(args, config, client)
                events_cache = sync_events(client, user_uuid, resolve_time_zone(args, config), plans)
            else:
                console.print("[yellow]No web session configured; skipping calendar sync.[/yellow]")
    except KahunasError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    written = write_workout_cache(plans, events_cache)
    sessions = len(events_cache.get("events", [])) if events_cache else 0
    console.print(
        f"[green]Synced {len(plans)} program{'s' if len(plans) != 1 else ''}, "
        f"{sessions} session{'s' if sessions != 1 else ''}[/green]"
    )
    console.print(f"[dim]Saved to {workout_cache_path()} at {format_human_timestamp(written.updated_at)}[/dim]")


def cmd_token_help(args):
    """Show instructions for obtaining the auth token and web session."""
    instructions = """
[bold cyan]How to Get Your Kahunas Credentials[/bold cyan]

The CLI talks to two places: the API (needs an auth token) and the web app
(needs your session cookies and CSRF token, used for the calendar and for
refreshing the auth token).

[bold]Browser Developer Tools[/bold]

1. Log in at [link=https://kahunas.io]https://kahunas.io[/link]
2. Open Developer Tools (F12 or Cmd+Option+I)
3. Go to the Network tab and refresh the dashboard
4. Find a request to api.kahunas.io
5. In the request headers, find "auth-user-token" - that's your token
6. Find a request to kahunas.io and copy its whole "cookie" header
7. The "csrf_kahunas_cookie_token" cookie value is your CSRF token

[bold cyan]Using Your Credentials[/bold cyan]

1. Save them to the config file:
   [dim]kahunas token set YOUR_TOKEN --csrf CSRF --cookie "COOKIE HEADER"[/dim]

2. Or set them in your .env file:
   [dim]KAHUNAS_TOKEN=your_token_here[/dim]
   [dim]KAHUNAS_CSRF_TOKEN=your_csrf_token_here[/dim]
   [dim]KAHUNAS_AUTH_COOKIE=your_cookie_header_here[/dim]

[bold yellow]Note:[/bold yellow] With the cookie and CSRF token saved, expired auth tokens are
refreshed automatically through /get-token.
"""
    console.print(Panel(instructions, title="Credentials Guide", border_style="blue"))


def cmd_token_set(args):
    """Save credentials to the config file."""
    load_dotenv()

    try:
        config = read_config()
        config.token = args.value
        config.token_updated_at = now_iso()
        config.token_expires_at = resolve_token_expiry(args.value)
        for field in ("csrf_token", "csrf_cookie", "user_uuid", "base_url", "web_base_url", "timezone"):
            value = getattr(args, field, None)
            if value:
                setattr(config, field, value)
        if args.cookie:
            config.auth_cookie = args.cookie
        write_config(config)
    except KahunasError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    console.print(f"[green]Saved credentials to {config_path()}[/green]")


def cmd_token_show(args):
    """Show the saved credentials (tokens are shortened)."""
    try:
        config = read_config()
        auth = read_auth_config()
    except KahunasError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    def short(value: str | None) -> str:
        if not value:
            return "-"
        return value if len(value) <= 16 else f"{value[:8]}…{value[-4:]}"

    table = make_table(None, [("Setting", "cyan", None), ("Value", None, None)])
    table.add_row("Config", str(config_path()))
    table.add_row("Token", short(config.token))
    table.add_row("Token updated", format_human_timestamp(config.token_updated_at) if config.token_updated_at else "-")
    table.add_row("Token expires", format_human_timestamp(config.token_expires_at) if config.token_expires_at else "-")
    table.add_row("CSRF token", short(config.csrf_token or config.csrf_cookie))
    table.add_row("Cookie", "set" if config.auth_cookie else "-")
    table.add_row("User UUID", config.user_uuid or "-")
    table.add_row("Login", (auth.username or auth.email) if auth else "-")
    table.add_row("Time zone", config.timezone or resolve_timezone())
    console.print(table)


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    common_parser = argparse.ArgumentParser(add_help=False)
    common_parser.add_argument("-t", "--token", help="Auth token (auth-user-token header)")
    common_parser.add_argument("-u", "--user-uuid", help="Kahunas user uuid")
    common_parser.add_argument("--csrf", help="CSRF token of the web session")
    common_parser.add_argument("--cookie", help="Cookie header of the web session")
    common_parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    parser = argparse.ArgumentParser(
        description="Kahunas CLI - Access your coaching check-ins and workouts",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    checkins_parser = subparsers.add_parser("checkins", help="Check-ins")
    checkins_subparsers = checkins_parser.add_subparsers(dest="checkins_command", required=True)
    checkins_list_parser = checkins_subparsers.add_parser("list", help="List check-ins", parents=[common_parser])
    checkins_list_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    checkins_list_parser.add_argument("--rpp", type=int, default=12, help="Results per page (default: 12)")
    checkins_list_parser.add_argument("--raw", action="store_true", help="Print the raw response body")
    checkins_list_parser.set_defaults(func=cmd_checkins_list)

    workout_parser = subparsers.add_parser("workout", help="Workout programs and events")
    workout_subparsers = workout_parser.add_subparsers(dest="workout_command", required=True)

    list_parser = workout_subparsers.add_parser("list", help="List workout programs", parents=[common_parser])
    list_parser.add_argument("--rpp", type=int, default=12, help="Results per page (default: 12)")
    list_parser.add_argument("-o", "--output", choices=["summary", "json"], default="summary")
    list_parser.add_argument("-f", "--file", help="Output file path for json format")
    list_parser.set_defaults(func=cmd_workout_list)

    latest_parser = workout_subparsers.add_parser(
        "latest", help="Show the latest workout program", parents=[common_parser]
    )
    latest_parser.add_argument("--raw", action="store_true", help="Print the raw response body")
    latest_parser.set_defaults(func=cmd_workout_latest)

    pick_parser = workout_subparsers.add_parser(
        "pick", help="Pick a workout program to show", parents=[common_parser]
    )
    pick_parser.add_argument("--rpp", type=int, default=12, help="Results per page (default: 12)")
    pick_parser.add_argument("--raw", action="store_true", help="Print the raw response body")
    pick_parser.set_defaults(func=cmd_workout_pick)

    program_parser = workout_subparsers.add_parser(
        "program", help="Show a workout program by uuid", parents=[common_parser]
    )
    program_parser.add_argument("program_id", help="Workout program uuid")
    program_parser.add_argument("--raw", action="store_true", help="Print the raw response body")
    program_parser.set_defaults(func=cmd_workout_program)

    events_parser = workout_subparsers.add_parser(
        "events", help="Calendar workout events with their program day", parents=[common_parser]
    )
    events_parser.add_argument("--program", help="Only events of this program uuid")
    events_parser.add_argument("--workout", help="Only events of this workout uuid")
    events_parser.add_argument(
        "-n", "--limit", type=non_negative_int, default=1, help="Number of latest events, 0 for all (default: 1)"
    )
    events_parser.add_argument("--cached", action="store_true", help="Use the calendar cached by 'workout sync'")
    events_parser.add_argument("--time-zone", help="IANA time zone for the calendar")
    mode_group = events_parser.add_mutually_exclusive_group()
    mode_group.add_argument("--minimal", action="store_true", help="Print the raw calendar events")
    mode_group.add_argument("--full", action="store_true", help="Print events with their raw program payload")
    events_parser.add_argument(
        "--debug-preview", action="store_true", help="Print where each event's preview HTML was found"
    )
    events_parser.add_argument("-o", "--output", choices=["summary", "json"], default="summary")
    events_parser.add_argument("-f", "--file", help="Output file path for json formats")
    events_parser.set_defaults(func=cmd_workout_events)

    sync_parser = workout_subparsers.add_parser(
        "sync", help="Cache programs and calendar events locally", parents=[common_parser]
    )
    sync_parser.add_argument("--time-zone", help="IANA time zone for the calendar")
    sync_parser.set_defaults(func=cmd_workout_sync)

    token_parser = subparsers.add_parser("token", help="Token utilities")
    token_parser.set_defaults(func=cmd_token_help)
    token_subparsers = token_parser.add_subparsers(dest="token_command")

    token_help_parser = token_subparsers.add_parser("help", help="How to get your credentials")
    token_help_parser.set_defaults(func=cmd_token_help)

    token_set_parser = token_subparsers.add_parser("set", help="Save credentials to the config file")
    token_set_parser.add_argument("value", help="Auth token")
    token_set_parser.add_argument("--csrf", dest="csrf_token", help="CSRF token of the web session")
    token_set_parser.add_argument("--csrf-cookie", help="Value of the csrf_kahunas_cookie_token cookie")
    token_set_parser.add_argument("--cookie", help="Cookie header of the web session")
    token_set_parser.add_argument("-u", "--user-uuid", help="Kahunas user uuid")
    token_set_parser.add_argument("--base-url", help="API base URL")
    token_set_parser.add_argument("--web-base-url", help="Web app URL")
    token_set_parser.add_argument("--time-zone", dest="timezone", help="IANA time zone for the calendar")
    token_set_parser.set_defaults(func=cmd_token_set)

    token_show_parser = token_subparsers.add_parser("show", help="Show saved credentials")
    token_show_parser.set_defaults(func=cmd_token_show)

    return parser


def main():
    """Main entry point for CLI."""
    args = build_parser().parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
