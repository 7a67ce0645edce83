"""qpw CLI - login, lookups and criteria commands."""
import asyncio
import json
import webbrowser
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..core.exceptions import CriteriaValidationError, QPWException
from ..core.lookups import LOOKUP_NAMES

app = typer.Typer(
    name="qpw",
    help="Contact-center quality criteria CLI",
    add_completion=False
)
console = Console()

PROFILE_OPTION = typer.Option("default", "--profile", "-P", envvar="QPW_PROFILE", help="Session profile name")


# Session file: ~/.config/qpw/<profile>.session (dots in the profile are kept)
def get_session_path(profile: str = "default") -> Path:
    config_dir = Path.home() / ".config" / "qpw"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir / f"{profile}.session"


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def _require_session(profile: str) -> str:
    session_path = get_session_path(profile)
    if not session_path.exists():
        console.print("[red]Not logged in. Run 'qpw login' first.[/red]")
        raise typer.Exit(1)
    return str(session_path)


@app.command()
def login(
    client_id: str = typer.Option(..., "--client-id", "-c", envvar="QPW_CLIENT_ID", prompt="Client ID", help="OAuth client id (implicit grant)"),
    region: str = typer.Option("mypurecloud.com", "--region", "-r", envvar="QPW_REGION", help="Region domain, e.g. mypurecloud.ie"),
    redirect_uri: str = typer.Option("http://localhost:8080/", "--redirect-uri", envvar="QPW_REDIRECT_URI", help="Redirect URI registered for the client"),
    browser: bool = typer.Option(True, "--browser/--no-browser", help="Open the sign-in page in a browser"),
    profile: str = PROFILE_OPTION,
):
    """Sign in through the browser and save the session."""
    from qpw import QPWClient

    async def do_login():
        async with QPWClient(str(get_session_path(profile))) as qpw:
            url = qpw.authorize_url(client_id, region, redirect_uri)
            console.print("Sign in at:")
            console.print(url, soft_wrap=True)
            if browser:
                webbrowser.open(url)

            redirected = typer.prompt("Paste the URL you were redirected to", hide_input=True)
            result = await qpw.complete_login(redirected.strip())

            if result is None:
                console.print("[red]That URL does not carry an access token[/red]")
                raise typer.Exit(1)

            if result.confirmed:
                console.print(f"[green]Logged in as {qpw.user}[/green] ({result.region})")
            else:
                console.print(
                    "[yellow]Token saved, but the identity check failed. "
                    "Run 'qpw whoami' to retry.[/yellow]"
                )

    run_async(do_login())


@app.command()
def logout(profile: str = PROFILE_OPTION):
    """Forget the saved token and region."""
    from qpw import QPWClient

    if not get_session_path(profile).exists():
        console.print("[yellow]No active session[/yellow]")
        return

    async def do_logout():
        async with QPWClient(str(get_session_path(profile))) as qpw:
            qpw.logout()

    run_async(do_logout())
    console.print("[green]Logged out successfully[/green]")


@app.command()
def whoami(profile: str = PROFILE_OPTION):
    """Show the user behind the saved token."""
    from qpw import QPWClient

    session_path = _require_session(profile)

    async def show():
        async with QPWClient(session_path) as qpw:
            user = await qpw.resume()
            if user is None:
                console.print("[red]Session missing or expired. Run 'qpw login' again.[/red]")
                raise typer.Exit(1)
            console.print(f"Name: {user.name}")
            if user.email:
                console.print(f"Email: {user.email}")
            console.print(f"User ID: {user.id}")
            console.print(f"Region: {qpw.session.region}")

    run_async(show())


@app.command()
def lookups(
    name: Optional[str] = typer.Argument(None, help=f"One of: {', '.join(LOOKUP_NAMES)}"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables"),
    profile: str = PROFILE_OPTION,
):
    """List reference data (queues, users, skills, ...)."""
    from qpw import QPWClient

    if name is not None and name not in LOOKUP_NAMES:
        console.print(f"[red]Unknown lookup '{name}'. Choose from: {', '.join(LOOKUP_NAMES)}[/red]")
        raise typer.Exit(2)

    session_path = _require_session(profile)

    async def show():
        async with QPWClient(session_path) as qpw:
            if name is not None:
                try:
                    options = {name: await qpw.load_lookup(name)}
                except QPWException as e:
                    console.print(f"[red]{e}[/red]")
                    raise typer.Exit(1)
            else:
                result = await qpw.load_lookups()
                if not result.ok:
                    for failed, error in result.errors.items():
                        console.print(f"[red]{failed}: {error}[/red]")
                    raise typer.Exit(1)
                options = result.options

        if as_json:
            console.print_json(json.dumps({
                key: [option.to_dict() for option in values]
                for key, values in options.items()
            }))
            return

        for key, values in options.items():
            table = Table(title=f"{key} ({len(values)})")
            table.add_column("Label")
            table.add_column("ID", style="dim")
            for option in values:
                table.add_row(option.label, option.id)
            console.print(table)

    run_async(show())


@app.command()
def criteria(
    date_from: Optional[str] = typer.Option(None, "--from", help="First day (YYYY-MM-DD), default 7 days ago"),
    date_to: Optional[str] = typer.Option(None, "--to", help="Last day (YYYY-MM-DD), default today"),
    media_type: str = typer.Option("voice", "--media-type", "-m", help="voice, chat, email or message"),
    direction: str = typer.Option("both", "--direction", "-d", help="both, inbound or outbound"),
    queue: Optional[List[str]] = typer.Option(None, "--queue", "-q", help="Queue id (repeatable)"),
    user: Optional[List[str]] = typer.Option(None, "--user", "-u", help="User id (repeatable)"),
    team: Optional[List[str]] = typer.Option(None, "--team", help="Work team id (repeatable)"),
    wrap_up: Optional[List[str]] = typer.Option(None, "--wrap-up", help="Wrap-up code id (repeatable)"),
    skill: Optional[List[str]] = typer.Option(None, "--skill", help="Skill id (repeatable)"),
    language: Optional[List[str]] = typer.Option(None, "--language", help="Language id (repeatable)"),
    min_duration: Optional[int] = typer.Option(None, "--min-duration", help="Minimum duration in seconds"),
    max_duration: Optional[int] = typer.Option(None, "--max-duration", help="Maximum duration in seconds"),
    check: bool = typer.Option(False, "--check", help="Check ids against live lookups"),
    profile: str = PROFILE_OPTION,
):
    """Build search criteria and print them as JSON."""
    from qpw import Criteria, QPWClient

    value = Criteria.default()
    changes = {
        'media_type': media_type,
        'direction': direction,
        'queues': queue or (),
        'users': user or (),
        'work_teams': team or (),
        'wrap_up_codes': wrap_up or (),
        'skills': skill or (),
        'languages': language or (),
        'min_duration_sec': min_duration,
        'max_duration_sec': max_duration,
    }
    if date_from:
        changes['date_from'] = date_from
    if date_to:
        changes['date_to'] = date_to

    try:
        value = value.replace(**changes).validate()
    except (CriteriaValidationError, ValueError) as e:
        console.print(f"[red]Invalid criteria: {e}[/red]")
        raise typer.Exit(2)

    if check:
        session_path = _require_session(profile)

        async def check_ids():
            async with QPWClient(session_path) as qpw:
                return await qpw.load_lookups()

        result = run_async(check_ids())
        if not result.ok:
            console.print("[red]Could not load lookups to check ids[/red]")
            raise typer.Exit(1)
        unknown = value.unknown_ids(result)
        if unknown:
            for field_name, ids in unknown.items():
                console.print(f"[red]{field_name}: unknown ids {', '.join(ids)}[/red]")
            raise typer.Exit(2)

    console.print_json(json.dumps(value.to_dict()))


def main():
    app()


if __name__ == "__main__":
    main()
