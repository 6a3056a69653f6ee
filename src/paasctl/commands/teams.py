"""Team commands.

Create and remove teams, manage their members and list the teams you
belong to. Team and user names are sent as URL path segments.
"""

from __future__ import annotations

import typer

from paasctl.client.response import decode_json, parse_model, require_ok
from paasctl.commands.common import confirm, exits_on_error, open_client, path_segment
from paasctl.exceptions import ServerError
from paasctl.models import Team, TeamMembers
from paasctl.output import print_data


@exits_on_error
def team_create(
    ctx: typer.Context,
    team: str = typer.Argument(help="Name of the team."),
) -> None:
    """Create a new team."""
    with open_client(ctx) as client:
        client.post("/teams", json_body={"name": team})
    print_data(f'Team "{team}" successfully created!')


@exits_on_error
def team_remove(
    ctx: typer.Context,
    team: str = typer.Argument(help="Name of the team."),
) -> None:
    """Remove a team. Asks for confirmation unless --force is given."""
    if not confirm(ctx, f'Are you sure you want to remove team "{team}"?'):
        print_data("Abort.")
        return

    with open_client(ctx) as client:
        client.delete(f"/teams/{path_segment(team)}")
    print_data(f'Team "{team}" successfully removed!')


@exits_on_error
def team_user_add(
    ctx: typer.Context,
    team: str = typer.Argument(help="Name of the team."),
    user: str = typer.Argument(help="Email of the user to add."),
) -> None:
    """Add a user to a team."""
    with open_client(ctx) as client:
        client.put(f"/teams/{path_segment(team)}/{path_segment(user)}")
    print_data(f'User "{user}" was added to the "{team}" team')


@exits_on_error
def team_user_remove(
    ctx: typer.Context,
    team: str = typer.Argument(help="Name of the team."),
    user: str = typer.Argument(help="Email of the user to remove."),
) -> None:
    """Remove a user from a team."""
    with open_client(ctx) as client:
        client.delete(f"/teams/{path_segment(team)}/{path_segment(user)}")
    print_data(f'User "{user}" was removed from the "{team}" team')


@exits_on_error
def team_user_list(
    ctx: typer.Context,
    team: str = typer.Argument(help="Name of the team."),
) -> None:
    """List members of a team, sorted by name."""
    with open_client(ctx) as client:
        response = client.get(f"/teams/{path_segment(team)}")
    members = parse_model(TeamMembers, decode_json(response) or {})
    for user in sorted(members.users):
        print_data(f"- {user}")


@exits_on_error
def team_list(ctx: typer.Context) -> None:
    """List all teams that you are a member of."""
    with open_client(ctx) as client:
        response = client.get("/teams")
    require_ok(response)

    payload = decode_json(response) or []
    if not isinstance(payload, list):
        raise ServerError("Unexpected team list format", status_code=response.status_code)
    teams = [parse_model(Team, item) for item in payload]

    print_data("Teams:\n")
    for entry in teams:
        print_data(f"  - {entry.name}")

