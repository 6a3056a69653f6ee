"""Target commands -- choose the control-plane API paasctl talks to.

Provides the ``paasctl target`` sub-command group. The saved target is the
fallback used when neither ``--target`` nor ``PAASCTL_TARGET`` is set.
"""

from __future__ import annotations

import typer

from paasctl.commands.common import exits_on_error, get_state
from paasctl.output import info, print_data, success


target_app = typer.Typer(no_args_is_help=True)


@target_app.command("show")
@exits_on_error
def target_show(ctx: typer.Context) -> None:
    """Show the target in effect for this shell.

    Example::

        paasctl target show
        PAASCTL_TARGET=https://staging.example.com paasctl target show
    """
    from paasctl.config import resolve_target

    print_data(resolve_target(get_state(ctx).get("target")))


@target_app.command("set")
@exits_on_error
def target_set(
    url: str = typer.Argument(help="Base URL of the API, e.g. https://paas.example.com."),
) -> None:
    """Save the default target.

    The URL must use http or https and name a host. A trailing slash is
    dropped.
    """
    from paasctl.config import load_global_config, normalize_target, save_global_config

    config = load_global_config()
    config.target = normalize_target(url)
    save_global_config(config)
    success(f"Target set to {config.target}")


@target_app.command("remove")
@exits_on_error
def target_remove() -> None:
    """Forget the saved target."""
    from paasctl.config import load_global_config, save_global_config

    config = load_global_config()
    if config.target is None:
        info("No target saved.")
        return
    config.target = None
    save_global_config(config)
    success("Target removed.")
