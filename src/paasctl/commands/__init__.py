"""Built-in CLI sub-commands for paasctl.

This package groups the command modules registered on the root app:

* :mod:`~paasctl.commands.auth` -- ``login`` and ``logout``.
* :mod:`~paasctl.commands.users` -- account creation, removal and passwords.
* :mod:`~paasctl.commands.teams` -- teams and their members.
* :mod:`~paasctl.commands.tokens` -- API keys.
* :mod:`~paasctl.commands.target` -- the ``target`` group selecting the API.

Account, team and key commands are plain functions registered as flat
top-level commands; ``target`` is a :class:`typer.Typer` sub-application.
Shared helpers live in :mod:`~paasctl.commands.common`.
"""
