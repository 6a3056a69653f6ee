"""paasctl -- account and team commands for a platform-as-a-service client.

This package implements the account side of the platform CLI: creating and
removing users, logging in and out, managing teams, changing or resetting
passwords, and showing or regenerating API keys. Every command builds a
single request against the platform's control-plane API (the *target*),
interprets the JSON response, and prints a short human-readable result.

Typical workflow::

    paasctl target set https://paas.example.com
    paasctl login me@example.com
    paasctl team-create backend

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration and target resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
