"""pexels-cli -- query the Pexels stock-media API from the command line.

Every structured command prints a ``{data, meta}`` envelope rendered as YAML
(default) or JSON, so the output is equally readable for people and stable
for scripts and agents. ``--fields`` narrows each item to a set of dot paths
or named sets such as ``@ids`` and ``@urls``; ``--raw`` prints the API body
untouched.

Typical usage::

    pexels auth login <token>
    pexels photos search -q cats
    pexels --fields @ids,@urls --json videos popular

Modules:
    app: Typer application and CLI entry point.
    commands: Typer sub-command groups (auth, config, photos, videos...).
    models: Pydantic models shared across the package.
    config: XDG-aware configuration and credential resolution.
    projection: Selector parsing, field projection, envelopes, rendering.
    client: httpx-based Pexels API client with retry and pagination.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr output system with Rich support.
"""

__version__ = "0.3.0"
