import asyncio
import sys
from pathlib import Path

import click

from nextmfe.scaffold.models.enums import AppRole


@click.group()
@click.option("--log-level", default=None, help="Log level (default: from NEXTMFE_LOG_LEVEL or WARNING).")
@click.version_option(package_name="nextjs-mfe")
def main(log_level: str | None) -> None:
    """CLI to create Next.js micro-frontend applications."""
    from nextmfe.scaffold.log import setup_logging
    from nextmfe.scaffold.settings import get_settings

    setup_logging(log_level or get_settings().log_level)


def _orchestrator(*, skip_generator: bool = False):
    from nextmfe.scaffold.generator import BareDirectoryGenerator, NextAppGenerator
    from nextmfe.scaffold.orchestrator import WorkspaceOrchestrator
    from nextmfe.scaffold.reporter import ConsoleReporter
    from nextmfe.scaffold.settings import get_settings

    settings = get_settings()
    generator = BareDirectoryGenerator() if skip_generator else NextAppGenerator(settings.generator_command)
    return WorkspaceOrchestrator(
        Path.cwd(),
        generator=generator,
        reporter=ConsoleReporter(),
        workspace_name=settings.workspace_name,
    )


@main.command()
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing root package.json.")
def init(force: bool) -> None:
    """Initialize a new micro-frontend workspace."""
    orchestrator = _orchestrator()
    try:
        asyncio.run(orchestrator.init_workspace(force=force))
    except OSError as exc:
        click.secho(f"Error initializing workspace: {exc}", fg="red", err=True)
        sys.exit(1)

    click.secho(
        "\nNext steps:\n"
        "  1. npm install\n"
        "  2. create-nextjs-mfe create host-app --type host --remotes remote1,remote2\n"
        "  3. create-nextjs-mfe create remote3 --type remote --port 3003",
        fg="blue",
    )


@main.command()
@click.argument("name")
@click.option(
    "-p",
    "--port",
    type=click.IntRange(1, 65535),
    default=None,
    help="Port for the app (default: 3000 for a host, 3001 for a remote).",
)
@click.option(
    "-t",
    "--type",
    "role",
    type=click.Choice([r.value for r in AppRole]),
    default=AppRole.HOST.value,
    show_default=True,
    help="Type of app.",
)
@click.option("-r", "--remotes", default="", help="Remote apps to create and connect (comma-separated).")
@click.option(
    "--remote-base-port",
    type=click.IntRange(1, 65535),
    default=None,
    help="Port of the first remote; each following remote uses the next port (default: 3001).",
)
@click.option(
    "--skip-generator",
    is_flag=True,
    default=False,
    help="Do not run create-next-app; only write the generated files.",
)
def create(
    name: str,
    port: int | None,
    role: str,
    remotes: str,
    remote_base_port: int | None,
    skip_generator: bool,
) -> None:
    """Create a host app and its remotes, or a single remote app."""
    from nextmfe.scaffold.generator import GenerationFailure
    from nextmfe.scaffold.models.request import WorkspaceRequest
    from nextmfe.scaffold.naming import parse_remote_list
    from nextmfe.scaffold.planner import build, build_standalone_remote, render_next_steps
    from nextmfe.scaffold.settings import get_settings

    settings = get_settings()
    remote_names = parse_remote_list(remotes)

    try:
        if AppRole(role) == AppRole.REMOTE:
            if remote_names:
                raise click.UsageError("--remotes can only be used with --type host")
            artifacts = build_standalone_remote(name, port or settings.remote_base_port)
        else:
            request = WorkspaceRequest(
                host_name=name,
                remote_names=remote_names,
                host_port=port or settings.host_port,
                remote_base_port=remote_base_port or settings.remote_base_port,
            )
            artifacts = build(request)
    except ValueError as exc:
        click.secho(str(exc), fg="red", err=True)
        sys.exit(1)

    try:
        asyncio.run(_orchestrator(skip_generator=skip_generator).create(artifacts))
    except GenerationFailure:
        # Reported (and rolled back) by the orchestrator.
        sys.exit(1)

    click.secho("\n" + render_next_steps(artifacts), fg="blue")


if __name__ == "__main__":
    main()
