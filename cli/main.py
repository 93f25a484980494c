"""CLI for the backend registry."""

import json

import click
from dotenv import load_dotenv

from core.utils.logging import default_level, setup_logging

load_dotenv()


def _find_or_exit(name: str):
    """Find a backend or print the available ones and exit."""
    from core.backends import REGISTRY, BackendNotFoundError

    try:
        return REGISTRY.find(name)
    except BackendNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        click.echo(f"Available: {', '.join(REGISTRY.names())}", err=True)
        raise SystemExit(1)


@click.group()
@click.version_option(version="0.1.0", prog_name="backend-registry")
@click.option(
    "--log-level",
    default=default_level,
    help="Log level (DEBUG, INFO, WARNING, ERROR).",
)
def cli(log_level: str):
    """Backend registry CLI - inspect backends and their options."""
    setup_logging(level=log_level)

    # Import backends to trigger registration
    import backends  # noqa: F401


@cli.command("backends")
@click.option("--all", "show_all", is_flag=True, help="Include hidden aliases")
def list_backends(show_all: bool):
    """List registered backends."""
    from core.backends import REGISTRY

    click.echo(f"\n{'='*60}")
    click.echo("Registered Backends")
    click.echo(f"{'='*60}\n")

    for info in REGISTRY:
        if info.hide and not show_all:
            continue
        line = f"  • {info.name:<10} {info.description}"
        if info.aliases:
            line += f" (aliases: {', '.join(info.aliases)})"
        if info.hide:
            line += " [hidden]"
        click.echo(line)

    click.echo("\nUsage: backend-registry options <name>")


@cli.command()
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Print the JSON export")
@click.option("--advanced", is_flag=True, help="Include advanced options")
def options(name: str, as_json: bool, advanced: bool):
    """Show the options of a backend."""
    from core.options import OptionVisibility

    info = _find_or_exit(name)

    if as_json:
        click.echo(
            json.dumps([opt.to_dict() for opt in info.options], indent=2, default=str)
        )
        return

    click.echo(f"\n{'='*60}")
    click.echo(f"Options for {info.name} - {info.description}")
    click.echo(f"{'='*60}\n")

    shown = 0
    for opt in info.options:
        if opt.hide & OptionVisibility.HIDE_COMMAND_LINE:
            continue
        if opt.advanced and not advanced:
            continue
        shown += 1

        flag = f"--{opt.flag_name(info.prefix)}"
        if opt.short_opt:
            flag += f", -{opt.short_opt}"
        click.echo(f"  {flag} {opt.kind()}")
        click.echo(f"      {opt.help.splitlines()[0] if opt.help else ''}")
        click.echo(f"      Env: {opt.env_var_name(info.prefix)}")
        click.echo(f"      Default: {opt.default_string()!r}")
        if opt.examples:
            click.echo(f"      Choices: {', '.join(e.value for e in opt.examples)}")

    if not shown:
        click.echo("  No options shown")
    if not advanced and info.options.has_advanced():
        click.echo("\nUse --advanced to show advanced options")


@cli.command()
@click.argument("name")
def describe(name: str):
    """Print a backend's registration as JSON."""
    from core.backends import must_find

    info = must_find(name)
    click.echo(info.to_json())


@cli.command("show-config")
@click.argument("remote")
@click.option(
    "--config",
    "-c",
    "config_path",
    required=True,
    type=click.Path(dir_okay=False),
    help="Remotes YAML file",
)
@click.option("--env", "-e", "environment", default=None, help="Environment (dev/prod)")
@click.option(
    "--option",
    "-o",
    "overrides",
    multiple=True,
    help="Override an option as key=value (repeatable)",
)
def show_config(remote: str, config_path: str, environment: str, overrides: tuple):
    """Show which options of a remote are overridden or non-default."""
    from core.backends import config_map_for
    from core.config.exceptions import ConfigError
    from core.config.loader import ConfigLoader, remote_section
    from core.options import OptionParseError

    try:
        remotes = ConfigLoader(config_path).load(environment=environment)
        section = remote_section(remotes, remote)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    info = _find_or_exit(section["type"])

    params = {}
    for override in overrides:
        key, sep, value = override.partition("=")
        opt = info.options.get(key)
        if not sep or opt is None:
            click.echo(f"Error: Unknown option override '{override}'", err=True)
            click.echo(f"Available: {', '.join(info.options.names())}", err=True)
            raise SystemExit(1)
        try:
            opt.parse_value(value)
        except OptionParseError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1)
        params[key] = value

    config_map = config_map_for(info, section=section, params=params)
    click.echo(
        json.dumps(
            {
                "remote": remote,
                "type": info.name,
                "overridden": info.options.overridden(config_map),
                "non_default": info.options.non_default(config_map),
            },
            indent=2,
        )
    )


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
