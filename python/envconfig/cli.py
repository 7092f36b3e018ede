"""CLI commands for envconfig."""

import importlib
import os

import typer

from envconfig.exceptions import ConfigBindingError, EnvConfigError
from envconfig.models import EnvConfig, env_names

app = typer.Typer(
    name="envconfig",
    help="envconfig - Inspect and validate environment-bound configuration",
    no_args_is_help=True,
)


def load_config_class(target: str) -> type[EnvConfig]:
    """Import ``module:Class`` and check it is an EnvConfig subclass."""
    module_name, sep, class_name = target.partition(":")
    if not sep or not module_name or not class_name:
        raise typer.BadParameter(f"Expected MODULE:CLASS, got {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"Cannot import module {module_name!r}: {e}") from e
    config_type = getattr(module, class_name, None)
    if not isinstance(config_type, type) or not issubclass(config_type, EnvConfig):
        raise typer.BadParameter(f"{target} is not an EnvConfig subclass")
    return config_type


@app.command()
def check(
    target: str = typer.Argument(..., help="Configuration class as MODULE:CLASS"),
    prefix: str | None = typer.Option(None, help="Environment variable prefix"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Bind a configuration class from the current environment.

    Every field is converted; all failing fields are reported at once.
    """
    if verbose:
        from envconfig.log import configure_logging

        configure_logging("DEBUG")

    config_type = load_config_class(target)
    typer.echo(f"🔍 Checking {config_type.__name__} (prefix: {prefix or '-'})")

    try:
        config = config_type.bind(os.environ, prefix)
    except ConfigBindingError as e:
        typer.secho(f"❌ {len(e.failures)} field(s) failed:", fg=typer.colors.RED)
        for failure in e.failures:
            typer.secho(f"  - {failure}", fg=typer.colors.RED)
        raise typer.Exit(1)
    except EnvConfigError as e:
        typer.secho(f"❌ Error binding configuration: {e}", fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho(
        f"✅ {config_type.__name__}: {len(type(config).model_fields)} field(s) bound",
        fg=typer.colors.GREEN,
        bold=True,
    )


@app.command()
def names(
    target: str = typer.Argument(..., help="Configuration class as MODULE:CLASS"),
    prefix: str | None = typer.Option(None, help="Environment variable prefix"),
):
    """
    List the environment variable read for each field.

    Only whether a variable is set is shown, never its value.
    """
    config_type = load_config_class(target)
    mapping = env_names(config_type, prefix)
    width = max((len(field) for field in mapping), default=0)

    typer.echo(f"{config_type.__name__}:")
    for field, env_name in mapping.items():
        if env_name in os.environ:
            typer.secho(f"  [✓] {field:<{width}}  {env_name}", fg=typer.colors.GREEN)
        else:
            typer.echo(f"  [ ] {field:<{width}}  {env_name}")


if __name__ == "__main__":
    app()
