"""CLI: swellforms config show|set"""

import click
from rich.console import Console

console = Console()

KEYS = {"base_url": str, "timeout": float}


def _load_config() -> dict:
    from swellforms.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from swellforms.cli.main import _save_config
    _save_config(cfg)


@click.group()
def config():
    """Saved settings (~/.swellforms/config.json)."""


@config.command("show")
def config_show():
    """Print saved settings."""
    cfg = _load_config()
    if not cfg:
        console.print("[yellow]No settings saved. Defaults are in use.[/yellow]")
        return
    for key, value in sorted(cfg.items()):
        console.print(f"{key} = {value}")


@config.command("set")
@click.argument("key", type=click.Choice(sorted(KEYS)))
@click.argument("value")
def config_set(key, value):
    """Save a setting."""
    try:
        parsed = KEYS[key](value)
    except ValueError:
        raise click.BadParameter(f"{value!r} is not a valid {key}", param_hint="VALUE")
    _save_config({**_load_config(), key: parsed})
    console.print(f"[green]{key} saved.[/green]")
