"""
Swellforms CLI — `swellforms` command.

Commands:
  swellforms fields <form-id>      Show field definitions
  swellforms validate <form-id>    Validate values against the form
  swellforms submit <form-id>      Submit values
  swellforms config <cmd>          Show or change saved settings
"""

import asyncio
import json
import logging
from pathlib import Path

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install swellforms[cli]")

from swellforms.form import AsyncSwellForm
from swellforms.transport.http import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_S

console = Console()
CONFIG_FILE = Path.home() / ".swellforms" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _make_form(form_id: str, fields: dict) -> AsyncSwellForm:
    cfg = _load_config()
    return AsyncSwellForm(
        form_id,
        fields,
        base_url=cfg.get("base_url", DEFAULT_BASE_URL),
        timeout=float(cfg.get("timeout", DEFAULT_TIMEOUT_S)),
    )


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log HTTP traffic")
def main(verbose):
    """Swellforms CLI — validate and submit Swellforms forms."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# Register subcommands from separate modules
from swellforms.cli.config import config
from swellforms.cli.forms import fields_cmd, submit_cmd, validate_cmd

main.add_command(config)
main.add_command(fields_cmd)
main.add_command(validate_cmd)
main.add_command(submit_cmd)


if __name__ == "__main__":
    main()
