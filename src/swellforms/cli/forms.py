"""CLI: swellforms fields|validate|submit"""

import json
from contextlib import nullcontext

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from swellforms.errors import SwellformsError

console = Console()


def _make_form(form_id: str, fields: dict):
    from swellforms.cli.main import _make_form
    return _make_form(form_id, fields)


def _run(coro):
    from swellforms.cli.main import _run
    return _run(coro)


def _status(message: str, quiet: bool):
    # --json output must stay parseable
    return nullcontext() if quiet else console.status(message)


def _parse_pairs(pairs) -> dict:
    values = {}
    for pair in pairs:
        name, sep, raw = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected name=value, got {pair!r}", param_hint="--field")
        try:
            values[name] = json.loads(raw)
        except ValueError:
            values[name] = raw
    return values


def _print_errors(errors: dict) -> None:
    table = Table(title="Errors")
    table.add_column("Field", style="bold")
    table.add_column("Message", style="red")
    for name, messages in errors.items():
        for message in messages:
            table.add_row(escape(name), escape(message))
    console.print(table)


def _fail(err: SwellformsError) -> None:
    code = f" {err.code}" if err.code else ""
    console.print(f"[red]Error{code}: {escape(err.message)} (status {err.status})[/red]")
    raise SystemExit(1)


field_option = click.option("-f", "--field", "pairs", multiple=True, metavar="NAME=VALUE",
                            help="Field value; parsed as JSON when possible")
local_option = click.option("--no-local", is_flag=True, help="Skip fetching definitions for local checks")
json_option = click.option("--json-output", "--json", is_flag=True)


@click.command("fields")
@click.argument("form_id")
@json_option
def fields_cmd(form_id, json_output):
    """Show the field definitions of a form."""

    async def _fields():
        form = _make_form(form_id, {})
        with _status("Fetching fields...", json_output):
            return await form.fetch_fields()

    try:
        result = _run(_fields())
    except SwellformsError as e:
        _fail(e)
    if json_output:
        click.echo(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))
        return
    table = Table(title=f"Form {escape(form_id)} ({len(result.fields)} fields)")
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Required")
    table.add_column("Label")
    for f in result.fields:
        table.add_row(escape(f.key), f.type.value, "yes" if f.required else "", escape(f.label or ""))
    console.print(table)


@click.command("validate")
@click.argument("form_id")
@field_option
@click.option("--only", multiple=True, help="Validate only this field (repeatable)")
@local_option
@json_option
def validate_cmd(form_id, pairs, only, no_local, json_output):
    """Validate field values against a form."""
    values = _parse_pairs(pairs)

    async def _validate():
        form = _make_form(form_id, values)
        with _status("Validating...", json_output):
            if not no_local:
                await form.fetch_fields()
            return await form.validate(only=list(only) or None)

    try:
        result = _run(_validate())
    except SwellformsError as e:
        _fail(e)
    if json_output:
        click.echo(json.dumps(result.model_dump(), indent=2))
    elif result.valid:
        console.print("[green]Valid.[/green]")
    else:
        _print_errors(result.errors)
    if result.message and not json_output:
        console.print(escape(result.message))
    if not result.valid:
        raise SystemExit(1)


@click.command("submit")
@click.argument("form_id")
@field_option
@local_option
@json_option
def submit_cmd(form_id, pairs, no_local, json_output):
    """Submit field values to a form."""
    values = _parse_pairs(pairs)

    async def _submit():
        form = _make_form(form_id, values)
        with _status("Submitting...", json_output):
            if not no_local:
                await form.fetch_fields()
            return await form.submit()

    try:
        result = _run(_submit())
    except SwellformsError as e:
        _fail(e)
    if json_output:
        click.echo(json.dumps(result.model_dump(), indent=2))
    elif result.ok:
        console.print(f"[green]Submitted (status {result.status}).[/green]")
    else:
        _print_errors(result.errors)
    if not result.ok:
        raise SystemExit(1)
