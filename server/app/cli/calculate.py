"""
Command line access to the cost model.

    waste-calc defaults > inputs.json
    waste-calc analyze inputs.json --consulting consulting.json --pretty

Input files may hold any subset of the fields; missing ones fall back to the
wizard defaults.
"""

import json
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from app.core.exceptions import InvalidInputError
from app.schemas.analysis import DefaultInputs
from app.schemas.calculation import ConsultingInputs, CostInputs
from app.services.analysis_service import run_analysis
from app.services.wizard_state import DEFAULT_COST_INPUTS


def _load_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"{path}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    if not isinstance(data, dict):
        raise click.ClickException(f"{path}: expected a JSON object")
    return data


def _indent(pretty: bool) -> int | None:
    return 2 if pretty else None


@click.group()
def cli():
    """Project waste calculator"""


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--consulting",
    "consulting_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with consulting engagement terms",
)
@click.option("--pretty", is_flag=True, help="Indent the JSON output")
def analyze(input_file: Path, consulting_file: Path | None, pretty: bool):
    """Run the cost model, ROI scenarios and opportunity ranking for INPUT_FILE"""
    try:
        cost_inputs = CostInputs.model_validate({**DEFAULT_COST_INPUTS.model_dump(), **_load_json(input_file)})
        consulting = (
            ConsultingInputs.model_validate(_load_json(consulting_file)) if consulting_file else ConsultingInputs()
        )
        result = run_analysis(cost_inputs, consulting)
    except ValidationError as exc:
        raise click.ClickException(f"invalid inputs: {exc.error_count()} error(s)\n{exc}") from exc
    except InvalidInputError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(result.model_dump_json(indent=_indent(pretty)))


@cli.command()
@click.option("--pretty", is_flag=True, help="Indent the JSON output")
def defaults(pretty: bool):
    """Print the default cost and consulting inputs"""
    payload = DefaultInputs(cost_inputs=DEFAULT_COST_INPUTS, consulting_inputs=ConsultingInputs())
    click.echo(payload.model_dump_json(indent=_indent(pretty)))


if __name__ == "__main__":
    cli()
