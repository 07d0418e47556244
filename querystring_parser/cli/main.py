from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, NoReturn

import click
import rich_click
from pydantic import ValidationError

import querystring_parser

from ..config import ParserConfig
from ..include import parse_include
from ..mongo_filter import parse_mongo_filter
from .errors import CLIError
from .logging import configure_logging, restore_logging
from .render import emit_json, render_cli_error, render_result


@dataclass
class CLIContext:
    output: Literal["table", "json"]
    verbosity: int
    config: ParserConfig


def _build_config(prefix: str | None) -> ParserConfig:
    if prefix is None:
        return ParserConfig()
    try:
        return ParserConfig(filter_prefix=prefix)
    except ValidationError as exc:
        raise CLIError(
            f"Invalid --prefix: {prefix}",
            exit_code=2,
            hint="Use a plain word such as 'filter' or 'where'.",
        ) from exc


def _exit_with(error: CLIError) -> NoReturn:
    render_cli_error(error.message, hint=error.hint)
    raise click.exceptions.Exit(error.exit_code)


@click.group(
    name="qsparse",
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    cls=rich_click.RichGroup,
)
@click.option(
    "--output",
    type=click.Choice(["table", "json"]),
    default="json",
    show_default=True,
)
@click.option("--json", "json_flag", is_flag=True, help="Alias for --output json.")
@click.option("-v", "verbose", count=True, help="Increase verbosity (-v, -vv).")
@click.option("--prefix", type=str, default=None, help="Filter parameter prefix (default: filter).")
@click.version_option(version=querystring_parser.__version__, prog_name="qsparse")
@click.pass_context
def cli(
    click_ctx: click.Context,
    *,
    output: str,
    json_flag: bool,
    verbose: int,
    prefix: str | None,
) -> None:
    if click_ctx.invoked_subcommand is None:
        click.echo(click_ctx.get_help())
        raise click.exceptions.Exit(0)

    try:
        config = _build_config(prefix)
    except CLIError as e:
        _exit_with(e)

    out = "json" if json_flag else output
    click_ctx.obj = CLIContext(
        output=out,  # type: ignore[arg-type]
        verbosity=verbose,
        config=config,
    )

    previous_logging = configure_logging(verbosity=verbose)
    click_ctx.call_on_close(lambda: restore_logging(previous_logging))


@cli.command(name="filter", cls=rich_click.RichCommand)
@click.argument("querystring")
@click.pass_obj
def filter_cmd(ctx: CLIContext, querystring: str) -> None:
    """Parse the filter[...] parameters of QUERYSTRING into a predicate tree."""
    result = parse_mongo_filter(querystring, config=ctx.config)

    if ctx.output == "json":
        emit_json(result.to_dict(config=ctx.config))
        exit_code = 0 if result.ok else 1
    else:
        exit_code = render_result(results=result.results, errors=result.errors, config=ctx.config)

    if exit_code:
        raise click.exceptions.Exit(exit_code)


@cli.command(name="include", cls=rich_click.RichCommand)
@click.argument("relations", nargs=-1, required=True)
@click.pass_obj
def include_cmd(ctx: CLIContext, relations: tuple[str, ...]) -> None:
    """Build the select operation for the given RELATIONS."""
    result = parse_include(list(relations))

    if ctx.output == "json":
        emit_json(
            {
                "results": result.results,
                "errors": [error.to_dict() for error in result.errors],
            }
        )
        exit_code = 0 if result.ok else 1
    else:
        exit_code = render_result(results=result.results, errors=result.errors, config=ctx.config)

    if exit_code:
        raise click.exceptions.Exit(exit_code)
