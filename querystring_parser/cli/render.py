from __future__ import annotations

import json
import sys
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ..config import ParserConfig
from ..exceptions import QuerystringParsingError
from ..filters import AndPredicate, Predicate


def emit_json(payload: dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")


def _predicate_tree(
    predicate: Predicate, *, config: ParserConfig, tree: Tree | None = None
) -> Tree:
    if isinstance(predicate, AndPredicate):
        node = Tree("[bold]AND[/bold]") if tree is None else tree.add("[bold]AND[/bold]")
        _predicate_tree(predicate.left, config=config, tree=node)
        _predicate_tree(predicate.right, config=config, tree=node)
        return node
    label = Text(json.dumps(predicate.to_dict(config=config), ensure_ascii=False))
    if tree is None:
        return Tree(label)
    tree.add(label)
    return tree


def _errors_table(errors: list[QuerystringParsingError]) -> Table:
    table = Table(title="Parsing errors", show_lines=False)
    table.add_column("Parameter")
    table.add_column("Value")
    table.add_column("Message")
    for error in errors:
        value = error.param_value
        rendered = ",".join(value) if isinstance(value, list) else str(value)
        table.add_row(Text(error.param_key or ""), Text(rendered), Text(error.message))
    return table


def render_result(
    *,
    results: Predicate | list[dict[str, Any]] | None,
    errors: list[QuerystringParsingError],
    config: ParserConfig,
) -> int:
    """Render a parse result for humans; returns the exit code."""
    stdout = Console(file=sys.stdout, force_terminal=False)
    stderr = Console(file=sys.stderr, force_terminal=False)

    if errors:
        stderr.print(_errors_table(errors))
        return 1

    if results is None:
        stdout.print("No filters.")
    elif isinstance(results, Predicate):
        stdout.print(_predicate_tree(results, config=config))
    else:
        for operation in results:
            stdout.print(f"{operation['fx']}: {', '.join(operation['parameters'])}")
    return 0


def render_cli_error(message: str, *, hint: str | None = None) -> None:
    stderr = Console(file=sys.stderr, force_terminal=False)
    stderr.print(f"Error: {message}", markup=False)
    if hint:
        stderr.print(f"Hint: {hint}", markup=False)
