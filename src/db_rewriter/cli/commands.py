"""CLI command handlers."""

import json
from typing import Any, Dict, Optional

from rich.markup import escape

from db_rewriter import catalog
from db_rewriter.cli.table import CatalogTable
from db_rewriter.config import RuntimeConfig
from db_rewriter.core.driver import rewrite_block
from db_rewriter.enums import RewriteStrategy
from db_rewriter.php.nodes import Arg, Expression, FuncCall, Name, Variable, render_block
from db_rewriter.utils.console import console, log_error, log_info, log_success, log_warning


def _load_config(overrides: Optional[Dict[str, Any]]) -> Optional[RuntimeConfig]:
  """Loads configuration, reporting invalid values instead of raising."""
  try:
    return RuntimeConfig.load(overrides)
  except ValueError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return None


def handle_catalog(strategy: Optional[str], as_json: bool, overrides: Optional[Dict[str, Any]] = None) -> int:
  """Handles 'catalog' command."""
  config = _load_config(overrides)
  if config is None:
    return 1
  selected = RewriteStrategy(strategy) if strategy else None
  table = CatalogTable(config, selected)

  if as_json:
    console.print_json(json.dumps(table.get_json()))
  else:
    table.render()
  return 0


def handle_explain(name: str, arg_count: int, overrides: Optional[Dict[str, Any]] = None) -> int:
  """
  Handles 'explain' command.

  Rewrites `name($arg0, ..., $argN)` and prints the code before and after.
  """
  entry = catalog.lookup(name)
  if entry is None:
    log_error(f"'{name}' is not a deprecated db_* function")
    return 1

  config = _load_config(overrides)
  if config is None:
    return 1

  call = FuncCall(Name(name), [Arg(Variable(f"arg{i}")) for i in range(arg_count)])
  original = [Expression(call)]
  result = rewrite_block(original, config)

  log_info(f"{entry.name}: strategy [code]{entry.strategy.value}[/code]")
  if entry.note:
    log_info(entry.note)

  console.print(render_block(original), markup=False, highlight=False)
  console.print("->", style="dim")
  console.print(result.code, markup=False, highlight=False)

  if result.changed:
    log_success("Rewritten")
  else:
    log_warning("Left unchanged")
  return 0
