"""
Catalog table rendering.

Presents the rewrite catalog either as a formatted Rich table (CLI) or as
structured JSON rows.
"""

from typing import Dict, List, Optional

from rich.table import Table

from db_rewriter import catalog
from db_rewriter.config import RuntimeConfig
from db_rewriter.core.context import RewriteContext
from db_rewriter.core.custom import registered_names
from db_rewriter.enums import RewriteStrategy
from db_rewriter.php.builders import string
from db_rewriter.utils.console import console


class CatalogTable:
  """
  Builds the catalog overview: one row per deprecated function.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None, strategy: Optional[RewriteStrategy] = None):
    """
    Args:
        config (RuntimeConfig, optional): Used to render the replacement target.
        strategy (RewriteStrategy, optional): Only list entries of this strategy.
    """
    self.config = config or RuntimeConfig()
    self.strategy = strategy

  def _status(self, name: str) -> str:
    if not catalog.is_custom_handling(name):
      return "uniform"
    if name in registered_names():
      return "custom"
    return "unchanged"

  def _replacement(self, entry: catalog.CatalogEntry) -> str:
    ctx = RewriteContext(self.config)
    if entry.strategy == RewriteStrategy.INJECTED_SERVICE:
      return ctx.fold_methods(ctx.default_service(), entry.methods, []).to_text()
    if entry.strategy == RewriteStrategy.CONDITION:
      args = [string(entry.parameter)] if entry.parameter else []
      return ctx.new_condition(args).to_text()
    if entry.strategy == RewriteStrategy.CLOSE_CONNECTION:
      return ctx.database_call("closeConnection").to_text()
    return ctx.database_call("setActiveConnection").to_text()

  def get_json(self) -> List[Dict[str, str]]:
    """
    Returns the catalog as structured rows.

    Returns:
        List[Dict[str, str]]: Rows with 'function', 'strategy', 'replacement',
        'status' and 'note' keys.
    """
    rows = []
    for entry in catalog.entries(self.strategy):
      rows.append(
        {
          "function": entry.name,
          "strategy": entry.strategy.value,
          "replacement": self._replacement(entry),
          "status": self._status(entry.name),
          "note": entry.note or "",
        }
      )
    return rows

  def render(self) -> None:
    """Prints the catalog as a Rich table."""
    table = Table(title=catalog.DESCRIPTION, caption=catalog.CHANGE_RECORD)
    table.add_column("Function", style="cyan", no_wrap=True)
    table.add_column("Strategy", style="magenta")
    table.add_column("Replacement")
    table.add_column("Status", justify="center")
    table.add_column("Note", style="dim")

    for row in self.get_json():
      table.add_row(row["function"], row["strategy"], row["replacement"], row["status"], row["note"])

    console.print(table)
