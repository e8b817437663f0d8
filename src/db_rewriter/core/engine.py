"""
Rewrite Engine.

Decides, for one call node, whether it targets a deprecated `db_*` function
and produces the replacement.

Pipeline for a candidate call:

1.  **Callee Resolution**: Only calls whose callee is a static `Name` are
    considered. `$fn(...)` and other computed callees are never rewritten.
2.  **Catalog Lookup**: Unknown names (the common case) pass through.
3.  **Dispatch**: Custom-handled names go to their registered handler; all
    others to the uniform strategy of their catalog entry.

The engine does not mutate the call it is given and returns block edits as
data (`StatementRewrite`) for the driver to apply. Its only state is the
temporary variable counter of its `RewriteContext`, which the driver resets
at every statement boundary.
"""

import logging
from typing import Optional

from db_rewriter import catalog
from db_rewriter.config import RuntimeConfig
from db_rewriter.core.context import RewriteContext
from db_rewriter.core.custom import get_custom_handler
from db_rewriter.core.results import Replacement, RewriteResult, StatementRewrite, Unchanged
from db_rewriter.core.strategies import STRATEGIES
from db_rewriter.core.tracer import TraceLogger
from db_rewriter.enums import RewriteStrategy
from db_rewriter.php.nodes import FuncCall, Name

logger = logging.getLogger(__name__)


def resolve_callee(node: FuncCall) -> Optional[str]:
  """
  Returns the static callee name of a call, or None for dynamic callees.
  """
  if isinstance(node.name, Name):
    return str(node.name)
  return None


class RewriteEngine:
  """
  Rewrites single call expressions using the catalog.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None, tracer: Optional[TraceLogger] = None):
    """
    Initializes the Engine.

    Args:
        config (RuntimeConfig, optional): Emitted names and skip list. Defaults apply if None.
        tracer (TraceLogger, optional): Event sink. Defaults to the global tracer.
    """
    self.config = config or RuntimeConfig()
    self.ctx = RewriteContext(self.config, tracer)
    self._skipped = frozenset(self.config.skip_functions)

  @property
  def tracer(self) -> TraceLogger:
    return self.ctx.tracer

  def rewrite(self, node: FuncCall) -> RewriteResult:
    """
    Rewrites one call.

    Args:
        node (FuncCall): The candidate call. It is not modified.

    Returns:
        RewriteResult: `Replacement`, `StatementRewrite` or `Unchanged`.
    """
    name = resolve_callee(node)
    if name is None:
      return Unchanged(node, "dynamic callee")

    entry = catalog.lookup(name)
    if entry is None:
      return Unchanged(node, "not a deprecated function")

    if name in self._skipped:
      self.tracer.log_decline(name, node.to_text(), "listed in skip_functions")
      return Unchanged(node, "listed in skip_functions")

    self.tracer.log_match(name, entry.strategy.value)

    if entry.strategy == RewriteStrategy.INJECTED_SERVICE and catalog.is_custom_handling(name):
      handler = get_custom_handler(name)
      if handler is None:
        logger.debug("%s needs custom handling that is not implemented", name)
        self.tracer.log_warning(f"Custom handling for {name} is not implemented; call left unchanged", name)
        return Unchanged(node, "custom handling not implemented")
      result = handler(node, entry, self.ctx)
    else:
      result = STRATEGIES[entry.strategy](node, entry, self.ctx)

    self._trace_result(name, node, result)
    return result

  def _trace_result(self, name: str, node: FuncCall, result: RewriteResult) -> None:
    before = node.to_text()
    if isinstance(result, Replacement):
      self.tracer.log_rewrite(name, before, result.node.to_text(), result.route)
    elif isinstance(result, StatementRewrite):
      after = "\n".join(s.to_text() for s in result.inserted)
      self.tracer.log_rewrite(name, before, after, result.route)
    else:
      self.tracer.log_decline(name, before, result.reason)


def rewrite_call(node: FuncCall, config: Optional[RuntimeConfig] = None) -> RewriteResult:
  """
  Convenience wrapper: rewrites one call with a throwaway engine.

  Args:
      node (FuncCall): The candidate call.
      config (RuntimeConfig, optional): Runtime configuration.

  Returns:
      RewriteResult: The engine's decision.
  """
  return RewriteEngine(config).rewrite(node)
