"""
Uniform rewrite strategies.

One function per `RewriteStrategy`. Each receives the call, its catalog entry
and the `RewriteContext`, and returns a `RewriteResult`. Argument-aware logic
for custom-handled names lives in `db_rewriter.handlers`.
"""

import logging
from typing import Callable, Dict

from db_rewriter.catalog import CatalogEntry
from db_rewriter.core.context import RewriteContext
from db_rewriter.core.options import NoInformation, find_options_argument, get_target_from_options
from db_rewriter.core.results import Replacement, RewriteResult, Unchanged
from db_rewriter.enums import RewriteStrategy
from db_rewriter.php.builders import string
from db_rewriter.php.nodes import FuncCall

logger = logging.getLogger(__name__)

StrategyFunction = Callable[[FuncCall, CatalogEntry, RewriteContext], RewriteResult]


def rewrite_injected_service(node: FuncCall, entry: CatalogEntry, ctx: RewriteContext) -> RewriteResult:
  """
  `db_add_field($t, $f, $spec)` -> `\\Drupal::service('database')->schema()->addField($t, $f, $spec)`.
  """
  return Replacement(ctx.fold_methods(ctx.default_service(), entry.methods, list(node.args)))


def rewrite_close_connection(node: FuncCall, entry: CatalogEntry, ctx: RewriteContext) -> RewriteResult:
  """
  `db_close()` -> `Database::closeConnection()`
  `db_close(['target' => 'replica'])` -> `Database::closeConnection('replica')`

  An opaque options argument is left unchanged. A named `options:` argument
  is found wherever it sits.
  """
  index = find_options_argument(node.args, 0)
  if index is None:
    if node.args:
      logger.debug("%s: no options argument among named arguments", entry.name)
      return Unchanged(node, "no options argument")
    return Replacement(ctx.database_call("closeConnection"))

  target = get_target_from_options(node.args[index].value)
  if isinstance(target, NoInformation):
    logger.debug("%s: options argument is not a literal array", entry.name)
    return Unchanged(node, "options argument is not a literal array")

  return Replacement(ctx.database_call("closeConnection", [target.as_argument()]))


def rewrite_condition(node: FuncCall, entry: CatalogEntry, ctx: RewriteContext) -> RewriteResult:
  """
  `db_and()` -> `new Condition('AND')`; the call's own arguments are dropped.
  `db_condition($conjunction)` -> `new Condition($conjunction)`.
  """
  if entry.parameter:
    return Replacement(ctx.new_condition([string(entry.parameter)]))
  return Replacement(ctx.new_condition(list(node.args)))


def rewrite_set_active_connection(node: FuncCall, entry: CatalogEntry, ctx: RewriteContext) -> RewriteResult:
  """`db_set_active($key)` -> `Database::setActiveConnection($key)`."""
  return Replacement(ctx.database_call("setActiveConnection", list(node.args)))


STRATEGIES: Dict[RewriteStrategy, StrategyFunction] = {
  RewriteStrategy.INJECTED_SERVICE: rewrite_injected_service,
  RewriteStrategy.CLOSE_CONNECTION: rewrite_close_connection,
  RewriteStrategy.CONDITION: rewrite_condition,
  RewriteStrategy.SET_ACTIVE_CONNECTION: rewrite_set_active_connection,
}
