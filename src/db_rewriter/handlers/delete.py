"""
Handler for `db_delete()`.

`db_delete($table, $options)` used the `target` entry of `$options` to pick a
connection, folding `replica` back onto the default one. The rewrite keeps
that routing:

- No options, or a literal target of 'default' / 'replica' / none:
  `\\Drupal::service('database')->delete(...)` with the target forced to 'default'.
- Any other literal target:
  `\\Drupal\\Core\\Database\\Database::getConnection('<target>')->delete(...)`.
- Options the engine cannot read statically: the routing is spelled out as
  statements around a temporary variable::

    $_db_options = <options>;
    if (empty($_db_options['target']) || $_db_options['target'] == 'replica') {
      $_db_options['target'] = 'default';
    }
    \\Drupal\\Core\\Database\\Database::getConnection($_db_options['target'])->delete($table, $_db_options);

  Each such rewrite within one statement gets its own variable
  (`$_db_options_2`, ...).

`$options` may also be passed as a named argument (`options: [...]`).

See https://api.drupal.org/api/drupal/core%21includes%21database.inc/function/db_delete/8.7.x
"""

import copy
import logging

from db_rewriter.catalog import CatalogEntry
from db_rewriter.core.context import RewriteContext
from db_rewriter.core.custom import register_custom_handler
from db_rewriter.core.options import (
  ConcreteTarget,
  NullTarget,
  find_options_argument,
  get_target_from_options,
  set_target_in_options,
)
from db_rewriter.core.results import (
  DeleteOriginal,
  InsertAfter,
  Replacement,
  RewriteResult,
  StatementRewrite,
)
from db_rewriter.php.builders import dim_fetch, string, var
from db_rewriter.php.nodes import Arg, Assign, BooleanOr, Empty_, Equal, Expression, FuncCall, If_, String_

logger = logging.getLogger(__name__)

OPTIONS_POSITION = 1


def _routes_to_default(target, ctx: RewriteContext) -> bool:
  if isinstance(target, NullTarget):
    return True
  return (
    isinstance(target, ConcreteTarget)
    and isinstance(target.value, String_)
    and target.value.value in (ctx.config.default_target, ctx.config.replica_target)
  )


@register_custom_handler("db_delete")
def rewrite_delete(node: FuncCall, entry: CatalogEntry, ctx: RewriteContext) -> RewriteResult:
  """
  Rewrites `db_delete()` according to the connection target in `$options`.
  """
  index = find_options_argument(node.args, OPTIONS_POSITION)
  if index is None:
    return Replacement(ctx.fold_methods(ctx.default_service(), entry.methods, list(node.args)), route="default")

  # Work on a copy; the option mutator edits arrays in place.
  args = copy.deepcopy(node.args)
  options = args[index]
  target = get_target_from_options(options.value)

  if _routes_to_default(target, ctx):
    options.value = set_target_in_options(options.value, ctx.config.default_target)
    return Replacement(ctx.fold_methods(ctx.default_service(), entry.methods, args), route="default")

  if isinstance(target, ConcreteTarget) and isinstance(target.value, String_):
    return Replacement(ctx.fold_methods(ctx.get_connection(target.value), entry.methods, args), route="getConnection")

  logger.debug("db_delete: target of %s is not static, routing at runtime", options.value.to_text())
  return _rewrite_with_options_variable(args, index, entry, ctx)


def _rewrite_with_options_variable(args, index: int, entry: CatalogEntry, ctx: RewriteContext) -> StatementRewrite:
  cfg = ctx.config
  name = ctx.temporary_variable()
  options = args[index]

  store = Expression(Assign(var(name), options.value))
  normalize = If_(
    BooleanOr(
      Empty_(dim_fetch(name, "target")),
      Equal(dim_fetch(name, "target"), string(cfg.replica_target)),
    ),
    [Expression(Assign(dim_fetch(name, "target"), string(cfg.default_target)))],
  )

  call_args = list(args)
  call_args[index] = Arg(var(name), name=options.name)
  call = ctx.fold_methods(ctx.get_connection(dim_fetch(name, "target")), entry.methods, call_args)

  return StatementRewrite(
    edits=(
      InsertAfter(store),
      InsertAfter(normalize),
      InsertAfter(Expression(call)),
      DeleteOriginal(),
    ),
    call=call,
    route="runtime",
  )
