"""
Rewrite Context.

Context object passed to strategies and custom handlers. It turns the
configured class and service names into the expressions every rewrite is
built from, so handlers never hardcode `\\Drupal` or the database class.
"""

from typing import List, Optional, Sequence

from db_rewriter.config import RuntimeConfig
from db_rewriter.core.tracer import TraceLogger, get_tracer
from db_rewriter.php.builders import ArgLike, method_call, new, static_call, string
from db_rewriter.php.nodes import Arg, Expr, New_, StaticCall


class RewriteContext:
  """
  Configuration access, construction helpers and temporary variable allocation.
  """

  def __init__(self, config: RuntimeConfig, tracer: Optional[TraceLogger] = None):
    """
    Initializes the context.

    Args:
        config: Runtime configuration (emitted names, skip list).
        tracer: Event sink. Defaults to the global tracer.
    """
    self.config = config
    self.tracer = tracer or get_tracer()
    self._temporaries = 0

  def temporary_variable(self) -> str:
    """
    Claims a fresh temporary variable name.

    The first claim returns `options_variable`, later ones append a counter
    (`_db_options_2`, `_db_options_3`...). Claims accumulate until
    `reset_temporaries()`, so rewrites sharing one statement never share a
    variable.
    """
    self._temporaries += 1
    base = self.config.options_variable
    return base if self._temporaries == 1 else f"{base}_{self._temporaries}"

  def reset_temporaries(self) -> None:
    """Releases all temporaries. The driver calls this at every statement boundary."""
    self._temporaries = 0

  def default_service(self) -> StaticCall:
    """Builds `\\Drupal::service('database')`."""
    return static_call(self.config.container_class, "service", [string(self.config.service_name)])

  def database_call(self, method: str, args: Optional[Sequence[ArgLike]] = None) -> StaticCall:
    """Builds `\\Drupal\\Core\\Database\\Database::method(args)`."""
    return static_call(self.config.database_class, method, args)

  def get_connection(self, target: Expr) -> StaticCall:
    """Builds `Database::getConnection(target)`."""
    return self.database_call("getConnection", [target])

  def new_condition(self, args: Sequence[ArgLike]) -> New_:
    """Builds `new \\Drupal\\Core\\Database\\Query\\Condition(args)`."""
    return new(self.config.condition_class, args)

  @staticmethod
  def fold_methods(base: Expr, methods: Sequence[str], args: List[Arg]) -> Expr:
    """
    Chains `methods` onto `base`.

    Every method but the last is a plain accessor called without arguments;
    the last one receives `args`.

    Example:
        fold_methods(service, ["schema", "addField"], args)
        -> service->schema()->addField(args)

    Args:
        base: Receiver expression.
        methods: Ordered method names.
        args: Arguments of the final call.

    Returns:
        Expr: The chained call, or `base` when `methods` is empty.
    """
    node = base
    last = len(methods) - 1
    for i, name in enumerate(methods):
      node = method_call(node, name, args if i == last else None)
    return node
