"""
Custom Handler Registry and Loader.

Catalog entries flagged as "custom handling" need argument-aware rewriting
instead of the uniform method-chain substitution. Their implementations live
in the `db_rewriter.handlers` package and register themselves by legacy
function name:

.. code-block:: python

    @register_custom_handler("db_delete")
    def rewrite_delete(node, entry, ctx):
        ...

A custom-handled name without a registered handler is left unchanged by the
engine.
"""

import importlib
import logging
import pkgutil
import sys
from typing import Callable, Dict, List, Optional

from db_rewriter.catalog import CatalogEntry
from db_rewriter.core.context import RewriteContext
from db_rewriter.core.results import RewriteResult
from db_rewriter.php.nodes import FuncCall

logger = logging.getLogger(__name__)

HandlerFunction = Callable[[FuncCall, CatalogEntry, RewriteContext], RewriteResult]

_HANDLERS: Dict[str, HandlerFunction] = {}
_HANDLERS_LOADED = False


def register_custom_handler(name: str) -> Callable[[HandlerFunction], HandlerFunction]:
  """
  Decorator registering a function as the custom rewrite for a legacy name.

  Args:
      name: Legacy function name (e.g. "db_delete").
  """

  def decorator(func: HandlerFunction) -> HandlerFunction:
    _HANDLERS[name] = func
    return func

  return decorator


def get_custom_handler(name: str) -> Optional[HandlerFunction]:
  """
  Retrieves the handler registered for `name`.
  Lazily imports the built-in handlers package on first use.
  """
  if not _HANDLERS_LOADED:
    load_handlers()
  return _HANDLERS.get(name)


def registered_names() -> List[str]:
  """Names with an implemented custom handler, sorted."""
  if not _HANDLERS_LOADED:
    load_handlers()
  return sorted(_HANDLERS)


def clear_handlers() -> None:
  """Resets the registry. Primarily for testing."""
  global _HANDLERS_LOADED
  _HANDLERS.clear()
  _HANDLERS_LOADED = False


def load_handlers() -> int:
  """
  Imports every module of the built-in `db_rewriter.handlers` package.

  Modules imported earlier are reloaded so their decorators run again after
  `clear_handlers()`.

  Returns:
      int: Number of registered handlers.
  """
  global _HANDLERS_LOADED
  package = importlib.import_module("db_rewriter.handlers")

  for _, module_name, _ in pkgutil.iter_modules(package.__path__):
    if module_name.startswith("_"):
      continue
    full_name = f"{package.__name__}.{module_name}"
    if full_name in sys.modules:
      importlib.reload(sys.modules[full_name])
    else:
      importlib.import_module(full_name)

  _HANDLERS_LOADED = True
  logger.debug("Loaded %d custom handlers", len(_HANDLERS))
  return len(_HANDLERS)
