"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Call construction helpers.
- Global tracer and handler registry isolation.
"""

import sys
from pathlib import Path
from typing import Callable

import pytest

# Add src to path so we can import 'db_rewriter' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from db_rewriter.config import RuntimeConfig  # noqa: E402
from db_rewriter.core.custom import clear_handlers, load_handlers  # noqa: E402
from db_rewriter.core.tracer import reset_tracer  # noqa: E402
from db_rewriter.php.nodes import Arg, Array_, ArrayItem, FuncCall, Name, String_, Variable  # noqa: E402


@pytest.fixture(autouse=True)
def clean_state():
  """Fresh tracer per test; handlers loaded as in production."""
  reset_tracer()
  clear_handlers()
  load_handlers()
  yield
  reset_tracer()


@pytest.fixture
def config() -> RuntimeConfig:
  return RuntimeConfig()


@pytest.fixture
def make_call() -> Callable[..., FuncCall]:
  """
  Factory for call nodes. Strings become variables (`"table"` -> `$table`),
  nodes are used as is.

  Example: make_call("db_delete", "table", options_array("replica"))
  """

  def _make(name: str, *values) -> FuncCall:
    args = []
    for v in values:
      if isinstance(v, str):
        args.append(Arg(Variable(v)))
      elif isinstance(v, Arg):
        args.append(v)
      else:
        args.append(Arg(v))
    return FuncCall(Name(name), args)

  return _make


@pytest.fixture
def options_array() -> Callable[..., Array_]:
  """Factory for `['target' => '<target>', ...]` literals; `None` omits the target key."""

  def _make(target=None, **extra) -> Array_:
    items = [ArrayItem(String_(str(v)), String_(k)) for k, v in extra.items()]
    if target is not None:
      items.append(ArrayItem(String_(target), String_("target")))
    return Array_(items)

  return _make
