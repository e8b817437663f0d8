"""
Option-target helpers.

Legacy `db_*` functions take an `$options` array whose `target` key selects
the database connection. These helpers read and rewrite that key when the
argument is a literal array, and refuse to guess when it is anything else
(a variable, a call result...).
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

from db_rewriter.php.nodes import Arg, Array_, ConstFetch, Expr, Name, String_

TARGET_KEY = "target"
OPTIONS_PARAMETER = "options"


@dataclass(frozen=True)
class ConcreteTarget:
  """The options array has a `target` entry; `value` is its expression."""

  value: Expr

  def as_argument(self) -> Expr:
    """The target expression itself, e.g. `'replica'`."""
    return self.value


@dataclass(frozen=True)
class NullTarget:
  """The options array has no `target` entry: the default connection applies."""

  def as_argument(self) -> Expr:
    """`NULL`, which selects the default target."""
    return ConstFetch(Name("NULL"))


@dataclass(frozen=True)
class NoInformation:
  """The options argument is opaque; its target cannot be known statically."""

  pass


TargetLookup = Union[ConcreteTarget, NullTarget, NoInformation]


def _is_target_key(key) -> bool:
  return isinstance(key, String_) and key.value == TARGET_KEY


def get_target_from_options(arg: Expr) -> TargetLookup:
  """
  Reads the `target` entry of an options argument.

  All items are scanned; with duplicate `target` keys the last one wins.

  Args:
      arg (Expr): The value expression of the options argument.

  Returns:
      TargetLookup: `ConcreteTarget` if a `target` key exists, `NullTarget` for a
      literal array without one, `NoInformation` for non-literal expressions.
  """
  if not isinstance(arg, Array_):
    return NoInformation()

  target: TargetLookup = NullTarget()
  for item in arg.items:
    if _is_target_key(item.key):
      target = ConcreteTarget(item.value)
  return target


def set_target_in_options(arg: Expr, target: str) -> Expr:
  """
  Forces every `target` entry of a literal options array to `target`, in place.

  Arrays without a `target` key and non-array expressions are returned untouched.

  Args:
      arg (Expr): The options expression.
      target (str): Connection target to write.

  Returns:
      Expr: The same `arg` object.
  """
  if isinstance(arg, Array_):
    for item in arg.items:
      if _is_target_key(item.key):
        item.value = String_(target)
  return arg


def find_options_argument(args: Sequence[Arg], position: int) -> Optional[int]:
  """
  Locates the `$options` argument of a legacy call.

  A positional argument at `position` is the options array. Once named
  arguments appear, only one called `options` qualifies, wherever it sits.

  Args:
      args (Sequence[Arg]): The call's arguments.
      position (int): Index of `$options` in the legacy signature.

  Returns:
      Optional[int]: Index into `args`, or None when the call passes no options.
  """
  if position < len(args) and args[position].name is None:
    return position
  for i, arg in enumerate(args):
    if arg.name is not None and arg.name.name == OPTIONS_PARAMETER:
      return i
  return None
