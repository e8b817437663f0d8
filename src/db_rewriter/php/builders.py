"""
Construction helpers for PHP nodes.

Short factories used by the rewrite strategies so that generated trees read
close to the PHP they produce, e.g.
``method_call(static_call("Drupal", "service", [string("database")]), "schema")``.
"""

from typing import Iterable, List, Optional, Sequence, Union

from db_rewriter.php.nodes import (
  Arg,
  ArrayDimFetch,
  Expr,
  Identifier,
  MethodCall,
  Name,
  New_,
  StaticCall,
  String_,
  Variable,
)

ArgLike = Union[Arg, Expr]


def fully_qualified(name: str) -> Name:
  """
  Creates a fully qualified class name.

  Example: "Drupal\\Core\\Database\\Database" -> `\\Drupal\\Core\\Database\\Database`

  Args:
      name (str): Backslash separated class path, with or without leading backslash.

  Returns:
      Name: The name node.
  """
  return Name(name, fully_qualified=True)


def string(value: str) -> String_:
  return String_(value)


def var(name: str) -> Variable:
  return Variable(name.lstrip("$"))


def args_of(values: Iterable[ArgLike]) -> List[Arg]:
  """Wraps bare expressions into `Arg` nodes; existing `Arg` nodes pass through."""
  return [v if isinstance(v, Arg) else Arg(v) for v in values]


def static_call(class_name: str, method: str, args: Optional[Sequence[ArgLike]] = None) -> StaticCall:
  return StaticCall(fully_qualified(class_name), Identifier(method), args_of(args or []))


def method_call(receiver: Expr, method: str, args: Optional[Sequence[ArgLike]] = None) -> MethodCall:
  return MethodCall(receiver, Identifier(method), args_of(args or []))


def new(class_name: str, args: Optional[Sequence[ArgLike]] = None) -> New_:
  return New_(fully_qualified(class_name), args_of(args or []))


def dim_fetch(variable: str, key: str) -> ArrayDimFetch:
  """Builds `$variable['key']`."""
  return ArrayDimFetch(var(variable), String_(key))
