"""
PHP Syntax Tree Nodes.

This module defines the subset of the PHP syntax tree that the rewrite engine
reads and produces. It mirrors the node vocabulary of the usual PHP parsers
(``FuncCall``, ``StaticCall``, ``Array_``...) so that a host tool can map its
own tree onto these classes without a translation table.

Each node owns its string representation via a `to_text()` method. The output
is valid PHP for the node itself; it is a node printer, not a file formatter.

Structure:
    - Names: `Name`, `Identifier`
    - Expressions: literals, calls, array access, operators
    - Arguments: `Arg`, `ArrayItem`
    - Statements: `Expression`, `Return_`, `If_`
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Union

INDENT = "  "


@dataclass
class PhpNode(ABC):
  """Abstract base class for all PHP nodes."""

  @abstractmethod
  def to_text(self) -> str:
    """
    Render this node to PHP source.

    Returns:
        str: The PHP code for this construct.
    """
    pass


class Expr(PhpNode):
  """Marker base class for expression nodes."""

  pass


class Stmt(PhpNode):
  """Marker base class for statement nodes."""

  @abstractmethod
  def to_text(self, indent: int = 0) -> str:
    pass


# --- Names ---


@dataclass
class Name(PhpNode):
  """
  A static, possibly namespaced name (e.g. `db_delete`, `Drupal\\Core\\Database\\Database`).

  Attributes:
      value (str): The name without a leading backslash.
      fully_qualified (bool): If True, renders with a leading backslash.
  """

  value: str
  fully_qualified: bool = False

  def __post_init__(self) -> None:
    self.value = self.value.lstrip("\\")
    if not self.value:
      raise ValueError("Name requires a non-empty value")

  def __str__(self) -> str:
    return self.value

  def to_text(self) -> str:
    prefix = "\\" if self.fully_qualified else ""
    return f"{prefix}{self.value}"


@dataclass
class Identifier(PhpNode):
  """A bare identifier, used for method names."""

  name: str

  def __post_init__(self) -> None:
    if not self.name:
      raise ValueError("Identifier requires a non-empty name")

  def __str__(self) -> str:
    return self.name

  def to_text(self) -> str:
    return self.name


# --- Scalars & Variables ---


@dataclass
class Variable(Expr):
  """A variable reference (e.g. `$options`). `name` excludes the dollar sign."""

  name: str

  def to_text(self) -> str:
    return f"${self.name}"


@dataclass
class String_(Expr):
  """A string literal, rendered single-quoted."""

  value: str

  def to_text(self) -> str:
    escaped = self.value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


@dataclass
class LNumber(Expr):
  """An integer literal."""

  value: int

  def to_text(self) -> str:
    return str(self.value)


@dataclass
class ConstFetch(Expr):
  """A constant reference such as `NULL` or `TRUE`."""

  name: Name

  def to_text(self) -> str:
    return self.name.to_text()


# --- Arrays ---


@dataclass
class ArrayItem(PhpNode):
  """
  One entry of an array literal.

  Attributes:
      value (Expr): The entry value.
      key (Optional[Expr]): The entry key, or None for list-style entries.
  """

  value: Expr
  key: Optional[Expr] = None

  def to_text(self) -> str:
    if self.key is None:
      return self.value.to_text()
    return f"{self.key.to_text()} => {self.value.to_text()}"


@dataclass
class Array_(Expr):
  """An array literal, rendered with the short `[...]` syntax."""

  items: List[ArrayItem] = field(default_factory=list)

  def to_text(self) -> str:
    return "[" + ", ".join(item.to_text() for item in self.items) + "]"


# --- Calls ---


@dataclass
class Arg(PhpNode):
  """
  A call argument.

  Attributes:
      value (Expr): The argument expression.
      name (Optional[Identifier]): Named-argument key (`name: value`), if any.
  """

  value: Expr
  name: Optional[Identifier] = None

  def to_text(self) -> str:
    if self.name is not None:
      return f"{self.name.to_text()}: {self.value.to_text()}"
    return self.value.to_text()


def _render_args(args: List[Arg]) -> str:
  return "(" + ", ".join(a.to_text() for a in args) + ")"


@dataclass
class FuncCall(Expr):
  """
  A function call. `name` is a `Name` for static callees and any expression
  for dynamic ones (e.g. `$fn(...)`).
  """

  name: Union[Name, Expr]
  args: List[Arg] = field(default_factory=list)

  def to_text(self) -> str:
    return f"{self.name.to_text()}{_render_args(self.args)}"


@dataclass
class MethodCall(Expr):
  """An instance method call (`$var->name(...)`)."""

  var: Expr
  name: Identifier
  args: List[Arg] = field(default_factory=list)

  def to_text(self) -> str:
    return f"{self.var.to_text()}->{self.name.to_text()}{_render_args(self.args)}"


@dataclass
class StaticCall(Expr):
  """A static method call (`Class::name(...)`)."""

  class_: Name
  name: Identifier
  args: List[Arg] = field(default_factory=list)

  def to_text(self) -> str:
    return f"{self.class_.to_text()}::{self.name.to_text()}{_render_args(self.args)}"


@dataclass
class New_(Expr):
  """Object instantiation (`new Class(...)`)."""

  class_: Name
  args: List[Arg] = field(default_factory=list)

  def to_text(self) -> str:
    return f"new {self.class_.to_text()}{_render_args(self.args)}"


# --- Operators ---


@dataclass
class ArrayDimFetch(Expr):
  """Array element access (`$var['dim']`)."""

  var: Expr
  dim: Optional[Expr] = None

  def to_text(self) -> str:
    dim = self.dim.to_text() if self.dim is not None else ""
    return f"{self.var.to_text()}[{dim}]"


@dataclass
class Assign(Expr):
  """Assignment (`$var = expr`)."""

  var: Expr
  expr: Expr

  def to_text(self) -> str:
    return f"{self.var.to_text()} = {self.expr.to_text()}"


@dataclass
class Empty_(Expr):
  """The `empty(...)` language construct."""

  expr: Expr

  def to_text(self) -> str:
    return f"empty({self.expr.to_text()})"


@dataclass
class BooleanOr(Expr):
  """Logical or (`left || right`)."""

  left: Expr
  right: Expr

  def to_text(self) -> str:
    return f"{self.left.to_text()} || {self.right.to_text()}"


@dataclass
class Equal(Expr):
  """Loose equality (`left == right`)."""

  left: Expr
  right: Expr

  def to_text(self) -> str:
    return f"{self.left.to_text()} == {self.right.to_text()}"


# --- Statements ---


@dataclass
class Expression(Stmt):
  """An expression used as a statement. Renders with a trailing semicolon."""

  expr: Expr

  def to_text(self, indent: int = 0) -> str:
    return f"{INDENT * indent}{self.expr.to_text()};"


@dataclass
class Return_(Stmt):
  """A return statement."""

  expr: Optional[Expr] = None

  def to_text(self, indent: int = 0) -> str:
    if self.expr is None:
      return f"{INDENT * indent}return;"
    return f"{INDENT * indent}return {self.expr.to_text()};"


@dataclass
class If_(Stmt):
  """
  A conditional block without else branches.

  Format:
      if (cond) {
        stmts
      }
  """

  cond: Expr
  stmts: List[Stmt] = field(default_factory=list)

  def to_text(self, indent: int = 0) -> str:
    pad = INDENT * indent
    lines = [f"{pad}if ({self.cond.to_text()}) {{"]
    lines.extend(s.to_text(indent + 1) for s in self.stmts)
    lines.append(f"{pad}}}")
    return "\n".join(lines)


def render_block(stmts: List[Stmt], indent: int = 0) -> str:
  """
  Renders a list of statements, one per line.

  Args:
      stmts (List[Stmt]): The statements to print.
      indent (int): Nesting depth of the block.

  Returns:
      str: PHP source for the block.
  """
  return "\n".join(s.to_text(indent) for s in stmts)
