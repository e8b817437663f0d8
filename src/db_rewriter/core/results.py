"""
Data structures representing the outcome of rewriting one call.

A rewrite either substitutes an expression (`Replacement`), declines
(`Unchanged`), or edits the enclosing block (`StatementRewrite`). Block edits
are expressed as an ordered edit script that the driver applies, so the
engine itself never touches the surrounding tree.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from db_rewriter.php.nodes import Expr, Expression, Stmt


@dataclass(frozen=True)
class InsertAfter:
  """Insert `statement` after the statement holding the call (after earlier inserts)."""

  statement: Stmt


@dataclass(frozen=True)
class DeleteOriginal:
  """Remove the statement holding the call. Always the last operation of a script."""

  pass


EditOp = Union[InsertAfter, DeleteOriginal]


@dataclass(frozen=True)
class Unchanged:
  """
  The call is left as is.

  Attributes:
      node: The original call node.
      reason: Why the engine declined (unknown name, opaque options, ...).
  """

  node: Expr
  reason: str = ""


@dataclass(frozen=True)
class Replacement:
  """
  The call is substituted in place by `node`.

  Attributes:
      node: The replacement expression.
      route: Which rewrite path produced it, for tracing (e.g. "getConnection").
  """

  node: Expr
  route: str = ""


@dataclass(frozen=True)
class StatementRewrite:
  """
  The statement holding the call is replaced by new statements.

  Attributes:
      edits: Ordered edit script: inserts in program order, then `DeleteOriginal`.
      call: The rewritten call expression, carried by the last inserted statement.
      route: Which rewrite path produced it, for tracing.
  """

  edits: Tuple[EditOp, ...]
  call: Expr
  route: str = ""

  def __post_init__(self) -> None:
    if not self.edits or not isinstance(self.edits[-1], DeleteOriginal):
      raise ValueError("Statement rewrites must end with DeleteOriginal")

  @property
  def inserted(self) -> Tuple[Stmt, ...]:
    """Statements to insert, in program order."""
    return tuple(op.statement for op in self.edits if isinstance(op, InsertAfter))

  @property
  def prelude(self) -> Tuple[Stmt, ...]:
    """Inserted statements other than the one carrying the rewritten call."""
    return tuple(s for s in self.inserted if not (isinstance(s, Expression) and s.expr is self.call))


RewriteResult = Union[Unchanged, Replacement, StatementRewrite]

__all__ = [
  "DeleteOriginal",
  "EditOp",
  "InsertAfter",
  "Replacement",
  "RewriteResult",
  "StatementRewrite",
  "Unchanged",
]
