"""
Statement Driver.

A thin stand-in for the host tool's tree walk. It visits every statement of a
block, offers each `FuncCall` (innermost first) to the `RewriteEngine` and
applies the result:

- `Replacement`: the call is substituted in place.
- `Unchanged`: nothing happens.
- `StatementRewrite`: the edit script is applied to the enclosing block. The
  statement carrying the rewritten call is the original statement with the
  call substituted, so a call embedded in an assignment or condition keeps
  its surroundings. Inserted statements are not revisited.

Temporary variables are allocated per statement, so several rewrites inside
one statement get distinct names. Every nested `if` body is traced as its
own block.
"""

import dataclasses
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from db_rewriter import catalog
from db_rewriter.config import RuntimeConfig
from db_rewriter.core.engine import RewriteEngine, resolve_callee
from db_rewriter.core.results import DeleteOriginal, EditOp, InsertAfter, Replacement, StatementRewrite
from db_rewriter.core.tracer import get_tracer, reset_tracer
from db_rewriter.php.nodes import FuncCall, If_, PhpNode, Stmt, render_block


def apply_edit_script(block: Sequence[Stmt], index: int, edits: Sequence[EditOp]) -> List[Stmt]:
  """
  Applies an edit script to the statement at `block[index]`.

  Inserted statements follow the original in script order; `DeleteOriginal`
  then removes the original.

  Args:
      block: The enclosing statement list (not modified).
      index: Position of the statement the script refers to.
      edits: Ordered edit operations.

  Returns:
      List[Stmt]: The edited block.
  """
  inserts = [op.statement for op in edits if isinstance(op, InsertAfter)]
  delete = any(isinstance(op, DeleteOriginal) for op in edits)
  keep_until = index if delete else index + 1
  return [*block[:keep_until], *inserts, *block[index + 1 :]]


class DriverResult(BaseModel):
  """
  Structured result of rewriting one block.
  """

  model_config = ConfigDict(arbitrary_types_allowed=True)

  statements: List[Any] = Field(default_factory=list, description="The rewritten statements.")
  replaced: int = Field(default=0, description="Calls substituted by a replacement expression.")
  statement_rewrites: int = Field(default=0, description="Calls that required block edits.")
  skipped: int = Field(default=0, description="Deprecated calls deliberately left unchanged.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Rewrite trace log.")

  @property
  def code(self) -> str:
    """PHP source of the rewritten block."""
    return render_block(self.statements)

  @property
  def changed(self) -> bool:
    return (self.replaced + self.statement_rewrites) > 0


class StatementRewriter:
  """
  Walks statement blocks and applies engine results.
  """

  def __init__(self, engine: Optional[RewriteEngine] = None):
    self.engine = engine or RewriteEngine()
    self.replaced = 0
    self.statement_rewrites = 0
    self.skipped = 0

  def rewrite_statements(self, stmts: Sequence[Stmt]) -> List[Stmt]:
    """
    Rewrites a block of statements.

    Args:
        stmts: The block. Neither the list nor its nodes are modified.

    Returns:
        List[Stmt]: The rewritten block.
    """
    block = list(stmts)
    i = 0
    while i < len(block):
      pending: List[StatementRewrite] = []
      self.engine.ctx.reset_temporaries()
      new_stmt = self._rewrite_statement(block[i], pending)

      if not pending:
        block[i] = new_stmt
        i += 1
        continue

      edits: List[EditOp] = [InsertAfter(s) for rewrite in pending for s in rewrite.prelude]
      edits.append(InsertAfter(new_stmt))
      edits.append(DeleteOriginal())
      block = apply_edit_script(block, i, edits)
      # Continue after the inserted statements.
      i += len(edits) - 1

    return block

  def _rewrite_statement(self, stmt: Stmt, pending: List[StatementRewrite]) -> Stmt:
    if isinstance(stmt, If_):
      cond = self._transform(stmt.cond, pending)
      tracer = self.engine.tracer
      tracer.open_block("if body", len(stmt.stmts))
      body = self.rewrite_statements(stmt.stmts)
      tracer.close_block()
      if cond is stmt.cond and all(a is b for a, b in zip(body, stmt.stmts)) and len(body) == len(stmt.stmts):
        return stmt
      return dataclasses.replace(stmt, cond=cond, stmts=body)
    return self._transform(stmt, pending)

  def _transform(self, node: Any, pending: List[StatementRewrite]) -> Any:
    """Post-order rebuild of `node`; children are rewritten before their parent call."""
    if not isinstance(node, PhpNode):
      return node

    changes = {}
    for f in dataclasses.fields(node):
      value = getattr(node, f.name)
      if isinstance(value, PhpNode):
        new_value = self._transform(value, pending)
      elif isinstance(value, list):
        new_items = [self._transform(v, pending) for v in value]
        new_value = value if all(a is b for a, b in zip(new_items, value)) else new_items
      else:
        continue
      if new_value is not value:
        changes[f.name] = new_value

    if changes:
      node = dataclasses.replace(node, **changes)

    if isinstance(node, FuncCall):
      return self._apply(node, pending)
    return node

  def _apply(self, node: FuncCall, pending: List[StatementRewrite]) -> Any:
    result = self.engine.rewrite(node)

    if isinstance(result, Replacement):
      self.replaced += 1
      return result.node

    if isinstance(result, StatementRewrite):
      self.statement_rewrites += 1
      pending.append(result)
      return result.call

    name = resolve_callee(node)
    if name is not None and catalog.lookup(name) is not None:
      self.skipped += 1
    return node


def rewrite_block(stmts: Sequence[Stmt], config: Optional[RuntimeConfig] = None) -> DriverResult:
  """
  Rewrites every deprecated call in a block of statements.

  Resets the global tracer so the returned events cover this run only.

  Args:
      stmts: The statements to rewrite.
      config: Runtime configuration. Defaults apply if None.

  Returns:
      DriverResult: Rewritten statements, counters and trace events.
  """
  reset_tracer()
  tracer = get_tracer()
  tracer.open_block("Rewrite Block", len(stmts))

  rewriter = StatementRewriter(RewriteEngine(config, tracer))
  statements = rewriter.rewrite_statements(stmts)

  tracer.close_block()
  return DriverResult(
    statements=statements,
    replaced=rewriter.replaced,
    statement_rewrites=rewriter.statement_rewrites,
    skipped=rewriter.skipped,
    trace_events=tracer.export(),
  )
