"""
Core rewrite machinery: engine, strategies, option helpers and the statement driver.
"""

from db_rewriter.core.driver import DriverResult, StatementRewriter, apply_edit_script, rewrite_block
from db_rewriter.core.engine import RewriteEngine, resolve_callee, rewrite_call
from db_rewriter.core.results import (
  DeleteOriginal,
  InsertAfter,
  Replacement,
  RewriteResult,
  StatementRewrite,
  Unchanged,
)

__all__ = [
  "DeleteOriginal",
  "DriverResult",
  "InsertAfter",
  "Replacement",
  "RewriteEngine",
  "RewriteResult",
  "StatementRewrite",
  "StatementRewriter",
  "Unchanged",
  "apply_edit_script",
  "resolve_callee",
  "rewrite_block",
  "rewrite_call",
]
