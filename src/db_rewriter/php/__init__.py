"""
PHP node model consumed and produced by the rewrite engine.
"""

from db_rewriter.php.nodes import (
  Arg,
  Array_,
  ArrayDimFetch,
  ArrayItem,
  Assign,
  BooleanOr,
  ConstFetch,
  Empty_,
  Equal,
  Expr,
  Expression,
  FuncCall,
  Identifier,
  If_,
  LNumber,
  MethodCall,
  Name,
  New_,
  PhpNode,
  Return_,
  StaticCall,
  Stmt,
  String_,
  Variable,
  render_block,
)

__all__ = [
  "Arg",
  "Array_",
  "ArrayDimFetch",
  "ArrayItem",
  "Assign",
  "BooleanOr",
  "ConstFetch",
  "Empty_",
  "Equal",
  "Expr",
  "Expression",
  "FuncCall",
  "Identifier",
  "If_",
  "LNumber",
  "MethodCall",
  "Name",
  "New_",
  "PhpNode",
  "Return_",
  "StaticCall",
  "Stmt",
  "String_",
  "Variable",
  "render_block",
]
