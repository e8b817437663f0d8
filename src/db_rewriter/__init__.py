"""
db-rewriter Package.

A rule-driven rewriter for the deprecated procedural `db_*` functions of the
Drupal database layer. Each call is mapped onto the object-oriented API
(`\\Drupal::service('database')`, `Database::getConnection()`, `new Condition()`).

Usage
-----

Single Call
^^^^^^^^^^^

.. code-block:: python

    from db_rewriter import rewrite_call
    from db_rewriter.php import Arg, FuncCall, Name, Variable

    call = FuncCall(Name("db_add_field"), [Arg(Variable("table")), Arg(Variable("field")), Arg(Variable("spec"))])
    result = rewrite_call(call)
    print(result.node.to_text())
    # \\Drupal::service('database')->schema()->addField($table, $field, $spec)

Statement Blocks
^^^^^^^^^^^^^^^^

.. code-block:: python

    from db_rewriter import rewrite_block

    res = rewrite_block(statements)
    print(res.code)
"""

from db_rewriter.config import RuntimeConfig
from db_rewriter.core.driver import DriverResult, rewrite_block
from db_rewriter.core.engine import RewriteEngine, rewrite_call
from db_rewriter.core.results import Replacement, StatementRewrite, Unchanged

__version__ = "0.1.0"

__all__ = [
  "DriverResult",
  "Replacement",
  "RewriteEngine",
  "RuntimeConfig",
  "StatementRewrite",
  "Unchanged",
  "__version__",
  "rewrite_block",
  "rewrite_call",
]
