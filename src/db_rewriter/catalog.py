"""
Rewrite Catalog (Hub of the Rule Set).

This module defines the static table of deprecated `db_*` procedural functions
and how each one is rewritten onto the object-oriented database API.

It defines:
1.  **Entries**: One `CatalogEntry` per legacy function name, carrying the
    rewrite strategy, the method chain to fold onto the service and an
    optional literal parameter.
2.  **Custom Handling**: The names for which the uniform method-chain rewrite
    is known to be incomplete and that need argument-aware logic.

The table is built once at import time and is read-only afterwards.
"""

from typing import Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from db_rewriter.enums import RewriteStrategy

DESCRIPTION = "Fixes deprecated db_* procedural function calls of the Database API layer"
CHANGE_RECORD = "https://www.drupal.org/node/2993033"


class CatalogEntry(BaseModel):
  """
  Static record describing how one legacy function is rewritten.
  """

  model_config = ConfigDict(frozen=True)

  name: str = Field(..., description="Legacy function name (e.g. 'db_delete').")
  strategy: RewriteStrategy = Field(..., description="The rewrite family.")
  methods: Tuple[str, ...] = Field(default=(), description="Method chain folded onto the service.")
  parameter: Optional[str] = Field(None, description="Literal argument replacing the original ones.")
  note: Optional[str] = Field(None, description="Migration remark shown by the CLI.")


_S = RewriteStrategy.INJECTED_SERVICE

_ENTRIES: List[CatalogEntry] = [
  # ============================================================================
  # 1. Schema operations: \Drupal::service('database')->schema()->op(...)
  # ============================================================================
  CatalogEntry(name="db_add_field", strategy=_S, methods=("schema", "addField")),
  CatalogEntry(name="db_add_index", strategy=_S, methods=("schema", "addIndex")),
  CatalogEntry(name="db_add_primary_key", strategy=_S, methods=("schema", "addPrimaryKey")),
  CatalogEntry(name="db_add_unique_key", strategy=_S, methods=("schema", "addUniqueKey")),
  CatalogEntry(name="db_change_field", strategy=_S, methods=("schema", "changeField")),
  CatalogEntry(name="db_create_table", strategy=_S, methods=("schema", "createTable")),
  CatalogEntry(name="db_drop_field", strategy=_S, methods=("schema", "dropField")),
  CatalogEntry(name="db_drop_index", strategy=_S, methods=("schema", "dropIndex")),
  CatalogEntry(name="db_drop_primary_key", strategy=_S, methods=("schema", "dropPrimaryKey")),
  CatalogEntry(name="db_drop_table", strategy=_S, methods=("schema", "dropTable")),
  CatalogEntry(name="db_drop_unique_key", strategy=_S, methods=("schema", "dropUniqueKey")),
  CatalogEntry(name="db_field_exists", strategy=_S, methods=("schema", "fieldExists")),
  CatalogEntry(name="db_field_names", strategy=_S, methods=("schema", "fieldNames")),
  CatalogEntry(
    name="db_field_set_default",
    strategy=_S,
    methods=("schema", "changeField"),
    note="Schema::fieldSetDefault() is itself deprecated, see https://www.drupal.org/node/2999035",
  ),
  CatalogEntry(
    name="db_field_set_no_default",
    strategy=_S,
    methods=("schema", "changeField"),
    note="Schema::fieldSetNoDefault() is itself deprecated, see https://www.drupal.org/node/2999035",
  ),
  CatalogEntry(name="db_find_tables", strategy=_S, methods=("schema", "findTables")),
  CatalogEntry(name="db_index_exists", strategy=_S, methods=("schema", "indexExists")),
  CatalogEntry(name="db_rename_table", strategy=_S, methods=("schema", "renameTable")),
  CatalogEntry(name="db_table_exists", strategy=_S, methods=("schema", "tableExists")),
  # ============================================================================
  # 2. Connection operations: \Drupal::service('database')->op(...)
  # ============================================================================
  CatalogEntry(
    name="db_delete",
    strategy=_S,
    methods=("delete",),
    note="Routes to Database::getConnection() when $options['target'] names another connection.",
  ),
  CatalogEntry(name="db_driver", strategy=_S, methods=("driver",)),
  CatalogEntry(name="db_escape_field", strategy=_S, methods=("escapeField",)),
  CatalogEntry(name="db_escape_table", strategy=_S, methods=("escapeTable",)),
  CatalogEntry(name="db_insert", strategy=_S, methods=("insert",), note="Options routing not handled yet."),
  CatalogEntry(name="db_like", strategy=_S, methods=("escapeLike",)),
  CatalogEntry(
    name="db_merge",
    strategy=_S,
    methods=("merge",),
    note="Options routing not handled yet, see https://www.drupal.org/node/2947775",
  ),
  CatalogEntry(name="db_next_id", strategy=_S, methods=("nextId",)),
  CatalogEntry(name="db_query", strategy=_S, methods=("query",), note="Options routing not handled yet."),
  CatalogEntry(name="db_query_range", strategy=_S, methods=("queryRange",), note="Options routing not handled yet."),
  CatalogEntry(
    name="db_query_temporary", strategy=_S, methods=("queryTemporary",), note="Options routing not handled yet."
  ),
  CatalogEntry(name="db_select", strategy=_S, methods=("select",), note="Options routing not handled yet."),
  CatalogEntry(
    name="db_transaction", strategy=_S, methods=("startTransaction",), note="Options routing not handled yet."
  ),
  CatalogEntry(name="db_truncate", strategy=_S, methods=("truncate",), note="Options routing not handled yet."),
  CatalogEntry(name="db_update", strategy=_S, methods=("update",), note="Options routing not handled yet."),
  # ============================================================================
  # 3. Condition constructors: new Condition(...)
  # ============================================================================
  CatalogEntry(name="db_and", strategy=RewriteStrategy.CONDITION, parameter="AND"),
  CatalogEntry(name="db_condition", strategy=RewriteStrategy.CONDITION),
  CatalogEntry(name="db_or", strategy=RewriteStrategy.CONDITION, parameter="OR"),
  CatalogEntry(name="db_xor", strategy=RewriteStrategy.CONDITION, parameter="XOR"),
  # ============================================================================
  # 4. Connection lifecycle: Database::...
  # ============================================================================
  CatalogEntry(name="db_close", strategy=RewriteStrategy.CLOSE_CONNECTION),
  CatalogEntry(name="db_set_active", strategy=RewriteStrategy.SET_ACTIVE_CONNECTION),
]

CATALOG: Dict[str, CatalogEntry] = {entry.name: entry for entry in _ENTRIES}

if len(CATALOG) != len(_ENTRIES):
  raise ValueError("Duplicate catalog entry names")

CUSTOM_HANDLING: FrozenSet[str] = frozenset(
  {
    "db_delete",
    "db_field_set_default",
    "db_field_set_no_default",
    "db_insert",
    "db_merge",
    "db_query",
    "db_query_range",
    "db_query_temporary",
    "db_select",
    "db_transaction",
    "db_truncate",
    "db_update",
  }
)


def lookup(name: str) -> Optional[CatalogEntry]:
  """
  Retrieves the catalog entry for a legacy function name.

  Args:
      name (str): The callee name as written (case-sensitive).

  Returns:
      Optional[CatalogEntry]: The entry, or None if the name is not deprecated.
  """
  return CATALOG.get(name)


def is_custom_handling(name: str) -> bool:
  """Returns True if the name needs argument-aware rewriting."""
  return name in CUSTOM_HANDLING


def entries(strategy: Optional[RewriteStrategy] = None) -> List[CatalogEntry]:
  """
  Lists catalog entries sorted by name.

  Args:
      strategy (Optional[RewriteStrategy]): If set, only entries of this strategy.

  Returns:
      List[CatalogEntry]: Matching entries.
  """
  return [CATALOG[k] for k in sorted(CATALOG) if strategy is None or CATALOG[k].strategy == strategy]
