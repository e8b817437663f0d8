"""
Enumerations for db-rewriter.

This module defines the closed set of rewrite strategies a catalog entry can
select.
"""

from enum import Enum


class RewriteStrategy(str, Enum):
  """
  Rewrite families for deprecated `db_*` functions.

  Values match the type tags of the legacy mapping table.
  """

  INJECTED_SERVICE = "injected_database"  # \Drupal::service('database')->...
  CLOSE_CONNECTION = "close_connection"  # Database::closeConnection(...)
  CONDITION = "condition"  # new Condition(...)
  SET_ACTIVE_CONNECTION = "set_active_connection"  # Database::setActiveConnection(...)
