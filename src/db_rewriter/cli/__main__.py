"""
Main Entry Point for the db-rewriter CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `db_rewriter.cli.commands`.
"""

import argparse
import sys
from typing import List, Optional

from db_rewriter import __version__
from db_rewriter.cli import commands
from db_rewriter.config import parse_cli_key_values
from db_rewriter.enums import RewriteStrategy


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="db-rewriter: Deprecated db_* call rewriter")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CATALOG ---
  cmd_cat = subparsers.add_parser("catalog", help="List deprecated functions and their rewrites")
  cmd_cat.add_argument(
    "--strategy",
    choices=[s.value for s in RewriteStrategy],
    default=None,
    help="Only list entries of this strategy",
  )
  cmd_cat.add_argument("--json", action="store_true", help="Print rows as JSON")
  cmd_cat.add_argument("--config", nargs="*", help="Overrides in key=value format (e.g. service_name=database)")

  # --- Command: EXPLAIN ---
  cmd_exp = subparsers.add_parser("explain", help="Show the rewrite of one deprecated call")
  cmd_exp.add_argument("name", help="Legacy function name (e.g. db_delete)")
  cmd_exp.add_argument("--args", type=int, default=1, help="Number of placeholder arguments (default: 1)")
  cmd_exp.add_argument("--config", nargs="*", help="Overrides in key=value format (e.g. options_variable=opts)")

  args = parser.parse_args(argv)
  overrides = parse_cli_key_values(args.config)

  if args.command == "catalog":
    return commands.handle_catalog(args.strategy, args.json, overrides)

  if args.command == "explain":
    if args.args < 0:
      parser.error("--args must be non-negative")
    return commands.handle_explain(args.name, args.args, overrides)

  return 1


if __name__ == "__main__":
  sys.exit(main())
