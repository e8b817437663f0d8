"""
Runtime Configuration Store.

Holds the names the rewrite engine emits (service id, class names, the
temporary options variable) and the list of functions to leave alone.
Values come from the nearest ``pyproject.toml`` (``[tool.db_rewriter]``) and
can be overridden by explicit arguments.
"""

import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

_PHP_IDENTIFIER = re.compile(r"^[A-Za-z_\x80-\xff][A-Za-z0-9_\x80-\xff]*$")


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the rewrite engine.
  """

  service_name: str = Field("database", description="Container service id of the default connection.")
  container_class: str = Field("Drupal", description="Class exposing the static service() accessor.")
  database_class: str = Field(
    "Drupal\\Core\\Database\\Database", description="Class exposing getConnection() and friends."
  )
  condition_class: str = Field("Drupal\\Core\\Database\\Query\\Condition", description="Query condition class.")
  default_target: str = Field("default", description="Connection target used by the default service.")
  replica_target: str = Field("replica", description="Target folded back onto the default connection.")
  options_variable: str = Field("_db_options", description="Temporary variable used for opaque $options.")
  skip_functions: List[str] = Field(default_factory=list, description="Legacy functions never rewritten.")

  @field_validator("container_class", "database_class", "condition_class")
  @classmethod
  def normalize_class(cls, v: str) -> str:
    """
    Strips the leading namespace separator; classes are always emitted fully qualified.

    Args:
        v (str): Raw class name.

    Returns:
        str: The class name without leading backslash.

    Raises:
        ValueError: If the name is empty.
    """
    clean = v.strip().lstrip("\\")
    if not clean:
      raise ValueError("Class name must not be empty")
    return clean

  @field_validator("options_variable")
  @classmethod
  def validate_variable(cls, v: str) -> str:
    """Ensures the temporary variable is a valid PHP identifier (leading '$' optional)."""
    clean = v.strip().lstrip("$")
    if not _PHP_IDENTIFIER.match(clean):
      raise ValueError(f"Invalid PHP variable name: '{v}'")
    return clean

  @classmethod
  def load(
    cls,
    overrides: Optional[Dict[str, Any]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and applies overrides.

    Args:
        overrides (Optional[Dict]): Values taking precedence over the TOML table.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.

    Raises:
        ValueError: If the merged values fail validation.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)
    merged = {**toml_config, **(overrides or {})}
    try:
      return cls.model_validate(merged)
    except ValidationError as e:
      raise ValueError(f"Configuration validation failed: {e}")


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches start_path and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get("db_rewriter", {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Comma separated values are split into lists for `skip_functions`.

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed dictionary.
  """
  if not items:
    return {}

  config: Dict[str, Any] = {}
  for item in items:
    if "=" not in item:
      print(f"⚠️  Ignoring invalid config format: '{item}'. Expected 'key=value'.")
      continue

    key, val_str = item.split("=", 1)
    key = key.strip()
    val_str = val_str.strip()

    if key == "skip_functions":
      config[key] = [v.strip() for v in val_str.split(",") if v.strip()]
    else:
      config[key] = val_str

  return config
