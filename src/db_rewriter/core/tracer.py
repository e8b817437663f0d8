"""
Rewrite Trace Logger.

Records the decisions taken while rewriting PHP code so a run can be audited
after the fact (`db-rewriter explain`, `DriverResult.trace_events`).

Events are grouped by block: the driver opens one block per statement list it
walks (the top-level block and every nested `if` body), and every call
decision is attached to the innermost open block:

- ``block_start`` / ``block_end``: a statement list is entered / left.
- ``catalog_match``: a call names a deprecated function.
- ``call_rewrite``: a call was rewritten; records the legacy name, the code
  before and after, and the route taken (e.g. ``getConnection`` for
  `db_delete`).
- ``call_declined``: a deprecated call was deliberately left unchanged.
- ``warning``: something the user should look at (e.g. unimplemented
  custom handling).
"""

import itertools
import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  BLOCK_START = "block_start"
  BLOCK_END = "block_end"
  CATALOG_MATCH = "catalog_match"
  CALL_REWRITE = "call_rewrite"
  CALL_DECLINED = "call_declined"
  WARNING = "warning"


@dataclass
class TraceEvent:
  """
  One recorded decision.

  Attributes:
      id: Sequence number, unique within one logger.
      type: Event kind.
      timestamp: Wall clock time of the event.
      description: Human readable summary.
      block_id: Id of the `block_start` event of the enclosing block, if any.
      metadata: Kind specific payload (function name, before/after code...).
  """

  id: int
  type: TraceEventType
  timestamp: float
  description: str
  block_id: Optional[int] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Collects rewrite events for one run.
  """

  def __init__(self):
    self._events: List[TraceEvent] = []
    self._open_blocks: List[int] = []
    self._ids = itertools.count(1)

  @property
  def depth(self) -> int:
    """Number of currently open blocks."""
    return len(self._open_blocks)

  def open_block(self, label: str, statements: int) -> int:
    """
    Enters a statement list.

    Args:
        label: What the block is ("Rewrite Block", "if body"...).
        statements: Number of statements in the block before rewriting.

    Returns:
        int: The block id, referenced by the events recorded inside it.
    """
    event = self._record(TraceEventType.BLOCK_START, label, {"statements": statements, "depth": self.depth})
    self._open_blocks.append(event.id)
    return event.id

  def close_block(self) -> None:
    """Leaves the innermost block. Without an open block this is a no-op."""
    if not self._open_blocks:
      return
    block_id = self._open_blocks.pop()
    self._events.append(
      TraceEvent(
        id=next(self._ids),
        type=TraceEventType.BLOCK_END,
        timestamp=time.time(),
        description="End Block",
        block_id=block_id,
      )
    )

  def log_match(self, function_name: str, strategy: str) -> None:
    self._record(
      TraceEventType.CATALOG_MATCH,
      f"Matched {function_name} -> {strategy}",
      {"function": function_name, "strategy": strategy},
    )

  def log_rewrite(self, function_name: str, before: str, after: str, route: str = "") -> None:
    """Records a rewritten call; `after` may span several statements."""
    self._record(
      TraceEventType.CALL_REWRITE,
      f"Rewrote {function_name}" + (f" via {route}" if route else ""),
      {"function": function_name, "before": before, "after": after, "route": route},
    )

  def log_decline(self, function_name: str, code: str, reason: str) -> None:
    """Records a deprecated call left unchanged and why."""
    self._record(
      TraceEventType.CALL_DECLINED,
      f"Left {function_name} unchanged",
      {"function": function_name, "code": code, "reason": reason},
    )

  def log_warning(self, message: str, function_name: Optional[str] = None) -> None:
    self._record(TraceEventType.WARNING, message, {"function": function_name})

  def of_type(self, evt_type: TraceEventType) -> List[TraceEvent]:
    return [e for e in self._events if e.type == evt_type]

  def _record(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]) -> TraceEvent:
    event = TraceEvent(
      id=next(self._ids),
      type=evt_type,
      timestamp=time.time(),
      description=desc,
      block_id=self._open_blocks[-1] if self._open_blocks else None,
      metadata=meta,
    )
    self._events.append(event)
    return event

  def export(self) -> List[Dict[str, Any]]:
    """Returns the events as plain dicts for JSON serialization."""
    return [asdict(e) for e in self._events]


_GLOBAL_TRACER = TraceLogger()


def get_tracer() -> TraceLogger:
  return _GLOBAL_TRACER


def reset_tracer() -> None:
  global _GLOBAL_TRACER
  _GLOBAL_TRACER = TraceLogger()
