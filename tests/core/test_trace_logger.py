"""
Tests for the Rewrite Trace Logger.
"""

import json

from db_rewriter.core.tracer import TraceEventType, TraceLogger, get_tracer, reset_tracer


def test_block_nesting():
  tracer = TraceLogger()
  outer = tracer.open_block("Rewrite Block", 3)
  inner = tracer.open_block("if body", 1)
  assert tracer.depth == 2
  tracer.log_match("db_and", "condition")
  tracer.close_block()
  tracer.close_block()

  events = tracer.export()
  assert events[0]["block_id"] is None
  assert events[0]["metadata"] == {"statements": 3, "depth": 0}
  assert events[1]["block_id"] == outer
  assert events[1]["metadata"]["depth"] == 1
  assert events[2]["block_id"] == inner
  assert events[3]["type"] == TraceEventType.BLOCK_END
  assert events[3]["block_id"] == inner
  assert events[4]["block_id"] == outer
  assert tracer.depth == 0


def test_ids_are_sequential():
  tracer = TraceLogger()
  tracer.open_block("Rewrite Block", 0)
  tracer.log_warning("x")
  tracer.close_block()
  assert [e["id"] for e in tracer.export()] == [1, 2, 3]


def test_close_without_open_is_ignored():
  tracer = TraceLogger()
  tracer.close_block()
  assert tracer.export() == []


def test_event_payloads():
  tracer = TraceLogger()
  tracer.log_rewrite("db_delete", "db_delete($t, $o)", "...", "runtime")
  tracer.log_warning("careful", "db_select")
  tracer.log_decline("db_close", "db_close($o)", "opaque")

  rewrite, warning, decline = tracer.export()
  assert rewrite["description"] == "Rewrote db_delete via runtime"
  assert rewrite["metadata"] == {"function": "db_delete", "before": "db_delete($t, $o)", "after": "...", "route": "runtime"}
  assert warning["type"] == TraceEventType.WARNING
  assert warning["metadata"] == {"function": "db_select"}
  assert decline["description"] == "Left db_close unchanged"
  assert decline["metadata"]["reason"] == "opaque"


def test_rewrite_without_route():
  tracer = TraceLogger()
  tracer.log_rewrite("db_and", "db_and()", "new Condition('AND')")
  assert tracer.of_type(TraceEventType.CALL_REWRITE)[0].description == "Rewrote db_and"


def test_export_is_json_serializable():
  tracer = TraceLogger()
  tracer.open_block("Rewrite Block", 1)
  tracer.log_match("db_delete", "injected_database")
  tracer.close_block()
  data = json.loads(json.dumps(tracer.export()))
  assert data[1]["type"] == "catalog_match"


def test_global_reset():
  get_tracer().log_warning("x")
  reset_tracer()
  assert get_tracer().export() == []
