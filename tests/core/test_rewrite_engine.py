"""
Tests for the Rewrite Engine.

Covers the uniform strategies, dispatch to custom handlers, pass-through of
unrelated calls and the trace produced along the way.
"""

import copy

import pytest

from db_rewriter import catalog
from db_rewriter.config import RuntimeConfig
from db_rewriter.core.engine import RewriteEngine, resolve_callee, rewrite_call
from db_rewriter.core.results import Replacement, Unchanged
from db_rewriter.core.tracer import TraceEventType, get_tracer
from db_rewriter.enums import RewriteStrategy
from db_rewriter.php.nodes import Arg, FuncCall, Identifier, Name, String_, Variable

SERVICE = r"\Drupal::service('database')"
DATABASE = r"\Drupal\Core\Database\Database"
CONDITION = r"\Drupal\Core\Database\Query\Condition"


@pytest.fixture
def engine():
  return RewriteEngine()


def _text(result):
  assert isinstance(result, Replacement)
  return result.node.to_text()


def test_schema_call(engine, make_call):
  result = engine.rewrite(make_call("db_add_field", "table", "field", "spec"))
  assert _text(result) == SERVICE + "->schema()->addField($table, $field, $spec)"


def test_connection_call(engine, make_call):
  result = engine.rewrite(make_call("db_escape_table", "table"))
  assert _text(result) == SERVICE + "->escapeTable($table)"


def test_argument_count_is_preserved(engine, make_call):
  assert _text(engine.rewrite(make_call("db_driver"))) == SERVICE + "->driver()"
  many = make_call("db_like", "a", "b", "c", "d")
  assert _text(engine.rewrite(many)) == SERVICE + "->escapeLike($a, $b, $c, $d)"


def test_named_arguments_are_preserved(engine):
  call = FuncCall(Name("db_table_exists"), [Arg(Variable("t"), Identifier("table"))])
  assert _text(engine.rewrite(call)) == SERVICE + "->schema()->tableExists(table: $t)"


@pytest.mark.parametrize("name,conjunction", [("db_and", "AND"), ("db_or", "OR"), ("db_xor", "XOR")])
def test_fixed_conjunctions_drop_arguments(engine, make_call, name, conjunction):
  assert _text(engine.rewrite(make_call(name))) == f"new {CONDITION}('{conjunction}')"
  assert _text(engine.rewrite(make_call(name, "ignored"))) == f"new {CONDITION}('{conjunction}')"


def test_condition_passes_arguments(engine, make_call):
  assert _text(engine.rewrite(make_call("db_condition", "conjunction"))) == f"new {CONDITION}($conjunction)"
  assert _text(engine.rewrite(make_call("db_condition"))) == f"new {CONDITION}()"


def test_set_active(engine, make_call):
  assert _text(engine.rewrite(make_call("db_set_active", "key"))) == DATABASE + "::setActiveConnection($key)"
  assert _text(engine.rewrite(make_call("db_set_active"))) == DATABASE + "::setActiveConnection()"


def test_close_without_options(engine, make_call):
  assert _text(engine.rewrite(make_call("db_close"))) == DATABASE + "::closeConnection()"


def test_close_with_literal_target(engine, make_call, options_array):
  result = engine.rewrite(make_call("db_close", options_array("replica")))
  assert _text(result) == DATABASE + "::closeConnection('replica')"


def test_close_without_target_passes_null(engine, make_call, options_array):
  result = engine.rewrite(make_call("db_close", options_array(foo="1")))
  assert _text(result) == DATABASE + "::closeConnection(NULL)"


def test_close_with_opaque_options_is_unchanged(engine, make_call):
  call = make_call("db_close", "options")
  result = engine.rewrite(call)
  assert isinstance(result, Unchanged)
  assert result.node is call
  assert "literal array" in result.reason


def test_unknown_function_passes_through(engine, make_call):
  call = make_call("drupal_set_message", "msg")
  result = engine.rewrite(call)
  assert isinstance(result, Unchanged)
  assert result.node is call
  assert get_tracer().export() == []


def test_matching_is_case_sensitive(engine, make_call):
  assert isinstance(engine.rewrite(make_call("DB_QUERY", "sql")), Unchanged)


def test_dynamic_callee_is_never_rewritten(engine):
  call = FuncCall(String_("db_add_field"), [Arg(Variable("t"))])
  assert resolve_callee(call) is None
  result = engine.rewrite(call)
  assert isinstance(result, Unchanged)
  assert result.reason == "dynamic callee"


@pytest.mark.parametrize("name", sorted(catalog.CUSTOM_HANDLING - {"db_delete"}))
def test_unimplemented_custom_handling_is_unchanged(engine, make_call, name):
  call = make_call(name, "a", "b", "c")
  result = engine.rewrite(call)
  assert isinstance(result, Unchanged)
  assert result.node is call

  warnings = [e for e in get_tracer().export() if e["type"] == TraceEventType.WARNING]
  assert len(warnings) == 1
  assert name in warnings[0]["description"]


def test_skip_functions(make_call):
  engine = RewriteEngine(RuntimeConfig(skip_functions=["db_add_field"]))
  result = engine.rewrite(make_call("db_add_field", "t", "f", "s"))
  assert isinstance(result, Unchanged)
  assert result.reason == "listed in skip_functions"

  # Other functions are unaffected
  assert isinstance(engine.rewrite(make_call("db_drop_field", "t", "f")), Replacement)


def test_configured_class_names(make_call):
  cfg = RuntimeConfig(container_class="\\App\\Container", service_name="db.replica")
  result = rewrite_call(make_call("db_driver"), cfg)
  assert _text(result) == r"\App\Container::service('db.replica')->driver()"


@pytest.mark.parametrize("name", sorted(set(catalog.CATALOG) - catalog.CUSTOM_HANDLING))
def test_uniform_rewrites_do_not_mutate_input(engine, make_call, options_array, name):
  call = make_call(name, options_array("replica"), "b")
  snapshot = copy.deepcopy(call)
  engine.rewrite(call)
  assert call == snapshot


@pytest.mark.parametrize("name", sorted(set(catalog.CATALOG) - catalog.CUSTOM_HANDLING))
def test_rewrites_are_idempotent(engine, make_call, name):
  """Outputs never contain a call the engine would rewrite again."""
  result = engine.rewrite(make_call(name))
  assert isinstance(result, Replacement)
  assert not isinstance(result.node, FuncCall)


def test_trace_records_match_and_mutation(engine, make_call):
  engine.rewrite(make_call("db_and"))
  events = get_tracer().export()
  types = [e["type"] for e in events]
  assert types == [TraceEventType.CATALOG_MATCH, TraceEventType.CALL_REWRITE]
  assert events[0]["metadata"] == {"function": "db_and", "strategy": RewriteStrategy.CONDITION.value}
  assert events[1]["metadata"]["before"] == "db_and()"
  assert events[1]["metadata"]["function"] == "db_and"


def test_trace_records_unchanged_decision(engine, make_call):
  engine.rewrite(make_call("db_close", "options"))
  last = get_tracer().export()[-1]
  assert last["type"] == TraceEventType.CALL_DECLINED
  assert last["metadata"]["function"] == "db_close"
  assert last["metadata"]["reason"] == "options argument is not a literal array"


def test_close_with_named_options(engine, options_array):
  call = FuncCall(Name("db_close"), [Arg(options_array("replica"), Identifier("options"))])
  assert _text(engine.rewrite(call)) == DATABASE + "::closeConnection('replica')"


def test_close_without_options_argument_among_named(engine):
  call = FuncCall(Name("db_close"), [Arg(Variable("x"), Identifier("other"))])
  result = engine.rewrite(call)
  assert isinstance(result, Unchanged)
  assert result.reason == "no options argument"


def test_skipped_call_is_traced_as_declined(make_call):
  engine = RewriteEngine(RuntimeConfig(skip_functions=["db_or"]))
  engine.rewrite(make_call("db_or"))
  (event,) = get_tracer().export()
  assert event["type"] == TraceEventType.CALL_DECLINED
  assert event["metadata"]["reason"] == "listed in skip_functions"
