"""
Tests for PHP Nodes.

Verifies:
1.  Correct string rendering (`to_text`) for expressions and statements.
2.  Escaping of string literals.
3.  Construction-time validation of names.
"""

import pytest

from db_rewriter.php.builders import args_of, dim_fetch, fully_qualified, method_call, new, static_call, string, var
from db_rewriter.php.nodes import (
  Arg,
  Array_,
  ArrayItem,
  Assign,
  BooleanOr,
  ConstFetch,
  Empty_,
  Equal,
  Expression,
  FuncCall,
  Identifier,
  If_,
  LNumber,
  Name,
  Return_,
  String_,
  Variable,
  render_block,
)


def test_name_rendering():
  assert Name("db_query").to_text() == "db_query"
  assert Name("Drupal\\Core\\Database\\Database", fully_qualified=True).to_text() == r"\Drupal\Core\Database\Database"
  # Leading separator is normalised into the flag
  assert str(Name("\\Drupal")) == "Drupal"


def test_empty_names_rejected():
  with pytest.raises(ValueError):
    Name("")
  with pytest.raises(ValueError):
    Identifier("")


def test_string_escaping():
  assert String_("default").to_text() == "'default'"
  assert String_("it's").to_text() == r"'it\'s'"
  assert String_("a\\b").to_text() == r"'a\\b'"


def test_scalars_and_variables():
  assert Variable("table").to_text() == "$table"
  assert LNumber(10).to_text() == "10"
  assert ConstFetch(Name("NULL")).to_text() == "NULL"


def test_array_rendering():
  arr = Array_([ArrayItem(String_("replica"), String_("target")), ArrayItem(LNumber(1))])
  assert arr.to_text() == "['target' => 'replica', 1]"
  assert Array_().to_text() == "[]"


def test_call_rendering():
  call = FuncCall(Name("db_delete"), [Arg(Variable("table")), Arg(Variable("options"), Identifier("options"))])
  assert call.to_text() == "db_delete($table, options: $options)"

  dynamic = FuncCall(Variable("fn"), [Arg(String_("x"))])
  assert dynamic.to_text() == "$fn('x')"


def test_builders_compose_chains():
  service = static_call("Drupal", "service", [string("database")])
  chain = method_call(method_call(service, "schema"), "addField", [var("table")])
  assert chain.to_text() == r"\Drupal::service('database')->schema()->addField($table)"

  assert new("Drupal\\Core\\Database\\Query\\Condition", [string("OR")]).to_text() == (
    r"new \Drupal\Core\Database\Query\Condition('OR')"
  )
  assert fully_qualified("\\Drupal").to_text() == r"\Drupal"
  assert var("$opts").to_text() == "$opts"


def test_args_of_wraps_expressions():
  existing = Arg(Variable("a"))
  wrapped = args_of([existing, Variable("b")])
  assert wrapped[0] is existing
  assert wrapped[1] == Arg(Variable("b"))


def test_statement_rendering():
  fetch = dim_fetch("_db_options", "target")
  stmt = If_(
    BooleanOr(Empty_(fetch), Equal(fetch, String_("replica"))),
    [Expression(Assign(fetch, String_("default")))],
  )
  expected = (
    "if (empty($_db_options['target']) || $_db_options['target'] == 'replica') {\n"
    "  $_db_options['target'] = 'default';\n"
    "}"
  )
  assert stmt.to_text() == expected


def test_nested_indentation():
  inner = If_(Variable("b"), [Return_(Variable("x"))])
  outer = If_(Variable("a"), [inner, Return_()])
  assert outer.to_text() == "if ($a) {\n  if ($b) {\n    return $x;\n  }\n  return;\n}"


def test_render_block():
  block = [Expression(Assign(Variable("a"), LNumber(1))), Return_(Variable("a"))]
  assert render_block(block) == "$a = 1;\nreturn $a;"
