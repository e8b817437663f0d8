"""
Tests for the option-target helpers.
"""

from db_rewriter.core.options import (
  ConcreteTarget,
  NoInformation,
  NullTarget,
  find_options_argument,
  get_target_from_options,
  set_target_in_options,
)
from db_rewriter.php.nodes import Arg, Array_, ArrayItem, FuncCall, Identifier, LNumber, Name, String_, Variable


def test_literal_target(options_array):
  assert get_target_from_options(options_array("replica")) == ConcreteTarget(String_("replica"))


def test_missing_target_is_null(options_array):
  assert get_target_from_options(options_array(fetch="assoc")) == NullTarget()
  assert get_target_from_options(Array_()) == NullTarget()


def test_opaque_options():
  assert get_target_from_options(Variable("options")) == NoInformation()
  assert get_target_from_options(FuncCall(Name("get_options"), [])) == NoInformation()


def test_non_string_target_value_is_still_concrete():
  arr = Array_([ArrayItem(Variable("t"), String_("target"))])
  assert get_target_from_options(arr) == ConcreteTarget(Variable("t"))


def test_last_target_wins():
  arr = Array_(
    [
      ArrayItem(String_("replica"), String_("target")),
      ArrayItem(String_("shard3"), String_("target")),
    ]
  )
  assert get_target_from_options(arr) == ConcreteTarget(String_("shard3"))


def test_non_string_keys_ignored():
  arr = Array_([ArrayItem(String_("x")), ArrayItem(String_("replica"), LNumber(0))])
  assert get_target_from_options(arr) == NullTarget()


def test_null_target_argument():
  assert NullTarget().as_argument().to_text() == "NULL"
  assert ConcreteTarget(String_("replica")).as_argument().to_text() == "'replica'"


def test_set_target_rewrites_all_entries_in_place():
  arr = Array_(
    [
      ArrayItem(String_("replica"), String_("target")),
      ArrayItem(String_("x"), String_("fetch")),
      ArrayItem(Variable("t"), String_("target")),
    ]
  )
  out = set_target_in_options(arr, "default")

  assert out is arr
  assert arr.to_text() == "['target' => 'default', 'fetch' => 'x', 'target' => 'default']"


def test_set_target_without_key_is_noop(options_array):
  arr = options_array(fetch="assoc")
  before = arr.to_text()
  assert set_target_in_options(arr, "default") is arr
  assert arr.to_text() == before


def test_set_target_on_opaque_expression():
  v = Variable("options")
  assert set_target_in_options(v, "default") is v


def test_find_options_positional():
  args = [Arg(Variable("t")), Arg(Variable("o"))]
  assert find_options_argument(args, 1) == 1
  assert find_options_argument(args[:1], 1) is None
  assert find_options_argument([], 0) is None


def test_find_options_by_name():
  reordered = [Arg(Variable("o"), Identifier("options")), Arg(Variable("t"), Identifier("table"))]
  assert find_options_argument(reordered, 1) == 0

  trailing = [Arg(Variable("t")), Arg(Variable("o"), Identifier("options"))]
  assert find_options_argument(trailing, 1) == 1


def test_find_options_ignores_other_named_arguments():
  args = [Arg(Variable("t"), Identifier("table")), Arg(Variable("x"), Identifier("extra"))]
  assert find_options_argument(args, 1) is None
