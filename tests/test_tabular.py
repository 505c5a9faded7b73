"""Tests for uniform-array detection and the tabular renderer."""

from __future__ import annotations

from toonlite import FOR_LLM, encode
from toonlite.contracts.options import EncodeOptions
from toonlite.encoding.encoder import encode_array, encode_cell, encode_tabular
from toonlite.encoding.uniform import is_uniform_object_array


class TestUniformity:
    def test_empty_is_not_uniform(self):
        verdict = is_uniform_object_array([])
        assert verdict.is_uniform is False
        assert verdict.keys is None

    def test_uniform_keys_follow_first_element(self):
        verdict = is_uniform_object_array([{"b": 1, "a": 2}, {"a": 3, "b": 4}])
        assert verdict.is_uniform
        assert verdict.keys == ["b", "a"]

    def test_all_primitive_kinds_allowed(self):
        verdict = is_uniform_object_array([{"a": None, "b": True, "c": 1.5, "d": "x"}])
        assert verdict.is_uniform

    def test_non_objects(self):
        assert not is_uniform_object_array([1, 2]).is_uniform
        assert not is_uniform_object_array([{"a": 1}, [1]]).is_uniform

    def test_extra_key(self):
        assert not is_uniform_object_array([{"a": 1}, {"a": 1, "b": 2}]).is_uniform

    def test_same_size_different_keys(self):
        assert not is_uniform_object_array([{"a": 1}, {"b": 1}]).is_uniform

    def test_nested_value_disqualifies(self):
        assert not is_uniform_object_array([{"a": 1}, {"a": [1]}]).is_uniform
        assert not is_uniform_object_array([{"a": {}}]).is_uniform


class TestTabularRenderer:
    def test_keyed_header_and_rows(self):
        rows = [{"id": 1, "name": "A"}, {"id": 2, "name": "B"}]
        out = encode_tabular(rows, ["id", "name"], "users", EncodeOptions())
        assert out == "users[2]{id,name}:\n1\tA\n2\tB"

    def test_unkeyed_uses_delimited_header_row(self):
        rows = [{"id": 1, "name": "A"}]
        out = encode_tabular(rows, ["id", "name"], "", EncodeOptions(delimiter="|"))
        assert out == "id|name\n1|A"

    def test_header_keys_are_comma_joined_regardless_of_delimiter(self):
        rows = [{"a": 1, "b": 2}]
        out = encode_tabular(rows, ["a", "b"], "t", EncodeOptions(delimiter="|"))
        assert out.split("\n")[0] == "t[1]{a,b}:"

    def test_encode_array_picks_table(self):
        out = encode_array([{"a": 1}, {"a": 2}], "k", EncodeOptions())
        assert out == "k[2]{a}:\n1\n2"

    def test_encode_array_list_form(self):
        assert encode_array([1, "x y"], "", EncodeOptions(readable=True)) == '[2] 1, "x y"'


class TestCells:
    def test_spaces_unquoted_under_tabs(self):
        assert encode_cell("Hello World", EncodeOptions(), "\t") == "Hello World"

    def test_structural_characters_relaxed(self):
        assert encode_cell("a:b", EncodeOptions(), "\t") == "a:b"
        assert encode_cell("[x]", EncodeOptions(), "\t") == "[x]"

    def test_space_relaxed_under_commas(self):
        assert encode_cell("x y", EncodeOptions(delimiter=","), ",") == "x y"

    def test_delimiter_keeps_quotes(self):
        assert encode_cell("a\tb", EncodeOptions(), "\t") == '"a\tb"'
        assert encode_cell("a,b", EncodeOptions(delimiter=","), ",") == '"a,b"'
        assert encode_cell("a|b", EncodeOptions(delimiter="|"), "|") == '"a|b"'

    def test_literals_keep_quotes(self):
        assert encode_cell("true", EncodeOptions(), "\t") == '"true"'
        assert encode_cell("42", EncodeOptions(), "\t") == '"42"'

    def test_embedded_quotes_keep_quotes(self):
        assert encode_cell('a:"b"', EncodeOptions(), "\t") == '"a:\\"b\\""'
        assert encode_cell('say "hi"', EncodeOptions(), "\t") == 'say "hi"'

    def test_empty_string_stays_quoted(self):
        assert encode_cell("", EncodeOptions(), "\t") == '""'

    def test_newlines_escaped_and_quoted(self):
        assert encode_cell("a\nb", EncodeOptions(), "\t") == '"a\\nb"'
        assert encode_cell("a\r\nb", EncodeOptions(), "\t") == '"a\\r\\nb"'

    def test_newline_rows_stay_on_one_line(self):
        rows = [{"note": "line one\nline two"}, {"note": "x"}]
        out = encode_tabular(rows, ["note"], "n", EncodeOptions())
        assert out.split("\n") == ["n[2]{note}:", '"line one\\nline two"', "x"]

    def test_scalars(self):
        opts = EncodeOptions(compact_booleans=True, compact_null=True)
        assert encode_cell(True, opts, "\t") == "1"
        assert encode_cell(None, opts, "\t") == "~"
        assert encode_cell(2.5, opts, "\t") == "2.5"


class TestRowIntegrity:
    def test_empty_cell_keeps_quotes(self):
        data = {"r": [{"a": "", "b": 1}, {"a": "x", "b": 2}]}
        assert encode(data, FOR_LLM) == 'r[2]{a,b}:\n""\t1\nx\t2'

    def test_pipe_in_cell_keeps_quotes(self):
        assert encode({"r": [{"a": "p|q"}]}, {"delimiter": "|"}) == 'r[1]{a}:\n"p|q"'

    def test_comma_in_cell_keeps_quotes(self):
        data = {"r": [{"a": "p,q", "b": "x"}]}
        assert encode(data, {"delimiter": ","}) == 'r[1]{a,b}:\n"p,q",x'

    def test_every_row_has_one_cell_per_column(self):
        data = {"r": [{"a": "", "b": "1|2"}, {"a": "x|y", "b": ""}]}
        lines = encode(data, {"delimiter": "|"}).split("\n")[1:]
        assert lines == ['""|"1|2"', '"x|y"|""']
