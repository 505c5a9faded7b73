"""Tests for key shortening and the flattening transform."""

from __future__ import annotations

import pytest

from toonlite import FOR_LLM_NESTED, EncodeOptions, KeyCollisionError, encode
from toonlite.encoding import encoder
from toonlite.encoding.encoder import encode_value
from toonlite.encoding.flatten import KeyCollision, find_flatten_collisions, flatten_object
from toonlite.encoding.keys import shorten_key


class TestShortenKey:
    @pytest.mark.parametrize(
        "key, expected",
        [
            ("items", "i"),
            ("item", "i"),
            ("customer", "c"),
            ("quantity", "q"),
            ("price", "p"),
            ("orderId", "oid"),
            ("status", "st"),
            ("total", "t"),
            ("name", "n"),
            ("email", "e"),
            ("sku", "sku"),
            ("unknown", "unknown"),
        ],
    )
    def test_top_level(self, key, expected):
        assert shorten_key(key) == expected

    def test_item_context_shortens_sku(self):
        assert shorten_key("sku", "i0") == "s"
        assert shorten_key("sku", "lineitem") == "s"

    def test_context_without_i_keeps_default_table(self):
        assert shorten_key("sku", "c") == "sku"
        assert shorten_key("name", "c") == "n"

    def test_item_context_falls_back_to_default_table(self):
        assert shorten_key("status", "i0") == "st"


class TestFlattenObject:
    def test_nested_object_and_array(self):
        data = {"customer": {"name": "Ann"}, "items": [{"sku": "A"}]}
        assert flatten_object(data) == {"c_n": "Ann", "i0_s": "A"}

    def test_order_row(self, orders):
        row = flatten_object(orders["orders"][0])
        assert list(row) == [
            "oid", "c_n", "c_e",
            "i0_s", "i0_q", "i0_p",
            "i1_s", "i1_q", "i1_p",
            "t", "st",
        ]
        assert row["i1_p"] == 3.25
        assert row["st"] == "shipped"

    def test_prefix_is_prepended(self):
        assert flatten_object({"a": 1}, prefix="x") == {"x_a": 1}

    def test_primitive_array_elements(self):
        assert flatten_object({"tags": ["a", "b"]}) == {"tags0": "a", "tags1": "b"}

    def test_nested_arrays(self):
        assert flatten_object({"grid": [[1, 2], [3]]}) == {"grid0_0": 1, "grid0_1": 2, "grid1_0": 3}

    def test_objects_inside_nested_arrays(self):
        assert flatten_object({"m": [[{"v": 1}]]}) == {"m0_0_v": 1}

    def test_empty_array_kept_verbatim(self):
        assert flatten_object({"tags": []}) == {"tags": []}

    def test_depth_limit_keeps_array(self):
        assert flatten_object({"tags": ["a"]}, max_depth=0) == {"tags": ["a"]}

    def test_depth_decrements_per_array_level(self):
        data = {"a": [{"b": [{"c": 1}]}]}
        assert flatten_object(data, max_depth=1) == {"a0_b": [{"c": 1}]}
        assert flatten_object(data, max_depth=2) == {"a0_b0_c": 1}

    def test_null_kept(self):
        assert flatten_object({"a": None}) == {"a": None}

    def test_empty_object_contributes_nothing(self):
        assert flatten_object({"a": {}, "b": 1}) == {"b": 1}


class TestCollisions:
    def test_later_key_overwrites_in_place(self):
        found: list[KeyCollision] = []
        row = flatten_object({"status": "a", "x": 1, "st": "b"}, collisions=found)
        assert row == {"st": "b", "x": 1}
        assert list(row) == ["st", "x"]
        assert found == [KeyCollision(key="st", first_path="status", second_path="st")]

    def test_paths_are_dotted_source_paths(self):
        found = find_flatten_collisions([{"items": [{"sku": "A", "s": "B"}]}])
        assert len(found) == 1
        assert found[0].key == "i0_s"
        assert found[0].first_path == "items.0.sku"
        assert found[0].second_path == "items.0.s"

    def test_no_collisions_for_orders(self, orders):
        assert find_flatten_collisions(orders["orders"]) == []


class TestFlattenEncoding:
    def test_orders_flatten_to_one_table(self, orders):
        out = encode(orders, FOR_LLM_NESTED)
        lines = out.split("\n")
        assert lines[0] == "orders[2]{oid,c_n,c_e,i0_s,i0_q,i0_p,i1_s,i1_q,i1_p,t,st}:"
        assert lines[1] == "ORD-1\tAnn\tann@example.com\tA\t1\t9.5\tB\t2\t3.25\t16\tshipped"
        # second order has one item; missing columns are backfilled with null
        assert lines[2] == "ORD-2\tBen\tben@example.com\tC\t4\t1.5\t~\t~\t~\t6\tpending"

    def test_union_of_keys_in_first_seen_order(self):
        out = encode([{"a": 1}, {"b": 2}], {"flatten": True})
        assert out == "a\tb\n1\tnull\nnull\t2"

    def test_flatten_applies_to_flat_objects_too(self):
        out = encode({"x": [{"a": 1}, {"a": 2, "b": 3}]}, {"flatten": True})
        assert out == "x[2]{a,b}:\n1\tnull\n2\t3"

    def test_flatten_ignored_when_tabular_disabled(self):
        data = {"x": [{"a": {"b": 1}}]}
        assert encode(data, {"flatten": True, "tabular": False}) == "x[1]{a{b:1}}"

    def test_flatten_needs_all_objects(self):
        data = {"x": [{"a": 1}, 2]}
        assert encode(data, {"flatten": True}) == "x[2]{a:1},2"

    def test_empty_array_cell_is_null(self):
        out = encode({"rows": [{"id": 1, "tags": []}]}, {"flatten": True})
        assert out == "rows[1]{id,tags}:\n1\tnull"

    def test_depth_limited_array_cell_uses_list_form(self):
        out = encode({"rows": [{"tags": ["a", "b"]}]}, {"flatten": True, "max_flatten_depth": 0})
        assert out == "rows[1]{tags}:\n[2]a,b"

    def test_collision_overwrites_by_default(self):
        out = encode({"rows": [{"status": "a", "st": "b"}]}, {"flatten": True})
        assert out == "rows[1]{st}:\nb"

    def test_strict_keys_raises(self):
        with pytest.raises(KeyCollisionError, match="'st'"):
            encode({"rows": [{"status": "a", "st": "b"}]}, {"flatten": True, "strict_keys": True})


class TestCollisionsFromEncoding:
    def test_collected_while_encoding(self):
        found: list[KeyCollision] = []
        out = encode_value(
            {"rows": [{"status": "a", "st": "b"}]}, EncodeOptions(flatten=True), collisions=found
        )
        assert out == "rows[1]{st}:\nb"
        assert found == [KeyCollision(key="st", first_path="status", second_path="st")]

    def test_collected_from_nested_arrays(self):
        value = {
            "a": {"rows": [{"status": "a", "st": "b"}]},
            "b": [[{"status": "c", "st": "d"}]],
        }
        found: list[KeyCollision] = []
        encode_value(value, EncodeOptions(flatten=True), collisions=found)
        assert [c.key for c in found] == ["st", "st"]

    def test_nothing_collected_without_flatten(self):
        found: list[KeyCollision] = []
        encode_value({"rows": [{"status": "a", "st": "b"}]}, EncodeOptions(), collisions=found)
        assert found == []

    def test_strict_raises_before_collecting(self):
        found: list[KeyCollision] = []
        with pytest.raises(KeyCollisionError):
            encode_value(
                {"rows": [{"status": "a", "st": "b"}]},
                EncodeOptions(flatten=True, strict_keys=True),
                collisions=found,
            )
        assert found == []

    def test_rows_flattened_once_per_encode(self, monkeypatch, orders):
        from toonlite.engine.runner import run_encode

        calls = []
        real_flatten = encoder.flatten_object

        def counting(*args, **kwargs):
            calls.append(1)
            return real_flatten(*args, **kwargs)

        monkeypatch.setattr(encoder, "flatten_object", counting)
        env, _ = run_encode(orders, FOR_LLM_NESTED)
        assert env.ok
        assert len(calls) == len(orders["orders"])
