"""Unit tests for State."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from opflow import State


@pytest.mark.unit
class TestStateBuild:
    def test_merges_context_and_input(self):
        s = State.build({"user": "ann"}, {"age": 3}, result_key="value")
        assert s.to_dict() == {"user": "ann", "input": {"age": 3}}

    def test_input_wins_over_context(self):
        s = State.build({"input": "ctx"}, "caller", result_key="value")
        assert s["input"] == "caller"

    def test_custom_input_key(self):
        s = State.build({}, 1, result_key="value", input_key="params")
        assert s.to_dict() == {"params": 1}

    def test_context_mapping_not_aliased(self):
        ctx = {"user": "ann"}
        s = State.build(ctx, None, result_key="value")
        s.set("user", "bob")
        assert ctx == {"user": "ann"}


@pytest.mark.unit
class TestStateAccess:
    def test_get_set_contains(self):
        s = State()
        assert s.get("a") is None
        assert s.get("a", 1) == 1
        assert not s.contains("a")
        s.set("a", 2)
        assert s.contains("a")
        assert "a" in s
        assert s["a"] == 2

    def test_item_assignment(self):
        s = State()
        s["k"] = "v"
        assert s.get("k") == "v"

    def test_missing_item_raises_key_error(self):
        with pytest.raises(KeyError):
            State()["missing"]

    def test_update_returns_self(self):
        s = State({"a": 1})
        assert s.update({"b": 2}, c=3) is s
        assert s.to_dict() == {"a": 1, "b": 2, "c": 3}

    def test_update_preserves_insertion_order(self):
        s = State({"a": 1}).update({"b": 2}).update({"a": 9})
        assert list(s) == ["a", "b"]
        assert len(s) == 2

    def test_result_reads_result_key(self):
        s = State({"age": 20, "value": 1}, result_key="age")
        assert s.result() == 20

    def test_result_missing_is_none(self):
        assert State().result() is None


@pytest.mark.unit
class TestStateSnapshotAndCopy:
    def test_snapshot_is_read_only(self):
        snap = State({"a": 1}).snapshot()
        assert isinstance(snap, MappingProxyType)
        with pytest.raises(TypeError):
            snap["a"] = 2  # type: ignore[index]

    def test_copy_is_independent(self):
        s = State({"a": 1}, result_key="a")
        c = s.copy()
        c.set("b", 2)
        assert "b" not in s
        assert c.result_key == "a"
        assert c == State({"a": 1, "b": 2}, result_key="a")

    def test_copy_shares_nested_values(self):
        s = State({"items": [1]})
        c = s.copy()
        c["items"].append(2)
        c.set("items2", [])
        assert s["items"] == [1, 2]
        assert "items2" not in s

    def test_equality_considers_result_key(self):
        assert State({"a": 1}, result_key="a") != State({"a": 1}, result_key="b")
