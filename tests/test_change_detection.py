"""Tests for change detection."""

import pytest

from racevault.models.assets import BoostRecord, DriverRecord
from racevault.services.change_detection import deep_equal, detect_changes


class TestDeepEqual:
    def test_scalars(self) -> None:
        assert deep_equal(1, 1)
        assert deep_equal("a", "a")
        assert not deep_equal(1, 2)
        assert not deep_equal("1", 1)

    def test_none(self) -> None:
        assert deep_equal(None, None)
        assert not deep_equal(None, 0)
        assert not deep_equal([], None)

    def test_bool_is_not_int(self) -> None:
        assert not deep_equal(True, 1)
        assert not deep_equal(0, False)
        assert deep_equal(True, True)

    def test_int_float_compare_by_value(self) -> None:
        assert deep_equal(1, 1.0)
        assert not deep_equal(1, 1.5)

    def test_nested_mappings(self) -> None:
        a = {"speed": 3, "levels": [{"x": 1}, {"x": 2}]}
        b = {"levels": [{"x": 1}, {"x": 2}], "speed": 3}

        assert deep_equal(a, b)

    def test_mapping_key_mismatch(self) -> None:
        assert not deep_equal({"a": 1}, {"a": 1, "b": 2})
        assert not deep_equal({"a": 1}, {"b": 1})

    def test_sequence_order_matters(self) -> None:
        assert not deep_equal([1, 2], [2, 1])
        assert not deep_equal([1, 2], [1, 2, 3])

    def test_list_and_tuple_compare_structurally(self) -> None:
        assert deep_equal([1, 2], (1, 2))

    def test_mapping_is_not_sequence(self) -> None:
        assert not deep_equal({"a": 1}, ["a"])


class TestDetectChanges:
    def test_identical_records(self) -> None:
        a = DriverRecord(id="d1", name="N", rarity=4, stats_per_level=[{"x": 1}])
        b = DriverRecord(id="d1", name="N", rarity=4, stats_per_level=[{"x": 1}])

        assert detect_changes(a, b) == []

    def test_single_field_difference(self) -> None:
        a = DriverRecord(id="d1", name="N", rarity=4, series=3)
        b = DriverRecord(id="d1", name="N", rarity=4, series=6)

        assert detect_changes(a, b) == ["series"]

    def test_nested_difference(self) -> None:
        a = BoostRecord(id="b1", name="Boost TURBO", boost_stats={"speed": 1})
        b = BoostRecord(id="b1", name="Boost TURBO", boost_stats={"speed": 2})

        assert detect_changes(a, b) == ["boost_stats"]

    def test_reports_in_field_order(self) -> None:
        a = DriverRecord(id="d1", name="A", rarity=1, tag_name=None)
        b = DriverRecord(id="d1", name="B", rarity=2, tag_name="TAG")

        assert detect_changes(a, b) == ["name", "rarity", "tag_name"]

    def test_id_is_not_compared(self) -> None:
        a = DriverRecord(id="d1", name="N")
        b = DriverRecord(id="other", name="N")

        assert detect_changes(a, b) == []

    def test_inputs_not_mutated(self) -> None:
        stats = [{"x": 1}]
        a = DriverRecord(id="d1", name="N", stats_per_level=stats)
        b = DriverRecord(id="d1", name="N", stats_per_level=[{"x": 2}])

        detect_changes(a, b)

        assert stats == [{"x": 1}]

    def test_mismatched_types_rejected(self) -> None:
        with pytest.raises(TypeError):
            detect_changes(DriverRecord(id="x", name="N"), BoostRecord(id="x", name="N"))
