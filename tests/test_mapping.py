"""Tests for building, serializing, and loading placeholder mappings."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from sbdice.errors import MappingError
from sbdice.models.mapping import PlaceholderMapping
from sbdice.substitution.mapping import build_mapping, dump_mapping, load_mapping


class TestBuildMapping:
    """Tests for build_mapping."""

    def test_keys_are_indexes(self) -> None:
        assert build_mapping(["hello", "world", "module-x"]) == {
            "0": "hello",
            "1": "world",
            "2": "module-x",
        }

    def test_empty_record_gives_empty_mapping(self) -> None:
        assert build_mapping([]) == {}

    def test_duplicates_keep_their_own_keys(self) -> None:
        assert build_mapping(["a", "a"]) == {"0": "a", "1": "a"}

    def test_every_index_present(self) -> None:
        record = [f"value-{i}" for i in range(25)]
        mapping = build_mapping(record)
        assert len(mapping) == len(record)
        assert all(mapping[str(i)] == record[i] for i in range(len(record)))


class TestDumpMapping:
    """Tests for dump_mapping."""

    def test_keys_in_numeric_order(self) -> None:
        mapping = build_mapping([str(i) for i in range(12)])
        keys = list(json.loads(dump_mapping(mapping)))
        assert keys == [str(i) for i in range(12)]

    def test_numeric_order_even_when_inserted_out_of_order(self) -> None:
        text = dump_mapping({"10": "k", "2": "c", "0": "a", "1": "b"})
        assert text.index('"2"') < text.index('"10"')

    def test_non_ascii_is_not_escaped(self) -> None:
        text = dump_mapping({"0": "héllo 世界"})
        assert "héllo 世界" in text

    def test_empty_mapping(self) -> None:
        assert dump_mapping({}) == "{}"


class TestPlaceholderMapping:
    """Validation of mapping files."""

    def test_accepts_contiguous_keys(self) -> None:
        mapping = PlaceholderMapping.model_validate({"1": "b", "0": "a"})
        assert mapping.root == {"1": "b", "0": "a"}

    def test_accepts_empty(self) -> None:
        assert PlaceholderMapping.model_validate({}).root == {}

    @pytest.mark.parametrize(
        "data",
        [
            {"0": "a", "2": "c"},
            {"1": "b"},
            {"00": "a"},
            {"01": "a", "0": "b"},
            {"x": "a"},
            {"0": 1},
        ],
    )
    def test_rejects_malformed(self, data: dict) -> None:
        with pytest.raises(ValidationError):
            PlaceholderMapping.model_validate(data)


class TestLoadMapping:
    """Tests for load_mapping."""

    def test_round_trip_through_file(self, temp_dir: Path) -> None:
        path = temp_dir / "m.json"
        path.write_text(dump_mapping({"0": "x", "1": 'quote "y"'}), encoding="utf-8")
        assert load_mapping(path) == {"0": "x", "1": 'quote "y"'}

    def test_invalid_json_raises_mapping_error(self, temp_dir: Path) -> None:
        path = temp_dir / "m.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(MappingError):
            load_mapping(path)

    def test_gap_raises_mapping_error(self, temp_dir: Path) -> None:
        path = temp_dir / "m.json"
        path.write_text('{"0": "a", "5": "b"}', encoding="utf-8")
        with pytest.raises(MappingError):
            load_mapping(path)
