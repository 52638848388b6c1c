"""
Test suite for dataset and test-result validation in render_test_sim.data.validation.

This module validates:
- Duplicate-id detection anywhere in a nested dataset
- Range checks on color, opacity and intensity fields
- Sanity checks on recorded test results
"""

import pytest

from render_test_sim.data import (
    SceneDataGenerator,
    ensure_valid_dataset,
    validate_dataset,
    validate_test_data_integrity,
    validate_test_execution,
)
from render_test_sim.data.validation import iter_id_nodes
from render_test_sim.utils.exceptions import ValidationError

NON_MAPPING_DATASETS = [None, [], "scene", 42, [{"id": "a"}]]


class TestDuplicateIds:
    def test_sibling_duplicates_are_named(self):
        errors = validate_dataset({"item1": {"id": "dup"}, "item2": {"id": "dup"}})
        assert errors == ["Duplicate ID found: dup at .item2"]

    def test_duplicates_inside_lists(self):
        dataset = {"id": "root", "objects": [{"id": "a"}, {"id": "b"}, {"id": "a"}]}
        assert validate_dataset(dataset) == ["Duplicate ID found: a at .objects[2]"]

    def test_duplicates_inside_nested_lists(self):
        dataset = {"groups": [[{"id": "dup"}], [{"id": "dup"}]]}
        assert validate_dataset(dataset) == ["Duplicate ID found: dup at .groups[1][0]"]

    def test_deeply_nested_list_is_walked(self):
        dataset = {"id": "a", "grid": [[[{"id": "b"}]], [{"id": "a"}]]}
        assert [path for _, path in iter_id_nodes(dataset)] == ["", ".grid[0][0][0]", ".grid[1][0]"]
        assert validate_dataset(dataset) == ["Duplicate ID found: a at .grid[1][0]"]

    def test_unhashable_ids_are_compared_without_raising(self):
        dataset = {"a": {"id": ["x"]}, "b": {"id": ["x"]}, "c": {"id": {"k": 1}}, "d": {"id": ["y"]}}
        assert validate_dataset(dataset) == ["Duplicate ID found: ['x'] at .b"]

    def test_every_repeat_is_reported(self):
        dataset = {"items": [{"id": "x"}, {"id": "x"}, {"id": "x"}]}
        assert len(validate_dataset(dataset)) == 2

    def test_nested_duplicate_of_root(self):
        dataset = {"id": "root", "child": {"nested": {"id": "root"}}}
        assert validate_dataset(dataset) == ["Duplicate ID found: root at .child.nested"]

    def test_empty_and_missing_ids_are_ignored(self):
        dataset = {"a": {"id": ""}, "b": {"id": ""}, "c": {"id": None}, "d": {"name": "x"}}
        assert validate_dataset(dataset) == []

    @pytest.mark.parametrize("dataset", NON_MAPPING_DATASETS)
    def test_non_mapping_root(self, dataset):
        assert validate_dataset(dataset) == ["Dataset must be an object"]

    def test_iter_id_nodes_is_depth_first(self):
        dataset = {"id": "a", "children": [{"id": "b", "inner": {"id": "c"}}, {"id": "d"}]}
        assert [node_id for node_id, _ in iter_id_nodes(dataset)] == ["a", "b", "c", "d"]

    def test_generator_shortcut(self, scene_generator):
        scene = scene_generator.generate_scene_data("medium")
        assert scene_generator.validate_dataset(scene) == []

    def test_ids_from_two_fresh_generators_collide(self):
        combined = {
            "first": SceneDataGenerator(1).generate_scene_data("simple"),
            "second": SceneDataGenerator(2).generate_scene_data("simple"),
        }
        errors = validate_dataset(combined)
        assert any("scene-1" in message for message in errors)


class TestEnsureValidDataset:
    def test_valid_dataset_passes(self, scene_generator):
        ensure_valid_dataset(scene_generator.generate_scene_data())

    def test_violations_are_carried(self):
        dataset = {"a": {"id": "x"}, "b": {"id": "x"}, "c": {"id": "y"}, "d": {"id": "y"}}
        with pytest.raises(ValidationError) as exc_info:
            ensure_valid_dataset(dataset)
        assert exc_info.value.violations == [
            "Duplicate ID found: x at .b",
            "Duplicate ID found: y at .d",
        ]
        assert "2 violation(s)" in str(exc_info.value)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            ensure_valid_dataset({"a": {"id": 1}, "b": {"id": 1}})


class TestDataIntegrity:
    def test_generated_scene_is_clean(self, scene_generator):
        assert validate_test_data_integrity(scene_generator.generate_scene_data("complex")) == []

    @pytest.mark.parametrize(
        "record, fragment",
        [
            ({"color": -1}, "Invalid color value: -1"),
            ({"color": 0x1000000}, "Invalid color value"),
            ({"ground_color": 0x1000000}, "at ground_color"),
            ({"opacity": 1.5}, "Invalid opacity value: 1.5"),
            ({"opacity": -0.1}, "Invalid opacity value"),
            ({"intensity": -2}, "Invalid intensity value: -2"),
        ],
    )
    def test_out_of_range_values(self, record, fragment):
        errors = validate_test_data_integrity({"material": record})
        assert len(errors) == 1
        assert fragment in errors[0]

    def test_nested_lists_are_checked(self):
        data = {"lights": [{"id": "l1", "intensity": 1.0}, {"id": "l2", "intensity": -1.0}]}
        assert validate_test_data_integrity(data) == ["Invalid intensity value: -1.0 at intensity"]

    def test_booleans_are_not_numbers(self):
        assert validate_test_data_integrity({"color_enabled": True, "opacity_locked": False}) == []

    def test_duplicates_and_ranges_combined(self):
        data = {"a": {"id": "m", "opacity": 2}, "b": {"id": "m"}}
        errors = validate_test_data_integrity(data)
        assert errors[0].startswith("Duplicate ID found: m")
        assert errors[1].startswith("Invalid opacity value")

    def test_non_mapping(self):
        assert validate_test_data_integrity(["x"]) == ["Test data must be an object"]


class TestExecutionResult:
    def test_missing_result(self):
        assert validate_test_execution(None) == ["Test result is null or undefined"]
        assert validate_test_execution({}) == ["Test result is null or undefined"]

    def test_successful_result(self):
        result = {"success": True, "start_time": 1.0, "end_time": 3.0, "duration": 2.0}
        assert validate_test_execution(result) == []

    def test_failure_without_error(self):
        assert validate_test_execution({"success": False}) == [
            "Test failed but no error message provided"
        ]

    def test_failure_with_error(self):
        assert validate_test_execution({"success": False, "error": "boom"}) == []

    def test_negative_duration_and_reversed_timing(self):
        result = {"success": True, "start_time": 5.0, "end_time": 1.0, "duration": -4.0}
        assert validate_test_execution(result) == [
            "Invalid test duration: negative value",
            "Invalid timing: end time before start time",
        ]
