"""Integrity checks for generated datasets and recorded test results.

All checks collect every violation instead of stopping at the first one. The
``validate_*`` functions return the list; :func:`ensure_valid_dataset` raises a
:class:`ValidationError` carrying the full list.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from numbers import Real
from typing import Any, Iterator, List, Optional, Tuple

from ..core.constants import MAX_COLOR_HEX
from ..utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

__all__ = [
    "iter_id_nodes",
    "validate_dataset",
    "ensure_valid_dataset",
    "validate_test_data_integrity",
    "validate_test_execution",
]


def _children(node: Any, path: str) -> Iterator[Tuple[Any, str]]:
    if isinstance(node, list):
        for index, item in enumerate(node):
            yield item, f"{path}[{index}]"
        return
    for key, value in node.items():
        if isinstance(value, (Mapping, list)):
            yield value, f"{path}.{key}"


def iter_id_nodes(dataset: Any, path: str = "") -> Iterator[Tuple[Any, str]]:
    """Yield ``(id, path)`` for every mapping with a non-empty ``id``, depth first.

    Lists are walked at any depth, including lists nested in lists.
    """
    if isinstance(dataset, Mapping):
        node_id = dataset.get("id")
        if node_id is not None and node_id != "":
            yield node_id, path
    elif not isinstance(dataset, list):
        return
    for child, child_path in _children(dataset, path):
        yield from iter_id_nodes(child, child_path)


def _id_key(node_id: Any) -> Any:
    # list/dict ids are compared by their repr
    try:
        hash(node_id)
    except TypeError:
        return (type(node_id).__name__, repr(node_id))
    return node_id


def validate_dataset(dataset: Any) -> List[str]:
    """Report every id that appears more than once in ``dataset``.

    Args:
        dataset: Mapping produced by the scene-data generator (or any nested
            mapping/list structure).

    Returns:
        list[str]: ``"Duplicate ID found: <id> at <path>"`` per repeated id, or a
        single structural error when the root is not a mapping. Empty when valid.
    """
    if not isinstance(dataset, Mapping):
        return ["Dataset must be an object"]

    errors: List[str] = []
    seen = set()
    for node_id, path in iter_id_nodes(dataset):
        key = _id_key(node_id)
        if key in seen:
            errors.append(f"Duplicate ID found: {node_id} at {path}")
        else:
            seen.add(key)
    return errors


def ensure_valid_dataset(dataset: Any) -> None:
    errors = validate_dataset(dataset)
    if errors:
        logger.debug("Dataset validation found %d violations", len(errors))
        raise ValidationError(
            f"Dataset validation failed with {len(errors)} violation(s): {errors[0]}",
            parameter_name="dataset",
            violations=errors,
        )


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _range_violations(node: Any) -> Iterator[str]:
    if isinstance(node, list):
        for item in node:
            yield from _range_violations(item)
        return
    if not isinstance(node, Mapping):
        return

    for key, value in node.items():
        if _is_number(value):
            name = str(key)
            if "color" in name and not 0 <= value <= MAX_COLOR_HEX:
                yield f"Invalid color value: {value} at {name}"
            if "opacity" in name and not 0 <= value <= 1:
                yield f"Invalid opacity value: {value} at {name}"
            if "intensity" in name and value < 0:
                yield f"Invalid intensity value: {value} at {name}"
        elif isinstance(value, (Mapping, list)):
            yield from _range_violations(value)


def validate_test_data_integrity(test_data: Any) -> List[str]:
    """Duplicate-id check plus numeric range checks on color, opacity and intensity fields."""
    if not isinstance(test_data, Mapping):
        return ["Test data must be an object"]

    errors = validate_dataset(test_data)
    errors.extend(_range_violations(test_data))
    return errors


def validate_test_execution(test_result: Optional[Mapping]) -> List[str]:
    """Sanity-check a recorded test result (``testIsolation`` record)."""
    if not test_result:
        return ["Test result is null or undefined"]

    errors: List[str] = []
    if test_result.get("success") is False and not test_result.get("error"):
        errors.append("Test failed but no error message provided")

    duration = test_result.get("duration")
    if duration is not None and duration < 0:
        errors.append("Invalid test duration: negative value")

    start, end = test_result.get("start_time"), test_result.get("end_time")
    if start is not None and end is not None and end < start:
        errors.append("Invalid timing: end time before start time")
    return errors
