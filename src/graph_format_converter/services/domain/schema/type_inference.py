#!/usr/bin/env python3
"""
Attribute schema inference for sources without schema declarations.

JSON and Graphology documents carry free-form attribute values with no type
declarations. The schema is deduced by a majority vote over the runtime type
of every value observed for a key:

    nodes: {a: 1}, {a: 2}, {a: "x"}   ->   a: number (2 votes against 1)

Ties go to the type that was observed first for that key. The tally keeps
types in first-observation order and ``max`` returns the first maximal entry,
which gives that order its meaning.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ....models.models import AttributeDescriptor, AttributeType

logger = logging.getLogger(__name__)


def runtime_type(value: Any) -> AttributeType:
    """Classify a value as boolean, number or string.

    bool is tested before int because bool is an int subclass. Values of any
    other type (lists, dicts, None) count as strings since every target format
    serializes them as text.
    """
    if isinstance(value, bool):
        return AttributeType.BOOLEAN
    if isinstance(value, (int, float)):
        return AttributeType.NUMBER
    return AttributeType.STRING


def tally_attribute_types(attribute_maps: Iterable[Mapping[str, Any]]) -> dict[str, dict[AttributeType, int]]:
    """Count, per key, how many values of each runtime type were observed.

    Args:
        attribute_maps: One attribute mapping per element

    Returns:
        Dict mapping key to {type: count}, both levels in first-seen order
    """
    tally: dict[str, dict[AttributeType, int]] = {}
    for attributes in attribute_maps:
        for key, value in attributes.items():
            counts = tally.setdefault(key, {})
            value_type = runtime_type(value)
            counts[value_type] = counts.get(value_type, 0) + 1
    return tally


def infer_attribute_schema(attribute_maps: Iterable[Mapping[str, Any]]) -> list[AttributeDescriptor]:
    """Deduce a typed attribute schema from free-form attribute mappings.

    Args:
        attribute_maps: One attribute mapping per element (all nodes, or all edges)

    Returns:
        One descriptor per observed key, in first-seen key order, titled by key
    """
    descriptors = []
    for key, counts in tally_attribute_types(attribute_maps).items():
        winner = max(counts.items(), key=lambda item: item[1])[0]
        if len(counts) > 1:
            logger.debug(f"Attribute '{key}' has mixed types {dict(counts)}, inferred {winner.value}")
        descriptors.append(AttributeDescriptor(id=key, title=key, type=winner))

    return descriptors


def undeclared_attribute_schema(
    descriptors: Iterable[AttributeDescriptor],
    attribute_maps: Iterable[Mapping[str, Any]],
) -> list[AttributeDescriptor]:
    """Infer descriptors for attribute keys that are used but not declared.

    XML formats require every attvalue/data key to reference a declaration;
    exporters use this to complete a schema before writing it.
    """
    declared = {descriptor.id for descriptor in descriptors}
    undeclared_maps = [
        {key: value for key, value in attributes.items() if key not in declared}
        for attributes in attribute_maps
    ]
    synthesized = infer_attribute_schema(undeclared_maps)
    if synthesized:
        logger.debug(f"Synthesized declarations for undeclared attributes: {[d.id for d in synthesized]}")
    return synthesized
