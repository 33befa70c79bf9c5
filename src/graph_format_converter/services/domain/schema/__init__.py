"""
Attribute Schema Domain

Handles the typed attribute schemas of nodes and edges:
- Type inference for sources without declarations (JSON, Graphology)
- Reserved-key reconciliation (well-known fields vs free-form attributes)
- Typed value recovery from XML text
"""

from .reserved_keys import (
    RESERVED_KEYS,
    ReservedKey,
    is_reserved,
    is_xml_reserved,
    missing_reserved_declarations,
    reserved_names,
    xml_reserved_names,
    split_element_fields,
)
from .type_inference import infer_attribute_schema, undeclared_attribute_schema

__all__ = [
    # Inference
    "infer_attribute_schema",
    "undeclared_attribute_schema",
    # Reserved keys
    "RESERVED_KEYS",
    "ReservedKey",
    "is_reserved",
    "is_xml_reserved",
    "reserved_names",
    "xml_reserved_names",
    "split_element_fields",
    "missing_reserved_declarations",
]
