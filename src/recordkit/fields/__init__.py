from . import validators
from .base import Field, FieldBase
from .basic import Boolean, Float, Integer, String, Text
from .computed import Computed, computed
from .embedded import Embedded

__all__ = [
    "Boolean",
    "Computed",
    "computed",
    "Embedded",
    "Field",
    "FieldBase",
    "Float",
    "Integer",
    "String",
    "Text",
    "validators",
]
