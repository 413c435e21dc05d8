from typing import Any

from recordkit.exceptions import IncorrectUsageError

_FIELDS = "__record_fields__"
_COMPUTED_FIELDS = "__record_computed_fields__"
_ACCESSORS = "__record_accessors__"
_FINALIZED = "__record_finalized__"


def _record_cls(class_or_instance: Any) -> type:
    return class_or_instance if isinstance(class_or_instance, type) else type(
        class_or_instance
    )


def fields(class_or_instance):
    """Return a dict of the stored fields of this record, in declaration order.

    Accepts a record class or an instance of one. Computed fields are not
    stored, and are returned by `computed_fields` instead.
    """
    try:
        fields_dict = getattr(class_or_instance, _FIELDS)
    except AttributeError:
        raise IncorrectUsageError(f"{class_or_instance} does not have fields")

    return fields_dict


def has_fields(class_or_instance):
    """Check if the class or instance encloses fields"""
    return hasattr(class_or_instance, _FIELDS)


def declared_fields(class_or_instance):
    """Return a copy of the stored fields, safe to be modified by the caller"""
    return dict(fields(class_or_instance))


def data_fields(class_or_instance):
    """Return the stored fields that hold plain values (no embedded records)"""
    return {
        field_name: field_obj
        for field_name, field_obj in fields(class_or_instance).items()
        if not hasattr(field_obj, "record_cls")
    }


def embedded_fields(class_or_instance):
    """Return the stored fields that hold embedded records"""
    return {
        field_name: field_obj
        for field_name, field_obj in fields(class_or_instance).items()
        if hasattr(field_obj, "record_cls")
    }


def computed_fields(class_or_instance):
    """Return the computed fields of this record, in declaration order"""
    try:
        return getattr(class_or_instance, _COMPUTED_FIELDS)
    except AttributeError:
        raise IncorrectUsageError(f"{class_or_instance} does not have fields")


def accessors(class_or_instance):
    """Return the accessor table of a record class or instance.

    The table maps every callable name registered on the record type to its
    `Accessor` description. Tables of parent record classes are merged in, with
    entries of subclasses taking precedence.
    """
    if not has_fields(class_or_instance):
        raise IncorrectUsageError(f"{class_or_instance} does not have fields")

    table = {}
    for klass in reversed(_record_cls(class_or_instance).__mro__):
        table.update(klass.__dict__.get(_ACCESSORS, {}))

    return table
