"""Serialization of records to and from plain data, with marshmallow"""

import logging
from functools import lru_cache

from marshmallow import EXCLUDE, Schema, fields, post_load
from marshmallow import ValidationError as SchemaValidationError

from recordkit.exceptions import NotSupportedError, ValidationError
from recordkit.fields import Boolean, Embedded, Float, Integer, Text
from recordkit.utils.reflection import computed_fields
from recordkit.utils.reflection import fields as record_fields

logger = logging.getLogger(__name__)


def _schema_field(field_obj):
    if isinstance(field_obj, Boolean):
        return fields.Boolean(allow_none=True)
    elif isinstance(field_obj, Text):
        return fields.String(allow_none=True)
    elif isinstance(field_obj, Integer):
        return fields.Integer(allow_none=True)
    elif isinstance(field_obj, Float):
        return fields.Float(allow_none=True)
    elif isinstance(field_obj, Embedded):
        return fields.Nested(schema_for(field_obj.record_cls), allow_none=True)
    else:
        raise NotSupportedError("{} Field not supported".format(type(field_obj)))


def _computed_getter(field_name):
    return lambda record: getattr(record, field_name)


@lru_cache(maxsize=None)
def schema_for(record_cls):
    """Return a marshmallow Schema class mirroring the fields of `record_cls`.

    Computed fields are dumped, but ignored on load: the stored fields they
    derive from carry the data. Loading returns a `record_cls` instance.
    """
    schema_fields = {
        field_name: _schema_field(field_obj)
        for field_name, field_obj in record_fields(record_cls).items()
    }

    for field_name in computed_fields(record_cls):
        schema_fields[field_name] = fields.Function(
            _computed_getter(field_name), dump_only=True
        )

    def make_record(self, data, **kwargs):
        return record_cls(**data)

    schema_fields["make_record"] = post_load(make_record)
    schema_fields["Meta"] = type("Meta", (), {"unknown": EXCLUDE})

    logger.debug(f"Built schema for `{record_cls.__name__}`")

    return type(f"{record_cls.__name__}Schema", (Schema,), schema_fields)


def dump(record) -> dict:
    """Return the data of `record`, computed fields included, as a dict"""
    return schema_for(type(record))().dump(record)


def load(record_cls, data: dict):
    """Construct a `record_cls` record from plain data"""
    try:
        return schema_for(record_cls)().load(data)
    except SchemaValidationError as exc:
        raise ValidationError(exc.messages)
