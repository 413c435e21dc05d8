"""Module for defining embedded fields"""

from recordkit.exceptions import IncorrectUsageError
from recordkit.fields.base import Field


class Embedded(Field):
    """
    Represents a field that holds another record, owned by the container.

    The embedded record is a live, mutable instance. It belongs to exactly one
    container at a time: assigning a record that is already owned by another
    container is refused, and replacing or clearing the value releases the
    previous record.

    Args:
        record_cls (class): The record class to be embedded.
        delegate (bool | str): When truthy, the container exposes the embedded
            record's getters and setters as its own, forwarding each call. A string
            value is used as a prefix for the delegated accessor names.
    """

    default_error_messages = {
        "invalid": "Value `{value!r}` is not a `{record_name}` record.",
    }

    repr_defaults = {**Field.repr_defaults, "delegate": False}

    def __init__(self, record_cls, delegate=False, **kwargs):
        super().__init__(**kwargs)

        self._validate_record_cls(record_cls)

        self._record_cls_embedded = record_cls
        self.delegate = delegate

    def _validate_record_cls(self, record_cls):
        """Validate that the record class is a subclass of BaseRecord"""
        from recordkit.core.record import BaseRecord

        if not (isinstance(record_cls, type) and issubclass(record_cls, BaseRecord)):
            raise IncorrectUsageError(
                f"`{getattr(record_cls, '__name__', record_cls)}` is not a valid Record "
                "and cannot be embedded in a record"
            )

    @property
    def record_cls(self):
        return self._record_cls_embedded

    @property
    def delegate_prefix(self) -> str:
        """Prefix applied to delegated accessor names, blank when not prefixed"""
        if isinstance(self.delegate, str):
            return self.delegate
        return ""

    def _cast_to_type(self, value):
        # If the supplied value is a dict, construct the record
        if isinstance(value, dict):
            value = self.record_cls(**value)

        if not isinstance(value, self.record_cls):
            self.fail("invalid", value=value, record_name=self.record_cls.__name__)
        return value

    def as_dict(self, value):
        """Return JSON-compatible value of self"""
        return value.to_dict() if value is not None else None

    def __set__(self, instance, value):
        """Override `__set__` to coordinate ownership between container and record"""
        value = self._load(value)

        if value is not None:
            owner = getattr(value, "_owner", None)
            if owner is not None and owner is not instance:
                raise IncorrectUsageError(
                    f"`{value.__class__.__name__}` record is already owned by "
                    f"a `{owner.__class__.__name__}` record"
                )

        self._release(instance)

        if value is None:
            instance.__dict__.pop(self.field_name, None)
        else:
            value._owner = instance
            instance.__dict__[self.field_name] = value

    def __delete__(self, instance):
        self._release(instance)
        instance.__dict__.pop(self.field_name, None)

    def _release(self, instance):
        """Detach the currently held record, if any, from the container"""
        current = instance.__dict__.get(self.field_name)
        if current is not None:
            current._owner = None

    def __repr__(self):
        params = [self.record_cls.__name__, *self._repr_params()]
        return f"{type(self).__name__}({', '.join(params)})"
