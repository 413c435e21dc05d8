"""Module for defining base Field class"""

from abc import ABCMeta, abstractmethod
from typing import Any, Callable, Iterable, List

from recordkit import exceptions
from recordkit.fields.mixins import FieldDescriptorMixin


class FieldBase:
    """Base class for all recordkit fields.

    A marker class to support attribute discovery when a record class is created.
    Stored fields and computed fields both derive from it.
    """


class Field(FieldBase, FieldDescriptorMixin, metaclass=ABCMeta):
    """
    Base class for all stored fields of a record.

    Fields are descriptors: they are assigned to a class attribute, and are given
    a name on the class when the record class is created. The value itself is
    stored in the `__dict__` of the record instance, NEVER on the field, so two
    instances of the same record type never share state.

    Every write goes through `_load`, which casts the value to the field's type
    and runs its validators before anything is stored. A value that fails is
    never stored, so the record keeps its previous value.

    Parameters:
    - `description`: A human-readable description of the field.
    - `default`: Value, or callable returning it, used when no value is given.
    - `required`: The field must hold a value.
    - `validators`: Callables raising `ValidationError` for unacceptable values.
    - `error_messages`: Overrides for the messages in `default_error_messages`.
    """

    default_error_messages = {
        "invalid": "Value is not a valid type for this field.",
        "required": "is required",
    }

    # Constructor arguments shown by `repr()` when they differ from these values
    repr_defaults = {"description": None, "required": False, "default": None}

    def __init__(
        self,
        description: str = None,
        default: Any = None,
        required: bool = False,
        validators: Iterable[Callable] = (),
        error_messages: dict = None,
    ):
        super().__init__(description=description)

        self.default = default
        self.required = required
        self._validators = list(validators)

        self.error_messages = {}
        for klass in reversed(type(self).__mro__):
            self.error_messages.update(vars(klass).get("default_error_messages", {}))
        self.error_messages.update(error_messages or {})

    def __get__(self, instance, owner):
        if instance is None:
            return self
        return instance.__dict__.get(self.field_name)

    def __set__(self, instance, value):
        instance.__dict__[self.field_name] = self._load(value)

    def __delete__(self, instance):
        instance.__dict__.pop(self.field_name, None)

    @property
    def error_key(self) -> str:
        # A field used on its own, outside of a record, has no name yet
        return self.field_name or "unlinked"

    @property
    def validators(self) -> List[Callable]:
        return [*self._builtin_validators(), *self._validators]

    def _builtin_validators(self) -> List[Callable]:
        """Validators implied by the field's own arguments, like length limits"""
        return []

    def fail(self, key, **kwargs):
        """Raise a `ValidationError` against this field, with the message of `key`"""
        if key not in self.error_messages:
            raise exceptions.ValidationError(
                {key: [f"`{type(self).__name__}` has no error message for `{key}`"]}
            )

        message = self.error_messages[key].format(**kwargs)
        raise exceptions.ValidationError({self.error_key: [message]})

    @staticmethod
    def is_empty(value) -> bool:
        """`None` and empty strings or collections count as no value"""
        if isinstance(value, (str, list, tuple, dict)):
            return len(value) == 0
        return value is None

    def _load(self, value: Any):
        """Cast and validate `value`, and return what the record stores"""
        if self.is_empty(value):
            if self.default is not None:
                return self.default() if callable(self.default) else self.default
            if self.required:
                self.fail("required")
            if value is None:
                return None

        value = self._cast_to_type(value)
        self._validate(value)

        return value

    def _validate(self, value):
        if self.is_empty(value):
            return

        messages = []
        for validator in self.validators:
            try:
                validator(value)
            except exceptions.ValidationError as err:
                messages.append(err.messages)

        if messages:
            raise exceptions.ValidationError({self.error_key: messages})

    @abstractmethod
    def _cast_to_type(self, value: Any) -> Any:
        """Convert `value` to the field's type, calling `fail("invalid")` when it can't"""

    def as_dict(self, value: Any) -> Any:
        """Return JSON-compatible value of field"""
        return value

    def _repr_params(self) -> List[str]:
        params = []
        for name, default in self.repr_defaults.items():
            value = getattr(self, name)
            if value != default:
                shown = value.__name__ if callable(value) else repr(value)
                params.append(f"{name}={shown}")
        return params

    def __repr__(self):
        return f"{type(self).__name__}({', '.join(self._repr_params())})"
