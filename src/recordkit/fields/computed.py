"""Module for defining computed fields"""

from typing import Any, Callable, Optional

from recordkit.exceptions import IncorrectUsageError, InvalidOperationError
from recordkit.fields.base import Field, FieldBase
from recordkit.fields.mixins import FieldDescriptorMixin


class Computed(FieldBase, FieldDescriptorMixin):
    """A field derived from other stored fields of the record.

    The value is computed by `fget` on every read and is never stored on the
    instance. When `fset` is supplied, assigning a value back-computes and
    overwrites the backing field(s) instead.

    Computed fields are usually declared with the `computed` decorator::

        class Person(BaseRecord):
            year_of_birth = Integer()

            @computed(field=Integer())
            def age(self):
                return current_year() - self.year_of_birth

            @age.setter
            def age(self, value):
                self.set_year_of_birth(current_year() - value)

    :param fget: Function computing the value from the record.
    :param fset: Optional function storing a value into the backing field(s).
    :param field: Optional field used to cast and validate values passed to `fset`.
    """

    def __init__(
        self,
        fget: Callable[[Any], Any],
        fset: Optional[Callable[[Any, Any], None]] = None,
        field: Optional[Field] = None,
        description: str = None,
    ):
        super().__init__(description=description or fget.__doc__)

        if field is not None and not isinstance(field, Field):
            raise IncorrectUsageError(
                f"`{field!r}` is not a field and cannot type a computed field"
            )

        self.fget = fget
        self.fset = fset
        self.field = field

    def setter(self, fset: Callable[[Any, Any], None]) -> "Computed":
        """Decorator registering the function that writes the computed value back"""
        self.fset = fset
        return self

    @property
    def read_only(self) -> bool:
        return self.fset is None

    def __set_name__(self, record_cls, name):
        super().__set_name__(record_cls, name)

        # Errors raised by the casting field should be reported against this name
        if self.field is not None:
            self.field.field_name = name

    def __get__(self, instance, owner):
        if instance is None:
            return self
        return self.fget(instance)

    def __set__(self, instance, value):
        if self.fset is None:
            raise InvalidOperationError(
                f"`{type(instance).__name__}.{self.field_name}` is read-only"
            )

        if self.field is not None:
            value = self.field._load(value)

        self.fset(instance, value)

    def __delete__(self, instance):
        raise InvalidOperationError(
            f"`{type(instance).__name__}.{self.field_name}` is computed "
            "and cannot be deleted"
        )

    def __repr__(self):
        values = [f"fget={self.fget.__name__}"]
        if self.fset is not None:
            values.append(f"fset={self.fset.__name__}")
        if self.field is not None:
            values.append(f"field={self.field!r}")
        return f"{self.__class__.__name__}(" + ", ".join(values) + ")"


def computed(fget=None, *, field: Optional[Field] = None, description: str = None):
    """Declare a computed field. Usable as `@computed` or `@computed(field=...)`."""

    def wrap(func):
        return Computed(func, field=field, description=description)

    # See if we're being called as @computed or @computed().
    if fget is None:
        # We're called with parens.
        return wrap

    # We're called as @computed without parens.
    return wrap(fget)
