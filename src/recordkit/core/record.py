"""Record Functionality and Classes"""

import logging
import sys

import inflection

from recordkit.exceptions import (
    IncorrectUsageError,
    InvalidOperationError,
    MethodNotFoundError,
    MissingReferenceError,
    NotSupportedError,
)
from recordkit.fields import Embedded
from recordkit.utils import derive_element_class
from recordkit.utils.accessors import AccessorKind, setter_name
from recordkit.utils.container import BaseContainer, OptionsMixin
from recordkit.utils.reflection import accessors, computed_fields, fields

logger = logging.getLogger(__name__)


class BaseRecord(BaseContainer, OptionsMixin):
    """The Base class for mutable records.

    Declare a record by subclassing `BaseRecord` and listing its fields::

        class Address(BaseRecord):
            street_name = String()
            city_name = String()

    A getter and a setter are generated for every field when the class is created
    (`get_street_name()`, `set_street_name(value)`), along with accessors for
    computed fields and for fields delegated to embedded records. Records are
    mutated in place: a setter call is visible through every reference to the
    same record.

    Unless the record is declared with `encapsulated = False` in its `Meta`,
    fields can only be written through setters once the record is initialized.
    """

    def __new__(cls, *args, **kwargs):
        if cls is BaseRecord:
            raise NotSupportedError("BaseRecord cannot be instantiated")
        return super().__new__(cls)

    @classmethod
    def _default_options(cls):
        return [
            ("accessors", True),
            ("encapsulated", True),
            ("label", None),
        ]

    def __setattr__(self, name, value):
        if (
            self.__dict__.get("_initialized")
            and self.meta_.encapsulated
            and (name in fields(self) or name in computed_fields(self))
        ):
            raise InvalidOperationError(
                f"`{self.__class__.__name__}.{name}` is encapsulated, "
                f"use `{setter_name(name)}()` to change it"
            )

        super().__setattr__(name, value)

    def __delattr__(self, name):
        if (
            self.__dict__.get("_initialized")
            and self.meta_.encapsulated
            and (name in fields(self) or name in computed_fields(self))
        ):
            raise InvalidOperationError(
                f"`{self.__class__.__name__}.{name}` is encapsulated, "
                f"use `{setter_name(name)}(None)` to clear it"
            )

        super().__delattr__(name)

    def __getattr__(self, name):
        # Only invoked when regular attribute lookup fails
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)

        raise MethodNotFoundError(
            f"`{self.__class__.__name__}` has no registered method or field `{name}`"
        )

    def _write(self, field_name, value):
        """Write a field through its descriptor, bypassing encapsulation"""
        try:
            descriptor = fields(self)[field_name]
        except KeyError:
            descriptor = computed_fields(self)[field_name]

        descriptor.__set__(self, value)

    def _embedded(self, field_name, accessor_name):
        """Return the record embedded under `field_name`, failing if it is unset"""
        value = self.__dict__.get(field_name)
        if value is None:
            raise MissingReferenceError(
                f"`{self.__class__.__name__}.{field_name}` is not set, "
                f"cannot call `{accessor_name}()`"
            )
        return value

    def invoke(self, name, *args, **kwargs):
        """Call `name` on the record, provided it is registered in the accessor table"""
        if name not in accessors(self):
            raise MethodNotFoundError(
                f"`{self.__class__.__name__}` has no registered method `{name}`"
            )

        return getattr(self, name)(*args, **kwargs)

    @classmethod
    def register_method(cls, func=None, *, name=None):
        """Attach a function to the record class and record it in the accessor table.

        Usable as a plain call, `Person.register_method(greet)`, or as a decorator,
        with or without a custom `name`.
        """

        def wrap(func):
            method_name = name or func.__name__
            if method_name.startswith("_"):
                raise IncorrectUsageError(
                    f"Only public methods can be registered, got `{method_name}`"
                )

            setattr(cls, method_name, func)
            return func

        if func is None:
            return wrap

        return wrap(func)

    def describe(self, labels="humanized", missing="<not set>"):
        """Return a human-readable report of all fields of the record.

        Stored, computed and delegated fields are reported one per line. Embedded
        records that are not delegated are reported as an indented section.

        :param labels: `humanized` (`Given name`) or `raw` (`given_name`) labels
        :param missing: Text reported for values that are not set
        """
        title = self.meta_.label or inflection.titleize(self.__class__.__name__)
        return "\n".join([title, *self._describe_lines(labels, missing, "  ")])

    def _describe_lines(self, labels, missing, indent):
        def label(name):
            return inflection.humanize(name) if labels == "humanized" else name

        def display(value):
            return missing if value is None else str(value)

        lines = []

        for field_name, field_obj in fields(self).items():
            value = getattr(self, field_name)

            if not isinstance(field_obj, Embedded):
                lines.append(f"{indent}{label(field_name)}: {display(value)}")
            elif field_obj.delegate:
                # Read through the sub-record's own getters, so that container
                # methods overriding a delegated name do not hide the field
                prefix = field_obj.delegate_prefix
                for target, accessor in accessors(field_obj.record_cls).items():
                    if accessor.kind is not AccessorKind.GETTER:
                        continue
                    if not accessor.field_name:
                        continue

                    name = accessor.field_name
                    if prefix:
                        name = f"{prefix}_{name}"
                    delegated = None if value is None else getattr(value, target)()
                    lines.append(f"{indent}{label(name)}: {display(delegated)}")
            elif value is None:
                lines.append(f"{indent}{label(field_name)}: {missing}")
            else:
                lines.append(f"{indent}{label(field_name)}:")
                lines.extend(value._describe_lines(labels, missing, indent + "  "))

        for field_name in computed_fields(self):
            lines.append(
                f"{indent}{label(field_name)}: {display(getattr(self, field_name))}"
            )

        return lines

    def show(self, file=None, **kwargs):
        """Print the report of `describe()`, to `sys.stdout` by default"""
        print(self.describe(**kwargs), file=file or sys.stdout)


def record_factory(element_cls, catalog=None, **opts):
    """Return a `BaseRecord` subclass built from `element_cls` and options"""
    element_cls = derive_element_class(element_cls, BaseRecord, **opts)

    logger.debug(
        f"Prepared record `{element_cls.__name__}`"
        + (f" for catalog `{catalog.name}`" if catalog is not None else "")
    )

    return element_cls
