"""Accessor generation for record types.

Every record class goes through a single finalization step when it is created.
The step builds the accessor table of the class: the getters and setters
generated for its fields, the accessors of its computed fields, the accessors
delegated to embedded records, and every public method declared on the class or
its plain mixins. Methods attached to the class afterwards are added to the same
table by the record metaclass.
"""

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from recordkit.exceptions import IncorrectUsageError
from recordkit.utils.reflection import (
    _ACCESSORS,
    accessors,
    computed_fields,
    fields,
)

logger = logging.getLogger(__name__)


class AccessorKind(Enum):
    GETTER = "getter"
    SETTER = "setter"
    METHOD = "method"


class AccessorSource(Enum):
    GENERATED = "generated"  # Getter/Setter pair of a stored field
    COMPUTED = "computed"  # Getter/Setter pair of a computed field
    DELEGATED = "delegated"  # Forwarded to an embedded record
    DECLARED = "declared"  # Defined in the class body, or in a plain mixin
    REGISTERED = "registered"  # Attached to the class after its creation


GENERATED_SOURCES = (
    AccessorSource.GENERATED,
    AccessorSource.COMPUTED,
    AccessorSource.DELEGATED,
)


@dataclass(frozen=True, slots=True)
class Accessor:
    """An entry of a record type's accessor table.

    Attributes:
        name: Name under which the callable is reachable on the record
        kind: Getter, setter or any other method
        source: How the entry came into the table
        field_name: Field read or written by the accessor, if any
        via: Embedded field through which a delegated accessor forwards its call
    """

    name: str
    kind: AccessorKind
    source: AccessorSource
    field_name: Optional[str] = None
    via: Optional[str] = None

    def __repr__(self) -> str:
        return f"<Accessor {self.name}: {self.kind.value} ({self.source.value})>"


def getter_name(field_name: str, prefix: str = "") -> str:
    return f"get_{prefix}_{field_name}" if prefix else f"get_{field_name}"


def setter_name(field_name: str, prefix: str = "") -> str:
    return f"set_{prefix}_{field_name}" if prefix else f"set_{field_name}"


def is_public_method(name: str, value) -> bool:
    """Check if a class attribute is a public method to be recorded"""
    if name.startswith("_"):
        return False
    return inspect.isfunction(value) or isinstance(value, (staticmethod, classmethod))


def kind_of(name: str) -> AccessorKind:
    if name.startswith("get_"):
        return AccessorKind.GETTER
    if name.startswith("set_"):
        return AccessorKind.SETTER
    return AccessorKind.METHOD


def declared_accessor(name: str, source=AccessorSource.DECLARED) -> Accessor:
    kind = kind_of(name)
    field_name = name[4:] if kind is not AccessorKind.METHOD else None
    return Accessor(name, kind, source, field_name=field_name)


def _named(func: Callable, name: str, record_cls: type, doc: str) -> Callable:
    func.__name__ = name
    func.__qualname__ = f"{record_cls.__qualname__}.{name}"
    func.__module__ = record_cls.__module__
    func.__doc__ = doc
    return func


def make_getter(record_cls, field_name: str, name: str) -> Callable:
    def getter(self):
        return getattr(self, field_name)

    return _named(getter, name, record_cls, f"Return the value of `{field_name}`.")


def make_setter(record_cls, field_name: str, name: str) -> Callable:
    def setter(self, value):
        self._write(field_name, value)
        return self

    return _named(
        setter,
        name,
        record_cls,
        f"Replace the value of `{field_name}` and return the record.",
    )


def make_delegating_getter(record_cls, via: str, target: str, name: str) -> Callable:
    def getter(self):
        return getattr(self._embedded(via, name), target)()

    return _named(getter, name, record_cls, f"Forward to `{via}.{target}()`.")


def make_delegating_setter(record_cls, via: str, target: str, name: str) -> Callable:
    def setter(self, value):
        getattr(self._embedded(via, name), target)(value)
        return self

    return _named(
        setter,
        name,
        record_cls,
        f"Forward to `{via}.{target}(value)` and return the container.",
    )


def _selected(record_cls) -> Callable[[str], bool]:
    """Return a predicate telling if accessors are generated for a field name"""
    option = record_cls.meta_.accessors

    if option is True:
        return lambda field_name: True
    if not option:
        return lambda field_name: False

    known = set(fields(record_cls)) | set(computed_fields(record_cls))
    unknown = [name for name in option if name not in known]
    if unknown:
        raise IncorrectUsageError(
            f"Accessors requested for unknown field(s) {unknown} "
            f"in `{record_cls.__name__}`"
        )

    return lambda field_name: field_name in option


def _declared_methods(record_cls, attrs):
    """Gather public methods from the class body and from plain (non-record) bases"""
    methods = {}
    for klass in reversed(record_cls.__mro__):
        if klass is object:
            continue
        if klass is record_cls:
            namespace = attrs
        elif _ACCESSORS in klass.__dict__:
            # Record classes contribute through their own accessor tables
            continue
        else:
            namespace = klass.__dict__

        for name, value in namespace.items():
            if is_public_method(name, value):
                methods[name] = declared_accessor(name)

    return methods


def finalize_accessors(record_cls, attrs) -> dict:
    """Build the accessor table of `record_cls` and install generated accessors.

    Explicitly declared methods always win over generated accessors of the same
    name. Two generated accessors, for different fields, resolving to the same
    name are a declaration error.
    """
    inherited = {}
    for base in record_cls.__bases__:
        if hasattr(base, _ACCESSORS):
            inherited.update(accessors(base))

    table = _declared_methods(record_cls, attrs)
    generated = {}
    funcs = {}

    def add(accessor: Accessor, func: Callable):
        owner = (accessor.field_name, accessor.via)

        if accessor.name in table or (
            accessor.name in inherited
            and inherited[accessor.name].source not in GENERATED_SOURCES
        ):
            logger.debug(
                f"Keeping declared `{record_cls.__name__}.{accessor.name}` "
                f"over the generated {accessor.kind.value}"
            )
            return

        for existing in (generated.get(accessor.name), inherited.get(accessor.name)):
            if existing is not None and (existing.field_name, existing.via) != owner:
                raise IncorrectUsageError(
                    f"Accessor `{accessor.name}` of `{record_cls.__name__}` is generated "
                    f"for both `{existing.via or existing.field_name}` and "
                    f"`{accessor.via or accessor.field_name}`"
                )

        generated[accessor.name] = accessor
        funcs[accessor.name] = func

    is_selected = _selected(record_cls)

    for field_name, field_obj in fields(record_cls).items():
        if field_name not in attrs:
            continue

        if is_selected(field_name):
            name = getter_name(field_name)
            add(
                Accessor(name, AccessorKind.GETTER, AccessorSource.GENERATED, field_name),
                make_getter(record_cls, field_name, name),
            )
            name = setter_name(field_name)
            add(
                Accessor(name, AccessorKind.SETTER, AccessorSource.GENERATED, field_name),
                make_setter(record_cls, field_name, name),
            )

        if getattr(field_obj, "delegate", False):
            _add_delegates(record_cls, field_name, field_obj, add)

    for field_name, field_obj in computed_fields(record_cls).items():
        if field_name not in attrs or not is_selected(field_name):
            continue

        name = getter_name(field_name)
        add(
            Accessor(name, AccessorKind.GETTER, AccessorSource.COMPUTED, field_name),
            make_getter(record_cls, field_name, name),
        )
        if not field_obj.read_only:
            name = setter_name(field_name)
            add(
                Accessor(name, AccessorKind.SETTER, AccessorSource.COMPUTED, field_name),
                make_setter(record_cls, field_name, name),
            )

    for name, accessor in generated.items():
        # Bypass the metaclass, generated accessors are recorded below
        type.__setattr__(record_cls, name, funcs[name])
        table[name] = accessor

    logger.debug(
        f"Finalized `{record_cls.__name__}` with {len(table)} accessor(s): "
        f"{', '.join(table)}"
    )

    return table


def _add_delegates(record_cls, field_name, field_obj, add):
    prefix = field_obj.delegate_prefix

    for target, accessor in accessors(field_obj.record_cls).items():
        if accessor.kind is AccessorKind.METHOD or accessor.field_name is None:
            continue

        if accessor.kind is AccessorKind.GETTER:
            name = getter_name(accessor.field_name, prefix)
            func = make_delegating_getter(record_cls, field_name, target, name)
        else:
            name = setter_name(accessor.field_name, prefix)
            func = make_delegating_setter(record_cls, field_name, target, name)

        add(
            Accessor(
                name,
                accessor.kind,
                AccessorSource.DELEGATED,
                field_name=accessor.field_name,
                via=field_name,
            ),
            func,
        )
