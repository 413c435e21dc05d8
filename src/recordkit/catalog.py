"""A catalog of record types, and the configuration they are declared with"""

import keyword
import logging
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

import inflection

from recordkit.config import Config, ConfigAttribute
from recordkit.core.record import BaseRecord, record_factory
from recordkit.exceptions import IncorrectUsageError, ObjectNotFoundError
from recordkit.fields import (
    Boolean,
    Embedded,
    Field,
    FieldBase,
    Float,
    Integer,
    String,
    Text,
)
from recordkit.utils import fully_qualified_name

logger = logging.getLogger(__name__)

FIELD_TYPES: Dict[str, Type[Field]] = {
    "string": String,
    "str": String,
    "text": Text,
    "integer": Integer,
    "int": Integer,
    "float": Float,
    "boolean": Boolean,
    "bool": Boolean,
}


@dataclass(slots=True)
class RecordEntry:
    """A record type registered in a catalog.

    Attributes:
        name: The class name of the record
        qualname: The fully qualified name of the record
        cls: The record class
    """

    name: str
    qualname: str
    cls: Any

    def __repr__(self) -> str:
        return f"<class {self.name}: {self.qualname}>"


class Catalog:
    """A registry of record types sharing one configuration.

    Record types enter a catalog by decoration, registration or declaration::

        catalog = Catalog("people")

        @catalog.record
        class Address:
            street_name = String()

        Person = catalog.declare(
            "Person", {"givenName": "string", "yearOfBirth": "integer"}
        )

    Configuration is read from a dict (`config`), from the nearest
    `recordkit.toml` / `pyproject.toml` of `root_path`, or defaults.
    """

    sanitize_strings = ConfigAttribute("sanitize_strings")
    accessors = ConfigAttribute("accessors")

    def __init__(
        self,
        name: str = "",
        config: Optional[Dict] = None,
        root_path: Optional[str] = None,
    ):
        self.name = name

        if config is not None:
            self.config = Config.load_from_dict(config)
        elif root_path is not None:
            self.config = Config.load_from_path(root_path)
        else:
            self.config = Config.load_from_dict()

        self._registry: Dict[str, RecordEntry] = {}

    def __repr__(self) -> str:
        return f"<Catalog {self.name!r}: {len(self._registry)} record(s)>"

    @property
    def records(self) -> Dict[str, Type[BaseRecord]]:
        return {name: entry.cls for name, entry in self._registry.items()}

    def _register_record(self, record_cls, **opts) -> Type[BaseRecord]:
        new_cls = record_factory(record_cls, self, **opts)

        existing = self._registry.get(new_cls.__name__)
        if existing is not None and existing.qualname != fully_qualified_name(new_cls):
            raise IncorrectUsageError(
                f"Record `{new_cls.__name__}` is already registered "
                f"as `{existing.qualname}` in catalog `{self.name}`"
            )

        self._registry[new_cls.__name__] = RecordEntry(
            name=new_cls.__name__,
            qualname=fully_qualified_name(new_cls),
            cls=new_cls,
        )
        logger.debug(f"Registered record `{new_cls.__name__}` in `{self.name}`")

        return new_cls

    def record(self, _cls=None, **kwargs):
        """Register the decorated class as a record, deriving it from `BaseRecord`"""

        def wrap(cls):
            return self._register_record(cls, **kwargs)

        # See if we're being called as @record or @record().
        if _cls is None:
            # We're called with parens.
            return wrap

        # We're called as @record without parens.
        return wrap(_cls)

    def register(self, record_cls, **kwargs) -> Type[BaseRecord]:
        """Register a record class with the catalog, returning the registered class"""
        return self._register_record(record_cls, **kwargs)

    def get(self, name: str) -> Type[BaseRecord]:
        try:
            return self._registry[name].cls
        except KeyError:
            raise ObjectNotFoundError(
                f"Record `{name}` is not registered in catalog `{self.name}`"
            )

    def declare(
        self, name: str, field_types: Dict[str, Any], **opts
    ) -> Type[BaseRecord]:
        """Declare a record type from a mapping of field names to field types.

        Field names are normalized to snake_case. Field types can be type names
        (`"string"`, `"integer"`, ...), `Field` classes or instances, or record
        classes, which are embedded.
        """
        if not name.isidentifier() or keyword.iskeyword(name):
            raise IncorrectUsageError(f"`{name}` is not a valid record name")

        attrs = {"__module__": __name__, "__qualname__": name}
        for field_name, spec in field_types.items():
            attr_name = inflection.underscore(field_name)
            if not attr_name.isidentifier() or keyword.iskeyword(attr_name):
                raise IncorrectUsageError(
                    f"`{field_name}` is not a valid field name for `{name}`"
                )
            if attr_name in attrs:
                raise IncorrectUsageError(
                    f"Field `{field_name}` collides with `{attr_name}` in `{name}`"
                )
            attrs[attr_name] = self._field_from_spec(spec, field_name)

        opts.setdefault("accessors", self.accessors)

        return self._register_record(type(name, (), attrs), **opts)

    def _field_from_spec(self, spec, field_name):
        if isinstance(spec, FieldBase):
            return spec

        if isinstance(spec, str):
            field_cls = FIELD_TYPES.get(spec.lower())
        elif isinstance(spec, type) and issubclass(spec, BaseRecord):
            return Embedded(spec)
        elif isinstance(spec, type) and issubclass(spec, Field):
            field_cls = spec
        else:
            field_cls = None

        if field_cls is None:
            raise IncorrectUsageError(
                f"Unknown type `{spec!r}` for field `{field_name}`. "
                f"Supported types are {sorted(FIELD_TYPES)}"
            )

        if issubclass(field_cls, Text):
            return field_cls(sanitize=self.sanitize_strings)

        return field_cls()

    def describe(self, record: BaseRecord) -> str:
        """Describe a record with the catalog's configured labels"""
        return record.describe(
            labels=self.config["describe"]["labels"],
            missing=self.config["describe"]["missing"],
        )

    def show(self, record: BaseRecord, file=None) -> None:
        print(self.describe(record), file=file or sys.stdout)
