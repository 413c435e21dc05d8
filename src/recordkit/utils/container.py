from __future__ import annotations

import copy
import inspect
import logging
from collections import defaultdict
from typing import Any, Type, Union

from recordkit.exceptions import (
    ConfigurationError,
    IncorrectUsageError,
    InvalidDataError,
    NotSupportedError,
    ValidationError,
)
from recordkit.fields import FieldBase
from recordkit.fields.computed import Computed
from recordkit.utils.accessors import (
    AccessorSource,
    declared_accessor,
    finalize_accessors,
    is_public_method,
)
from recordkit.utils.reflection import (
    _ACCESSORS,
    _COMPUTED_FIELDS,
    _FIELDS,
    _FINALIZED,
    computed_fields,
    fields,
)

logger = logging.getLogger(__name__)


class Options:
    """Metadata info for the Container.

    Common options:
    - ``abstract``: Indicates that this is an abstract container (Ignores all other meta options)
    """

    def __init__(self, opts: Union[dict, Type, Options] = None) -> None:
        self._opts = set()

        if opts:
            if isinstance(opts, (self.__class__)) or inspect.isclass(opts):
                attributes = inspect.getmembers(
                    opts, lambda a: not (inspect.isroutine(a))
                )
                for attr in attributes:
                    if not (
                        attr[0].startswith("__") and attr[0].endswith("__")
                    ) and attr[0] not in ["_opts"]:
                        setattr(self, attr[0], attr[1])

                self.abstract = getattr(opts, "abstract", None) or False
            elif isinstance(opts, dict):
                for opt_name, opt_value in opts.items():
                    setattr(self, opt_name, opt_value)

                self.abstract = opts.get("abstract", None) or False
        else:
            # Common Meta attributes
            self.abstract = getattr(opts, "abstract", None) or False

    def __setattr__(self, __name: str, __value: Any) -> None:
        # Ignore if `_opts` is being set
        if __name != "_opts":
            self._opts.add(__name)

        super().__setattr__(__name, __value)

    def __delattr__(self, __name: str) -> None:
        self._opts.discard(__name)

        super().__delattr__(__name)

    def __eq__(self, other) -> bool:
        """Equivalence check based only on data."""
        if type(other) is not type(self):
            return False

        return self.__dict__ == other.__dict__

    def __add__(self, other: Options) -> Options:
        new_options = copy.copy(self)
        new_options._opts = set(self._opts)
        for opt in other._opts:
            setattr(new_options, opt, getattr(other, opt))

        return new_options


class OptionsMixin:
    def __init_subclass__(subclass) -> None:
        """Setup Options metadata on elements

        Args:
            subclass (recordkit Element): Subclass to initialize with metadata
        """
        if not hasattr(subclass, "meta_"):
            setattr(subclass, "meta_", Options())

        # Assign default options
        subclass._set_defaults()

        super().__init_subclass__()

    @classmethod
    def _set_defaults(cls):
        # Assign default options for remaining items
        #   with the help of `_default_options()` method defined in the Element's Root.
        for key, default in cls._default_options():
            if not (hasattr(cls.meta_, key) and getattr(cls.meta_, key) is not None):
                setattr(cls.meta_, key, default)


class ContainerMeta(type):
    """
    This base metaclass processes the class declaration and
    constructs a meta object that can be used to introspect
    the concrete Container class later.

    It gathers fields (stored and computed) in declaration order, builds the
    `meta_` options from the parent's options and an inner `Meta` class, and
    finalizes the accessor table of the class in one step. Public methods
    attached to the class after that step are recorded in the same table.
    """

    def __new__(mcs, name, bases, attrs, **kwargs):
        """Initialize Container MetaClass and load attributes"""

        # Ensure initialization is only performed for subclasses of Container
        # (excluding Container class itself).
        parents = [b for b in bases if isinstance(b, ContainerMeta)]
        if not parents:
            return super().__new__(mcs, name, bases, attrs)

        # Gather fields in the order specified, starting with base classes
        fields_dict = {}
        computed_dict = {}

        # ... from base classes first
        for base in reversed(bases):
            if hasattr(base, _FIELDS):
                fields_dict.update(fields(base))
                computed_dict.update(computed_fields(base))

        # ... Apply own fields next
        for attr_name, attr_obj in attrs.items():
            if isinstance(attr_obj, Computed):
                fields_dict.pop(attr_name, None)
                computed_dict[attr_name] = attr_obj
            elif isinstance(attr_obj, FieldBase):
                computed_dict.pop(attr_name, None)
                fields_dict[attr_name] = attr_obj

        mcs._check_field_names(name, bases, attrs)

        # Gather all non-field attributes
        dup_attrs = {
            attr_name: attr_obj
            for attr_name, attr_obj in attrs.items()
            if attr_name not in fields_dict and attr_name not in computed_dict
        }

        # Insert fields in the order in which they were specified
        #   When field names overlap, the last specified field wins
        dup_attrs.update({k: v for k, v in attrs.items() if k in fields_dict})
        dup_attrs.update({k: v for k, v in attrs.items() if k in computed_dict})

        # Store fields in special attributes for later reference
        dup_attrs[_FIELDS] = fields_dict
        dup_attrs[_COMPUTED_FIELDS] = computed_dict

        # Options are inherited from the parent, except `abstract`,
        #   and overridden by the inner `Meta` class
        meta = dup_attrs.pop("Meta", None)
        if "meta_" not in dup_attrs:
            parent_meta = next(
                (base.meta_ for base in bases if hasattr(base, "meta_")), None
            )
            dup_attrs["meta_"] = Options(parent_meta) + Options(meta)

        new_class = super().__new__(mcs, name, bases, dup_attrs, **kwargs)

        mcs._validate_options(new_class)

        # Single finalization step: generated and declared accessors together
        table = finalize_accessors(new_class, new_class.__dict__)
        type.__setattr__(new_class, _ACCESSORS, table)
        type.__setattr__(new_class, _FINALIZED, True)

        return new_class

    @staticmethod
    def _check_field_names(name, bases, attrs):
        """Reject fields shadowing a method or attribute inherited by the record"""
        for attr_name, attr_obj in attrs.items():
            if not isinstance(attr_obj, FieldBase):
                continue

            for base in bases:
                # Redeclaring an inherited field is allowed
                if attr_name in getattr(base, _FIELDS, {}) or attr_name in getattr(
                    base, _COMPUTED_FIELDS, {}
                ):
                    continue

                if hasattr(base, attr_name) or attr_name in getattr(
                    base, "_internal_attributes", ()
                ):
                    raise IncorrectUsageError(
                        f"Field `{attr_name}` of `{name}` would shadow "
                        f"`{base.__name__}.{attr_name}`"
                    )

    @staticmethod
    def _validate_options(new_class):
        known_options = {name for name, _ in new_class._default_options()}
        known_options.add("abstract")
        unknown = new_class.meta_._opts - known_options
        if unknown:
            raise ConfigurationError(
                f"Unknown option(s) {sorted(unknown)} in `{new_class.__name__}`"
            )

    def __setattr__(cls, name, value):
        if not cls.__dict__.get(_FINALIZED, False):
            return super().__setattr__(name, value)

        if isinstance(value, FieldBase):
            raise IncorrectUsageError(
                f"Field `{name}` cannot be added to `{cls.__name__}` after it is created"
            )

        super().__setattr__(name, value)

        if is_public_method(name, value):
            cls.__dict__[_ACCESSORS][name] = declared_accessor(
                name, AccessorSource.REGISTERED
            )
            logger.debug(f"Registered method `{cls.__name__}.{name}`")

    def __delattr__(cls, name):
        super().__delattr__(name)
        cls.__dict__.get(_ACCESSORS, {}).pop(name, None)


class BaseContainer(metaclass=ContainerMeta):
    """The Base class for recordkit Data Containers.

    Provides helper methods to custom define attributes, and find attribute names
    during runtime.
    """

    # Instance attributes, besides fields, that may be assigned on a container
    _internal_attributes = ("errors", "_initialized", "_owner")

    def __new__(cls, *args, **kwargs):
        if cls is BaseContainer:
            raise NotSupportedError("BaseContainer cannot be instantiated")
        return super().__new__(cls)

    def __init__(self, *template, **kwargs):  # noqa: C901
        """
        Initialise the container.

        During initialization, set value on fields if validation passes.

        This initialization technique supports keyword arguments as well as dictionaries. You
            can even use a template for initial data. Computed fields may be supplied
            too; they are applied once all stored fields are loaded.
        """
        self._initialized = False
        self._owner = None

        if self.meta_.abstract is True:
            raise NotSupportedError(
                f"{self.__class__.__name__} class has been marked abstract"
                f" and cannot be instantiated"
            )

        self.errors = defaultdict(list)

        computed_values = {}

        # Load the attributes based on the template
        values = {}
        for dictionary in template:
            if not isinstance(dictionary, dict):
                raise AssertionError(
                    f'Positional argument "{dictionary}" passed must be a dict.'
                    f"This argument serves as a template for loading common "
                    f"values.",
                )
            values.update(dictionary)

        # Keyword arguments override template values
        values.update(kwargs)

        loaded_fields = []
        for field_name, val in values.items():
            if field_name in computed_fields(self):
                computed_values[field_name] = val
                continue

            # Record that a field was encountered by appending to `loaded_fields`
            #   When it fails validations, we want it's errors to be recorded
            loaded_fields.append(field_name)
            self._load_field(field_name, val)

        # Now load the remaining fields with a None value, which will fail
        # for required fields
        for field_name in fields(self):
            if field_name not in loaded_fields:
                self._load_field(field_name, None)

        # Computed fields write through to their backing fields
        for field_name, val in computed_values.items():
            if field_name not in self.errors:
                self._load_field(field_name, val)

        self.defaults()

        self._initialized = True

        # Raise any errors found during load
        if self.errors:
            logger.error(dict(self.errors))
            raise ValidationError(dict(self.errors))

    def _load_field(self, field_name, value):
        try:
            setattr(self, field_name, value)
        except ValidationError as err:
            for error_field_name in err.messages:
                self.errors[error_field_name].extend(err.messages[error_field_name])

    def defaults(self):
        """Placeholder method for defaults.
        To be overridden in concrete Containers, when an attribute's default depends on other attribute values.
        """

    def __eq__(self, other):
        """Equivalence check for containers is based only on data.

        Two container objects are considered equal if they have the same data.
        """
        if type(other) is not type(self):
            return False

        return self.to_dict() == other.to_dict()

    # Containers are mutable, and so are not hashable
    __hash__ = None

    def __repr__(self):
        return "<%s: %s>" % (self.__class__.__name__, self)

    def __str__(self):
        return "%s object (%s)" % (
            self.__class__.__name__,
            "{}".format(self.to_dict()),
        )

    def __setattr__(self, name, value):
        if (
            name in fields(self)
            or name in computed_fields(self)
            or name in self._internal_attributes
        ):
            super().__setattr__(name, value)
        else:
            raise InvalidDataError({name: ["is invalid"]})

    def to_dict(self):
        """Return stored data as a dictionary. Computed values are not included."""
        return {
            field_name: field_obj.as_dict(getattr(self, field_name, None))
            for field_name, field_obj in fields(self).items()
        }

    @classmethod
    def _default_options(cls):
        return []
