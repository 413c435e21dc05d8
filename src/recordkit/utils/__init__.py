"""Utility module for recordkit

Definitions/declaractions in this module should be independent of other modules,
to the maximum extent possible.
"""

from __future__ import annotations

import importlib.metadata
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Type

from recordkit.exceptions import ConfigurationError

if TYPE_CHECKING:
    from recordkit.utils.container import BaseContainer

logger = logging.getLogger(__name__)


def utcnow_func() -> datetime:
    """Return the current time in UTC with timezone information"""
    return datetime.now(UTC)


def current_year() -> int:
    """Return the current calendar year, as seen by `utcnow_func`"""
    return utcnow_func().year


def get_version() -> str:
    return importlib.metadata.version("recordkit")


def fully_qualified_name(cls) -> str:
    """Return Fully Qualified name along with module"""
    return ".".join([cls.__module__, cls.__qualname__])


def derive_element_class(
    element_cls: Type[BaseContainer] | Type[Any],
    base_cls: Type[BaseContainer],
    **opts: Any,
) -> Type[BaseContainer]:
    """Return a class derived from `base_cls` carrying the body of `element_cls`.

    Options are passed on to the derived class as its `Meta`. Plain classes are
    rebuilt on top of `base_cls`; classes that already subclass `base_cls` are
    subclassed once more when options have to be applied.
    """
    # Ensure options being passed in are known
    known_options = [name for (name, _) in base_cls._default_options()]
    if not all(opt in known_options for opt in opts):
        raise ConfigurationError(f"Unknown option(s) {set(opts) - set(known_options)}")

    if not issubclass(element_cls, base_cls):
        try:
            new_dict = element_cls.__dict__.copy()
            new_dict.pop("__dict__", None)  # Remove __dict__ to prevent recursion
            new_dict.pop("__weakref__", None)

            meta = new_dict.pop("Meta", None)
            new_dict["Meta"] = _merge_meta(meta, opts)

            element_cls = type(element_cls.__name__, (base_cls,), new_dict)
        except BaseException as exc:
            logger.debug(f"Error during Element registration: {exc!r}")
            raise
    elif opts:
        element_cls = type(
            element_cls.__name__,
            (element_cls,),
            {
                "__module__": element_cls.__module__,
                "__qualname__": element_cls.__qualname__,
                "__doc__": element_cls.__doc__,
                "Meta": _merge_meta(None, opts),
            },
        )

    return element_cls


def _merge_meta(meta: type | None, opts: dict) -> type:
    attrs = {}
    if meta is not None:
        attrs.update(
            {
                name: value
                for name, value in vars(meta).items()
                if not (name.startswith("__") and name.endswith("__"))
            }
        )
    attrs.update(opts)
    return type("Meta", (), attrs)


__all__ = [
    "current_year",
    "derive_element_class",
    "fully_qualified_name",
    "get_version",
    "utcnow_func",
]
