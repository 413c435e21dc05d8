"""
Custom recordkit exception classes
"""

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class RecordkitException(Exception):
    """Base class for all Exceptions raised within recordkit"""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args)

        self.extra_info = kwargs.get("extra_info", None)

    def __reduce__(self) -> tuple[Any, tuple[Any]]:
        return (self.__class__, (self.args[0],))


class RecordkitExceptionWithMessage(RecordkitException):
    def __init__(
        self, messages: dict[str, list], traceback: Optional[str] = None, **kwargs: Any
    ) -> None:
        logger.debug(f"Exception:: {messages}")

        self.messages = messages
        self.traceback = traceback

        super().__init__(**kwargs)

    def __str__(self) -> str:
        return f"{dict(self.messages)}"

    def __reduce__(self) -> tuple[Any, tuple[Any]]:
        return (self.__class__, (self.messages,))


class ConfigurationError(RecordkitException):
    """Improper Configuration encountered like:
    * A configuration file is missing
    * An environment variable referenced in configuration is not set
    * Unknown options passed to a record type
    """


class ObjectNotFoundError(RecordkitException):
    """A record type was looked up by name, but is not registered"""


class InvalidDataError(RecordkitExceptionWithMessage):
    """Data (type, value) is invalid"""


class InvalidOperationError(RecordkitException):
    """Operation being performed is not permitted"""


class NotSupportedError(RecordkitException):
    """Object does not support the operation being performed"""


class IncorrectUsageError(RecordkitException):
    """Declaration or usage of a record type violates its rules"""


class ValidationError(RecordkitExceptionWithMessage):
    """Raised when validation fails on a field. Validators and custom fields should
    raise this exception.

    :param errors: An error message or a list of error messages or a
        dictionary of error message where key is field name and value is error

    """


class MethodNotFoundError(RecordkitException, AttributeError):
    """Raised when a name is invoked on a record that is not in its accessor table.

    Subclasses `AttributeError`, so `hasattr()` and `getattr(obj, name, default)`
    keep working on records.
    """


class MissingReferenceError(RecordkitException):
    """Raised when a delegating accessor is called on a container
    whose embedded record has not been assigned"""
