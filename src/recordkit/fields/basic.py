"""Module for defining basic Field types of a Record"""

import bleach

from recordkit.fields import validators
from recordkit.fields.base import Field


class Text(Field):
    """A field holding text of any length.

    Values are converted with `str()`. Unless `sanitize` is switched off, markup
    is escaped with `bleach` before the value is stored.
    """

    default_error_messages = {
        "invalid": '"{value}" value must be a string.',
    }

    repr_defaults = {**Field.repr_defaults, "sanitize": True}

    def __init__(self, sanitize=True, **kwargs):
        self.sanitize = sanitize
        super().__init__(**kwargs)

    def _cast_to_type(self, value):
        text = value if isinstance(value, str) else str(value)
        return bleach.clean(text) if self.sanitize else text


class String(Text):
    """A text field with length limits, 255 characters at most by default.

    :param max_length: The maximum allowed length for the field.
    :param min_length: The minimum allowed length for the field.
    """

    repr_defaults = {**Text.repr_defaults, "max_length": 255, "min_length": None}

    def __init__(self, max_length=255, min_length=None, **kwargs):
        self.max_length = max_length
        self.min_length = min_length
        super().__init__(**kwargs)

    def _builtin_validators(self):
        return [
            validators.MinLengthValidator(self.min_length),
            validators.MaxLengthValidator(self.max_length),
        ]


class _Number(Field):
    """Numeric field bounded by optional `min_value` and `max_value`"""

    repr_defaults = {**Field.repr_defaults, "min_value": None, "max_value": None}

    def __init__(self, min_value=None, max_value=None, **kwargs):
        self.min_value = min_value
        self.max_value = max_value
        super().__init__(**kwargs)

    def _builtin_validators(self):
        return [
            validators.MinValueValidator(self.min_value),
            validators.MaxValueValidator(self.max_value),
        ]


class Integer(_Number):
    """An integer field. Floats are truncated, blank strings count as no value."""

    default_error_messages = {
        "invalid": '"{value}" value must be an integer.',
    }

    def _cast_to_type(self, value):
        if isinstance(value, str) and not value.strip():
            return None

        try:
            return int(value)
        except (ValueError, TypeError):
            self.fail("invalid", value=value)


class Float(_Number):
    default_error_messages = {
        "invalid": '"{value}" value must be floating point number.',
    }

    def _cast_to_type(self, value):
        try:
            return float(value)
        except (ValueError, TypeError):
            self.fail("invalid", value=value)


class Boolean(Field):
    """A boolean field.

    Besides `True` and `False`, accepts `1`/`0` and the (case-insensitive)
    strings `t`, `true`, `y`, `yes`, `1` and `f`, `false`, `n`, `no`, `0`.
    """

    default_error_messages = {
        "invalid": '"{value}" value must be either True or False.',
    }

    TRUE_WORDS = frozenset({"t", "true", "y", "yes", "1"})
    FALSE_WORDS = frozenset({"f", "false", "n", "no", "0"})

    def _cast_to_type(self, value):
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            word = value.strip().lower()
            if word in self.TRUE_WORDS:
                return True
            if word in self.FALSE_WORDS:
                return False

        self.fail("invalid", value=value)
