"""Option value kinds - the closed set of values an option can hold."""

import json
import re
from abc import ABC, abstractmethod
from datetime import timedelta
from fractions import Fraction
from typing import Any, Iterable, Optional, Protocol, Sequence, runtime_checkable

# ============================================================
# CAPABILITIES
# ============================================================


@runtime_checkable
class Choices(Protocol):
    """Implemented by values restricted to a fixed, ordered set of literals."""

    def choices(self) -> Sequence[str]:
        ...


# ============================================================
# BASE
# ============================================================


class OptionValue(ABC):
    """
    Base class for every option value kind.

    Values are immutable: parse() returns a new value of the same kind
    and leaves the receiver untouched.

    Subclasses must implement:
        - to_string()
        - parse()
        - type_name()
    """

    def __init__(self, value: Any):
        self._value = value

    @property
    def value(self) -> Any:
        """The native Python value."""
        return self._value

    @abstractmethod
    def to_string(self) -> str:
        """Render the value as text (the form parse() accepts back)."""

    @abstractmethod
    def parse(self, text: str) -> "OptionValue":
        """
        Parse text into a new value of this kind.

        Raises:
            ValueError: If text can't be interpreted as this kind
        """

    @abstractmethod
    def type_name(self) -> str:
        """Programmatic kind tag, used in help output and JSON export."""

    def to_json(self) -> Any:
        """JSON-compatible representation."""
        return self._value

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((type(self), self._value))


# ============================================================
# SCALAR KINDS
# ============================================================


class StringValue(OptionValue):
    def __init__(self, value: str = ""):
        super().__init__(value)

    def to_string(self) -> str:
        return self._value

    def parse(self, text: str) -> "StringValue":
        return StringValue(text)

    def type_name(self) -> str:
        return "string"


_INTEGER = re.compile(r"^[+-]?[0-9]+$")

_TRUE_STRINGS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_STRINGS = {"0", "f", "F", "FALSE", "false", "False"}


class BoolValue(OptionValue):
    def __init__(self, value: bool = False):
        super().__init__(bool(value))

    def to_string(self) -> str:
        return "true" if self._value else "false"

    def parse(self, text: str) -> "BoolValue":
        text = text.strip()
        if text in _TRUE_STRINGS:
            return BoolValue(True)
        if text in _FALSE_STRINGS:
            return BoolValue(False)
        raise ValueError(f"invalid boolean {text!r}")

    def type_name(self) -> str:
        return "bool"


class IntValue(OptionValue):
    def __init__(self, value: int = 0):
        super().__init__(int(value))

    def to_string(self) -> str:
        return str(self._value)

    def parse(self, text: str) -> "IntValue":
        text = text.strip()
        if not _INTEGER.match(text):
            raise ValueError(f"invalid integer {text!r}")
        return IntValue(int(text))

    def type_name(self) -> str:
        return "int"


class FloatValue(OptionValue):
    def __init__(self, value: float = 0.0):
        super().__init__(float(value))

    def to_string(self) -> str:
        return repr(self._value)

    def parse(self, text: str) -> "FloatValue":
        text = text.strip()
        if "_" in text:
            raise ValueError(f"invalid float {text!r}")
        return FloatValue(float(text))

    def type_name(self) -> str:
        return "float"


# ============================================================
# DURATION
# ============================================================

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR

# Sentinel meaning "disabled", rendered as "off"
DURATION_OFF = (1 << 63) - 1

_DURATION_UNITS = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,
    "μs": MICROSECOND,
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
    "d": DAY,
    "w": 7 * DAY,
    "M": 30 * DAY,
    "y": 365 * DAY,
}

_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
_DURATION_PART = re.compile(rf"({_NUMBER})(ns|us|µs|μs|ms|s|m|h|d|w|M|y)")
_BARE_NUMBER = re.compile(rf"^{_NUMBER}$")


def _format_fraction(value: int, unit: int) -> str:
    """Format value/unit as a decimal with trailing zeros trimmed."""
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{str(frac).rjust(width, '0').rstrip('0')}"


def format_duration(nanoseconds: int) -> str:
    """
    Format a duration the way Go's time.Duration prints it.

    Examples:
        0 -> "0s"
        1_500_000_000 -> "1.5s"
        90 * SECOND -> "1m30s"
        HOUR -> "1h0m0s"
    """
    if nanoseconds == DURATION_OFF:
        return "off"
    if nanoseconds == 0:
        return "0s"

    sign = "-" if nanoseconds < 0 else ""
    ns = abs(nanoseconds)

    if ns < SECOND:
        if ns >= MILLISECOND:
            return f"{sign}{_format_fraction(ns, MILLISECOND)}ms"
        if ns >= MICROSECOND:
            return f"{sign}{_format_fraction(ns, MICROSECOND)}µs"
        return f"{sign}{ns}ns"

    hours, rest = divmod(ns, HOUR)
    minutes, rest = divmod(rest, MINUTE)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return f"{out}{_format_fraction(rest, SECOND)}s"


def parse_duration(text: str) -> int:
    """
    Parse a duration into nanoseconds.

    Accepts Go style unit sequences ("1h30m", "250ms") extended with
    d/w/M/y, a bare number meaning seconds, and "off".

    Raises:
        ValueError: If text is not a duration
    """
    text = text.strip()
    if text == "off":
        return DURATION_OFF

    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    if _BARE_NUMBER.match(text):
        return sign * int(Fraction(text) * SECOND)

    total = Fraction(0)
    consumed = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != consumed:
            break
        total += Fraction(match.group(1)) * _DURATION_UNITS[match.group(2)]
        consumed = match.end()

    if not text or consumed != len(text):
        raise ValueError(f"invalid duration {text!r}")
    return sign * int(total)


class DurationValue(OptionValue):
    """A time span held as integer nanoseconds."""

    def __init__(self, value: Any = 0):
        if isinstance(value, timedelta):
            value = (
                (value.days * 86400 + value.seconds) * SECOND
                + value.microseconds * MICROSECOND
            )
        super().__init__(int(value))

    @property
    def nanoseconds(self) -> int:
        return self._value

    def as_timedelta(self) -> Optional[timedelta]:
        """Return the duration as a timedelta, or None if off."""
        if self._value == DURATION_OFF:
            return None
        return timedelta(microseconds=self._value // MICROSECOND)

    def to_string(self) -> str:
        return format_duration(self._value)

    def to_json(self) -> str:
        return self.to_string()

    def parse(self, text: str) -> "DurationValue":
        return DurationValue(parse_duration(text))

    def type_name(self) -> str:
        return "Duration"


# ============================================================
# SIZE
# ============================================================

SIZE_OFF = -1

_SIZE_SUFFIXES = ["", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei"]
_SIZE_PATTERN = re.compile(rf"^({_NUMBER})([kmgtpe]?)(i?)(b?)$", re.IGNORECASE)


def format_size(size: int) -> str:
    """
    Render a byte count with the largest binary suffix that keeps it >= 1.

    Examples:
        0 -> "0"
        1024 -> "1Ki"
        1536 * 1024 -> "1.500Mi"
        1048577 -> "1048577"
        -1 -> "off"
    """
    if size < 0:
        return "off"
    if size == 0:
        return "0"

    exponent = 0
    while exponent < len(_SIZE_SUFFIXES) - 1 and size >= 1 << (10 * (exponent + 1)):
        exponent += 1

    scaled = Fraction(size, 1 << (10 * exponent))
    if scaled.denominator == 1:
        return f"{scaled.numerator}{_SIZE_SUFFIXES[exponent]}"
    rendered = f"{float(scaled):.3f}{_SIZE_SUFFIXES[exponent]}"
    # Plain bytes when three decimals can't carry the exact count
    if parse_size(rendered) != size:
        return str(size)
    return rendered


def parse_size(text: str) -> int:
    """
    Parse a size into bytes.

    A bare number is bytes; K, M, G, T, P, E (optionally followed by "i"
    and/or "B") are binary multiples; "off" is -1.

    Raises:
        ValueError: If text is not a size
    """
    text = text.strip()
    if text.lower() == "off":
        return SIZE_OFF

    match = _SIZE_PATTERN.match(text)
    if not match:
        raise ValueError(f"invalid size {text!r}")

    number, unit, binary, _ = match.groups()
    if binary and not unit:
        raise ValueError(f"invalid size {text!r}")

    multiplier = 1
    if unit:
        multiplier = 1 << (10 * ("kmgtpe".index(unit.lower()) + 1))
    return int(Fraction(number) * multiplier)


class SizeValue(OptionValue):
    """A size in bytes."""

    def __init__(self, value: int = 0):
        super().__init__(int(value))

    def to_string(self) -> str:
        return format_size(self._value)

    def parse(self, text: str) -> "SizeValue":
        return SizeValue(parse_size(text))

    def type_name(self) -> str:
        return "SizeSuffix"


# ============================================================
# STRING LIST
# ============================================================


class StringListValue(OptionValue):
    """
    An ordered list of strings.

    Rendered as "" when empty so default help stays clean, otherwise as a
    compact JSON array which, unlike a plain join, decodes unambiguously.
    """

    def __init__(self, value: Iterable[str] = ()):
        super().__init__(tuple(value))

    @property
    def items(self) -> tuple:
        return self._value

    def to_string(self) -> str:
        if not self._value:
            return ""
        return json.dumps(list(self._value), separators=(",", ":"))

    def to_json(self) -> list:
        return list(self._value)

    def append(self, text: str) -> "StringListValue":
        """Return a new list with text appended."""
        return StringListValue(self._value + (text,))

    def parse(self, text: str) -> "StringListValue":
        """Parse a JSON array or a comma separated list."""
        text = text.strip()
        if not text:
            return StringListValue()
        if text.startswith("["):
            try:
                items = json.loads(text)
            except json.JSONDecodeError as e:
                raise ValueError(f"invalid string list {text!r}: {e}") from e
            valid = isinstance(items, list) and all(isinstance(i, str) for i in items)
            if not valid:
                raise ValueError(f"invalid string list {text!r}")
            return StringListValue(items)
        return StringListValue(item.strip() for item in text.split(","))

    def type_name(self) -> str:
        return "stringArray"


# ============================================================
# CLOSED CHOICE
# ============================================================


class ChoiceValue(OptionValue):
    """
    One of a fixed, ordered set of literal values.

    Usage:
        hash_type = ChoiceValue(["md5", "sha1", "none"])
        hash_type.parse("SHA1")  # -> ChoiceValue("sha1")
    """

    def __init__(
        self,
        choices: Sequence[str],
        value: Optional[str] = None,
        type_name: Optional[str] = None,
    ):
        if not choices:
            raise ValueError("a choice value needs at least one choice")
        self._choices = tuple(choices)
        self._type_name = type_name
        if value is None:
            value = self._choices[0]
        if value not in self._choices:
            raise ValueError(
                f"invalid choice {value!r} from: {', '.join(self._choices)}"
            )
        super().__init__(value)

    def choices(self) -> Sequence[str]:
        return self._choices

    def to_string(self) -> str:
        return self._value

    def parse(self, text: str) -> "ChoiceValue":
        for choice in self._choices:
            if choice.lower() == text.strip().lower():
                return ChoiceValue(self._choices, choice, self._type_name)
        raise ValueError(f"invalid choice {text!r} from: {', '.join(self._choices)}")

    def type_name(self) -> str:
        return self._type_name or "|".join(self._choices)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChoiceValue):
            return NotImplemented
        return (self._choices, self._value) == (other._choices, other._value)

    def __hash__(self) -> int:
        return hash((self._choices, self._value))


# ============================================================
# DECLARATION HELPERS
# ============================================================


def to_option_value(raw: Any) -> OptionValue:
    """
    Wrap a raw Python default in its option value kind.

    Args:
        raw: An OptionValue (returned as is), bool, int, float, str,
             list/tuple of str or timedelta

    Returns:
        The matching OptionValue

    Raises:
        TypeError: If raw has no matching kind
    """
    if isinstance(raw, OptionValue):
        return raw
    # bool before int - bool is an int subclass
    if isinstance(raw, bool):
        return BoolValue(raw)
    if isinstance(raw, int):
        return IntValue(raw)
    if isinstance(raw, float):
        return FloatValue(raw)
    if isinstance(raw, str):
        return StringValue(raw)
    if isinstance(raw, timedelta):
        return DurationValue(raw)
    if isinstance(raw, (list, tuple)):
        return StringListValue(raw)
    raise TypeError(f"no option value kind for {type(raw).__name__}")
