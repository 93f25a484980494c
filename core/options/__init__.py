"""Backend configuration options."""

# Public API
from core.options.exceptions import OptionError, OptionParseError
from core.options.option import (
    Option,
    OptionExample,
    OptionExamples,
    OptionVisibility,
    option_to_env,
)
from core.options.option_set import Options
from core.options.values import (
    BoolValue,
    ChoiceValue,
    Choices,
    DurationValue,
    FloatValue,
    IntValue,
    OptionValue,
    SizeValue,
    StringListValue,
    StringValue,
    to_option_value,
)

__all__ = [
    "OptionError",
    "OptionParseError",
    "Option",
    "OptionExample",
    "OptionExamples",
    "OptionVisibility",
    "option_to_env",
    "Options",
    "BoolValue",
    "ChoiceValue",
    "Choices",
    "DurationValue",
    "FloatValue",
    "IntValue",
    "OptionValue",
    "SizeValue",
    "StringListValue",
    "StringValue",
    "to_option_value",
]
