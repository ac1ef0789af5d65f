"""
Declarative options for ClueCase rounds.

Options are declared on a dataclass with option_field(), which attaches
validation metadata used when the options are built, loaded from JSON, or
overridden from the command line.

Usage:
    @dataclass
    class MyOptions(GameOptions):
        duration_seconds: int = option_field(
            IntOption(default=120, min_val=10, max_val=600,
                      label="option-duration"))
        locale: str = option_field(
            MenuOption(default="en", choices=["en"],
                       label="option-locale"))

        # Regular fields without option_field are not range-checked
        case_values: list[int] = field(default_factory=list)
"""

from dataclasses import dataclass, field, fields
from typing import Any

from mashumaro.mixins.json import DataClassJSONMixin

from ..errors import ConfigurationError
from ..messages.localization import Localization


@dataclass
class OptionMeta:
    """Metadata for a round option."""

    default: Any
    label: str  # Localization key for the option label

    def get_label(self, locale: str) -> str:
        return Localization.get(locale, self.label)

    def is_valid(self, value: Any) -> bool:
        raise NotImplementedError

    def validate_and_convert(self, value: str) -> tuple[bool, Any]:
        """Validate and convert input string to the option's type.

        Returns (success, converted_value). If success is False, converted_value
        is the original string.
        """
        raise NotImplementedError

    def describe(self) -> dict[str, Any]:
        return {"default": self.default, "label": self.label}


@dataclass
class IntOption(OptionMeta):
    """Integer option with min/max validation."""

    min_val: int = 0
    max_val: int = 100

    def is_valid(self, value: Any) -> bool:
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return self.min_val <= value <= self.max_val

    def validate_and_convert(self, value: str) -> tuple[bool, Any]:
        try:
            int_val = int(value)
            int_val = max(self.min_val, min(self.max_val, int_val))
            return True, int_val
        except ValueError:
            return False, value

    def describe(self) -> dict[str, Any]:
        return {**super().describe(), "min": self.min_val, "max": self.max_val}


@dataclass
class MenuOption(OptionMeta):
    """Option restricted to a fixed set of choices."""

    choices: list[str] = field(default_factory=list)

    def is_valid(self, value: Any) -> bool:
        return value in self.choices

    def validate_and_convert(self, value: str) -> tuple[bool, Any]:
        if value in self.choices:
            return True, value
        return False, value

    def describe(self) -> dict[str, Any]:
        return {**super().describe(), "choices": list(self.choices)}


def option_field(meta: OptionMeta) -> Any:
    """Create a dataclass field with option metadata attached.

    Usage:
        duration_seconds: int = option_field(IntOption(default=120, ...))
    """
    return field(default=meta.default, metadata={"option_meta": meta})


def get_option_meta(options_class: type, field_name: str) -> OptionMeta | None:
    """Get the OptionMeta for a field, if it has one."""
    for f in fields(options_class):
        if f.name == field_name:
            return f.metadata.get("option_meta")
    return None


def get_all_option_metas(options_class: type) -> dict[str, OptionMeta]:
    """Get all OptionMeta instances from an options class."""
    result = {}
    for f in fields(options_class):
        meta = f.metadata.get("option_meta")
        if meta is not None:
            result[f.name] = meta
    return result


@dataclass
class GameOptions(DataClassJSONMixin):
    """Base class for options with declarative validation.

    Declared options are checked whenever an instance is built, including
    when it is loaded with from_json().
    """

    def __post_init__(self):
        self.validate()

    def get_option_metas(self) -> dict[str, OptionMeta]:
        """Get all option metadata for this options instance."""
        return get_all_option_metas(type(self))

    def validate(self) -> None:
        """Raise ConfigurationError if any declared option is out of range."""
        for name, meta in self.get_option_metas().items():
            value = getattr(self, name)
            if not meta.is_valid(value):
                raise ConfigurationError(
                    f"Option {name!r} has invalid value {value!r}",
                    option=name,
                )

    def apply_overrides(self, overrides: dict[str, str]) -> list[str]:
        """Apply string overrides (e.g. from -o key=value).

        Values are converted and clamped by each option's metadata.

        Returns:
            The override keys that do not name a declared option.
        """
        metas = self.get_option_metas()
        unknown = []
        for key, raw in overrides.items():
            meta = metas.get(key)
            if meta is None:
                unknown.append(key)
                continue
            ok, value = meta.validate_and_convert(raw)
            if not ok:
                raise ConfigurationError(
                    f"Option {key!r} cannot take value {raw!r}", option=key
                )
            setattr(self, key, value)
        return unknown
