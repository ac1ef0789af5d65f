"""Localization system using Mozilla Fluent."""

from pathlib import Path

from fluent_compiler.bundle import FluentBundle
from babel.lists import format_list
from babel.numbers import format_decimal


class Localization:
    """
    Clue and round text rendered from Fluent (.ftl) resources.

    Bundles are compiled lazily per locale. When no locales directory has
    been configured, the resources shipped inside the package are used.
    """

    _bundles: dict[str, FluentBundle] = {}
    _locales_dir: Path | None = None

    @classmethod
    def init(cls, locales_dir: Path | str) -> None:
        """Point the localization system at a locales directory."""
        cls._locales_dir = Path(locales_dir)
        cls._bundles = {}

    @classmethod
    def _resolve_locales_dir(cls) -> Path:
        if cls._locales_dir is None:
            from .. import LOCALES_DIR

            cls._locales_dir = LOCALES_DIR
        return cls._locales_dir

    @classmethod
    def _get_bundle(cls, locale: str) -> FluentBundle:
        """Get or compile the bundle for a locale."""
        if locale in cls._bundles:
            return cls._bundles[locale]

        locales_dir = cls._resolve_locales_dir()
        locale_dir = locales_dir / locale
        actual_locale = locale
        if not locale_dir.exists():
            # Fall back to English
            locale_dir = locales_dir / "en"
            actual_locale = "en"
            if not locale_dir.exists():
                raise RuntimeError(f"No locale files found for {locale} or en")

        ftl_content = [
            ftl_file.read_text(encoding="utf-8")
            for ftl_file in sorted(locale_dir.glob("*.ftl"))
        ]
        if not ftl_content:
            raise RuntimeError(f"No .ftl files found in {locale_dir}")

        bundle = FluentBundle.from_string(actual_locale, "\n".join(ftl_content))
        cls._bundles[locale] = bundle
        return bundle

    # Unicode bidi isolation characters that Fluent adds around variables
    _BIDI_CHARS = "\u2068\u2069"  # FIRST STRONG ISOLATE, POP DIRECTIONAL ISOLATE

    @classmethod
    def get(cls, locale: str, message_id: str, **kwargs) -> str:
        """
        Render a message.

        Args:
            locale: The locale code (e.g., 'en').
            message_id: The message ID from the .ftl files.
            **kwargs: Variables to substitute into the message.

        Returns:
            The formatted text, or the message ID itself when the message
            cannot be found or rendered.
        """
        try:
            bundle = cls._get_bundle(locale)
            result, errors = bundle.format(message_id, kwargs)
            for char in cls._BIDI_CHARS:
                result = result.replace(char, "")
            return result
        except Exception:
            return message_id

    @classmethod
    def format_list_and(cls, locale: str, items: list[str]) -> str:
        """Join items with 'and' (e.g., "3, 9, and 14")."""
        return format_list(items, style="standard", locale=locale)

    @classmethod
    def format_case_numbers(cls, locale: str, numbers: list[int]) -> str:
        """Join case numbers in ascending order with 'and'."""
        return cls.format_list_and(locale, [str(n) for n in sorted(numbers)])

    @classmethod
    def format_money(cls, locale: str, amount: int) -> str:
        """Format a dollar amount with locale grouping (e.g., "1,000,000")."""
        return format_decimal(amount, locale=locale)


def get_message(locale: str, message_id: str, **kwargs) -> str:
    """Convenience function to get a localized message."""
    return Localization.get(locale, message_id, **kwargs)
