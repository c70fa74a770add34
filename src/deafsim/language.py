"""Language mode resolution for the simulator."""

from deafsim.constants import LANGUAGE_ALIASES, LANGUAGES, Language


class InvalidConfiguration(ValueError):
    """Simulator was configured with an unrecognized language mode."""
    pass


def resolve_language(value: str) -> Language:
    """Resolve a language mode or short tag (en, it) to its canonical name.

    Raises:
        InvalidConfiguration: if the value names no known mode.
    """
    if not isinstance(value, str):
        raise InvalidConfiguration(f"Language must be a string, got {type(value).__name__}")

    key = value.strip().lower()
    key = LANGUAGE_ALIASES.get(key, key)
    if key not in LANGUAGES:
        raise InvalidConfiguration(
            f"Unknown language mode {value!r}; expected one of: {', '.join(LANGUAGES)}"
        )
    return key  # type: ignore[return-value]
