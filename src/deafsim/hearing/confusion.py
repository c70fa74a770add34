"""Phonetic confusion tables.

Each language maps a lowercase letter (and, for Italian, a two-letter
cluster) to the substitutes a listener is likely to hear instead. Tables
are built once and shared read-only between simulators.
"""

from collections.abc import Mapping
from random import Random
from types import MappingProxyType

from deafsim.language import resolve_language

ConfusionTable = Mapping[str, tuple[str, ...]]


def _freeze(table: dict[str, list[str]]) -> ConfusionTable:
    return MappingProxyType({key: tuple(values) for key, values in table.items()})


# Generic phonetic proximity: neighbouring vowels, voiced/unvoiced pairs
AGNOSTIC_TABLE = _freeze({
    "a": ["e", "o"],
    "e": ["i", "a"],
    "i": ["e", "y"],
    "o": ["u", "a"],
    "u": ["o", "a"],
    "b": ["p", "d"],
    "c": ["k", "s"],
    "d": ["t", "b"],
    "f": ["v", "s"],
    "g": ["k", "j"],
    "h": ["", "f"],
    "j": ["g", "y"],
    "k": ["c", "g"],
    "l": ["r", "n"],
    "m": ["n", "b"],
    "n": ["m", "l"],
    "p": ["b", "t"],
    "q": ["k", "g"],
    "r": ["l", "w"],
    "s": ["z", "c"],
    "t": ["d", "p"],
    "v": ["f", "b"],
    "w": ["v", "u"],
    "x": ["s", "z"],
    "y": ["i", "j"],
    "z": ["s", "j"],
})

# English consonant clusters make th/sh/ch/ng plausible mishearings
ENGLISH_TABLE = _freeze({
    "a": ["e", "u", "o"],
    "e": ["i", "a", "u"],
    "i": ["e", "y", "u"],
    "o": ["u", "a", "oo"],
    "u": ["o", "a", "oo"],
    "b": ["p", "d", "v"],
    "c": ["k", "s", "g"],
    "d": ["t", "b", "g"],
    "f": ["v", "th", "s"],
    "g": ["k", "j", "d"],
    "h": ["", "f", "ch"],
    "j": ["g", "ch", "y"],
    "k": ["c", "g", "q"],
    "l": ["r", "w", "n"],
    "m": ["n", "b", "w"],
    "n": ["m", "ng", "l"],
    "p": ["b", "t", "f"],
    "q": ["k", "g", "c"],
    "r": ["l", "w", "y"],
    "s": ["z", "sh", "th"],
    "t": ["d", "th", "p"],
    "v": ["f", "b", "w"],
    "w": ["v", "r", "u"],
    "x": ["s", "z", "ks"],
    "y": ["i", "j", "e"],
    "z": ["s", "th", "j"],
})

ITALIAN_TABLE = _freeze({
    "a": ["e", "o"],
    "e": ["i", "a"],
    "i": ["e", "u"],
    "o": ["u", "a"],
    "u": ["o", "i"],
    "b": ["p", "v"],
    "c": ["g", "ch", "k"],
    "d": ["t", "b"],
    "f": ["v", "s"],
    "g": ["c", "gh", "j"],
    "h": [""],  # silent
    "l": ["r", "gl"],
    "m": ["n", "mm"],
    "n": ["m", "gn", "nn"],
    "p": ["b", "pp"],
    "q": ["c", "k"],
    "r": ["l", "rr"],
    "s": ["z", "ss", "sc"],
    "t": ["d", "tt"],
    "v": ["f", "b"],
    "z": ["s", "zz", "ts"],
    # Double consonants
    "cc": ["c", "gg"],
    "gg": ["g", "cc"],
    "ss": ["s", "zz"],
    "zz": ["z", "ss"],
    "tt": ["t", "dd"],
    "dd": ["d", "tt"],
    "pp": ["p", "bb"],
    "bb": ["b", "pp"],
    "rr": ["r", "ll"],
    "ll": ["l", "rr"],
    "mm": ["m", "nn"],
    "nn": ["n", "mm"],
    # Digraphs
    "gl": ["l", "gli"],
    "gn": ["n", "gni"],
    "sc": ["s", "c"],
    "ch": ["c", "k"],
    "gh": ["g", "c"],
})

_TABLES: dict[str, ConfusionTable] = {
    "english": ENGLISH_TABLE,
    "italian": ITALIAN_TABLE,
    "agnostic": AGNOSTIC_TABLE,
}


def confusion_table_for(language: str) -> ConfusionTable:
    """Return the confusion table for a language mode (or en/it tag)."""
    return _TABLES[resolve_language(language)]


def has_clusters(table: ConfusionTable) -> bool:
    """Whether the table carries multi-letter keys."""
    return any(len(key) > 1 for key in table)


def similar(unit: str, table: ConfusionTable, rng: Random) -> str:
    """Pick a plausible mishearing of ``unit``, keeping its case.

    Units missing from the table are returned unchanged.
    """
    replacements = table.get(unit.lower())
    if not replacements:
        return unit

    replacement = rng.choice(replacements)
    if unit.isupper():
        return replacement.upper()
    return replacement
