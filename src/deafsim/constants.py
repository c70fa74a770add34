"""Shared constants for hearing loss simulation.

Single source of truth for the recognition profile and the per-level
outcome rates. Everything here is plain data so the thresholds can be
checked exhaustively over all ten levels.
"""

from typing import Literal

# --- Levels ---

MIN_LEVEL = 1
MAX_LEVEL = 10
DEFAULT_LEVEL = 5

# --- Language modes ---

Language = Literal["english", "italian", "agnostic"]

LANGUAGES: tuple[str, ...] = ("english", "italian", "agnostic")

# Short tags accepted from the environment and the shell
LANGUAGE_ALIASES = {
    "en": "english",
    "it": "italian",
}

# --- Recognition profile ---
# Percentage of words understood intact, from clinical audiogram bands
# (ASHA / WHO classifications).

RECOGNITION_RATES = {
    1: 97,   # Normal hearing, -10 to 15 dB
    2: 92,   # Slight, 16-25 dB
    3: 85,   # Mild (low), 26-32 dB
    4: 78,   # Mild (high), 33-40 dB
    5: 70,   # Moderate (low), 41-48 dB
    6: 60,   # Moderate (high), 49-55 dB
    7: 45,   # Moderately severe, 56-70 dB
    8: 30,   # Severe (low), 71-80 dB
    9: 18,   # Severe (high), 81-90 dB
    10: 8,   # Profound, 91+ dB
}

# Misheard (garbled) and half-heard (partial) words peak at mid severities
GARBLE_RATES = {level: 2 if level <= 2 else 5 if level >= 9 else 15 for level in RECOGNITION_RATES}
PARTIAL_RATES = {level: 1 if level <= 2 else 3 if level >= 9 else 10 for level in RECOGNITION_RATES}

IMPORTANCE_BONUS = 5
MAX_KEEP_THRESHOLD = 98
IMPORTANT_WORD_LENGTH = 5

INTERROGATIVES = {
    "english": ("what", "who", "why", "when", "where", "how"),
    "italian": ("cosa", "chi", "perché", "quando", "dove", "come"),
}
INTERROGATIVES["agnostic"] = INTERROGATIVES["english"] + INTERROGATIVES["italian"]

# --- Word mangling ---

# Operation split for a single garble edit: substitute / transpose / delete
SUBSTITUTE_CHANCE = 0.4
TRANSPOSE_CHANCE = 0.3

# Chance a partial word keeps its beginning rather than its tail
PREFIX_CHANCE = 0.6

ELLIPSIS = "..."
PLACEHOLDER = "[...]"

# Dropped words leave an audible-but-unintelligible cue from this level up
PLACEHOLDER_MIN_LEVEL = 7
PLACEHOLDER_CHANCE = 0.3
