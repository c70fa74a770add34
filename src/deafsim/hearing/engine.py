"""Hearing loss degradation engine.

Rewrites an utterance the way a listener with a given degree of hearing
loss might perceive it. Every word is either kept, garbled, half-heard or
lost, with odds taken from a clinical recognition profile. All randomness
comes from the simulator's own ``Random`` so runs can be seeded or scripted.
"""

import logging
import math
from dataclasses import asdict, dataclass
from random import Random
from typing import Literal

from deafsim.constants import (
    ELLIPSIS,
    GARBLE_RATES,
    IMPORTANCE_BONUS,
    IMPORTANT_WORD_LENGTH,
    INTERROGATIVES,
    MAX_KEEP_THRESHOLD,
    MAX_LEVEL,
    MIN_LEVEL,
    PARTIAL_RATES,
    PLACEHOLDER,
    PLACEHOLDER_CHANCE,
    PLACEHOLDER_MIN_LEVEL,
    PREFIX_CHANCE,
    RECOGNITION_RATES,
    SUBSTITUTE_CHANCE,
    TRANSPOSE_CHANCE,
    Language,
)
from deafsim.hearing.confusion import confusion_table_for, has_clusters, similar
from deafsim.i18n import language_label, level_description
from deafsim.language import resolve_language

logger = logging.getLogger(__name__)

Action = Literal["keep", "garble", "partial", "drop"]


@dataclass(frozen=True)
class DegradationResult:
    """Outcome of one ``transform`` call."""

    original: str
    degraded: str
    loss_percentage: int

    def to_dict(self) -> dict[str, str | int]:
        """Wire shape used by the shell and web clients."""
        data = asdict(self)
        data["lossPercentage"] = data.pop("loss_percentage")
        return data


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(MAX_LEVEL, int(level)))


def thresholds_for(level: int, important: bool = False) -> tuple[float, float, float]:
    """Cumulative (keep, garble, partial) thresholds on a 0-100 roll.

    Rolls at or above the partial threshold are drops.
    """
    level = clamp_level(level)
    bonus = IMPORTANCE_BONUS if important else 0
    keep = min(MAX_KEEP_THRESHOLD, RECOGNITION_RATES[level] + bonus)
    garble = keep + GARBLE_RATES[level]
    partial = garble + PARTIAL_RATES[level]
    return keep, garble, partial


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class HearingLossSimulator:
    """Degrades text according to a hearing loss level and language."""

    def __init__(
        self,
        level: int = 5,
        language: str = "english",
        rng: Random | None = None,
        seed: int | None = None,
    ):
        """Initialize the simulator.

        Args:
            level: Severity 1-10; out-of-range values are clamped
            language: english, italian or agnostic (en/it tags accepted)
            rng: Random source to draw from (overrides ``seed``)
            seed: Seed for a private Random source (None = random)

        Raises:
            InvalidConfiguration: if ``language`` is not a known mode.
        """
        self._level = clamp_level(level)
        self._language: Language = resolve_language(language)
        self._table = confusion_table_for(self._language)
        self._clustered = has_clusters(self._table)

        if rng is not None:
            self.rng = rng
            self._seed_used = seed
        else:
            # Store the seed that was actually used
            self._seed_used = seed if seed is not None else Random().getrandbits(32)
            self.rng = Random(self._seed_used)

    @property
    def level(self) -> int:
        return self._level

    @property
    def language(self) -> Language:
        return self._language

    @property
    def seed_used(self) -> int | None:
        """Seed of the private Random source, None when one was injected."""
        return self._seed_used

    @property
    def level_description(self) -> str:
        return level_description(self._level, self._language)

    @property
    def language_label(self) -> str:
        return language_label(self._language)

    def with_level(self, level: int) -> "HearingLossSimulator":
        """New simulator at ``level``, keeping language and random source."""
        return HearingLossSimulator(level, self._language, rng=self.rng, seed=self._seed_used)

    def with_language(self, language: str) -> "HearingLossSimulator":
        """New simulator for ``language``, keeping level and random source."""
        return HearingLossSimulator(self._level, language, rng=self.rng, seed=self._seed_used)

    def is_important(self, word: str) -> bool:
        """Long, capitalized and question words are caught more often."""
        if len(word) > IMPORTANT_WORD_LENGTH or word[:1].isupper():
            return True
        return word.lower().startswith(INTERROGATIVES[self._language])

    def decide_action(self, word: str) -> Action:
        roll = self.rng.random() * 100
        keep, garble, partial = thresholds_for(self._level, self.is_important(word))

        if roll < keep:
            return "keep"
        if roll < garble:
            return "garble"
        if roll < partial:
            return "partial"
        return "drop"

    def garble_word(self, word: str) -> str:
        """Mishear a word: substitute, transpose or delete characters.

        Edits are applied one after another on the same working copy.
        Words of two characters or fewer come back unchanged.
        """
        if len(word) <= 2:
            return word

        units = list(word)
        edits = math.ceil(len(word) * self._level / 20)

        for _ in range(edits):
            if not units:
                break
            pos = self.rng.randrange(len(units))
            action = self.rng.random()

            if action < SUBSTITUTE_CHANCE:
                self._substitute(units, pos)
            elif action < SUBSTITUTE_CHANCE + TRANSPOSE_CHANCE:
                if pos < len(units) - 1:
                    units[pos], units[pos + 1] = units[pos + 1], units[pos]
            else:
                del units[pos]

        return "".join(units)

    def _substitute(self, units: list[str], pos: int) -> None:
        if self._clustered and pos < len(units) - 1:
            cluster = units[pos] + units[pos + 1]
            if cluster.lower() in self._table:
                units[pos:pos + 2] = [similar(cluster, self._table, self.rng)]
                return
        units[pos] = similar(units[pos], self._table, self.rng)

    def partial_word(self, word: str) -> str:
        """Catch only the start or the tail of a word."""
        if len(word) <= 3:
            return word[:1] + ELLIPSIS

        keep_ratio = 1 - self._level / 15
        keep_length = max(1, math.floor(len(word) * keep_ratio))

        # Word-initial sounds are heard more often
        if self.rng.random() < PREFIX_CHANCE:
            return word[:keep_length] + ELLIPSIS
        return ELLIPSIS + word[-keep_length:]

    def transform(self, text: str) -> DegradationResult:
        """Simulate hearing ``text`` with this simulator's hearing loss."""
        words = text.split()
        if not words:
            return DegradationResult(original="", degraded="", loss_percentage=0)

        heard: list[str] = []
        for word in words:
            action = self.decide_action(word)

            if action == "keep":
                heard.append(word)
            elif action == "garble":
                heard.append(self.garble_word(word))
            elif action == "partial":
                heard.append(self.partial_word(word))
            elif self._level >= PLACEHOLDER_MIN_LEVEL and self.rng.random() < PLACEHOLDER_CHANCE:
                heard.append(PLACEHOLDER)

        degraded = " ".join(" ".join(heard).split())
        understood = [w for w in degraded.split() if w != PLACEHOLDER]
        loss = _round_half_up((1 - len(understood) / len(words)) * 100)
        loss = max(0, min(100, loss))

        logger.debug(
            "Degraded %d words at level %d (%s): %d%% loss",
            len(words), self._level, self._language, loss,
        )
        return DegradationResult(original=text, degraded=degraded, loss_percentage=loss)
