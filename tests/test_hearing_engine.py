"""Tests for the hearing loss degradation engine."""

import math

import pytest

from conftest import ScriptedRandom
from deafsim.constants import (
    GARBLE_RATES,
    PARTIAL_RATES,
    PLACEHOLDER,
    RECOGNITION_RATES,
)
from deafsim.hearing import (
    DegradationResult,
    HearingLossSimulator,
    InvalidConfiguration,
    thresholds_for,
)

ALWAYS_KEEP = 0.0
ALWAYS_DROP = 0.999


class TestConstruction:
    """Tests for simulator configuration."""

    @pytest.mark.parametrize("raw,expected", [(-3, 1), (0, 1), (1, 1), (7, 7), (10, 10), (11, 10), (99, 10)])
    def test_level_is_clamped(self, raw, expected):
        assert HearingLossSimulator(level=raw).level == expected

    @pytest.mark.parametrize("tag,expected", [
        ("english", "english"),
        ("italian", "italian"),
        ("agnostic", "agnostic"),
        ("en", "english"),
        ("IT", "italian"),
        (" Agnostic ", "agnostic"),
    ])
    def test_language_modes(self, tag, expected):
        assert HearingLossSimulator(language=tag).language == expected

    @pytest.mark.parametrize("tag", ["french", "", "eng"])
    def test_unknown_language_raises(self, tag):
        with pytest.raises(InvalidConfiguration):
            HearingLossSimulator(level=3, language=tag)

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError):
            HearingLossSimulator(language="klingon")

    def test_seed_is_recorded(self):
        assert HearingLossSimulator(seed=1234).seed_used == 1234
        assert isinstance(HearingLossSimulator().seed_used, int)

    def test_same_seed_same_output(self):
        text = "the quick brown fox jumps over the lazy dog again and again"
        a = HearingLossSimulator(level=6, seed=99).transform(text)
        b = HearingLossSimulator(level=6, seed=99).transform(text)
        assert a == b

    def test_with_level_keeps_language(self):
        simulator = HearingLossSimulator(level=3, language="italian")
        changed = simulator.with_level(8)
        assert changed.level == 8
        assert changed.language == "italian"
        assert simulator.level == 3

    def test_with_language_keeps_level(self):
        simulator = HearingLossSimulator(level=4, language="english")
        changed = simulator.with_language("agnostic")
        assert changed.level == 4
        assert changed.language == "agnostic"

    def test_descriptions(self):
        assert HearingLossSimulator(level=7).level_description == "Moderately severe (~45%)"
        assert HearingLossSimulator(level=1, language="it").level_description == "Udito normale (~97%)"
        assert HearingLossSimulator(language="agnostic").language_label == "Language Agnostic"


class TestThresholds:
    """Tests for the per-level threshold tables."""

    def test_recognition_profile_non_increasing(self):
        rates = [RECOGNITION_RATES[level] for level in range(1, 11)]
        assert rates == sorted(rates, reverse=True)

    @pytest.mark.parametrize("important", [False, True])
    def test_keep_threshold_non_increasing(self, important):
        keeps = [thresholds_for(level, important)[0] for level in range(1, 11)]
        assert keeps == sorted(keeps, reverse=True)

    def test_threshold_values(self):
        assert thresholds_for(1) == (97, 99, 100)
        assert thresholds_for(1, important=True) == (98, 100, 101)
        assert thresholds_for(5) == (70, 85, 95)
        assert thresholds_for(10) == (8, 13, 16)
        assert thresholds_for(10, important=True) == (13, 18, 21)

    def test_rate_bands(self):
        assert GARBLE_RATES[1] == GARBLE_RATES[2] == 2
        assert all(GARBLE_RATES[level] == 15 for level in range(3, 9))
        assert GARBLE_RATES[9] == GARBLE_RATES[10] == 5
        assert PARTIAL_RATES[2] == 1
        assert PARTIAL_RATES[6] == 10
        assert PARTIAL_RATES[9] == 3


class TestImportance:
    """Tests for important-word classification."""

    def test_long_word(self):
        assert HearingLossSimulator().is_important("weather")
        assert not HearingLossSimulator().is_important("table")

    def test_capitalized_word(self):
        assert HearingLossSimulator().is_important("Rome")

    def test_english_interrogatives(self):
        simulator = HearingLossSimulator(language="english")
        assert simulator.is_important("how")
        assert simulator.is_important("Why")
        assert not simulator.is_important("come")

    def test_italian_interrogatives(self):
        simulator = HearingLossSimulator(language="italian")
        assert simulator.is_important("come")
        assert simulator.is_important("chi")
        assert simulator.is_important("perché")
        assert not simulator.is_important("how")

    def test_agnostic_checks_both(self):
        simulator = HearingLossSimulator(language="agnostic")
        assert simulator.is_important("how")
        assert simulator.is_important("dove")


class TestActionSelector:
    """Tests for the per-word decision."""

    @pytest.mark.parametrize("roll,expected", [
        (0.0, "keep"),
        (0.6999, "keep"),
        (0.70, "garble"),
        (0.8499, "garble"),
        (0.85, "partial"),
        (0.9499, "partial"),
        (0.95, "drop"),
        (0.999, "drop"),
    ])
    def test_level_five_boundaries(self, roll, expected):
        simulator = HearingLossSimulator(level=5, rng=ScriptedRandom([roll]))
        assert simulator.decide_action("bus") == expected

    def test_importance_shifts_keep(self):
        simulator = HearingLossSimulator(level=5, rng=ScriptedRandom([0.72, 0.72]))
        assert simulator.decide_action("bus") == "garble"
        assert simulator.decide_action("Bus") == "keep"

    def test_mild_loss_keeps_most_words(self):
        simulator = HearingLossSimulator(level=1, seed=2024)
        words = ["and", "the", "cat", "sat", "on", "mat"] * 500
        kept = sum(simulator.decide_action(w) == "keep" for w in words)
        assert kept / len(words) >= 0.90

    def test_profound_loss_keeps_few_words(self):
        simulator = HearingLossSimulator(level=10, seed=2024)
        words = ["and", "Where", "weather", "cat"] * 750
        kept = sum(simulator.decide_action(w) == "keep" for w in words)
        assert kept / len(words) <= 0.15

    def test_keep_rate_decreases_with_level(self):
        words = ["we", "should", "meet", "at", "the", "Station", "when", "it", "gets", "dark"]
        rates = []
        for level in range(1, 11):
            simulator = HearingLossSimulator(level=level, seed=11)
            kept = sum(simulator.decide_action(w) == "keep" for _ in range(400) for w in words)
            rates.append(kept / (400 * len(words)))
        assert rates == sorted(rates, reverse=True)


class TestGarble:
    """Tests for character-level mishearing."""

    def test_short_words_unchanged(self):
        simulator = HearingLossSimulator(level=10, rng=ScriptedRandom([0.1] * 10))
        assert simulator.garble_word("to") == "to"
        assert simulator.garble_word("a") == "a"

    def test_substitution_uses_language_table(self):
        simulator = HearingLossSimulator(level=5, language="english", rng=ScriptedRandom([0.1], [0]))
        assert simulator.garble_word("fast") == "vast"

    def test_substitution_preserves_case(self):
        simulator = HearingLossSimulator(level=5, language="english", rng=ScriptedRandom([0.1], [0]))
        assert simulator.garble_word("Fast") == "Vast"

    def test_transposition(self):
        simulator = HearingLossSimulator(level=5, rng=ScriptedRandom([0.5], [0]))
        assert simulator.garble_word("fast") == "afst"

    def test_transposition_of_last_character_is_noop(self):
        simulator = HearingLossSimulator(level=5, rng=ScriptedRandom([0.5], [3]))
        assert simulator.garble_word("fast") == "fast"

    def test_deletion(self):
        simulator = HearingLossSimulator(level=5, rng=ScriptedRandom([0.9], [1]))
        assert simulator.garble_word("fast") == "fst"

    def test_edit_count(self):
        # ceil(8 * 10 / 20) = 4 deletions
        simulator = HearingLossSimulator(level=10, rng=ScriptedRandom([0.9] * 10, [0] * 10))
        assert simulator.garble_word("elephant") == "hant"

    def test_edits_apply_to_mutated_word(self):
        # ceil(6 * 7 / 20) = 3: delete 0, swap 0, delete last
        rng = ScriptedRandom([0.9, 0.5, 0.9], [0, 0, 3])
        simulator = HearingLossSimulator(level=7, rng=rng)
        assert simulator.garble_word("planet") == "alnt"

    def test_italian_cluster_substitution(self):
        simulator = HearingLossSimulator(level=2, language="italian", rng=ScriptedRandom([0.1], [2]))
        assert simulator.garble_word("pallone") == "palone"

    def test_agnostic_has_no_clusters(self):
        simulator = HearingLossSimulator(level=2, language="agnostic", rng=ScriptedRandom([0.1], [2]))
        assert simulator.garble_word("pallone") == "parlone"

    def test_italian_cluster_keeps_case(self):
        simulator = HearingLossSimulator(level=2, language="italian", rng=ScriptedRandom([0.1], [2]))
        assert simulator.garble_word("PALLONE") == "PALONE"

    def test_italian_silent_h(self):
        simulator = HearingLossSimulator(level=2, language="italian", rng=ScriptedRandom([0.1], [0]))
        assert simulator.garble_word("hanno") == "anno"

    @pytest.mark.parametrize("language", ["english", "italian", "agnostic"])
    def test_length_bounds(self, language):
        words = ["cat", "dog", "hello", "bottle", "gnocchi", "strength", "ragazzo", "whatever"]
        for level in range(1, 11):
            simulator = HearingLossSimulator(level=level, language=language, seed=level)
            for word in words:
                edits = math.ceil(len(word) * level / 20)
                for _ in range(50):
                    garbled = simulator.garble_word(word)
                    assert garbled
                    assert len(garbled) <= len(word) + edits


class TestPartial:
    """Tests for partially heard words."""

    def test_keeps_prefix(self):
        simulator = HearingLossSimulator(level=5, rng=ScriptedRandom([0.1]))
        assert simulator.partial_word("hearing") == "hear..."

    def test_keeps_suffix(self):
        simulator = HearingLossSimulator(level=5, rng=ScriptedRandom([0.9]))
        assert simulator.partial_word("hearing") == "...ring"

    def test_short_word(self):
        simulator = HearingLossSimulator(level=5)
        assert simulator.partial_word("cat") == "c..."
        assert simulator.partial_word("a") == "a..."

    def test_profound_loss_keeps_one_character(self):
        simulator = HearingLossSimulator(level=10, rng=ScriptedRandom([0.1]))
        assert simulator.partial_word("abcd") == "a..."

    def test_always_marked_and_non_empty(self):
        for level in range(1, 11):
            simulator = HearingLossSimulator(level=level, seed=level)
            for word in ["four", "listen", "understanding"]:
                heard = simulator.partial_word(word)
                assert "..." in heard
                assert len(heard.replace("...", "")) >= 1


class TestTransform:
    """Tests for whole-utterance degradation."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_empty_input(self, text):
        result = HearingLossSimulator(level=10).transform(text)
        assert result == DegradationResult(original="", degraded="", loss_percentage=0)

    def test_always_keep(self):
        simulator = HearingLossSimulator(level=1, language="agnostic", rng=ScriptedRandom(default_float=ALWAYS_KEEP))
        result = simulator.transform("The weather is nice today")
        assert result.degraded == "The weather is nice today"
        assert result.loss_percentage == 0

    def test_always_drop(self):
        simulator = HearingLossSimulator(level=10, language="agnostic", rng=ScriptedRandom(default_float=ALWAYS_DROP))
        result = simulator.transform("Hello world")
        assert result.original == "Hello world"
        assert result.degraded == ""
        assert result.loss_percentage == 100

    def test_whitespace_collapsed(self):
        simulator = HearingLossSimulator(level=3, rng=ScriptedRandom(default_float=ALWAYS_KEEP))
        result = simulator.transform("  spaced   out\ttext ")
        assert result.degraded == "spaced out text"
        assert result.original == "  spaced   out\ttext "

    def test_placeholder_at_severe_levels(self):
        # drop roll, placeholder roll (emit), drop roll, placeholder roll (skip)
        rng = ScriptedRandom([0.99, 0.1, 0.99, 0.5])
        result = HearingLossSimulator(level=8, rng=rng).transform("one two")
        assert result.degraded == PLACEHOLDER
        assert result.loss_percentage == 100

    def test_no_placeholder_below_level_seven(self):
        rng = ScriptedRandom([0.99, 0.0], default_float=0.0)
        result = HearingLossSimulator(level=6, rng=rng).transform("one two")
        # second draw is consumed as the roll for "two", not a placeholder roll
        assert result.degraded == "two"
        assert result.loss_percentage == 50

    def test_loss_rounds_half_up(self):
        rng = ScriptedRandom([0.0] * 7 + [0.999])
        result = HearingLossSimulator(level=5, rng=rng).transform("a b c d e f g h")
        assert result.degraded == "a b c d e f g"
        assert result.loss_percentage == 13

    def test_partial_word_counts_as_heard(self):
        # "alpha" -> partial (roll 90), prefix; "beta" -> keep
        rng = ScriptedRandom([0.9, 0.1, 0.0])
        result = HearingLossSimulator(level=5, rng=rng).transform("alpha beta")
        assert result.degraded == "alp... beta"
        assert result.loss_percentage == 0

    def test_loss_within_bounds(self):
        text = "I would like to book a table for two people at eight tonight"
        for level in range(1, 11):
            simulator = HearingLossSimulator(level=level, seed=level * 3)
            for _ in range(100):
                result = simulator.transform(text)
                assert 0 <= result.loss_percentage <= 100
                assert result.degraded == result.degraded.strip()
                assert "  " not in result.degraded

    def test_to_dict(self):
        result = DegradationResult(original="a b", degraded="a", loss_percentage=50)
        assert result.to_dict() == {"original": "a b", "degraded": "a", "lossPercentage": 50}

    def test_independent_simulators_share_nothing(self):
        a = HearingLossSimulator(level=5, seed=1)
        b = HearingLossSimulator(level=5, seed=1)
        a.transform("burn a few draws on the first simulator")
        assert b.transform("same words") == HearingLossSimulator(level=5, seed=1).transform("same words")
