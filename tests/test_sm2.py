"""
Unit tests for the adapted SM-2 interval scheduler.

Run: pytest tests/test_sm2.py -v
"""

from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from examdrill.schemas import ReviewUpdate
from examdrill.sm2 import SM2Algorithm


def _state(strength, repetition_count, interval_days):
    return SimpleNamespace(strength=strength, repetition_count=repetition_count, interval_days=interval_days)


class TestFirstAnswers:
    """New material goes through fixed 1 day and 6 day steps."""

    def test_first_answer_without_prior_state(self, now):
        result = SM2Algorithm.advance(None, 5, reference_time=now)

        assert isinstance(result, ReviewUpdate)
        assert result.repetition_count == 1
        assert result.interval_days == 1
        assert result.strength == pytest.approx(2.6)
        assert result.next_review_at == now + timedelta(days=1)

    def test_second_answer_gets_six_days(self, now):
        result = SM2Algorithm.advance(_state(2.6, 1, 1), 4, reference_time=now)

        assert result.repetition_count == 2
        assert result.interval_days == 6
        assert result.strength == pytest.approx(2.6)
        assert result.next_review_at == now + timedelta(days=6)

    def test_third_answer_multiplies_interval(self, now):
        # 2.6 + 0.1 = 2.7 -> round(6 * 2.7) = 16
        result = SM2Algorithm.advance(_state(2.6, 2, 6), 5, reference_time=now)

        assert result.repetition_count == 3
        assert result.strength == pytest.approx(2.7)
        assert result.interval_days == 16
        assert result.next_review_at == now + timedelta(days=16)

    def test_full_ramp_from_scratch(self, now):
        state = SM2Algorithm.advance(None, 5, reference_time=now)
        state = SM2Algorithm.advance(state, 4, reference_time=now)
        state = SM2Algorithm.advance(state, 5, reference_time=now)

        assert (state.repetition_count, state.interval_days) == (3, 16)

    def test_interval_rounds_half_up(self, now):
        # 13 * 2.5 = 32.5 -> 33
        result = SM2Algorithm.advance(_state(2.5, 2, 13), 4, reference_time=now)
        assert result.interval_days == 33


class TestLapses:
    """Quality below 3 resets progress and costs 0.2 strength."""

    def test_lapse_resets_repetitions_and_interval(self, now):
        result = SM2Algorithm.advance(_state(2.7, 3, 16), 1, reference_time=now)

        assert result.repetition_count == 0
        assert result.interval_days == 1
        assert result.strength == pytest.approx(2.5)
        assert result.next_review_at == now + timedelta(days=1)

    @pytest.mark.parametrize("quality", [0, 1, 2])
    def test_every_failing_quality_costs_the_same(self, quality, now):
        result = SM2Algorithm.advance(_state(2.0, 4, 20), quality, reference_time=now)
        assert result.strength == pytest.approx(1.8)

    def test_strength_floor(self, now):
        result = SM2Algorithm.advance(_state(1.4, 2, 3), 0, reference_time=now)
        assert result.strength == pytest.approx(1.3)

        result = SM2Algorithm.advance(result, 0, reference_time=now)
        assert result.strength == pytest.approx(1.3)

    def test_first_answer_lapse(self, now):
        result = SM2Algorithm.advance(None, 0, reference_time=now)

        assert result.repetition_count == 0
        assert result.interval_days == 1
        assert result.strength == pytest.approx(2.3)


class TestStrength:
    """Strength changes with quality and is stored with two decimals."""

    def test_quality_3_lowers_strength_but_passes(self, now):
        result = SM2Algorithm.advance(_state(2.5, 0, 0), 3, reference_time=now)

        assert result.strength == pytest.approx(2.36)
        assert result.repetition_count == 1

    def test_quality_4_keeps_strength(self, now):
        result = SM2Algorithm.advance(_state(2.5, 2, 6), 4, reference_time=now)
        assert result.strength == pytest.approx(2.5)

    def test_higher_quality_never_below_lapse(self, now):
        prior = _state(2.0, 2, 6)
        lapse = SM2Algorithm.advance(prior, 2, reference_time=now)
        for quality in (3, 4, 5):
            assert SM2Algorithm.advance(prior, quality, reference_time=now).strength > lapse.strength

    def test_pass_strength_floor(self, now):
        result = SM2Algorithm.advance(_state(1.3, 2, 4), 3, reference_time=now)
        assert result.strength == pytest.approx(1.3)

    def test_strength_is_rounded_to_two_decimals(self):
        strength, _, _, _ = SM2Algorithm.calculate_next_review(2.333, 6, 2, 5)
        assert strength == 2.43

    def test_defaults_to_current_time(self):
        _, interval, _, next_review_at = SM2Algorithm.calculate_next_review(2.5, 0, 0, 5)
        assert interval == 1
        assert next_review_at > datetime.now()
