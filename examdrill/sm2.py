from datetime import datetime, timedelta
from math import floor
from typing import Optional, Tuple

from examdrill.quality import PASS_QUALITY
from examdrill.schemas import ReviewUpdate

INITIAL_STRENGTH = 2.5
MIN_STRENGTH = 1.3
LAPSE_PENALTY = 0.2


def _round_half_up(value: float) -> int:
    return int(floor(value + 0.5))


class SM2Algorithm:
    """
    Adapted SM-2 spaced repetition algorithm for per-question review intervals.
    Based on SuperMemo 2 algorithm by Piotr Wozniak, with a fixed strength
    penalty on lapses instead of the quality-weighted one.
    """

    @staticmethod
    def calculate_next_review(
        strength: float,
        interval_days: int,
        repetition_count: int,
        quality: int,
        reference_time: Optional[datetime] = None
    ) -> Tuple[float, int, int, datetime]:
        """
        Calculate next review time and update SM-2 parameters.

        Args:
            strength: Current ease factor, never below 1.3
            interval_days: Current interval in days
            repetition_count: Successful reviews since the last lapse
            quality: Response quality (0-5). Below 3 is a lapse
            reference_time: Optional answer time (defaults to now)

        Returns:
            (new_strength, new_interval_days, new_repetition_count, next_review_at)
        """
        if quality < PASS_QUALITY:
            # Lapse: shrink strength and restart the 1 day / 6 day ramp
            new_strength = max(MIN_STRENGTH, strength - LAPSE_PENALTY)
            new_repetitions = 0
            new_interval = 1
        else:
            new_strength = strength + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02))
            new_strength = max(MIN_STRENGTH, new_strength)

            if repetition_count == 0:
                new_interval = 1
            elif repetition_count == 1:
                new_interval = 6
            else:
                new_interval = _round_half_up(interval_days * new_strength)
            new_repetitions = repetition_count + 1

        base_time = reference_time if reference_time else datetime.now()
        next_review_at = base_time + timedelta(days=new_interval)

        return round(new_strength, 2), new_interval, new_repetitions, next_review_at

    @staticmethod
    def initial_state() -> Tuple[float, int, int]:
        """SM-2 parameters for a question the user has never answered"""
        return INITIAL_STRENGTH, 0, 0

    @staticmethod
    def advance(prior, quality: int, reference_time: Optional[datetime] = None) -> ReviewUpdate:
        """
        Apply one answer to a stored review state.

        Args:
            prior: Object with strength, interval_days and repetition_count
                (e.g. a ReviewState row), or None for a first answer
            quality: Response quality (0-5)
            reference_time: Optional answer time (defaults to now)
        """
        if prior is None:
            strength, interval_days, repetition_count = SM2Algorithm.initial_state()
        else:
            strength = prior.strength
            interval_days = prior.interval_days
            repetition_count = prior.repetition_count

        new_strength, new_interval, new_repetitions, next_review_at = SM2Algorithm.calculate_next_review(
            strength,
            interval_days,
            repetition_count,
            quality,
            reference_time=reference_time
        )
        return ReviewUpdate(
            strength=new_strength,
            repetition_count=new_repetitions,
            interval_days=new_interval,
            next_review_at=next_review_at
        )
