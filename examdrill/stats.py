"""Session and user level statistics, including the study streak."""

from datetime import date, datetime
from typing import Dict, Iterable, Optional, Tuple

from examdrill.schemas import CategoryStats, CategoryTally, SessionStats


def percentage(part: int, whole: int) -> float:
    """part / whole * 100, or 0 when there is nothing to divide by"""
    return (part / whole) * 100 if whole > 0 else 0.0


def average(total: float, count: int) -> float:
    return total / count if count > 0 else 0.0


def build_session_stats(session, category_breakdown: Dict[str, Tuple[int, int]]) -> SessionStats:
    """
    Summarize a study session.
    
    Args:
        session: Object with total_questions, correct_answers and
            total_time_spent_ms (e.g. a StudySession row)
        category_breakdown: category -> (total, correct) over the session's answers
    """
    return SessionStats(
        total_questions=session.total_questions,
        correct_answers=session.correct_answers,
        accuracy=percentage(session.correct_answers, session.total_questions),
        total_time_spent_ms=session.total_time_spent_ms,
        average_time_per_question_ms=average(session.total_time_spent_ms, session.total_questions),
        category_breakdown={
            category: CategoryTally(total=total, correct=correct)
            for category, (total, correct) in sorted(category_breakdown.items())
        }
    )


def build_category_stats(outcomes: Iterable[Tuple[str, bool]]) -> Dict[str, CategoryStats]:
    """Tally (category, was_correct) pairs into per-category accuracy"""
    tallies: Dict[str, CategoryStats] = {}
    for category, was_correct in outcomes:
        tally = tallies.setdefault(category, CategoryStats())
        tally.total += 1
        if was_correct:
            tally.correct += 1
    for tally in tallies.values():
        tally.accuracy = percentage(tally.correct, tally.total)
    return dict(sorted(tallies.items()))


def current_streak(started_at: Iterable[datetime], today: Optional[date] = None) -> int:
    """
    Count consecutive study days ending today.
    
    Session start times are reduced to local calendar days, newest first;
    several sessions on one day count once. The i-th distinct day must be
    exactly i days before today, so a user whose last session was yesterday
    has a streak of 0 until they study today. Walking the raw session list
    instead would end the streak at the second session of a day.
    
    Args:
        started_at: Session start times, most recent first
        today: Reference day (defaults to today)
    """
    today = today or date.today()
    
    study_days = []
    for moment in started_at:
        day = moment.date()
        if not study_days or study_days[-1] != day:
            study_days.append(day)
    
    streak = 0
    for i, day in enumerate(study_days):
        if (today - day).days != i:
            break
        streak += 1
    return streak
