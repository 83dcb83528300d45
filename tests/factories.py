"""Builders for workout payloads used across tests."""
import datetime as dt

from gym_tracker.schemas.workout import GymSessionSchema


def make_session(
    date: dt.date,
    exercise: str = "Bench Press",
    sets: list[tuple[float, int, str | None]] | None = None,
    notes: str | None = None,
) -> GymSessionSchema:
    """One-exercise session; sets are (weight, reps, struggle_score)."""
    return GymSessionSchema.model_validate(session_payload(date, exercise, sets, notes))


def session_payload(
    date: dt.date,
    exercise: str = "Bench Press",
    sets: list[tuple[float, int, str | None]] | None = None,
    notes: str | None = None,
) -> dict:
    sets = sets if sets is not None else [(50.0, 10, "Easy")]
    return {
        "date": date.isoformat(),
        "notes": notes,
        "exercises": [
            {
                "exercise": {"name": exercise, "muscle_group": ["Chest"], "category": "Push"},
                "sets": [{"weight": w, "reps": r, "struggle_score": s} for w, r, s in sets],
            }
        ],
    }
