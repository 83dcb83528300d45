from gym_tracker.services.sessions import Identity, SessionManager
from gym_tracker.services.users import authenticate, change_password, create_user
from gym_tracker.services.workouts import add_session, get_sessions, last_n_sets

__all__ = [
    "Identity",
    "SessionManager",
    "add_session",
    "authenticate",
    "change_password",
    "create_user",
    "get_sessions",
    "last_n_sets",
]
