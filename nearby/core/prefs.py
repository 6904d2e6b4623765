"""User preference model - Pure functions."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UserPrefs:
    """Persisted user preferences.

    Attributes:
        favorite_genres: Preferred event categories
        favorite_teams: Followed sports teams
        default_arrival_buffer_min: Minutes to arrive before an event
        default_return_buffer_min: Minutes after an event before the ride home
    """
    favorite_genres: tuple[str, ...] = ()
    favorite_teams: tuple[str, ...] = ("Cleveland Guardians",)
    default_arrival_buffer_min: int = 90
    default_return_buffer_min: int = 30

    def to_dict(self) -> dict[str, Any]:
        return {
            "favoriteGenres": list(self.favorite_genres),
            "favoriteTeams": list(self.favorite_teams),
            "defaultArrivalBufferMin": self.default_arrival_buffer_min,
            "defaultReturnBufferMin": self.default_return_buffer_min,
        }


DEFAULT_PREFS = UserPrefs()


def parse_prefs(data: Any) -> UserPrefs:
    """Parse persisted preferences, filling gaps from the defaults.

    Pure function.
    """
    if not isinstance(data, dict):
        return DEFAULT_PREFS
    try:
        return UserPrefs(
            favorite_genres=tuple(data.get("favoriteGenres", DEFAULT_PREFS.favorite_genres)),
            favorite_teams=tuple(data.get("favoriteTeams", DEFAULT_PREFS.favorite_teams)),
            default_arrival_buffer_min=int(
                data.get("defaultArrivalBufferMin", DEFAULT_PREFS.default_arrival_buffer_min)
            ),
            default_return_buffer_min=int(
                data.get("defaultReturnBufferMin", DEFAULT_PREFS.default_return_buffer_min)
            ),
        )
    except (TypeError, ValueError):
        return DEFAULT_PREFS
