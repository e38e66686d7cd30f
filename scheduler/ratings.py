from typing import NamedTuple

from scheduler.sm2 import validate_rating


class RatingOption(NamedTuple):
    rating: int
    label: str
    description: str


# Order matters: keyboard shortcut n picks RATING_OPTIONS[n - 1].
RATING_OPTIONS = (
    RatingOption(1, "Again", "Forgot completely"),
    RatingOption(3, "Hard", "Remembered with difficulty"),
    RatingOption(4, "Good", "Remembered correctly"),
    RatingOption(5, "Easy", "Remembered instantly"),
)

RATING_LABELS = {
    0: "Blackout",
    1: "Wrong",
    2: "Hard",
    3: "Difficult",
    4: "Good",
    5: "Easy",
}


def rating_label(rating: int) -> str:
    return RATING_LABELS[validate_rating(rating)]


def option_for_shortcut(key) -> RatingOption:
    """Map a shortcut key ("1".."4" or 1..4) to its rating option."""
    if isinstance(key, str) and key.strip().isdigit():
        key = int(key.strip())
    if isinstance(key, bool) or not isinstance(key, int) or not 1 <= key <= len(RATING_OPTIONS):
        raise ValueError(f"no rating option bound to shortcut {key!r}")
    return RATING_OPTIONS[key - 1]


def rating_options():
    return [
        {**opt._asdict(), "shortcut": str(i)}
        for i, opt in enumerate(RATING_OPTIONS, start=1)
    ]
