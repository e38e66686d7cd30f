"""SM-2 scheduling for flashcards.

Ratings run 0..5:
  0 - complete blackout
  1 - wrong, but the answer looked familiar
  2 - wrong, but the answer was easy to recall once shown
  3 - correct with serious difficulty
  4 - correct with some hesitation
  5 - perfect, instant recall

Everything here is pure: callers load the card state, call
calculate_sm2 / review_flashcard, and persist the returned fields.
"""
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping, NamedTuple, Optional, Union

MIN_EASINESS_FACTOR     = 1.3    # lower bound for easiness factor
DEFAULT_EASINESS_FACTOR = 2.5
MIN_RATING              = 0
MAX_RATING              = 5
PASSING_RATING          = 3      # 3, 4, 5 count as a successful recall


class InvalidRatingError(ValueError):
    """Raised for a rating that is not an integer in 0..5."""

    def __init__(self, rating):
        self.rating = rating
        super().__init__(
            f"rating must be an integer between {MIN_RATING} and {MAX_RATING}, got {rating!r}"
        )


class SM2Result(NamedTuple):
    easiness_factor: float
    interval_days: int
    repetitions: int
    next_review_date: str


def validate_rating(rating) -> int:
    # bool is an int subclass; True must not sneak in as rating 1
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidRatingError(rating)
    if rating < MIN_RATING or rating > MAX_RATING:
        raise InvalidRatingError(rating)
    return rating


def is_success(rating: int) -> bool:
    return validate_rating(rating) >= PASSING_RATING


def round_half_up(value: float, places: int = 0) -> Decimal:
    """Round like Math.round does, not like round() (banker's rounding).

    The float goes through its shortest repr first, so 2.345 -> 2.35
    instead of whatever the binary expansion happens to be.
    """
    exp = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(exp, rounding=ROUND_HALF_UP)


def _as_date(value: date) -> date:
    # datetime is a date subclass; drop the time part
    if isinstance(value, datetime):
        return value.date()
    return value


def add_days(start: date, days: int) -> str:
    return (_as_date(start) + timedelta(days=days)).isoformat()


def calculate_sm2(easiness_factor: float, interval_days: int, repetitions: int,
                  rating: int, today: Optional[date] = None) -> SM2Result:
    """Return the scheduling state after one review.

    The ease factor is updated on every review, failed or not. The
    interval multiplication uses the new (rounded) ease factor and the
    interval that led to this review.
    """
    validate_rating(rating)
    if today is None:
        today = date.today()

    q = 5 - rating
    new_ef = easiness_factor + (0.1 - q * (0.08 + q * 0.02))
    if new_ef < MIN_EASINESS_FACTOR:
        new_ef = MIN_EASINESS_FACTOR
    new_ef = float(round_half_up(new_ef, 2))

    if rating >= PASSING_RATING:
        if repetitions == 0:
            new_interval = 1
        elif repetitions == 1:
            new_interval = 6
        else:
            new_interval = int(round_half_up(interval_days * new_ef))
        new_reps = repetitions + 1
    else:
        new_reps = 0
        new_interval = 1

    return SM2Result(
        easiness_factor=new_ef,
        interval_days=new_interval,
        repetitions=new_reps,
        next_review_date=add_days(today, new_interval),
    )


def _field(card: Mapping, name: str, default):
    value = card.get(name)
    return default if value is None else value


def review_flashcard(card: Mapping, rating: int,
                     today: Optional[date] = None) -> SM2Result:
    """Run SM-2 against a stored card (dict or DynamoDB item).

    Missing state is read as a never-reviewed card; DynamoDB Decimals
    are converted before the arithmetic.
    """
    return calculate_sm2(
        float(_field(card, "easiness_factor", DEFAULT_EASINESS_FACTOR)),
        int(_field(card, "interval_days", 0)),
        int(_field(card, "repetitions", 0)),
        rating,
        today=today,
    )


def is_due(next_review_date: Union[str, date, None],
           today: Optional[date] = None) -> bool:
    """True for never-reviewed cards and cards scheduled today or earlier."""
    if not next_review_date:
        return True
    today = date.today() if today is None else _as_date(today)
    if isinstance(next_review_date, date):
        next_review_date = _as_date(next_review_date).isoformat()
    # YYYY-MM-DD is fixed width, so string order is date order
    return next_review_date <= today.isoformat()
