class StoreError(Exception):
    """The marketplace store failed to complete a request"""


class UniqueViolationError(StoreError):
    """A write was rejected by a uniqueness constraint in the store"""

    constraint: str | None

    def __init__(self, message: str, constraint: str | None = None) -> None:
        super().__init__(message)
        self.constraint = constraint


class MetricsWriteError(Exception):
    """An error occurred while writing metrics"""


class RatingError(Exception):
    """A rating could not be submitted"""

    user_message: str = "Failed to submit rating. Please try again."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)


class DuplicateRatingError(RatingError):
    """The rater has already rated this user for this listing"""

    user_message = "You have already rated this user for this listing."


class RatingSubmitError(RatingError):
    """The store rejected the rating for a reason other than a duplicate"""


class InvalidRatingError(RatingError):
    """The rating itself is malformed (e.g. stars out of range)"""

    user_message = "Please choose a rating between 1 and 5 stars."


class RatingResponseError(RatingError):
    """The response to a rating could not be saved"""

    user_message = "Failed to add response. Please try again."
