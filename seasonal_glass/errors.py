"""Exception types raised by the seasonal glass engine."""


class InvalidInputError(ValueError):
    """Unrecognized season or time-of-day value."""


class InvalidTransitionError(ValueError):
    """Transition requested with a non-positive duration or unknown easing."""


class WeatherFetchError(RuntimeError):
    """Weather provider could not deliver a reading."""


class LocationUnavailableError(RuntimeError):
    """Location access denied or unavailable."""
