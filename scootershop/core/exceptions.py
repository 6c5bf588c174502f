# scootershop/core/exceptions.py


class ShopError(Exception):
    """Base class for domain errors raised outside the HTTP layer."""


class InvalidPeriod(ShopError):
    """Raised when a target period is not one of daily, weekly, monthly, yearly."""

    def __init__(self, period):
        self.period = period
        super().__init__(f"Invalid period: {period!r}")


class EventSourceUnavailable(ShopError):
    """The financial event query failed; target progress cannot be computed."""
