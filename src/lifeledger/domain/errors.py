"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as an operation already in progress."""


class InvalidFormat(ValidationError):
    """Malformed or unrecognized configuration or backup document."""


class InvalidEntry(ValidationError):
    """Ledger entry whose points delta does not match its type."""


class InsufficientBalance(DomainError):
    """Balance is lower than the price of the requested item."""

    def __init__(self, balance: int, price: int):
        self.balance = balance
        self.price = price
        super().__init__(
            f"Insufficient points: balance is {balance:,}, item costs {price:,}"
        )


class OnCooldown(DomainError):
    """Item was redeemed too recently."""

    def __init__(self, days_left: int):
        self.days_left = days_left
        super().__init__(
            f"This item is on cooldown for {days_left} more day{'s' if days_left != 1 else ''}"
        )


class HardCapExceeded(DomainError):
    """Session would push today's total past the daily hard cap."""

    def __init__(self, total_minutes_today: int, duration_minutes: int, cap_minutes: int):
        self.total_minutes_today = total_minutes_today
        self.duration_minutes = duration_minutes
        self.cap_minutes = cap_minutes
        super().__init__(
            f"Daily hard cap reached ({cap_minutes // 60} hours): {total_minutes_today} minutes "
            f"logged today, session of {duration_minutes} minutes not recorded"
        )


class SessionTooShort(ValidationError):
    """Session shorter than the minimum recordable length."""


class SessionAlreadyActive(ConflictError):
    """A timer is already running or paused."""


class DomainNotFound(NotFoundError):
    """Session or timer references a domain that does not exist."""

    def __init__(self, domain_id: int):
        self.domain_id = domain_id
        super().__init__(domain_not_found(domain_id))


class PersistenceFailure(DomainError):
    """Opaque failure from the storage layer, surfaced verbatim."""


def domain_not_found(domain_id: int) -> str:
    """Return message for missing domain."""
    return f"Domain {domain_id} not found"


def activity_not_found(activity_id: int) -> str:
    """Return message for missing activity."""
    return f"Activity {activity_id} not found"


def shop_item_not_found(item_id: int) -> str:
    """Return message for missing shop item."""
    return f"Shop item {item_id} not found"


def no_active_timer() -> str:
    """Return message when a timer operation needs a running timer."""
    return "No timer is active"
