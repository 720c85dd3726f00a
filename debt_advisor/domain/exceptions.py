"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidBudgetError(DomainException):
    """Monthly budget cannot produce a finite payoff horizon"""

    pass


class PayoffNotConvergingError(InvalidBudgetError):
    """Simulated balances stopped shrinking or exceeded the projection horizon"""

    pass


class InvalidAccountDataError(DomainException):
    """Account balance or rate is negative or not a finite number"""

    pass


class EmptyInputError(DomainException):
    """Aggregate is undefined for an empty account list"""

    pass
