"""Domain-specific exceptions

Structural errors only. Data-quality problems (an unbalanced budget, a missing
balance estimate) are reported as values on the results instead.
"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidMonthKey(DomainException):
    """Month is outside 1-12 or the key cannot be parsed"""

    pass


class InvalidCategoryData(DomainException):
    """Category or snapshot data is malformed or missing required fields"""

    pass


class UnknownAccountError(DomainException):
    """Account is not part of the configured account set"""

    pass


class MonthNotFoundError(DomainException):
    """No snapshot is stored for the requested month"""

    pass
