"""
Custom exceptions for FinTrack.

Purpose
-------
Provides a unified exception hierarchy for consistent error handling
across all FinTrack modules. All exceptions inherit from FinTrackError,
enabling catch-all handling when needed.

Exception Hierarchy
-------------------
FinTrackError (base)
├── ConfigurationError - Invalid configuration or unknown strategy
├── ValidationError - Input contract violations
└── SerializationError - Unreadable or incompatible portfolio files

Degenerate inputs that have a meaningful answer (a CAGR over zero years,
a loan list with nothing owed) are not errors and return values instead.
A payoff that does not settle within the month ceiling is reported through
its result, not raised.

Usage
-----
>>> from fintrack.exceptions import ValidationError
>>>
>>> # Raise specific exception
>>> raise ValidationError("tenure_months must be >= 1, got 0")
>>>
>>> # Catch all FinTrack exceptions
>>> try:
...     portfolio = load_portfolio(path)
... except FinTrackError as e:
...     print(f"FinTrack error: {e}")
"""


class FinTrackError(Exception):
    """
    Base exception for all FinTrack errors.

    All FinTrack-specific exceptions inherit from this class,
    enabling unified error handling when needed.

    Examples
    --------
    >>> try:
    ...     comparison = compare_strategies(loans, extra_monthly=1000)
    ... except FinTrackError as e:
    ...     logger.error(f"Comparison failed: {e}")
    """
    pass


class ConfigurationError(FinTrackError):
    """
    Invalid configuration or parameters.

    Raised when configuration cannot be honoured, such as:
    - Unknown repayment strategy name
    - Month ceiling below 1

    Examples
    --------
    >>> raise ConfigurationError(
    ...     "Unknown strategy 'fastest'. Available: avalanche, snowball."
    ... )
    """
    pass


class ValidationError(FinTrackError):
    """
    Input contract violations.

    Raised when a calculation is called with inputs it cannot evaluate:
    - tenure_months < 1 (division by zero in the installment formula)
    - Duplicate loan ids in a single simulation run

    Examples
    --------
    >>> raise ValidationError(
    ...     f"tenure_months must be >= 1, got {tenure_months}."
    ... )
    """
    pass


class SerializationError(FinTrackError):
    """
    Portfolio file could not be read.

    Raised when:
    - The file is not valid JSON
    - The top-level JSON value is not an object

    A schema_version mismatch only warns.

    Examples
    --------
    >>> raise SerializationError(
    ...     f"{path} must contain a JSON object with a 'loans' list, got list."
    ... )
    """
    pass
