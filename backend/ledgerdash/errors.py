from __future__ import annotations


class LedgerError(Exception):
    """Base class for errors raised by ledgerdash."""


class InvalidArgument(LedgerError, ValueError):
    """A period, kind or day-count token was not recognised.

    Always raised before any store access.
    """


class StoreFailure(LedgerError):
    """The transaction store could not answer an aggregation query.

    The underlying driver error is chained as ``__cause__``.
    """

