# encoding: utf8
"""Exceptions raised by battledex.

Everything derives from `BattledexError`, so callers that only want to report
a failure can catch that one class.
"""


class BattledexError(Exception):
    pass


class NotFoundError(BattledexError, LookupError):
    """No row in `table` matches `identifier`."""

    def __init__(self, table, identifier):
        self.table = table
        self.identifier = identifier
        super(NotFoundError, self).__init__(
            "%s '%s' not found." % (table.capitalize(), identifier))


class ResolutionError(BattledexError):
    pass


class UnknownGeneration(ResolutionError, ValueError):
    """The requested generation (or game) can't be mapped to a known
    generation.
    """

    def __init__(self, generation):
        self.generation = generation
        super(UnknownGeneration, self).__init__(
            "Unknown generation or game: %r" % (generation,))


class StoreError(BattledexError):
    """Reading the local database failed, or it holds data that doesn't hang
    together.  The original exception is kept in `original`; `where` says
    which data, if known.
    """

    def __init__(self, original, where=None):
        self.original = original
        self.where = where
        if where is None:
            message = "Database error: %s" % (original,)
        else:
            message = "Database error in %s: %s" % (where, original)
        super(StoreError, self).__init__(message)


class RosterError(BattledexError, ValueError): pass
