"""Helpers for common ways to work with battledex queries

These include id- and name-based lookup, and turning database failures into
`StoreError`.
"""

from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from battledex.db import identifier_from_name
from battledex.errors import NotFoundError, StoreError

### Getter

def get(session, table, name=None, id=None):
    """Get one object from the database.

    session: The session to use (from battledex.db.connect())
    table: The table to select from (such as battledex.db.tables.Move)

    name: The name of the object; it's normalized with
        `identifier_from_name` first
    id: The ID number of the object

    If no object matches, NotFoundError is raised.  Any database failure is
    raised as StoreError.
    """

    with store_errors():
        if id is not None:
            result = session.get(table, id)
            identifier = id
        else:
            identifier = name
            result = (session.query(table)
                .filter_by(name=identifier_from_name(name))
                .one_or_none())

    if result is None:
        raise NotFoundError(table.__singlename__.replace('_', ' '), identifier)
    return result

def get_by_name_or_id(session, table, name_or_id):
    """Like `get`, but takes whatever the user typed.  Integers and digit
    strings are IDs; anything else is a name.
    """
    if isinstance(name_or_id, int) or name_or_id.strip().isdigit():
        return get(session, table, id=int(name_or_id))
    return get(session, table, name=name_or_id)

### Helpers

@contextmanager
def store_errors():
    """Re-raise any SQLAlchemy error from the block as StoreError."""
    try:
        yield
    except SQLAlchemyError as e:
        raise StoreError(e) from e

def names(session, table):
    """Returns every name in `table`, ordered by ID."""
    with store_errors():
        return [name for (name,) in session.query(table.name).order_by(table.id)]
