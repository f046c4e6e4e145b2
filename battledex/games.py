"""Mapping games to generations.

The games table is the only authority on which generations exist; the latest
generation in it is the one canonical records describe.
"""

from sqlalchemy.sql import func

from battledex.changelog import check_generation as _check_number
from battledex.db import identifier_from_name, tables
from battledex.db.util import store_errors
from battledex.errors import UnknownGeneration


def known_generations(session):
    """Returns the sorted list of generations with at least one game."""
    with store_errors():
        q = session.query(tables.Game.generation).distinct()
        return sorted(generation for (generation,) in q)

def latest_generation(session):
    """Returns the most recent generation, which canonical rows describe."""
    with store_errors():
        latest = session.query(func.max(tables.Game.generation)).scalar()
    if latest is None:
        raise UnknownGeneration(None)
    return latest

def latest_game(session):
    """Returns the most recently released game, by `order`."""
    with store_errors():
        game = (session.query(tables.Game)
            .order_by(tables.Game.order.desc())
            .first())
    if game is None:
        raise UnknownGeneration(None)
    return game

def check_generation(session, generation):
    """Makes sure `generation` is one the database knows about.  Returns the
    canonical generation.
    """
    _check_number(generation)
    if generation not in known_generations(session):
        raise UnknownGeneration(generation)
    return latest_generation(session)

def generation_for(session, game_or_generation):
    """Turns a game name (e.g. "x-y") or a generation number into a
    generation number.
    """
    if isinstance(game_or_generation, int):
        check_generation(session, game_or_generation)
        return game_or_generation

    text = str(game_or_generation).strip()
    if text.isdigit():
        return generation_for(session, int(text))

    with store_errors():
        game = (session.query(tables.Game)
            .filter_by(name=identifier_from_name(text))
            .one_or_none())
    if game is None:
        raise UnknownGeneration(game_or_generation)
    return game.generation
