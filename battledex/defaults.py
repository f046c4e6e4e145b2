""" battledex.defaults - logic for finding default settings """

import os

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')


def get_default_db_uri_with_origin():
    uri = os.environ.get('BATTLEDEX_DB_ENGINE', None)
    origin = 'environment'

    if uri is None:
        sqlite_path = os.path.join(DATA_DIR, 'battledex.sqlite')
        uri = 'sqlite:///' + sqlite_path
        origin = 'default'

    return uri, origin

def get_default_game_with_origin():
    """Returns the game the command line should assume, or None when the
    latest game in the database should be used.
    """
    game = os.environ.get('BATTLEDEX_GAME', None)
    origin = 'environment'

    if game is None:
        origin = 'default'

    return game, origin


def get_default_db_uri():
    return get_default_db_uri_with_origin()[0]
