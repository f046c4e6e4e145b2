# encoding: utf-8
import logging
import re

from sqlalchemy import engine_from_config, orm

from ..defaults import get_default_db_uri

log = logging.getLogger(__name__)


def connect(uri=None, session_args={}, engine_args={}, engine_prefix=''):
    """Connects to the requested URI.  Returns a session object.

    With the URI omitted, attempts to connect to a default SQLite database
    contained within the package directory.
    """

    # If we didn't get a uri, fall back to the default
    if uri is None:
        uri = engine_args.get(engine_prefix + 'url', None)
    if uri is None:
        uri = get_default_db_uri()

    ### Connect
    engine_args = dict(engine_args)
    engine_args[engine_prefix + 'url'] = uri
    engine = engine_from_config(engine_args, prefix=engine_prefix)
    log.debug("Connecting to %s", engine.url)

    all_session_args = dict(autoflush=True, bind=engine)
    all_session_args.update(session_args)
    sm = orm.sessionmaker(**all_session_args)
    session = orm.scoped_session(sm)

    return session

def identifier_from_name(name):
    """Make a string safe to use as an identifier.

    Valid characters are lowercase alphanumerics and "-".  Anything typed by a
    user ("Mr. Mime", "dragon claw") goes through here before it is compared
    against the `name` columns, which hold identifiers.
    """
    identifier = name.strip().lower()
    identifier = re.sub('[ _–]+', '-', identifier)
    identifier = re.sub("['./;’(),:]", '', identifier)
    identifier = identifier.replace('é', 'e')
    identifier = identifier.replace('♀', '-f')
    identifier = identifier.replace('♂', '-m')
    return identifier
