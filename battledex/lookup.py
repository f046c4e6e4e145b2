# encoding: utf8
"""Suggesting names when a lookup fails.

Resolvers never guess: an unknown name is a NotFoundError.  This module is
what the command line uses to follow that up with "did you mean".  It builds
an in-memory whoosh index of every Pokémon, move, ability, type, and game
name, and searches it by substring and by edit distance.
"""

from collections import OrderedDict
import logging

import whoosh.fields
import whoosh.query
from whoosh.filedb.filestore import RamStorage
from whoosh.support import levenshtein

from battledex.db import identifier_from_name, tables
from battledex.db.util import store_errors

__all__ = ['DexLookup']

log = logging.getLogger(__name__)


class DexLookup(object):
    #: More suggestions than this aren't worth listing
    MAX_SUGGESTIONS = 20
    #: Edit distance allowed for fuzzy matches
    MAX_DISTANCE = 2

    # Dictionary of single name => table class.  Keyed the same way
    # NotFoundError labels its table.
    indexed_tables = OrderedDict(
        (cls.__singlename__, cls)
        for cls in (
            tables.Pokemon,
            tables.Move,
            tables.Ability,
            tables.Type,
            tables.Game,
        )
    )

    def __init__(self, session):
        self.session = session
        self.index = None

    def rebuild_index(self):
        """Creates the index from scratch."""

        schema = whoosh.fields.Schema(
            name=whoosh.fields.ID(sortable=True, stored=True),
            table=whoosh.fields.ID(stored=True),
        )

        self.index = RamStorage().create_index(schema)
        writer = self.index.writer()

        with store_errors():
            for table_name, cls in self.indexed_tables.items():
                q = self.session.query(cls.name).order_by(cls.id)
                for (name,) in q:
                    writer.add_document(name=name, table=table_name)

        writer.commit()
        log.debug("Indexed %d names", self.index.doc_count())

    def normalize_name(self, name):
        """Turns user input into something comparable with indexed names.
        Whoosh wildcards are stripped too.
        """
        name = identifier_from_name(name)
        return name.replace('*', '').replace('?', '')

    def suggest(self, name, table=None):
        """Returns names similar to `name`, best match first.

        `table` restricts the search to one kind of thing, e.g. 'move'.
        Everything containing `name` matches, as does anything within
        MAX_DISTANCE edits of it that starts with the same letter.
        """
        if self.index is None:
            self.rebuild_index()

        name = self.normalize_name(name)
        if not name:
            return []

        query = whoosh.query.Or([
            whoosh.query.Wildcard('name', '*' + name + '*'),
            whoosh.query.FuzzyTerm('name', name,
                maxdist=self.MAX_DISTANCE, prefixlength=1),
        ])
        if table is not None:
            query = whoosh.query.And([query, whoosh.query.Term('table', table)])

        with self.index.searcher() as searcher:
            names = set(hit['name'] for hit in searcher.search(query, limit=None))

        return sorted(names,
            key=lambda suggestion: (-levenshtein.relative(name, suggestion),
                                    suggestion))

    def too_many(self, suggestions):
        return len(suggestions) > self.MAX_SUGGESTIONS
