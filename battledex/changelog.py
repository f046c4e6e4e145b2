# encoding: utf8
"""Reconstructing what something looked like in an older generation.

The database stores every entity as it is in the latest generation, plus
change rows.  A change row tagged with generation G holds the values that
applied up to and including G, for just the fields that differ; everything it
leaves NULL is "whatever the next more recent row (or the canonical record)
says".

So to see an entity as of generation T, take every change row from T up to
(but not including) the canonical generation, and for each field use the row
closest to T that sets it.  Rows older than T describe even older games and
don't apply.

Snapshots are immutable namedtuples.  Anything with a change history provides
`overlay(fields)`, which returns a copy with `fields` replaced; see
`Snapshot`.  Things without a history simply never have changes to apply.
"""

from collections import namedtuple
from operator import attrgetter
import logging

from battledex.errors import UnknownGeneration

log = logging.getLogger(__name__)


class Change(namedtuple('Change', ['generation', 'fields'])):
    """One change row: its generation, and a dict of the fields it sets."""
    __slots__ = ()

    @classmethod
    def from_row(cls, row, columns, generation_column='generation'):
        """Builds a Change from a database row, keeping only the `columns`
        that aren't NULL.
        """
        fields = {}
        for column in columns:
            value = getattr(row, column)
            if value is not None:
                fields[column] = value
        return cls(getattr(row, generation_column), fields)


class Snapshot(object):
    """Mixin for namedtuples that can have changes overlaid on them."""
    __slots__ = ()

    def overlay(self, fields):
        if not fields:
            return self
        return self._replace(**fields)


def check_generation(generation):
    """Raises UnknownGeneration unless `generation` looks like a generation
    number at all.
    """
    if isinstance(generation, bool) or not isinstance(generation, int) \
            or generation < 1:
        raise UnknownGeneration(generation)


def collect(changes, target_generation, canonical_generation):
    """Merges the fields of every change row that applies at
    `target_generation`.  Returns a dict, empty if nothing applies.
    """
    merged = {}
    for change in sorted(changes, key=attrgetter('generation'), reverse=True):
        if change.generation >= canonical_generation:
            # Not really a change at all; the canonical row covers it
            continue
        if change.generation < target_generation:
            break
        # Walking towards the target, so closer rows win
        merged.update(change.fields)
    return merged


def resolve(canonical, changes, target_generation, canonical_generation):
    """Returns `canonical` as it was in `target_generation`.

    `canonical` is a `Snapshot` of the latest generation,
    `canonical_generation`.  `changes` is an iterable of `Change`, in any
    order.
    """
    check_generation(target_generation)

    if target_generation >= canonical_generation:
        return canonical

    fields = collect(changes, target_generation, canonical_generation)
    if fields:
        log.debug("Generation %d overlays %s", target_generation,
            ', '.join(sorted(fields)))
    return canonical.overlay(fields)
