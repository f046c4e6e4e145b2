# encoding: utf8
"""Type effectiveness, as of a particular generation.

A type's damage relations are stored as six lists of type names: what it
deals no, half, or double damage to, and what it takes no, half, or double
damage from.  Only the "to" lists decide effectiveness.  The "from" lists say
the same thing from the other side, so they're used to double-check the data;
when the two disagree it's logged, and "to" wins.

Types that didn't exist yet in a generation (like Fairy before generation 6)
are left out of that generation's chart entirely, and attacks involving them
are neutral.
"""

from collections import OrderedDict, namedtuple
import logging

from sqlalchemy.orm import selectinload

from battledex import games
from battledex.cache import cached
from battledex.changelog import Change, Snapshot, resolve
from battledex.db import identifier_from_name, tables
from battledex.db.util import store_errors
from battledex.errors import NotFoundError

log = logging.getLogger(__name__)

IMMUNE = 0.0
HALF = 0.5
NEUTRAL = 1.0
DOUBLE = 2.0

#: Every multiplier one attack can get from typing alone, best first
MULTIPLIERS = (4.0, 2.0, 1.0, 0.5, 0.25, 0.0)

#: Same-type attack bonus
STAB_MULTIPLIER = 1.5

#: Types in the data that never take part in battle
NON_BATTLE_TYPES = frozenset(['unknown', 'shadow', 'stellar'])

RELATIONS = (
    'no_damage_to', 'half_damage_to', 'double_damage_to',
    'no_damage_from', 'half_damage_from', 'double_damage_from',
)


def split_type_list(text):
    """Turns a comma-separated list of type names into a frozenset."""
    return frozenset(name.strip() for name in text.split(',') if name.strip())


class TypeRelations(Snapshot, namedtuple('TypeRelations',
        ('name', 'introduced') + RELATIONS)):
    """One type's six damage relations, each a frozenset of type names."""
    __slots__ = ()

    @classmethod
    def from_row(cls, row):
        return cls(row.name, row.generation, *[
            split_type_list(getattr(row, relation)) for relation in RELATIONS])

    def damage_to(self, defending):
        if defending in self.no_damage_to:
            return IMMUNE
        elif defending in self.half_damage_to:
            return HALF
        elif defending in self.double_damage_to:
            return DOUBLE
        return NEUTRAL

    def damage_from(self, attacking):
        if attacking in self.no_damage_from:
            return IMMUNE
        elif attacking in self.half_damage_from:
            return HALF
        elif attacking in self.double_damage_from:
            return DOUBLE
        return NEUTRAL


Disagreement = namedtuple('Disagreement',
    ['attacking', 'defending', 'damage_to', 'damage_from'])


class TypeChart(object):
    """Effectiveness of every type against every other, in one generation.

    `types` lists the types that exist in `generation`, in database order.
    `known_types` is every type name the database has heard of; asking about
    anything else raises NotFoundError.  Charts are never modified after
    they're built.
    """

    def __init__(self, generation, relations, known_types=()):
        self.generation = generation
        self.relations = OrderedDict((r.name, r) for r in relations)
        self.types = tuple(self.relations)
        self.known_types = frozenset(known_types) | frozenset(self.types)
        self.disagreements = self._cross_check()

    def __repr__(self):
        return "<TypeChart for generation %d: %d types>" % (
            self.generation, len(self.types))

    def __contains__(self, name):
        return name in self.relations

    def _check(self, name):
        if name not in self.known_types:
            raise NotFoundError('type', name)

    def _cross_check(self):
        disagreements = []
        for attacking, relations in self.relations.items():
            for defending, other in self.relations.items():
                to = relations.damage_to(defending)
                from_ = other.damage_from(attacking)
                if to != from_:
                    log.debug("Generation %d: %s -> %s is %sx, but %s says %sx",
                        self.generation, attacking, defending, to,
                        defending, from_)
                    disagreements.append(
                        Disagreement(attacking, defending, to, from_))
        if disagreements:
            log.info("Generation %d type chart: %d relation(s) disagree; "
                "using damage-to", self.generation, len(disagreements))
        return disagreements

    def effectiveness(self, attacking, defending):
        """Returns the multiplier for an `attacking` move against a
        `defending` single type: 0, 0.5, 1, or 2.
        """
        self._check(attacking)
        self._check(defending)
        if attacking not in self.relations or defending not in self.relations:
            return NEUTRAL
        return self.relations[attacking].damage_to(defending)

    def multiplier(self, attacking, defending_types):
        """Returns the multiplier for an `attacking` move against a Pokémon
        with the given one or two types.
        """
        product = NEUTRAL
        for defending in defending_types:
            product *= self.effectiveness(attacking, defending)
        return max(IMMUNE, min(MULTIPLIERS[0], product))

    def defense_chart(self, defending_types):
        """Maps each attacking type to its multiplier against the given
        typing.
        """
        return OrderedDict(
            (attacking, self.multiplier(attacking, defending_types))
            for attacking in self.types)

    def offense_chart(self, attacking_types):
        """Maps each defending type to the best multiplier any of
        `attacking_types` gets against it.
        """
        attacking_types = list(attacking_types)
        for attacking in attacking_types:
            self._check(attacking)
        return OrderedDict(
            (defending, max(self.effectiveness(attacking, defending)
                            for attacking in attacking_types))
            for defending in self.types)


def group_by_multiplier(chart):
    """Groups a {type: multiplier} chart into buckets, from 4x down to 0x.

    Returns an OrderedDict of every multiplier in MULTIPLIERS to a list of
    type names, in chart order.  Buckets may be empty.
    """
    groups = OrderedDict((multiplier, []) for multiplier in MULTIPLIERS)
    for name, multiplier in chart.items():
        groups.setdefault(multiplier, []).append(name)
    return groups


def _resolve_type(row, generation, canonical_generation):
    changes = []
    for change_row in row.changes:
        change = Change.from_row(change_row, RELATIONS)
        changes.append(Change(change.generation, dict(
            (relation, split_type_list(text))
            for relation, text in change.fields.items())))
    return resolve(TypeRelations.from_row(row), changes,
        generation, canonical_generation)


def type_chart(session, generation, cache=None):
    """Returns the TypeChart for `generation`.

    Raises UnknownGeneration if the games table doesn't know `generation`.
    """
    canonical_generation = games.check_generation(session, generation)

    def build():
        with store_errors():
            rows = (session.query(tables.Type)
                .options(selectinload(tables.Type.changes))
                .order_by(tables.Type.id)
                .all())
            relations = [
                _resolve_type(row, generation, canonical_generation)
                for row in rows
                if row.generation <= generation
                and row.name not in NON_BATTLE_TYPES]
        log.debug("Built generation %d type chart with %d types",
            generation, len(relations))
        return TypeChart(generation, relations,
            known_types=[row.name for row in rows])

    return cached(cache, 'type-chart', None, generation, build)


def effectiveness(session, attacking, defending, generation, cache=None):
    """Returns the multiplier an `attacking` type gets against a `defending`
    type in `generation`.
    """
    chart = type_chart(session, generation, cache=cache)
    return chart.effectiveness(
        identifier_from_name(attacking), identifier_from_name(defending))
