# encoding: utf8
"""Which types a whole team can hit hard, and which it can take.

Coverage only looks at typing: a member covers a type offensively if one of
its own types hits that type for 2x or more, and defensively if attacks of
that type do 0.5x or less to it.  Every member that qualifies is listed.
"""

from collections import OrderedDict, namedtuple

from battledex.cache import SnapshotCache
from battledex.errors import RosterError
from battledex.resolve import resolve_pokemon
from battledex.typechart import DOUBLE, HALF, type_chart


Contributor = namedtuple('Contributor', ['pokemon', 'multiplier'])


class CoverageEntry(namedtuple('CoverageEntry', ['type', 'offense', 'defense'])):
    """Coverage against one type.  `offense` and `defense` are tuples of
    Contributor, in roster order.
    """
    __slots__ = ()

    @property
    def covered_offensively(self):
        return bool(self.offense)

    @property
    def covered_defensively(self):
        return bool(self.defense)


class CoverageTable(object):
    """A roster's coverage against every type of a generation."""

    def __init__(self, generation, roster, entries):
        self.generation = generation
        self.roster = tuple(roster)
        self.entries = OrderedDict((entry.type, entry) for entry in entries)

    def __iter__(self):
        return iter(self.entries.values())

    def __len__(self):
        return len(self.entries)

    def __getitem__(self, type_name):
        return self.entries[type_name]

    def uncovered_offense(self):
        """Types nobody on the roster hits for 2x."""
        return [e.type for e in self if not e.covered_offensively]

    def uncovered_defense(self):
        """Types nobody on the roster resists."""
        return [e.type for e in self if not e.covered_defensively]


def coverage(session, roster, generation, cache=None):
    """Returns the CoverageTable of `roster` (names or IDs) in `generation`."""
    roster = list(roster)
    if not roster:
        raise RosterError("Coverage needs at least one Pokémon")

    if cache is None:
        cache = SnapshotCache()

    chart = type_chart(session, generation, cache=cache)
    members = [resolve_pokemon(session, name, generation, cache=cache)
               for name in roster]
    offense_charts = [chart.offense_chart(member.types) for member in members]
    defense_charts = [chart.defense_chart(member.types) for member in members]

    entries = []
    for type_name in chart.types:
        offense = []
        defense = []
        for member, offense_chart, defense_chart in zip(
                members, offense_charts, defense_charts):
            if offense_chart[type_name] >= DOUBLE:
                offense.append(Contributor(member, offense_chart[type_name]))
            if defense_chart[type_name] <= HALF:
                defense.append(Contributor(member, defense_chart[type_name]))
        entries.append(CoverageEntry(type_name, tuple(offense), tuple(defense)))

    return CoverageTable(generation, members, entries)
