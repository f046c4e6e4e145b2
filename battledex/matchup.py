# encoding: utf8
"""Sizing up one attacker against up to six defenders.

For every defender, a `MatchupResult` says how the defender's typing holds up
against each attacking type, and which moves each side can actually hit the
other with.
"""

from collections import namedtuple

from battledex.cache import SnapshotCache
from battledex.errors import RosterError
from battledex.resolve import learned_moves, resolve_pokemon
from battledex.typechart import DOUBLE, NEUTRAL, type_chart

MAX_DEFENDERS = 6


MoveEffectiveness = namedtuple('MoveEffectiveness', ['move', 'multiplier', 'stab'])


class MatchupResult(namedtuple('MatchupResult', [
        'defender', 'attacker', 'defense', 'offense',
        'attacker_moves', 'defender_moves'])):
    """How `attacker` and `defender` fare against each other.

    `defense` maps every attacking type to its multiplier against the
    defender; `offense` maps every type to the best multiplier the defender's
    own types get against it.  `attacker_moves` and `defender_moves` list
    each side's damaging moves, best first, with their multiplier against
    the other side.
    """
    __slots__ = ()

    @property
    def stats(self):
        """The (defender, attacker) base stats."""
        return self.defender.stats, self.attacker.stats

    @property
    def weaknesses(self):
        return [t for t, m in self.defense.items() if m > NEUTRAL]

    @property
    def resistances(self):
        return [t for t, m in self.defense.items() if 0 < m < NEUTRAL]

    @property
    def immunities(self):
        return [t for t, m in self.defense.items() if m == 0]

    @property
    def threats(self):
        """The attacker's moves that hit the defender for 2x or more."""
        return [m for m in self.attacker_moves if m.multiplier >= DOUBLE]


def move_breakdown(session, user, target, generation, chart, cache=None,
                   stab_only=False):
    """Lists `user`'s damaging moves with their multiplier against `target`.

    Moves are sorted by multiplier, then STAB, then name.
    """
    breakdown = []
    for learned, move in learned_moves(session, user, generation, cache=cache):
        if not move.is_damaging:
            continue
        stab = user.is_stab(move.type)
        if stab_only and not stab:
            continue
        multiplier = chart.multiplier(move.type, target.types)
        breakdown.append(MoveEffectiveness(move, multiplier, stab))

    # Learnsets may teach the same move more than one way
    unique = {}
    for entry in breakdown:
        unique.setdefault(entry.move.name, entry)
    return sorted(unique.values(),
        key=lambda e: (-e.multiplier, not e.stab, e.move.name))


def matchup(session, defenders, attacker, generation, cache=None,
            stab_only=False):
    """Matches `attacker` against each of `defenders` (one to six names or
    IDs) in `generation`.

    Returns a list of MatchupResult, one per defender, in the same order.
    `stab_only` leaves out moves that don't match their user's types.
    """
    defenders = list(defenders)
    if not 1 <= len(defenders) <= MAX_DEFENDERS:
        raise RosterError("Need between 1 and %d defenders, got %d"
            % (MAX_DEFENDERS, len(defenders)))

    if cache is None:
        cache = SnapshotCache()

    chart = type_chart(session, generation, cache=cache)
    attacker = resolve_pokemon(session, attacker, generation, cache=cache)

    results = []
    for name in defenders:
        defender = resolve_pokemon(session, name, generation, cache=cache)
        results.append(MatchupResult(
            defender=defender,
            attacker=attacker,
            defense=chart.defense_chart(defender.types),
            offense=chart.offense_chart(defender.types),
            attacker_moves=move_breakdown(session, attacker, defender,
                generation, chart, cache=cache, stab_only=stab_only),
            defender_moves=move_breakdown(session, defender, attacker,
                generation, chart, cache=cache, stab_only=stab_only),
        ))
    return results
