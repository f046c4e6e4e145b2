# encoding: utf8
"""Pokémon, moves, and abilities as of a particular generation.

Every resolver takes a session, a name or ID, and (except abilities, which
never change) a generation, and returns an immutable snapshot.  Pass a
`SnapshotCache` to share work between calls.
"""

from collections import namedtuple
import json
import logging

from battledex import games
from battledex.cache import cached
from battledex.changelog import Change, Snapshot, resolve
from battledex.db import tables
from battledex.db.util import get_by_name_or_id, store_errors
from battledex.errors import NotFoundError, StoreError
from battledex.typechart import STAB_MULTIPLIER

log = logging.getLogger(__name__)

MOVE_CHANGE_COLUMNS = ('power', 'accuracy', 'pp', 'effect_chance', 'effect', 'type')


Stats = namedtuple('Stats', [
    'attack', 'defense', 'special_attack', 'special_defense', 'speed'])

AbilitySlot = namedtuple('AbilitySlot', ['name', 'hidden'])

LearnedMove = namedtuple('LearnedMove', ['name', 'learn_method', 'learn_level'])

EvolutionStep = namedtuple('EvolutionStep', ['depth', 'species', 'methods'])


def evolution_steps(evolution):
    """Flattens an evolution descriptor into EvolutionSteps, depth first.

    The descriptor is a JSON tree of {"species", "methods", "evolves_to"}
    nodes; `methods` is a list of {"trigger", "min_level", ...} and may be
    missing.  A descriptor that isn't valid JSON raises StoreError.
    """
    if evolution is None:
        return []
    try:
        root = json.loads(evolution)
    except ValueError as e:
        raise StoreError(e) from e

    steps = []
    pending = [(0, root)]
    while pending:
        depth, node = pending.pop()
        methods = tuple(
            (method.get('trigger') or 'unknown', method.get('min_level'))
            for method in node.get('methods', ()))
        steps.append(EvolutionStep(depth, node['species'], methods))
        for child in reversed(node.get('evolves_to', ())):
            pending.append((depth + 1, child))
    return steps


class ResolvedPokemon(Snapshot, namedtuple('ResolvedPokemon', [
        'id', 'name', 'generation', 'typing', 'stats', 'species',
        'species_group', 'evolution', 'abilities', 'learnset'])):
    """A Pokémon as of `generation`.

    `typing` is a (primary, secondary) pair; the secondary type is None for
    single-typed Pokémon.
    """
    __slots__ = ()

    @property
    def primary_type(self):
        return self.typing[0]

    @property
    def secondary_type(self):
        return self.typing[1]

    @property
    def types(self):
        """The Pokémon's one or two types."""
        return tuple(type_ for type_ in self.typing if type_ is not None)

    def is_stab(self, type_):
        """True if a move of `type_` gets the same-type attack bonus."""
        return type_ in self.types

    def stab_multiplier(self, type_):
        if self.is_stab(type_):
            return STAB_MULTIPLIER
        return 1.0


class ResolvedMove(Snapshot, namedtuple('ResolvedMove', [
        'id', 'name', 'generation', 'power', 'accuracy', 'pp',
        'effect_chance', 'effect', 'type', 'damage_class', 'introduced'])):
    """A move as of `generation`."""
    __slots__ = ()

    @property
    def is_damaging(self):
        return self.damage_class != 'status'


ResolvedAbility = namedtuple('ResolvedAbility', ['id', 'name', 'effect', 'introduced'])


### Pokémon

def _learnset(pokemon, generation):
    """Returns the Pokémon's learnable moves in `generation`, one per move and
    method, sorted by method, level, and name.
    """
    seen = {}
    q = pokemon.moves.filter(tables.PokemonMove.generation == generation)
    for row in q:
        key = row.name, row.learn_method
        # Keep the earliest level when different games disagree
        if key not in seen or row.learn_level < seen[key].learn_level:
            seen[key] = LearnedMove(row.name, row.learn_method, row.learn_level)
    return tuple(sorted(seen.values(),
        key=lambda move: (move.learn_method, move.learn_level, move.name)))

def _build_pokemon(pokemon, generation, canonical_generation):
    species = pokemon.species
    canonical = ResolvedPokemon(
        id=pokemon.id,
        name=pokemon.name,
        generation=generation,
        typing=(pokemon.primary_type, pokemon.secondary_type),
        stats=Stats(pokemon.attack, pokemon.defense, pokemon.special_attack,
                    pokemon.special_defense, pokemon.speed),
        species=species.name,
        species_group=species.group,
        evolution=species.evolution.evolution if species.evolution else None,
        abilities=tuple(AbilitySlot(row.name, row.hidden)
                        for row in pokemon.abilities),
        learnset=_learnset(pokemon, generation),
    )
    # The typing changes as a pair, so a NULL secondary type is real
    changes = [
        Change(row.generation, dict(typing=(row.primary_type, row.secondary_type)))
        for row in pokemon.type_changes]
    return resolve(canonical, changes, generation, canonical_generation)

def resolve_pokemon(session, name_or_id, generation, cache=None):
    """Returns the ResolvedPokemon for `name_or_id` in `generation`.

    Raises NotFoundError if there's no such Pokémon, and UnknownGeneration if
    there's no such generation.
    """
    canonical_generation = games.check_generation(session, generation)
    pokemon = get_by_name_or_id(session, tables.Pokemon, name_or_id)

    def build():
        log.debug("Resolving pokemon %s for generation %d",
            pokemon.name, generation)
        with store_errors():
            return _build_pokemon(pokemon, generation, canonical_generation)

    return cached(cache, 'pokemon', pokemon.id, generation, build)


### Moves

def _build_move(move, generation, canonical_generation):
    canonical = ResolvedMove(
        id=move.id,
        name=move.name,
        generation=generation,
        power=move.power,
        accuracy=move.accuracy,
        pp=move.pp,
        effect_chance=move.effect_chance,
        effect=move.effect,
        type=move.type,
        damage_class=move.damage_class,
        introduced=move.generation,
    )
    changes = [Change.from_row(row, MOVE_CHANGE_COLUMNS) for row in move.changes]
    return resolve(canonical, changes, generation, canonical_generation)

def resolve_move(session, name_or_id, generation, cache=None):
    """Returns the ResolvedMove for `name_or_id` in `generation`.

    Raises NotFoundError if there's no such move, and UnknownGeneration if
    there's no such generation.
    """
    canonical_generation = games.check_generation(session, generation)
    move = get_by_name_or_id(session, tables.Move, name_or_id)

    def build():
        with store_errors():
            return _build_move(move, generation, canonical_generation)

    return cached(cache, 'move', move.id, generation, build)

def learned_moves(session, pokemon, generation, cache=None):
    """Pairs each LearnedMove of a ResolvedPokemon with the move resolved for
    `generation`, in learnset order.

    A learnset naming a move the moves table doesn't have is broken data, so
    that's a StoreError rather than a NotFoundError.
    """
    pairs = []
    for learned in pokemon.learnset:
        try:
            move = resolve_move(session, learned.name, generation, cache=cache)
        except NotFoundError as e:
            raise StoreError(e, where="%s's learnset" % pokemon.name) from e
        pairs.append((learned, move))
    return pairs


### Abilities

def resolve_ability(session, name_or_id, cache=None):
    """Returns the ResolvedAbility for `name_or_id`.  Abilities never change
    between generations.
    """
    ability = get_by_name_or_id(session, tables.Ability, name_or_id)

    def build():
        return ResolvedAbility(ability.id, ability.name, ability.effect,
                               ability.generation)

    return cached(cache, 'ability', ability.id, None, build)
