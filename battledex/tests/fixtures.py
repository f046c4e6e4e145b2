# encoding: utf8
"""A small but real slice of the dataset, for the tests.

The latest type chart is complete; historical changes cover the well-known
ones (Steel resisting Ghost and Dark through generation 5, the generation 1
Ghost/Psychic bug, Bite being Normal-type, Clefairy being Normal-type,
Magnemite gaining Steel, and a few power changes).
"""

from battledex.db import tables

# Attacking type => (no damage to, half damage to, double damage to)
DAMAGE_TO = {
    'normal': (['ghost'], ['rock', 'steel'], []),
    'fighting': (['ghost'], ['poison', 'flying', 'psychic', 'bug', 'fairy'],
        ['normal', 'ice', 'rock', 'dark', 'steel']),
    'flying': ([], ['electric', 'rock', 'steel'], ['grass', 'fighting', 'bug']),
    'poison': (['steel'], ['poison', 'ground', 'rock', 'ghost'], ['grass', 'fairy']),
    'ground': (['flying'], ['grass', 'bug'],
        ['fire', 'electric', 'poison', 'rock', 'steel']),
    'rock': ([], ['fighting', 'ground', 'steel'], ['fire', 'ice', 'flying', 'bug']),
    'bug': ([], ['fire', 'fighting', 'poison', 'flying', 'ghost', 'steel', 'fairy'],
        ['grass', 'psychic', 'dark']),
    'ghost': (['normal'], ['dark'], ['psychic', 'ghost']),
    'steel': ([], ['fire', 'water', 'electric', 'steel'], ['ice', 'rock', 'fairy']),
    'fire': ([], ['fire', 'water', 'rock', 'dragon'], ['grass', 'ice', 'bug', 'steel']),
    'water': ([], ['water', 'grass', 'dragon'], ['fire', 'ground', 'rock']),
    'grass': ([], ['fire', 'grass', 'poison', 'flying', 'bug', 'dragon', 'steel'],
        ['water', 'ground', 'rock']),
    'electric': (['ground'], ['electric', 'grass', 'dragon'], ['water', 'flying']),
    'psychic': (['dark'], ['psychic', 'steel'], ['fighting', 'poison']),
    'ice': ([], ['fire', 'water', 'ice', 'steel'], ['grass', 'ground', 'flying', 'dragon']),
    'dragon': (['fairy'], ['steel'], ['dragon']),
    'dark': ([], ['fighting', 'dark', 'fairy'], ['psychic', 'ghost']),
    'fairy': ([], ['fire', 'poison', 'steel'], ['fighting', 'dragon', 'dark']),
}

# (id, name, generation introduced), in database order
TYPES = [
    (1, 'normal', 1), (2, 'fighting', 1), (3, 'flying', 1), (4, 'poison', 1),
    (5, 'ground', 1), (6, 'rock', 1), (7, 'bug', 1), (8, 'ghost', 1),
    (9, 'steel', 2), (10, 'fire', 1), (11, 'water', 1), (12, 'grass', 1),
    (13, 'electric', 1), (14, 'psychic', 1), (15, 'ice', 1), (16, 'dragon', 1),
    (17, 'dark', 2), (18, 'fairy', 6),
]

# (type, generation, fields)
TYPE_CHANGES = [
    ('ghost', 5, dict(half_damage_to='dark,steel')),
    ('dark', 5, dict(half_damage_to='fighting,dark,steel')),
    ('steel', 5, dict(half_damage_from='normal,grass,ice,flying,psychic,bug,'
                                        'rock,ghost,dragon,dark,steel')),
    ('ghost', 1, dict(no_damage_to='normal,psychic', half_damage_to='',
                       double_damage_to='ghost')),
    ('bug', 1, dict(half_damage_to='fire,fighting,flying,ghost',
                     double_damage_to='grass,psychic,poison')),
    ('poison', 1, dict(double_damage_to='grass,bug')),
]

# (id, name, order, generation)
GAMES = [
    (1, 'red-blue', 1, 1), (2, 'yellow', 2, 1), (3, 'gold-silver', 3, 2),
    (4, 'ruby-sapphire', 4, 3), (5, 'diamond-pearl', 5, 4),
    (6, 'black-white', 6, 5), (7, 'x-y', 7, 6), (8, 'sun-moon', 8, 7),
    (9, 'sword-shield', 9, 8), (10, 'scarlet-violet', 10, 9),
]

# (id, name, type, damage class, power, accuracy, pp, effect chance, generation)
MOVES = [
    (1, 'flamethrower', 'fire', 'special', 90, 100, 15, 10, 1),
    (2, 'blaze-kick', 'fire', 'physical', 85, 90, 10, 10, 3),
    (3, 'sky-uppercut', 'fighting', 'physical', 85, 90, 15, None, 3),
    (4, 'earthquake', 'ground', 'physical', 100, 100, 10, None, 1),
    (5, 'dragon-claw', 'dragon', 'physical', 80, 100, 15, None, 3),
    (6, 'draco-meteor', 'dragon', 'special', 130, 90, 5, None, 4),
    (7, 'dragon-pulse', 'dragon', 'special', 85, 100, 10, None, 4),
    (8, 'quick-attack', 'normal', 'physical', 40, 100, 30, None, 1),
    (9, 'swords-dance', 'normal', 'status', None, None, 20, None, 1),
    (10, 'tackle', 'normal', 'physical', 40, 100, 35, None, 1),
    (11, 'bite', 'dark', 'physical', 60, 100, 25, 30, 1),
    (12, 'thunderbolt', 'electric', 'special', 90, 100, 15, 10, 1),
    (13, 'surf', 'water', 'special', 90, 100, 15, None, 1),
    (14, 'ice-beam', 'ice', 'special', 90, 100, 10, 10, 1),
    (15, 'moonblast', 'fairy', 'special', 95, 100, 15, 30, 6),
    (16, 'rock-slide', 'rock', 'physical', 75, 90, 10, 30, 1),
    (17, 'thunder-wave', 'electric', 'status', None, 90, 20, None, 1),
    (18, 'water-gun', 'water', 'special', 40, 100, 25, None, 1),
]

# (move, generation, fields)
MOVE_CHANGES = [
    ('flamethrower', 5, dict(power=95)),
    ('draco-meteor', 5, dict(power=140)),
    ('dragon-pulse', 5, dict(power=90)),
    ('swords-dance', 5, dict(pp=30)),
    ('tackle', 6, dict(power=50)),
    ('tackle', 4, dict(power=35, accuracy=95)),
    ('bite', 1, dict(type='normal')),
    ('thunderbolt', 5, dict(power=95)),
    ('surf', 5, dict(power=95)),
    ('ice-beam', 5, dict(power=95)),
    ('thunder-wave', 6, dict(accuracy=100)),
]

# (id, name, generation)
ABILITIES = [
    (66, 'blaze', 3), (3, 'speed-boost', 3), (26, 'levitate', 3),
    (157, 'sap-sipper', 5), (93, 'hydration', 4), (183, 'gooey', 6),
    (56, 'cute-charm', 3), (98, 'magic-guard', 4), (132, 'friend-guard', 5),
    (42, 'magnet-pull', 3), (5, 'sturdy', 3), (148, 'analytic', 5),
    (11, 'water-absorb', 3), (75, 'shell-armor', 3),
]

EVOLUTIONS = [
    (1, '{"species": "torchic", "evolves_to": [{"species": "combusken", '
        '"evolves_to": [{"species": "blaziken", "evolves_to": []}]}]}'),
    (2, '{"species": "trapinch", "evolves_to": [{"species": "vibrava", '
        '"evolves_to": [{"species": "flygon", "evolves_to": []}]}]}'),
    (3, '{"species": "goomy", "evolves_to": [{"species": "sliggoo", '
        '"evolves_to": [{"species": "goodra", "evolves_to": []}]}]}'),
    (4, '{"species": "cleffa", "evolves_to": [{"species": "clefairy", '
        '"evolves_to": [{"species": "clefable", "evolves_to": []}]}]}'),
    (5, '{"species": "magnemite", "evolves_to": [{"species": "magneton", '
        '"evolves_to": [{"species": "magnezone", "evolves_to": []}]}]}'),
]

# (id, name, types, stats, evolution, abilities as (name, hidden))
POKEMON = [
    (257, 'blaziken', ('fire', 'fighting'), (120, 70, 110, 70, 80), 1,
        [('blaze', False), ('speed-boost', True)]),
    (330, 'flygon', ('ground', 'dragon'), (100, 80, 80, 80, 100), 2,
        [('levitate', False)]),
    (706, 'goodra', ('dragon', None), (100, 70, 110, 150, 80), 3,
        [('sap-sipper', False), ('hydration', False), ('gooey', True)]),
    (35, 'clefairy', ('fairy', None), (45, 48, 60, 65, 35), 4,
        [('cute-charm', False), ('magic-guard', False), ('friend-guard', True)]),
    (81, 'magnemite', ('electric', 'steel'), (35, 70, 95, 55, 45), 5,
        [('magnet-pull', False), ('sturdy', False), ('analytic', True)]),
    (131, 'lapras', ('water', 'ice'), (85, 80, 85, 95, 60), None,
        [('water-absorb', False), ('shell-armor', False), ('hydration', True)]),
]

# (pokemon, generation, primary, secondary)
POKEMON_TYPE_CHANGES = [
    ('clefairy', 5, 'normal', None),
    ('magnemite', 1, 'electric', None),
]

# pokemon => {generation: [(move, method, level)]}
LEARNSETS = {
    'blaziken': {
        9: [('quick-attack', 'level-up', 1), ('blaze-kick', 'level-up', 1),
            ('sky-uppercut', 'level-up', 1), ('flamethrower', 'machine', 0),
            ('earthquake', 'machine', 0), ('swords-dance', 'machine', 0)],
        5: [('quick-attack', 'level-up', 16), ('blaze-kick', 'level-up', 36),
            ('sky-uppercut', 'level-up', 59), ('flamethrower', 'machine', 0),
            ('earthquake', 'machine', 0), ('swords-dance', 'machine', 0)],
        3: [('quick-attack', 'level-up', 19), ('quick-attack', 'level-up', 16),
            ('blaze-kick', 'level-up', 36), ('sky-uppercut', 'level-up', 59),
            ('flamethrower', 'machine', 0), ('swords-dance', 'machine', 0)],
    },
    'flygon': {
        9: [('dragon-claw', 'level-up', 1), ('earthquake', 'machine', 0),
            ('draco-meteor', 'tutor', 0), ('rock-slide', 'machine', 0)],
        5: [('dragon-claw', 'machine', 0), ('earthquake', 'machine', 0),
            ('draco-meteor', 'tutor', 0), ('rock-slide', 'machine', 0)],
        3: [('bite', 'level-up', 1), ('dragon-claw', 'machine', 0),
            ('earthquake', 'machine', 0), ('rock-slide', 'tutor', 0)],
    },
    'goodra': {
        9: [('dragon-pulse', 'level-up', 1), ('draco-meteor', 'tutor', 0),
            ('thunderbolt', 'machine', 0), ('surf', 'machine', 0),
            ('ice-beam', 'machine', 0)],
        6: [('dragon-pulse', 'level-up', 1), ('draco-meteor', 'tutor', 0),
            ('thunderbolt', 'machine', 0), ('surf', 'machine', 0)],
    },
    'clefairy': {
        9: [('moonblast', 'level-up', 50), ('thunderbolt', 'machine', 0),
            ('ice-beam', 'machine', 0)],
        5: [('thunderbolt', 'machine', 0), ('ice-beam', 'machine', 0)],
    },
    'magnemite': {
        9: [('tackle', 'level-up', 1), ('thunder-wave', 'level-up', 4),
            ('thunderbolt', 'machine', 0)],
        1: [('tackle', 'level-up', 1), ('thunder-wave', 'level-up', 35),
            ('thunderbolt', 'machine', 0)],
    },
    'lapras': {
        9: [('water-gun', 'level-up', 1), ('surf', 'machine', 0),
            ('ice-beam', 'machine', 0), ('thunderbolt', 'machine', 0)],
        1: [('water-gun', 'level-up', 1), ('surf', 'machine', 0),
            ('ice-beam', 'machine', 0), ('thunderbolt', 'machine', 0)],
    },
}


def damage_from():
    """Works out the "from" lists implied by DAMAGE_TO."""
    result = dict((name, ([], [], [])) for name in DAMAGE_TO)
    for attacking, lists in DAMAGE_TO.items():
        for index, defenders in enumerate(lists):
            for defending in defenders:
                result[defending][index].append(attacking)
    return result


def populate(session):
    """Creates the schema on the session's engine and fills it in."""
    tables.metadata.create_all(session.bind)

    from_lists = damage_from()
    type_ids = {}
    for id, name, generation in TYPES:
        no_to, half_to, double_to = DAMAGE_TO[name]
        no_from, half_from, double_from = from_lists[name]
        session.add(tables.Type(
            id=id, name=name, generation=generation,
            no_damage_to=','.join(no_to),
            half_damage_to=','.join(half_to),
            double_damage_to=','.join(double_to),
            no_damage_from=','.join(no_from),
            half_damage_from=','.join(half_from),
            double_damage_from=','.join(double_from),
        ))
        type_ids[name] = id
    # Not battle types at all
    for id, name, generation in [(10001, 'unknown', 2), (10002, 'shadow', 3)]:
        session.add(tables.Type(
            id=id, name=name, generation=generation,
            no_damage_to='', half_damage_to='', double_damage_to='',
            no_damage_from='', half_damage_from='', double_damage_from='',
        ))

    for name, generation, fields in TYPE_CHANGES:
        session.add(tables.TypeChange(
            type_id=type_ids[name], generation=generation, **fields))

    for id, name, order, generation in GAMES:
        session.add(tables.Game(id=id, name=name, order=order,
                                generation=generation))

    move_ids = {}
    for (id, name, type, damage_class, power, accuracy, pp, effect_chance,
            generation) in MOVES:
        session.add(tables.Move(
            id=id, name=name, type=type, damage_class=damage_class,
            power=power, accuracy=accuracy, pp=pp, effect_chance=effect_chance,
            effect='Inflicts regular damage.' if power else None,
            generation=generation,
        ))
        move_ids[name] = id

    for name, generation, fields in MOVE_CHANGES:
        session.add(tables.MoveChange(
            move_id=move_ids[name], generation=generation, **fields))

    for id, name, generation in ABILITIES:
        session.add(tables.Ability(id=id, name=name, generation=generation,
            effect='Has an effect in battle.'))

    for id, evolution in EVOLUTIONS:
        session.add(tables.Evolution(id=id, evolution=evolution))

    pokemon_ids = {}
    for id, name, (primary, secondary), stats, evolution_id, abilities in POKEMON:
        session.add(tables.Species(id=id, name=name, group='regular',
                                   evolution_id=evolution_id))
        attack, defense, special_attack, special_defense, speed = stats
        session.add(tables.Pokemon(
            id=id, name=name, species_id=id,
            primary_type=primary, secondary_type=secondary,
            attack=attack, defense=defense, special_attack=special_attack,
            special_defense=special_defense, speed=speed,
        ))
        for ability, hidden in abilities:
            session.add(tables.PokemonAbility(
                pokemon_id=id, name=ability, hidden=hidden))
        pokemon_ids[name] = id

    for name, generation, primary, secondary in POKEMON_TYPE_CHANGES:
        session.add(tables.PokemonTypeChange(
            pokemon_id=pokemon_ids[name], generation=generation,
            primary_type=primary, secondary_type=secondary))

    for name, learnsets in LEARNSETS.items():
        for generation, moves in learnsets.items():
            for move, method, level in moves:
                session.add(tables.PokemonMove(
                    pokemon_id=pokemon_ids[name], generation=generation,
                    name=move, learn_method=method, learn_level=level))

    session.commit()
