# encoding: utf8
import argparse
import logging
import sys

import sqlalchemy

import battledex.db
import battledex.db.tables
from battledex import defaults, games
from battledex.cache import SnapshotCache
from battledex.coverage import coverage
from battledex.db import tables, util
from battledex.errors import BattledexError, NotFoundError
from battledex.lookup import DexLookup
from battledex.matchup import matchup
from battledex.resolve import (
    evolution_steps, learned_moves, resolve_ability, resolve_move,
    resolve_pokemon)
from battledex.typechart import DOUBLE, group_by_multiplier, type_chart

# Things `resource` can list
RESOURCE_TABLES = {
    'pokemon': tables.Pokemon,
    'moves': tables.Move,
    'abilities': tables.Ability,
    'games': tables.Game,
    'types': tables.Type,
}


def main(junk, *argv):
    parser = create_parser()

    if len(argv) <= 0:
        parser.print_help()
        sys.exit()

    # Global options are suppressed in the parsers, so that a subcommand
    # doesn't reset what was given before it; the real defaults live here
    args = parser.parse_args(argv, namespace=argparse.Namespace(
        engine_uri=None, game=None, verbose=False))
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s')

    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit()

    try:
        args.func(parser, args)
    except NotFoundError as e:
        print(e, file=sys.stderr)
        print_suggestions(args, e)
        sys.exit(1)
    except BattledexError as e:
        print(e, file=sys.stderr)
        sys.exit(1)


def setuptools_entry():
    main(*sys.argv)


def create_parser():
    """Build and return an ArgumentParser.
    """
    # Slightly clumsy workaround to make both `match -v` and `-v match` work
    common_parser = argparse.ArgumentParser(add_help=False)
    common_parser.add_argument(
        '-e', '--engine', dest='engine_uri', default=argparse.SUPPRESS,
        help='By default, all commands try to use a SQLite database '
            'in the battledex install directory.  Use this option (or '
            'a BATTLEDEX_DB_ENGINE environment variable) to specify an '
            'alternate database.',
        )
    common_parser.add_argument(
        '-g', '--game', dest='game', default=argparse.SUPPRESS,
        help='Game (e.g. "x-y") or generation number to answer for.  '
            'Defaults to the BATTLEDEX_GAME environment variable, or the '
            'latest game in the database.',
    )
    common_parser.add_argument(
        '-q', '--quiet', dest='verbose', default=argparse.SUPPRESS,
        action='store_false',
        help='Don\'t print system output.  This is the default for '
            'non-system commands.',
    )
    common_parser.add_argument(
        '-v', '--verbose', dest='verbose', default=argparse.SUPPRESS,
        action='store_true',
        help='Print system output and log progress.',
    )

    parser = argparse.ArgumentParser(
        prog='battledex', description='Generation-aware Pokémon matchups',
        parents=[common_parser],
    )

    cmds = parser.add_subparsers(title='commands', metavar='<command>', help='commands')

    cmd_pokemon = cmds.add_parser(
        'pokemon', help='Show a Pokémon as it was in a game',
        parents=[common_parser])
    cmd_pokemon.set_defaults(func=command_pokemon)
    cmd_pokemon.add_argument('name')
    cmd_pokemon.add_argument(
        '-m', '--moves', dest='show_moves', default=False, action='store_true',
        help='also list the learnset, with each move as of the game')
    # No short option; -e is the engine
    cmd_pokemon.add_argument(
        '--evolution', dest='show_evolution', default=False,
        action='store_true', help='also show the evolutionary line')

    cmd_move = cmds.add_parser(
        'move', help='Show a move as it was in a game',
        parents=[common_parser])
    cmd_move.set_defaults(func=command_move)
    cmd_move.add_argument('name')

    cmd_ability = cmds.add_parser(
        'ability', help='Show an ability',
        parents=[common_parser])
    cmd_ability.set_defaults(func=command_ability)
    cmd_ability.add_argument('name')

    cmd_type = cmds.add_parser(
        'type', help='Show the type chart for one or two types',
        parents=[common_parser])
    cmd_type.set_defaults(func=command_type)
    cmd_type.add_argument('types', nargs='+', metavar='type')

    cmd_match = cmds.add_parser(
        'match', help='Match up to six defenders against one attacker',
        parents=[common_parser])
    cmd_match.set_defaults(func=command_match)
    cmd_match.add_argument(
        'names', nargs='+', metavar='name',
        help='defenders, followed by the attacker')
    cmd_match.add_argument(
        '--stab-only', dest='stab_only', default=False, action='store_true',
        help='only consider moves matching their user\'s types')
    cmd_match.add_argument(
        '--all-moves', dest='all_moves', default=False, action='store_true',
        help='list moves that do less than 2x too')

    cmd_coverage = cmds.add_parser(
        'coverage', help='Show the type coverage of a team',
        parents=[common_parser])
    cmd_coverage.set_defaults(func=command_coverage)
    cmd_coverage.add_argument('names', nargs='+', metavar='name')

    cmd_resource = cmds.add_parser(
        'resource', help='List every name of one kind of thing',
        parents=[common_parser])
    cmd_resource.set_defaults(func=command_resource)
    cmd_resource.add_argument('resource', choices=list(RESOURCE_TABLES))
    cmd_resource.add_argument(
        '-d', '--delimiter', dest='delimiter', default='\n',
        help='printed between names; defaults to a newline')

    cmd_status = cmds.add_parser(
        'status', help='Print which engine and game would be used for other commands',
        parents=[common_parser])
    cmd_status.set_defaults(func=command_status)

    return parser


def get_session(args):
    """Given a parsed options object, connects to the database and returns a
    session.
    """

    engine_uri = args.engine_uri
    got_from = 'command line'

    if engine_uri is None:
        engine_uri, got_from = defaults.get_default_db_uri_with_origin()

    session = battledex.db.connect(engine_uri)

    if args.verbose:
        print("Connected to database %(engine)s (from %(got_from)s)"
            % dict(engine=session.bind.url, got_from=got_from))

    return session


def get_generation(args, session):
    """Works out which generation the user wants.  With no game given
    anywhere, that's the generation of the latest game.
    """

    game = args.game
    got_from = 'command line'

    if game is None:
        game, got_from = defaults.get_default_game_with_origin()

    if game is None:
        game = games.latest_game(session).name
        got_from = 'latest game'

    generation = games.generation_for(session, game)

    if args.verbose:
        print("Using generation %(generation)d for %(game)s (from %(got_from)s)"
            % dict(generation=generation, game=game, got_from=got_from))

    return generation


def print_suggestions(args, error):
    session = get_session(args)
    lookup = DexLookup(session)
    suggestions = lookup.suggest(str(error.identifier), table=error.table)
    if lookup.too_many(suggestions):
        print("Potential matches found; too many to display.", file=sys.stderr)
    elif suggestions:
        print("Potential matches: %s" % ' '.join(suggestions), file=sys.stderr)


def format_multiplier(multiplier):
    return '%gx' % multiplier

def format_optional(value):
    return '-' if value is None else str(value)


def print_type_groups(chart, indent='  '):
    for multiplier, names in group_by_multiplier(chart).items():
        if names:
            print("%s%-6s %s" % (indent, format_multiplier(multiplier),
                                  ', '.join(names)))


### System commands

def command_status(parser, args):
    args.verbose = True
    session = get_session(args)
    print("  - OK!  Connected successfully.")

    # A lame check for whether the database has been populated at all
    if not sqlalchemy.inspect(session.bind).has_table(
            battledex.db.tables.Game.__tablename__):
        print("  - WARNING: Database appears to be empty.")
        return

    generations = games.known_generations(session)
    if not generations:
        print("  - WARNING: No games in the database.")
        return
    print("  - OK!  Generations %d through %d are available."
        % (generations[0], generations[-1]))

    get_generation(args, session)


### User-facing commands

def command_pokemon(parser, args):
    session = get_session(args)
    generation = get_generation(args, session)
    cache = SnapshotCache()

    pokemon = resolve_pokemon(session, args.name, generation, cache=cache)
    chart = type_chart(session, generation, cache=cache)

    print("%s (generation %d)" % (pokemon.name, generation))
    print("  Type:      %s" % '/'.join(pokemon.types))
    print("  Species:   %s (%s)" % (pokemon.species, pokemon.species_group))
    print("  Abilities: %s" % ', '.join(
        ability.name + (' (hidden)' if ability.hidden else '')
        for ability in pokemon.abilities))
    print("  Stats:     %s" % ', '.join(
        '%s %d' % (stat, value)
        for stat, value in pokemon.stats._asdict().items()))
    print("  Damage taken:")
    print_type_groups(chart.defense_chart(pokemon.types), indent='    ')

    if args.show_evolution:
        print("  Evolution:")
        steps = evolution_steps(pokemon.evolution)
        if not steps:
            print("    (none)")
        for step in steps:
            methods = ' / '.join(
                trigger if level is None else '%s %d' % (trigger, level)
                for trigger, level in step.methods)
            print("    %s%s%s" % ('  ' * step.depth, step.species,
                                  ' (%s)' % methods if methods else ''))

    if args.show_moves:
        print("  Learnset:")
        if not pokemon.learnset:
            print("    (none)")
        for learned, move in learned_moves(session, pokemon, generation,
                                           cache=cache):
            print("    %-10s %-3s %-16s %-8s %-8s power: %-3s  accuracy: %-3s  pp: %s%s" % (
                learned.learn_method, learned.learn_level or '', move.name,
                move.type, move.damage_class, format_optional(move.power),
                format_optional(move.accuracy), format_optional(move.pp),
                ' STAB' if move.is_damaging and pokemon.is_stab(move.type) else ''))


def command_move(parser, args):
    session = get_session(args)
    generation = get_generation(args, session)
    move = resolve_move(session, args.name, generation)

    print("%s (generation %d)" % (move.name, generation))
    print("  Type:     %s (%s)" % (move.type, move.damage_class))
    print("  Power:    %s" % format_optional(move.power))
    print("  Accuracy: %s" % format_optional(move.accuracy))
    print("  PP:       %s" % move.pp)
    if move.effect:
        effect = move.effect
        if move.effect_chance is not None:
            effect = effect.replace('$effect_chance', str(move.effect_chance))
        print("  Effect:   %s" % effect)


def command_ability(parser, args):
    session = get_session(args)
    ability = resolve_ability(session, args.name)

    print("%s (since generation %d)" % (ability.name, ability.introduced))
    if ability.effect:
        print("  %s" % ability.effect)


def command_type(parser, args):
    if len(args.types) > 2:
        parser.error("a Pokémon has at most two types")

    session = get_session(args)
    generation = get_generation(args, session)
    chart = type_chart(session, generation)

    types = [battledex.db.identifier_from_name(name) for name in args.types]
    defense = chart.defense_chart(types)
    offense = chart.offense_chart(types)

    print("%s (generation %d)" % ('/'.join(types), generation))
    print("  Damage taken:")
    print_type_groups(defense, indent='    ')
    print("  Damage dealt:")
    print_type_groups(offense, indent='    ')


def command_match(parser, args):
    if len(args.names) < 2:
        parser.error("match needs at least one defender and an attacker")

    session = get_session(args)
    generation = get_generation(args, session)
    defenders, attacker = args.names[:-1], args.names[-1]

    results = matchup(session, defenders, attacker, generation,
                      stab_only=args.stab_only)

    for result in results:
        defender = result.defender
        print("%s (%s) vs. %s (%s)" % (
            defender.name, '/'.join(defender.types),
            result.attacker.name, '/'.join(result.attacker.types)))
        print("  Weak to:   %s" % (', '.join(
            '%s %s' % (t, format_multiplier(result.defense[t]))
            for t in result.weaknesses) or 'nothing'))
        print("  Immune to: %s" % (', '.join(result.immunities) or 'nothing'))

        for label, moves in ((result.attacker.name, result.attacker_moves),
                             (defender.name, result.defender_moves)):
            if not args.all_moves:
                moves = [m for m in moves if m.multiplier >= DOUBLE]
            print("  %s's moves:" % label)
            if not moves:
                print("    (none)")
            for entry in moves:
                print("    %-6s %-16s %s%s" % (
                    format_multiplier(entry.multiplier), entry.move.name,
                    entry.move.type, ' STAB' if entry.stab else ''))
        print()


def command_coverage(parser, args):
    session = get_session(args)
    generation = get_generation(args, session)

    table = coverage(session, args.names, generation)

    print("%-10s %-30s %s" % ('Type', 'Hit hard by', 'Resisted by'))
    for entry in table:
        print("%-10s %-30s %s" % (
            entry.type,
            ', '.join(c.pokemon.name for c in entry.offense) or '-',
            ', '.join(c.pokemon.name for c in entry.defense) or '-'))

    print()
    print("No super-effective coverage: %s"
        % (', '.join(table.uncovered_offense()) or 'none'))
    print("No resistance: %s"
        % (', '.join(table.uncovered_defense()) or 'none'))


def command_resource(parser, args):
    session = get_session(args)
    names = util.names(session, RESOURCE_TABLES[args.resource])
    print(args.delimiter.join(names))
