# encoding: utf8

"""The battledex schema.

Canonical tables hold the values of the most recent generation.  Anything that
changed over time has a companion change table; each change row records the
values that applied up to and including its `generation`, with NULL columns
meaning "unchanged".

Columns have an info dictionary with these keys:
- format: The format of a text column. Can be one of:
  - plaintext: Normal Unicode text (generally used in effect descriptions)
  - identifier: A name in the [-a-z0-9]* format, as used by the upstream API.
  - type-list: Comma-separated type identifiers.  In change tables an empty
    string is an explicitly empty list, which is not the same as NULL.
  - json: An opaque JSON document.
"""

from sqlalchemy import Column, ForeignKey, MetaData
from sqlalchemy.orm import DeclarativeMeta, backref, declarative_base, relationship
from sqlalchemy.types import Boolean, Integer, SmallInteger, Unicode, UnicodeText

class TableSuperclass(object):
    """Superclass for declarative tables, to give them some generic niceties
    like stringification.
    """
    def __str__(self):
        """Be as useful as possible.  Show the primary key, and a name if
        we've got one.
        """
        typename = '.'.join((__name__, type(self).__name__))

        pk_constraint = self.__table__.primary_key
        if not pk_constraint:
            return "<%s object at %x>" % (typename, id(self))

        pk = ', '.join(str(getattr(self, column.name))
            for column in pk_constraint.columns)
        try:
            return "<%s object (%s): %s>" % (typename, pk, self.name)
        except AttributeError:
            return "<%s object (%s)>" % (typename, pk)

    def __repr__(self):
        return str(self)

mapped_classes = []
class TableMetaclass(DeclarativeMeta):
    def __init__(cls, name, bases, attrs):
        super(TableMetaclass, cls).__init__(name, bases, attrs)
        if hasattr(cls, '__tablename__'):
            mapped_classes.append(cls)

metadata = MetaData()
TableBase = declarative_base(metadata=metadata, cls=TableSuperclass, metaclass=TableMetaclass)


def _type_list_column(nullable, doc):
    return Column(UnicodeText, nullable=nullable, doc=doc,
        info=dict(format='type-list'))


### The actual tables

class Ability(TableBase):
    """An ability a Pokémon can have, such as Static or Pressure.

    Abilities have no change history.
    """
    __tablename__ = 'abilities'
    __singlename__ = 'ability'
    id = Column(Integer, primary_key=True, nullable=False,
        doc="A numeric ID")
    name = Column(Unicode(79), nullable=False, index=True, unique=True,
        doc="An identifier",
        info=dict(format='identifier'))
    effect = Column(UnicodeText, nullable=True,
        doc="A description of the ability's effect",
        info=dict(format='plaintext'))
    generation = Column(Integer, nullable=False,
        doc="The generation this ability was introduced in")

class Evolution(TableBase):
    """An evolutionary line, shared by every species in it."""
    __tablename__ = 'evolutions'
    __singlename__ = 'evolution'
    id = Column(Integer, primary_key=True, nullable=False,
        doc="A numeric ID")
    evolution = Column(UnicodeText, nullable=False,
        doc="A descriptor of the whole evolutionary line",
        info=dict(format='json'))

class Game(TableBase):
    """A game, or pair of games released together, such as Red/Blue."""
    __tablename__ = 'games'
    __singlename__ = 'game'
    id = Column(Integer, primary_key=True, nullable=False,
        doc="A numeric ID")
    name = Column(Unicode(79), nullable=False, index=True, unique=True,
        doc="An identifier",
        info=dict(format='identifier'))
    order = Column(Integer, nullable=False,
        doc="Order for sorting games by release.")
    generation = Column(Integer, nullable=False, index=True,
        doc="The generation this game belongs to")

class Move(TableBase):
    """A move, as of the latest generation."""
    __tablename__ = 'moves'
    __singlename__ = 'move'
    id = Column(Integer, primary_key=True, nullable=False,
        doc="A numeric ID")
    name = Column(Unicode(79), nullable=False, index=True, unique=True,
        doc="An identifier",
        info=dict(format='identifier'))
    power = Column(SmallInteger, nullable=True,
        doc="Base power of the move, null if it does not have a set base power.")
    accuracy = Column(SmallInteger, nullable=True,
        doc="Accuracy of the move; NULL means it never misses")
    pp = Column(SmallInteger, nullable=True,
        doc="The move's base PP")
    effect_chance = Column(Integer, nullable=True,
        doc="The chance for a secondary effect.")
    effect = Column(UnicodeText, nullable=True,
        doc="A description of the move's effect",
        info=dict(format='plaintext'))
    type = Column(Unicode(79), nullable=False,
        doc="The move's elemental type",
        info=dict(format='identifier'))
    damage_class = Column(Unicode(79), nullable=False,
        doc="physical, special, or status",
        info=dict(format='identifier'))
    generation = Column(Integer, nullable=False,
        doc="The generation this move was introduced in")

class MoveChange(TableBase):
    """Values a move had before they were changed."""
    __tablename__ = 'move_changes'
    __singlename__ = 'move_change'
    id = Column(Integer, primary_key=True, nullable=False,
        doc="A numeric ID")
    power = Column(SmallInteger, nullable=True,
        doc="Prior base power of the move, or NULL if unchanged")
    accuracy = Column(SmallInteger, nullable=True,
        doc="Prior accuracy of the move, or NULL if unchanged")
    pp = Column(SmallInteger, nullable=True,
        doc="Prior base PP of the move, or NULL if unchanged")
    effect_chance = Column(Integer, nullable=True,
        doc="Prior effect chance, or NULL if unchanged")
    effect = Column(UnicodeText, nullable=True,
        doc="Prior effect description, or NULL if unchanged",
        info=dict(format='plaintext'))
    type = Column(Unicode(79), nullable=True,
        doc="Prior type of the move, or NULL if unchanged",
        info=dict(format='identifier'))
    generation = Column(Integer, nullable=False, index=True,
        doc="The last generation in which these values applied")
    move_id = Column(Integer, ForeignKey('moves.id'), nullable=False, index=True,
        doc="ID of the move that changed")

class Pokemon(TableBase):
    """A Pokémon, as of the latest generation."""
    __tablename__ = 'pokemon'
    __singlename__ = 'pokemon'
    id = Column(Integer, primary_key=True, nullable=False,
        doc="A numeric ID")
    name = Column(Unicode(79), nullable=False, index=True, unique=True,
        doc="An identifier",
        info=dict(format='identifier'))
    primary_type = Column(Unicode(79), nullable=False,
        doc="The Pokémon's first type",
        info=dict(format='identifier'))
    secondary_type = Column(Unicode(79), nullable=True,
        doc="The Pokémon's second type, or NULL for a single-typed Pokémon",
        info=dict(format='identifier'))
    attack = Column(SmallInteger, nullable=False,
        doc="Base Attack")
    defense = Column(SmallInteger, nullable=False,
        doc="Base Defense")
    special_attack = Column(SmallInteger, nullable=False,
        doc="Base Special Attack")
    special_defense = Column(SmallInteger, nullable=False,
        doc="Base Special Defense")
    speed = Column(SmallInteger, nullable=False,
        doc="Base Speed")
    species_id = Column(Integer, ForeignKey('species.id'), nullable=False,
        doc="ID of the species this Pokémon belongs to")

class PokemonAbility(TableBase):
    """An ability a Pokémon can have."""
    __tablename__ = 'pokemon_abilities'
    __singlename__ = 'pokemon_ability'
    id = Column(Integer, primary_key=True, nullable=False,
        doc="A numeric ID")
    name = Column(Unicode(79), nullable=False,
        doc="The ability's identifier",
        info=dict(format='identifier'))
    hidden = Column(Boolean, nullable=False,
        doc="Whether this is a hidden ability")
    pokemon_id = Column(Integer, ForeignKey('pokemon.id'), nullable=False, index=True,
        doc="ID of the Pokémon")

class PokemonMove(TableBase):
    """A move a Pokémon can learn in a particular generation."""
    __tablename__ = 'pokemon_moves'
    __singlename__ = 'pokemon_move'
    id = Column(Integer, primary_key=True, nullable=False,
        doc="A numeric ID")
    name = Column(Unicode(79), nullable=False,
        doc="The move's identifier",
        info=dict(format='identifier'))
    learn_method = Column(Unicode(79), nullable=False,
        doc="How the move is learned: level-up, machine, egg, tutor, ...",
        info=dict(format='identifier'))
    learn_level = Column(SmallInteger, nullable=False,
        doc="Level the move is learned at; 0 unless learned by level-up")
    generation = Column(Integer, nullable=False, index=True,
        doc="The generation this row applies to")
    pokemon_id = Column(Integer, ForeignKey('pokemon.id'), nullable=False, index=True,
        doc="ID of the Pokémon")

class PokemonTypeChange(TableBase):
    """The typing a Pokémon had before it was changed.

    Both columns are always given: a NULL secondary type here means the
    Pokémon had a single type.
    """
    __tablename__ = 'pokemon_type_changes'
    __singlename__ = 'pokemon_type_change'
    id = Column(Integer, primary_key=True, nullable=False,
        doc="A numeric ID")
    primary_type = Column(Unicode(79), nullable=False,
        doc="Prior first type",
        info=dict(format='identifier'))
    secondary_type = Column(Unicode(79), nullable=True,
        doc="Prior second type, or NULL if there was none",
        info=dict(format='identifier'))
    generation = Column(Integer, nullable=False, index=True,
        doc="The last generation in which this typing applied")
    pokemon_id = Column(Integer, ForeignKey('pokemon.id'), nullable=False, index=True,
        doc="ID of the Pokémon that changed")

class Species(TableBase):
    """A species: the group of Pokémon sharing a Pokédex entry."""
    __tablename__ = 'species'
    __singlename__ = 'species'
    id = Column(Integer, primary_key=True, nullable=False,
        doc="A numeric ID")
    name = Column(Unicode(79), nullable=False, index=True, unique=True,
        doc="An identifier",
        info=dict(format='identifier'))
    group = Column(Unicode(79), nullable=False,
        doc="regular, baby, legendary, or mythical",
        info=dict(format='identifier'))
    evolution_id = Column(Integer, ForeignKey('evolutions.id'), nullable=True,
        doc="ID of the species' evolutionary line")

class Type(TableBase):
    """Any of the elemental types Pokémon and moves can have, as of the
    latest generation.
    """
    __tablename__ = 'types'
    __singlename__ = 'type'
    id = Column(Integer, primary_key=True, nullable=False,
        doc="A numeric ID")
    name = Column(Unicode(79), nullable=False, index=True, unique=True,
        doc="An identifier",
        info=dict(format='identifier'))
    no_damage_to = _type_list_column(False, "Types this type can't damage")
    half_damage_to = _type_list_column(False, "Types this type deals half damage to")
    double_damage_to = _type_list_column(False, "Types this type deals double damage to")
    no_damage_from = _type_list_column(False, "Types that can't damage this type")
    half_damage_from = _type_list_column(False, "Types dealing half damage to this type")
    double_damage_from = _type_list_column(False, "Types dealing double damage to this type")
    generation = Column(Integer, nullable=False,
        doc="The generation this type was introduced in")

class TypeChange(TableBase):
    """Damage relations a type had before they were changed."""
    __tablename__ = 'type_changes'
    __singlename__ = 'type_change'
    id = Column(Integer, primary_key=True, nullable=False,
        doc="A numeric ID")
    no_damage_to = _type_list_column(True, "Prior no-damage-to list, or NULL if unchanged")
    half_damage_to = _type_list_column(True, "Prior half-damage-to list, or NULL if unchanged")
    double_damage_to = _type_list_column(True, "Prior double-damage-to list, or NULL if unchanged")
    no_damage_from = _type_list_column(True, "Prior no-damage-from list, or NULL if unchanged")
    half_damage_from = _type_list_column(True, "Prior half-damage-from list, or NULL if unchanged")
    double_damage_from = _type_list_column(True, "Prior double-damage-from list, or NULL if unchanged")
    generation = Column(Integer, nullable=False, index=True,
        doc="The last generation in which these relations applied")
    type_id = Column(Integer, ForeignKey('types.id'), nullable=False, index=True,
        doc="ID of the type that changed")


### Relationships down here, to avoid dependency ordering problems

Move.changes = relationship(MoveChange,
    order_by=MoveChange.generation.desc(),
    backref=backref('move', innerjoin=True))

Pokemon.abilities = relationship(PokemonAbility,
    order_by=PokemonAbility.id,
    backref=backref('pokemon', innerjoin=True))
Pokemon.moves = relationship(PokemonMove,
    order_by=PokemonMove.id,
    lazy='dynamic',
    backref=backref('pokemon', innerjoin=True))
Pokemon.species = relationship(Species,
    innerjoin=True, lazy='joined',
    backref='pokemon')
Pokemon.type_changes = relationship(PokemonTypeChange,
    order_by=PokemonTypeChange.generation.desc(),
    backref=backref('pokemon', innerjoin=True))

Species.evolution = relationship(Evolution,
    backref='species')

Type.changes = relationship(TypeChange,
    order_by=TypeChange.generation.desc(),
    backref=backref('type', innerjoin=True))
