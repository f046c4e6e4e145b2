# encoding: utf8
"""Generation-aware Pokémon data and type matchup arithmetic."""

__version__ = '0.1'
