"""spirit_duel -- turn-based, deck-based combat resolver.

The engine takes a player loadout and an enemy template, runs a single
encounter turn by turn, and hands back a :class:`~spirit_duel.ir.CombatResult`.
"""

__version__ = "0.1.0"
