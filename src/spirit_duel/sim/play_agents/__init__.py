"""Play agent implementations for headless combat simulation.

Re-exports the base class and all concrete agent implementations so
consumers can do::

    from spirit_duel.sim.play_agents import PlayAgent, RandomAgent
"""

from .base import PlayAgent
from .greedy_agent import GreedyAgent
from .random_agent import RandomAgent

__all__ = ["PlayAgent", "GreedyAgent", "RandomAgent"]
