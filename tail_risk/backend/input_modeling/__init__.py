"""Input modelling: seeded return generators."""

from .distributions import generate_returns

__all__ = ["generate_returns"]
