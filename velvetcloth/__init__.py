"""Position-based cloth simulation on numpy, with an actor/component scene framework and demo scenes."""

__version__ = "0.1.0"