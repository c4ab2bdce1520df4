"""Claudio - tails the brabble voice daemon logs into turns, sessions and daily stats."""

__version__ = "0.1.0"
