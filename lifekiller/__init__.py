"""Game of Life boards, evolved networks that play them, a trainer, a network dump tool and a client."""

__version__ = "0.1.0"