"""Moviebook - track movies and artists from The Movie Database."""

__version__ = "1.0.0"
