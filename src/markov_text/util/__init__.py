"""Corpus loading helpers used by the command-line tool."""

from . import corpus_fetcher

__all__ = ["corpus_fetcher"]
