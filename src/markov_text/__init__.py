from .chain import (
    END,
    MarkovChain,
    build_bigram_table,
    build_unigram_table,
)
from .generator import DEFAULT_MAX_WORDS, MarkovGenerator, generate
from .tokenizer import tokenize

__all__ = [
    'DEFAULT_MAX_WORDS',
    'END',
    'MarkovChain',
    'MarkovGenerator',
    'build_bigram_table',
    'build_unigram_table',
    'generate',
    'tokenize',
]
