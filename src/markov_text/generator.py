# markov_text/generator.py
# Random walk over a Markov chain table to produce new text.

import logging
import random
from typing import List, Mapping, Optional, Sequence, Union

from .chain import END, MarkovChain, State, Successor
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORDS = 100


def generate(
    model: Union[MarkovChain, Mapping[State, Sequence[Successor]]],
    max_words: int = DEFAULT_MAX_WORDS,
    rng: Optional[random.Random] = None,
    order: int = 1,
) -> str:
    """
    Walks the chain from a uniformly chosen state and returns the visited
    words joined by single spaces.

    ``model`` is a MarkovChain or a plain table from build_unigram_table /
    build_bigram_table. ``order`` is only read for plain tables and must
    match the builder that made them.

    Each step emits the current state's leading word, then samples a
    successor uniformly from the state's list (duplicates weight the draw).
    The walk stops when END is drawn or once ``max_words`` words have been
    emitted, so the output never holds more than ``max_words`` words. For
    order-2 chains only the first word of the final pair is emitted.

    An empty chain yields an empty string.
    """
    if not isinstance(model, MarkovChain):
        model = MarkovChain.from_table(model, order=order)
    if not len(model) or max_words <= 0:
        return ""

    rng = rng or random.Random()
    state = rng.choice(model.states)
    out: List[str] = []

    while len(out) < max_words:
        out.append(model.lead(state))
        successor = rng.choice(model.successors(state))
        if successor is END:
            break
        state = model.advance(state, successor)

    logger.debug(f"Generated {len(out)} words (limit {max_words})")
    return " ".join(out)


class MarkovGenerator:
    """
    Builds a chain once from corpus text and generates text from it.

    >>> gen = MarkovGenerator("the cat in the hat", order=2)
    >>> gen.chain.successors(("the", "cat"))
    ('in',)
    """

    def __init__(
        self, text: str, order: int = 1, rng: Optional[random.Random] = None
    ):
        self.words = tokenize(text)
        self.chain = MarkovChain(self.words, order=order)
        self.rng = rng or random.Random()

    @property
    def order(self) -> int:
        return self.chain.order

    def generate(
        self, max_words: int = DEFAULT_MAX_WORDS, seed: Optional[int] = None
    ) -> str:
        """Generates text; a seed gives a reproducible walk for this call only."""
        rng = random.Random(seed) if seed is not None else self.rng
        return generate(self.chain, max_words=max_words, rng=rng)
