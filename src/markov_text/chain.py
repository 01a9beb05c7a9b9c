# markov_text/chain.py
# Builds order-1 (unigram) and order-2 (bigram) Markov chain tables from word tokens.

import logging
from collections import Counter
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, NamedTuple, Sequence, Tuple, Union

from .tokenizer import tokenize

logger = logging.getLogger(__name__)


class _EndOfText:
    """Successor recorded when no word follows a state in the corpus."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "END"


END = _EndOfText()

State = Union[str, Tuple[str, str]]
Successor = Union[str, _EndOfText]
ChainTable = Dict[State, List[Successor]]


# --- Table builders ---


def build_unigram_table(tokens: Sequence[str]) -> ChainTable:
    """
    Maps every word to the words seen right after it.

    For "the cat in the hat" this gives
    {"the": ["cat", "hat"], "cat": ["in"], "in": ["the"], "hat": [END]}
    """
    table: ChainTable = {}
    for i, word in enumerate(tokens):
        next_word = tokens[i + 1] if i + 1 < len(tokens) else END
        table.setdefault(word, []).append(next_word)
    return table


def build_bigram_table(tokens: Sequence[str]) -> ChainTable:
    """
    Maps every pair of adjacent words to the words seen right after the pair.

    For "the cat in the hat" this gives
    {("the", "cat"): ["in"], ("cat", "in"): ["the"], ("in", "the"): ["hat"],
     ("the", "hat"): [END]}
    Fewer than two words produce an empty table.
    """
    table: ChainTable = {}
    for i in range(len(tokens) - 1):
        pair = (tokens[i], tokens[i + 1])
        next_word = tokens[i + 2] if i + 2 < len(tokens) else END
        table.setdefault(pair, []).append(next_word)
    return table


# --- State transitions ---


def advance_unigram(state: str, successor: str) -> str:
    return successor


def advance_bigram(state: Tuple[str, str], successor: str) -> Tuple[str, str]:
    # Consecutive bigram states overlap by one word.
    return (state[1], successor)


def lead_unigram(state: str) -> str:
    return state


def lead_bigram(state: Tuple[str, str]) -> str:
    return state[0]


class ChainVariant(NamedTuple):
    """Per-order behaviour: how to build the table, step a state and emit a word."""

    order: int
    build: Callable[[Sequence[str]], ChainTable]
    advance: Callable[[State, str], State]
    lead: Callable[[State], str]


VARIANTS: Dict[int, ChainVariant] = {
    1: ChainVariant(1, build_unigram_table, advance_unigram, lead_unigram),
    2: ChainVariant(2, build_bigram_table, advance_bigram, lead_bigram),
}
SUPPORTED_ORDERS = tuple(sorted(VARIANTS))


def get_variant(order: int) -> ChainVariant:
    """Returns the variant for a chain order, raising ValueError if unsupported."""
    try:
        return VARIANTS[order]
    except (KeyError, TypeError):
        raise ValueError(
            f"Unsupported chain order {order!r}; expected one of {SUPPORTED_ORDERS}"
        ) from None


class MarkovChain:
    """
    Read-only Markov chain table built once from a word sequence.

    Successor lists keep duplicates in corpus order, so the number of times a
    word appears under a state is its weight during sampling. The table is
    exposed only through a mapping proxy over tuples and can be shared by any
    number of generation calls.
    """

    def __init__(self, tokens: Sequence[str], order: int = 1):
        self.variant = get_variant(order)
        self._load(self.variant.build(tokens))
        logger.debug(
            f"Built order-{order} chain: {len(tokens)} words, "
            f"{len(self._states)} states"
        )

    def _load(self, table: Mapping[State, Sequence[Successor]]) -> None:
        self._table: Dict[State, Tuple[Successor, ...]] = {
            state: tuple(successors) for state, successors in table.items()
        }
        self._states: Tuple[State, ...] = tuple(self._table)

    @classmethod
    def from_text(cls, text: str, order: int = 1) -> "MarkovChain":
        return cls(tokenize(text), order=order)

    @classmethod
    def from_table(
        cls, table: Mapping[State, Sequence[Successor]], order: int = 1
    ) -> "MarkovChain":
        """
        Wraps a table made by build_unigram_table or build_bigram_table.

        ``order`` must match the builder: order-2 tables are keyed by pairs.
        """
        chain = cls.__new__(cls)
        chain.variant = get_variant(order)
        chain._load(table)
        return chain

    @property
    def order(self) -> int:
        return self.variant.order

    @property
    def table(self) -> Mapping[State, Tuple[Successor, ...]]:
        return MappingProxyType(self._table)

    @property
    def states(self) -> Tuple[State, ...]:
        """All known states in first-seen order."""
        return self._states

    def successors(self, state: State) -> Tuple[Successor, ...]:
        return self._table[state]

    def successor_counts(self, state: State) -> Counter:
        """The (successor, count) view of a state's successor list."""
        return Counter(self._table[state])

    def total_transitions(self) -> int:
        return sum(len(successors) for successors in self._table.values())

    def lead(self, state: State) -> str:
        """The word a state contributes to the output when it is visited."""
        return self.variant.lead(state)

    def advance(self, state: State, successor: str) -> State:
        return self.variant.advance(state, successor)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, state: object) -> bool:
        return state in self._table

    def __repr__(self) -> str:
        return f"MarkovChain(order={self.order}, states={len(self)})"
