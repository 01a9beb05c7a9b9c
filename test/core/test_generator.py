import random
import unittest

from markov_text.chain import (
    END,
    MarkovChain,
    build_bigram_table,
    build_unigram_table,
)
from markov_text.generator import DEFAULT_MAX_WORDS, MarkovGenerator, generate
from markov_text.tokenizer import tokenize

CAT_IN_HAT = "the cat in the hat"
CORPUS = """It was the best of times, it was the worst of times, it was the age
of wisdom, it was the age of foolishness, it was the epoch of belief, it was
the epoch of incredulity, it was the season of Light, it was the season of
Darkness, it was the spring of hope, it was the winter of despair."""


class ScriptedRandom:
    """Returns the given picks in order, checking each is on offer."""

    def __init__(self, *picks):
        self.picks = list(picks)

    def choice(self, seq):
        pick = self.picks.pop(0)
        assert pick in seq, f"{pick!r} not in {seq!r}"
        return pick


class FirstChoice:
    """Always picks the first item offered."""

    def choice(self, seq):
        return seq[0]


class TestGenerate(unittest.TestCase):

    def test_order_one_terminal_start(self):
        chain = MarkovChain.from_text(CAT_IN_HAT, order=1)
        self.assertEqual(generate(chain, rng=ScriptedRandom("hat", END)), "hat")

    def test_order_two_terminal_start_emits_leading_word_only(self):
        chain = MarkovChain.from_text(CAT_IN_HAT, order=2)
        self.assertEqual(
            generate(chain, rng=ScriptedRandom(("the", "hat"), END)), "the"
        )

    def test_single_word_corpus(self):
        chain = MarkovChain.from_text("hello", order=1)
        self.assertEqual(generate(chain, rng=random.Random(3)), "hello")

    def test_order_one_full_walk(self):
        chain = MarkovChain.from_text(CAT_IN_HAT, order=1)
        rng = ScriptedRandom("the", "cat", "in", "the", "hat", END)
        self.assertEqual(generate(chain, rng=rng), "the cat in the hat")

    def test_order_two_full_walk(self):
        chain = MarkovChain.from_text(CAT_IN_HAT, order=2)
        rng = ScriptedRandom(("the", "cat"), "in", "the", "hat", END)
        self.assertEqual(generate(chain, rng=rng), "the cat in the")

    def test_empty_chain_gives_empty_string(self):
        self.assertEqual(generate(MarkovChain([], order=1)), "")
        self.assertEqual(generate(MarkovChain(["alone"], order=2)), "")

    def test_non_positive_bound_gives_empty_string(self):
        chain = MarkovChain.from_text(CAT_IN_HAT)
        self.assertEqual(generate(chain, max_words=0), "")
        self.assertEqual(generate(chain, max_words=-5), "")

    def test_bound_is_exact_for_both_orders(self):
        # A self-loop that never samples END would walk forever without the bound.
        unigram = MarkovChain.from_text("a a a a", order=1)
        bigram = MarkovChain.from_text("a a a", order=2)
        for chain in (unigram, bigram):
            for limit in (1, 5, 37):
                out = generate(chain, max_words=limit, rng=FirstChoice())
                self.assertEqual(out.split(), ["a"] * limit)

    def test_default_bound(self):
        chain = MarkovChain.from_text("a a", order=1)
        out = generate(chain, rng=FirstChoice())
        self.assertEqual(len(out.split()), DEFAULT_MAX_WORDS)

    def test_output_words_come_from_corpus(self):
        words = set(tokenize(CORPUS))
        for order in (1, 2):
            chain = MarkovChain.from_text(CORPUS, order=order)
            for seed in range(50):
                out = generate(chain, max_words=25, rng=random.Random(seed))
                emitted = out.split(" ")
                self.assertTrue(1 <= len(emitted) <= 25)
                self.assertTrue(set(emitted) <= words)

    def test_consecutive_words_follow_the_chain(self):
        chain = MarkovChain.from_text(CORPUS, order=1)
        for seed in range(20):
            emitted = generate(chain, max_words=40, rng=random.Random(seed)).split()
            for current, following in zip(emitted, emitted[1:]):
                self.assertIn(following, chain.successors(current))

    def test_consecutive_words_follow_the_bigram_chain(self):
        chain = MarkovChain.from_text(CORPUS, order=2)
        for seed in range(20):
            emitted = generate(chain, max_words=40, rng=random.Random(seed)).split()
            for first, second, following in zip(emitted, emitted[1:], emitted[2:]):
                self.assertIn(following, chain.successors((first, second)))

    def test_accepts_unigram_table(self):
        table = build_unigram_table(tokenize(CAT_IN_HAT))
        self.assertEqual(generate(table, rng=ScriptedRandom("hat", END)), "hat")
        rng = ScriptedRandom("the", "cat", "in", "the", "hat", END)
        self.assertEqual(generate(table, rng=rng), "the cat in the hat")

    def test_accepts_bigram_table_with_order(self):
        table = build_bigram_table(tokenize(CAT_IN_HAT))
        rng = ScriptedRandom(("the", "cat"), "in", "the", "hat", END)
        self.assertEqual(generate(table, rng=rng, order=2), "the cat in the")

    def test_empty_table_gives_empty_string(self):
        self.assertEqual(generate({}), "")
        self.assertEqual(generate(build_bigram_table(["alone"]), order=2), "")

    def test_table_with_unsupported_order(self):
        with self.assertRaises(ValueError):
            generate(build_unigram_table(["a"]), order=3)

    def test_same_seed_same_output(self):
        chain = MarkovChain.from_text(CORPUS, order=2)
        first = generate(chain, max_words=30, rng=random.Random(99))
        second = generate(chain, max_words=30, rng=random.Random(99))
        self.assertEqual(first, second)


class TestMarkovGenerator(unittest.TestCase):

    def test_builds_chain_once(self):
        gen = MarkovGenerator(CAT_IN_HAT, order=2)
        self.assertEqual(gen.order, 2)
        self.assertEqual(gen.words, ["the", "cat", "in", "the", "hat"])
        self.assertEqual(gen.chain.successors(("the", "cat")), ("in",))

    def test_seeded_generate_is_reproducible(self):
        gen = MarkovGenerator(CORPUS)
        self.assertEqual(gen.generate(20, seed=42), gen.generate(20, seed=42))

    def test_injected_rng_is_used(self):
        gen = MarkovGenerator(CAT_IN_HAT, rng=ScriptedRandom("hat", END))
        self.assertEqual(gen.generate(), "hat")

    def test_repeated_calls_share_the_table(self):
        gen = MarkovGenerator(CORPUS, order=2, rng=random.Random(1))
        before = dict(gen.chain.table)
        for _ in range(10):
            gen.generate(15)
        self.assertEqual(dict(gen.chain.table), before)

    def test_short_corpus(self):
        self.assertEqual(MarkovGenerator("", order=1).generate(), "")
        self.assertEqual(MarkovGenerator("hello", order=2).generate(), "")


if __name__ == "__main__":
    unittest.main()
