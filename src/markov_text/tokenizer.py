# markov_text/tokenizer.py
# Splits raw corpus text into word tokens.

import re
from typing import List

# Only spaces, carriage returns and newlines separate words; tabs stay inside tokens.
WORD_DELIMITERS = re.compile(r"[ \r\n]+")


def tokenize(text: str) -> List[str]:
    """
    Splits text on runs of space/CR/LF characters and drops the empty
    strings produced by leading, trailing or repeated delimiters.
    No case folding or punctuation stripping is applied.
    """
    return [word for word in WORD_DELIMITERS.split(text) if word]
