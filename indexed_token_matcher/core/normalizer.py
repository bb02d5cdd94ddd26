"""Text normalization utilities for consistent token processing."""

import re
from typing import List

# Compile regex patterns for performance
_NON_ALPHANUMERIC = re.compile(r'[^a-z0-9]')
_SPACE_RUNS = re.compile(r' +')


def tokenize(text: str) -> List[str]:
    """
    Tokenize text into lowercase alphanumeric words.

    The text is lowercased, every character outside ``[a-z0-9]`` becomes a
    space, runs of spaces collapse to one and the result is split on single
    spaces.  Input without any alphanumeric characters (including the empty
    string) yields a single empty token.

    Args:
        text: Input text

    Returns:
        List of tokens, never empty
    """
    cleaned = _NON_ALPHANUMERIC.sub(' ', text.lower()).strip()
    return _SPACE_RUNS.sub(' ', cleaned).split(' ')
