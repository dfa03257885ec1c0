"""Token-overlap string similarity used for descriptions and references."""

# Full score for identical strings
EXACT_SCORE = 1.0

# Score when one string contains the other
CONTAINS_SCORE = 0.8

# Tokens this short or shorter never count as word matches
MIN_TOKEN_LENGTH = 4


def string_similarity(first: str, second: str) -> float:
    """
    Score the textual similarity of two strings in the range 0.0-1.0.

    Comparison is case-sensitive; callers lower-case both inputs. The
    heuristic is deliberately simple: identical strings score 1.0, a
    substring relationship scores 0.8, otherwise the score is the share of
    tokens in ``first`` that overlap a token in ``second``.

    Args:
        first: String whose tokens are counted
        second: String the tokens are looked up in

    Returns:
        Similarity score
    """
    if first == second:
        return EXACT_SCORE
    if second in first or first in second:
        return CONTAINS_SCORE

    # Whitespace split without empty edge tokens; an empty token would overlap every word
    first_tokens = first.split()
    second_tokens = second.split()

    match_count = 0
    for token in first_tokens:
        if len(token) < MIN_TOKEN_LENGTH:
            continue
        if any(other in token or token in other for other in second_tokens):
            match_count += 1

    return min(1.0, match_count / max(len(first_tokens), 1))
