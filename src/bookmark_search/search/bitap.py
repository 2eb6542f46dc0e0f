"""Bitap approximate substring matching.

This module scores how well a short pattern occurs somewhere inside a text,
tolerating typos (substitutions, insertions, deletions) and drift away from
an expected start position.

Scoring:
- 0.0 means the text is exactly the pattern
- ``errors / len(pattern)`` is added for every edit the alignment needs
- ``abs(start - location) / distance`` is added for positional drift
- 1.0 means no alignment was found at or below the threshold
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Score floor for anything short of a whole-text exact match
MIN_MATCH_SCORE = 0.001
NO_MATCH_SCORE = 1.0


@dataclass(frozen=True)
class Pattern:
    """A pattern compiled into its bitap alphabet.

    ``alphabet`` maps each character to a bitmask of the positions it occupies,
    with the first character in the most significant bit.
    """

    text: str
    alphabet: dict[str, int] = field(repr=False)

    @classmethod
    def compile(cls, text: str) -> Pattern:
        """Build the character masks for ``text``.

        Examples:
            >>> Pattern.compile("abca").alphabet == {"a": 0b1001, "b": 0b0100, "c": 0b0010}
            True
        """
        alphabet: dict[str, int] = {}
        length = len(text)
        for index, char in enumerate(text):
            alphabet[char] = alphabet.get(char, 0) | (1 << (length - index - 1))
        return cls(text=text, alphabet=alphabet)

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class BitapResult:
    """Best alignment found for a pattern in one text.

    ``ranges`` are inclusive runs of text positions holding a pattern
    character inside the scanned window. They are only filled in for a match.
    """

    score: float
    is_match: bool
    ranges: tuple[tuple[int, int], ...] = ()


def compute_score(
    pattern_length: int,
    *,
    errors: int = 0,
    current_location: int = 0,
    expected_location: int = 0,
    distance: int,
) -> float:
    """Score an alignment with ``errors`` edits starting at ``current_location``.

    Examples:
        >>> compute_score(4, errors=2, current_location=25, expected_location=0, distance=100)
        0.75
        >>> compute_score(4, errors=0, current_location=3, expected_location=0, distance=0)
        1.0
    """
    accuracy = errors / pattern_length
    proximity = abs(expected_location - current_location)
    if not distance:
        return NO_MATCH_SCORE if proximity else accuracy
    return accuracy + proximity / distance


def mask_to_ranges(mask: list[int]) -> tuple[tuple[int, int], ...]:
    """Collapse a per-character match mask into inclusive ``(start, end)`` runs."""
    ranges: list[tuple[int, int]] = []
    start = -1
    for index, flag in enumerate(mask):
        if flag and start == -1:
            start = index
        elif not flag and start != -1:
            ranges.append((start, index - 1))
            start = -1
    if start != -1:
        ranges.append((start, len(mask) - 1))
    return tuple(ranges)


def bitap_search(
    text: str,
    pattern: Pattern,
    *,
    location: int = 0,
    distance: int = 100,
    threshold: float = 0.4,
) -> BitapResult:
    """Find the best-scoring approximate occurrence of ``pattern`` in ``text``.

    Exact occurrences are located first to tighten the threshold. The bitap
    pass then runs once per allowed error count; for each row a binary
    search on the score function bounds how far from ``location`` a match
    can start and still beat the current threshold, so hopeless regions of
    the text are never scanned.

    Args:
        text: Text to search (already case-normalized by the caller).
        pattern: Compiled, non-empty pattern.
        location: Expected start position of the match.
        distance: Drift that costs a full score point; 0 demands an exact start.
        threshold: Alignments scoring above this are rejected.

    Returns:
        BitapResult with the best score, or ``NO_MATCH_SCORE`` when nothing
        scored at or below ``threshold``.
    """
    if pattern.text == text:
        return BitapResult(score=0.0, is_match=True, ranges=((0, len(text) - 1),) if text else ())

    pattern_length = len(pattern)
    text_length = len(text)
    expected_location = max(0, min(location, text_length))
    current_threshold = threshold
    match_mask = [0] * text_length

    # Exact occurrences give an upper bound on the score worth searching for
    index = text.find(pattern.text, expected_location)
    while index != -1:
        score = compute_score(
            pattern_length,
            current_location=index,
            expected_location=expected_location,
            distance=distance,
        )
        current_threshold = min(score, current_threshold)
        for offset in range(pattern_length):
            match_mask[index + offset] = 1
        index = text.find(pattern.text, index + pattern_length)

    best_location = -1
    best_score = NO_MATCH_SCORE
    last_bit_arr: list[int] = []
    bin_max = pattern_length + text_length
    full_match = 1 << (pattern_length - 1)

    for errors in range(pattern_length):
        bin_min = 0
        bin_mid = bin_max
        while bin_min < bin_mid:
            score = compute_score(
                pattern_length,
                errors=errors,
                current_location=expected_location + bin_mid,
                expected_location=expected_location,
                distance=distance,
            )
            if score <= current_threshold:
                bin_min = bin_mid
            else:
                bin_max = bin_mid
            bin_mid = (bin_max - bin_min) // 2 + bin_min
        bin_max = bin_mid

        start = max(1, expected_location - bin_mid + 1)
        finish = min(expected_location + bin_mid, text_length) + pattern_length

        bit_arr = [0] * (finish + 2)
        bit_arr[finish + 1] = (1 << errors) - 1

        j = finish
        while j >= start:
            current_location = j - 1
            char_match = pattern.alphabet.get(text[current_location], 0) if current_location < text_length else 0
            if current_location < text_length:
                match_mask[current_location] = 1 if char_match else 0

            bit_arr[j] = ((bit_arr[j + 1] << 1) | 1) & char_match
            if errors:
                bit_arr[j] |= ((last_bit_arr[j + 1] | last_bit_arr[j]) << 1) | 1 | last_bit_arr[j + 1]

            if bit_arr[j] & full_match:
                score = compute_score(
                    pattern_length,
                    errors=errors,
                    current_location=current_location,
                    expected_location=expected_location,
                    distance=distance,
                )
                if score <= current_threshold:
                    current_threshold = score
                    best_score = score
                    best_location = current_location
                    if best_location <= expected_location:
                        break
                    # Don't scan past the mirror image of the best match
                    start = max(1, 2 * expected_location - best_location)
            j -= 1

        # No further row can beat what we already have
        next_row_floor = compute_score(
            pattern_length,
            errors=errors + 1,
            current_location=expected_location,
            expected_location=expected_location,
            distance=distance,
        )
        if next_row_floor > current_threshold:
            break
        last_bit_arr = bit_arr

    if best_location < 0:
        return BitapResult(score=NO_MATCH_SCORE, is_match=False)
    return BitapResult(
        score=max(MIN_MATCH_SCORE, best_score),
        is_match=True,
        ranges=mask_to_ranges(match_mask),
    )
