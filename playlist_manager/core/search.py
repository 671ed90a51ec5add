"""Fuzzy title search based on Levenshtein distance."""

from typing import Iterable, List

from ..models.result import SearchMatch
from ..models.song import Song

DEFAULT_MAX_DISTANCE = 2


def edit_distance(source: str, target: str) -> int:
    """Compute the Levenshtein distance between two strings.

    Insertions, deletions and substitutions each cost 1; transpositions are
    not treated specially.

    Args:
        source: String to transform
        target: String to reach

    Returns:
        Minimum number of single-character edits
    """
    len_s = len(source)
    len_t = len(target)

    if len_s == 0:
        return len_t
    if len_t == 0:
        return len_s

    dp = [[0] * (len_t + 1) for _ in range(len_s + 1)]
    for i in range(len_s + 1):
        dp[i][0] = i
    for j in range(len_t + 1):
        dp[0][j] = j

    for i in range(1, len_s + 1):
        for j in range(1, len_t + 1):
            cost = 0 if source[i - 1] == target[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j] + 1,
                dp[i][j - 1] + 1,
                dp[i - 1][j - 1] + cost
            )

    return dp[len_s][len_t]


def fuzzy_search(
    songs: Iterable[Song],
    term: str,
    max_distance: int = DEFAULT_MAX_DISTANCE
) -> List[SearchMatch]:
    """Find songs whose title is within ``max_distance`` edits of ``term``.

    Comparison is case-insensitive. Matches are ordered by distance; songs at
    the same distance keep playlist order.

    Args:
        songs: Songs in playlist order
        term: Search term
        max_distance: Largest accepted edit distance

    Returns:
        List of matches, closest first
    """
    needle = term.lower()
    matches = []

    for position, song in enumerate(songs):
        distance = edit_distance(song.title.lower(), needle)
        if distance <= max_distance:
            matches.append(SearchMatch(song=song, position=position, distance=distance))

    matches.sort(key=lambda match: match.distance)
    return matches
