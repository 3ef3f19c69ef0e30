"""
Set-overlap similarity for normalized term collections.

Responsibilities:
- Normalize short keyword terms for comparison.
- Compute exact and substring-tolerant Jaccard similarity.

Non-Responsibilities:
- No weighting logic.
- No knowledge of attendee profiles.

Invariant:
Two empty collections score 0, never 1.
"""

from typing import Iterable, List


def normalize_term(term: str) -> str:
    return term.strip().lower()


def _normalize_all(terms: Iterable[str]) -> List[str]:
    return [normalize_term(t) for t in terms]


def jaccard_similarity(a: Iterable[str], b: Iterable[str]) -> float:
    """
    Exact Jaccard similarity of two term collections.

    Returns |intersection| / |union| of the normalized sets, in [0, 1].
    """
    set_a = set(_normalize_all(a))
    set_b = set(_normalize_all(b))

    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def fuzzy_jaccard_similarity(a: Iterable[str], b: Iterable[str]) -> float:
    """
    Jaccard variant that gives half credit to substring near-matches.

    Each term of ``a`` earns 1.0 for an exact hit in ``b``; otherwise 0.5 for
    the first term of ``b`` it contains or is contained by. The total is
    divided by the size of the normalized union and capped at 1.0, since a
    repeated term in ``a`` is credited once per occurrence.

    Short tokens match liberally ("ai" hits "air"); there is no minimum
    length on the substring test.
    """
    norm_a = _normalize_all(a)
    norm_b = _normalize_all(b)

    total_terms = len(set(norm_a) | set(norm_b))
    if total_terms == 0:
        return 0.0

    match_count = 0.0
    for term_a in norm_a:
        if term_a in norm_b:
            match_count += 1.0
            continue

        for term_b in norm_b:
            if term_b in term_a or term_a in term_b:
                match_count += 0.5
                break

    return min(1.0, match_count / total_terms)
