"""Text match engine for finding records a query may duplicate.

Given a query, a list of CandidateRecord and a MatchConfiguration, the engine:
1. Validates the configuration (fails before touching any candidate)
2. Normalizes the query and each candidate name identically
3. Classifies each pair into its highest-precedence tier
4. Drops pairs whose tier is disabled or whose score misses the threshold
5. Ranks what is left by descending score, then name
"""

from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from dupfinder.config.loader import validate_match_configuration
from dupfinder.config.models import MatchConfiguration, MatchType
from dupfinder.domain.models import CandidateRecord
from dupfinder.logging import get_logger
from dupfinder.logging.context import log_context, new_search_id
from dupfinder.normalization import NormalizedText, TextNormalizer

from .models import DuplicatePair, MatchResult

logger = get_logger(__name__, component="matching")

# Token-overlap score a pair needs before it counts as "similar"
SIMILAR_SCORE_FLOOR = 0.7

# Shortest prefix accepted as a variant of a longer word (pad ~ pads)
MIN_VARIANT_PREFIX = 3

Classification = Tuple[MatchType, float]


def _is_variant(a: str, b: str) -> bool:
    """True if one token is a prefix of the other (pad/pads, replace/replacement)."""
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    return len(shorter) >= MIN_VARIANT_PREFIX and longer.startswith(shorter)


def _count_variant_pairs(query_tokens: List[str], candidate_tokens: List[str]) -> int:
    """Size of the largest one-to-one pairing of prefix variants.

    Augmenting-path matching: a query token may take a candidate token that
    is already paired if the current holder can move to another variant.
    """
    holder: Dict[str, str] = {}

    def place(token: str, visited: Set[str]) -> bool:
        for other in candidate_tokens:
            if other in visited or not _is_variant(token, other):
                continue
            visited.add(other)
            if other not in holder or place(holder[other], visited):
                holder[other] = token
                return True
        return False

    return sum(1 for token in query_tokens if place(token, set()))


def token_overlap_score(query_tokens: Iterable[str], candidate_tokens: Iterable[str]) -> float:
    """Share of tokens the query and candidate have in common.

    Tokens are compared as sets. Identical tokens pair first; the leftovers
    then pair one-to-one when one is a prefix of the other, taking the
    largest such pairing ("seal sealant" fully pairs with "seals sealants").
    The count of pairs is divided by the size of the larger set.

    Args:
        query_tokens: Tokens of the normalized query
        candidate_tokens: Tokens of the normalized candidate name

    Returns:
        Score between 0.0 and 1.0 (0.0 if either side has no tokens)
    """
    query_set = set(query_tokens)
    candidate_set = set(candidate_tokens)

    larger = max(len(query_set), len(candidate_set))
    if not query_set or not candidate_set:
        return 0.0

    identical = query_set & candidate_set
    shared = len(identical) + _count_variant_pairs(
        sorted(query_set - identical), sorted(candidate_set - identical)
    )

    return shared / larger


def _partial_score(query: NormalizedText, text: NormalizedText) -> Optional[float]:
    """Length ratio if the query appears inside text, else None.

    A substring of the whole normalized text also covers the case of the
    query sitting inside (or at the start of) a single token.
    """
    if not text.normalized or query.normalized not in text.normalized:
        return None
    return min(1.0, len(query.normalized) / len(text.normalized))


def classify(
    query: NormalizedText,
    name: NormalizedText,
    description: Optional[NormalizedText] = None,
) -> Optional[Classification]:
    """Find the highest-precedence tier a query/candidate pair qualifies for.

    Enabled tiers and the threshold are not consulted here; see
    TextMatchEngine for how the result is filtered.

    Args:
        query: Normalized query
        name: Normalized candidate name
        description: Normalized candidate description, only consulted for
            the partial tier when provided

    Returns:
        (match_type, score) or None if the pair does not match at all
    """
    if query.is_empty or name.is_empty:
        return None

    if query.normalized == name.normalized:
        return MatchType.EXACT, 1.0

    if query.token_set and query.token_set == name.token_set:
        return MatchType.EXACT_WORDS, 1.0

    score = token_overlap_score(query.token_set, name.token_set)
    if score >= SIMILAR_SCORE_FLOOR:
        return MatchType.SIMILAR, score

    partial = _partial_score(query, name)
    if partial is None and description is not None:
        partial = _partial_score(query, description)
    if partial is not None:
        return MatchType.PARTIAL, partial

    return None


def _rank_key(result: MatchResult):
    return (-result.similarity_score, result.candidate.name, result.candidate.id)


class TextMatchEngine:
    """Finds candidate records that a query string may duplicate.

    The engine holds no state between calls; one instance can serve any
    number of searches, including concurrent ones.
    """

    def __init__(self, config: MatchConfiguration, logger_instance=None):
        """Initialize TextMatchEngine.

        Args:
            config: Matching policy. Validated on every search, not here.
            logger_instance: Optional logger (defaults to module logger)
        """
        self.config = config
        self.logger = logger_instance or logger

    def find_matches(
        self,
        query: str,
        candidates: Sequence[CandidateRecord],
        exclude_ids: Iterable[str] = (),
        limit: Optional[int] = None,
    ) -> List[MatchResult]:
        """Rank the candidates the query may duplicate.

        Args:
            query: Text the user is about to save (e.g. a new job line name)
            candidates: Records already filtered to the caller's search scope
            exclude_ids: Record ids to skip, such as the record being edited
            limit: Keep only the top N results after ranking

        Returns:
            MatchResult list sorted by descending score, then name. Empty if
            the query is blank or nothing matches.

        Raises:
            ConfigurationError: If the configuration is invalid. Raised before
                any candidate is read.
        """
        config = validate_match_configuration(self.config)

        if limit is not None and limit < 1:
            raise ValueError(f"limit must be a positive integer, got {limit}")

        with log_context(search_id=new_search_id(), search_scope=config.search_scope.value):
            normalizer = TextNormalizer(config)
            prepared_query = normalizer.prepare(query)

            if prepared_query.is_empty:
                self.logger.debug(
                    "Empty query after normalization, skipping search",
                    extra={"event": "matching.search.empty_query"},
                )
                return []

            skip = {str(record_id) for record_id in exclude_ids}
            results: List[MatchResult] = []
            scanned = 0
            excluded = 0

            for candidate in candidates:
                if candidate.id in skip:
                    excluded += 1
                    continue
                scanned += 1
                result = self._evaluate(prepared_query, candidate, normalizer, config)
                if result is not None:
                    results.append(result)

            results.sort(key=_rank_key)
            if limit is not None:
                results = results[:limit]

            self.logger.info(
                f"Duplicate search matched {len(results)} of {scanned} candidates",
                extra={
                    "event": "matching.search.completed",
                    "candidates_scanned": scanned,
                    "candidates_excluded": excluded,
                    "match_count": len(results),
                    "top_match_type": results[0].match_type.value if results else None,
                    "enabled_match_types": [t.value for t in config.ordered_match_types()],
                },
            )
            return results

    def find_duplicate_pairs(self, candidates: Sequence[CandidateRecord]) -> List[DuplicatePair]:
        """Find every pair of records in one collection that match each other.

        Tiers are not symmetric (partial is "a contains b"), so both
        directions are classified and the stronger one is kept. Each
        unordered pair is reported once.

        Args:
            candidates: Records to scan, e.g. all job lines in one category

        Returns:
            DuplicatePair list sorted by descending score, then names

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        config = validate_match_configuration(self.config)
        normalizer = TextNormalizer(config)
        records = list(candidates)

        prepared = [
            (
                normalizer.prepare(record.name),
                normalizer.prepare(record.description) if config.include_description else None,
            )
            for record in records
        ]

        pairs: List[DuplicatePair] = []
        with log_context(search_id=new_search_id(), search_scope=config.search_scope.value):
            for i, first in enumerate(records):
                for j in range(i + 1, len(records)):
                    second = records[j]
                    if first.id == second.id:
                        continue

                    forward = self._accept(
                        classify(prepared[i][0], prepared[j][0], prepared[j][1]),
                        config,
                        second.id,
                    )
                    backward = self._accept(
                        classify(prepared[j][0], prepared[i][0], prepared[i][1]),
                        config,
                        first.id,
                    )
                    best = _stronger(forward, backward)
                    if best is not None:
                        pairs.append(DuplicatePair(first, second, best[0], best[1]))

            pairs.sort(key=lambda p: (-p.similarity_score, p.first.name, p.second.name))

            self.logger.info(
                f"Duplicate scan found {len(pairs)} pairs among {len(records)} records",
                extra={
                    "event": "matching.scan.completed",
                    "record_count": len(records),
                    "pair_count": len(pairs),
                },
            )
        return pairs

    def _evaluate(
        self,
        query: NormalizedText,
        candidate: CandidateRecord,
        normalizer: TextNormalizer,
        config: MatchConfiguration,
    ) -> Optional[MatchResult]:
        """Score one candidate and wrap it as a MatchResult if it is reported."""
        description = None
        if config.include_description and candidate.description:
            description = normalizer.prepare(candidate.description)

        accepted = self._accept(
            classify(query, normalizer.prepare(candidate.name), description),
            config,
            candidate.id,
        )
        if accepted is None:
            return None

        match_type, score = accepted
        self.logger.debug(
            "Candidate matched",
            extra={
                "event": "matching.candidate.matched",
                "candidate_id": candidate.id,
                "match_type": match_type.value,
                "similarity_score": round(score, 4),
            },
        )
        return MatchResult(
            candidate=candidate,
            match_type=match_type,
            similarity_score=score,
            metadata=candidate.metadata,
            search_scope=config.search_scope,
        )

    def _accept(
        self,
        classification: Optional[Classification],
        config: MatchConfiguration,
        candidate_id: Optional[str] = None,
    ) -> Optional[Classification]:
        """Apply enabled tiers and the threshold to a classification.

        A pair whose natural tier is disabled is dropped rather than reported
        at a lower tier, which would overstate how different the texts are.
        """
        if classification is None:
            return None

        match_type, score = classification
        if not config.enabled(match_type):
            self.logger.debug(
                "Candidate tier disabled, excluded",
                extra={
                    "event": "matching.candidate.tier_disabled",
                    "candidate_id": candidate_id,
                    "match_type": match_type.value,
                },
            )
            return None

        if match_type.is_threshold_gated and score < config.threshold_ratio:
            self.logger.debug(
                "Candidate below similarity threshold, excluded",
                extra={
                    "event": "matching.candidate.below_threshold",
                    "candidate_id": candidate_id,
                    "match_type": match_type.value,
                    "similarity_score": round(score, 4),
                    "similarity_threshold": config.similarity_threshold,
                },
            )
            return None

        return classification


def _stronger(
    a: Optional[Classification], b: Optional[Classification]
) -> Optional[Classification]:
    """Pick the classification with higher precedence, then higher score."""
    if a is None or b is None:
        return a or b
    return min(a, b, key=lambda c: (c[0].precedence, -c[1]))


def find_matches(
    query: str,
    candidates: Sequence[CandidateRecord],
    config: MatchConfiguration,
    exclude_ids: Iterable[str] = (),
    limit: Optional[int] = None,
) -> List[MatchResult]:
    """Convenience wrapper: TextMatchEngine(config).find_matches(...)."""
    return TextMatchEngine(config).find_matches(
        query, candidates, exclude_ids=exclude_ids, limit=limit
    )


def find_duplicate_pairs(
    candidates: Sequence[CandidateRecord], config: MatchConfiguration
) -> List[DuplicatePair]:
    """Convenience wrapper: TextMatchEngine(config).find_duplicate_pairs(...)."""
    return TextMatchEngine(config).find_duplicate_pairs(candidates)
