"""Helpers for handing match results to presentation code.

The duplicate dialog lists the matches grouped by where they live
(sector / category / subcategory) and always offers a "Create New" action
for when none of them is the record the user meant.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Sequence

from dupfinder.config.models import MatchConfiguration, SearchScope
from dupfinder.normalization import TextNormalizer
from dupfinder.utils.highlighting import highlight_keywords, truncate_text

from .models import DuplicatePair, MatchResult

UNGROUPED_LABEL = "Uncategorized"

CREATE_NEW_LABELS = {
    SearchScope.ALL: "Create New Record",
    SearchScope.CATEGORIES: "Create New Category",
    SearchScope.SUBCATEGORIES: "Create New Subcategory",
    SearchScope.JOBS: "Create New Job Line",
}


def metadata_value(result: MatchResult, key: str, default: Any = None) -> Any:
    """Read a field from a result's metadata, whether a mapping or an object."""
    metadata = result.metadata
    if metadata is None:
        return default
    if isinstance(metadata, Mapping):
        return metadata.get(key, default)
    return getattr(metadata, key, default)


def group_results(results: Sequence[MatchResult], key: str) -> Dict[str, List[MatchResult]]:
    """Group results by a metadata field, keeping rank order inside each group.

    Groups appear in the order of their best-ranked member. Results without
    the field land in "Uncategorized".

    Args:
        results: Ranked results from TextMatchEngine.find_matches
        key: Metadata field to group by (e.g. "category_name")

    Returns:
        Ordered dict of group label -> results
    """
    groups: Dict[str, List[MatchResult]] = {}
    for result in results:
        label = metadata_value(result, key)
        label = str(label) if label not in (None, "") else UNGROUPED_LABEL
        groups.setdefault(label, []).append(result)
    return groups


def build_rationale_dict(result: MatchResult) -> Dict[str, Any]:
    """Summarize why a candidate was offered, for logs or audit rows."""
    return {
        "candidate_id": result.candidate_id,
        "candidate_name": result.name,
        "match_type": result.match_type.value,
        "confidence": result.confidence,
        "similarity_score": round(result.similarity_score, 4),
        "search_scope": result.search_scope.value,
    }


def build_dialog_payload(
    query: str,
    results: Sequence[MatchResult],
    config: MatchConfiguration,
    group_by: str = None,
    description_length: int = 160,
) -> Dict[str, Any]:
    """Build everything the duplicate dialog needs to render.

    Args:
        query: The text the user typed
        results: Ranked results for that query
        config: Configuration the search ran with
        group_by: Optional metadata field to group matches by
        description_length: Max characters of description shown per match

    Returns:
        Dict with keys:
        - query: The query as typed
        - search_scope: Scope value
        - has_matches: False means show only the "create new" affordance
        - match_count: Number of matches
        - matches: One dict per match (id, name, name_highlighted,
          description, match_type, confidence, similarity_percent, metadata)
        - groups: group label -> list of match ids (only when group_by is set)
        - create_new_label: Label for the fallback action
        - empty_message: Text shown when there are no matches
    """
    query_words = TextNormalizer(config).prepare(query).tokens

    matches = []
    for result in results:
        description = result.candidate.description or ""
        matches.append({
            "id": result.candidate_id,
            "name": result.name,
            "name_highlighted": highlight_keywords(
                result.name, query_words, marker_start="<b>", marker_end="</b>", whole_words=False
            ),
            "description": truncate_text(description, max_length=description_length),
            "match_type": result.match_type.value,
            "confidence": result.confidence,
            "similarity_percent": result.similarity_percent,
            "metadata": result.metadata,
        })

    payload = {
        "query": query,
        "search_scope": config.search_scope.value,
        "has_matches": bool(matches),
        "match_count": len(matches),
        "matches": matches,
        "create_new_label": CREATE_NEW_LABELS[config.search_scope],
        "empty_message": "No similar items found.",
    }

    if group_by:
        payload["groups"] = {
            label: [r.candidate_id for r in members]
            for label, members in group_results(results, group_by).items()
        }

    return payload


def format_results_text(payload: Dict[str, Any]) -> str:
    """Render a dialog payload as plain text for the terminal."""
    lines = [f"Possible duplicates of: {payload['query']}", "=" * 60]

    if not payload["has_matches"]:
        lines.append(payload["empty_message"])
        lines.append(f"-> {payload['create_new_label']}")
        return "\n".join(lines)

    for idx, match in enumerate(payload["matches"], start=1):
        lines.append(
            f"{idx}. {match['name']} [{match['match_type']}, "
            f"{match['similarity_percent']}%] (id={match['id']})"
        )
        if match["description"]:
            lines.append(f"   {match['description']}")

    lines.append("")
    lines.append(f"-> {payload['create_new_label']}")
    return "\n".join(lines)


def format_pairs_text(pairs: Sequence[DuplicatePair]) -> str:
    """Render duplicate pairs from a collection scan as plain text."""
    if not pairs:
        return "No duplicate records found."

    lines = [f"{len(pairs)} possible duplicate pair(s)", "=" * 60]
    for pair in pairs:
        lines.append(
            f"{pair.first.name} (id={pair.first.id}) <-> {pair.second.name} "
            f"(id={pair.second.id}) [{pair.match_type.value}, "
            f"{int(round(pair.similarity_score * 100))}%]"
        )
    return "\n".join(lines)
