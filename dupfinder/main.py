"""Command-line entry point for dupfinder.

Reads candidate records from a JSON file (standing in for the application's
record source), runs a duplicate search or a collection scan, and prints the
result.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv
from pydantic import ValidationError

from dupfinder.config.environment import EnvironmentConfig
from dupfinder.config.exceptions import CandidateLoadError, ConfigurationError
from dupfinder.config.loader import load_config
from dupfinder.config.models import AppConfig
from dupfinder.domain.models import CandidateRecord
from dupfinder.logging import get_logger
from dupfinder.logging.config import configure_logging
from dupfinder.matching import (
    TextMatchEngine,
    build_dialog_payload,
    build_rationale_dict,
    format_pairs_text,
    format_results_text,
)

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level.

    Log level priority: CLI > LOG_LEVEL environment variable > config file.

    Args:
        config_path: Path to configuration file (None for lookup/defaults)
        log_level_override: Log level from CLI

    Returns:
        Tuple of (AppConfig, EnvironmentConfig)

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    return app_config, env_config


def load_candidates(path: Path) -> List[CandidateRecord]:
    """
    Read candidate records from a JSON array of objects.

    Each object needs an ``id`` and a ``name`` (or ``title``); every other
    key is kept as metadata.

    Raises:
        CandidateLoadError: If the file is missing, not JSON, or holds invalid rows
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            rows = json.load(f)
    except OSError as e:
        raise CandidateLoadError(f"Cannot read candidates file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CandidateLoadError(f"Candidates file {path} is not valid JSON: {e}") from e

    if not isinstance(rows, list):
        raise CandidateLoadError(f"Candidates file {path} must contain a JSON array")

    candidates = []
    for idx, row in enumerate(rows):
        if not isinstance(row, dict):
            raise CandidateLoadError(f"Candidate {idx} in {path} is not an object")
        try:
            candidates.append(CandidateRecord.from_mapping(row))
        except ValidationError as e:
            raise CandidateLoadError(f"Candidate {idx} in {path} is invalid: {e}") from e

    return candidates


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dupfinder",
        description="Find existing records that a new name may duplicate",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--query", help="Name to check for duplicates")
    mode.add_argument(
        "--scan",
        action="store_true",
        help="Report every duplicate pair within the candidates file",
    )
    parser.add_argument(
        "--candidates",
        type=Path,
        required=True,
        help="JSON file with an array of candidate records",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: dupfinder.yaml if present)",
    )
    parser.add_argument(
        "--exclude-id",
        action="append",
        default=[],
        help="Record id to leave out of the search (repeatable)",
    )
    parser.add_argument(
        "--group-by",
        default=None,
        help="Metadata field used to group matches in JSON output",
    )
    parser.add_argument(
        "--output",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for dupfinder.

    Returns:
        Exit code: 0 on success (including no matches), 1 on configuration or
        input errors.
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        candidates = load_candidates(args.candidates)
        max_candidates = app_config.search.max_candidates
        if max_candidates is not None and len(candidates) > max_candidates:
            logger.warning(
                f"Candidate list truncated to {max_candidates} records",
                extra={
                    "event": "cli.candidates.truncated",
                    "candidate_count": len(candidates),
                    "max_candidates": max_candidates,
                },
            )
            candidates = candidates[:max_candidates]

        engine = TextMatchEngine(app_config.matching)

        if args.scan:
            pairs = engine.find_duplicate_pairs(candidates)
            if args.output == "json":
                print(json.dumps([
                    {
                        "first_id": p.first.id,
                        "second_id": p.second.id,
                        "match_type": p.match_type.value,
                        "similarity_score": round(p.similarity_score, 4),
                    }
                    for p in pairs
                ], indent=2))
            else:
                print(format_pairs_text(pairs))
            return 0

        results = engine.find_matches(
            args.query,
            candidates,
            exclude_ids=args.exclude_id,
            limit=app_config.search.max_results,
        )
        payload = build_dialog_payload(
            args.query, results, app_config.matching, group_by=args.group_by
        )

        for result in results:
            logger.debug(
                "Match rationale",
                extra={"event": "cli.match.rationale", **build_rationale_dict(result)},
            )

        if args.output == "json":
            print(json.dumps(payload, indent=2, default=str))
        else:
            print(format_results_text(payload))
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            "Configuration error",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except CandidateLoadError as e:
        print(f"Input Error: {e}", file=sys.stderr)
        logger.error(
            "Candidate file could not be loaded",
            extra={"event": "cli.candidates.error", "error_type": "CandidateLoadError"},
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
