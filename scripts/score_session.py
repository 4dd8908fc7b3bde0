#!/usr/bin/env python3
"""
PsyScore — Session Scorer CLI

Scores one assessment session from a JSON file.  Provides two subcommands:

  score  — Score a response file and print a summary (or the full JSON result).
  norms  — Print the research norms the engine is configured with.

The response file is either a JSON list of responses or an object with a
``responses`` list and an optional ``metadata`` object (``age``, ``tier``).

Usage examples
--------------
  # Print a human-readable summary
  python scripts/score_session.py score session.json

  # Full result as JSON
  python scripts/score_session.py score session.json --json

  # Reproducible profile jitter
  python scripts/score_session.py score session.json --seed 42

  # Show the active research norms
  python scripts/score_session.py norms
"""

from __future__ import annotations

import argparse
import json
import random
import sys
from pathlib import Path
from typing import Any

# Ensure the project root is importable
sys.path.insert(0, ".")

from psyscore.config import get_settings
from psyscore.exceptions import PsyScoreError
from psyscore.logging_config import configure_logging
from psyscore.schemas.results import ScoringResult
from psyscore.services.quality_service import summarize_quality
from psyscore.services.scoring_service import ScoringEngine


# ──────────────────────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────────────────────

def load_session(path: Path) -> tuple[list[Any], dict[str, Any]]:
    """Read a session file into ``(responses, metadata)``."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, list):
        return payload, {}
    if isinstance(payload, dict):
        responses = payload.get("responses") or []
        metadata = payload.get("metadata") or {}
        if not isinstance(responses, list) or not isinstance(metadata, dict):
            raise ValueError("'responses' must be a list and 'metadata' an object")
        return responses, metadata
    raise ValueError("Session file must hold a list or an object")


def build_engine(args: argparse.Namespace) -> ScoringEngine:
    engine = ScoringEngine.from_settings()
    if getattr(args, "seed", None) is not None:
        # Rebuild with an explicit generator so --seed wins over settings
        engine = ScoringEngine(
            norms=engine.norms,
            quality_assessor=engine.quality_assessor,
            trait_analyzer=engine.trait_analyzer,
            jitter=random.Random(args.seed),
        )
    return engine


def print_summary(result: ScoringResult) -> None:
    print(f"\n{'=' * 60}")
    print(f"  PsyScore Session Summary")
    print(f"{'=' * 60}")
    print(f"  Responses scored:  {result.response_count}")
    print(f"  Norms version:     {result.norms_version}")
    print(f"  Tier:              {result.metadata.tier}")

    # ── Traits ────────────────────────────────────────────────────────
    print(f"\n  Traits:")
    for name, trait in result.traits.traits.items():
        percentile = result.percentiles[name]
        interval = result.confidence.intervals[name]
        print(
            f"    {name:<18} {trait.score:>3}  "
            f"p{percentile.percentile:<3} {percentile.band:<19} "
            f"[{interval.lower}-{interval.upper}]"
        )

    # ── Archetype ─────────────────────────────────────────────────────
    print(f"\n  Archetype:         {result.archetype.name} ({result.archetype.population_share})")
    print(f"    {result.archetype.description}")
    for pattern in result.trait_patterns:
        print(f"    + {pattern.name} (strength {pattern.strength})")

    # ── Screening ─────────────────────────────────────────────────────
    print(f"\n  Screening:")
    for key, screening in result.screenings.items():
        if not screening.has_data:
            print(f"    {screening.instrument:<8} no tagged items")
            continue
        print(
            f"    {screening.instrument:<8} {screening.normalized_score:>2}  "
            f"{screening.likelihood_label} ({screening.severity_band}, {screening.method})"
        )

    # ── Quality ───────────────────────────────────────────────────────
    quality = summarize_quality(result.quality)
    print(f"\n  Quality:")
    print(f"    Confidence:      {quality['confidence']}")
    print(f"    Average time:    {quality['average_ms']} ms")
    print(f"    Flags:           {', '.join(quality['flags']) or 'none'}")
    print(f"    Overall conf.:   {result.confidence.overall}")
    if result.quality_review is not None:
        validity = "valid" if result.quality_review.valid else "INVALID"
        print(f"    Review:          {result.quality_review.overall_score} ({validity})")
    print()


# ──────────────────────────────────────────────────────────────────────────────
# Subcommands
# ──────────────────────────────────────────────────────────────────────────────

def cmd_score(args: argparse.Namespace) -> int:
    """Score a session file."""
    try:
        responses, metadata = load_session(Path(args.file))
    except (OSError, ValueError) as exc:
        print(f"Cannot read session file {args.file}: {exc}", file=sys.stderr)
        return 1

    result = build_engine(args).score(responses, metadata)
    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print_summary(result)
    return 0


def cmd_norms(args: argparse.Namespace) -> int:
    """Print the active research norms as JSON."""
    engine = ScoringEngine.from_settings()
    print(engine.norms.model_dump_json(indent=2))
    return 0


# ──────────────────────────────────────────────────────────────────────────────
# CLI entry point
# ──────────────────────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="PsyScore — score psychometric assessment sessions.",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available subcommands",
    )

    # ── score ─────────────────────────────────────────────────────────
    score_parser = subparsers.add_parser(
        "score",
        help="Score a JSON response file.",
    )
    score_parser.add_argument(
        "file",
        type=str,
        help="Path to the session JSON file.",
    )
    score_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output the full result as JSON instead of a summary.",
    )
    score_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Enable profile jitter with this random seed.",
    )

    # ── norms ─────────────────────────────────────────────────────────
    subparsers.add_parser(
        "norms",
        help="Print the active research norms as JSON.",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    configure_logging(get_settings().LOG_LEVEL)

    try:
        if args.command == "score":
            return cmd_score(args)
        if args.command == "norms":
            return cmd_norms(args)
    except PsyScoreError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
