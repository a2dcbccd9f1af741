"""
Module: cli

Purpose:
    `assessment-scoring` command line. Works on JSON files: a parts file
    (array of question parts), a scoring document file and an answers file
    (object of part id -> answer).

Commands:
    defaults PARTS --levels N [-o OUT]     Print or write the default document
    validate PARTS CONFIG --levels N       List violations; exit 1 if any block
    score PARTS CONFIG ANSWERS             Per-part levels and overall level
    preview PARTS CONFIG --levels N        Min / max / mixed scenarios

Exit codes:
    0 success, 1 blocking violations or scoring failure, 2 unreadable input
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .core.schemas.validator import ValidationError
from .core.utils.serialization import (
    load_config_json,
    load_parts_json,
    save_config_json,
    serialize_config,
)
from .scoring import (
    DEFAULT_POLICY,
    ScoringError,
    blocking_violations,
    build_test_scenarios,
    create_default_config,
    load_policy_json,
    score_question,
    summarize_part_levels,
    validate_config,
)

logger = logging.getLogger(__name__)


def _load_policy(args: argparse.Namespace):
    if args.policy is None:
        return DEFAULT_POLICY
    return load_policy_json(args.policy)


def _load_answers(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Answers file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}", path=str(path), errors=[str(e)])
    if not isinstance(data, dict):
        raise ValidationError("Answers file must hold a JSON object", path=str(path))
    return data


# ─────────────────────────────────────────────────────────────────────────────
# Commands
# ─────────────────────────────────────────────────────────────────────────────

def _cmd_defaults(args: argparse.Namespace) -> int:
    parts = load_parts_json(args.parts)
    config = create_default_config(parts, args.levels, policy=_load_policy(args))
    if args.output is not None:
        save_config_json(config, args.output)
        logger.info(f"Wrote default scoring for {len(parts)} parts to {args.output}")
    else:
        print(json.dumps(serialize_config(config), indent=2, ensure_ascii=False))
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    parts = load_parts_json(args.parts)
    config = load_config_json(args.config, parts=parts)
    violations = validate_config(config, parts, args.levels)
    blocking = blocking_violations(violations, _load_policy(args))

    for violation in violations:
        print(violation)
    if blocking:
        logger.error(f"{len(blocking)} blocking violation(s)")
        return 1
    print("OK")
    return 0


def _cmd_score(args: argparse.Namespace) -> int:
    parts = load_parts_json(args.parts)
    config = load_config_json(args.config, parts=parts)
    score = score_question(parts, config, _load_answers(args.answers))
    print(json.dumps(score.to_dict(), indent=2))
    return 0


def _cmd_preview(args: argparse.Namespace) -> int:
    parts = load_parts_json(args.parts)
    config = load_config_json(args.config, parts=parts)

    for part in parts:
        scoring = config.get(part.key) if config is not None else None
        summary = summarize_part_levels(scoring, args.levels) or "(not mapped)"
        print(f"Part {part.key} [{part.answer_type}] {summary}")

    for scenario in build_test_scenarios(parts, config, args.levels):
        print(f"\n{scenario.name}: {scenario.description}")
        for key, answer in scenario.answers.items():
            print(f"  {key}: {answer!r}")
        print(f"  levels {scenario.part_levels} -> Level {scenario.average_level}")
    return 0


# ─────────────────────────────────────────────────────────────────────────────
# Entry point
# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="assessment-scoring",
        description="Weighted scoring for composite questions",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--policy", type=Path, help="JSON file with scoring policy overrides")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("defaults", help="Generate the default scoring document")
    p.add_argument("parts", type=Path, help="Parts JSON file")
    p.add_argument("--levels", "-n", type=int, required=True, help="Rating scale size")
    p.add_argument("--output", "-o", type=Path, help="Write to file instead of stdout")
    p.set_defaults(func=_cmd_defaults)

    p = sub.add_parser("validate", help="Validate a scoring document")
    p.add_argument("parts", type=Path, help="Parts JSON file")
    p.add_argument("config", type=Path, help="Scoring document JSON file")
    p.add_argument("--levels", "-n", type=int, required=True, help="Rating scale size")
    p.set_defaults(func=_cmd_validate)

    p = sub.add_parser("score", help="Score one response")
    p.add_argument("parts", type=Path, help="Parts JSON file")
    p.add_argument("config", type=Path, help="Scoring document JSON file")
    p.add_argument("answers", type=Path, help="Answers JSON file (part id -> answer)")
    p.set_defaults(func=_cmd_score)

    p = sub.add_parser("preview", help="Show level summaries and test scenarios")
    p.add_argument("parts", type=Path, help="Parts JSON file")
    p.add_argument("config", type=Path, help="Scoring document JSON file")
    p.add_argument("--levels", "-n", type=int, required=True, help="Rating scale size")
    p.set_defaults(func=_cmd_preview)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        return args.func(args)
    except (FileNotFoundError, ValidationError) as e:
        logger.error(str(e))
        return 2
    except (ScoringError, ValueError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
