"""Command line entry point: analyze or validate workflow files, classify errors."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from .logging_utils import setup_logging
from .outcome import ExecutionError, classify, retry_strategy_for, should_alert
from .workflow import WorkflowDocumentError, analyze, load_workflow, validate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flowlens", description="Workflow structure and failure analysis")
    parser.add_argument("--log-level", help="Override FLOWLENS_LOG_LEVEL")
    commands = parser.add_subparsers(dest="command", required=True)

    analyze_cmd = commands.add_parser("analyze", help="Print structural metrics for a workflow file")
    analyze_cmd.add_argument("path", type=Path)
    analyze_cmd.add_argument("--markdown", action="store_true", help="Render a markdown summary instead of JSON")

    validate_cmd = commands.add_parser("validate", help="Validate a workflow file; exit 1 when invalid")
    validate_cmd.add_argument("path", type=Path)

    classify_cmd = commands.add_parser("classify", help="Classify an execution error and suggest a retry")
    classify_cmd.add_argument("--message", required=True)
    classify_cmd.add_argument("--description")
    classify_cmd.add_argument("--stack")
    classify_cmd.add_argument("--context", help="JSON object with extra error context")

    return parser


def run_analyze(path: Path, markdown: bool) -> int:
    result = analyze(load_workflow(path))
    print(result.to_markdown() if markdown else json.dumps(result.to_dict(), indent=2))
    return 0


def run_validate(path: Path) -> int:
    result = validate(load_workflow(path))
    print(result.to_markdown())
    return 0 if result.valid else 1


def run_classify(args: argparse.Namespace) -> int:
    context = None
    if args.context:
        try:
            context = json.loads(args.context)
        except json.JSONDecodeError as e:
            print(f"error: --context is not valid JSON: {e.msg}", file=sys.stderr)
            return 2
        if not isinstance(context, dict):
            print("error: --context must be a JSON object", file=sys.stderr)
            return 2

    error = ExecutionError(
        message=args.message,
        description=args.description,
        stack_trace=args.stack,
        context=context,
    )
    analysis = classify(error)
    payload = {
        "analysis": analysis.model_dump(mode="json"),
        "retry": retry_strategy_for(analysis).model_dump(mode="json"),
        "alert": should_alert(error),
    }
    print(json.dumps(payload, indent=2))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)

    try:
        if args.command == "analyze":
            return run_analyze(args.path, args.markdown)
        if args.command == "validate":
            return run_validate(args.path)
        return run_classify(args)
    except WorkflowDocumentError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
