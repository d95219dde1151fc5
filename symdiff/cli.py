#!/usr/bin/env python3
"""
symdiff command line

    symdiff --eval "<expr>" name=value ...
    symdiff --diff "<expr>" --by <name>

Prints the numeric value or the unsimplified derivative. Exit status is 0 on
success and 1 on any parse or evaluation failure, with the message on stderr.
"""
import argparse
import sys
from typing import Dict, List, Optional

from .config import SymDiffConfig
from .errors import SymDiffError
from .expression_tree.core.operators import format_constant
from .logging_system import LogLevel, log_info, log_warning
from .parser import parse_expression


class AssignmentError(SymDiffError):
    """Malformed name=value argument"""


def parse_assignments(pairs: List[str]) -> Dict[str, float]:
    variables: Dict[str, float] = {}
    for pair in pairs:
        name, sep, value = pair.partition('=')
        name = name.strip()
        if not sep or not name:
            raise AssignmentError(f"Expected name=value, got {pair!r}")
        try:
            variables[name] = float(value)
        except ValueError:
            raise AssignmentError(f"Value for '{name}' is not a number: {value!r}") from None
    return variables


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symdiff",
        description="Evaluate or symbolically differentiate an infix expression",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--eval", dest="eval_expr", metavar="EXPR", help="Expression to evaluate")
    mode.add_argument("--diff", dest="diff_expr", metavar="EXPR", help="Expression to differentiate")
    parser.add_argument("--by", metavar="NAME", help="Variable to differentiate with respect to")
    parser.add_argument("assignments", nargs="*", metavar="name=value",
                        help="Variable values for --eval")
    return parser


def run(args: argparse.Namespace) -> str:
    if args.eval_expr is not None:
        log_info(f"Evaluating {args.eval_expr!r}", LogLevel.DETAILED)
        variables = parse_assignments(args.assignments)
        return format_constant(parse_expression(args.eval_expr).evaluate(variables))

    log_info(f"Differentiating {args.diff_expr!r} by {args.by}", LogLevel.DETAILED)
    return parse_expression(args.diff_expr).derivative(args.by).to_string()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.diff_expr is not None and not args.by:
        parser.error("--diff requires --by NAME")
    if args.diff_expr is not None and args.assignments:
        parser.error("name=value assignments are only accepted with --eval")
    if args.eval_expr is not None and args.by:
        parser.error("--by is only accepted with --diff")

    try:
        SymDiffConfig.from_env().apply()
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    try:
        output = run(args)
    except SymDiffError as e:
        log_warning(f"{type(e).__name__}: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
