"""Command line interface for the analytic math core."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from .core import AnalyticMathError, DomainViolationError, error_payload, get_logger, get_settings, setup_logging
from .math import Complex, CubicFunction, Matrix, QuadraticFunction, scalar

logger = get_logger(__name__)


def parse_rows(text: str) -> list[list[float]]:
    """Read matrix rows written as ``"1,2;3,4"``."""
    rows = []
    for row_text in text.split(";"):
        try:
            rows.append([float(cell) for cell in row_text.split(",")])
        except ValueError as exc:
            raise DomainViolationError(f"Cannot read matrix row: {row_text!r}", {"rows": text}) from exc
    return rows


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--json",
        action="store_true",
        help="Print machine-readable JSON instead of text.",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at DEBUG level to stderr.",
    )

    parser = argparse.ArgumentParser(
        prog="analytic",
        description="Complex numbers, matrix determinants/inverses and polynomial roots.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    roots = subparsers.add_parser(
        "roots",
        parents=[common],
        help="Roots of a quadratic or cubic polynomial.",
    )
    roots.add_argument(
        "coefficients",
        type=float,
        nargs="+",
        metavar="COEF",
        help="3 or 4 coefficients, highest degree first (e.g. 1 -3 2).",
    )

    det = subparsers.add_parser("det", parents=[common], help="Determinant of a square matrix.")
    det.add_argument("rows", metavar="ROWS", help='Matrix rows such as "1,2;3,4".')

    inverse = subparsers.add_parser("inverse", parents=[common], help="Inverse of a square matrix.")
    inverse.add_argument("rows", metavar="ROWS", help='Matrix rows such as "1,2;3,4".')

    complex_parser = subparsers.add_parser(
        "complex",
        parents=[common],
        help="Powers, roots and logarithm of a complex number.",
    )
    complex_parser.add_argument("value", metavar="VALUE", help='Complex number such as "3+4i".')
    operation = complex_parser.add_mutually_exclusive_group()
    operation.add_argument("--pow", metavar="W", help="Raise VALUE to the complex power W.")
    operation.add_argument("--sqrt", action="store_true", help="Principal square root.")
    operation.add_argument("--cbrt", action="store_true", help="Cube root (real root for negative reals).")
    operation.add_argument("--ln", action="store_true", help="Principal natural logarithm.")

    return parser


def _run_roots(args: argparse.Namespace) -> tuple[dict[str, Any], str]:
    coefficients = args.coefficients
    if len(coefficients) == 4:
        solver: QuadraticFunction | CubicFunction = CubicFunction(coefficients)
    else:
        solver = QuadraticFunction(coefficients)
    roots = [root.to_string() for root in solver.roots]
    result = {"polynomial": solver.to_string(), "delta": solver.delta, "roots": roots}
    lines = [f"f(x) = {solver.to_string()}", f"delta = {scalar.format_number(solver.delta)}"]
    lines.extend(f"x{i} = {root}" for i, root in enumerate(roots, start=1))
    return result, "\n".join(lines)


def _run_det(args: argparse.Namespace) -> tuple[dict[str, Any], str]:
    matrix = Matrix(parse_rows(args.rows))
    determinant = matrix.determinant()
    return {"matrix": matrix.to_python(), "determinant": determinant}, scalar.format_number(determinant)


def _run_inverse(args: argparse.Namespace) -> tuple[dict[str, Any], str]:
    matrix = Matrix(parse_rows(args.rows))
    inverse = matrix.inverse()
    if inverse is None:
        reason = "not square" if not matrix.is_square() else "singular"
        return {"matrix": matrix.to_python(), "inverse": None, "reason": reason}, f"No inverse: matrix is {reason}"
    return {"matrix": matrix.to_python(), "inverse": inverse.to_python()}, inverse.to_formatted_string()


def _run_complex(args: argparse.Namespace) -> tuple[dict[str, Any], str]:
    value = Complex.parse(args.value)
    if args.pow is not None:
        operation, result = "pow", value.pow(Complex.parse(args.pow))
    elif args.sqrt:
        operation, result = "sqrt", value.sqrt()
    elif args.cbrt:
        operation, result = "cbrt", value.cbrt()
    elif args.ln:
        operation, result = "ln", value.ln()
    else:
        operation, result = "value", value
    payload = {
        "value": value.to_string(),
        "operation": operation,
        "result": result.to_string(),
        "modulus": result.modulus,
        "argument": result.argument,
    }
    return payload, result.to_string()


_COMMANDS = {
    "roots": _run_roots,
    "det": _run_det,
    "inverse": _run_inverse,
    "complex": _run_complex,
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.verbose:
        settings = settings.model_copy(update={"LOG_LEVEL": "DEBUG"})
    setup_logging(settings)
    logger.debug("Running command %s", args.command)

    try:
        payload, text = _COMMANDS[args.command](args)
    except AnalyticMathError as exc:
        error = error_payload(exc)
        if args.json:
            print(json.dumps(error))
        else:
            print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(payload))
    else:
        print(text)

    # No inverse is reported as a failed command
    if args.command == "inverse" and payload.get("inverse") is None:
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
