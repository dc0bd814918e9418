"""
numint — одноразовый запуск численного интегрирования из командной строки

    numint "x^2" --lower 0 --upper 1 -n 1000
    numint "sqrt(1-x^2)" --upper 1 --probe
    numint --expression=-x^2        (или: numint -- "-x^2")
    numint --self-test

Коды возврата:
    0 — вычисление выполнено (ошибки отдельных методов печатаются в отчёте)
    1 — эталонная задача --self-test не прошла
    2 — выражение не принято (LexError / ParseError) или не задано;
        argparse использует тот же код для ошибок в аргументах командной строки
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from src.core.expression.errors import ExpressionError
from src.integration import (
    DEFAULT_LOWER_BOUND,
    DEFAULT_SUBDIVISIONS,
    DEFAULT_UPPER_BOUND,
    IntegrationReport,
    NumericalIntegrator,
    run_reference_problems,
)

EXIT_OK = 0
EXIT_SELF_TEST_FAILED = 1
EXIT_BAD_EXPRESSION = 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="numint",
        description="Numerical integration: trapezoidal, Simpson's and midpoint rules",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("expression", nargs="?",
                   help="f(x), e.g. 'x^2 + 2*x + 1' or 'exp(-x^2)'; "
                        "put '--' before an expression starting with '-'")
    p.add_argument("--expression", "-e", dest="expression_option", metavar="EXPR",
                   help="f(x) as an option, e.g. --expression=-x^2")
    p.add_argument("--lower", "-a", type=float, default=DEFAULT_LOWER_BOUND,
                   help="lower bound")
    p.add_argument("--upper", "-b", type=float, default=DEFAULT_UPPER_BOUND,
                   help="upper bound (swapped with --lower if smaller)")
    p.add_argument("--subdivisions", "-n", type=int, default=DEFAULT_SUBDIVISIONS,
                   help="number of subdivisions (at least 1)")
    p.add_argument("--probe", action="store_true",
                   help="also print f(x) at the standard probe points")
    p.add_argument("--self-test", action="store_true",
                   help="run the built-in reference integrals and exit")
    p.add_argument("--log-level", default="WARNING", type=str.upper,
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="logging level")
    return p


def format_report(report: IntegrationReport) -> str:
    lines = [
        "========== Integration Results ==========",
        f"Function: f(x) = {report.expression}",
        f"Bounds: [{report.lower_bound}, {report.upper_bound}]",
        f"Subdivisions: {report.subdivisions}",
        "-----------------------------------------",
        f"Trapezoidal Rule:  {report.trapezoidal.describe()}",
        f"Simpson's Rule:    {report.simpson.describe()}",
        f"Midpoint Rule:     {report.midpoint.describe()}",
        "=========================================",
    ]
    return "\n".join(lines)


def _run_self_test() -> int:
    failed = 0
    for outcome in run_reference_problems():
        problem = outcome.problem
        print(f"\n{problem.title}: ∫[{problem.lower_bound}, {problem.upper_bound}] "
              f"{problem.expression} dx (exact: {problem.exact:.10g})")
        print(format_report(outcome.report))
        if not outcome.passed:
            failed += 1
            print(f"FAILED: max abs error {outcome.max_abs_error} > {outcome.tolerance}")
    return EXIT_SELF_TEST_FAILED if failed else EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.self_test:
        return _run_self_test()

    expression = args.expression_option or args.expression
    if not expression:
        print("Error: an expression is required (or use --self-test)", file=sys.stderr)
        return EXIT_BAD_EXPRESSION

    try:
        integrator = NumericalIntegrator.from_expression(
            expression,
            lower_bound=args.lower,
            upper_bound=args.upper,
            subdivisions=args.subdivisions,
        )
    except ExpressionError as e:
        print(f"Error parsing expression: {e.message}", file=sys.stderr)
        print("Tip: use * for multiplication (2*x, not 2x)", file=sys.stderr)
        return EXIT_BAD_EXPRESSION
    except ValidationError as e:
        print(f"Invalid integration settings: {e.errors()[0]['msg']}", file=sys.stderr)
        return EXIT_BAD_EXPRESSION

    for warning in integrator.settings.adjustments:
        print(f"Note: {warning.message}")

    info = integrator.describe()
    print(f"Postfix: {info.postfix}")
    print(format_report(integrator.compute_all()))

    if args.probe:
        print("\n--- Function Test Points ---")
        for probe in integrator.probe():
            if probe.evaluation.ok:
                print(f"f({probe.x:.6g}) = {probe.evaluation.value:.10g}")
            else:
                print(f"f({probe.x:.6g}) = Error: {probe.evaluation.error.message}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
