"""
Command-line interface for the Jelinski-Moranda estimator.

Usage:
    jmrel estimate [VALUES ...] [--file FILE] [--cumulative] [--json] [--output FILE]
    jmrel plot [VALUES ...] [--file FILE] --save PATH
    jmrel server [--port PORT]

With no values and no file, the intervals are read from an interactive
prompt.
"""

import argparse
import sys

from .data import EmptySequenceError
from .parsing import parse_intervals
from .solver import SolverConfig


def _read_text(args) -> str:
    """Collect the raw input text from arguments, a file or the prompt."""
    if args.values:
        return " ".join(args.values)
    if args.file:
        with open(args.file, encoding="utf-8") as f:
            return f.read()

    print("Jelinski-Moranda Model")
    print("Enter intervals Xi (separated by spaces, or by a comma and a space):")
    try:
        return input()
    except EOFError:
        return ""


def _solver_config(args) -> SolverConfig:
    return SolverConfig(
        tolerance=args.tolerance,
        max_bisections=args.max_bisections,
    )


def cmd_estimate(args):
    """Fit the model and print the estimate."""
    from .model import JelinskiMorandaModel, format_time

    seq = parse_intervals(_read_text(args), cumulative=args.cumulative)
    model = JelinskiMorandaModel(_solver_config(args))
    result = model.fit(seq)

    if args.output:
        result.save(args.output)
        print(f"Results saved to {args.output}")
    elif args.json:
        print(result.to_json())
    else:
        print(result.summary())
        if args.steps:
            forecast = model.predict_intervals(args.steps)
            if forecast:
                print(f"Expected next {len(forecast)} intervals:")
                for j, x in enumerate(forecast, start=1):
                    print(f"  X({result.n + j}) = {format_time(x)}")

    return 0


def cmd_plot(args):
    """Plot observed intervals and the fitted model."""
    from .model import JelinskiMorandaModel
    from .visualization import plot_intervals

    seq = parse_intervals(_read_text(args), cumulative=args.cumulative)
    model = JelinskiMorandaModel(_solver_config(args))
    model.fit(seq)
    plot_intervals(model, steps=args.steps, save_path=args.save)
    print(f"Plot saved to {args.save}")
    return 0


def cmd_server(args):
    """Start web server."""
    try:
        import uvicorn
        uvicorn.run(
            "jmrel.api:app",
            host="0.0.0.0",
            port=args.port,
            reload=args.reload,
        )
    except ImportError:
        print("Web dependencies not installed. Run: pip install jmrel[web]")
        return 1
    return 0


def _add_input_arguments(parser):
    parser.add_argument("values", nargs="*", help="Interval values")
    parser.add_argument("-f", "--file", help="Read intervals from a text file")
    parser.add_argument("--cumulative", action="store_true",
                        help="Values are cumulative failure times")
    parser.add_argument("-s", "--steps", type=int, default=0,
                        help="Number of future intervals to forecast")
    parser.add_argument("--tolerance", type=float, default=SolverConfig.tolerance,
                        help="Root tolerance |f(B)|")
    parser.add_argument("--max-bisections", type=int,
                        default=SolverConfig.max_bisections,
                        help="Bisection iteration limit")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jmrel",
        description="Jelinski-Moranda software reliability estimation",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # estimate
    p_estimate = subparsers.add_parser("estimate", help="Estimate B, K and predictions")
    _add_input_arguments(p_estimate)
    p_estimate.add_argument("--json", action="store_true", help="Print JSON")
    p_estimate.add_argument("-o", "--output", help="Output JSON file")

    # plot
    p_plot = subparsers.add_parser("plot", help="Plot intervals and fitted model")
    _add_input_arguments(p_plot)
    p_plot.add_argument("--save", required=True, help="Image file to write")

    # server
    p_server = subparsers.add_parser("server", help="Start web server")
    p_server.add_argument("-p", "--port", type=int, default=8000)
    p_server.add_argument("--reload", action="store_true")

    return parser


COMMANDS = {
    "estimate": cmd_estimate,
    "plot": cmd_plot,
    "server": cmd_server,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(0)

    try:
        sys.exit(command(args))
    except (EmptySequenceError, OSError, ImportError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
