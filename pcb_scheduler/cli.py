from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHM_LABELS, resolve_algorithm, run_algorithm
from .errors import InvalidArgumentError, SchedulerError
from .metrics import format_result
from .models import ScheduleResult
from .pcb_io import load_process_control_blocks, load_workload, write_process_control_blocks

DEFAULT_COMPARE = ["FCFS", "SJF", "P", "RR", "SRT"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pcb-scheduler",
        description="CPU scheduling simulator over binary PCB files (FCFS, SJF, P, RR, SRT).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging from the loader and the scheduler.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a PCB file.")
    run_parser.add_argument("pcb_file", help="Path to the binary PCB file.")
    run_parser.add_argument("algorithm", help="Algorithm to use (FCFS, SJF, P, RR, SRT).")
    run_parser.add_argument(
        "quantum",
        nargs="?",
        type=int,
        default=None,
        help="Time quantum, required for RR and ignored otherwise.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same PCB file and compare their metrics.",
    )
    compare_parser.add_argument("pcb_file", help="Path to the binary PCB file.")
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=DEFAULT_COMPARE,
        help="Algorithms to compare (default: FCFS SJF P RR SRT).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=2,
        help="Time quantum used for RR when included (default: 2).",
    )

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a JSON or CSV workload into a binary PCB file.",
    )
    convert_parser.add_argument("workload", help="Path to JSON or CSV workload file.")
    convert_parser.add_argument("output", help="Path of the binary PCB file to write.")

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _run_one(pcb_file: str, algorithm: str, quantum: int | None) -> ScheduleResult:
    key = resolve_algorithm(algorithm)
    if key == "rr" and quantum is None:
        raise InvalidArgumentError("Round Robin requires a quantum value (usage: run <pcb file> RR <quantum>)")
    ready_queue = load_process_control_blocks(pcb_file)
    return run_algorithm(key, ready_queue, quantum=quantum if key == "rr" else None)


def _print_result(console: Console, algorithm: str, result: ScheduleResult) -> None:
    summary = format_result(result)

    console.print(f"[bold]Algorithm:[/bold] {escape(algorithm)}")
    console.print(f"[bold]Average Waiting Time:[/bold] {summary['avg_waiting']}")
    console.print(f"[bold]Average Turnaround Time:[/bold] {summary['avg_turnaround']}")
    console.print(f"[bold]Total Run Time:[/bold] {summary['total_run_time']}")


def _run_compare(console: Console, pcb_file: str, algorithms: List[str], quantum: int) -> None:
    """
    Load the PCB file once per algorithm (each run drains its queue) and print
    the summary table.
    """
    summary_table = Table(title=f"Algorithm comparison: {escape(pcb_file)}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Total run time", justify="right")

    for alg in algorithms:
        key = resolve_algorithm(alg)
        q = quantum if key == "rr" else None
        result = _run_one(pcb_file, key, q)
        summary = format_result(result)
        summary_table.add_row(
            ALGORITHM_LABELS[key],
            "" if q is None else str(q),
            summary["avg_waiting"],
            summary["avg_turnaround"],
            summary["total_run_time"],
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    console = Console()
    err_console = Console(stderr=True)

    try:
        if args.command == "run":
            result = _run_one(args.pcb_file, args.algorithm, args.quantum)
            _print_result(console, args.algorithm, result)
            return 0

        if args.command == "compare":
            _run_compare(console, args.pcb_file, args.algorithms, args.quantum)
            return 0

        if args.command == "convert":
            pcbs = load_workload(Path(args.workload))
            count = write_process_control_blocks(args.output, pcbs)
            console.print(f"Wrote {count} PCBs to [green]{escape(args.output)}[/green]")
            return 0
    except SchedulerError as exc:
        err_console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
