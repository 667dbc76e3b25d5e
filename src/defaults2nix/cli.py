"""``defaults2nix`` command line entry point.

Reads preferences through the macOS ``defaults`` command (or a saved dump
given with ``--input``) and writes Nix attribute sets.
"""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO

from .config import FILTER_NAMES, ParseConfig
from .convert import (
    convert_defaults,
    convert_defaults_with_value,
    extract_bundle_ids,
    read_source,
    sanitize_filename,
)
from .errors import (
    Defaults2NixError,
    DefaultsCommandError,
    UnsupportedPlatformError,
    UsageError,
)

logger = logging.getLogger(__name__)

EPILOG = """\
Examples:
  defaults2nix com.apple.Safari
  defaults2nix com.apple.Safari -o safari.nix
  defaults2nix --all -o all-defaults.nix
  defaults2nix --all --filter dates -o all-defaults.nix
  defaults2nix --all --filter state,uuids -o all-defaults.nix
  defaults2nix --split -o ./configs/
  defaults2nix --input dump.txt --split -o ./configs/
  sudo defaults2nix --all -o all-defaults.nix  # for system configs
"""


# ---------------------------------------------------------------------------
# The defaults command
# ---------------------------------------------------------------------------

def check_platform() -> None:
    if sys.platform != "darwin":
        raise UnsupportedPlatformError(
            "defaults2nix is designed for macOS only (requires 'defaults' command).\n"
            f"Current platform: {sys.platform}"
        )


def run_defaults(*args: str) -> str:
    """Run ``defaults <args>`` and return its standard output."""
    command = ["defaults", *args]
    logger.debug("running %s", " ".join(command))
    try:
        proc = subprocess.run(command, capture_output=True, text=True)
    except OSError as exc:
        raise DefaultsCommandError(command, str(exc)) from exc
    if proc.returncode != 0:
        raise DefaultsCommandError(command, proc.stderr, proc.returncode)
    return proc.stdout


# ---------------------------------------------------------------------------
# Argument handling
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="defaults2nix",
        description="A tool for converting macOS defaults into Nix templates.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("domain", nargs="?",
                        help="The domain to convert (e.g., com.apple.dock).")
    parser.add_argument("--all", action="store_true",
                        help="Process all defaults from `defaults read`")
    parser.add_argument("--split", action="store_true",
                        help="Split defaults into individual Nix files by domain")
    parser.add_argument("--filter", default="", metavar="LIST",
                        help="Comma-separated list of items to filter out "
                             f"({','.join(FILTER_NAMES)})")
    parser.add_argument("-o", "--out", type=Path,
                        help="Output file or directory path")
    parser.add_argument("-i", "--input", metavar="PATH",
                        help="Read a saved `defaults read` dump instead of running "
                             "`defaults` ('-' for stdin)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log filtering decisions to stderr")
    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Reject flag combinations that make no sense; prepare ``--out``."""
    if not args.all and not args.split and not args.domain and not args.input:
        raise UsageError("Nothing to convert: give a domain, --all, --split or --input.")
    if (args.all or args.split) and args.domain:
        raise UsageError("Cannot use --all or --split with a domain argument.")
    if args.input and args.domain:
        raise UsageError("Cannot use --input with a domain argument.")
    if args.all and args.split:
        raise UsageError("Cannot use --all and --split at the same time.")

    if args.split:
        if args.out is None:
            raise UsageError("--out is mandatory when --split is used.")
        if not args.out.exists():
            try:
                args.out.mkdir(parents=True)
            except OSError as exc:
                raise Defaults2NixError(
                    f"Error creating output directory {args.out}: {exc}"
                ) from exc
        elif not args.out.is_dir():
            raise UsageError(f"--out path {args.out} must be a directory when --split is used.")
    elif args.out is not None and args.out.is_dir():
        raise UsageError(f"--out path {args.out} must be a file when not using --split.")


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def write_result(text: str, out: Path | None) -> None:
    if out is None:
        print(text)
        return
    try:
        out.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise Defaults2NixError(f"Error writing to file {out}: {exc}") from exc


def _is_empty_output(text: str) -> bool:
    return text.strip() in ("", "{}")


@dataclass
class SplitReport:
    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)

    def emit(self, out_dir: Path, dest: IO[str]) -> int:
        """Print the summary to *dest*; return the exit status."""
        if not self.written:
            print("Error: No domains could be processed successfully.", file=dest)
            if self.failed:
                print(f"Domains with errors: {', '.join(self.failed)}", file=dest)
            return 1
        if self.skipped:
            print(f"Info: Skipped {len(self.skipped)} empty domains: "
                  f"{', '.join(self.skipped)}", file=dest)
        if self.failed:
            print(f"Warning: Failed to process {len(self.failed)} domains: "
                  f"{', '.join(self.failed)}", file=dest)
        print(f"Successfully processed {len(self.written)} domains to {out_dir}", file=dest)
        return 0


def _write_domain(report: SplitReport, domain: str, text: str, out_dir: Path, dest: IO[str]) -> None:
    if _is_empty_output(text):
        report.skipped.append(domain)
        return
    path = out_dir / f"{sanitize_filename(domain)}.nix"
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        print(f"Warning: Failed to write {path}: {exc}", file=dest)
        return
    report.written.append(domain)


def split_domains(out_dir: Path, config: ParseConfig, dest: IO[str]) -> SplitReport:
    """One ``defaults read <domain>`` per entry of ``defaults domains``."""
    report = SplitReport()
    for domain in run_defaults("domains").split(", "):
        domain = domain.strip()
        if not domain:
            continue
        try:
            text = convert_defaults(run_defaults("read", domain), config)
        except DefaultsCommandError as exc:
            logger.debug("%s", exc)
            report.failed.append(domain)
            continue
        _write_domain(report, domain, text, out_dir, dest)
    return report


def split_dump(text: str, out_dir: Path, config: ParseConfig, dest: IO[str]) -> SplitReport:
    """Split an already captured ``defaults read`` dump by top-level key."""
    report = SplitReport()
    _, tree = convert_defaults_with_value(text, config)
    for domain, value in extract_bundle_ids(tree).items():
        _write_domain(report, domain.strip('"'), value.to_nix(0, config), out_dir, dest)
    return report


def _read_input(path: str) -> str:
    if path == "-":
        return read_source(sys.stdin)
    try:
        with open(path, encoding="utf-8") as fh:
            return read_source(fh)
    except OSError as exc:
        raise Defaults2NixError(f"cannot read '{path}': {exc}") from exc


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """``defaults2nix`` / ``python -m defaults2nix``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = ParseConfig.from_filter(args.filter)
        if not args.input:
            check_platform()
        validate_args(args)

        if args.input:
            text = _read_input(args.input)
            if args.split:
                return split_dump(text, args.out, config, sys.stderr).emit(args.out, sys.stderr)
            write_result(convert_defaults(text, config), args.out)
            return 0

        if args.split:
            return split_domains(args.out, config, sys.stderr).emit(args.out, sys.stderr)
        if args.all:
            output = run_defaults("read")
        else:
            output = run_defaults("read", args.domain)
        write_result(convert_defaults(output, config), args.out)
        return 0

    except UsageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    except Defaults2NixError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
