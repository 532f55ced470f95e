#!/usr/bin/env python
import argparse
import logging
import pathlib
import sys

from aff2spc.classes.enums import MappingRule
from aff2spc.config import load_options
from aff2spc.convert import convert
from aff2spc.parser.aff import AFFParser
from aff2spc.report import build_report
from aff2spc.validation import ValidationReport, validate_spc_text
from aff2spc.writer import dumps_spc

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_INVALID = 2
EXIT_IO = 3

logger = logging.getLogger(__name__)


def _configure_logging(level_arg: str | None) -> None:
    log_level = logging.WARNING
    if level_arg is not None:
        try:
            log_level_int = int(level_arg)
            if log_level_int in logging._levelToName:
                log_level = log_level_int
        except ValueError:
            log_level_str = level_arg.upper()
            log_level = logging._nameToLevel.get(log_level_str, log_level)
    logging.basicConfig(format="[%(levelname)s %(asctime)s] %(filename)s: %(message)s", level=log_level)


def _print_report(prog: str, report: ValidationReport) -> None:
    for message in report.errors:
        print(f"{prog}: error: {message}")
    for message in report.warnings:
        print(f"{prog}: warning: {message}")


def _validate_only(prog: str, fn: str) -> int:
    try:
        text = pathlib.Path(fn).read_text(encoding="utf-8")
    except OSError as err:
        print(f"{prog}: {type(err).__name__}: {err}")
        print(f"{prog}: error: unable to read file, or no such file: {fn!r}")
        return EXIT_IO

    report = validate_spc_text(text)
    _print_report(prog, report)
    if not report.ok:
        return EXIT_INVALID
    print(f"{fn}: OK ({len(report.warnings)} warning(s))")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Converts an Arcaea AFF chart to an In Falsus SPC chart.")
    parser.add_argument("filename", nargs="?", help="input AFF file to convert")
    parser.add_argument("-o", "--output", action="store", help="output SPC file. defaults to the input with .spc suffix")
    parser.add_argument("--options", action="store", help="JSON file with conversion options")
    parser.add_argument(
        "--rule",
        action="store",
        choices=[rule.value for rule in MappingRule],
        help="mapping rule. overrides the value from the options file",
    )
    parser.add_argument("--no-validate", action="store_true", help="write the output without validating it first")
    parser.add_argument("--report", action="store_true", help="print a summary of the converted chart")
    parser.add_argument("--validate-only", action="store", metavar="SPC_FILE", help="validate an existing SPC file")
    parser.add_argument("--log-level", action="store", help="change logging level. invalid values are silently ignored")
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    if args.validate_only is not None:
        return _validate_only(parser.prog, args.validate_only)

    if args.filename is None:
        parser.print_usage()
        print(f"{parser.prog}: error: an input file is required unless --validate-only is given")
        return EXIT_USAGE

    try:
        options = load_options(pathlib.Path(args.options) if args.options else None)
    except (OSError, ValueError) as err:
        print(f"{parser.prog}: {type(err).__name__}: {err}")
        return EXIT_USAGE
    if args.rule is not None:
        options = options.model_copy(update={"mapping_rule": MappingRule(args.rule)})

    fpath = pathlib.Path(args.filename)
    try:
        with fpath.open("r", encoding="utf-8-sig") as f:
            chart = AFFParser().parse(f)
    except OSError as err:
        print(f"{parser.prog}: {type(err).__name__}: {err}")
        print(f"{parser.prog}: error: unable to read file, or no such file: {args.filename!r}")
        return EXIT_IO

    result = convert(chart, options)
    text = dumps_spc(result.events)

    if args.no_validate:
        for message in result.warnings:
            logger.warning(message)
    else:
        report = validate_spc_text(text)
        for message in report.warnings:
            logger.warning(message)
        if not report.ok:
            _print_report(parser.prog, ValidationReport(errors=report.errors))
            print(f"{parser.prog}: error: output failed validation, nothing was written")
            return EXIT_INVALID

    out_path = pathlib.Path(args.output) if args.output else fpath.with_suffix(".spc")
    try:
        out_path.write_text(text, encoding="utf-8", newline="\n")
    except OSError as err:
        print(f"{parser.prog}: {type(err).__name__}: {err}")
        return EXIT_IO
    logger.info(f"wrote {len(result.events)} events to {out_path}")

    if args.report:
        print(build_report(text, options), end="")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
