"""
Command line entry point.

    ddtstat [-k|-m|-g|-t] [-p] [-v] {mem|disk} <pool>

Prints one integer on stdout. Diagnostics go to stderr. Exit status is 0 on
success and 1 on any failure.
"""
import argparse
import sys
from typing import List, Optional, TextIO

from .config import DdtStatConfig, get_config
from .core.calculator import select_output
from .core.exceptions.validation_exceptions import (
    InvalidOption,
    InvalidSubcommand,
    MissingDependency
)
from .core.value_objects.metric_request import Subcommand, Unit
from .core.interfaces.pool_query import IPoolQuery
from .factories.service_factory import ServiceFactoryBuilder
from .infrastructure.logging.structured_logger import StructuredLogger


EXIT_SUCCESS = 0
EXIT_FAILURE = 1

DESCRIPTION = (
    "Report the in-core size of a pool's dedup table (mem) or the space "
    "saved by deduplication (disk)."
)

EPILOG = (
    "Unit flags override each other; the last one given wins. "
    "With -p the result is a percentage of host memory (mem) or pool size (disk)."
)


class HelpRequested(Exception):
    """-h was given; the caller prints help to its own stdout."""


class _HelpAction(argparse.Action):

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        raise HelpRequested()


class _ArgumentParser(argparse.ArgumentParser):
    """Raises InvalidOption instead of exiting with status 2."""

    def error(self, message):
        raise InvalidOption(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="ddtstat", description=DESCRIPTION, epilog=EPILOG, add_help=False)
    parser.add_argument("-h", "--help", action=_HelpAction, help="show this help message and exit")

    units = parser.add_argument_group("units")
    units.add_argument("-b", "--bytes", dest="divisor", action="store_const",
                       const=Unit.BYTES.value, help="report bytes (default)")
    units.add_argument("-k", "--kib", dest="divisor", action="store_const",
                       const=Unit.KIB.value, help="report KiB")
    units.add_argument("-m", "--mib", dest="divisor", action="store_const",
                       const=Unit.MIB.value, help="report MiB")
    units.add_argument("-g", "--gib", dest="divisor", action="store_const",
                       const=Unit.GIB.value, help="report GiB")
    units.add_argument("-t", "--tib", dest="divisor", action="store_const",
                       const=Unit.TIB.value, help="report TiB")
    parser.set_defaults(divisor=Unit.BYTES.value)

    parser.add_argument("-p", "--percent", action="store_true",
                        help="report a percentage of host memory (mem) or pool size (disk)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="lower the diagnostic threshold (repeatable)")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="only report fatal diagnostics")

    parser.add_argument("subcommand", help="metric to report: mem or disk")
    parser.add_argument("pool", help="pool name")
    return parser


def parse_subcommand(value: str) -> Subcommand:
    try:
        return Subcommand(value)
    except ValueError:
        raise InvalidSubcommand(value, [s.value for s in Subcommand]) from None


def main(argv: Optional[List[str]] = None,
         stdout: Optional[TextIO] = None,
         stderr: Optional[TextIO] = None,
         pool_query: Optional[IPoolQuery] = None,
         config: Optional[DdtStatConfig] = None) -> int:
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr
    config = config or get_config()

    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except InvalidOption as e:
        StructuredLogger(config=config.log, stream=stderr).error(str(e))
        parser.print_usage(stderr)
        return EXIT_FAILURE
    except HelpRequested:
        parser.print_help(stdout)
        return EXIT_SUCCESS

    log_config = config.log.with_verbosity(args.verbose, args.quiet)
    builder = ServiceFactoryBuilder() \
        .with_command_timeout(config.executor.command_timeout) \
        .with_safe_path(config.executor.safe_path) \
        .with_zpool_binary(config.executor.zpool_binary) \
        .with_log_config(log_config) \
        .with_log_stream(stderr)
    if pool_query is not None:
        builder = builder.with_pool_query(pool_query)
    factory = builder.build()
    logger = factory.get_logger()

    for warning in config.warnings:
        logger.warning(warning)
    logger.debug("Configuration", config.get_summary())

    try:
        subcommand = parse_subcommand(args.subcommand)
    except InvalidSubcommand as e:
        logger.error(str(e))
        return EXIT_FAILURE

    if factory.uses_live_query and not factory.executor.is_available("zpool"):
        logger.fatal(str(MissingDependency(config.executor.zpool_binary, config.executor.safe_path)))
        return EXIT_FAILURE

    logger.add_context("pool", args.pool)
    service = factory.create_dedup_service()
    result = service.get_metric(subcommand, args.pool, args.divisor, args.percent)

    if result.is_failure:
        error = result.error
        fields = error.to_dict()
        fields.pop("message", None)
        logger.fatal(str(error), fields)
        return EXIT_FAILURE

    print(select_output(result.value), file=stdout)
    return EXIT_SUCCESS


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
