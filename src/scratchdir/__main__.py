"""Interface for ``python -m scratchdir``."""

import sys
from argparse import ArgumentParser
from collections.abc import Sequence

from . import __version__
from .core import (
    GLOBAL_PROVIDER_REGISTRY,
    DirectoryProviderError,
    ProviderSettings,
    config_scratchdir_logging,
    load_provider_settings,
    provider_factory_from_settings,
)

__all__ = ["main"]


def _make_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="scratchdir")
    parser.add_argument("-v", "--version", action="version", version=__version__)
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        default="WARNING",
        help="Level to log at",
    )
    subparsers = parser.add_subparsers(dest="command")
    create = subparsers.add_parser(
        "create", help="Create temporary directories and print their paths"
    )
    source = create.add_mutually_exclusive_group()
    source.add_argument(
        "--provider",
        choices=GLOBAL_PROVIDER_REGISTRY.names(),
        help="Provider variant to use, default standard",
    )
    source.add_argument("--config", help="YAML file holding provider settings")
    create.add_argument(
        "-n", "--count", type=int, default=1, help="How many directories to make"
    )
    create.add_argument(
        "--context", default="cli", help="Invocation context to pass to the provider"
    )
    return parser


def main(args: Sequence[str] | None = None) -> None:
    parser = _make_parser()
    parsed = parser.parse_args(args)
    if parsed.command is None:
        parser.print_help()
        return
    if parsed.count < 1:
        parser.error("--count must be at least 1")
    config_scratchdir_logging(file=sys.stderr, level=parsed.log_level)

    try:
        if parsed.config:
            settings = load_provider_settings(parsed.config)
        else:
            settings = ProviderSettings(provider=parsed.provider or "standard")
        factory = provider_factory_from_settings(settings)
        with factory() as provider:
            for _ in range(parsed.count):
                print(provider.create_directory(parsed.context))
    except (DirectoryProviderError, OSError, ValueError) as e:
        print(f"scratchdir: error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
