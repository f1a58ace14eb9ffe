# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for nupack.

Every operation is a subcommand of `nupack`. The global options (--config,
--log-level, --dry-run) are inherited by every subcommand through argparse's
parent parser mechanism.

Usage:
    nupack pack --config pack.yaml
    nupack pack --config pack.yaml --dev --output-dir dist
    nupack targets
"""

import argparse
import sys

from nupack.cli.commands import handle_pack, handle_targets
from nupack.cli.exit_codes import USER_ERROR


def _build_global_parser(suppress_defaults: bool = False) -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    add_help=False so help text doesn't collide between the parent and the
    subcommand parsers. The subcommand copy uses SUPPRESS defaults, so an
    option given before the subcommand (`nupack --config x.yaml pack`) isn't
    reset by the subparser.
    """

    def _default(value: object) -> object:
        return argparse.SUPPRESS if suppress_defaults else value

    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=_default(None),
        help="Path to YAML pack configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=_default(None),
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (overrides the config).",
    )
    parent.add_argument(
        "--dry-run",
        action="store_true",
        default=_default(False),
        dest="dry_run",
        help="Assemble the package but don't write it.",
    )
    return parent


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    """Register each subcommand and point it at its handler via set_defaults(func=...)."""
    pack_parser = subparsers.add_parser(
        "pack", parents=[parent], help="Pack native libraries into a .nupkg."
    )
    pack_parser.set_defaults(func=handle_pack)
    pack_parser.add_argument(
        "--dev",
        action="store_true",
        default=False,
        help="Append a timestamped dev pre-release tag to the version.",
    )
    pack_parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        dest="output_dir",
        help="Directory to write the .nupkg to (overrides the config).",
    )

    targets_parser = subparsers.add_parser(
        "targets", parents=[parent], help="List supported targets and the host target."
    )
    targets_parser.set_defaults(func=handle_targets)


def build_parser() -> argparse.ArgumentParser:
    """Root parser with global options, usable before or after the subcommand."""
    root_parser = argparse.ArgumentParser(
        prog="nupack",
        description="Pack pre-built native libraries into a NuGet package.",
        parents=[_build_global_parser()],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, _build_global_parser(suppress_defaults=True))
    return root_parser


def main() -> None:
    """
    Main CLI entrypoint, referenced by pyproject.toml's [project.scripts].

    With no subcommand we show help and exit with USER_ERROR.
    """
    root_parser = build_parser()
    args = root_parser.parse_args()

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
