# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the nupack CLI.

Each function corresponds to one subcommand and returns an exit code from
nupack.cli.exit_codes. No print() calls, everything goes through the
structured logger.
"""

import argparse
import logging
from pathlib import Path
from typing import Optional

from nupack.cli.exit_codes import CONFIG_ERROR, RUNTIME_ERROR, SUCCESS, USER_ERROR, VALIDATION_ERROR
from nupack.config.exceptions import ConfigError
from nupack.config.loader import load_config, resolve_relative
from nupack.config.schema import PackConfig
from nupack.logging.logger import get_logger
from nupack.package import NoValidTargetsError, PackageRequest, PackError, pack
from nupack.targets.registry import Target
from nupack.utils.filesystem import atomic_write_bytes, safe_read_bytes
from nupack.utils.hashing import compute_sha256_bytes
from nupack.utils.version import VersionError, dev_version


def _load(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, Optional[PackConfig], logging.Logger]:
    """
    Shared setup: load the config (if given) and build the command's logger.

    Returns (exit_code, config, logger). If exit_code is not SUCCESS the
    caller should return it immediately.
    """
    logger_name = f"nupack.cli.{command_name}"

    if args.config is None:
        logger = get_logger(logger_name, log_level=args.log_level or "INFO")
        logger.debug("No config provided", extra={"command": command_name})
        return SUCCESS, None, logger

    config_path = Path(args.config)
    try:
        config = load_config(config_path)
    except ConfigError as err:
        logger = get_logger(logger_name, log_level=args.log_level or "INFO")
        logger.error(
            "Configuration error",
            extra={"command": command_name, "error": str(err)},
        )
        return CONFIG_ERROR, None, logger

    global_config = config.global_config
    log_file = None
    if global_config.log_file is not None:
        log_file = resolve_relative(config_path, global_config.log_file)

    # An explicit --log-level wins over the config.
    logger = get_logger(
        logger_name,
        log_level=args.log_level or global_config.log_level,
        log_file=log_file,
    )
    return SUCCESS, config, logger


def handle_pack(args: argparse.Namespace) -> int:
    """Assemble a .nupkg from the package section of the config and write it out."""
    exit_code, config, logger = _load(args, "pack")
    if exit_code != SUCCESS:
        return exit_code

    if config is None or config.package is None:
        logger.error(
            "A config with a 'package' section is required",
            extra={"command": "pack"},
        )
        return USER_ERROR

    config_path = Path(args.config)
    package_config = config.package

    manifest_path = resolve_relative(config_path, package_config.manifest)
    try:
        manifest = safe_read_bytes(manifest_path)
    except OSError as err:
        logger.error("Cannot read manifest", extra={"path": str(manifest_path), "error": str(err)})
        return VALIDATION_ERROR

    version = package_config.version
    if args.dev or package_config.dev_build:
        try:
            version = dev_version(version)
        except VersionError as err:
            logger.error("Cannot derive dev version", extra={"version": version, "error": str(err)})
            return VALIDATION_ERROR

    libs = {
        target: resolve_relative(config_path, path)
        for target, path in package_config.targets.items()
    }

    try:
        request = PackageRequest(
            id=package_config.id, version=version, manifest=manifest, libs=libs
        )
        package = pack(request)
    except NoValidTargetsError as err:
        logger.error("Nothing to pack", extra={"package_id": package_config.id, "error": str(err)})
        return USER_ERROR
    except PackError as err:
        logger.error(
            "Pack failed",
            extra={"package_id": package_config.id, "error": str(err)},
            exc_info=True,
        )
        return RUNTIME_ERROR

    if args.dry_run:
        logger.info(
            "Dry run, package not written",
            extra={"package_name": package.name, "rids": list(package.rids), "size": len(package.buf)},
        )
        return SUCCESS

    output_dir = Path(args.output_dir) if args.output_dir else resolve_relative(
        config_path, package_config.output_dir
    )
    output_path = output_dir / package.name
    try:
        atomic_write_bytes(output_path, package.buf)
    except OSError as err:
        logger.error("Cannot write package", extra={"path": str(output_path), "error": str(err)})
        return RUNTIME_ERROR

    logger.info(
        "Package written",
        extra={
            "path": str(output_path),
            "rids": list(package.rids),
            "size": len(package.buf),
            "sha256": compute_sha256_bytes(package.buf),
        },
    )
    return SUCCESS


def handle_targets(args: argparse.Namespace) -> int:
    """Log every supported target with its runtime identifier, plus the host's."""
    exit_code, _, logger = _load(args, "targets")
    if exit_code != SUCCESS:
        return exit_code

    for target in Target:
        if target.is_packageable():
            logger.info("Supported target", extra={"target": target.name, "rid": target.rid()})

    host = Target.local()
    logger.info("Host target", extra={"target": host.name, "rid": host.rid()})
    return SUCCESS
