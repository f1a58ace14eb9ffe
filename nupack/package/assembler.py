# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Package assembler: turns a PackageRequest into a finished `.nupkg`.

Archive layout:

    _rels/.rels                          relationship to the manifest
    [Content_Types].xml                  content type declarations
    {id}.nuspec                          manifest, verbatim
    runtimes/{rid}/native/{id}{ext}      one per packageable target

The whole archive is built in memory by a private ArchiveWriter. Any failure
aborts the build and discards the buffer: the caller gets either a complete
Package or an exception, never a partial archive. There's no retry.
"""

import logging
import os
from pathlib import PurePath
from typing import Union

from nupack.logging.logger import get_logger
from nupack.package import descriptors
from nupack.package.errors import (
    ArchiveFaultError,
    NoValidTargetsError,
    WriteLibError,
)
from nupack.package.models import (
    NativeLibrarySet,
    Package,
    PackageRequest,
    manifest_part_name,
    package_file_name,
)
from nupack.package.parts import InvalidPartNameError, normalize_part_name
from nupack.package.writer import COMPRESSION, ArchiveWriter, ArchiveWriterError
from nupack.targets.registry import Target

_logger: logging.Logger = get_logger(__name__)

COPY_BUFFER_SIZE = 65536  # 64 KiB


def _packageable(libs: NativeLibrarySet) -> list[tuple[str, Union[str, os.PathLike]]]:
    """(rid, path) for every packageable target, in canonical target order."""
    selected: list[tuple[str, Union[str, os.PathLike]]] = []
    for target in Target.ordered(libs):
        rid = target.rid()
        if rid is None:
            _logger.debug("Skipping unpackageable target", extra={"target": target.name})
            continue
        selected.append((rid, libs[target]))
    return selected


def _source_extension(lib_path: Union[str, os.PathLike]) -> str:
    # Windows-style paths may reach us on any host, so split on both separators.
    name = os.fspath(lib_path).replace("\\", "/")
    return PurePath(name.rsplit("/", 1)[-1]).suffix


def lib_part_name(package_id: str, rid: str, lib_path: Union[str, os.PathLike]) -> str:
    """Archive path for one target's library, e.g. `runtimes/linux-x64/native/foo.so`."""
    return f"runtimes/{rid}/native/{package_id}{_source_extension(lib_path)}"


def _checked_lib_part(package_id: str, rid: str, lib_path: Union[str, os.PathLike]) -> str:
    """Library part name, validated up front and blamed on its target if unusable."""
    try:
        return normalize_part_name(lib_part_name(package_id, rid, lib_path))
    except InvalidPartNameError as err:
        raise WriteLibError(rid, lib_path, err) from err


def _write_entry(writer: ArchiveWriter, part_name: str, payload: bytes) -> None:
    try:
        writer.start_entry(part_name, COMPRESSION)
        writer.write(payload)
        writer.end_entry()
    except ArchiveWriterError as err:
        raise ArchiveFaultError(f"Error building nupkg: {err}") from err


def _write_lib(
    writer: ArchiveWriter,
    part_name: str,
    rid: str,
    lib_path: Union[str, os.PathLike],
) -> None:
    """
    Stream one native library into `runtimes/{rid}/native/`.

    The entry is finalized here too, so a failure while flushing it is
    still reported against this target.
    """
    size = 0
    try:
        writer.start_entry(part_name, COMPRESSION, size_hint=os.stat(lib_path).st_size)
        with open(lib_path, "rb") as lib:
            while True:
                chunk = lib.read(COPY_BUFFER_SIZE)
                if not chunk:
                    break
                writer.write(chunk)
                size += len(chunk)
        writer.end_entry()
    except (OSError, ArchiveWriterError) as err:
        raise WriteLibError(rid, lib_path, err) from err

    _logger.debug(
        "Wrote native library",
        extra={"rid": rid, "entry": part_name, "source": os.fspath(lib_path), "size": size},
    )


def pack(request: PackageRequest) -> Package:
    """
    Pack a manifest and its native libraries into a `.nupkg`.

    Args:
        request: Package identity, the rendered manifest, and one library per target.

    Returns:
        The finished Package: file name, included runtime identifiers (in
        canonical target order), and the archive bytes.

    Raises:
        NoValidTargetsError: No packageable target in `request.libs`.
        DescriptorFaultError: The manifest name can't be referenced from the descriptors.
        ArchiveFaultError: Writing a descriptor or the manifest failed, or finalizing did.
        WriteLibError: A library couldn't be named, read, or written; names its RID and path.
    """
    libs = _packageable(request.libs)
    if not libs:
        raise NoValidTargetsError()

    manifest_path = manifest_part_name(request.id)
    lib_parts = [_checked_lib_part(request.id, rid, path) for rid, path in libs]

    # Render both descriptors before opening the writer so a bad manifest
    # name fails without allocating an archive.
    rels_path, rels_xml = descriptors.relationships(manifest_path)
    types_path, types_xml = descriptors.content_types(manifest_path, lib_parts)

    _logger.info(
        "Packing nupkg",
        extra={
            "package_id": request.id,
            "version": request.version,
            "rids": [rid for rid, _ in libs],
        },
    )

    with ArchiveWriter() as writer:
        _write_entry(writer, rels_path, rels_xml)
        _write_entry(writer, types_path, types_xml)
        _write_entry(writer, manifest_path, request.manifest)

        for part_name, (rid, lib_path) in zip(lib_parts, libs):
            _write_lib(writer, part_name, rid, lib_path)

        try:
            buf = writer.finish()
        except ArchiveWriterError as err:
            raise ArchiveFaultError(f"Error building nupkg: {err}") from err

    package = Package(
        name=package_file_name(request.id, request.version),
        rids=tuple(rid for rid, _ in libs),
        buf=buf,
    )

    _logger.info(
        "Packed nupkg",
        extra={"package_name": package.name, "rids": list(package.rids), "size": len(package.buf)},
    )
    return package
