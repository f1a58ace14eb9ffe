# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The two fixed Open Packaging Conventions documents every `.nupkg` carries.

  _rels/.rels           one relationship from the package root to the manifest
  [Content_Types].xml   MIME types for every part in the archive

Both are rendered with ElementTree into UTF-8 bytes. Nothing here touches the
filesystem; the output depends only on the part names passed in, so the same
manifest name always produces the same bytes.
"""

import os
import xml.etree.ElementTree as ET
from typing import Iterable, Union
from urllib.parse import quote

from nupack.package.errors import DescriptorFaultError
from nupack.package.parts import InvalidPartNameError, normalize_part_name, part_extension
from nupack.utils.hashing import compute_sha256_bytes

RELATIONSHIPS_PATH = "_rels/.rels"
CONTENT_TYPES_PATH = "[Content_Types].xml"

RELATIONSHIPS_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/relationships"
CONTENT_TYPES_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/content-types"
MANIFEST_RELATIONSHIP_TYPE = "http://schemas.microsoft.com/packaging/2010/07/manifest"

RELATIONSHIPS_CONTENT_TYPE = "application/vnd.openxmlformats-package.relationships+xml"
MANIFEST_CONTENT_TYPE = "application/octet"
BINARY_CONTENT_TYPE = "application/octet-stream"

# Extensions the supported targets' native libraries use.
NATIVE_EXTENSIONS: tuple[str, ...] = ("dll", "so", "dylib")

_XML_DECLARATION = b'<?xml version="1.0" encoding="utf-8"?>\n'


def _render(root: ET.Element) -> bytes:
    return _XML_DECLARATION + ET.tostring(root, encoding="unicode").encode("utf-8")


def _part_uri(part_name: str) -> str:
    """Absolute part URI as OPC expects it, e.g. `/foo.nuspec`."""
    return "/" + quote(part_name, safe="/")


def _manifest_part(manifest_path: Union[str, os.PathLike]) -> str:
    try:
        return normalize_part_name(manifest_path)
    except InvalidPartNameError as err:
        raise DescriptorFaultError(
            f"Manifest path '{os.fspath(manifest_path)}' is not a valid part reference: {err}"
        ) from err


def relationship_id(part_name: str) -> str:
    """
    Stable relationship Id for a target part.

    OPC Ids must be valid XML IDs (start with a letter), so the digest gets
    an `R` prefix.
    """
    return "R" + compute_sha256_bytes(part_name.encode("utf-8"))[:16].upper()


def relationships(manifest_path: Union[str, os.PathLike]) -> tuple[str, bytes]:
    """
    Render `_rels/.rels` pointing at the manifest.

    Returns:
        (part name, document bytes)

    Raises:
        DescriptorFaultError: If the manifest path isn't a valid relative part name.
    """
    part_name = _manifest_part(manifest_path)

    root = ET.Element("Relationships", {"xmlns": RELATIONSHIPS_NAMESPACE})
    ET.SubElement(
        root,
        "Relationship",
        {
            "Type": MANIFEST_RELATIONSHIP_TYPE,
            "Target": _part_uri(part_name),
            "Id": relationship_id(part_name),
        },
    )
    return RELATIONSHIPS_PATH, _render(root)


def content_types(
    manifest_path: Union[str, os.PathLike],
    parts: Iterable[str] = (),
) -> tuple[str, bytes]:
    """
    Render `[Content_Types].xml`.

    Declares defaults for relationships, the manifest's extension, and the
    usual native library extensions. Any extra `parts` whose extension isn't
    covered get a default of their own, and parts with no extension at all
    get an explicit override, so every binary in the archive has a type.

    Returns:
        (part name, document bytes)

    Raises:
        DescriptorFaultError: If the manifest path or any extra part isn't a valid part name.
    """
    manifest_part = _manifest_part(manifest_path)

    defaults: dict[str, str] = {"rels": RELATIONSHIPS_CONTENT_TYPE}
    manifest_ext = part_extension(manifest_part)
    overrides: dict[str, str] = {}
    if manifest_ext:
        defaults.setdefault(manifest_ext.lower(), MANIFEST_CONTENT_TYPE)
    else:
        overrides[_part_uri(manifest_part)] = MANIFEST_CONTENT_TYPE

    for ext in NATIVE_EXTENSIONS:
        defaults.setdefault(ext, BINARY_CONTENT_TYPE)

    extra_exts: set[str] = set()
    for part in parts:
        try:
            name = normalize_part_name(part)
        except InvalidPartNameError as err:
            raise DescriptorFaultError(f"Invalid part name '{part}': {err}") from err
        ext = part_extension(name).lower()
        if not ext:
            overrides[_part_uri(name)] = BINARY_CONTENT_TYPE
        elif ext not in defaults:
            extra_exts.add(ext)

    for ext in sorted(extra_exts):
        defaults[ext] = BINARY_CONTENT_TYPE

    root = ET.Element("Types", {"xmlns": CONTENT_TYPES_NAMESPACE})
    for ext, content_type in defaults.items():
        ET.SubElement(root, "Default", {"Extension": ext, "ContentType": content_type})
    for uri in sorted(overrides):
        ET.SubElement(root, "Override", {"PartName": uri, "ContentType": overrides[uri]})

    return CONTENT_TYPES_PATH, _render(root)
