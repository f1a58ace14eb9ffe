# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for nupack tests.

Fixtures here are available to every test file automatically. They build the
smallest inputs a pack needs: a manifest, a couple of fake native libraries,
and a config file tying them together.
"""

import textwrap
from pathlib import Path

import pytest

MANIFEST_BYTES = (
    b'<?xml version="1.0" encoding="utf-8"?>\n'
    b'<package xmlns="http://schemas.microsoft.com/packaging/2013/05/nuspec.xsd">'
    b"<metadata><id>foo</id><version>1.2.3</version></metadata></package>"
)


@pytest.fixture()
def manifest_bytes() -> bytes:
    return MANIFEST_BYTES


@pytest.fixture()
def native_libs(tmp_path: Path) -> dict[str, Path]:
    """Fake built libraries for Windows and Linux with distinct payloads."""
    build_dir = tmp_path / "build"
    build_dir.mkdir()
    dll = build_dir / "foo.dll"
    dll.write_bytes(b"MZ" + bytes(range(256)) * 8)
    so = build_dir / "libfoo.so"
    so.write_bytes(b"\x7fELF" + b"\x00\x01" * 1000)
    return {"dll": dll, "so": so}


@pytest.fixture()
def pack_config_file(tmp_path: Path, native_libs: dict[str, Path]) -> Path:
    """A complete pack config with a manifest and two targets, paths relative to the file."""
    (tmp_path / "foo.nuspec").write_bytes(MANIFEST_BYTES)
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          log_level: "DEBUG"
        package:
          id: "foo"
          version: "1.2.3"
          manifest: "foo.nuspec"
          output_dir: "out"
          targets:
            linux-x64: "build/libfoo.so"
            win-x64: "build/foo.dll"
    """)
    config_file = tmp_path / "pack.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def minimal_config_file(tmp_path: Path) -> Path:
    """The smallest config that passes schema validation: no package section."""
    config_file = tmp_path / "minimal.yaml"
    config_file.write_text('global:\n  config_version: "1.0.0"\n', encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file
