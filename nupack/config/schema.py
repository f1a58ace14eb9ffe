# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schema for `nupack pack`.

A pack config looks like:

    global:
      config_version: "1.0.0"
      log_level: "INFO"
    package:
      id: "foo"
      version: "1.2.3"
      manifest: "foo.nuspec"
      output_dir: "nupkgs"
      targets:
        win-x64: "target/release/foo.dll"
        linux-x64: "target/release/libfoo.so"

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

Target keys are runtime identifiers and get turned into Target members here,
so nothing past config loading deals in raw platform strings.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nupack.targets.registry import Target


class GlobalConfig(BaseModel):
    """Cross-cutting settings: schema version and logging."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output, relative to the config file",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level '{value}'")
        return upper


class PackageConfig(BaseModel):
    """What to pack: identity, manifest, and one native library per target."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    id: str = Field(min_length=1, description="Package identifier, also the library file stem")
    version: str = Field(min_length=1, description="Package version")
    manifest: str = Field(description="Path to the rendered .nuspec manifest")
    output_dir: str = Field(default=".", description="Where the .nupkg gets written")
    dev_build: bool = Field(
        default=False,
        description="Append a timestamped dev pre-release tag to the version",
    )
    targets: dict[Target, str] = Field(
        default_factory=dict,
        description="Runtime identifier -> path of the built native library",
    )

    @field_validator("targets", mode="before")
    @classmethod
    def _parse_targets(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {
            (Target.from_rid(key) if isinstance(key, str) else key): path
            for key, path in value.items()
        }


class PackConfig(BaseModel):
    """
    Root config object. The `global` key maps to `global_config` since
    `global` is a Python keyword.
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", validate_default=True, populate_by_name=True
    )

    global_config: GlobalConfig = Field(alias="global")
    package: Optional[PackageConfig] = None
