# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
nupack packs pre-built native libraries into a single `.nupkg` archive.

Subsystems:
  - targets: the closed set of supported platforms and their runtime identifiers
  - package: descriptor generation, archive writing, and package assembly
  - config: YAML pack configuration
  - cli: the `nupack` command
"""

__version__ = "0.1.0"
