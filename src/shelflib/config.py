# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Configuration schema for opening a shelf.

Lets applications keep shelf settings alongside the rest of their
configuration (JSON, YAML, environment-derived dicts) and validate them
before any file is touched.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from shelflib.modes import CreateOpenMode


class ShelfConfig(BaseModel):
    """Settings for :meth:`Shelf.from_config`.

    Attributes:
        path: Path to the shelf's SQLite file
        mode: Whether the file may be created, opened, or either
        timeout: Seconds to wait on a locked database before failing
        begin: SQLite ``BEGIN`` flavour used for every transaction
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str = Field(min_length=1)
    mode: Literal["create", "open", "create_or_open"] = "create_or_open"
    timeout: float = Field(default=5.0, ge=0)
    begin: Literal["deferred", "immediate", "exclusive"] = "immediate"

    @property
    def create_open_mode(self) -> CreateOpenMode:
        return CreateOpenMode.parse(self.mode)
