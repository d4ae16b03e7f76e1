# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

from .interface import VersionedStore
from .memory import MemoryVersionedStore
from .file import FileVersionedStore

__all__ = ["VersionedStore", "MemoryVersionedStore", "FileVersionedStore"]
