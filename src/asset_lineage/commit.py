# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Commit identifier sources.

Every write is stamped with an opaque commit id supplied by the enclosing
commit context. Ids are never derived from record content or timestamps, so
two writes with identical fields and timestamps still get distinct ids.
"""

from __future__ import annotations

import itertools
import uuid
from abc import ABC, abstractmethod


class CommitContext(ABC):
    """Contract for whatever assigns identity and order to committed writes."""

    @abstractmethod
    def new_commit_id(self) -> str:
        """Return an identifier that no earlier call has returned."""
        ...


class UUIDCommitContext(CommitContext):
    """Random UUID v4 commit ids. The default for in-process use."""

    def new_commit_id(self) -> str:
        return uuid.uuid4().hex


class SequenceCommitContext(CommitContext):
    """
    Monotonic, human-readable commit ids: ``tx-000001``, ``tx-000002``, ...

    Useful in tests and replays where the ids must be predictable.
    """

    def __init__(self, prefix: str = "tx", start: int = 1) -> None:
        if not prefix:
            raise ValueError("prefix must be a non-empty string")
        self._prefix = prefix
        self._counter = itertools.count(start)

    def new_commit_id(self) -> str:
        return f"{self._prefix}-{next(self._counter):06d}"
