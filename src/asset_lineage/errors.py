# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations


class AssetLineageError(Exception):
    """Base class for all asset-lineage errors."""

    def __init__(self, message: str, code: str = "ASSET_LINEAGE_ERROR") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class RecordNotFoundError(AssetLineageError):
    """Raised by a store when a key has no current value."""

    def __init__(
        self,
        key: str,
        message: str | None = None,
        code: str = "RECORD_NOT_FOUND",
    ) -> None:
        super().__init__(message or f"Key '{key}' has no current value.", code=code)
        self.key = key


class AssetNotFoundError(RecordNotFoundError):
    """
    Raised when a read or mutation targets an asset that does not exist.

    Attributes:
        asset_id: The asset identifier that was looked up.
    """

    def __init__(self, asset_id: str) -> None:
        super().__init__(
            asset_id,
            message=f"The asset {asset_id} does not exist",
            code="ASSET_NOT_FOUND",
        )
        self.asset_id = asset_id


class StoreFaultError(AssetLineageError):
    """
    Raised when the underlying storage medium fails or returns corrupt data.

    Attributes:
        backend: Name of the backend that failed.
    """

    def __init__(self, message: str, backend: str | None = None) -> None:
        backend_text = f"[{backend}] " if backend else ""
        super().__init__(f"{backend_text}{message}", code="STORE_FAULT")
        self.backend = backend


class MalformedLineageError(AssetLineageError):
    """
    Raised when a back-link chain cannot be walked to a root.

    Attributes:
        asset_id: The asset whose lineage was requested.
        key: The key the walk was about to enter.
        commit_id: The splice marker the walk was following.
        steps: Splices completed before the walk was aborted.
    """

    def __init__(
        self,
        asset_id: str,
        key: str,
        commit_id: str,
        steps: int,
        reason: str,
    ) -> None:
        super().__init__(
            f"Lineage of asset '{asset_id}' is malformed at "
            f"'{key}'@'{commit_id}' after {steps} step(s): {reason}",
            code="MALFORMED_LINEAGE",
        )
        self.asset_id = asset_id
        self.key = key
        self.commit_id = commit_id
        self.steps = steps
        self.reason = reason


class LineageTimeoutError(AssetLineageError):
    """Raised when a lineage walk runs past its configured time budget."""

    def __init__(self, asset_id: str, timeout_seconds: float, steps: int) -> None:
        super().__init__(
            f"Lineage walk for asset '{asset_id}' exceeded "
            f"{timeout_seconds:.3f}s after {steps} step(s).",
            code="LINEAGE_TIMEOUT",
        )
        self.asset_id = asset_id
        self.timeout_seconds = timeout_seconds
        self.steps = steps


class ConfigurationError(AssetLineageError):
    """Raised when the package is misconfigured."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="CONFIGURATION_ERROR")
