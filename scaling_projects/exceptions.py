"""
Scaling Project Exceptions - Custom exception hierarchy.

Every error here is an authoring defect in a static descriptor.
Nothing is retried: the caller either aborts the batch or isolates
the offending project.

ProjectConfigError (base)
├── ChainRegistryError
│   ├── UnknownChainError
│   └── DuplicateChainError
├── TokenNotFoundError
├── DescriptorError
├── ProjectAssemblyError
└── BatchAssemblyError
"""

from datetime import datetime, timezone
from typing import Any, Optional


class ProjectConfigError(Exception):
    """Base exception for all scaling project normalization errors."""

    def __init__(
        self,
        message: str,
        project_id: Optional[str] = None,
        chain: Optional[str] = None,
        original_error: Optional[Exception] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.project_id = project_id
        self.chain = chain
        self.original_error = original_error
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "project_id": self.project_id,
            "chain": self.chain,
            "original_error": str(self.original_error) if self.original_error else None,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        parts = [f"{self.__class__.__name__}: {self.message}"]
        if self.project_id:
            parts.append(f"[project={self.project_id}]")
        if self.chain:
            parts.append(f"[chain={self.chain}]")
        if self.original_error:
            parts.append(f"(caused by: {self.original_error})")
        return " ".join(parts)


class ChainRegistryError(ProjectConfigError):
    """Error raised by the chain registry."""


class UnknownChainError(ChainRegistryError):
    """Chain name or chain id is not registered."""

    def __init__(
        self,
        message: str,
        chain: Optional[str] = None,
        chain_id: Optional[int] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, chain=chain, context=context)
        self.chain_id = chain_id

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data["chain_id"] = self.chain_id
        return data


class DuplicateChainError(ChainRegistryError):
    """Two chain descriptors share a name or a chain id."""

    def __init__(
        self,
        message: str,
        chain: Optional[str] = None,
        chain_id: Optional[int] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, chain=chain, context=context)
        self.chain_id = chain_id

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data["chain_id"] = self.chain_id
        return data


class TokenNotFoundError(ProjectConfigError):
    """Escrow references a token symbol absent on its chain."""

    def __init__(
        self,
        message: str,
        symbol: str,
        chain: Optional[str] = None,
        escrow_address: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, chain=chain, context=context)
        self.symbol = symbol
        self.escrow_address = escrow_address

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data.update({
            "symbol": self.symbol,
            "escrow_address": self.escrow_address,
        })
        return data


class DescriptorError(ProjectConfigError):
    """Raw descriptor file is missing or does not match its schema."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        project_id: Optional[str] = None,
        original_error: Optional[Exception] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            project_id=project_id,
            original_error=original_error,
            context=context,
        )
        self.source = source

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data["source"] = self.source
        return data


class ProjectAssemblyError(ProjectConfigError):
    """A single project descriptor could not be assembled."""

    def __init__(
        self,
        message: str,
        project_id: str,
        original_error: Optional[Exception] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        chain = getattr(original_error, "chain", None)
        super().__init__(
            message,
            project_id=project_id,
            chain=chain,
            original_error=original_error,
            context=context,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        if isinstance(self.original_error, ProjectConfigError):
            data["cause"] = self.original_error.to_dict()
        return data


class BatchAssemblyError(ProjectConfigError):
    """One or more project descriptors in a batch failed to assemble."""

    def __init__(
        self,
        message: str,
        errors: list[ProjectAssemblyError],
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, context=context)
        self.errors = list(errors)

    @property
    def project_ids(self) -> list[str]:
        return [e.project_id for e in self.errors if e.project_id]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data["errors"] = [e.to_dict() for e in self.errors]
        return data
