"""
Hyperband Reader Custom Exception Classes

This module defines all custom exception classes for better error handling
and more informative error messages.
"""

from typing import Optional, Sequence
from pathlib import Path

# ============================================================================
# Base Exception
# ============================================================================

class HyperbandReaderError(Exception):
    """Base exception class for all Hyperband Reader related errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        full_message = f"{message}\nDetails: {details}" if details else message
        super().__init__(full_message)

    def __str__(self) -> str:
        # KeyError subclasses would otherwise repr() the message
        return self.args[0] if self.args else self.message

# ============================================================================
# Container Errors
# ============================================================================

class ContainerNotFoundError(HyperbandReaderError, FileNotFoundError):
    """Container file not found."""

    def __init__(self, path: Path):
        super().__init__(f"Container file not found: {path}")
        self.path = path

class ContainerFormatError(HyperbandReaderError):
    """Container unreadable, or a dataset has the wrong rank or type."""

    def __init__(self, item: str, reason: str):
        super().__init__(f"Invalid container content: {item}", reason)
        self.item = item
        self.reason = reason

class ContainerClosedError(HyperbandReaderError):
    """Operation attempted on a released container handle."""

    def __init__(self, path: Path):
        super().__init__(f"Container handle already closed: {path}")
        self.path = path

class ContainerIOError(HyperbandReaderError, OSError):
    """Read failure while transferring data out of the container."""

    def __init__(self, operation: str, path: str, reason: str):
        super().__init__(f"Failed to {operation} '{path}'", reason)
        self.operation = operation
        self.path = path

# ============================================================================
# Data Availability Errors
# ============================================================================

class DatasetPathNotFoundError(HyperbandReaderError, KeyError):
    """Dataset path not present in the container."""

    def __init__(self, name: str, candidates: Optional[Sequence[str]] = None):
        super().__init__(
            f"Dataset not found: {name}",
            f"Candidates: {', '.join(candidates)}" if candidates else None
        )
        self.name = name
        self.candidates = list(candidates) if candidates else None

class AttributeNotFoundError(HyperbandReaderError, KeyError):
    """Required attribute record not found."""

    def __init__(self, owner: str, missing: Sequence[str], available: Optional[Sequence[str]] = None):
        missing_str = ", ".join(missing)
        super().__init__(
            f"Attributes not found on '{owner}': {missing_str}",
            f"Available attributes: {', '.join(sorted(available))}" if available else None
        )
        self.owner = owner
        self.missing = list(missing)
        self.available = list(available) if available else None

class BandIndexError(HyperbandReaderError, IndexError):
    """Band index outside the cube's band axis."""

    def __init__(self, band_index, n_bands: int):
        super().__init__(
            f"Band index out of range: {band_index}",
            f"Valid band indices: 0 to {n_bands - 1}"
        )
        self.band_index = band_index
        self.n_bands = n_bands

# ============================================================================
# Geometry Errors
# ============================================================================

class MalformedDescriptorError(HyperbandReaderError, ValueError):
    """Positional descriptor missing or carrying non-numeric required fields."""

    def __init__(self, descriptor: str, issue: str):
        super().__init__(f"Malformed map info: {issue}", f"Descriptor: {descriptor!r}")
        self.descriptor = descriptor
        self.issue = issue

class InvalidGeometryError(HyperbandReaderError, ValueError):
    """Degenerate plane or bounding rectangle."""

    def __init__(self, issue: str):
        super().__init__(f"Invalid raster geometry: {issue}")
        self.issue = issue

class ProjectionError(HyperbandReaderError):
    """Projection identifier could not be resolved to a CRS."""

    def __init__(self, identifier, reason: str):
        super().__init__(f"Cannot resolve projection: {identifier}", reason)
        self.identifier = identifier

# ============================================================================
# Processing Errors
# ============================================================================

class DataProcessingError(HyperbandReaderError):
    """Data processing related errors."""

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Data processing failed during {operation}", reason)
        self.operation = operation

# ============================================================================
# Utility Functions
# ============================================================================

def validate_container_file(path: Path) -> Path:
    """
    Validate that a container file exists.

    Args:
        path: Path to the container file

    Returns:
        Path: The validated file path

    Raises:
        ContainerNotFoundError: If the file doesn't exist
    """
    if not path.is_file():
        raise ContainerNotFoundError(path)
    return path

def check_attributes_availability(owner: str, requested: Sequence[str], available: Sequence[str]) -> None:
    """Check if all requested attributes are available."""
    missing = [a for a in requested if a not in available]
    if missing:
        raise AttributeNotFoundError(owner, missing, available)
