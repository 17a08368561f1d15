"""
Hyperband Reader Container Handle

This module wraps an HDF5 container opened read-only through h5py. The handle
resolves paths, shapes and attributes and reads hyperslabs; it has no
operation that loads a whole cube.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import h5py
import numpy as np

from ..core.core_types import DatasetDescriptor
from ..core.exceptions import (
    ContainerFormatError, ContainerClosedError, ContainerIOError,
    DatasetPathNotFoundError, validate_container_file
)
from ..core.logging_config import get_logger

logger = get_logger('io.container')

# read_value() is for small records only (strings, codes, short vectors)
SMALL_VALUE_LIMIT = 65536

Selection = Tuple[Union[int, slice], ...]


# ============================================================================
# Container Handle
# ============================================================================

class ContainerHandle:
    """
    Scoped, read-only connection to a hierarchical container.

    Use as a context manager so the file is released on every exit path:

        >>> with open_container("cube.h5") as handle:
        ...     desc = handle.resolve_dataset("Reflectance")
    """

    def __init__(self, path: Union[str, Path]):
        """
        Open the container.

        Args:
            path: Container file path

        Raises:
            ContainerNotFoundError: If the file does not exist
            ContainerFormatError: If the file is not a readable HDF5 container
        """
        self.path = validate_container_file(Path(path))
        try:
            self._file: Optional[h5py.File] = h5py.File(self.path, "r")
        except OSError as e:
            raise ContainerFormatError(str(self.path), f"Failed to open container: {e}") from e
        logger.debug("Opened container %s", self.path)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._file is None

    def close(self) -> None:
        """Release the file and every object opened through it. Safe to call twice."""
        if self._file is None:
            return
        self._file.close()
        self._file = None
        logger.debug("Closed container %s", self.path)

    def __enter__(self) -> "ContainerHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<ContainerHandle {self.path} ({state})>"

    def _require_open(self) -> h5py.File:
        if self._file is None:
            raise ContainerClosedError(self.path)
        return self._file

    # ------------------------------------------------------------------
    # Path resolution
    # ------------------------------------------------------------------

    def find_path(self, name: str, datasets_only: bool = False) -> str:
        """
        Resolve a name to an absolute path inside the container.

        A path containing "/" must exist exactly as given. A bare name that
        is not present at the root is searched for as the final component
        of every path, so "Reflectance" finds "/SJER/Reflectance". More
        than one match is an error.

        Args:
            name: Qualified path, or a bare final component such as "Reflectance"
            datasets_only: Ignore groups

        Returns:
            str: Absolute path, e.g. "/SJER/Reflectance"

        Raises:
            DatasetPathNotFoundError: If nothing or more than one object matches
        """
        f = self._require_open()
        if name in f:
            obj = f[name]
            if not datasets_only or isinstance(obj, h5py.Dataset):
                return obj.name
        if "/" in name:
            raise DatasetPathNotFoundError(name)

        matches: List[str] = []

        def visitor(path, obj):
            if datasets_only and not isinstance(obj, h5py.Dataset):
                return None
            if path.rsplit("/", 1)[-1] == name:
                matches.append("/" + path)
            return None

        f.visititems(visitor)
        if len(matches) == 1:
            logger.debug("Resolved '%s' to %s", name, matches[0])
            return matches[0]
        raise DatasetPathNotFoundError(name, matches or None)

    def _dataset(self, name: str) -> h5py.Dataset:
        f = self._require_open()
        return f[self.find_path(name, datasets_only=True)]

    def shape_of(self, name: str) -> Tuple[int, ...]:
        """Shape of any dataset, from its header only."""
        return tuple(self._dataset(name).shape)

    def resolve_dataset(self, name: str) -> DatasetDescriptor:
        """
        Describe a cube dataset without reading it.

        Raises:
            DatasetPathNotFoundError: If no dataset matches ``name``
            ContainerFormatError: If the dataset is not 3D
        """
        ds = self._dataset(name)
        descriptor = DatasetDescriptor(path=ds.name, shape=ds.shape, dtype=ds.dtype)
        logger.debug("Dataset %s: shape=%s dtype=%s", ds.name, descriptor.shape, descriptor.dtype)
        return descriptor

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def raw_attributes(self, name: str) -> Dict[str, Any]:
        """Attribute values of a dataset or group, exactly as h5py returns them."""
        f = self._require_open()
        obj = f[self.find_path(name)]
        return {key: obj.attrs[key] for key in obj.attrs.keys()}

    def read_value(self, name: str) -> np.ndarray:
        """
        Read a small dataset in full (a string record, a code, a short vector).

        Raises:
            ContainerFormatError: If the dataset is too large for a metadata read
            ContainerIOError: If the read fails
        """
        ds = self._dataset(name)
        if ds.size > SMALL_VALUE_LIMIT:
            raise ContainerFormatError(
                ds.name, f"{ds.size} elements is too large for a metadata read; use read_hyperslab"
            )
        try:
            return ds[()]
        except OSError as e:
            raise ContainerIOError("read", ds.name, str(e)) from e

    def read_hyperslab(self, name: str, selection: Selection) -> np.ndarray:
        """
        Read a rectangular selection of a dataset.

        h5py allocates only the selected region, so selecting one band of
        a cube costs one plane of memory and I/O.

        Args:
            name: Dataset path
            selection: One int or slice per axis

        Raises:
            ContainerIOError: If the read fails
        """
        ds = self._dataset(name)
        try:
            return ds[selection]
        except OSError as e:
            raise ContainerIOError("read hyperslab of", ds.name, str(e)) from e


def open_container(path: Union[str, Path]) -> ContainerHandle:
    """Open a container read-only. Prefer using the result in a ``with`` block."""
    return ContainerHandle(path)
