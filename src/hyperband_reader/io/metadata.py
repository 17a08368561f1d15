"""
Hyperband Reader Metadata Access

This module reads attribute records and small descriptor datasets: the value
conventions attached to the cube, the map info record, the EPSG code and
band wavelengths.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

import numpy as np

from ..core.core_types import ReflectanceMetadata, ReaderOptions
from ..core.exceptions import (
    AttributeNotFoundError, ContainerFormatError, DatasetPathNotFoundError,
    check_attributes_availability
)
from ..core.logging_config import get_logger
from .container import ContainerHandle

logger = get_logger('io.metadata')


# ============================================================================
# Value Decoding
# ============================================================================

def _decode(value: Any) -> Any:
    """
    Convert h5py attribute values to plain Python values.

    Bytes become str, numpy scalars become Python scalars and one-element
    arrays are unwrapped. Longer arrays become lists.
    """
    if isinstance(value, (bytes, np.bytes_)):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, np.ndarray):
        if value.size == 1:
            return _decode(value.reshape(-1)[0])
        return [_decode(v) for v in value.tolist()]
    if isinstance(value, np.generic):
        return value.item()
    return value


def _first_present(attrs: Mapping[str, Any], names: Iterable[str]) -> Optional[str]:
    for name in names:
        if name in attrs:
            return name
    return None


# ============================================================================
# Attribute Records
# ============================================================================

def read_attributes(
    handle: ContainerHandle,
    name: str,
    required: Optional[Iterable[str]] = None
) -> Dict[str, Any]:
    """
    Read the attributes attached to a dataset or group.

    Values are decoded but not interpreted; callers parse them.

    Args:
        handle: Open container
        name: Dataset or group path
        required: Attribute names that must be present

    Returns:
        Dict[str, Any]: Attribute name to decoded value

    Raises:
        DatasetPathNotFoundError: If ``name`` does not exist
        AttributeNotFoundError: If the object carries no attributes, or
            lacks one of ``required``
    """
    attrs = {key: _decode(value) for key, value in handle.raw_attributes(name).items()}
    if required is not None:
        check_attributes_availability(name, list(required), list(attrs))
    elif not attrs:
        raise AttributeNotFoundError(name, ["<any>"])
    return attrs


def read_reflectance_metadata(
    handle: ContainerHandle,
    name: str,
    options: Optional[ReaderOptions] = None
) -> ReflectanceMetadata:
    """
    Read the scale factor and no-data sentinel attached to the cube.

    Each value is looked up under several conventional attribute names.
    A missing value is an error; no default is substituted.

    Raises:
        AttributeNotFoundError: If either value is missing
        ContainerFormatError: If a value is not numeric or the scale factor
            is not positive
    """
    options = options or ReaderOptions()
    attrs = read_attributes(handle, name)

    found = {}
    for label, aliases in (("scale_factor", options.scale_factor_attrs),
                           ("no_data_value", options.no_data_attrs)):
        key = _first_present(attrs, aliases)
        if key is None:
            raise AttributeNotFoundError(name, list(aliases), list(attrs))
        try:
            found[label] = float(attrs[key])
        except (TypeError, ValueError) as e:
            raise ContainerFormatError(f"{name}@{key}", f"not a number: {attrs[key]!r}") from e

    metadata = ReflectanceMetadata(**found)
    logger.debug("Reflectance metadata for %s: %s", name, metadata)
    return metadata


# ============================================================================
# Descriptor Records
# ============================================================================

def read_map_info(handle: ContainerHandle, name: str, owner: Optional[str] = None) -> str:
    """
    Read the raw map info record.

    The record is either a string dataset (the usual layout) or an attribute
    named ``name`` on ``owner``. Token lists are joined with commas.

    Args:
        handle: Open container
        name: Map info dataset path or attribute name
        owner: Dataset or group to check for a ``name`` attribute

    Returns:
        str: The comma-delimited record, uninterpreted

    Raises:
        AttributeNotFoundError: If neither location holds the record
    """
    try:
        value = _decode(handle.read_value(name))
    except DatasetPathNotFoundError:
        value = None
        if owner is not None:
            attrs = {k: _decode(v) for k, v in handle.raw_attributes(owner).items()}
            value = attrs.get(name)
        if value is None:
            raise AttributeNotFoundError(owner or name, [name])

    if isinstance(value, list):
        value = ",".join(str(v) for v in value)
    return str(value)


def read_epsg_code(handle: ContainerHandle, name: Optional[str]) -> Optional[int]:
    """
    Read an EPSG code record.

    Returns:
        Optional[int]: The code, or None when no single dataset carries that
            name. Groups are ignored.

    Raises:
        ContainerFormatError: If the record is present but not an integer
    """
    if not name:
        return None
    try:
        path = handle.find_path(name, datasets_only=True)
    except DatasetPathNotFoundError:
        return None
    value = _decode(handle.read_value(path))
    try:
        return int(str(value).strip())
    except ValueError as e:
        raise ContainerFormatError(name, f"EPSG code is not an integer: {value!r}") from e


def read_band_wavelength(
    handle: ContainerHandle,
    name: Optional[str],
    band_index: int
) -> Optional[float]:
    """
    Read the centre wavelength of one band.

    Only the requested element is read. Returns None when the container has
    no wavelength vector or the vector does not cover ``band_index``.
    """
    if not name:
        return None
    try:
        path = handle.find_path(name, datasets_only=True)
    except DatasetPathNotFoundError:
        return None

    shape = handle.shape_of(path)
    if len(shape) != 1 or not 0 <= band_index < shape[0]:
        logger.warning("Wavelength vector %s %s has no entry for band %d", path, shape, band_index)
        return None
    values = handle.read_hyperslab(path, (slice(band_index, band_index + 1),))
    return float(values[0])
