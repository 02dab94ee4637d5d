"""Shared validators and converters for attrs-based configuration classes."""

from typing import Any, Iterable, Type, Union

import numpy as np
from attrs import fields

PrecisionDtype = Union[Type[np.float16], Type[np.float32], Type[np.float64]]

ALLOWED_PRECISIONS = {
    np.dtype(np.float16),
    np.dtype(np.float32),
    np.dtype(np.float64),
}


def in_attr(name, attrs_class_instance):
    """Checks if a name is in the attributes of a class instance."""
    field_names = {field.name for field in
                   fields(attrs_class_instance.__class__)}
    return name in field_names or ("_" + name) in field_names


def precision_converter(value: Any) -> PrecisionDtype:
    """Return the numpy scalar type matching ``value``.

    Parameters
    ----------
    value
        Anything accepted by :func:`numpy.dtype`.

    Returns
    -------
    type
        Numpy floating scalar type such as :class:`numpy.float64`.
    """

    return np.dtype(value).type


def precision_validator(instance, attribute, value) -> None:
    """Reject precisions other than half, single, and double floats."""

    if np.dtype(value) not in ALLOWED_PRECISIONS:
        raise ValueError(
            f"{attribute.name} must be one of float16, float32 or float64, "
            f"got {value!r}."
        )


def getype_validator(dtype: type, min_: Any):
    """Return a validator enforcing ``isinstance(value, dtype)`` and
    ``value >= min_``."""

    def _validator(instance, attribute, value):
        if isinstance(value, bool) or not isinstance(value, dtype):
            raise TypeError(
                f"{attribute.name} must be of type {dtype.__name__}, "
                f"got {type(value).__name__}."
            )
        if value < min_:
            raise ValueError(
                f"{attribute.name} must be >= {min_}, got {value}."
            )

    return _validator


def gttype_validator(dtype: type, min_: Any):
    """Return a validator enforcing ``isinstance(value, dtype)`` and
    ``value > min_``."""

    def _validator(instance, attribute, value):
        if isinstance(value, bool) or not isinstance(value, dtype):
            raise TypeError(
                f"{attribute.name} must be of type {dtype.__name__}, "
                f"got {type(value).__name__}."
            )
        if value <= min_:
            raise ValueError(
                f"{attribute.name} must be > {min_}, got {value}."
            )

    return _validator


def float_converter(value: Any) -> float:
    """Coerce integers and numpy scalars to a plain ``float``."""

    if isinstance(value, (int, float, np.integer, np.floating)) and not (
        isinstance(value, bool)
    ):
        return float(value)
    return value


def int_converter(value: Any) -> Any:
    """Coerce numpy integers to a plain ``int``."""

    if isinstance(value, np.integer):
        return int(value)
    return value


def as_float_vector(values: Iterable[float]):
    """Return ``values`` as a tuple of floats."""

    return tuple(float(value) for value in values)


def optional_float_vector(values):
    if values is None:
        return None
    return as_float_vector(values)
