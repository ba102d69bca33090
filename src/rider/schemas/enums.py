"""Closed enumerations for transform descriptors.

Every enum accepts either its name-like value (``"real_forward"``) or the
numeric code used by the FFT library's C interface (``2``). Conversion goes
through :meth:`from_code`, which is the only place raw user values are turned
into members.
"""

from enum import Enum


class TransformKind(str, Enum):
    """Which DFT variant is requested."""
    COMPLEX_FORWARD = "complex_forward"
    COMPLEX_INVERSE = "complex_inverse"
    REAL_FORWARD = "real_forward"
    REAL_INVERSE = "real_inverse"

    @property
    def is_complex(self) -> bool:
        return self in (TransformKind.COMPLEX_FORWARD, TransformKind.COMPLEX_INVERSE)

    @classmethod
    def from_code(cls, value):
        """Return the member for a name, value or library code, else None."""
        return _lookup(cls, value, _TRANSFORM_KIND_CODES)


class Placement(str, Enum):
    """Whether input and output share one buffer."""
    INPLACE = "inplace"
    NOTINPLACE = "notinplace"

    @classmethod
    def from_code(cls, value):
        return _lookup(cls, value, _PLACEMENT_CODES, _PLACEMENT_ALIASES)


class ArrayType(str, Enum):
    """Storage layout of an input or output buffer.

    ``UNSET`` is a request for the default layout and never survives
    resolution.
    """
    COMPLEX_INTERLEAVED = "complex_interleaved"
    COMPLEX_PLANAR = "complex_planar"
    REAL = "real"
    HERMITIAN_INTERLEAVED = "hermitian_interleaved"
    HERMITIAN_PLANAR = "hermitian_planar"
    UNSET = "unset"

    @property
    def is_planar(self) -> bool:
        return self in (ArrayType.COMPLEX_PLANAR, ArrayType.HERMITIAN_PLANAR)

    @property
    def is_hermitian(self) -> bool:
        return self in (ArrayType.HERMITIAN_INTERLEAVED, ArrayType.HERMITIAN_PLANAR)

    @classmethod
    def from_code(cls, value):
        return _lookup(cls, value, _ARRAY_TYPE_CODES)


class Precision(str, Enum):
    """Floating point precision of the transform data."""
    SINGLE = "single"
    DOUBLE = "double"


# Numeric codes of the library's C enums
_TRANSFORM_KIND_CODES = {
    0: TransformKind.COMPLEX_FORWARD,
    1: TransformKind.COMPLEX_INVERSE,
    2: TransformKind.REAL_FORWARD,
    3: TransformKind.REAL_INVERSE,
}

_PLACEMENT_CODES = {
    0: Placement.INPLACE,
    1: Placement.NOTINPLACE,
}

_PLACEMENT_ALIASES = {
    "in_place": Placement.INPLACE,
    "out_of_place": Placement.NOTINPLACE,
    "outofplace": Placement.NOTINPLACE,
    "not_in_place": Placement.NOTINPLACE,
}

_ARRAY_TYPE_CODES = {
    0: ArrayType.COMPLEX_INTERLEAVED,
    1: ArrayType.COMPLEX_PLANAR,
    2: ArrayType.REAL,
    3: ArrayType.HERMITIAN_INTERLEAVED,
    4: ArrayType.HERMITIAN_PLANAR,
    5: ArrayType.UNSET,
}


def _lookup(enum_cls, value, codes: dict, aliases: dict = None):
    if isinstance(value, enum_cls):
        return value
    # bool is an int subclass; True/False are not codes
    if isinstance(value, int) and not isinstance(value, bool):
        return codes.get(value)
    if isinstance(value, str):
        key = value.strip().lower().replace("-", "_")
        if key.isdigit():
            return codes.get(int(key))
        for member in enum_cls:
            if key in (member.value, member.name.lower()):
                return member
        if aliases:
            return aliases.get(key)
    return None
