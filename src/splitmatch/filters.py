"""
Filter Values for Split Packages

Every split package is restricted along zero or more device axes:
    - Density (screen pixel density bucket)
    - ABI (processor instruction set)

Along each axis a package either carries a concrete FilterValue or is
agnostic (NoFilter). The two cases are kept as separate types so that
every call site has to handle the agnostic branch explicitly.

ARCHITECTURAL RULE:
    Filters are structure only.
    Matching a filter against a device belongs in the matcher.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Set, Union


@dataclass(frozen=True)
class NoFilter:
    """
    Marks a package as agnostic along one axis.

    A package with NoFilter on the density axis serves every density.
    A package with NoFilter on the ABI axis serves every ABI, subject
    only to the variant-level ABI restriction.
    """

    def __repr__(self) -> str:
        return "NO_FILTER"


NO_FILTER = NoFilter()


@dataclass(frozen=True)
class FilterValue:
    """
    A concrete filter value on one axis.

    Examples:
        - FilterValue("xhdpi")        (density)
        - FilterValue("armeabi-v7a")  (ABI)
    """

    value: str


Filter = Union[NoFilter, FilterValue]


def as_filter(value: Union[None, str, Filter]) -> Filter:
    """
    Coerce a loose value into a Filter.

    None becomes NO_FILTER, a plain string becomes a FilterValue and
    existing filters pass through unchanged.
    """
    if value is None:
        return NO_FILTER
    if isinstance(value, (NoFilter, FilterValue)):
        return value
    if isinstance(value, str):
        return FilterValue(value)
    raise TypeError(f"Unsupported filter value: {value!r}")


class Density(Enum):
    """
    The closed catalog of screen density buckets.

    Each member carries its resource qualifier and its dpi value.
    NODPI is the sentinel meaning "not density-dependent"; it is never
    a real split filter.
    """

    LOW = ("ldpi", 120)
    MEDIUM = ("mdpi", 160)
    TV = ("tvdpi", 213)
    HIGH = ("hdpi", 240)
    DPI_280 = ("280dpi", 280)
    XHIGH = ("xhdpi", 320)
    DPI_400 = ("400dpi", 400)
    XXHIGH = ("xxhdpi", 480)
    DPI_560 = ("560dpi", 560)
    XXXHIGH = ("xxxhdpi", 640)
    NODPI = ("nodpi", 0xFFFF)

    def __init__(self, resource_value: str, dpi: int):
        self.resource_value = resource_value
        self.dpi = dpi

    @classmethod
    def from_dpi(cls, dpi: int) -> Optional["Density"]:
        """
        Look up a density bucket by dpi value.

        Returns:
            Density member or None if the value is not cataloged
        """
        for density in cls:
            if density.dpi == dpi:
                return density
        return None

    @classmethod
    def from_resource_value(cls, value: str) -> Optional["Density"]:
        """
        Look up a density bucket by resource qualifier (e.g. "xhdpi").

        Returns:
            Density member or None if the qualifier is not cataloged
        """
        for density in cls:
            if density.resource_value == value:
                return density
        return None


def density_filter_values() -> Set[str]:
    """All density qualifiers usable as split filters (the sentinel excluded)."""
    return {d.resource_value for d in Density if d is not Density.NODPI}


# Conventional ABI names. The matcher does not restrict ABIs to this set.
ABI_CATALOG = frozenset({
    "armeabi",
    "armeabi-v7a",
    "arm64-v8a",
    "x86",
    "x86_64",
    "mips",
    "mips64",
})


class OutputType(Enum):
    """Kind of file a package variant produces."""

    MAIN = "MAIN"
    FULL_SPLIT = "FULL_SPLIT"
    SPLIT = "SPLIT"
