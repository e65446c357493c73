"""
Core Split Package Model Objects

Defines the data structures the matcher works on:
    - OutputArtifact (a produced file)
    - Candidate (one split package variant)
    - DeviceRequest (the match query)
    - MatchResult (the winner's files, or nothing)

ARCHITECTURAL RULE:
    These objects:
        - Are immutable once constructed
        - Validate themselves at construction time
        - Know nothing about how packages are built
        - Represent structure, not matching behavior
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

from .filters import (
    Density,
    Filter,
    FilterValue,
    NO_FILTER,
    NoFilter,
    OutputType,
    as_filter,
)


class SplitMatchError(Exception):
    """Base class for all splitmatch errors."""
    pass


class InvalidRequestError(SplitMatchError):
    """Raised when a match query is malformed (e.g. no supported ABIs)."""
    pass


class MalformedCandidateError(SplitMatchError):
    """Raised when a candidate cannot be constructed (e.g. no outputs)."""
    pass


@dataclass(frozen=True)
class OutputArtifact:
    """
    A single file produced by a package variant.

    Properties:
        path: Filesystem path of the produced file
        output_type: Kind of output (main package, full split, split)
    """

    path: str
    output_type: OutputType = OutputType.MAIN


@dataclass(frozen=True)
class Candidate:
    """
    One buildable package variant.

    Properties:
        version_code:
            Monotonic build identifier. Used only to break ties between
            compatible candidates, never for compatibility itself.

        outputs:
            Files this candidate contributes if selected.
            The first entry is the primary artifact. Must be non-empty.

        density_filter:
            Density qualifier this package is restricted to.
            NO_FILTER means the package serves all densities.

        abi_filter:
            ABI this package is restricted to.
            NO_FILTER means the package is ABI-agnostic.

    INVARIANTS:
        - A candidate with both filters absent is the universal candidate
        - A "nodpi" density filter is the same as NO_FILTER
        - Density filters must name a cataloged density
    """

    version_code: int
    outputs: Tuple[OutputArtifact, ...]
    density_filter: Filter = NO_FILTER
    abi_filter: Filter = NO_FILTER

    def __post_init__(self):
        if isinstance(self.version_code, bool) or not isinstance(self.version_code, int):
            raise MalformedCandidateError(f"Version code must be an integer, got {self.version_code!r}")
        if isinstance(self.outputs, str):
            raise MalformedCandidateError("outputs must be a sequence of output artifacts, not a string")

        outputs = tuple(self.outputs)
        if not outputs:
            raise MalformedCandidateError(
                f"Candidate with version code {self.version_code} has no output artifacts"
            )
        for artifact in outputs:
            if not isinstance(artifact, OutputArtifact):
                raise MalformedCandidateError(f"Not an output artifact: {artifact!r}")

        try:
            density_filter = as_filter(self.density_filter)
            abi_filter = as_filter(self.abi_filter)
        except TypeError as e:
            raise MalformedCandidateError(str(e)) from e

        if isinstance(density_filter, FilterValue):
            density = Density.from_resource_value(density_filter.value)
            if density is None:
                raise MalformedCandidateError(
                    f"Unknown density filter: {density_filter.value!r}"
                )
            if density is Density.NODPI:
                density_filter = NO_FILTER

        if isinstance(abi_filter, FilterValue) and not abi_filter.value:
            raise MalformedCandidateError("ABI filter must not be empty")

        object.__setattr__(self, "outputs", outputs)
        object.__setattr__(self, "density_filter", density_filter)
        object.__setattr__(self, "abi_filter", abi_filter)

    @property
    def main_output(self) -> OutputArtifact:
        """The primary artifact."""
        return self.outputs[0]

    @property
    def is_universal(self) -> bool:
        return isinstance(self.density_filter, NoFilter) and isinstance(self.abi_filter, NoFilter)

    @property
    def filter_types(self) -> List[str]:
        """Axes this candidate is filtered on ("DENSITY", "ABI")."""
        types = []
        if isinstance(self.density_filter, FilterValue):
            types.append("DENSITY")
        if isinstance(self.abi_filter, FilterValue):
            types.append("ABI")
        return types

    @property
    def density_dpi(self) -> Optional[int]:
        """Dpi value of the density filter, or None when density-agnostic."""
        if isinstance(self.density_filter, FilterValue):
            return Density.from_resource_value(self.density_filter.value).dpi
        return None


@dataclass(frozen=True)
class DeviceRequest:
    """
    The match query describing a target device.

    Properties:
        density:
            Device screen density in dpi. Need not be a cataloged value;
            an uncataloged value simply matches no density filter.

        supported_abis:
            ABIs the device supports, most preferred first. Non-empty.

        variant_abi_restriction:
            Full set of ABIs the variant was split across, if any.
            Used to veto ABI-agnostic candidates for devices outside it.
    """

    density: int
    supported_abis: Tuple[str, ...]
    variant_abi_restriction: Optional[FrozenSet[str]] = None

    def __post_init__(self):
        if isinstance(self.density, bool) or not isinstance(self.density, int):
            raise InvalidRequestError(f"Density must be an integer, got {self.density!r}")
        if isinstance(self.supported_abis, str):
            raise InvalidRequestError("supported_abis must be a sequence of ABI names, not a string")

        abis = tuple(self.supported_abis)
        if not abis:
            raise InvalidRequestError("supported_abis must contain at least one ABI")
        object.__setattr__(self, "supported_abis", abis)

        if self.variant_abi_restriction is not None:
            if isinstance(self.variant_abi_restriction, str):
                raise InvalidRequestError("variant_abi_restriction must be a set of ABI names, not a string")
            object.__setattr__(self, "variant_abi_restriction", frozenset(self.variant_abi_restriction))

    def abi_rank(self, abi: str) -> int:
        """
        Preference position of an ABI (0 = most preferred).

        ABIs the device does not list rank after every listed one.
        """
        try:
            return self.supported_abis.index(abi)
        except ValueError:
            return len(self.supported_abis)


@dataclass(frozen=True)
class MatchResult:
    """
    Outcome of a match.

    Either the winning candidate and its outputs, or no match (empty).
    Callers treat no match as "install nothing", not as an error.
    """

    candidate: Optional[Candidate] = None
    outputs: Tuple[OutputArtifact, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, candidate: Candidate) -> "MatchResult":
        return cls(candidate=candidate, outputs=candidate.outputs)

    @property
    def matched(self) -> bool:
        return self.candidate is not None

    def __bool__(self) -> bool:
        return self.matched

    @property
    def paths(self) -> List[str]:
        """Filesystem paths to install, primary artifact first."""
        return [artifact.path for artifact in self.outputs]


NO_MATCH = MatchResult()
