"""
Split Package Output Matcher

Selects, from the packages a build produced by splitting an application
along density and/or ABI axes, the single package to install on a device.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - How packages are built
    - Where density/ABI catalogs come from
    - How splits are declared in build configuration

It consumes an in-memory candidate list and a device description only.
"""

from splitmatch.filters import NO_FILTER, Density, FilterValue, NoFilter, OutputType
from splitmatch.matcher import compute_best_match, evaluate_candidates, match_request
from splitmatch.model import (
    NO_MATCH,
    Candidate,
    DeviceRequest,
    InvalidRequestError,
    MalformedCandidateError,
    MatchResult,
    OutputArtifact,
    SplitMatchError,
)

__version__ = "0.1.0"

__all__ = [
    "NO_FILTER",
    "NO_MATCH",
    "Candidate",
    "Density",
    "DeviceRequest",
    "FilterValue",
    "InvalidRequestError",
    "MalformedCandidateError",
    "MatchResult",
    "NoFilter",
    "OutputArtifact",
    "OutputType",
    "SplitMatchError",
    "compute_best_match",
    "evaluate_candidates",
    "match_request",
]
