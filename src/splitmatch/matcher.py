"""
Output Matcher: pick the split package best suited for a device.

Given every candidate package produced for a variant and a description
of the target device, this module:
    - Evaluates density compatibility per candidate
    - Evaluates ABI compatibility per candidate
    - Picks one winner among compatible candidates by version code

IMPORTANT: This is a pure function of its inputs. It never mutates the
candidates and keeps no reference to them after returning.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from splitmatch.filters import FilterValue, NoFilter
from splitmatch.model import Candidate, DeviceRequest, MatchResult, NO_MATCH

logger = logging.getLogger(__name__)


def density_compatible(candidate: Candidate, density: int) -> bool:
    """
    Density half of the compatibility predicate.

    Density-agnostic candidates always pass. Otherwise the filter's dpi
    must equal the requested density exactly.
    """
    if isinstance(candidate.density_filter, NoFilter):
        return True
    return candidate.density_dpi == density


def abi_compatible(candidate: Candidate, supported_abis: Sequence[str],
                   variant_abi_restriction: Optional[Iterable[str]] = None) -> bool:
    """
    ABI half of the compatibility predicate.

    An ABI-specific candidate passes when its ABI is anywhere in
    supported_abis. An ABI-agnostic candidate passes unless a variant
    restriction exists and the device supports none of its ABIs.
    """
    if isinstance(candidate.abi_filter, FilterValue):
        return candidate.abi_filter.value in supported_abis
    if variant_abi_restriction is None:
        return True
    return not set(supported_abis).isdisjoint(variant_abi_restriction)


@dataclass(frozen=True)
class CandidateEvaluation:
    """Both compatibility predicates for a single candidate."""
    candidate: Candidate
    index: int
    density_ok: bool
    abi_ok: bool

    @property
    def compatible(self) -> bool:
        return self.density_ok and self.abi_ok


def _check_restriction(candidate: Candidate, request: DeviceRequest) -> None:
    """Warn when an ABI split falls outside the variant's declared ABIs."""
    if request.variant_abi_restriction is None:
        return
    if not isinstance(candidate.abi_filter, FilterValue):
        return
    if candidate.abi_filter.value not in request.variant_abi_restriction:
        warnings.warn(
            f"ABI split {candidate.abi_filter.value!r} (version code {candidate.version_code}) "
            f"is not in the variant ABI restriction {sorted(request.variant_abi_restriction)}",
            UserWarning,
        )


def evaluate_candidates(candidates: Iterable[Candidate], request: DeviceRequest) -> List[CandidateEvaluation]:
    """
    Evaluate every candidate against the request, in input order.

    Returns one CandidateEvaluation per candidate, compatible or not.
    """
    evaluations = []
    for index, candidate in enumerate(candidates):
        _check_restriction(candidate, request)
        evaluation = CandidateEvaluation(
            candidate=candidate,
            index=index,
            density_ok=density_compatible(candidate, request.density),
            abi_ok=abi_compatible(candidate, request.supported_abis, request.variant_abi_restriction),
        )
        logger.debug(
            "candidate #%d version=%d density=%r abi=%r -> density_ok=%s abi_ok=%s",
            index, candidate.version_code, candidate.density_filter, candidate.abi_filter,
            evaluation.density_ok, evaluation.abi_ok,
        )
        evaluations.append(evaluation)
    return evaluations


def _preference_key(evaluation: CandidateEvaluation, request: DeviceRequest) -> Tuple[int, int, int]:
    # Higher is better: version code, then ABI preference, then input order.
    abi_filter = evaluation.candidate.abi_filter
    if isinstance(abi_filter, FilterValue):
        rank = request.abi_rank(abi_filter.value)
    else:
        rank = len(request.supported_abis)
    return (evaluation.candidate.version_code, -rank, -evaluation.index)


def match_request(candidates: Iterable[Candidate], request: DeviceRequest) -> MatchResult:
    """
    Select the best candidate for an already validated request.

    Among compatible candidates the one with the greatest version code
    wins. Equal version codes fall back to ABI preference order, then
    to input order.

    Returns:
        MatchResult of the winner, or NO_MATCH when nothing is compatible
    """
    compatible = [e for e in evaluate_candidates(candidates, request) if e.compatible]
    if not compatible:
        logger.debug("no compatible candidate for density=%d abis=%s", request.density, request.supported_abis)
        return NO_MATCH

    winner = max(compatible, key=lambda e: _preference_key(e, request))
    tied = [e for e in compatible if e.candidate.version_code == winner.candidate.version_code]
    if len(tied) > 1:
        logger.debug("%d compatible candidates share version code %d", len(tied), winner.candidate.version_code)

    logger.debug(
        "selected candidate #%d version=%d outputs=%s",
        winner.index, winner.candidate.version_code, [o.path for o in winner.candidate.outputs],
    )
    return MatchResult.of(winner.candidate)


def compute_best_match(candidates: Iterable[Candidate], density: int, supported_abis: Sequence[str],
                       variant_abi_restriction: Optional[Iterable[str]] = None) -> MatchResult:
    """
    Compute the split package output(s) to install on a device.

    Args:
        candidates: All package variants produced for the build variant
        density: Device screen density in dpi
        supported_abis: Device ABIs, most preferred first (non-empty)
        variant_abi_restriction: ABIs the variant was split across, if any

    Returns:
        MatchResult with the winner's outputs, or NO_MATCH

    Raises:
        InvalidRequestError: If supported_abis is empty or density is not an integer
    """
    request = DeviceRequest(
        density=density,
        supported_abis=supported_abis,
        variant_abi_restriction=variant_abi_restriction,
    )
    return match_request(candidates, request)
