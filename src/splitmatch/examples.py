"""
Example candidate builders.

Builds split package candidates the way a build typically produces them:
a universal package plus density and/or ABI splits, numbered so that
more specific splits carry higher version codes.
"""
from typing import Iterable, List, Optional

from splitmatch.filters import Density, FilterValue, NO_FILTER, OutputType
from splitmatch.model import Candidate, OutputArtifact


def _output_name(density: Optional[str], abi: Optional[str]) -> str:
    # File name is the concatenated filter values, "universal" when unfiltered.
    name = (density or "") + (abi or "")
    return f"{name or 'universal'}.apk"


def _candidate(version_code: int, density: Optional[str], abi: Optional[str]) -> Candidate:
    output_type = OutputType.MAIN if density is None and abi is None else OutputType.FULL_SPLIT
    return Candidate(
        version_code=version_code,
        outputs=(OutputArtifact(path=_output_name(density, abi), output_type=output_type),),
        density_filter=FilterValue(density) if density else NO_FILTER,
        abi_filter=FilterValue(abi) if abi else NO_FILTER,
    )


def _density_value(dpi: int) -> str:
    density = Density.from_dpi(dpi)
    if density is None:
        raise ValueError(f"No cataloged density for {dpi} dpi")
    return density.resource_value


def universal_candidate(version_code: int) -> Candidate:
    return _candidate(version_code, None, None)


def density_candidate(dpi: int, version_code: int) -> Candidate:
    return _candidate(version_code, _density_value(dpi), None)


def abi_candidate(abi: str, version_code: int) -> Candidate:
    return _candidate(version_code, None, abi)


def multi_filter_candidate(dpi: int, abi: str, version_code: int) -> Candidate:
    return _candidate(version_code, _density_value(dpi), abi)


def build_example_split_set(densities: Iterable[int] = (160, 240, 320, 480),
                            abis: Iterable[str] = ("armeabi-v7a", "arm64-v8a", "x86")) -> List[Candidate]:
    """
    Build a full density x ABI split set with a universal fallback.

    Version codes grow with specificity:
        - universal package: 1
        - density-only splits: next block
        - ABI-only splits: next block
        - density+ABI splits: last block
    """
    densities = list(densities)
    abis = list(abis)

    candidates = [universal_candidate(1)]
    version_code = 1

    for dpi in densities:
        version_code += 1
        candidates.append(density_candidate(dpi, version_code))

    for abi in abis:
        version_code += 1
        candidates.append(abi_candidate(abi, version_code))

    for dpi in densities:
        for abi in abis:
            version_code += 1
            candidates.append(multi_filter_candidate(dpi, abi, version_code))

    return candidates
