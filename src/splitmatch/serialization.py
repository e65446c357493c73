"""
Serialization helpers for split package manifests.

Provides JSON/YAML round-trip for candidate lists and device requests via
an intermediate dict representation. A manifest file holds:

    candidates:
      - version_code: 2
        density: xhdpi
        abi: null
        outputs:
          - {path: xhdpi.apk, type: FULL_SPLIT}
    request:
      density: 320
      abis: [arm64-v8a, armeabi-v7a]
      variant_abis: [arm64-v8a, armeabi-v7a, x86]
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from splitmatch.filters import Filter, FilterValue, OutputType
from splitmatch.model import Candidate, DeviceRequest, OutputArtifact, SplitMatchError


class ManifestError(SplitMatchError):
    """Raised when a manifest does not have the expected shape."""
    pass


def filter_to_value(f: Filter) -> Optional[str]:
    if isinstance(f, FilterValue):
        return f.value
    return None


def artifact_to_dict(a: OutputArtifact) -> Dict[str, Any]:
    return {"path": a.path, "type": a.output_type.value}


def artifact_from_dict(d: Any) -> OutputArtifact:
    if isinstance(d, str):
        return OutputArtifact(path=d)
    if not isinstance(d, dict) or "path" not in d:
        raise ManifestError(f"Output entry must be a path or a mapping with 'path': {d!r}")
    try:
        output_type = OutputType(d.get("type", OutputType.MAIN.value))
    except ValueError as e:
        raise ManifestError(f"Unknown output type: {d.get('type')!r}") from e
    return OutputArtifact(path=str(d["path"]), output_type=output_type)


def candidate_to_dict(c: Candidate) -> Dict[str, Any]:
    return {
        "version_code": c.version_code,
        "density": filter_to_value(c.density_filter),
        "abi": filter_to_value(c.abi_filter),
        "outputs": [artifact_to_dict(a) for a in c.outputs],
    }


def candidate_from_dict(d: Dict[str, Any]) -> Candidate:
    if not isinstance(d, dict):
        raise ManifestError(f"Candidate entry must be a mapping: {d!r}")
    if "version_code" not in d:
        raise ManifestError(f"Candidate entry missing 'version_code': {d!r}")
    version_code = d["version_code"]
    if isinstance(version_code, bool) or not isinstance(version_code, int):
        raise ManifestError(f"'version_code' must be an integer: {version_code!r}")
    outputs = d.get("outputs", [])
    if not isinstance(outputs, list):
        raise ManifestError(f"'outputs' must be a list: {outputs!r}")
    return Candidate(
        version_code=version_code,
        outputs=tuple(artifact_from_dict(a) for a in outputs),
        density_filter=d.get("density"),
        abi_filter=d.get("abi"),
    )


def candidates_to_dict(candidates: List[Candidate]) -> Dict[str, Any]:
    return {"candidates": [candidate_to_dict(c) for c in candidates]}


def candidates_from_dict(d: Dict[str, Any]) -> List[Candidate]:
    if not isinstance(d, dict):
        raise ManifestError("Manifest root must be a mapping")
    entries = d.get("candidates", [])
    if not isinstance(entries, list):
        raise ManifestError("'candidates' must be a list")
    return [candidate_from_dict(c) for c in entries]


def request_to_dict(r: DeviceRequest) -> Dict[str, Any]:
    return {
        "density": r.density,
        "abis": list(r.supported_abis),
        "variant_abis": sorted(r.variant_abi_restriction) if r.variant_abi_restriction is not None else None,
    }


def request_from_dict(d: Dict[str, Any]) -> DeviceRequest:
    if not isinstance(d, dict) or "density" not in d:
        raise ManifestError(f"Request must be a mapping with 'density': {d!r}")
    abis = d.get("abis")
    if abis is None:
        abis = []
    if not isinstance(abis, list):
        raise ManifestError(f"'abis' must be a list: {abis!r}")
    variant_abis = d.get("variant_abis")
    if variant_abis is not None and not isinstance(variant_abis, list):
        raise ManifestError(f"'variant_abis' must be a list: {variant_abis!r}")
    return DeviceRequest(
        density=d["density"],
        supported_abis=tuple(abis),
        variant_abi_restriction=frozenset(variant_abis) if variant_abis is not None else None,
    )


def candidates_to_json(candidates: List[Candidate]) -> str:
    return json.dumps(candidates_to_dict(candidates), sort_keys=True)


def candidates_from_json(s: str) -> List[Candidate]:
    return candidates_from_dict(json.loads(s))


def candidates_to_yaml(candidates: List[Candidate]) -> str:
    return yaml.safe_dump(candidates_to_dict(candidates))


def candidates_from_yaml(s: str) -> List[Candidate]:
    return candidates_from_dict(yaml.safe_load(s))


def load_manifest(path: Union[str, Path]) -> Tuple[List[Candidate], Optional[DeviceRequest]]:
    """
    Load candidates (and an optional device request) from a manifest file.

    Files ending in .json are read as JSON, everything else as YAML.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ManifestError: If the manifest has the wrong shape
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)

    candidates = candidates_from_dict(data)
    request = request_from_dict(data["request"]) if data.get("request") is not None else None
    return candidates, request
