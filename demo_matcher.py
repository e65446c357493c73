"""
Demo: Match an example split set against a few devices and print the result.
"""

import logging

from splitmatch.examples import build_example_split_set
from splitmatch.matcher import compute_best_match, evaluate_candidates
from splitmatch.model import DeviceRequest
from splitmatch.serialization import candidates_to_yaml


DEVICES = [
    ("Pixel-class phone", 480, ["arm64-v8a", "armeabi-v7a"]),
    ("Old tablet", 240, ["armeabi-v7a"]),
    ("Emulator", 320, ["x86"]),
    ("Odd density TV", 213, ["x86_64"]),
]

VARIANT_ABIS = {"armeabi-v7a", "arm64-v8a", "x86"}


def print_match(name, candidates, density, abis):
    """Pretty-print the evaluation and winner for one device."""
    print()
    print("=" * 70)
    print(f"DEVICE: {name}  density={density}  abis={abis}")
    print("=" * 70)

    request = DeviceRequest(density=density, supported_abis=tuple(abis),
                            variant_abi_restriction=frozenset(VARIANT_ABIS))
    compatible = [e for e in evaluate_candidates(candidates, request) if e.compatible]
    print(f"  Compatible candidates: {len(compatible)}/{len(candidates)}")

    result = compute_best_match(candidates, density, abis, VARIANT_ABIS)
    if result:
        print(f"  Install:               {', '.join(result.paths)}")
        print(f"  Version code:          {result.candidate.version_code}")
    else:
        print("  No matching package - nothing to install")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    candidates = build_example_split_set()
    for name, density, abis in DEVICES:
        print_match(name, candidates, density, abis)

    with open("example_splits_output.yaml", "w") as f:
        f.write(candidates_to_yaml(candidates))
    print()
    print("✅ Candidates exported to example_splits_output.yaml")
