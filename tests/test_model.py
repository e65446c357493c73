"""
Tests for splitmatch Core Model Objects

These tests verify:
    - Candidate construction and filter normalization
    - Candidate invariants (non-empty outputs, known densities)
    - DeviceRequest validation
    - MatchResult accessors
"""

import dataclasses

import pytest

from splitmatch.filters import FilterValue, NO_FILTER, OutputType
from splitmatch.model import (
    Candidate,
    DeviceRequest,
    InvalidRequestError,
    MalformedCandidateError,
    MatchResult,
    NO_MATCH,
    OutputArtifact,
    SplitMatchError,
)


def make_candidate(**kwargs):
    kwargs.setdefault("version_code", 1)
    kwargs.setdefault("outputs", (OutputArtifact("app.apk"),))
    return Candidate(**kwargs)


class TestOutputArtifact:
    """Test OutputArtifact objects."""

    def test_default_output_type(self):
        artifact = OutputArtifact("app.apk")
        assert artifact.path == "app.apk"
        assert artifact.output_type is OutputType.MAIN

    def test_is_immutable(self):
        artifact = OutputArtifact("app.apk")
        with pytest.raises(dataclasses.FrozenInstanceError):
            artifact.path = "other.apk"


class TestCandidate:
    """Test Candidate objects."""

    def test_universal_candidate(self):
        """No filters means universal."""
        candidate = make_candidate()
        assert candidate.density_filter == NO_FILTER
        assert candidate.abi_filter == NO_FILTER
        assert candidate.is_universal
        assert candidate.filter_types == []
        assert candidate.density_dpi is None

    def test_filters_are_coerced(self):
        """Plain strings and None are normalized to filter types."""
        candidate = make_candidate(density_filter="xhdpi", abi_filter=None)
        assert candidate.density_filter == FilterValue("xhdpi")
        assert candidate.abi_filter is NO_FILTER
        assert candidate.density_dpi == 320
        assert candidate.filter_types == ["DENSITY"]
        assert not candidate.is_universal

    def test_multi_filter_candidate(self):
        candidate = make_candidate(density_filter=FilterValue("mdpi"), abi_filter=FilterValue("x86"))
        assert candidate.filter_types == ["DENSITY", "ABI"]

    def test_nodpi_means_no_density_filter(self):
        candidate = make_candidate(density_filter="nodpi")
        assert candidate.density_filter is NO_FILTER
        assert candidate.is_universal

    def test_outputs_become_tuple(self):
        candidate = make_candidate(outputs=[OutputArtifact("a.apk"), OutputArtifact("b.apk")])
        assert isinstance(candidate.outputs, tuple)
        assert candidate.main_output.path == "a.apk"

    def test_empty_outputs_rejected(self):
        with pytest.raises(MalformedCandidateError):
            make_candidate(outputs=())

    def test_non_artifact_output_rejected(self):
        with pytest.raises(MalformedCandidateError):
            make_candidate(outputs=("app.apk",))

    def test_unknown_density_rejected(self):
        with pytest.raises(MalformedCandidateError):
            make_candidate(density_filter="ultradpi")

    def test_empty_abi_rejected(self):
        with pytest.raises(MalformedCandidateError):
            make_candidate(abi_filter="")

    def test_bad_filter_type_rejected(self):
        with pytest.raises(MalformedCandidateError):
            make_candidate(abi_filter=42)

    @pytest.mark.parametrize("version_code", ["2", None, 2.5, True])
    def test_non_integer_version_code_rejected(self, version_code):
        with pytest.raises(MalformedCandidateError):
            make_candidate(version_code=version_code)

    def test_string_outputs_rejected(self):
        with pytest.raises(MalformedCandidateError):
            make_candidate(outputs="app.apk")

    def test_errors_share_base_class(self):
        assert issubclass(MalformedCandidateError, SplitMatchError)
        assert issubclass(InvalidRequestError, SplitMatchError)

    def test_is_immutable(self):
        candidate = make_candidate()
        with pytest.raises(dataclasses.FrozenInstanceError):
            candidate.version_code = 2


class TestDeviceRequest:
    """Test DeviceRequest objects."""

    def test_create_request(self):
        request = DeviceRequest(density=320, supported_abis=["arm64-v8a", "armeabi-v7a"])
        assert request.supported_abis == ("arm64-v8a", "armeabi-v7a")
        assert request.variant_abi_restriction is None

    def test_restriction_becomes_frozenset(self):
        request = DeviceRequest(density=320, supported_abis=("x86",), variant_abi_restriction=["x86", "x86"])
        assert request.variant_abi_restriction == frozenset({"x86"})

    def test_empty_abis_rejected(self):
        with pytest.raises(InvalidRequestError):
            DeviceRequest(density=160, supported_abis=())

    def test_string_abis_rejected(self):
        with pytest.raises(InvalidRequestError):
            DeviceRequest(density=160, supported_abis="x86")

    def test_string_restriction_rejected(self):
        """A bare ABI name is not split into characters."""
        with pytest.raises(InvalidRequestError):
            DeviceRequest(density=160, supported_abis=("foo",), variant_abi_restriction="foo")

    @pytest.mark.parametrize("density", [None, 160.0, "160", True])
    def test_non_integer_density_rejected(self, density):
        with pytest.raises(InvalidRequestError):
            DeviceRequest(density=density, supported_abis=("x86",))

    def test_uncataloged_density_allowed(self):
        request = DeviceRequest(density=1, supported_abis=("foo",))
        assert request.density == 1

    def test_abi_rank(self):
        request = DeviceRequest(density=160, supported_abis=("foo", "bar"))
        assert request.abi_rank("foo") == 0
        assert request.abi_rank("bar") == 1
        assert request.abi_rank("zzz") == 2


class TestMatchResult:
    """Test MatchResult objects."""

    def test_no_match(self):
        assert not NO_MATCH
        assert not NO_MATCH.matched
        assert NO_MATCH.candidate is None
        assert NO_MATCH.outputs == ()
        assert NO_MATCH.paths == []

    def test_of_candidate(self):
        candidate = make_candidate(outputs=[OutputArtifact("a.apk"), OutputArtifact("b.apk", OutputType.SPLIT)])
        result = MatchResult.of(candidate)
        assert result
        assert result.candidate is candidate
        assert result.paths == ["a.apk", "b.apk"]
