"""Tests for candidate key generation."""
import pytest

from kgcp_secret.secrets.domains.key_matcher import (
    CandidateKeys,
    candidates,
    effective_stage,
    effective_tag,
)
from kgcp_secret.secrets.domains.models import ResolutionRequest


class TestCandidateOrder:
    """Ordering of the 16 qualified names."""

    def test_fully_scoped_order(self):
        """Prefix specificity is exhausted before postfix specificity."""
        request = ResolutionRequest(name="app", namespace="ns", stage="prod", dc="eu1")

        assert list(candidates("KEY", request)) == [
            "ns_app_KEY_prod_eu1", "ns_app_KEY_prod", "ns_app_KEY_eu1", "ns_app_KEY",
            "app_KEY_prod_eu1", "app_KEY_prod", "app_KEY_eu1", "app_KEY",
            "ns_KEY_prod_eu1", "ns_KEY_prod", "ns_KEY_eu1", "ns_KEY",
            "KEY_prod_eu1", "KEY_prod", "KEY_eu1", "KEY",
        ]

    def test_unscoped_request_keeps_literal_concatenation(self):
        """Empty scope fields still contribute their separators."""
        request = ResolutionRequest(name="app")

        result = list(candidates("KEY", request))

        assert len(result) == 16
        assert result[:4] == ["_app_KEY__", "_app_KEY_", "_app_KEY_", "_app_KEY"]
        assert result[4:8] == ["app_KEY__", "app_KEY_", "app_KEY_", "app_KEY"]
        assert result[8:12] == ["_KEY__", "_KEY_", "_KEY_", "_KEY"]
        assert result[-1] == "KEY"

    def test_bare_key_is_always_last(self):
        request = ResolutionRequest(name="app", namespace="ns", stage="pp", dc="cn-tcs1")
        assert list(candidates("CDN_URL", request))[-1] == "CDN_URL"

    def test_sequence_is_restartable(self):
        """Iterating twice yields the same names."""
        seq = candidates("KEY", ResolutionRequest(name="app", stage="prod"))

        first = list(seq)
        second = list(seq)

        assert first == second
        assert len(seq) == 16
        assert isinstance(seq, CandidateKeys)


class TestScopeOverrides:
    """environment/tag take precedence over stage/dc."""

    def test_environment_overrides_stage(self):
        request = ResolutionRequest(name="app", stage="prod", environment="qa", dc="eu1")

        result = list(candidates("KEY", request))

        assert effective_stage(request) == "qa"
        assert "app_KEY_qa_eu1" in result
        assert not any("prod" in name for name in result)

    def test_tag_overrides_dc(self):
        request = ResolutionRequest(name="app", stage="prod", dc="eu1", tag="blue")

        result = list(candidates("KEY", request))

        assert effective_tag(request) == "blue"
        assert "KEY_prod_blue" in result
        assert not any("eu1" in name for name in result)

    @pytest.mark.parametrize("stage,environment,expected", [
        ("prod", "", "prod"),
        ("", "qa", "qa"),
        ("prod", "qa", "qa"),
        ("", "", ""),
    ])
    def test_effective_stage(self, stage, environment, expected):
        request = ResolutionRequest(name="app", stage=stage, environment=environment)
        assert effective_stage(request) == expected
