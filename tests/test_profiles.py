"""Tests for spec importance and similarity profiles."""

import pytest

from partmatch_mcp.profiles import SimilarityProfile, SpecImportance


class TestSpecImportance:
    """Base weights and the mandatory flag."""

    @pytest.mark.parametrize("importance,weight", [
        (SpecImportance.CRITICAL, 1.0),
        (SpecImportance.HIGH, 0.7),
        (SpecImportance.MEDIUM, 0.4),
        (SpecImportance.LOW, 0.2),
        (SpecImportance.OPTIONAL, 0.0),
    ])
    def test_base_weights(self, importance: SpecImportance, weight: float):
        assert importance.base_weight == weight

    def test_only_critical_is_mandatory(self):
        mandatory = [i for i in SpecImportance if i.mandatory]
        assert mandatory == [SpecImportance.CRITICAL]

    def test_ordering_of_weights(self):
        weights = [i.base_weight for i in SpecImportance]
        assert weights == sorted(weights, reverse=True)


class TestSimilarityProfile:
    """Multipliers, effective weights and thresholds."""

    def test_five_profiles(self):
        assert [p.name for p in SimilarityProfile] == [
            "DESIGN_PHASE",
            "REPLACEMENT",
            "COST_OPTIMIZATION",
            "PERFORMANCE_UPGRADE",
            "EMERGENCY_SOURCING",
        ]

    @pytest.mark.parametrize("profile,minimum", [
        (SimilarityProfile.DESIGN_PHASE, 0.85),
        (SimilarityProfile.REPLACEMENT, 0.75),
        (SimilarityProfile.COST_OPTIMIZATION, 0.60),
        (SimilarityProfile.PERFORMANCE_UPGRADE, 0.70),
        (SimilarityProfile.EMERGENCY_SOURCING, 0.50),
    ])
    def test_minimum_scores(self, profile: SimilarityProfile, minimum: float):
        assert profile.minimum_score == minimum
        assert profile.meets_threshold(minimum)
        assert not profile.meets_threshold(minimum - 0.001)

    @pytest.mark.parametrize("profile,importance,expected", [
        (SimilarityProfile.REPLACEMENT, SpecImportance.CRITICAL, 1.0),
        (SimilarityProfile.REPLACEMENT, SpecImportance.HIGH, 0.49),
        (SimilarityProfile.REPLACEMENT, SpecImportance.MEDIUM, 0.16),
        (SimilarityProfile.REPLACEMENT, SpecImportance.LOW, 0.04),
        (SimilarityProfile.DESIGN_PHASE, SpecImportance.HIGH, 0.63),
        (SimilarityProfile.COST_OPTIMIZATION, SpecImportance.LOW, 0.0),
        (SimilarityProfile.EMERGENCY_SOURCING, SpecImportance.CRITICAL, 0.8),
        (SimilarityProfile.PERFORMANCE_UPGRADE, SpecImportance.MEDIUM, 0.2),
    ])
    def test_effective_weight(self, profile, importance, expected):
        assert profile.effective_weight(importance) == pytest.approx(expected)
        assert profile.effective_weight(importance) == pytest.approx(
            importance.base_weight * profile.multiplier(importance)
        )

    @pytest.mark.parametrize("profile", list(SimilarityProfile))
    def test_optional_never_counts(self, profile: SimilarityProfile):
        assert profile.effective_weight(SpecImportance.OPTIONAL) == 0.0

    @pytest.mark.parametrize("name,expected", [
        ("REPLACEMENT", SimilarityProfile.REPLACEMENT),
        ("replacement", SimilarityProfile.REPLACEMENT),
        ("emergency-sourcing", SimilarityProfile.EMERGENCY_SOURCING),
        ("Design Phase", SimilarityProfile.DESIGN_PHASE),
        ("bogus", None),
        ("", None),
        (None, None),
    ])
    def test_from_name(self, name, expected):
        assert SimilarityProfile.from_name(name) is expected

    def test_descriptions(self):
        assert SimilarityProfile.REPLACEMENT.description.startswith("Drop-in replacement")
        assert all(p.description for p in SimilarityProfile)

    def test_to_dict(self):
        data = SimilarityProfile.COST_OPTIMIZATION.to_dict()
        assert data["name"] == "COST_OPTIMIZATION"
        assert data["minimum_score"] == 0.60
        assert data["weights"]["HIGH"] == pytest.approx(0.28)
