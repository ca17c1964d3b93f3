"""Tests for model helpers: technology encoding, skill categories and levels."""

import pytest

from models import (
    Profile,
    SkillCategory,
    level_description,
    parse_technologies,
    technologies_as_json,
)


@pytest.mark.unit
class TestTechnologiesEncoding:
    """Tests for technologies_as_json / parse_technologies."""

    def test_encodes_compact_json_array(self):
        """Should produce a compact JSON array string."""
        assert technologies_as_json(["Rust", "SQLite"]) == '["Rust","SQLite"]'

    def test_decodes_back_to_same_list(self):
        """Should parse the stored string back to the original order."""
        stored = technologies_as_json(["Python", "FastAPI", "SQLite"])
        assert parse_technologies(stored) == ["Python", "FastAPI", "SQLite"]

    def test_keeps_non_ascii_characters(self):
        """Should not escape non-ASCII technology names."""
        assert technologies_as_json(["Café"]) == '["Café"]'

    @pytest.mark.parametrize("raw", ["", None, "not json", '{"a": 1}'])
    def test_unreadable_values_map_to_empty_list(self, raw):
        """Should return [] for empty, malformed or non-list values."""
        assert parse_technologies(raw) == []


@pytest.mark.unit
class TestSkillCategory:
    """Tests for SkillCategory parsing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Backend", SkillCategory.BACKEND),
            ("backend", SkillCategory.BACKEND),
            ("  DEVOPS ", SkillCategory.DEVOPS),
            ("mobile", SkillCategory.MOBILE),
        ],
    )
    def test_parses_any_casing(self, raw, expected):
        """Should resolve category names regardless of case and padding."""
        assert SkillCategory.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["InvalidCategory", "", None, "Back end"])
    def test_unknown_returns_none(self, raw):
        """Should return None for values outside the fixed set."""
        assert SkillCategory.parse(raw) is None

    def test_values_lists_fixed_set_in_order(self):
        """Should expose the seven canonical category names."""
        assert SkillCategory.values() == [
            "Frontend",
            "Backend",
            "Database",
            "DevOps",
            "Tools",
            "Mobile",
            "Other",
        ]


@pytest.mark.unit
class TestLevelDescription:
    @pytest.mark.parametrize(
        ("level", "label"),
        [
            (1, "Beginner"),
            (2, "Novice"),
            (3, "Intermediate"),
            (4, "Advanced"),
            (5, "Expert"),
            (6, "Unknown"),
        ],
    )
    def test_labels(self, level, label):
        assert level_description(level) == label


@pytest.mark.unit
class TestProfileSocialLinks:
    def test_lists_only_links_that_are_set(self):
        """Should skip missing accounts and keep LinkedIn, GitHub, Twitter order."""
        profile = Profile(
            name="Jane",
            title="Dev",
            bio="Bio",
            email="jane@example.com",
            location="Lyon",
            linkedin_url=None,
            github_url="https://github.com/jane",
            twitter_url="https://twitter.com/jane",
        )

        assert profile.social_links() == [
            ("GitHub", "https://github.com/jane"),
            ("Twitter", "https://twitter.com/jane"),
        ]
