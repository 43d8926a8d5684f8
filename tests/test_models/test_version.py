from __future__ import annotations

import pytest

from bumpwise.models.version import (
    SemanticVersion,
    compare,
    is_prerelease,
    same_triple,
)


@pytest.mark.unit
class TestSemanticVersionParse:
    """Tests for SemanticVersion.parse and try_parse."""

    def test_parse_full_version(self) -> None:
        """Test a plain major.minor.patch parses into its components."""
        version = SemanticVersion.parse("2.4.1")

        assert version.major == 2
        assert version.minor == 4
        assert version.patch == 1
        assert version.prerelease == ()

    def test_parse_prerelease_splits_identifiers(self) -> None:
        """Test numeric prerelease identifiers become ints."""
        version = SemanticVersion.parse("1.0.0-task-42.0")

        assert version.prerelease == ("task-42", 0)
        assert version.is_prerelease is True

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("v1.2.3", "1.2.3"),
            ("=1.2.3", "1.2.3"),
            ("  1.2.3 ", "1.2.3"),
            ("1.2", "1.2.0"),
            ("3", "3.0.0"),
            ("1.2.3+build.5", "1.2.3"),
        ],
    )
    def test_parse_lenient_forms(self, text: str, expected: str) -> None:
        """Test leading v/=, partial versions and build metadata are accepted."""
        assert str(SemanticVersion.parse(text)) == expected

    def test_parse_invalid_raises_value_error(self) -> None:
        """Test non-version text raises ValueError."""
        with pytest.raises(ValueError):
            SemanticVersion.parse("github:a/b")

    @pytest.mark.parametrize(
        "text", ["", "   ", "latest", "1.2.3.4", "１.2.3", "v1.٢.3", None, 123]
    )
    def test_try_parse_returns_none(self, text: object) -> None:
        """Test try_parse returns None instead of raising."""
        assert SemanticVersion.try_parse(text) is None

    def test_str_round_trips_prerelease(self) -> None:
        """Test str() renders the prerelease with a dash."""
        assert str(SemanticVersion.parse("1.0.1-beta.0")) == "1.0.1-beta.0"


@pytest.mark.unit
class TestSemanticVersionOrdering:
    """Tests for precedence comparison."""

    @pytest.mark.parametrize(
        "lower,higher",
        [
            ("1.0.0", "1.0.1"),
            ("1.9.0", "1.10.0"),
            ("1.0.0-1", "1.0.0"),
            ("1.0.0-1", "1.0.0-beta.0"),
            ("1.0.0-beta.0", "1.0.0-task-42.0"),
            ("1.0.0-alpha", "1.0.0-alpha.1"),
            ("1.1.0", "1.1.1-beta.0"),
        ],
    )
    def test_lower_ranks_below_higher(self, lower: str, higher: str) -> None:
        """Test semantic-version precedence, prerelease rules included."""
        a = SemanticVersion.parse(lower)
        b = SemanticVersion.parse(higher)

        assert a < b
        assert b > a
        assert compare(a, b) == -1
        assert compare(b, a) == 1

    def test_equal_versions_compare_zero(self) -> None:
        """Test parsing variants of one version are equal and hash alike."""
        a = SemanticVersion.parse("v1.2.3")
        b = SemanticVersion.parse("1.2.3")

        assert compare(a, b) == 0
        assert a == b
        assert hash(a) == hash(b)

    def test_sorting(self) -> None:
        """Test versions sort by precedence rather than text."""
        versions = [SemanticVersion.parse(v) for v in ["2.0.0", "10.0.0", "2.0.0-rc.1"]]

        assert [str(v) for v in sorted(versions)] == ["2.0.0-rc.1", "2.0.0", "10.0.0"]

    def test_comparison_with_other_type(self) -> None:
        """Test ordering against a non-version is unsupported."""
        with pytest.raises(TypeError):
            SemanticVersion(1, 0, 0) < "1.0.0"  # noqa: B015


@pytest.mark.unit
class TestVersionHelpers:
    """Tests for module-level helpers."""

    def test_same_triple_ignores_prerelease(self) -> None:
        """Test same_triple looks only at major.minor.patch."""
        assert same_triple(
            SemanticVersion.parse("1.0.0-1"), SemanticVersion.parse("1.0.0-task-42.0")
        )
        assert not same_triple(
            SemanticVersion.parse("1.0.0"), SemanticVersion.parse("1.0.1")
        )

    def test_is_prerelease(self) -> None:
        """Test is_prerelease mirrors the property."""
        assert is_prerelease(SemanticVersion.parse("2.0.0-alpha.0"))
        assert not is_prerelease(SemanticVersion.parse("2.0.0"))

    def test_to_semver(self) -> None:
        """Test conversion to semver.Version keeps every component."""
        converted = SemanticVersion.parse("1.2.3-rc.1").to_semver()

        assert (converted.major, converted.minor, converted.patch) == (1, 2, 3)
        assert converted.prerelease == "rc.1"
