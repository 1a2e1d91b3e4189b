# SPDX-License-Identifier: MIT
"""Unit tests for PEP 440 version parsing."""

import pytest

from versionmatch import (
    InvalidVersionError,
    ParseError,
    PreRelease,
    PreReleaseKind,
    Version,
    is_valid_version,
    parse_version,
)


class TestParseVersion:
    """Tests for parse_version function."""

    def test_basic_version(self):
        """Test parsing a plain release."""
        v = parse_version("1.2.3")
        assert v.epoch == 0
        assert v.release == (1, 2, 3)
        assert v.pre is None
        assert v.post is None
        assert v.dev is None
        assert v.local is None

    def test_single_segment(self):
        v = parse_version("7")
        assert v.release == (7,)

    def test_many_segments(self):
        v = parse_version("1.2.3.4.5.6")
        assert v.release == (1, 2, 3, 4, 5, 6)

    def test_leading_zeros_are_normalized(self):
        """Test that numeric segments are read as integers."""
        v = parse_version("01.002.0003")
        assert v.release == (1, 2, 3)
        assert str(v) == "1.2.3"

    def test_epoch(self):
        v = parse_version("2!1.0")
        assert v.epoch == 2
        assert v.release == (1, 0)
        assert str(v) == "2!1.0"

    def test_large_numbers(self):
        v = parse_version("20240101.999999999999999999999")
        assert v.release == (20240101, 999999999999999999999)

    @pytest.mark.parametrize(
        "text, kind, number",
        [
            ("1.0a1", PreReleaseKind.ALPHA, 1),
            ("1.0alpha1", PreReleaseKind.ALPHA, 1),
            ("1.0b2", PreReleaseKind.BETA, 2),
            ("1.0beta2", PreReleaseKind.BETA, 2),
            ("1.0rc3", PreReleaseKind.RC, 3),
            ("1.0c3", PreReleaseKind.RC, 3),
            ("1.0pre3", PreReleaseKind.RC, 3),
            ("1.0preview3", PreReleaseKind.RC, 3),
        ],
    )
    def test_prerelease_spellings(self, text, kind, number):
        """Test that every pre-release spelling normalizes to its kind."""
        v = parse_version(text)
        assert v.pre == PreRelease(kind, number)

    @pytest.mark.parametrize("text", ["1.0-a1", "1.0_a1", "1.0.a1", "1.0a.1", "1.0a-1", "1.0A1"])
    def test_prerelease_separators(self, text):
        """Test that separators and case around the tag are normalized away."""
        assert str(parse_version(text)) == "1.0a1"

    def test_prerelease_implicit_number(self):
        assert str(parse_version("1.0rc")) == "1.0rc0"

    @pytest.mark.parametrize(
        "text", ["1.0.post1", "1.0post1", "1.0-post1", "1.0_post1", "1.0.rev1", "1.0.r1", "1.0-1"]
    )
    def test_postrelease_spellings(self, text):
        assert parse_version(text).post == 1
        assert str(parse_version(text)) == "1.0.post1"

    def test_postrelease_implicit_number(self):
        assert str(parse_version("1.0.post")) == "1.0.post0"

    def test_legacy_post_after_prerelease(self):
        assert str(parse_version("1.0a1-2")) == "1.0a1.post2"

    @pytest.mark.parametrize("text", ["1.0.dev1", "1.0dev1", "1.0-dev1", "1.0_dev1", "1.0.DEV1"])
    def test_devrelease_spellings(self, text):
        assert parse_version(text).dev == 1
        assert str(parse_version(text)) == "1.0.dev1"

    def test_devrelease_implicit_number(self):
        assert str(parse_version("1.0.dev")) == "1.0.dev0"

    def test_local_version(self):
        v = parse_version("1.0+ubuntu-1_ABC.007")
        assert v.local == ("ubuntu", 1, "abc", 7)
        assert str(v) == "1.0+ubuntu.1.abc.7"

    def test_every_segment(self):
        """Test parsing all union variants in one version."""
        v = parse_version("3!1.2.3rc4.post5.dev6+local.7")
        assert v.epoch == 3
        assert v.release == (1, 2, 3)
        assert v.pre == PreRelease(PreReleaseKind.RC, 4)
        assert v.post == 5
        assert v.dev == 6
        assert v.local == ("local", 7)
        assert str(v) == "3!1.2.3rc4.post5.dev6+local.7"

    def test_surrounding_whitespace_trimmed(self):
        assert str(parse_version("  \t1.0\n")) == "1.0"

    def test_leading_v(self):
        assert str(parse_version("v1.0")) == "1.0"
        assert str(parse_version("V2.0")) == "2.0"

    def test_trailing_zeros_preserved(self):
        assert str(parse_version("1.0.0")) == "1.0.0"

    def test_version_classmethod(self):
        assert Version.parse("1.0") == parse_version("1.0")


class TestInvalidVersions:
    """Tests for invalid version strings."""

    def test_empty_string(self):
        with pytest.raises(InvalidVersionError) as exc:
            parse_version("")
        assert "empty" in exc.value.reason

    def test_whitespace_only(self):
        with pytest.raises(InvalidVersionError):
            parse_version("   ")

    def test_empty_release_segment(self):
        """Test that 1.0..1 reports the empty segment and where it is."""
        with pytest.raises(InvalidVersionError) as exc:
            parse_version("1.0..1")
        assert exc.value.reason == "Empty release segment"
        assert exc.value.position == 3
        assert exc.value.fragment == ".."

    def test_trailing_dot(self):
        with pytest.raises(InvalidVersionError) as exc:
            parse_version("1.0.")
        assert exc.value.reason == "Empty release segment"

    def test_non_numeric(self):
        with pytest.raises(InvalidVersionError) as exc:
            parse_version("abc")
        assert exc.value.reason == "Release segment must be numeric"
        assert exc.value.position == 0
        assert exc.value.fragment == "abc"

    def test_non_numeric_inner_segment(self):
        with pytest.raises(InvalidVersionError) as exc:
            parse_version("1.x.3")
        assert exc.value.reason == "Release segment must be numeric"
        assert exc.value.fragment == "x"

    def test_unknown_tag(self):
        with pytest.raises(InvalidVersionError) as exc:
            parse_version("1.0gamma1")
        assert "gamma" in exc.value.reason
        assert exc.value.position == 3

    def test_segments_out_of_order(self):
        with pytest.raises(InvalidVersionError) as exc:
            parse_version("1.0.dev1.post1")
        assert "order" in exc.value.reason

    @pytest.mark.parametrize("text", ["!1.0", "1.0!2", "1!2!3", "1!"])
    def test_malformed_epoch(self, text):
        with pytest.raises(InvalidVersionError) as exc:
            parse_version(text)
        assert "epoch" in exc.value.reason

    def test_internal_whitespace(self):
        with pytest.raises(InvalidVersionError) as exc:
            parse_version("1.0 rc1")
        assert exc.value.position == 3

    @pytest.mark.parametrize("text", ["1.0+", "1.0+abc..def", "1.0+abc."])
    def test_empty_local_segment(self, text):
        with pytest.raises(InvalidVersionError) as exc:
            parse_version(text)
        assert exc.value.reason == "Local version segment cannot be empty"

    def test_local_disallowed_separator(self):
        with pytest.raises(InvalidVersionError) as exc:
            parse_version("1.0+abc/def")
        assert "separator" in exc.value.reason
        assert exc.value.fragment == "/"

    def test_trailing_garbage(self):
        with pytest.raises(InvalidVersionError):
            parse_version("1.0-")

    def test_non_ascii_digits(self):
        with pytest.raises(InvalidVersionError):
            parse_version("١.0")

    def test_position_accounts_for_leading_whitespace(self):
        with pytest.raises(InvalidVersionError) as exc:
            parse_version("  1..0")
        assert exc.value.position == 3

    def test_non_string_input(self):
        with pytest.raises(InvalidVersionError):
            parse_version(123)  # type: ignore

    def test_none_input(self):
        with pytest.raises(InvalidVersionError):
            parse_version(None)  # type: ignore

    def test_is_value_error(self):
        """Test that callers catching ValueError also see parse failures."""
        with pytest.raises(ValueError):
            parse_version("not a version")
        assert issubclass(InvalidVersionError, ParseError)

    def test_message_cites_text_and_position(self):
        with pytest.raises(InvalidVersionError) as exc:
            parse_version("1.0..1")
        assert str(exc.value) == "Empty release segment: `1.0..1` at position 3 (`..`)"


class TestIsValidVersion:
    """Tests for is_valid_version function."""

    def test_valid(self):
        assert is_valid_version("1.0") is True
        assert is_valid_version("1!2.0.post1.dev3+abc") is True

    def test_invalid(self):
        assert is_valid_version("1.0..1") is False
        assert is_valid_version("") is False

    def test_invalid_non_string(self):
        assert is_valid_version(123) is False  # type: ignore


class TestVersionConstruction:
    """Tests for building Version objects directly from components."""

    def test_direct_construction(self):
        v = Version(epoch=1, release=[1, 2], pre=PreRelease(PreReleaseKind.BETA, 3), local=["abc", 4])
        assert v.release == (1, 2)
        assert v.local == ("abc", 4)
        assert str(v) == "1!1.2b3+abc.4"

    def test_prerelease_from_spelling(self):
        assert PreRelease("alpha", 1).kind is PreReleaseKind.ALPHA

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"release": ()},
            {"release": (1, -1)},
            {"epoch": -1},
            {"post": -2},
            {"dev": -3},
            {"local": ()},
            {"local": ("ABC",)},
            {"local": ("a.b",)},
        ],
    )
    def test_invalid_components(self, kwargs):
        with pytest.raises(InvalidVersionError):
            Version(**kwargs)

    def test_negative_prerelease_number(self):
        with pytest.raises(ValueError):
            PreRelease(PreReleaseKind.ALPHA, -1)

    def test_unknown_prerelease_kind(self):
        with pytest.raises(ValueError, match="Unknown pre-release kind"):
            PreRelease("gamma", 1)

    def test_prerelease_number_must_be_int(self):
        """Test that a string number is rejected instead of failing the comparison."""
        with pytest.raises(ValueError, match="must be an integer"):
            PreRelease(PreReleaseKind.ALPHA, "1")


class TestVersionProperties:
    """Tests for derived Version properties and helpers."""

    def test_public_and_base_version(self):
        v = parse_version("1!2.3rc1.post2+local")
        assert v.public == "1!2.3rc1.post2"
        assert v.base_version == "1!2.3"

    def test_major_minor_micro(self):
        v = parse_version("4.5")
        assert (v.major, v.minor, v.micro) == (4, 5, 0)

    @pytest.mark.parametrize(
        "text, pre, dev, post, stable",
        [
            ("1.0", False, False, False, True),
            ("1.0a1", True, False, False, False),
            ("1.0.dev1", True, True, False, False),
            ("1.0.post1", False, False, True, True),
            ("1.0.post1.dev1", True, True, True, False),
        ],
    )
    def test_release_flags(self, text, pre, dev, post, stable):
        v = parse_version(text)
        assert v.is_prerelease is pre
        assert v.is_devrelease is dev
        assert v.is_postrelease is post
        assert v.is_stable is stable

    def test_without_local(self):
        v = parse_version("1.0+abc")
        assert v.is_local is True
        assert str(v.without_local()) == "1.0"
        assert v.without_local().is_local is False

    def test_only_release(self):
        assert str(parse_version("1!2.0rc1.post1.dev1+x").only_release()) == "1!2.0"

    def test_with_release(self):
        assert str(parse_version("1.2rc1").with_release((1, 3))) == "1.3rc1"

    def test_frozen(self):
        """Test that Version is immutable."""
        v = parse_version("1.0")
        with pytest.raises(AttributeError):
            v.epoch = 2  # type: ignore

    def test_hashable(self):
        assert {parse_version("1.0"), parse_version("1.0.0")} == {parse_version("1")}
