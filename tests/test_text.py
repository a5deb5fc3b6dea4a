import pytest

from weartube.player import PlayerError, PlayerState
from weartube.text import format_count, parse_duration, sanitize_comment_text
from weartube.youtube_client import YouTubeClient, build_embed_url


class TestParseDuration:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("PT1H2M3S", "1:02:03"),
            ("PT4M13S", "4:13"),
            ("PT45S", "0:45"),
            ("PT10M", "10:00"),
            ("PT2H", "2:00:00"),
            ("PT1H5S", "1:00:05"),
            ("PT0S", "0:00"),
            ("PT125M", "125:00"),
        ],
    )
    def test_formats(self, raw, expected):
        assert parse_duration(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "garbage", "P1D", "PT1.5S", "1:02"])
    def test_unparseable_is_zero(self, raw):
        assert parse_duration(raw) == "0:00"

    def test_bare_pt_is_zero(self):
        assert parse_duration("PT") == "0:00"

    def test_exposed_on_client(self):
        assert YouTubeClient.parse_duration("PT4M13S") == "4:13"


class TestEmbedUrl:
    def test_autoplay_on(self):
        url = build_embed_url("dQw4w9WgXcQ", autoplay=True)
        assert url.startswith("https://www.youtube.com/embed/dQw4w9WgXcQ?")
        assert "autoplay=1" in url

    def test_autoplay_off_by_default(self):
        url = build_embed_url("dQw4w9WgXcQ")
        assert "autoplay=0" in url
        assert "autoplay=1" not in url

    def test_fixed_parameters(self):
        query = build_embed_url("abc").split("?", 1)[1]
        assert query == (
            "autoplay=0&controls=1&modestbranding=1&rel=0&enablejsapi=1"
            "&playsinline=1&html5=1&fs=1&cc_load_policy=1"
        )

    def test_id_is_path_quoted(self):
        assert build_embed_url("a/b?c").startswith("https://www.youtube.com/embed/a%2Fb%3Fc?")


class TestSanitizeCommentText:
    def test_strips_markup_and_entities(self):
        assert sanitize_comment_text("a<br>b &amp; <a href=\"x\">c</a>") == "a b & c"

    def test_drops_non_ascii_and_control_chars(self):
        assert sanitize_comment_text("great\u200b video \U0001f525\x07!") == "great video !"

    def test_collapses_whitespace(self):
        assert sanitize_comment_text("  one\n\n two\tthree  ") == "one two three"

    def test_none(self):
        assert sanitize_comment_text(None) == ""


class TestFormatCount:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("1500000", "1M views"),
            (2_000_000_000, "2000M views"),
            ("1500", "1K views"),
            ("999", "999 views"),
            (0, "0 views"),
        ],
    )
    def test_formats(self, value, expected):
        assert format_count(value) == expected

    def test_non_numeric_passthrough(self):
        assert format_count("lots") == "lots"

    def test_custom_noun(self):
        assert format_count(12_000, "likes") == "12K likes"

    def test_none(self):
        assert format_count(None) == ""


class TestPlayerCodes:
    def test_known_state(self):
        assert PlayerState.from_code(1) is PlayerState.PLAYING
        assert PlayerState.from_code(3) is PlayerState.BUFFERING

    def test_unknown_state_is_unstarted(self):
        assert PlayerState.from_code(42) is PlayerState.UNSTARTED

    def test_errors(self):
        assert PlayerError.from_code(150) is PlayerError.NOT_ALLOWED_EMBEDDED_ALT
        assert PlayerError.from_code(7) is PlayerError.UNKNOWN
        assert PlayerError.VIDEO_NOT_FOUND.description
