"""Unit tests for URL classification and identifier extraction."""

import pytest

from src.core.exceptions import InvalidUrlError
from src.models.source_reference import SnsPlatform
from src.utils.url_classifier import (
    classify_url,
    extract_instagram_id,
    extract_reddit_post_id,
    extract_tiktok_id,
    extract_youtube_id,
    require_youtube_id,
)

VIDEO_ID = "VcuM9JvZrp4"


class TestExtractYoutubeId:
    @pytest.mark.parametrize(
        "url",
        [
            f"https://www.youtube.com/watch?v={VIDEO_ID}",
            f"https://youtube.com/watch?feature=share&v={VIDEO_ID}",
            f"https://m.youtube.com/watch?v={VIDEO_ID}&t=42s",
            f"https://youtu.be/{VIDEO_ID}",
            f"https://youtu.be/{VIDEO_ID}?si=abcdef",
            f"https://www.youtube.com/shorts/{VIDEO_ID}",
            f"https://www.youtube.com/embed/{VIDEO_ID}",
        ],
    )
    def test_supported_shapes(self, url):
        assert extract_youtube_id(url) == VIDEO_ID

    def test_rejects_short_id(self):
        assert extract_youtube_id("https://youtu.be/VcuM9JvZrp") is None

    def test_rejects_long_id(self):
        """11자 뒤에 id 문자가 이어지면 잘라서 반환하지 않는다."""
        assert extract_youtube_id(f"https://youtu.be/{VIDEO_ID}X") is None

    @pytest.mark.parametrize(
        "url",
        ["", "not a url", "https://vimeo.com/123456789", "https://www.youtube.com/channel/UC1234567890"],
    )
    def test_unrecognized(self, url):
        assert extract_youtube_id(url) is None


class TestOtherPlatformIds:
    def test_instagram_shortcodes(self):
        assert extract_instagram_id("https://www.instagram.com/reel/C1a2B3c4D5e/") == "C1a2B3c4D5e"
        assert extract_instagram_id("https://www.instagram.com/p/DAbc_123/?img_index=2") == "DAbc_123"
        assert extract_instagram_id("https://www.instagram.com/traveler/reels/XyZ987/") == "XyZ987"

    def test_reddit_post_id(self):
        url = "https://www.reddit.com/r/JapanTravel/comments/1abcde/best_ramen_in_tokyo/"
        assert extract_reddit_post_id(url) == "1abcde"
        assert extract_reddit_post_id("https://redd.it/1abcde") == "1abcde"

    def test_tiktok_id(self):
        assert extract_tiktok_id("https://www.tiktok.com/@traveler/video/7234567890123456789") == "7234567890123456789"
        assert extract_tiktok_id("https://vm.tiktok.com/ZMabc123/") == "ZMabc123"


class TestClassifyUrl:
    def test_youtube(self):
        source = classify_url(f"  https://www.youtube.com/shorts/{VIDEO_ID}  ")
        assert source.platform == SnsPlatform.YOUTUBE
        assert source.identifier == VIDEO_ID
        assert source.contentType == "video"

    def test_instagram_post_vs_reel(self):
        assert classify_url("https://www.instagram.com/p/DAbc123/").contentType == "post"
        assert classify_url("https://www.instagram.com/reel/DAbc123/").contentType == "video"

    def test_reddit_and_tiktok(self):
        reddit = classify_url("https://www.reddit.com/r/travel/comments/xyz789/title/")
        tiktok = classify_url("https://www.tiktok.com/@a.b/video/123")
        assert (reddit.platform, reddit.identifier) == (SnsPlatform.REDDIT, "xyz789")
        assert (tiktok.platform, tiktok.identifier) == (SnsPlatform.TIKTOK, "123")

    def test_unrecognized_raises(self):
        with pytest.raises(InvalidUrlError):
            classify_url("https://example.com/some/page")

    def test_classification_has_no_side_effects(self):
        url = f"https://youtu.be/{VIDEO_ID}"
        assert classify_url(url) == classify_url(url)


def test_require_youtube_id_raises_for_non_youtube():
    with pytest.raises(InvalidUrlError):
        require_youtube_id("https://www.instagram.com/reel/C1a2B3c4D5e/")
