import pytest

from bucketbrowse.emoji import UNKNOWN_EMOJI, file_emoji

FRAME = "\U0001f5bc\ufe0f"
GEAR = "\u2699\ufe0f"


@pytest.mark.parametrize(
    "extension, expected",
    [
        ("png", FRAME),
        ("tif", FRAME),
        ("jpg", "\U0001f4f7"),
        ("txt", "\U0001f4c4"),
        ("pdf", "\U0001f4d5"),
        ("rs", "\U0001f980"),
        ("py", "\U0001f40d"),
        ("java", "\u2615"),
        ("cpp", GEAR),
        ("json", GEAR),
        ("zip", "\U0001f5c3\ufe0f"),
        ("sqlite3", "\U0001f5c4\ufe0f"),
        ("mp3", "\U0001f3b5"),
        ("mkv", "\U0001f3ac"),
        ("exe", "\u26a1"),
        ("md", "\U0001f4d6"),
    ],
)
def test_known_extensions(extension, expected):
    assert file_emoji(extension) == expected


def test_case_is_ignored():
    assert file_emoji("PNG") == file_emoji("png")
    assert file_emoji("JpEg") == file_emoji("jpeg")


def test_csv_and_r_share_chart_emoji():
    assert file_emoji("csv") == file_emoji("r")


def test_scripts_and_licence_share_scroll():
    assert file_emoji("js") == file_emoji("license") == file_emoji("licence")


@pytest.mark.parametrize("extension", ["", "unknownext", "png2", ".png"])
def test_unknown_extensions(extension):
    assert file_emoji(extension) == UNKNOWN_EMOJI