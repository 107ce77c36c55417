import re
from datetime import datetime, timezone
from urllib.parse import unquote

import pytest

from bucketbrowse.bucket import Directory, Entry, File, MemoryBucket
from bucketbrowse.emoji import file_emoji
from bucketbrowse.state import decode_expanded_keys, encode_expanded_keys
from bucketbrowse.views import (
    DirectoryState,
    format_size,
    relative_name,
    render_directory,
    render_entry,
    render_page,
    render_root,
)

UPLOADED = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def bucket():
    store = MemoryBucket()
    store.put("dir1/file1.txt", b"hello", UPLOADED)
    store.put("dir1/dir2/file2.txt", b"two", UPLOADED)
    store.put("dir1/dir2/file3.jpg", b"jpg", UPLOADED)
    store.put("dir1/dir2/dir3/file4.txt", b"four", UPLOADED)
    return store


class FailingBucket:
    def get(self, key):
        return None

    def list(self, prefix="", delimiter=None):
        raise OSError("unavailable")


def _toggle_hrefs(html):
    return re.findall(r'href="\?(?:state=([^"]*))?"', html)


def test_state_emojis():
    assert DirectoryState.UNEXPANDED.to_emoji() == "\U0001f4c1"
    assert DirectoryState.LOADING.to_emoji() == "\u23f3"
    assert DirectoryState.LOADED.to_emoji() == "\U0001f4c2"
    assert DirectoryState.ERROR.to_emoji() == "\u274c"


def test_relative_name_of_directory_and_file():
    assert relative_name("dir1/dir2/") == "dir2"
    assert relative_name("dir1/file1.txt") == "file1.txt"


def test_relative_name_without_parent_raises():
    with pytest.raises(ValueError):
        relative_name("dir1/")


def test_format_size_values():
    assert format_size(0) == "0 B"
    assert format_size(1500) == "1.50 kB"
    assert format_size(999).endswith(" B")
    assert format_size(2_500_000).endswith(" MB")


def test_format_size_negative_raises():
    with pytest.raises(ValueError):
        format_size(-1)


def test_render_file_entry(bucket):
    html = render_entry(Entry("dir1/file1.txt", File(5, UPLOADED)), 1, set(), bucket)
    assert 'data-depth="1"' in html
    assert file_emoji("txt") in html
    assert 'href="/dir1/file1.txt" download>file1.txt</a>' in html
    assert format_size(5) in html
    assert UPLOADED.strftime("%Y-%m-%d %H:%M:%S") in html


def test_unexpanded_directory_links_to_expanding_state(bucket):
    html = render_entry(Entry("dir1/dir2/", Directory()), 0, set(), bucket)
    assert DirectoryState.UNEXPANDED.to_emoji() in html
    assert "file2.txt" not in html
    (state,) = _toggle_hrefs(html)
    assert decode_expanded_keys(unquote(state)) == {"dir1/dir2/"}


def test_expanded_directory_shows_children(bucket):
    html = render_entry(Entry("dir1/dir2/", Directory()), 0, {"dir1/dir2/"}, bucket)
    assert DirectoryState.LOADED.to_emoji() in html
    assert "file2.txt" in html
    assert "file3.jpg" in html
    assert 'data-depth="1"' in html
    assert "file4.txt" not in html
    assert html.index(">dir3</a>") < html.index("file2.txt")


def test_expanded_directory_links_collapse_and_nested_expand(bucket):
    html = render_entry(Entry("dir1/dir2/", Directory()), 0, {"dir1/dir2/"}, bucket)
    states = _toggle_hrefs(html)
    decoded = [decode_expanded_keys(unquote(s)) if s else set() for s in states]
    assert decoded == [set(), {"dir1/dir2/", "dir1/dir2/dir3/"}]


def test_render_directory_strips_leading_slash(bucket):
    rows, state = render_directory(bucket, "/dir1/dir2/", 0, set())
    assert state is DirectoryState.LOADED
    assert "file2.txt" in rows


def test_render_directory_failure_sets_error_state():
    assert render_directory(FailingBucket(), "x/", 0, set()) == ("", DirectoryState.ERROR)


def test_render_root_with_parent_link(bucket):
    html = render_root(bucket, "/dir1/dir2/", set())
    assert '<a href="/dir1/">../</a>' in html
    assert "<th>Name</th>" in html
    assert "file2.txt" in html


def test_render_root_without_parent_link(bucket):
    html = render_root(bucket, "/dir1/", set())
    assert "../" not in html
    assert "file1.txt" in html


def test_render_root_at_top_level_raises(bucket):
    with pytest.raises(ValueError):
        render_root(bucket, "/", set())


def test_render_page_shell(bucket):
    html = render_page(bucket, "/dir1/")
    assert html.startswith("<!DOCTYPE html>")
    assert "<h1>/dir1/</h1>" in html
    assert 'href="/styles.css"' in html
    assert "file2.txt" not in html


def test_render_page_expands_from_state(bucket):
    html = render_page(bucket, "/dir1/", encode_expanded_keys({"dir1/dir2/"}))
    assert "file2.txt" in html
    assert "file4.txt" not in html


def test_render_page_malformed_state_expands_nothing(bucket):
    html = render_page(bucket, "/dir1/", "%%%")
    assert "file2.txt" not in html
    assert "file1.txt" in html