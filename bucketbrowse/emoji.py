"""Pick a display emoji for a file from its extension."""

from __future__ import annotations

_FRAME = "\U0001f5bc\ufe0f"
_GEAR = "\u2699\ufe0f"
_CARD_BOX = "\U0001f5c3\ufe0f"
_CABINET = "\U0001f5c4\ufe0f"

UNKNOWN_EMOJI = "\u2753"

_GROUPS: tuple[tuple[tuple[str, ...], str], ...] = (
    # Images
    (("png", "gif", "bmp", "svg", "ico", "tiff", "tif"), _FRAME),
    (("webp", "jpg", "jpeg", "raw", "cr2", "nef", "arw", "heic"), "\U0001f4f7"),
    # Documents
    (("txt",), "\U0001f4c4"),
    (("pdf",), "\U0001f4d5"),
    (("doc", "docx"), "\U0001f4d8"),
    (("xls", "xlsx", "csv"), "\U0001f4ca"),
    (("ppt", "pptx"), "\U0001f4c8"),
    (("rtf",), "\U0001f4dd"),
    # Code
    (("rs",), "\U0001f980"),
    (("py",), "\U0001f40d"),
    (("js", "ts", "jsx", "tsx"), "\U0001f4dc"),
    (("html", "htm"), "\U0001f310"),
    (("css", "scss", "sass"), "\U0001f3a8"),
    (("java",), "\u2615"),
    (("cpp", "c", "cc", "cxx", "h", "hpp"), _GEAR),
    (("cs",), "\U0001f537"),
    (("php",), "\U0001f418"),
    (("rb",), "\U0001f48e"),
    (("go",), "\U0001f439"),
    (("swift",), "\U0001f989"),
    (("r",), "\U0001f4ca"),
    (("sh", "bash", "zsh", "fish"), "\U0001f41a"),
    # Archives
    (("zip", "rar", "7z", "tar", "gz", "bz2", "xz"), _CARD_BOX),
    # Audio
    (("mp3", "wav", "flac", "aac", "ogg", "m4a", "wma"), "\U0001f3b5"),
    # Video
    (("mp4", "avi", "mkv", "mov", "wmv", "flv", "webm", "m4v"), "\U0001f3ac"),
    # Executables
    (("exe", "msi", "app", "deb", "rpm", "dmg"), "\u26a1"),
    # Configuration
    (("json", "xml", "yaml", "yml", "toml", "ini", "cfg", "conf"), _GEAR),
    # Fonts
    (("ttf", "otf", "woff", "woff2", "eot"), "\U0001f524"),
    # Databases
    (("db", "sqlite", "sqlite3", "mdb"), _CABINET),
    # Logs
    (("log",), "\U0001f4cb"),
    # License/Legal
    (("license", "licence"), "\U0001f4dc"),
    # Markdown
    (("md", "markdown"), "\U0001f4d6"),
)

_EMOJI_BY_EXTENSION: dict[str, str] = {
    extension: emoji for extensions, emoji in _GROUPS for extension in extensions
}


def file_emoji(extension: str) -> str:
    """Return the emoji for a file extension (without the dot), ignoring case."""
    return _EMOJI_BY_EXTENSION.get(extension.lower(), UNKNOWN_EMOJI)