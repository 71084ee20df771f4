"""Inline CSS and the icon table for listing pages.

``ICONS`` maps a lowercase file extension to an icon family. A file row gets
the class ``icon-<ext>`` when its extension is listed, ``icon-_page``
otherwise; directories always get ``icon-_blank``.
"""

from __future__ import annotations

from types import MappingProxyType

_FAMILIES: dict[str, tuple[str, ...]] = {
    "image": ("bmp", "gif", "jpeg", "jpg", "png", "psd", "svg", "tga", "tif", "tiff", "webp"),
    "audio": ("aac", "aiff", "flac", "m4a", "mid", "mp3", "ogg", "wav", "wma"),
    "video": ("avi", "flv", "m4v", "mkv", "mov", "mp4", "mpg", "qt", "webm", "wmv"),
    "archive": ("7z", "dmg", "gz", "iso", "rar", "tar", "tgz", "zip"),
    "code": (
        "c", "cpp", "css", "h", "hpp", "html", "java", "js", "less", "php",
        "py", "rb", "sass", "scss", "sh", "sql", "ts", "xml", "yml",
    ),
    "document": (
        "csv", "doc", "docx", "dotx", "key", "odf", "ods", "odt", "otp", "ots",
        "ott", "pdf", "ppt", "rtf", "xls", "xlsx",
    ),
    "text": ("ics", "log", "md", "txt"),
    "playlist": ("cue", "m3u", "m3u8", "pls"),
    "subtitle": ("ass", "srt", "ssa", "sub", "vtt"),
}

_GLYPHS = {
    "_blank": "\U0001f4c1",
    "_page": "\U0001f4c4",
    "image": "\U0001f5bc",
    "audio": "\U0001f3b5",
    "video": "\U0001f3ac",
    "archive": "\U0001f5dc",
    "code": "\U0001f4dd",
    "document": "\U0001f4d1",
    "text": "\U0001f4c3",
    "playlist": "\U0001f4c3",
    "subtitle": "\U0001f4ac",
}

ICONS = MappingProxyType(
    {ext: family for family, exts in _FAMILIES.items() for ext in exts}
)


def _icon_rules() -> str:
    rules = [
        f'.icon-_blank::before {{ content: "{_GLYPHS["_blank"]}"; }}',
        f'.icon-_page::before {{ content: "{_GLYPHS["_page"]}"; }}',
    ]
    for family, exts in _FAMILIES.items():
        selector = ", ".join(f".icon-{ext}::before" for ext in exts)
        rules.append(f'{selector} {{ content: "{_GLYPHS[family]}"; }}')
    return "\n".join(rules)


CSS = (
    """
body, html {
  background: #fff;
  font-family: "Bitstream Vera Sans", "DejaVu Sans", Verdana, sans-serif;
}
h1 {
  font-size: 1.3em;
}
table {
  border-collapse: collapse;
}
td {
  padding: 0 .5rem;
  white-space: nowrap;
}
td.perms, td.file-size, td.last-modified {
  font-family: "DejaVu Sans Mono", Consolas, monospace;
  color: #555;
}
td.file-size {
  text-align: right;
}
tr.unreadable td {
  color: #a33;
}
a, a:visited {
  color: #00e;
  text-decoration: none;
}
a:hover {
  text-decoration: underline;
}
tr.synthetic a {
  font-weight: bold;
}
.icon {
  display: inline-block;
  width: 1.2em;
  font-style: normal;
}
address {
  color: #888;
  font-size: .8em;
}
"""
    + _icon_rules()
    + "\n"
)
