# astra/services/preview.py
from __future__ import annotations

import logging
import re
from typing import Any, List, Sequence

logger = logging.getLogger(__name__)

PREVIEW_EXTENSIONS = ("html", "css", "js", "ts")

_BODY_OPEN = re.compile(r"<body[^>]*>")
_DOCTYPE = re.compile(r"\s*<!DOCTYPE[^>]*>", re.IGNORECASE)

SKELETON = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Generated Project</title>
  <style>
{css}
  </style>
</head>
<body>
  <div id="root"></div>
  <script>
{js}
  </script>
</body>
</html>"""


def affects_preview(path: str) -> bool:
    return path.rsplit(".", 1)[-1].lower() in PREVIEW_EXTENSIONS


def _is_html(f: Any) -> bool:
    return f.language == "html" or f.path.endswith(".html")


def _is_css(f: Any) -> bool:
    return f.language == "css" or f.path.endswith(".css")


def _is_script(f: Any) -> bool:
    return (
        f.language in ("javascript", "typescript")
        or f.path.endswith(".js")
        or f.path.endswith(".ts")
    )


def _joined(files: List[Any]) -> str:
    return "\n".join(f.content or "" for f in files)


def inject_styles(html: str, css: str) -> str:
    block = f"<style>\n{css}\n</style>"
    if "</head>" in html:
        return html.replace("</head>", f"{block}\n</head>", 1)
    if "<head>" in html:
        return html.replace("<head>", f"<head>\n{block}", 1)
    if "<html" in html:
        # no head at all: open one right after <html and reopen as body
        return html.replace("<html", f"<html>\n<head>\n{block}\n</head>\n<body", 1)
    # bare fragment: head goes right after the doctype line
    head = f"<head>\n{block}\n</head>\n"
    doctype = _DOCTYPE.match(html)
    if doctype:
        pos = doctype.end()
        rest = html[pos:].lstrip("\n")
        return f"{html[:pos]}\n{head}{rest}"
    return f"{head}{html}"


def inject_script(html: str, js: str) -> str:
    block = f"<script>\n{js}\n</script>"
    if "</body>" in html:
        return html.replace("</body>", f"{block}\n</body>", 1)
    body = _BODY_OPEN.search(html)
    if body:
        pos = body.end()
        return f"{html[:pos]}\n{block}\n{html[pos:]}"
    return f"{html}\n{block}"


def build_preview_from_files(files: Sequence[Any]) -> str:
    """
    Assemble one self-contained HTML document from generated files.

    ``files`` may be ParsedFile or FileNode objects; only ``path``,
    ``content`` and ``language`` are read. The first HTML file is the base
    document, every CSS file is inlined into a single <style> block and every
    JS/TS file into a single <script> block.
    """
    html_file = next((f for f in files if _is_html(f)), None)
    css_files = [f for f in files if _is_css(f)]
    js_files = [f for f in files if _is_script(f)]

    logger.debug(
        "building preview: html=%s css=%s js=%s",
        html_file.path if html_file else None,
        [f.path for f in css_files],
        [f.path for f in js_files],
    )

    if html_file is None:
        return SKELETON.format(css=_joined(css_files), js=_joined(js_files))

    html = html_file.content or ""
    if "<!DOCTYPE" not in html:
        html = f"<!DOCTYPE html>\n{html}"

    if css_files:
        html = inject_styles(html, _joined(css_files))
    if js_files:
        html = inject_script(html, _joined(js_files))

    return html
