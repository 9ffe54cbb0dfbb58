# astra/services/code_parser.py
from __future__ import annotations

import re
from typing import Dict, List

from astra.models.workshop import ParsedFile, ParsedFolder, ParsedResponse

LANGUAGE_MAP: Dict[str, str] = {
    "html": "html",
    "css": "css",
    "js": "javascript",
    "ts": "typescript",
    "jsx": "javascript",
    "tsx": "typescript",
    "json": "json",
    "md": "markdown",
    "py": "python",
    "java": "java",
    "cpp": "cpp",
    "c": "c",
    "go": "go",
    "rs": "rust",
    "php": "php",
    "rb": "ruby",
    "swift": "swift",
    "kt": "kotlin",
    "toml": "toml",
}

_FENCED_BLOCK = re.compile(r"```.*?```", re.DOTALL)
_MARKER = re.compile(r"###\s*FILE:")
_FILE_BLOCK = re.compile(r"###\s*FILE:\s*([^\n]+)\n(.*?)(?=###\s*FILE:|\Z)", re.DOTALL)
_WHOLE_FENCE = re.compile(r"^```[\w-]*\n(.*?)\n```$", re.DOTALL)
_OPENING_FENCE = re.compile(r"^```[\w-]*\n")
_CLOSING_FENCE = re.compile(r"\n```$")


def language_for_path(path: str) -> str:
    extension = path.rsplit(".", 1)[-1].lower() if path else ""
    return LANGUAGE_MAP.get(extension, "text")


def strip_code_fence(content: str) -> str:
    """Remove one layer of markdown fencing, keeping the inner code."""
    content = content.strip()
    fenced = _WHOLE_FENCE.match(content)
    if fenced:
        return fenced.group(1).strip()
    content = _OPENING_FENCE.sub("", content, count=1)
    content = _CLOSING_FENCE.sub("", content, count=1)
    return content.strip()


def extract_explanation(text: str) -> str:
    marker = _MARKER.search(text)
    prose = text[:marker.start()] if marker else text
    return _FENCED_BLOCK.sub("", prose).strip()


def parse_ai_response(text: str) -> ParsedResponse:
    """
    Split a model reply into files, their parent folders and the prose
    explanation written before the first file marker.

    A reply without any marker is conversational: no files, and the whole
    text becomes the explanation.
    """
    if not _FILE_BLOCK.search(text):
        return ParsedResponse(files=[], folders=[], explanation=text)

    files: List[ParsedFile] = []
    folders: List[ParsedFolder] = []
    seen_folders = set()

    for match in _FILE_BLOCK.finditer(text):
        path = match.group(1).strip()
        content = strip_code_fence(match.group(2))

        dir_path = path.rsplit("/", 1)[0] if "/" in path else ""
        if dir_path and dir_path not in seen_folders:
            seen_folders.add(dir_path)
            folders.append(ParsedFolder(path=dir_path))

        files.append(ParsedFile(path=path, content=content, language=language_for_path(path)))

    return ParsedResponse(files=files, folders=folders, explanation=extract_explanation(text))
