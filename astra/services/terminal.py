# astra/services/terminal.py
from __future__ import annotations

from typing import List, Sequence

from astra.models.workshop import FileNode

BANNER = "Terminal ready. Type commands below."

HELP_LINES = [
    "Available commands:",
    "  npm install - Install Node.js packages",
    "  npm run build - Build the project",
    "  ls / dir - List files",
    "  clear / cls - Clear terminal",
    "  help - Show this help message",
]


def run_command(command: str, output: List[str], tree: Sequence[FileNode]) -> List[str]:
    """
    Simulated shell for the workshop. Nothing is executed; each known command
    prints canned lines. Returns the new output buffer.
    """
    if not command.strip():
        return output

    output = output + [f"$ {command}"]
    cmd = command.strip().lower()

    if cmd in ("clear", "cls"):
        return [BANNER]

    if cmd in ("npm install", "npm i"):
        return output + [
            "Installing Node.js packages...",
            "added 1234 packages in 5.2s",
            "✓ Node.js packages installed successfully",
        ]

    if cmd.startswith("npm install ") or cmd.startswith("npm i "):
        pkg = cmd.split(" ")[-1]
        return output + [f"Installing {pkg}...", f"✓ {pkg} installed successfully"]

    if cmd == "npm run build":
        return output + ["Building project...", "✓ Build completed successfully"]

    if cmd in ("ls", "dir"):
        listing = "  ".join(n.name for n in tree)
        return output + [listing or "No files yet"]

    if cmd == "help":
        return output + HELP_LINES

    return output + [f"Command not found: {command}. Type 'help' for available commands."]
