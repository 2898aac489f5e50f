from __future__ import annotations

import platform
import shutil
import subprocess


def clipboard_cmd() -> list[str] | None:
    """Return the clipboard copy command for the current platform."""
    system = platform.system()
    if system == "Darwin":
        return ["pbcopy"]
    if system == "Linux":
        if shutil.which("xclip"):
            return ["xclip", "-selection", "clipboard"]
        if shutil.which("xsel"):
            return ["xsel", "--clipboard", "--input"]
        if shutil.which("wl-copy"):
            return ["wl-copy"]
        return None
    if system == "Windows":
        return ["clip"]
    return None


def copy_text(text: str) -> bool:
    """Copy ``text`` with the platform clipboard command.

    Returns False when no command is available, so the caller can fall back
    to another mechanism. Raises subprocess/OS errors when the command fails.
    """
    cmd = clipboard_cmd()
    if not cmd:
        return False
    subprocess.run(cmd, input=text.encode("utf-8"), check=True, timeout=5)
    return True
