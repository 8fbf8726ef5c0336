"""System clipboard access."""

from __future__ import annotations

import logging
from typing import Callable

import pyperclip

from lowlevel_skills.errors import ClipboardWriteError

logger = logging.getLogger(__name__)

ClipboardWriter = Callable[[str], None]


def copy_to_clipboard(text: str) -> None:
    """Write text to the system clipboard.

    Args:
        text: Text to copy.

    Raises:
        ClipboardWriteError: If no clipboard mechanism is available or the
            write is rejected.
    """
    try:
        pyperclip.copy(text)
    except (pyperclip.PyperclipException, OSError) as e:
        logger.debug("Clipboard write failed: %s", e)
        raise ClipboardWriteError(str(e) or type(e).__name__) from e
