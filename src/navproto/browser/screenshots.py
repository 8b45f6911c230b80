"""Screenshot capture and persistence.

A screenshot is captured into a temporary file, its extension is taken
from the captured file name, and the file is copied to
``<folder>/<name>.<extension>`` (overwriting).  The resulting record is
validated before it is returned.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from navproto.exceptions import ScreenshotError, ScreenshotPersistError
from navproto.models.screenshot import FileName, Screenshot

if TYPE_CHECKING:
    from navproto.browser.session import BrowserSession

logger = logging.getLogger(__name__)

_CAPTURE_PREFIX = "navproto-"
_CAPTURE_SUFFIX = ".png"


def capture(session: BrowserSession) -> Path:
    """Capture the current viewport into a temporary PNG file.

    Raises:
        ScreenshotError: Playwright could not take the screenshot.
    """
    try:
        fd, raw = tempfile.mkstemp(prefix=_CAPTURE_PREFIX, suffix=_CAPTURE_SUFFIX)
        os.close(fd)
    except OSError as exc:
        raise ScreenshotError(f"Could not create a temporary capture file: {exc}") from exc
    temp_file = Path(raw)
    try:
        session.page.screenshot(
            path=str(temp_file),
            full_page=session.settings.screenshots.full_page,
        )
    except Exception as exc:
        temp_file.unlink(missing_ok=True)
        raise ScreenshotError(f"Screenshot capture failed: {exc}") from exc
    return temp_file


def derive_name(raw_filename: str) -> FileName:
    """Split a captured file name at its rightmost dot."""
    return FileName.parse(raw_filename)


def persist(temp_file: Path, folder: Path, name: str, extension: str) -> Path:
    """Copy *temp_file* to ``<folder>/<name>.<extension>``, replacing any existing file.

    The temporary file is removed afterwards, whether or not the copy worked.

    Raises:
        ScreenshotPersistError: The folder or the target file could not be written,
            or the target path is not a valid file name.
    """
    target = folder / f"{name}.{extension}"
    try:
        folder.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(temp_file, target)
    except (OSError, ValueError) as exc:
        raise ScreenshotPersistError(str(target), str(exc)) from exc
    finally:
        temp_file.unlink(missing_ok=True)
    return target


def validate(name: str, path: Path | None) -> Screenshot:
    return Screenshot.create(name, path)


def take_screenshot(session: BrowserSession, name: str, folder: Path | str | None = None) -> Screenshot:
    """Capture, name, persist and validate a screenshot.

    Args:
        session: Session whose page is captured.
        name: Logical screenshot name; becomes the file stem.
        folder: Target folder. Defaults to ``screenshots.output_dir``.

    Returns:
        The validated ``Screenshot`` record. Its name is trimmed and matches
        the file stem.

    Raises:
        InvalidScreenshotError: *name* is blank; nothing is captured or written.
    """
    target_folder = Path(folder) if folder is not None else Path(session.settings.screenshots.output_dir)
    stem = validate(name, target_folder).name
    temp_file = capture(session)
    try:
        file_name = derive_name(temp_file.name)
    except ScreenshotError:
        temp_file.unlink(missing_ok=True)
        raise
    path = persist(temp_file, target_folder, stem, file_name.extension)
    screenshot = validate(stem, path)
    logger.debug("Screenshot %r saved to %s", screenshot.name, path)
    return screenshot
