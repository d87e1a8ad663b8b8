"""
File export functionality for TUI designs.

This module handles writing designs and rendered screens to disk:
- .tui documents - the editor's JSON project format
- Text files (.txt) - the rendered screen as plain text
- PNG images - a rasterized snapshot of the screen in a monospace font

The ScreenExporter class provides the save methods and handles font
loading, image rendering, and file I/O.
"""

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image, ImageDraw, ImageFont

from .models import ComponentNode
from .parser import TuiDocument

logger = logging.getLogger(__name__)

# Tried in order after the caller's font
MONOSPACE_FONTS = (
    # Linux
    "DejaVuSansMono",
    "DejaVu Sans Mono",
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    # macOS
    "Monaco",
    "Menlo",
    "/System/Library/Fonts/Monaco.ttf",
    "/System/Library/Fonts/Menlo.ttc",
    # Windows
    "Consolas",
    "Cascadia Code",
    "Courier New",
    "C:/Windows/Fonts/consola.ttf",
)

LINE_SPACING = 1.2
MIN_IMAGE_SIZE = 100


def suggested_filename(name: str) -> str:
    """
    File name the editor proposes when saving a design.

    Example:
        >>> suggested_filename("Login Screen")
        'login-screen.tui'
    """
    stem = re.sub(r"\s+", "-", name.strip().lower()) or "untitled"
    return f"{stem}.tui"


class ScreenExporter:
    """
    Exports designs and rendered screens to files.

    Attributes:
        default_font: Default font name for PNG export.
    """

    def __init__(self, default_font: Optional[str] = None):
        """
        Initialize the exporter.

        Args:
            default_font: Default font name for PNG export (e.g., "Cascadia Code").
        """
        self.default_font = default_font

    def save_document(
        self,
        document: Union[TuiDocument, ComponentNode],
        filename: Union[str, Path],
        theme: Optional[str] = None,
    ) -> Path:
        """
        Save a design as a .tui document.

        The savedAt stamp is refreshed on every save.

        Args:
            document: The document, or a bare tree to wrap in one
            filename: Output path (see suggested_filename)
            theme: Theme tag for a bare tree; ignored for documents

        Returns:
            The path written
        """
        if isinstance(document, ComponentNode):
            document = TuiDocument(tree=document, theme=theme)
        document.saved_at = datetime.now(timezone.utc).isoformat()

        output_path = Path(filename)
        output_path.write_text(
            json.dumps(document.to_dict(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        logger.info("Saved document %r to %s", document.name, output_path)
        return output_path

    def save_txt(self, screen: str, filename: Union[str, Path]) -> None:
        """
        Save a rendered screen to a text file.

        Args:
            screen: Screen text, as returned by ScreenRenderer.render
            filename: Output filename (should end in .txt)
        """
        output_path = Path(filename)
        output_path.write_text(screen, encoding="utf-8")
        logger.info("Saved screen text to %s", output_path)

    def save_png(
        self,
        screen: str,
        filename: Union[str, Path],
        font_size: int = 16,
        bg_color: str = "#000000",
        fg_color: str = "#E0E0E0",
        padding: int = 20,
        font: Optional[str] = None,
        scale: int = 2,
    ) -> None:
        """
        Save a rendered screen as a PNG snapshot.

        Each screen cell maps to one monospace character cell, so borders
        and box-drawing glyphs line up exactly as on a terminal.

        Args:
            screen: Screen text to rasterize.
            filename: Output filename (should end in .png).
            font_size: Font size in points.
            bg_color: Background color as hex string.
            fg_color: Text color as hex string.
            padding: Padding around the screen in points.
            font: Font name to use (overrides default_font if provided).
            scale: Resolution multiplier (2 for retina-sharp output).

        Example:
            >>> exporter = ScreenExporter(default_font="Cascadia Code")
            >>> exporter.save_png(screen, "login.png", font_size=20)
        """
        lines = screen.split("\n")
        loaded_font = self._load_monospace_font(font_size * scale, font or self.default_font)

        left, top, right, bottom = loaded_font.getbbox("M")
        cell_width = right - left
        line_height = int((bottom - top) * LINE_SPACING)
        margin = padding * scale

        columns = max((len(line) for line in lines), default=0)
        size = (
            max(cell_width * columns + margin * 2, MIN_IMAGE_SIZE * scale),
            max(line_height * len(lines) + margin * 2, MIN_IMAGE_SIZE * scale),
        )

        image = Image.new("RGB", size, bg_color)
        draw = ImageDraw.Draw(image)
        for row, line in enumerate(lines):
            draw.text((margin, margin + row * line_height), line, font=loaded_font, fill=fg_color)

        output_path = Path(filename)
        image.save(output_path, "PNG")
        logger.info("Saved %dx%d screen snapshot to %s", size[0], size[1], output_path)

    def _load_monospace_font(self, font_size: int, font_name: Optional[str] = None):
        """
        Load a monospace font for PNG rendering.

        Tries the requested font, then common system monospace fonts, then
        Pillow's built-in default.
        """
        candidates: List[str] = [font_name] if font_name else []
        candidates.extend(MONOSPACE_FONTS)

        for candidate in candidates:
            try:
                return ImageFont.truetype(candidate, font_size)
            except OSError:
                continue

        logger.debug("No monospace font found, using Pillow's default")
        try:
            return ImageFont.load_default(size=font_size)
        except TypeError:
            # Pillow before 10.1 has no sized default font
            return ImageFont.load_default()
