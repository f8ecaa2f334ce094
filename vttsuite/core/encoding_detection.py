"""
Encoding detection utilities for subtitle files.

WebVTT is defined as UTF-8, but files exported by older tools are regularly
saved in legacy code pages. This module reads them with BOM handling,
charset-normalizer detection and a manual fallback list.
"""

from pathlib import Path
from typing import Optional, Tuple
from charset_normalizer import from_path
from vttsuite.utils.constants import ENCODING_PRIORITY, UTF8_BOM
from vttsuite.utils.logging_config import get_logger

logger = get_logger(__name__)


class EncodingDetector:
    """Handles encoding detection for subtitle files."""

    @staticmethod
    def detect_encoding(file_path: Path) -> Optional[str]:
        """
        Detect the encoding of a WebVTT file.

        WebVTT is UTF-8 by definition, so a BOM or a clean UTF-8 decode
        settles it; charset-normalizer is only asked about legacy files.

        Args:
            file_path: Path to the file to analyze

        Returns:
            Detected encoding name or None if detection failed

        Example:
            >>> encoding = EncodingDetector.detect_encoding(Path("episode.vtt"))
        """
        if EncodingDetector.has_bom(file_path):
            return 'utf-8-sig'

        if EncodingDetector.is_utf8(file_path):
            return 'utf-8'

        detected = EncodingDetector._auto_detect_encoding(file_path)
        if detected:
            logger.debug(f"Auto-detected encoding for {file_path.name}: {detected}")
            return detected.lower()

        logger.debug(f"Auto-detection failed for {file_path.name}, trying manual detection")
        return EncodingDetector._manual_detect_encoding(file_path)

    @staticmethod
    def _auto_detect_encoding(file_path: Path) -> Optional[str]:
        """Use charset-normalizer to guess the encoding."""
        try:
            result = from_path(file_path).best()
        except OSError as e:
            logger.debug(f"charset-normalizer detection failed: {e}")
            return None
        return result.encoding if result else None

    @staticmethod
    def _manual_detect_encoding(file_path: Path) -> Optional[str]:
        """
        Try each encoding of the priority list until one decodes the file.

        Args:
            file_path: Path to the file

        Returns:
            First working encoding or None
        """
        raw = file_path.read_bytes()
        for encoding in ENCODING_PRIORITY:
            try:
                raw.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                continue
            logger.debug(f"Manual detection successful for {file_path.name}: {encoding}")
            return encoding

        logger.warning(f"Could not detect encoding for {file_path}")
        return None

    @staticmethod
    def read_file_with_encoding(file_path: Path) -> Tuple[str, str]:
        """
        Read a file with automatic encoding detection and proper BOM handling.

        Args:
            file_path: Path to the file to read

        Returns:
            Tuple of (file_content, encoding_used)

        Raises:
            IOError: If file cannot be read

        Example:
            >>> content, encoding = EncodingDetector.read_file_with_encoding(Path("episode.vtt"))
        """
        try:
            encoding = EncodingDetector.detect_encoding(file_path)
        except OSError as e:
            raise IOError(f"Cannot read file {file_path}: {e}") from e

        if not encoding:
            # Last resort, keep going with replacement characters
            encoding = 'utf-8'
            logger.warning(f"Failed to detect encoding for {file_path}, using UTF-8 with error replacement")
            try:
                with open(file_path, 'r', encoding=encoding, errors='replace') as f:
                    return f.read(), encoding
            except OSError as e:
                raise IOError(f"Cannot read file {file_path}: {e}") from e

        try:
            with open(file_path, 'r', encoding=encoding) as f:
                content = f.read()
            return content, encoding
        except (OSError, UnicodeDecodeError, LookupError) as e:
            raise IOError(f"Cannot read file {file_path} with encoding {encoding}: {e}") from e

    @staticmethod
    def is_utf8(file_path: Path) -> bool:
        """True if the whole file decodes as strict UTF-8."""
        try:
            file_path.read_bytes().decode('utf-8')
        except UnicodeDecodeError:
            return False
        return True

    @staticmethod
    def has_bom(file_path: Path) -> bool:
        """
        Check if file has UTF-8 BOM.

        Args:
            file_path: Path to the file

        Returns:
            True if file has UTF-8 BOM
        """
        with open(file_path, 'rb') as f:
            return f.read(len(UTF8_BOM)) == UTF8_BOM
