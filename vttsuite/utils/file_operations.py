"""
File operations and backup utilities for WebVTT processing.

Files are never edited in place: content goes to a temporary file next to
the destination and replaces it in one step, after an optional timestamped
backup of the previous version.
"""

import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import List, Optional
from .constants import BACKUP_DIR_NAME, SUBTITLE_EXTENSIONS
from .logging_config import get_logger

logger = get_logger(__name__)


class FileHandler:
    """Handles file operations with proper error handling and logging."""

    @staticmethod
    def backup_path_for(file_path: Path, backup_dir: Optional[Path] = None) -> Path:
        """
        Pick a free backup file name for a file.

        Names look like ``episode_20240131_142500.vtt`` inside the backup
        directory; ``_1``, ``_2``... is appended when several backups are
        taken within the same second.

        Args:
            file_path: File that will be backed up
            backup_dir: Backup directory, defaults to ``subtitle_backups``
                beside the file

        Returns:
            Path that does not exist yet
        """
        if backup_dir is None:
            backup_dir = file_path.parent / BACKUP_DIR_NAME

        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        candidate = backup_dir / f"{file_path.stem}_{stamp}{file_path.suffix}"
        counter = 1
        while candidate.exists():
            candidate = backup_dir / f"{file_path.stem}_{stamp}_{counter}{file_path.suffix}"
            counter += 1
        return candidate

    @staticmethod
    def create_backup(file_path: Path, backup_dir: Optional[Path] = None) -> Path:
        """
        Copy a file into the backup directory.

        Args:
            file_path: Path to the file to backup
            backup_dir: Optional custom backup directory

        Returns:
            Path to the created backup file

        Raises:
            FileNotFoundError: If the file does not exist
            IOError: If backup creation fails

        Example:
            >>> backup_path = FileHandler.create_backup(Path("episode.vtt"))
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        backup_path = FileHandler.backup_path_for(file_path, backup_dir)
        try:
            backup_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(file_path, backup_path)
        except OSError as e:
            logger.error(f"Failed to back up {file_path}: {e}")
            raise IOError(f"Backup creation failed for {file_path}: {e}") from e

        logger.info(f"Backed up {file_path.name} to {backup_path}")
        return backup_path

    @staticmethod
    def safe_write(file_path: Path, content: str, encoding: str = 'utf-8',
                   create_backup: bool = True) -> None:
        """
        Replace a file's content without leaving it half written.

        Content is written with ``\\n`` line endings on every platform to a
        temporary file in the destination directory, which then replaces the
        destination.

        Args:
            file_path: Path to write to
            content: Content to write
            encoding: File encoding to use
            create_backup: Whether to back up an existing destination first

        Raises:
            IOError: If the write fails, the message names the destination
        """
        temp_name = None
        try:
            if create_backup and file_path.exists():
                FileHandler.create_backup(file_path)

            file_path.parent.mkdir(parents=True, exist_ok=True)

            fd, temp_name = tempfile.mkstemp(prefix=f".{file_path.name}.", suffix=".tmp",
                                             dir=file_path.parent)
            with open(fd, 'w', encoding=encoding, newline='\n') as f:
                f.write(content)

            # mkstemp creates owner-only files
            if file_path.exists():
                shutil.copymode(file_path, temp_name)
            else:
                os.chmod(temp_name, 0o644)
            os.replace(temp_name, file_path)
            temp_name = None

        except OSError as e:
            logger.error(f"Failed to write {file_path}: {e}")
            raise IOError(f"Write operation failed for {file_path}: {e}") from e

        finally:
            if temp_name is not None and os.path.exists(temp_name):
                os.unlink(temp_name)

        logger.debug(f"Wrote {len(content)} characters to {file_path}")

    @staticmethod
    def find_subtitle_files(directory: Path, recursive: bool = True) -> List[Path]:
        """
        Find WebVTT files in a directory.

        Extensions are matched case-insensitively, backup directories are
        skipped.

        Args:
            directory: Directory to search
            recursive: Whether to search subdirectories

        Returns:
            Sorted list of subtitle file paths
        """
        if not directory.is_dir():
            logger.warning(f"Directory not found or not a directory: {directory}")
            return []

        candidates = directory.rglob("*") if recursive else directory.iterdir()
        subtitle_files = sorted(
            path for path in candidates
            if path.is_file()
            and path.suffix.lower() in SUBTITLE_EXTENSIONS
            and BACKUP_DIR_NAME not in path.relative_to(directory).parts
        )

        logger.debug(f"Found {len(subtitle_files)} subtitle files in {directory}")
        return subtitle_files
