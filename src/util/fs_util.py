"""File system utility functions for article files."""

from pathlib import Path


class FSUtil:
    """Utility class for file system operations."""

    @staticmethod
    def find_files_by_extensions(
        directory: Path,
        extensions: list[str],
        recursive: bool,
    ) -> list[Path]:
        """Find files matching any of the given extensions in a directory.

        Args:
            directory: Directory to search in.
            extensions: File extensions to search for (e.g., [".md", ".markdown"]).
                Each can include or exclude the leading dot; matching ignores case.
            recursive: If True, search recursively in subdirectories.

        Returns:
            List of Path objects matching the extensions, sorted.

        Raises:
            FileNotFoundError: If the directory does not exist.
            NotADirectoryError: If the path is not a directory.
        """
        if not directory.exists():
            raise FileNotFoundError(f"Directory not found: {directory}")
        if not directory.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {directory}")

        wanted = {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}
        candidates = directory.rglob("*") if recursive else directory.iterdir()

        return sorted(path for path in candidates if path.is_file() and path.suffix.lower() in wanted)

    @staticmethod
    def read_text_file(file_path: Path) -> str:
        """Read UTF-8 encoded text file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the path is not a regular file.
            UnicodeDecodeError: If the file cannot be decoded as UTF-8.
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        if not file_path.is_file():
            raise ValueError(f"Path is not a file: {file_path}")

        return file_path.read_text(encoding="utf-8")

    @staticmethod
    def write_text_file(file_path: Path, content: str, create_parents: bool) -> None:
        """Write UTF-8 encoded text file.

        Args:
            file_path: Path where the file should be written.
            content: Content to write to the file.
            create_parents: If True, create parent directories if they don't exist.
        """
        if create_parents:
            FSUtil.ensure_directory_exists(file_path.parent)

        file_path.write_text(content, encoding="utf-8")

    @staticmethod
    def ensure_directory_exists(directory: Path) -> None:
        """Ensure a directory exists, creating it if necessary.

        Raises:
            NotADirectoryError: If the path exists but is not a directory.
        """
        if directory.exists() and not directory.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {directory}")
        directory.mkdir(parents=True, exist_ok=True)
