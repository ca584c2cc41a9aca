"""Path and key helpers shared by the storage backends."""


class FileHelper:
    """Helper class for file operations."""

    @staticmethod
    def relative_to_prefix(path: str, prefix: str) -> str:
        """Strip a textual prefix from the start of a path.

        No canonicalization is performed: ``prefix`` is treated as an opaque
        string. Paths that do not start with ``prefix`` are returned as-is.

        Args:
            path: Absolute path (or object key)
            prefix: Prefix to strip

        Returns:
            Remainder of the path, possibly starting with a separator
        """
        if prefix and path.startswith(prefix):
            return path[len(prefix):]
        return path

    @staticmethod
    def join_prefix(prefix: str, relative: str, sep: str = "/") -> str:
        """Join a target prefix and a relative remainder with exactly one separator.

        Args:
            prefix: Target prefix (may be empty or end with a separator)
            relative: Relative remainder (may start with a separator)
            sep: Separator to join with

        Returns:
            Joined path
        """
        relative = relative.lstrip(sep)
        if not prefix:
            return relative
        if not relative:
            return prefix
        return f"{prefix.rstrip(sep)}{sep}{relative}"

    @staticmethod
    def object_key(relative: str) -> str:
        """Normalize an object key so that it never begins with a separator."""
        return relative.lstrip("/")

    @staticmethod
    def key_prefix(prefix: str) -> str:
        """Listing prefix for the object keys written under ``prefix``.

        Ends with exactly one separator, so sibling keys that only share the
        leading characters (``outa.txt`` for prefix ``out``) never match. An
        empty prefix stays empty and matches the whole bucket.
        """
        key = FileHelper.object_key(prefix).rstrip("/")
        return f"{key}/" if key else ""

    @staticmethod
    def format_file_size(size_bytes: int) -> str:
        """Format file size in human readable format.

        Args:
            size_bytes: Size in bytes

        Returns:
            Formatted size string
        """
        if size_bytes == 0:
            return "0 B"

        size_names = ["B", "KB", "MB", "GB", "TB", "PB"]
        i = 0

        while size_bytes >= 1024 and i < len(size_names) - 1:
            size_bytes /= 1024.0
            i += 1

        return f"{size_bytes:.1f} {size_names[i]}"

