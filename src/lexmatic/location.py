"""Source location tracking for lexical error messages.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Line/column position of an offset in scanned input.

    Positions are 1-indexed (lineno and col_offset start at 1); offset is
    the 0-indexed position in the input string.

    Examples:
            >>> loc = SourceLocation.from_offset("ab\\ncd", 4)
            >>> str(loc)
            '2:2'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.txt:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_offset(
        cls,
        source: str,
        offset: int,
        source_file: str | None = None,
    ) -> SourceLocation:
        """Compute the location of offset within source.

        Offsets past the end of source are clamped to the end.
        """
        offset = max(0, min(offset, len(source)))
        lineno = source.count("\n", 0, offset) + 1
        last_nl = source.rfind("\n", 0, offset)
        return cls(
            lineno=lineno,
            col_offset=offset - last_nl,
            offset=offset,
            source_file=source_file,
        )
