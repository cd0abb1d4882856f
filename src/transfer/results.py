"""
Transfer Results.

Structured results returned by export and import operations.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


@dataclass
class ExportResult:
    """
    Result of an export.

    Attributes:
        success: Whether an artifact was produced
        filename: Suggested file name (timestamped)
        content: File content (CSV includes a leading BOM)
        count: Number of exported records
        error: User-facing message when nothing was exported
    """

    success: bool = True
    filename: str = ""
    content: str = ""
    count: int = 0
    error: Optional[str] = None

    @classmethod
    def ok(cls, filename: str, content: str, count: int) -> "ExportResult":
        """Create a successful result."""
        return cls(success=True, filename=filename, content=content, count=count)

    @classmethod
    def fail(cls, error: str) -> "ExportResult":
        """Create a failed result."""
        return cls(success=False, error=error)


@dataclass
class ImportResult:
    """
    Result of a CSV import.

    Attributes:
        records: New records to append (existing store untouched)
        skipped_lines: 1-based lines skipped as malformed
        rekeyed: (line, original id, new id) for each colliding row
        ignored_headers: Headers with no known field
    """

    records: list[Any] = field(default_factory=list)
    skipped_lines: list[int] = field(default_factory=list)
    rekeyed: list[tuple[int, int, int]] = field(default_factory=list)
    ignored_headers: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        """User-facing summary."""
        parts = [f"成功匯入 {len(self.records)} 筆記錄"]
        if self.skipped_lines:
            lines = ", ".join(str(n) for n in self.skipped_lines)
            parts.append(f"略過 {len(self.skipped_lines)} 筆格式錯誤的資料列 (第 {lines} 行)")
        if self.rekeyed:
            parts.append(f"{len(self.rekeyed)} 筆記錄 ID 重複，已重新編號")
        return "，".join(parts)


def write_artifact(result: ExportResult, directory: Path) -> Path:
    """
    Write an export artifact to disk.

    Args:
        result: Successful ExportResult
        directory: Target directory (created if missing)

    Returns:
        Path of the written file; an existing file is never replaced,
        a "_1", "_2", ... suffix is added instead

    Raises:
        ValueError: result is not successful
    """
    if not result.success:
        raise ValueError(result.error or "Nothing to write")

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    name = Path(result.filename)
    path = directory / name.name
    counter = 1
    while path.exists():
        path = directory / f"{name.stem}_{counter}{name.suffix}"
        counter += 1
    path.write_text(result.content, encoding="utf-8", newline="")
    return path
