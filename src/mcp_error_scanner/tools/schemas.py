"""JSON response models for the MCP tools."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from mcp_error_scanner.core.models import ErrorLine, ScanStatistics


class ErrorLineModel(BaseModel):
    line_number: int = Field(ge=1, description="1-based line number within the file.")
    content: str = Field(description="Raw line text without the line terminator.")
    timestamp: datetime | None = Field(
        default=None, description="File modification time captured when the scan started."
    )

    @classmethod
    def from_entry(cls, entry: ErrorLine) -> ErrorLineModel:
        return cls(line_number=entry.line_number, content=entry.content, timestamp=entry.timestamp)


class FileErrors(BaseModel):
    file: str = Field(description="Path relative to the scan root.")
    error_count: int = Field(ge=0, description="Error lines found in this file.")
    lines: list[ErrorLineModel] = Field(default_factory=list)


class StatisticsModel(BaseModel):
    total_files: int = 0
    processed_files: int = 0
    skipped_files: int = 0
    total_errors: int = 0
    large_files: int = 0

    @classmethod
    def from_stats(cls, stats: ScanStatistics) -> StatisticsModel:
        return cls(
            total_files=stats.total_files,
            processed_files=stats.processed_files,
            skipped_files=stats.skipped_files,
            total_errors=stats.total_errors,
            large_files=stats.large_files,
        )


class ScanResponse(BaseModel):
    root: str
    duration_ms: int = Field(ge=0, description="Wall-clock scan time in milliseconds.")
    statistics: StatisticsModel
    files: list[FileErrors] = Field(default_factory=list)
    truncated: bool = Field(
        default=False, description="True when lines were dropped to respect the limit."
    )
    warnings: list[str] = Field(default_factory=list)
