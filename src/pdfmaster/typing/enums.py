"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value.strip())
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class OperationKind(_EnumMixin):
    """Page-manipulation operations supported by the pipeline."""

    MERGE = "merge"
    REMOVE_PAGES = "remove-pages"
    SPLIT_AT_POINTS = "split-at-points"
    EXTRACT_RANGES = "extract-ranges"
    SPLIT_INDIVIDUAL = "split-individual"


class SplitType(_EnumMixin):
    """Split variants accepted by the split endpoint form field."""

    SPLIT_AT_PAGES = "split-at-pages"
    EXTRACT_RANGES = "extract-ranges"
    SPLIT_INDIVIDUAL = "split-individual"

    def to_operation(self) -> OperationKind:
        """Return the pipeline operation for this split variant.

        Returns:
            OperationKind: Matching operation kind.
        """
        mapping = {
            SplitType.SPLIT_AT_PAGES: OperationKind.SPLIT_AT_POINTS,
            SplitType.EXTRACT_RANGES: OperationKind.EXTRACT_RANGES,
            SplitType.SPLIT_INDIVIDUAL: OperationKind.SPLIT_INDIVIDUAL,
        }
        return mapping[self]


class ErrorKind(_EnumMixin):
    """Typed failure categories reported to callers."""

    INVALID_PDF = "invalid_pdf"
    EMPTY_INPUT = "empty_input"
    INVALID_NUMBER = "invalid_number"
    INVALID_RANGE = "invalid_range"
    OUT_OF_BOUNDS = "out_of_bounds"
    ALL_PAGES_REMOVED = "all_pages_removed"
    INSUFFICIENT_SOURCES = "insufficient_sources"
    ASSEMBLY_FAILED = "assembly_failed"


class UploadKind(_EnumMixin):
    """Upload families gated by the HTTP layer."""

    PDF = "pdf"
    IMAGE = "image"
    WORD = "word"
    POWERPOINT = "powerpoint"
