"""Import pipeline orchestration."""

from .orchestrator import FileResult, FileStatus, ImportOrchestrator, ImportSummary

__all__ = ["FileResult", "FileStatus", "ImportOrchestrator", "ImportSummary"]
