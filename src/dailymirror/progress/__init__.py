"""Progress reporting adapters."""

from dailymirror.progress.rich_progress import RichProgressReporter


__all__ = ["RichProgressReporter"]
