"""Utility functions for claudecode."""

from .tempfiles import TempArtifact, schedule_delete, temp_artifact, write_temp_artifact

__all__ = ["TempArtifact", "schedule_delete", "temp_artifact", "write_temp_artifact"]
