"""
Configuration handling for branch_puller.

Holds the validated inputs of a single run. Nothing here is read from or
written to disk; the values come from the command line and the environment.
"""

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


# Environment variable overriding the git executable
GIT_EXECUTABLE_ENV = "BRANCH_PULLER_GIT"


class PullConfig(BaseModel):
    """Inputs for one batch pull."""

    # Folder whose immediate children are candidate repositories
    root_path: Path = Field(
        ..., description="Path to the folder containing the repositories"
    )
    branch_name: str = Field(
        ..., description="Name of the branch to check out and pull"
    )
    git_executable: str = Field(
        default_factory=lambda: os.getenv(GIT_EXECUTABLE_ENV) or "git",
        description="git binary to invoke (name on PATH or absolute path)",
    )

    @field_validator("branch_name")
    @classmethod
    def _check_branch_name(cls, value: str) -> str:
        if not value:
            raise ValueError("branch name must not be empty")
        # A newline would break matching against `git branch` lines
        if any(ch.isspace() for ch in value):
            raise ValueError(f"branch name must not contain whitespace: {value!r}")
        return value

    @field_validator("git_executable")
    @classmethod
    def _check_git_executable(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("git executable must not be empty")
        return value
