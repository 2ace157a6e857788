"""Value types shared by the repository layer and the workflow."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Commit(BaseModel):
    """A commit as read from the object database."""

    model_config = ConfigDict(frozen=True)

    sha: str = Field(description="Full commit hash")
    parents: tuple[str, ...] = Field(
        default=(),
        description="Parent hashes in order",
    )
    message: str = Field(default="", description="Raw commit message")

    @property
    def is_merge(self) -> bool:
        return len(self.parents) >= 2


class Diagnostic(BaseModel):
    """A non-fatal finding reported to the user at the end of a run."""

    model_config = ConfigDict(frozen=True)

    level: Literal["warning"] = "warning"
    message: str
    commit: str | None = None
