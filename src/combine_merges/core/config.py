"""Application state and configuration."""

from __future__ import annotations

from pathlib import Path

import platformdirs
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from combine_merges.core.base import BaseConfig, BaseState
from combine_merges.core.log import Logger, level_for_verbosity, setup_logger
from combine_merges.core.yaml_settings import (
    CONFIG_FILENAME,
    YamlWithIncludesSettingsSource,
)
from combine_merges.model import Commit, Diagnostic

# ============================================================
# CONFIG MODELS (loaded from YAML/env/CLI)
# ============================================================

class GitConfig(BaseConfig):
    """Where and how git is run."""

    workdir: Path = Field(
        default=Path("."),
        description="Directory inside the repository to operate on",
    )


class Config(BaseConfig):
    """Application configuration loaded from YAML/env/CLI."""

    logger: Logger = Field(
        default_factory=Logger,
        description="Logger sink configuration",
    )
    git: GitConfig = Field(
        default_factory=GitConfig,
        description="Git repository settings",
    )
    log_root: Path = Field(
        default_factory=(
            lambda: Path(platformdirs.user_state_dir()) / "combine-merges"
        ),
        description="Root directory for log files",
    )
    commands: dict[str, dict[str, str]] = Field(
        default_factory=dict,
        description=(
            "Command templates by category; commands.git holds the "
            "git invocations"
        ),
    )

    def setup_logger(self, run_name: str, verbosity: int = 0) -> Logger:
        """Install the global logger for this run.

        The console level follows the -v count. Without -v a level set
        in the YAML config wins over the default.
        """
        console = self.logger.console.model_copy()
        if verbosity or console.level is None:
            console.level = level_for_verbosity(verbosity)

        self.logger = setup_logger(
            log_root=self.log_root,
            run_name=run_name,
            console=console,
            file=self.logger.file,
            level=self.logger.level,
        )
        return self.logger


# ============================================================
# RUNTIME STATE MODELS (mutable during workflow execution)
# ============================================================

class CombineOptions(BaseModel):
    """What the user asked for on the command line."""

    commit: str = Field(description="Lower bound of the chain")
    branch: str | None = Field(
        default=None,
        description="Branch to rewrite; HEAD when unset",
    )
    second_parent: str | None = Field(
        default=None,
        description="Override for the new merge's second parent",
    )
    octopus_parents: list[str] = Field(
        default_factory=list,
        description="Extra parents appended after the second parent",
    )
    message_commit: str | None = Field(
        default=None,
        description="Commit whose message is used verbatim",
    )
    edit: bool = False
    force: bool = False
    dry_run: bool = False
    verbose: int = 0

    @property
    def target_ref(self) -> str:
        if self.branch:
            return f"refs/heads/{self.branch}"
        return "HEAD"


class CombineState(BaseState):
    """Combine workflow runtime state (mutates during execution)."""

    options: CombineOptions | None = None
    target_ref: str | None = Field(
        default=None,
        description="Full name of the ref being rewritten",
    )
    tip: str | None = Field(
        default=None,
        description="Value of target_ref when the run started",
    )
    base: str | None = Field(
        default=None,
        description="Resolved lower bound; first parent of the result",
    )
    chain: list[Commit] = Field(
        default_factory=list,
        description="Commits being collapsed, tip first",
    )
    second_parent: str | None = None
    extra_parents: list[str] = Field(default_factory=list)
    message: str | None = None
    new_commit: str | None = None
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    status: str = Field(
        default="pending",
        description="pending, running, complete, failed",
    )


class Runtime(BaseModel):
    """All runtime state, grouped by workflow."""

    combine: CombineState = Field(default_factory=CombineState)


# ============================================================
# STATE (config + runtime combined)
# ============================================================

class State(BaseSettings):
    """Configuration and runtime state for one run.

    This is the object every workflow node receives. Loading it
    validates configuration from YAML, .env, environment variables
    and the command line.
    """

    config: Config = Field(
        default_factory=Config,
        description="Application configuration (from YAML/env/CLI)",
    )
    runtime: Runtime = Field(
        default_factory=Runtime,
        description="Runtime state (mutates during workflow execution)",
    )
    include: list[str] | None = Field(
        default=None,
        description=(
            "Additional YAML files to merge over the configuration. "
            "Use --include on the CLI or include: in YAML files."
        ),
    )

    model_config = SettingsConfigDict(
        yaml_file=CONFIG_FILENAME,
        env_file=".env",
        env_prefix="COMBINE_MERGES_",
        env_nested_delimiter="__",
        arbitrary_types_allowed=True,
        extra='ignore',
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority, highest first: init args (including the CLI),
        YAML layers, .env, environment, secrets."""
        return (
            init_settings,
            YamlWithIncludesSettingsSource(settings_cls),
            dotenv_settings,
            env_settings,
            file_secret_settings,
        )


__all__ = [
    "CombineOptions",
    "CombineState",
    "Config",
    "GitConfig",
    "Runtime",
    "State",
]
