#!/usr/bin/env python3
"""git-combine-merges CLI - collapse a chain of merges into one merge."""

import asyncio
import re
import sys

from pydantic import Field
from pydantic_settings import CliApp, CliPositionalArg, SettingsConfigDict

from combine_merges.command.combine import CombineCommand
from combine_merges.core.config import CombineOptions, State
from combine_merges.core.log import logger

_SHORT_VERBOSE = re.compile(r"^-(v+)$")
# git abbreviates hashes to at least 4 digits, so a count is shorter
_VERBOSE_COUNT = re.compile(r"^\d{1,3}$")


def expand_verbosity(argv: list[str]) -> list[str]:
    """Rewrite bare -v/--verbose flags into a single --verbose=N.

    argparse has no counting flag through pydantic-settings, so
    `-v -v`, `-vv` and `--verbose` are summed here. Flags followed by
    a number of up to three digits (`-v 2`, `--verbose 2`) and
    `--verbose=2` are left alone; a longer number after `-v` is taken
    as the commit.
    Nothing after `--` is touched.
    """
    result = []
    count = 0
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            result.extend(argv[i:])
            break

        has_value = (
            i + 1 < len(argv) and bool(_VERBOSE_COUNT.match(argv[i + 1]))
        )
        short = _SHORT_VERBOSE.match(arg)
        if arg == "--verbose" and not has_value:
            count += 1
        elif short and not (arg == "-v" and has_value):
            count += len(short.group(1))
        else:
            result.append(arg)
        i += 1

    if count:
        result.insert(0, f"--verbose={count}")
    return result


class CliState(State):
    """Rewrite a linear chain of merge commits into a single merge.

    The new merge has <commit> as its first parent, the tip's second
    parent (or --second-parent) as its second, the tip's tree, and the
    tip's message with every "# Conflicts:" section of the chain
    merged into it. The branch (or HEAD) is then moved to it, unless
    it changed while the command was running.

    Configuration sources (in priority order):
    1. Command-line arguments
    2. --include files, ./combine-merges.yaml, user config file
    3. .env file
    4. Environment variables (COMBINE_MERGES_CONFIG__GIT__WORKDIR=...)
    """

    commit: CliPositionalArg[str] = Field(
        description="Lower bound of the chain; first parent of the result"
    )
    edit: bool = Field(
        default=False,
        description="Edit the combined message before committing",
    )
    branch: str | None = Field(
        default=None,
        description="Operate on this branch instead of HEAD",
    )
    second_parent: str | None = Field(
        default=None,
        description="Use this commit as the new merge's second parent",
    )
    octopus_parent: list[str] = Field(
        default_factory=list,
        description="Append an additional parent (repeatable)",
    )
    message_commit: str | None = Field(
        default=None,
        description="Use this commit's message verbatim",
    )
    force: bool = Field(
        default=False,
        description="Downgrade a second parent tree mismatch to a warning",
    )
    dry_run: bool = Field(
        default=False,
        description="Print the new commit id without updating the ref",
    )
    verbose: int = Field(
        default=0,
        description="Trace git invocations; repeat for more detail",
    )

    model_config = SettingsConfigDict(
        cli_prog_name="git-combine-merges",
        cli_implicit_flags=True,
        cli_kebab_case=True,
        cli_use_class_docs_for_groups=True,
        cli_shortcuts={
            "edit": "e",
            "branch": "b",
            "second-parent": "s",
            "octopus-parent": "o",
            "message-commit": "m",
            "force": "f",
            "dry-run": "n",
            "verbose": "v",
        },
    )

    def options(self) -> CombineOptions:
        return CombineOptions(
            commit=self.commit,
            branch=self.branch,
            second_parent=self.second_parent,
            octopus_parents=self.octopus_parent,
            message_commit=self.message_commit,
            edit=self.edit,
            force=self.force,
            dry_run=self.dry_run,
            verbose=self.verbose,
        )

    def cli_cmd(self):
        """Run the combine workflow and exit with its status."""
        self.config.setup_logger(
            run_name="combine-merges", verbosity=self.verbose
        )

        # Closing the logger flushes the file sink
        with logger:
            command = CombineCommand(self.options())
            exit_code = asyncio.run(command.run_workflow(self))
            raise SystemExit(exit_code)


def main():
    """Main entry point for CLI."""
    CliApp.run(CliState, cli_args=expand_verbosity(sys.argv[1:]))


if __name__ == "__main__":
    main()
