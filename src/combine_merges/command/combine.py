"""Combine command - collapse a chain of merges into one merge."""

from __future__ import annotations

from combine_merges.core.config import CombineOptions, State
from combine_merges.core.log import literal, logger
from combine_merges.errors import CombineMergesError
from combine_merges.git.base import Repository
from combine_merges.git.repository import GitRepository


class CombineCommand:
    """Runs the combine workflow and turns its outcome into an exit code.

    This is the only place diagnostics and errors are printed; the
    workflow nodes and validation functions just collect or raise.
    """

    def __init__(
        self,
        options: CombineOptions,
        repository: Repository | None = None,
    ):
        self.options = options
        self.repository = repository

    def _repository(self, state: State) -> Repository:
        if self.repository is not None:
            return self.repository
        return GitRepository(
            workdir=state.config.git.workdir,
            commands=state.config.commands.get("git"),
        )

    async def run_workflow(self, state: State) -> int:
        """Run the combine workflow.

        Args:
            state: State instance

        Returns:
            Exit code: 0 on success, the failing git command's code,
            or 1 for other failures
        """
        from combine_merges.workflow.graph import create_workflow
        from combine_merges.workflow.nodes import ResolveRefs

        combine = state.runtime.combine
        combine.options = self.options
        workflow = create_workflow()

        try:
            async with workflow.iter(
                ResolveRefs(), state=state, deps=self._repository(state)
            ) as run:
                async for _node in run:
                    pass
        except CombineMergesError as e:
            combine.status = "failed"
            self._report(state)
            logger.error(literal(str(e)))
            return e.exit_code

        self._report(state)
        if self.options.dry_run:
            print(run.result.output)
        return 0

    @staticmethod
    def _report(state: State) -> None:
        for diagnostic in state.runtime.combine.diagnostics:
            logger.warn(
                literal(diagnostic.message),
                commit=diagnostic.commit,
            )
