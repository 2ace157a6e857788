"""Command execution on top of invoke."""

import io
from pathlib import Path

from invoke import Context, Result

from combine_merges.core.log import literal, logger


class Runner(Context):
    """invoke.Context with a single execute() entry point.

    Every git invocation goes through execute() so that commands and
    their output are traced at a consistent level.
    """

    def execute(
        self,
        command: str,
        cwd: Path | None = None,
        stdin: str | None = None,
        log_level: str | None = None,
        check: bool = True,
        interactive: bool = False,
        env: dict[str, str] | None = None,
    ) -> Result:
        """Run a shell command.

        Args:
            command: Command string to execute
            cwd: Working directory for the command
            stdin: Text fed to the command's stdin, which is then
                closed
            log_level: Level for echoing stdout/stderr lines
            check: If True, raise on a non-zero exit code
            interactive: Attach the command to the terminal (for
                editors); output is neither captured nor hidden
            env: Extra environment variables

        Returns:
            invoke.Result with stdout, stderr and exited

        Raises:
            invoke.UnexpectedExit: If check is True and the command
                exits non-zero
        """
        kwargs = {
            "hide": not interactive,
            "warn": not check,
        }

        if interactive:
            kwargs["pty"] = True
        elif stdin is not None:
            kwargs["in_stream"] = io.StringIO(stdin)
        else:
            kwargs["in_stream"] = False

        if env:
            kwargs["env"] = env

        logger.info(literal(f"$ {command}"))

        if cwd:
            with self.cd(str(cwd)):
                result = self.run(command, **kwargs)
        else:
            result = self.run(command, **kwargs)

        logger.trace(
            "{command} exited {code}",
            command=command,
            code=result.exited,
        )

        if log_level and not interactive:
            for line in result.stdout.splitlines():
                logger.log(log_level, literal(line.rstrip()))
            for line in result.stderr.splitlines():
                logger.log(log_level, literal(line.rstrip()))

        return result
