"""Shell execution utilities.

Provides safe subprocess execution with proper error handling.
"""

import os
import shutil
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def _merged_env(env: dict[str, str] | None) -> dict[str, str] | None:
    if env is None:
        return None
    return {**os.environ, **env}


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
    cwd: str | None = None,
    env: dict[str, str] | None = None,
    input: str | None = None,
) -> CommandResult:
    """Execute a shell command and return the result.

    Args:
        args: Command and arguments to execute.
        check: If True, raise CalledProcessError on non-zero exit.
        timeout: Maximum time in seconds to wait for command. None waits forever.
        cwd: Working directory for the command. If None, uses current directory.
        env: Additional environment variables (merged with current env).
        input: Text fed to the command's standard input.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.CalledProcessError: If check=True and command fails.
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=check,
        timeout=timeout,
        cwd=cwd,
        env=_merged_env(env),
        input=input,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def run_streaming(
    args: list[str],
    *,
    cwd: str | None = None,
    env: dict[str, str] | None = None,
    input: str | None = None,
) -> CommandResult:
    """Execute a command with its output going straight to the terminal.

    Used in verbose mode, where the user wants to watch package managers,
    clones and compilers as they run. Nothing is captured, so the returned
    stdout/stderr are always empty.

    Args:
        args: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Additional environment variables (merged with current env).
        input: Text fed to the command's standard input.

    Returns:
        CommandResult carrying only the exit code.

    Raises:
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        check=False,
        text=True,
        cwd=cwd,
        env=_merged_env(env),
        input=input,
    )
    return CommandResult(stdout="", stderr="", returncode=result.returncode)


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def run_interactive(
    args: list[str],
    *,
    cwd: str | None = None,
    env: dict[str, str] | None = None,
) -> int:
    """Execute a command interactively, inheriting the terminal.

    Unlike run_command(), this does NOT capture stdout/stderr,
    allowing the subprocess to interact with the user's terminal
    directly. Used to drive docker and docker-compose.

    Args:
        args: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Additional environment variables (merged with current env).

    Returns:
        Exit code of the command.

    Raises:
        FileNotFoundError: If command executable is not found.
        OSError: If command cannot be executed.
    """
    full_env = {**os.environ, **(env or {})}
    result = subprocess.run(
        args,
        check=False,
        cwd=cwd,
        env=full_env,
    )
    return result.returncode


def run_external(
    args: list[str],
    *,
    stream: bool = False,
    cwd: str | None = None,
    env: dict[str, str] | None = None,
    input: str | None = None,
) -> CommandResult:
    """Run a long-running external command without a timeout.

    Package managers, clones, compilers and installer scripts can take
    arbitrarily long, so they are never cut off.

    Args:
        args: Command and arguments to execute.
        stream: If True, let output go to the terminal (verbose mode);
            otherwise capture it.
        cwd: Working directory for the command.
        env: Additional environment variables (merged with current env).
        input: Text fed to the command's standard input.

    Returns:
        CommandResult of the command.

    Raises:
        FileNotFoundError: If command executable is not found.
    """
    if stream:
        return run_streaming(args, cwd=cwd, env=env, input=input)
    return run_command(args, timeout=None, cwd=cwd, env=env, input=input)
