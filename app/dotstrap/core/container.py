"""Container test driver.

Builds the test image from the project's Dockerfile and runs the
container variant of the setup inside it as a non-root user. Prefers
docker-compose when installed, falling back to plain docker.
"""

import logging
import os
import shlex
from pathlib import Path

from dotstrap.utils.shell import command_exists, run_interactive

logger = logging.getLogger(__name__)

IMAGE_NAME = "dotfiles-test"
CONTAINER_HOME = "/home/testuser"
CONTAINER_PROJECT = f"{CONTAINER_HOME}/project"


class ContainerError(Exception):
    """Raised when the container test cannot be started."""


def detect_container_tool() -> str:
    """Pick the container tool to drive.

    Returns:
        "docker-compose" if installed, otherwise "docker".

    Raises:
        ContainerError: If neither is installed.
    """
    if command_exists("docker-compose"):
        return "docker-compose"
    if command_exists("docker"):
        return "docker"
    msg = "Docker is not installed. Please install Docker to test in a container."
    raise ContainerError(msg)


def container_setup_script() -> str:
    """Shell snippet run inside the container: setup, then an interactive shell."""
    return (
        f"cd {CONTAINER_HOME} && "
        "echo 'Running container setup...' && "
        "dotstrap setup --container && "
        "echo 'Setup complete! Starting interactive shell...' && "
        "/bin/bash"
    )


def compose_args() -> list[str]:
    return ["docker-compose", "up", "--build"]


def build_args(context: Path, tag: str = IMAGE_NAME) -> list[str]:
    return ["docker", "build", "-t", tag, str(context)]


def run_args(context: Path, tag: str = IMAGE_NAME, term: str | None = None) -> list[str]:
    """Arguments for an interactive, throwaway run of the test image.

    The project checkout is mounted over the copy baked into the image so
    that local edits to the dotfiles are picked up without a rebuild.
    """
    return [
        "docker",
        "run",
        "-it",
        "--rm",
        "-v",
        f"{context.resolve()}:{CONTAINER_PROJECT}",
        "-e",
        f"TERM={term or os.environ.get('TERM', 'xterm')}",
        tag,
        "/bin/bash",
        "-c",
        container_setup_script(),
    ]


def run_container_test(context: Path, tag: str = IMAGE_NAME) -> int:
    """Build the test image and run the container setup in it.

    Args:
        context: Project directory holding the Dockerfile.
        tag: Image tag for the plain docker path.

    Returns:
        Exit code of the last container command.

    Raises:
        ContainerError: If no container tool is installed or the
            Dockerfile is missing.
    """
    if not (context / "Dockerfile").is_file():
        msg = f"No Dockerfile found in {context}"
        raise ContainerError(msg)

    tool = detect_container_tool()
    cwd = str(context)

    if tool == "docker-compose":
        args = compose_args()
        logger.info("Running %s", shlex.join(args))
        return run_interactive(args, cwd=cwd)

    build = build_args(context, tag)
    logger.info("Running %s", shlex.join(build))
    code = run_interactive(build, cwd=cwd)
    if code != 0:
        return code

    run = run_args(context, tag)
    logger.info("Running %s", shlex.join(run))
    return run_interactive(run, cwd=cwd)
