"""
Git Operations for Plugin Installation.

This module runs the external git executable asynchronously so that many
clones can proceed at once.

Key features:
- Clone plugins from git repositories, optionally at a branch or tag
- Check out a specific commit after cloning
- Error messages carry git's own stderr, trimmed
"""

import asyncio
import logging
from pathlib import Path

from ppm.plugin.errors import GitError

logger = logging.getLogger(__name__)

GIT_EXECUTABLE = "git"


async def _run_git(*args: str, cwd: Path | None = None) -> tuple[int, str, str]:
    """
    Run a git command and wait for it to finish.

    Returns:
        Tuple of (returncode, stdout, stderr)

    Raises:
        GitError: If git is not installed
    """
    try:
        process = await asyncio.create_subprocess_exec(
            GIT_EXECUTABLE,
            *args,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise GitError("git command not found. Please install git.") from e

    stdout, stderr = await process.communicate()
    return (
        process.returncode,
        stdout.decode(errors="replace"),
        stderr.decode(errors="replace"),
    )


async def clone_plugin(repo_url: str, target_dir: Path, branch: str | None = None) -> None:
    """
    Clone a plugin repository.

    Args:
        repo_url: Git repository URL
        target_dir: Target directory for clone (must not exist)
        branch: Optional branch or tag to clone

    Raises:
        GitError: If clone fails; the message is git's trimmed stderr
    """
    args = ["clone"]
    if branch:
        args.extend(["--branch", branch])
    args.extend([repo_url, str(target_dir)])

    logger.debug("Cloning %s into %s", repo_url, target_dir)
    returncode, _, stderr = await _run_git(*args)

    if returncode != 0:
        raise GitError(stderr.strip())


async def checkout(repo_dir: Path, ref: str) -> None:
    """
    Check out a ref in an existing clone.

    Args:
        repo_dir: Plugin repository directory
        ref: Commit, tag or branch to check out

    Raises:
        GitError: If checkout fails; the message is git's trimmed stderr
    """
    logger.debug("Checking out %s in %s", ref, repo_dir)
    returncode, _, stderr = await _run_git("checkout", ref, cwd=repo_dir)

    if returncode != 0:
        raise GitError(stderr.strip())
