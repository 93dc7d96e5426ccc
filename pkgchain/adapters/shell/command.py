"""
Command runner — the SINGLE PLACE where ``subprocess.run`` is called.

Every backend query and install goes through ``run_command``. It
handles the sudo prefix, timeouts, and output capture, and folds
every failure into a Receipt. A user interrupt is not a failure:
``KeyboardInterrupt`` propagates so the whole batch stops.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import time

from pkgchain.core.models.receipt import Receipt
from pkgchain.core.observability.logging_config import COMMAND_LOGGER

# Command transcript: what ran, how it exited, what it printed to stderr
logger = logging.getLogger(COMMAND_LOGGER)

# Captured output is tail-truncated to keep receipts small
_OUTPUT_TAIL = 2000


def is_root() -> bool:
    return os.geteuid() == 0


def run_command(
    cmd: list[str],
    *,
    backend: str,
    target: str,
    needs_sudo: bool = False,
    timeout: int = 300,
) -> Receipt:
    """Run a command and return a receipt. Never raises (except on interrupt).

    Args:
        cmd: Command list for ``subprocess.run()``.
        backend: Backend name recorded on the receipt.
        target: Package identifier recorded on the receipt.
        needs_sudo: Prefix with ``sudo`` unless already root.
        timeout: Seconds before the command is treated as failed.

    Returns:
        Receipt with status ``ok`` iff the exit code was 0.
    """
    if needs_sudo and not is_root():
        cmd = ["sudo"] + cmd

    command = shlex.join(cmd)
    logger.debug("$ %s", command)
    start = time.monotonic()

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired:
        logger.debug("timed out after %ss: %s", timeout, command)
        return Receipt.failure(
            backend=backend,
            target=target,
            error=f"Command timed out after {timeout}s",
            metadata={"command": command, "timeout": timeout},
        )
    except FileNotFoundError:
        return Receipt.failure(
            backend=backend,
            target=target,
            error=f"Executable not found: {cmd[0]}",
            metadata={"command": command},
        )
    except OSError as e:
        return Receipt.failure(
            backend=backend,
            target=target,
            error=f"Command execution error: {e}",
            metadata={"command": command},
        )

    elapsed_ms = int((time.monotonic() - start) * 1000)
    stdout = (result.stdout or "")[-_OUTPUT_TAIL:].strip()
    stderr = (result.stderr or "")[-_OUTPUT_TAIL:].strip()

    if result.returncode == 0:
        return Receipt.success(
            backend=backend,
            target=target,
            output=stdout,
            duration_ms=elapsed_ms,
            metadata={
                "command": command,
                "return_code": result.returncode,
                "stderr": stderr,
            },
        )

    logger.debug("exit %d after %dms: %s", result.returncode, elapsed_ms, command)
    if stderr:
        logger.debug("stderr:\n%s", stderr)
    return Receipt.failure(
        backend=backend,
        target=target,
        error=stderr or f"Command exited with code {result.returncode}",
        duration_ms=elapsed_ms,
        metadata={
            "command": command,
            "return_code": result.returncode,
            "stdout": stdout,
        },
    )
