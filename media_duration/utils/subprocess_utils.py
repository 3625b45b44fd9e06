"""
Shared subprocess utilities for media probing
"""

import subprocess
import logging
from typing import Optional, Any

logger = logging.getLogger(__name__)


class SubprocessError(Exception):
    """
    Custom exception for subprocess errors.

    This exception is raised when a subprocess command fails to execute properly,
    exits with a non-zero status or does not finish in time.
    """

    def __init__(
        self, message, command=None, returncode=None, stderr=None, timed_out=False
    ):
        """
        Initialize the exception with error details.

        Args:
            message: Primary error message
            command: Optional command that was executed (list or str)
            returncode: Optional exit code from the process
            stderr: Optional error output from the process
            timed_out: True when the process was killed after the timeout
        """
        self.message = message
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        self.timed_out = timed_out
        super().__init__(self.message)

    def __str__(self):
        """Format the error message with available details."""
        parts = [self.message]
        if self.command:
            cmd_str = (
                " ".join(str(x) for x in self.command)
                if isinstance(self.command, (list, tuple))
                else self.command
            )
            parts.append(f"Command: {cmd_str}")
        if self.returncode is not None:
            parts.append(f"Exit code: {self.returncode}")
        if self.stderr:
            stderr = str(self.stderr)
            if len(stderr) > 500:  # Limit stderr length
                stderr = stderr[:500] + "... [truncated]"
            parts.append(f"Error output: {stderr}")

        return "\n".join(parts)


def safe_subprocess_run(
    cmd,
    operation_name="FFprobe operation",
    custom_logger: Optional[Any] = None,
    timeout: Optional[float] = None,
):
    """
    Safely run subprocess with proper error handling

    Args:
        cmd: Command to run as list of strings
        operation_name: Descriptive name for the operation (for logging)
        custom_logger: Optional logger to use instead of default
        timeout: Optional limit in seconds; the process is killed when exceeded

    Returns:
        subprocess.CompletedProcess result

    Raises:
        SubprocessError: If subprocess fails, times out or the binary is not found
    """
    active_logger = custom_logger or logger

    try:
        active_logger.debug(
            "Running %s: %s", operation_name, " ".join(str(x) for x in cmd)
        )
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=True,
            timeout=timeout,
        )
        return result
    except subprocess.TimeoutExpired as e:
        error_msg = f"{operation_name} timed out after {timeout} seconds"
        active_logger.error(error_msg)
        raise SubprocessError(error_msg, cmd, stderr=e.stderr, timed_out=True) from e
    except subprocess.CalledProcessError as e:
        error_msg = f"{operation_name} failed with return code {e.returncode}"
        if e.stderr:
            error_msg += f"\nFFprobe stderr: {e.stderr}"
        active_logger.error(error_msg)
        raise SubprocessError(error_msg, cmd, e.returncode, e.stderr) from e
    except (OSError, PermissionError) as e:
        if isinstance(e, FileNotFoundError):
            error_msg = (
                f"{operation_name} failed: FFprobe not found. "
                "Please ensure FFmpeg is installed and in PATH."
            )
        else:
            error_msg = f"{operation_name} failed with OS/Permission error: {e}"
        active_logger.error(error_msg)
        raise SubprocessError(error_msg, cmd) from e
