"""Error types for the upload action."""
from typing import Any, Dict, Optional

from nunu_upload_action.logging import get_logger

logger = get_logger(__name__)


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """Log an error with context."""
    error_info = {
        "error_type": error.__class__.__name__,
        "error_message": str(error)
    }
    if context:
        error_info["context"] = context
    if isinstance(error, ActionError):
        error_info["details"] = error.details

    logger.error("action_error", **error_info)


class ActionError(Exception):
    """Base error class for the upload action."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class UnsupportedPlatformError(ActionError):
    """Host OS or CPU architecture has no published binary."""
    def __init__(self, kind: str, value: str):
        super().__init__(
            f"Unsupported {kind}: {value}",
            details={"kind": kind, "value": value}
        )


class RemoteLookupError(ActionError):
    """Latest release could not be determined."""
    def __init__(self, url: str, status: Optional[int] = None, reason: str = ""):
        message = f"Failed to fetch latest release: {status}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message,
            details={"url": url, "status": status, "reason": reason}
        )


class DownloadError(ActionError):
    """Release asset could not be downloaded."""
    def __init__(self, url: str, status: Optional[int] = None, reason: str = ""):
        message = f"Failed to download {url}"
        if status is not None:
            message = f"{message}: HTTP {status}"
        elif reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            details={"url": url, "status": status, "reason": reason}
        )


class InputError(ActionError):
    """Missing or invalid step input."""
    def __init__(self, message: str, name: str):
        super().__init__(message, details={"input": name})


class UploadError(ActionError):
    """CLI exited with a non-zero status."""
    def __init__(self, returncode: int, stderr: str = ""):
        super().__init__(
            f"Upload failed with exit code {returncode}\n{stderr}",
            details={"returncode": returncode}
        )
        self.returncode = returncode
