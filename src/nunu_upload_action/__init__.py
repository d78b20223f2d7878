"""Install nunu-cli in CI and upload builds with it."""

from nunu_upload_action.types import (
    ActionInputs,
    Arch,
    CacheKey,
    Platform,
    ReleaseAsset,
    ReleaseDescriptor,
    ToolConfig,
    DEFAULT_TOOL,
)
from nunu_upload_action.installer import ToolCache, fetch_cli, get_cli_path, resolve_version
from nunu_upload_action.errors import (
    ActionError,
    UnsupportedPlatformError,
    RemoteLookupError,
    DownloadError,
    InputError,
    UploadError,
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "ActionInputs",
    "Arch",
    "CacheKey",
    "Platform",
    "ReleaseAsset",
    "ReleaseDescriptor",
    "ToolConfig",
    "DEFAULT_TOOL",

    # Installer
    "ToolCache",
    "fetch_cli",
    "get_cli_path",
    "resolve_version",

    # Error types
    "ActionError",
    "UnsupportedPlatformError",
    "RemoteLookupError",
    "DownloadError",
    "InputError",
    "UploadError",
]
