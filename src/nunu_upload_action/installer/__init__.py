"""CLI binary resolution, download and caching."""
from nunu_upload_action.installer.cache import ToolCache
from nunu_upload_action.installer.fetcher import (
    download_url,
    fetch_cli,
    get_cli_path,
)
from nunu_upload_action.installer.platforms import (
    cli_filename,
    get_arch,
    get_platform,
    get_platform_info,
)
from nunu_upload_action.installer.releases import (
    fetch_latest_release,
    resolve_version,
    strip_version_prefix,
)

__all__ = [
    "ToolCache",
    "download_url",
    "fetch_cli",
    "get_cli_path",
    "cli_filename",
    "get_arch",
    "get_platform",
    "get_platform_info",
    "fetch_latest_release",
    "resolve_version",
    "strip_version_prefix",
]
