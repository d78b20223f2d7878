"""CLI binary download and caching."""
import asyncio
import tempfile
from pathlib import Path
from typing import Dict, Optional

import aiohttp

from nunu_upload_action.errors import DownloadError
from nunu_upload_action.installer.cache import ToolCache
from nunu_upload_action.installer.constants import (
    DOWNLOAD_CHUNK_SIZE,
    DOWNLOAD_PATH,
    RELEASES_PATH,
    VERSION_PREFIX,
)
from nunu_upload_action.installer.platforms import (
    binary_extension,
    cli_filename,
    get_platform_info,
)
from nunu_upload_action.installer.releases import resolve_version
from nunu_upload_action.logging import get_logger
from nunu_upload_action.types import DEFAULT_TOOL, Arch, CacheKey, Platform, ToolConfig

logger = get_logger(__name__)

EXECUTABLE_MODE = 0o755


def download_url(
    version: str,
    target: Platform,
    arch: Arch,
    tool: ToolConfig = DEFAULT_TOOL,
) -> str:
    """Release asset URL for a version, e.g. .../download/v2.3.1/nunu-cli-linux-x86_64"""
    tag = f"{VERSION_PREFIX}{version}"
    asset = f"{tool.name}-{target.value}-{arch.value}{binary_extension(target)}"
    return (
        f"{tool.download_base}/{tool.owner}/{tool.repo}"
        f"/{RELEASES_PATH}/{DOWNLOAD_PATH}/{tag}/{asset}"
    )


async def download_file(
    url: str,
    dest: Path,
    headers: Optional[Dict[str, str]] = None
) -> None:
    """Download a file with streaming."""
    logger.debug("starting_download", url=url, destination=str(dest))

    try:
        async with aiohttp.ClientSession(headers=headers) as session:
            async with session.get(url) as response:
                if response.status != 200:
                    logger.error(
                        "download_request_failed",
                        url=url,
                        status=response.status,
                        reason=response.reason,
                    )
                    raise DownloadError(url, response.status, response.reason or "")

                downloaded = 0
                with open(dest, "wb") as f:
                    async for chunk in response.content.iter_chunked(DOWNLOAD_CHUNK_SIZE):
                        f.write(chunk)
                        downloaded += len(chunk)

    except asyncio.TimeoutError as e:
        if dest.exists():
            dest.unlink()
        raise DownloadError(url, reason="request timed out") from e
    except aiohttp.ClientError as e:
        if dest.exists():
            dest.unlink()
        raise DownloadError(url, reason=str(e)) from e
    except DownloadError:
        if dest.exists():
            dest.unlink()
        raise

    logger.debug("download_complete", url=url, size=downloaded)


def make_executable(path: Path) -> None:
    path.chmod(EXECUTABLE_MODE)
    logger.debug("made_executable", path=str(path))


async def fetch_cli(
    version: str,
    target: Platform,
    arch: Arch,
    tool: ToolConfig = DEFAULT_TOOL,
    cache: Optional[ToolCache] = None,
) -> Path:
    """Return the path of a ready-to-run CLI binary, downloading it on a cache miss.

    Args:
        version: Resolved version without its "v" prefix
        target: Platform the binary must run on
        arch: CPU architecture the binary must run on
        tool: Release coordinates of the CLI
        cache: Tool cache to look up and populate

    Returns:
        Path to the executable inside the tool cache

    Raises:
        DownloadError: If the release asset cannot be fetched
        PermissionError: If the binary cannot be marked executable
    """
    cache = cache if cache is not None else ToolCache()
    binary_name = cli_filename(target, tool)
    key = CacheKey(tool=tool.name, version=version, arch=arch)

    cached = cache.find(key)
    if cached:
        logger.info("using_cached_cli", tool=tool.name, version=version, path=str(cached))
        return cached / binary_name

    url = download_url(version, target, arch, tool)
    logger.info(
        "downloading_cli",
        tool=tool.name,
        version=version,
        platform=target.value,
        arch=arch.value,
        url=url,
    )

    with tempfile.TemporaryDirectory(prefix=f"{tool.name}-") as tmpdir:
        download_path = Path(tmpdir) / binary_name
        await download_file(url, download_path, {"User-Agent": tool.user_agent})

        if target is not Platform.WINDOWS:
            make_executable(download_path)

        cached_dir = cache.commit(download_path, binary_name, key)

    return cached_dir / binary_name


async def get_cli_path(
    version: str,
    tool: ToolConfig = DEFAULT_TOOL,
    cache: Optional[ToolCache] = None,
) -> Path:
    """Resolve ``version`` ("latest" or a tag) and ensure the CLI is installed."""
    logger.info("setting_up_cli", tool=tool.name, version=version)

    # Unsupported hosts fail here, before any network or cache access
    platform_info = get_platform_info()

    resolved = await resolve_version(version, tool)
    return await fetch_cli(resolved, platform_info.platform, platform_info.arch, tool, cache)
