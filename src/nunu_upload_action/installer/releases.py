"""Release version resolution for the CLI binary."""
import asyncio

import aiohttp

from nunu_upload_action.errors import InputError, RemoteLookupError
from nunu_upload_action.installer.constants import (
    GITHUB_REPOS_PATH,
    LATEST_PATH,
    LATEST_TOKEN,
    RELEASES_PATH,
    UNSAFE_VERSION_PARTS,
    VERSION_PREFIX,
)
from nunu_upload_action.logging import get_logger
from nunu_upload_action.types import DEFAULT_TOOL, ReleaseDescriptor, ToolConfig

logger = get_logger(__name__)


def strip_version_prefix(version: str) -> str:
    """Drop the leading "v" of a release tag, "v2.3.1" -> "2.3.1"."""
    return version.strip().removeprefix(VERSION_PREFIX)


def is_safe_version(version: str) -> bool:
    """Whether ``version`` can be used as a single cache path component."""
    return bool(version) and not any(part in version for part in UNSAFE_VERSION_PARTS)


def latest_release_url(tool: ToolConfig = DEFAULT_TOOL) -> str:
    return (
        f"{tool.api_base}/{GITHUB_REPOS_PATH}/{tool.owner}/{tool.repo}"
        f"/{RELEASES_PATH}/{LATEST_PATH}"
    )


def api_headers(tool: ToolConfig) -> dict[str, str]:
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": tool.user_agent,
    }
    if tool.api_token:
        headers["Authorization"] = f"Bearer {tool.api_token}"
    return headers


async def fetch_latest_release(tool: ToolConfig = DEFAULT_TOOL) -> ReleaseDescriptor:
    """Fetch the most recent published release of the tool.

    Raises:
        RemoteLookupError: on any non-200 status, transport failure, timeout
            or a body that carries no tag.
    """
    url = latest_release_url(tool)
    logger.debug("fetching_latest_release", url=url)

    try:
        async with aiohttp.ClientSession(headers=api_headers(tool)) as session:
            async with session.get(url) as response:
                if response.status != 200:
                    raise RemoteLookupError(url, response.status, response.reason or "")
                data = await response.json()
    except asyncio.TimeoutError as e:
        raise RemoteLookupError(url, reason="request timed out") from e
    except aiohttp.ClientError as e:
        raise RemoteLookupError(url, reason=str(e)) from e
    except ValueError as e:
        raise RemoteLookupError(url, 200, "response body is not JSON") from e

    tag_name = data.get("tag_name") if isinstance(data, dict) else None
    if not isinstance(tag_name, str) or not tag_name:
        raise RemoteLookupError(url, 200, "response has no tag_name")

    try:
        return ReleaseDescriptor.from_json(data)
    except (KeyError, TypeError) as e:
        raise RemoteLookupError(url, 200, f"malformed release: {e}") from e


async def resolve_version(token: str, tool: ToolConfig = DEFAULT_TOOL) -> str:
    """Turn "latest" or an explicit tag into a bare version string.

    Raises:
        InputError: if an explicit tag is not a usable version
        RemoteLookupError: if the latest release cannot be determined
    """
    if token.strip() != LATEST_TOKEN:
        version = strip_version_prefix(token)
        if not is_safe_version(version):
            raise InputError(f"Invalid cli-version: {token}", "cli-version")
        return version

    release = await fetch_latest_release(tool)
    version = strip_version_prefix(release.tag_name)
    if not is_safe_version(version):
        raise RemoteLookupError(
            latest_release_url(tool), 200, f"unusable tag_name: {release.tag_name}"
        )
    logger.info("latest_version_resolved", tool=tool.name, version=version)
    return version
