"""Core type definitions"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Platform(Enum):
    """Supported host operating systems, valued by their release asset name."""

    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"


class Arch(Enum):
    """Supported CPU architectures, valued by their release asset name."""

    X86_64 = "x86_64"
    ARM64 = "arm64"


@dataclass(frozen=True)
class ToolConfig:
    """Where the CLI is published and how to name it"""

    name: str = "nunu-cli"
    owner: str = "nunu-ai"
    repo: str = "nunu-cli"
    api_base: str = "https://api.github.com"
    download_base: str = "https://github.com"
    user_agent: str = "nunu-upload-action"
    api_token: Optional[str] = None


DEFAULT_TOOL = ToolConfig()


@dataclass(frozen=True)
class ReleaseAsset:
    """Downloadable file attached to a release"""

    name: str
    browser_download_url: str


@dataclass(frozen=True)
class ReleaseDescriptor:
    """Release metadata as returned by the releases API"""

    tag_name: str
    assets: List[ReleaseAsset] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ReleaseDescriptor":
        assets = [
            ReleaseAsset(
                name=asset["name"],
                browser_download_url=asset["browser_download_url"],
            )
            for asset in data.get("assets") or []
        ]
        return cls(tag_name=data["tag_name"], assets=assets)


@dataclass(frozen=True)
class CacheKey:
    """Tool cache coordinates"""

    tool: str
    version: str
    arch: Arch

    def as_tuple(self) -> tuple[str, str, str]:
        return (self.tool, self.version, self.arch.value)


@dataclass(frozen=True)
class ActionInputs:
    """Step inputs, absent optional values are None"""

    api_token: str
    project_id: str
    file: str
    name: Optional[str] = None
    platform: Optional[str] = None
    description: Optional[str] = None
    auto_delete: bool = False
    deletion_policy: Optional[str] = None
    upload_timeout: Optional[str] = None
    cli_version: str = "latest"
