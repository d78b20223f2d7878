"""Platform detection and mapping."""
import platform
from dataclasses import dataclass
from typing import Optional

from nunu_upload_action.errors import UnsupportedPlatformError
from nunu_upload_action.installer.constants import WINDOWS_EXTENSION
from nunu_upload_action.types import DEFAULT_TOOL, Arch, Platform, ToolConfig


@dataclass(frozen=True)
class PlatformInfo:
    """Platform information."""
    platform: Platform
    arch: Arch


# platform.system() values
PLATFORM_MAPPINGS = {
    "Linux": Platform.LINUX,
    "Darwin": Platform.MACOS,
    "Windows": Platform.WINDOWS,
}

# platform.machine() values, lowercased
ARCH_MAPPINGS = {
    "x86_64": Arch.X86_64,
    "amd64": Arch.X86_64,
    "x64": Arch.X86_64,
    "arm64": Arch.ARM64,
    "aarch64": Arch.ARM64,
}


def get_platform(system: Optional[str] = None) -> Platform:
    """Map an OS name to a supported platform."""
    if system is None:
        system = platform.system()

    if system not in PLATFORM_MAPPINGS:
        raise UnsupportedPlatformError("platform", system)

    return PLATFORM_MAPPINGS[system]


def get_arch(machine: Optional[str] = None) -> Arch:
    """Map a machine name to a supported architecture."""
    if machine is None:
        machine = platform.machine()

    arch = ARCH_MAPPINGS.get(machine.lower())
    if arch is None:
        raise UnsupportedPlatformError("architecture", machine)

    return arch


def get_platform_info() -> PlatformInfo:
    """Get current platform information."""
    return PlatformInfo(platform=get_platform(), arch=get_arch())


def binary_extension(target: Platform) -> str:
    return WINDOWS_EXTENSION if target is Platform.WINDOWS else ""


def cli_filename(target: Platform, tool: ToolConfig = DEFAULT_TOOL) -> str:
    """Name of the executable as stored in the cache."""
    return f"{tool.name}{binary_extension(target)}"

