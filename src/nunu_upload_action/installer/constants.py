"""Release index and tool cache constants."""

# GitHub API URL structure
GITHUB_REPOS_PATH = "repos"
RELEASES_PATH = "releases"
LATEST_PATH = "latest"
DOWNLOAD_PATH = "download"

LATEST_TOKEN = "latest"
VERSION_PREFIX = "v"
# Versions become a cache directory name
UNSAFE_VERSION_PARTS = ("/", "\\", "..")
WINDOWS_EXTENSION = ".exe"

# Runner-provided cache root; falls back to the user cache dir
TOOL_CACHE_ENV = "RUNNER_TOOL_CACHE"
APP_NAME = "nunu-upload-action"
COMPLETE_MARKER_SUFFIX = ".complete"

DOWNLOAD_CHUNK_SIZE = 8192
