"""Shared constants for langrunner."""

from __future__ import annotations

PLACEHOLDER_FILE = "file"
PLACEHOLDER_NAME = "name"
PLACEHOLDER_PATH = "path"
PLACEHOLDERS = frozenset(
    {PLACEHOLDER_FILE, PLACEHOLDER_NAME, PLACEHOLDER_PATH}
)

EDITOR_FILE_KIND = "editor"

DEFAULT_TEMP_DIR = "/tmp"
DEFAULT_SHELL = "/bin/bash"
DEFAULT_HOME_PREFIXES = (
    "/data/user/0/com.foxdebug.acode/files/alpine/home",
)
HOME_DIR_EXPANSION = "$HOME"

FILE_SCHEME = "file://"
CONTENT_SCHEME = "content://"
REMOTE_SCHEMES = ("ftp:", "sftp:")
COMPOUND_PATH_SEPARATOR = "::"

RUN_SESSION_PREFIX = "Run: "
INSTALL_SESSION_PREFIX = "Install:"

WRAPPER_TEMPLATE = "wrapper.sh.j2"
LAUNCHER_TEMPLATE = "launcher.sh.j2"
WRAPPER_SCRIPT_PREFIX = "langrunner_"
SOURCE_HEREDOC_MARKER = "SOURCE_EOF"
WRAPPER_HEREDOC_MARKER = "WRAPPER_EOF"

INSTALL_TITLE = "Install Required Packages"
PROGRESS_TITLE = "Installing Packages"

PACKAGE_MANAGER_PRESETS = {
    "apk": ("apk update", "apk add"),
    "apt": ("apt-get update", "apt-get install -y"),
    "dnf": ("dnf makecache", "dnf install -y"),
    "pacman": ("pacman -Sy", "pacman -S --noconfirm"),
    "brew": ("brew update", "brew install"),
}
DEFAULT_PACKAGE_MANAGER = "apk"

ENV_TEMP_DIR = "LANGRUNNER_TEMP_DIR"
ENV_PACKAGE_MANAGER = "LANGRUNNER_PACKAGE_MANAGER"
