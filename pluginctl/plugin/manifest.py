"""
Plugin Manifest Accessor.

This module locates, parses and rewrites the plugin manifest (plugin.json),
and regenerates the source files derived from it.

Key features:
- Manifest lookup in the plugin root directory
- Structural validation of the required fields
- Order-preserving write back to disk
- Regeneration of server/manifest.go and webapp/src/manifest.js
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pluginctl.errors import FileWriteError, ManifestError, ManifestNotFoundError

MANIFEST_FILENAME = "plugin.json"
SERVER_MANIFEST_PATH = "server/manifest.go"
WEBAPP_MANIFEST_PATH = "webapp/src/manifest.js"

_SERVER_TEMPLATE = """// This file is automatically generated. Do not modify it manually.

package main

import (
	"strings"

	"github.com/mattermost/mattermost-server/v5/model"
)

var manifest *model.Manifest

const manifestStr = `
{manifest}
`

func init() {{
	manifest = model.ManifestFromJson(strings.NewReader(manifestStr))
}}
"""

_WEBAPP_TEMPLATE = """// This file is automatically generated. Do not modify it manually.

const manifest = JSON.parse(`
{manifest}
`);

export default manifest;
export const id = manifest.id;
export const version = manifest.version;
"""


@dataclass
class Manifest:
    """
    Represents a plugin manifest.

    Attributes:
        id: Plugin identifier (stable across versions)
        version: Plugin version string, not yet validated as semver
        path: Location of plugin.json on disk
        raw_data: Full manifest document, key order preserved
    """

    id: str
    version: str
    path: Path
    raw_data: dict[str, Any]

    @property
    def root(self) -> Path:
        """Directory holding plugin.json; generated paths are relative to it."""
        return self.path.parent

    def has_server(self) -> bool:
        return self.raw_data.get("server") is not None

    def has_webapp(self) -> bool:
        return self.raw_data.get("webapp") is not None

    def generated_files(self) -> list[str]:
        """
        List the files touched by a version bump.

        Returns:
            plugin.json, plus the server and webapp manifest sources when the
            plugin ships those components
        """
        files = [MANIFEST_FILENAME]
        if self.has_server():
            files.append(SERVER_MANIFEST_PATH)
        if self.has_webapp():
            files.append(WEBAPP_MANIFEST_PATH)
        return files


def find_manifest(search_dir: Path | None = None) -> Manifest:
    """
    Locate and parse plugin.json.

    Args:
        search_dir: Plugin root directory (default: current working directory)

    Returns:
        Manifest object

    Raises:
        ManifestNotFoundError: If plugin.json does not exist
        ManifestError: If it cannot be parsed
    """
    search_dir = Path.cwd() if search_dir is None else Path(search_dir)
    manifest_path = search_dir / MANIFEST_FILENAME

    if not manifest_path.is_file():
        raise ManifestNotFoundError(f"Manifest file not found: {manifest_path}")

    return parse_manifest(manifest_path)


def parse_manifest(manifest_path: Path) -> Manifest:
    """
    Parse a plugin.json file.

    Args:
        manifest_path: Path to plugin.json

    Returns:
        Manifest object

    Raises:
        ManifestNotFoundError: If the file does not exist
        ManifestError: If the file cannot be read, parsed or validated
    """
    try:
        with open(manifest_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ManifestNotFoundError(f"Manifest file not found: {manifest_path}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Failed to parse manifest JSON: {e}") from e
    except OSError as e:
        raise ManifestError(f"Failed to read manifest file: {e}") from e

    validate_manifest_structure(data)

    return Manifest(
        id=data["id"],
        version=data["version"],
        path=Path(manifest_path),
        raw_data=data,
    )


def validate_manifest_structure(data: Any) -> None:
    """
    Validate manifest structure and required fields.

    The version string is only checked for type here; semver validation
    happens where the version is actually used.

    Raises:
        ManifestError: If manifest structure is invalid
    """
    if not isinstance(data, dict):
        raise ManifestError("Manifest must be a JSON object")

    for field in ("id", "version"):
        if field not in data:
            raise ManifestError(f"Missing required field: {field}")

    if not isinstance(data["id"], str) or not data["id"]:
        raise ManifestError(f"Invalid plugin id: {data['id']!r}")

    if not isinstance(data["version"], str):
        raise ManifestError(f"Invalid version: {data['version']!r}")

    for component in ("server", "webapp"):
        value = data.get(component)
        if value is not None and not isinstance(value, dict):
            raise ManifestError(f"'{component}' field must be an object")


def _dump(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=4, ensure_ascii=False)


def write_manifest(manifest: Manifest) -> None:
    """
    Write the manifest back to plugin.json.

    The in-memory version field is copied into raw_data before writing so
    the two never diverge on disk.

    Raises:
        FileWriteError: If the file cannot be written
    """
    manifest.raw_data["version"] = manifest.version
    try:
        manifest.path.write_text(_dump(manifest.raw_data) + "\n", encoding="utf-8")
    except OSError as e:
        raise FileWriteError(f"Failed to write manifest {manifest.path}: {e}") from e


def apply_manifest(manifest: Manifest) -> list[Path]:
    """
    Regenerate the server and webapp sources derived from the manifest.

    Returns:
        Paths of the files that were written

    Raises:
        FileWriteError: If a generated file cannot be written
    """
    manifest_json = _dump(manifest.raw_data)
    written = []

    if manifest.has_server():
        # Backticks would terminate the Go raw string literal.
        escaped = manifest_json.replace("`", "` + \"`\" + `")
        written.append(
            _write_generated(
                manifest.root / SERVER_MANIFEST_PATH,
                _SERVER_TEMPLATE.format(manifest=escaped),
            )
        )

    if manifest.has_webapp():
        escaped = (
            manifest_json.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")
        )
        written.append(
            _write_generated(
                manifest.root / WEBAPP_MANIFEST_PATH,
                _WEBAPP_TEMPLATE.format(manifest=escaped),
            )
        )

    return written


def _write_generated(path: Path, content: str) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileWriteError(f"Failed to write {path}: {e}") from e
    return path
