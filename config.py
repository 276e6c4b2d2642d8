import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from color_util import parse_color

CONFIG_FILE = "config.txt"

DEFAULTS = {
    "host": "127.0.0.1",
    "port": "8000",
    "debug": "1",
    "repo_owner": "PKief",
    "repo_name": "vscode-material-icon-theme",
    "folder_path": "icons",
    "icons_dir": "",
    "svg_size": "128",
    "default_color": "#ff0000",
    "max_icons": "60",
    "timeout": "30",
}


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class Settings:
    root: Path
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = True
    repo_owner: str = "PKief"
    repo_name: str = "vscode-material-icon-theme"
    folder_path: str = "icons"
    icons_dir: Optional[Path] = None
    svg_size: int = 128
    default_color: str = "#ff0000"
    max_icons: int = 60
    timeout: float = 30.0


def app_root() -> Path:
    # this is an .EXE
    if getattr(sys, "frozen", False):
        return Path(sys.executable).parent
    # this is a .PY
    return Path(__file__).parent.resolve()


def read_config(path) -> dict[str, str]:
    """Read 'key=value' pairs, one per line. Missing file means no overrides."""
    config = {}
    path = Path(path)
    if not path.exists():
        return config
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f.readlines(), start=1):
            if line.startswith("#") or not line.strip(): continue
            if "=" not in line:
                raise ConfigError(f"{path.name}:{lineno}: expected 'key=value', got {line.strip()!r}")
            k, v = (x.strip() for x in line.split("=", 1))
            if k not in DEFAULTS:
                raise ConfigError(f"{path.name}:{lineno}: unknown key {k!r}")
            config[k] = v
    return config


def load_settings(path=None, root: Optional[Path] = None) -> Settings:
    root = root or app_root()
    values = dict(DEFAULTS)
    values.update(read_config(path or root / CONFIG_FILE))
    if parse_color(values["default_color"]) is None:
        raise ConfigError(f"default_color {values['default_color']!r} is not a hex or rgb() color")
    try:
        icons_dir = None
        if values["icons_dir"]:
            icons_dir = Path(values["icons_dir"])
            if not icons_dir.is_absolute():
                icons_dir = root / icons_dir
        return Settings(
            root=root,
            host=values["host"],
            port=int(values["port"]),
            debug=int(values["debug"]) == 1,
            repo_owner=values["repo_owner"],
            repo_name=values["repo_name"],
            folder_path=values["folder_path"],
            icons_dir=icons_dir,
            svg_size=int(values["svg_size"]),
            default_color=values["default_color"],
            max_icons=int(values["max_icons"]),
            timeout=float(values["timeout"]),
        )
    except ValueError as e:
        raise ConfigError(f"Invalid config value: {e}") from e
