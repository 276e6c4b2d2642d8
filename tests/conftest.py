"""Test configuration and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from config import Settings

ALPHA_SVG = """<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" viewBox="0 0 32 32">
  <defs>
    <linearGradient id="grad">
      <stop offset="0" stop-color="#ff0000"/>
      <stop offset="1" stop-color="#800000"/>
    </linearGradient>
    <path id="shape" d="M0 0h16v16H0z"/>
  </defs>
  <path fill="url(#grad)" d="M0 0h32v32H0z"/>
  <use xlink:href="#shape" fill="#ff8080"/>
  <rect style="fill: #f00; stroke: none" width="4" height="4"/>
</svg>"""


@pytest.fixture
def alpha_svg() -> str:
    return ALPHA_SVG


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings rooted in a temp dir with a minimal static page."""
    static = tmp_path / "static"
    static.mkdir()
    (static / "dev-index.html").write_text(
        '<html>dev <input type="color" id="input_color" value="{{ picker_color }}"></html>', encoding="utf-8")
    (static / "index.html").write_text(
        '<html>prod <input type="color" id="input_color" value="{{ picker_color }}"></html>', encoding="utf-8")
    return Settings(root=tmp_path, max_icons=0, timeout=5.0)
