# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture()
def site(tmp_path: Path) -> Path:
    """
    A small source tree:

        src/index.html, src/about/team.html
        src/stylesheets/main.css, src/stylesheets/vendor/reset.css
        src/scripts/app.js
    """
    src = tmp_path / "src"
    (src / "about").mkdir(parents=True)
    (src / "stylesheets" / "vendor").mkdir(parents=True)
    (src / "scripts").mkdir(parents=True)
    (src / "images").mkdir(parents=True)

    (src / "index.html").write_text(
        "<!DOCTYPE html>\n<html>\n  <head>\n    <title>Home</title>\n  </head>\n"
        "  <body>\n    <!-- note -->\n    <p>  hello   world  </p>\n  </body>\n</html>\n",
        encoding="utf-8",
    )
    (src / "about" / "team.html").write_text(
        "<html>\n  <body>\n    <h1>Team</h1>\n  </body>\n</html>\n", encoding="utf-8"
    )
    (src / "stylesheets" / "main.css").write_text(
        ".button {\n  color: red;\n  user-select: none;\n}\n\n/* comment */\n"
        ".box:hover {\n  margin: 0 auto;\n}\n",
        encoding="utf-8",
    )
    (src / "stylesheets" / "vendor" / "reset.css").write_text(
        "body {\n  margin: 0;\n}\n", encoding="utf-8"
    )
    (src / "scripts" / "app.js").write_text(
        "// greet everyone\nconst greet = (name) => {\n  return 'hi ' + name;\n};\n"
        "console.log(greet('there'));\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture()
def params(site: Path) -> dict:
    return {
        "project": {
            "src_dir": str(site / "src"),
            "docs_dir": str(site / "docs"),
            "cache_dir": str(site / ".cache"),
        },
    }
