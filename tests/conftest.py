import json
from pathlib import Path

import pytest

from ssr_manifest.artifact import ArtifactGraph
from ssr_manifest.config import Settings, get_settings
from ssr_manifest.loaders import parse_artifact_graph

APP_HTML = """<!doctype html>
<html>
	<head>
		<link rel="icon" href="%sveltekit.assets%/favicon.png" />
		%sveltekit.head%
	</head>
	<body>
		<div>%sveltekit.body%</div>
	</body>
</html>
"""


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_graph(tmp_path: Path):
    def _make(entries: dict, root: Path | None = None) -> ArtifactGraph:
        return parse_artifact_graph(entries, root or tmp_path)

    return _make


@pytest.fixture
def settings() -> Settings:
    return Settings(
        out_dir=".ssr",
        runtime_dir="runtime",
        version_name="1700000000000",
        inline_style_threshold=100,
    )


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small project tree with client build output and manifests."""

    root = tmp_path / "app"
    _write(root / "src" / "app.html", APP_HTML)
    _write(root / "src" / "hooks.server.js", "export const handle = ({ event, resolve }) => resolve(event);\n")
    _write(root / "src" / "routes" / "+page.svelte", "<h1>home</h1>\n")
    _write(root / "src" / "routes" / "+page.server.js", "export const load = () => ({});\n")
    _write(root / "src" / "routes" / "api" / "+server.js", "export const GET = () => new Response();\n")
    _write(root / "src" / "lib" / "shared.js", "export const x = 1;\n")

    client = root / ".ssr" / "output" / "client"
    _write(client / "_app" / "assets" / "small.css", "h1{color:red}")
    _write(client / "_app" / "assets" / "large.css", "p{margin:0}" * 40)

    client_manifest = {
        "src/routes/+page.svelte": {
            "file": "_app/nodes/0.js",
            "imports": ["src/lib/shared.js"],
            "dynamicImports": ["src/lib/lazy.js"],
            "css": ["_app/assets/small.css"],
            "isEntry": True,
        },
        "src/lib/shared.js": {
            "file": "_app/chunks/shared.js",
            "css": ["_app/assets/large.css"],
            "assets": ["_app/assets/inter.woff2", "_app/assets/logo.png"],
        },
        "src/lib/lazy.js": {"file": "_app/chunks/lazy.js", "css": ["_app/assets/lazy.css"], "isDynamicEntry": True},
    }
    server_manifest = {
        "src/routes/+page.svelte": {"file": "entries/pages/_page.svelte.js"},
        "src/routes/+page.server.js": {"file": "entries/pages/_page.server.js"},
        "src/routes/api/+server.js": {"file": "entries/endpoints/api/_server.js"},
    }
    routes = {
        "nodes": [{"component": "src/routes/+page.svelte", "server": "src/routes/+page.server.js"}],
        "routes": [
            {"id": "/", "leaf": 0},
            {"id": "/api", "endpoint": "src/routes/api/+server.js"},
        ],
        "matchers": {},
    }
    exports = {
        "src/routes/+page.server.js": ["load", "POST"],
        "src/routes/api/+server.js": ["GET", "POST", "config", "default"],
    }

    _write(root / "client-manifest.json", json.dumps(client_manifest))
    _write(root / "server-manifest.json", json.dumps(server_manifest))
    _write(root / "routes.json", json.dumps(routes))
    _write(root / "exports.json", json.dumps(exports))
    return root
