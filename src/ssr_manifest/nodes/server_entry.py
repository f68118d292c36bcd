"""LangGraph node that writes the server bootstrap module."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from ..config import Settings
from ..errors import TemplateError
from ..state import BuildState
from ..utils.codegen import to_js
from ..utils.paths import relative_posix, resolve_entry
from ..utils.templates import (
    APP_REQUIRED,
    APP_TOKENS,
    ERROR_TOKENS,
    Token,
    check_template,
    substitute,
)

logger = logging.getLogger(__name__)

DEFAULT_ERROR_PAGE = """<!doctype html>
<html lang="en">
	<head>
		<meta charset="utf-8" />
		<title>%sveltekit.error.message%</title>
	</head>
	<body>
		<h1>%sveltekit.status%</h1>
		<p>%sveltekit.error.message%</p>
	</body>
</html>
"""


@dataclass(slots=True)
class Templates:
    app: str
    error: str


def load_templates(cwd: Path, settings: Settings) -> Templates:
    """Read and validate the HTML shell and error page templates."""

    app_path = cwd / settings.app_template
    try:
        app = app_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateError(f"Could not read app template {app_path}: {exc}") from exc
    check_template(app, str(app_path), APP_TOKENS, APP_REQUIRED)

    error_path = cwd / settings.error_template
    if error_path.is_file():
        error = error_path.read_text(encoding="utf-8")
        check_template(error, str(error_path), ERROR_TOKENS)
    else:
        error = DEFAULT_ERROR_PAGE

    return Templates(app=app, error=error)


def _template_function(text: str, params: str, replacements: Dict[Token, str]) -> str:
    return f"({{ {params} }}) => {substitute(to_js(text), replacements)}"


def render_server_entry(
    settings: Settings,
    hooks: Optional[str],
    templates: Templates,
    runtime_directory: str,
    has_service_worker: bool,
) -> str:
    """Return the source of ``server-internal.js``.

    ``hooks`` and ``runtime_directory`` are import specifiers relative to the
    generated module; ``hooks`` is None when no hooks file exists.
    """

    app_template = _template_function(
        templates.app,
        "head, body, assets, nonce",
        {
            Token.HEAD: '" + head + "',
            Token.BODY: '" + body + "',
            Token.ASSETS: '" + assets + "',
            Token.NONCE: '" + nonce + "',
        },
    )
    error_template = _template_function(
        templates.error,
        "status, message",
        {Token.STATUS: '" + status + "', Token.MESSAGE: '" + message + "'},
    )
    contains_nonce = "true" if Token.NONCE.value in templates.app else "false"
    get_hooks = f"import({to_js(hooks)})" if hooks else "{}"

    return f"""
import root from './root.svelte';
import {{ set_paths }} from '{runtime_directory}/paths.js';
export {{ set_building }} from '{runtime_directory}/env.js';

export const paths = {to_js(settings.paths())};

export const version = {to_js(settings.version_name)};

export const options = {{
	app_template: {app_template},
	app_template_contains_nonce: {contains_nonce},
	csp: {to_js(settings.csp())},
	csrf: {{
		check_origin: {to_js(settings.csrf_check_origin)},
	}},
	dev: false,
	embedded: {to_js(settings.embedded)},
	error_template: {error_template},
	paths,
	public_env: {{}},
	read: null,
	root,
	service_worker: {to_js(has_service_worker)},
	version: {to_js(settings.version_name)}
}};

export const public_prefix = {to_js(settings.public_prefix)};

// swapped at runtime by prerendering and preview
export function override(settings) {{
	set_paths(settings.paths);
	options.paths = settings.paths;
	options.read = settings.read;
}}

export function get_hooks() {{
	return {get_hooks};
}}
"""


def write_server_entry(state: BuildState) -> Dict[str, object]:
    """Render the bootstrap module to the ``internal`` entry path."""

    settings = state["settings"]
    cwd = state["cwd"]
    target = Path(state["entries"]["internal"])
    base = target.parent

    hooks_file = resolve_entry(cwd / settings.hooks_server)
    hooks = relative_posix(hooks_file, base) if hooks_file else None
    has_service_worker = settings.service_worker_register and (
        resolve_entry(cwd / settings.service_worker) is not None
    )

    source = render_server_entry(
        settings,
        hooks=hooks,
        templates=load_templates(cwd, settings),
        runtime_directory=relative_posix(cwd / settings.runtime_dir, base),
        has_service_worker=has_service_worker,
    )

    base.mkdir(parents=True, exist_ok=True)
    target.write_text(source, encoding="utf-8")
    logger.info("Wrote server entry %s (hooks: %s)", target, hooks or "none")
    return {"server_entry_path": target}
