"""
HTML fragments for artifacts that are not plain markdown.

- HTML documents are embedded in a sandboxed iframe
- Excalidraw scenes become a viewer container carrying the scene JSON
- YAML files are shown as an escaped code block
"""

import html
import json
from typing import Any

from bmad_viewer.lib.result import Result, create_result, error_result


def embed_html_document(raw: str, title: str = "") -> str:
    """Wrap a standalone HTML document so its scripts/styles stay isolated."""
    return (
        f'<iframe class="artifact-frame" sandbox="allow-scripts" '
        f'title="{html.escape(title, quote=True)}" '
        f'srcdoc="{html.escape(raw, quote=True)}" loading="lazy"></iframe>'
    )


def yaml_code_block(raw: str) -> str:
    return f'<pre><code class="language-yaml">{html.escape(raw, quote=False)}</code></pre>'


def build_diagram_scene(data: Any) -> dict[str, Any]:
    """Rebuild the scene the viewer loads from a parsed .excalidraw file."""
    if not isinstance(data, dict):
        raise ValueError("Excalidraw file is not a JSON object")

    elements = data.get("elements", [])
    if not isinstance(elements, list):
        raise ValueError("Excalidraw 'elements' is not a list")

    app_state = data.get("appState")
    if not isinstance(app_state, dict):
        app_state = {}
    files = data.get("files")
    if not isinstance(files, dict):
        files = {}
    return {
        "type": data.get("type", "excalidraw"),
        "version": data.get("version", 2),
        "source": data.get("source", ""),
        "elements": elements,
        "appState": {
            "viewBackgroundColor": app_state.get("viewBackgroundColor", "#ffffff"),
            "gridSize": app_state.get("gridSize"),
        },
        "files": files,
    }


def render_diagram(raw: str, source: str = "unknown") -> Result:
    """Render an .excalidraw file as an embedded viewer. data is the HTML."""
    try:
        scene = build_diagram_scene(json.loads(raw))
    except (json.JSONDecodeError, ValueError) as e:
        return error_result(e, [f"Failed to parse diagram {source}"])

    scene_json = json.dumps(scene, sort_keys=True)
    count = len(scene["elements"])
    fragment = (
        f'<div class="excalidraw-viewer" data-elements="{count}" '
        f'data-scene="{html.escape(scene_json, quote=True)}">'
        f'<noscript>Diagram with {count} elements</noscript></div>'
    )
    return create_result(fragment)
