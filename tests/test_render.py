"""Tests for bmad_viewer.model.render module."""

import html
import json

import pytest

from bmad_viewer.model.render import (
    build_diagram_scene,
    embed_html_document,
    render_diagram,
    yaml_code_block,
)


class TestEmbedHtmlDocument:
    """Test embed_html_document function."""

    def test_escapes_srcdoc(self):
        fragment = embed_html_document('<p class="x">Hi & bye</p>', "Page")
        assert 'srcdoc="&lt;p class=&quot;x&quot;&gt;Hi &amp; bye&lt;/p&gt;"' in fragment
        assert 'title="Page"' in fragment

    def test_is_sandboxed(self):
        fragment = embed_html_document("<script>alert(1)</script>")
        assert fragment.startswith("<iframe")
        assert 'sandbox="allow-scripts"' in fragment
        assert "<script>" not in fragment


class TestYamlCodeBlock:
    """Test yaml_code_block function."""

    def test_escapes_markup(self):
        assert yaml_code_block("a: <b>\n") == \
            '<pre><code class="language-yaml">a: &lt;b&gt;\n</code></pre>'


class TestBuildDiagramScene:
    """Test build_diagram_scene function."""

    def test_defaults(self):
        scene = build_diagram_scene({})
        assert scene == {
            "type": "excalidraw",
            "version": 2,
            "source": "",
            "elements": [],
            "appState": {"viewBackgroundColor": "#ffffff", "gridSize": None},
            "files": {},
        }

    def test_keeps_elements_and_background(self):
        scene = build_diagram_scene({
            "elements": [{"id": "a"}, {"id": "b"}],
            "appState": {"viewBackgroundColor": "#000", "zoom": 2},
            "files": {"f1": {"mimeType": "image/png"}},
        })
        assert len(scene["elements"]) == 2
        assert scene["appState"] == {"viewBackgroundColor": "#000", "gridSize": None}
        assert "f1" in scene["files"]

    def test_rejects_non_object(self):
        with pytest.raises(ValueError):
            build_diagram_scene([1, 2])

    def test_rejects_non_list_elements(self):
        with pytest.raises(ValueError):
            build_diagram_scene({"elements": "nope"})


class TestRenderDiagram:
    """Test render_diagram function."""

    def test_valid_scene(self):
        result = render_diagram('{"elements": [{"id": "a"}]}', "flow.excalidraw")
        assert result.ok
        assert 'class="excalidraw-viewer"' in result.data
        assert 'data-elements="1"' in result.data

    def test_scene_is_recoverable(self):
        result = render_diagram('{"elements": [{"id": "a", "text": "<x>"}]}')
        start = result.data.index('data-scene="') + len('data-scene="')
        end = result.data.index('"', start)
        scene = json.loads(html.unescape(result.data[start:end]))
        assert scene["elements"] == [{"id": "a", "text": "<x>"}]

    def test_invalid_json(self):
        result = render_diagram("{not json", "broken.excalidraw")
        assert not result.ok
        assert result.data is None
        assert "Failed to parse diagram broken.excalidraw" in result.warnings

    def test_wrong_shape(self):
        result = render_diagram('{"elements": {}}', "odd.excalidraw")
        assert not result.ok
