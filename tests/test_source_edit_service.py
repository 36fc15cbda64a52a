"""
Tests for livetext/source_edit/service.py

End-to-end behaviour of the two replace operations over a real temporary
project tree.
"""

import logging
import sys
from dataclasses import replace
from pathlib import Path

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import pytest
from unittest.mock import patch

from livetext.config.source_edit import ReplaceMode, SourceEditSettings
from livetext.source_edit import fs
from livetext.source_edit.schemas import ElementHint, ErrorKind
from livetext.source_edit.service import (
    NO_ELEMENT_MESSAGE,
    NO_TEXT_MESSAGE,
    SourceEditService,
)


@pytest.fixture
def service(registry):
    return SourceEditService(registry, settings=SourceEditSettings())


# =============================================================================
# Scenarios
# =============================================================================

class TestScenarios:

    @pytest.mark.asyncio
    async def test_scenario_a_replace_by_id(self, service, write_file, read_file):
        write_file("App.jsx", '<h1 id="title">Hello</h1>')

        result = await service.replace_text_by_selector(
            "proj-1", {"tag": "h1", "id": "title"}, "Hello", "Hi",
        )

        assert result.success is True
        assert result.files_modified == 1
        assert result.modified_files == ["App.jsx"]
        assert read_file("App.jsx") == '<h1 id="title">Hi</h1>'

    @pytest.mark.asyncio
    async def test_scenario_b_plain_text_two_files(self, service, write_file, read_file):
        write_file("src/Home.jsx", "<p>Welcome</p>")
        write_file("pages/index.html", "<h2>Welcome</h2>")

        result = await service.replace_text_in_project("proj-1", "Welcome", "Hi")

        assert result.success is True
        assert result.files_modified == 2
        assert result.modified_files == ["src/Home.jsx", "pages/index.html"]
        assert read_file("src/Home.jsx") == "<p>Hi</p>"
        assert read_file("pages/index.html") == "<h2>Hi</h2>"

    @pytest.mark.asyncio
    async def test_scenario_c_search_key_missing(self, service, write_file, read_file):
        write_file("src/a.js", "Something else entirely")
        long_text = "A heading that is certainly longer than fifty characters in total"

        result = await service.replace_text_in_project("proj-1", long_text, "Hi")

        assert result.success is False
        assert result.error == "Text not found in any project files"
        assert result.error_kind == ErrorKind.NO_CANDIDATES
        assert read_file("src/a.js") == "Something else entirely"

    @pytest.mark.asyncio
    async def test_scenario_d_candidate_without_element(self, service, write_file, read_file):
        # Search key matches, but the element wraps different text now
        original = '<h1 id="title">Hello world</h1>'
        write_file("src/App.jsx", original)

        result = await service.replace_text_by_selector(
            "proj-1", ElementHint(tag="h1", id="title"), "Hello", "Hi",
        )

        assert result.success is False
        assert result.error == NO_ELEMENT_MESSAGE
        assert result.error != "Text not found in any project files"
        assert result.error_kind == ErrorKind.NO_MATCH
        assert read_file("src/App.jsx") == original

    @pytest.mark.asyncio
    async def test_plain_text_candidate_without_full_match(self, service, write_file):
        # The 50 character key matches; the full text does not
        write_file("src/b.js", "Hello world, " + "x" * 60)
        result = await service.replace_text_in_project(
            "proj-1", "Hello world, " + "x" * 60 + " and more", "Hi",
        )

        assert result.success is False
        assert result.error == NO_TEXT_MESSAGE


# =============================================================================
# Matching behaviour through the service
# =============================================================================

class TestMatching:

    @pytest.mark.asyncio
    async def test_whitespace_tolerant_plain_text(self, service, write_file, read_file):
        # The 50 character search key sits on one line; the tail is reflowed
        head = "Build beautiful landing pages without writing code"
        assert len(head) == 50
        write_file(
            "src/Hero.vue",
            "<p>\n  " + head + ",\n  then publish them\n  anywhere\n</p>",
        )

        result = await service.replace_text_in_project(
            "proj-1", head + ", then publish them anywhere", "Ship it",
        )

        assert result.success is True
        assert result.modified_files == ["src/Hero.vue"]
        assert read_file("src/Hero.vue") == "<p>\n  Ship it\n</p>"

    @pytest.mark.asyncio
    async def test_short_reformatted_text_not_found(self, service, write_file, read_file):
        # Text shorter than the search key must appear verbatim to be a candidate
        write_file("src/Hero.vue", "<p>Hello\n  world</p>")

        result = await service.replace_text_in_project("proj-1", "Hello world", "Bye")

        assert result.success is False
        assert result.error_kind == ErrorKind.NO_CANDIDATES
        assert read_file("src/Hero.vue") == "<p>Hello\n  world</p>"

    @pytest.mark.asyncio
    async def test_write_failure_reported_as_io_error(self, service, write_file, read_file):
        write_file("src/App.jsx", '<h1 id="title">Hello</h1>')

        with patch.object(fs, "write_text", side_effect=PermissionError("read-only")):
            result = await service.replace_text_by_selector(
                "proj-1", {"tag": "h1", "id": "title"}, "Hello", "Hi",
            )

        assert result.success is False
        assert result.error_kind == ErrorKind.IO_ERROR
        assert "src/App.jsx" in result.error
        assert "read-only" in result.error
        assert read_file("src/App.jsx") == '<h1 id="title">Hello</h1>'

    @pytest.mark.asyncio
    async def test_selector_prefers_id_element(self, service, write_file, read_file):
        write_file("src/App.jsx", '<div>Save</div>\n<div id="save">Save</div>\n')

        result = await service.replace_text_by_selector(
            "proj-1", {"tag": "div", "id": "save"}, "Save", "Store",
        )

        assert result.success is True
        assert read_file("src/App.jsx") == '<div>Save</div>\n<div id="save">Store</div>\n'

    @pytest.mark.asyncio
    async def test_selector_uses_class_hint(self, service, write_file, read_file):
        write_file(
            "components/Card.tsx",
            '<p className="muted">Note</p>\n<p className="lead big">Note</p>\n',
        )

        result = await service.replace_text_by_selector(
            "proj-1", {"tag": "p", "className": "edit-mode-selected lead"}, "Note", "Tip",
        )

        assert result.success is True
        assert read_file("components/Card.tsx") == (
            '<p className="muted">Note</p>\n<p className="lead big">Tip</p>\n'
        )

    @pytest.mark.asyncio
    async def test_same_text_reports_unchanged(self, service, write_file, read_file):
        write_file("App.jsx", '<h1 id="title">Hello</h1>')

        result = await service.replace_text_by_selector(
            "proj-1", {"tag": "h1", "id": "title"}, "Hello", "Hello",
        )

        assert result.success is False
        assert result.error_kind == ErrorKind.UNCHANGED
        assert read_file("App.jsx") == '<h1 id="title">Hello</h1>'

    @pytest.mark.asyncio
    async def test_adversarial_hint_values_stay_in_project(self, service, write_file, read_file, tmp_path):
        secret = tmp_path / "secret.html"
        secret.write_text('<h1 id="../secret.html">Hello</h1>', encoding="utf-8")
        write_file("src/App.jsx", "<h1>Hello</h1>")

        with patch.object(fs, "read_text", wraps=fs.read_text) as reads:
            result = await service.replace_text_by_selector(
                "proj-1",
                {"tag": "h1", "id": "../secret.html", "className": "../../etc/passwd"},
                "Hello",
                "Hi",
            )

        assert result.success is True
        assert result.modified_files == ["src/App.jsx"]
        root = tmp_path / "site"
        for call in reads.call_args_list:
            assert Path(call.args[0]).resolve().is_relative_to(root.resolve())
        assert secret.read_text(encoding="utf-8") == '<h1 id="../secret.html">Hello</h1>'


# =============================================================================
# Preconditions and failures
# =============================================================================

class TestPreconditions:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("project_id", ["", None, 42])
    async def test_invalid_project_id(self, service, registry, project_id):
        result = await service.replace_text_by_selector(project_id, {"tag": "h1"}, "Hello", "Hi")

        assert result.success is False
        assert result.error == "Invalid project ID"
        assert result.error_kind == ErrorKind.INVALID_INPUT
        assert registry.lookups == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("hint", [None, {}, {"tag": ""}, {"id": "x"}, "h1", {"tag": 5}])
    async def test_invalid_element_info(self, service, registry, hint):
        result = await service.replace_text_by_selector("proj-1", hint, "Hello", "Hi")

        assert result.success is False
        assert result.error == "Invalid element info"
        assert registry.lookups == []

    @pytest.mark.asyncio
    async def test_selector_rejects_blank_original(self, service, registry):
        result = await service.replace_text_by_selector("proj-1", {"tag": "p"}, "  ", "Hi")

        assert result.error == "Invalid original text"
        assert registry.lookups == []

    @pytest.mark.asyncio
    async def test_selector_allows_empty_new_text(self, service, write_file, read_file):
        write_file("src/a.html", "<p>Remove me</p>")

        result = await service.replace_text_by_selector("proj-1", {"tag": "p"}, "Remove me", "")

        assert result.success is True
        assert read_file("src/a.html") == "<p></p>"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "args, message",
        [
            (("", "Hello", "Hi"), "Invalid project ID"),
            (("proj-1", "", "Hi"), "Invalid original text"),
            (("proj-1", "Hello", ""), "Invalid new text"),
            (("proj-1", None, "Hi"), "Invalid original text"),
            (("proj-1", "Hello", 3), "Invalid new text"),
        ],
    )
    async def test_in_project_preconditions(self, service, registry, args, message):
        result = await service.replace_text_in_project(*args)

        assert result.success is False
        assert result.error == message
        assert result.error_kind == ErrorKind.INVALID_INPUT
        assert registry.lookups == []

    @pytest.mark.asyncio
    async def test_unknown_project(self, service):
        result = await service.replace_text_in_project("nope", "Hello", "Hi")

        assert result.success is False
        assert result.error == "Project not found"
        assert result.error_kind == ErrorKind.PROJECT_NOT_FOUND

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_result(self, service, caplog):
        with patch.object(service.scanner, "scan", side_effect=RuntimeError("disk on fire")):
            with caplog.at_level(logging.ERROR):
                result = await service.replace_text_in_project("proj-1", "Hello", "Hi")

        assert result.success is False
        assert result.error == "disk on fire"
        assert result.error_kind == ErrorKind.INTERNAL
        assert "Failed to replace text in project" in caplog.text


# =============================================================================
# Search keys and modes
# =============================================================================

class TestSearchKeys:

    @pytest.mark.asyncio
    async def test_selector_uses_30_char_key(self, service, project_root):
        text = "x" * 80
        with patch.object(service.scanner, "scan", return_value=[]) as scan:
            await service.replace_text_by_selector("proj-1", {"tag": "p"}, text, "Hi")

        scan.assert_called_once_with(str(project_root), "x" * 30)

    @pytest.mark.asyncio
    async def test_project_uses_50_char_key(self, service, project_root):
        text = "y" * 80
        with patch.object(service.scanner, "scan", return_value=[]) as scan:
            await service.replace_text_in_project("proj-1", text, "Hi")

        scan.assert_called_once_with(str(project_root), "y" * 50)


class TestReplaceModes:

    @pytest.mark.asyncio
    async def test_best_effort_rewrites_all_matching_files(self, service, write_file):
        write_file("src/a.html", "<h1>Hello</h1>")
        write_file("src/b.html", "<h1>Hello</h1>")

        result = await service.replace_text_by_selector("proj-1", {"tag": "h1"}, "Hello", "Hi")

        assert result.files_modified == 2

    @pytest.mark.asyncio
    async def test_strict_refuses_ambiguous_edit(self, registry, write_file, read_file):
        settings = replace(SourceEditSettings(), replace_mode=ReplaceMode.STRICT_SINGLE_FILE)
        service = SourceEditService(registry, settings=settings)
        write_file("src/a.html", "<h1>Hello</h1>")
        write_file("src/b.html", "<h1>Hello</h1>")

        result = await service.replace_text_by_selector("proj-1", {"tag": "h1"}, "Hello", "Hi")

        assert result.success is False
        assert result.error_kind == ErrorKind.AMBIGUOUS_MATCH
        assert read_file("src/a.html") == "<h1>Hello</h1>"
        assert read_file("src/b.html") == "<h1>Hello</h1>"

    @pytest.mark.asyncio
    async def test_injected_logger_used(self, registry, write_file, caplog):
        write_file("src/a.html", "<h1>Hello</h1>")
        custom = logging.getLogger("inspector.audit")
        service = SourceEditService(registry, settings=SourceEditSettings(), log=custom)

        with caplog.at_level(logging.INFO, logger="inspector.audit"):
            await service.replace_text_by_selector("proj-1", {"tag": "h1"}, "Hello", "Hi")

        assert any(r.name == "inspector.audit" and "Replaced text in" in r.getMessage() for r in caplog.records)
