"""Tests for docsrs.sanitizer module."""

from __future__ import annotations

import pytest

from docsrs.sanitizer import sanitize


class TestClassAttributes:
    def test_double_quoted(self):
        assert sanitize('<div class="docblock">x</div>') == "<div>x</div>"

    def test_single_quoted(self):
        assert sanitize("<p class='a b'>x</p>") == "<p>x</p>"

    def test_any_element(self):
        result = sanitize('<span class="struct">A</span><code class="c">b</code>')
        assert "class=" not in result

    def test_keeps_other_attributes(self):
        result = sanitize('<a class="anchor" href="#impl">x</a>')
        assert result == '<a href="#impl">x</a>'


class TestScriptBlocks:
    def test_removes_block_and_content(self):
        assert sanitize("<p>a</p><script>var x = 1;</script><p>b</p>") == "<p>a</p><p>b</p>"

    def test_case_insensitive_multiline(self):
        markup = '<p>a</p><SCRIPT type="text/javascript">\nwindow.x = 1;\n</ScRiPt><p>b</p>'
        assert sanitize(markup) == "<p>a</p><p>b</p>"

    def test_multiple_blocks(self):
        markup = "<script>1</script><p>keep</p><script src='x.js'></script>"
        assert sanitize(markup) == "<p>keep</p>"

    def test_unterminated_block(self):
        result = sanitize("<p>keep</p><script>never closed")
        assert result == "<p>keep</p>"

    @pytest.mark.parametrize(
        "markup",
        [
            "<script>x</script>",
            "<ScRiPt>\n\nx\n</sCrIpT>",
            "<scr<script></script>ipt>alert(1)</script>",
            '<div class="x"><script type="module">a</script></div>',
        ],
    )
    def test_no_script_left(self, markup):
        assert "<script" not in sanitize(markup).lower()


class TestChromeBlocks:
    def test_removes_toolbar(self):
        markup = "<h1>T</h1><rustdoc-toolbar><button>Settings</button></rustdoc-toolbar><p>x</p>"
        assert sanitize(markup) == "<h1>T</h1><p>x</p>"

    def test_toolbar_multiline_uppercase(self):
        markup = "<p>a</p><RUSTDOC-TOOLBAR>\n<b>x</b>\n</rustdoc-toolbar>"
        assert sanitize(markup) == "<p>a</p>"


class TestPurity:
    def test_empty(self):
        assert sanitize("") == ""

    def test_nothing_to_remove(self):
        markup = "<p>plain <em>text</em></p>"
        assert sanitize(markup) == markup

    @pytest.mark.parametrize(
        "markup",
        [
            '<div class="a"><script>x</script><p class="b">y</p></div>',
            "<scr<script>z</script>ipt>q</script>",
            "<rustdoc-toolbar class='t'>x</rustdoc-toolbar><p>y</p>",
            "<p>no noise</p>",
        ],
    )
    def test_idempotent(self, markup):
        once = sanitize(markup)
        assert sanitize(once) == once
