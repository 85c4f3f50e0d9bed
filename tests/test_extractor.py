"""Tests for docsrs.extractor module."""

from __future__ import annotations

import pytest

from docsrs.errors import ContentNotFoundError, SelectorConfigError
from docsrs.extractor import compile_selector, extract_main_content


class TestCompileSelector:
    def test_valid_selector(self):
        compiled = compile_selector("section#main-content > h3")
        assert compiled.pattern == "section#main-content > h3"

    def test_malformed_selector(self):
        with pytest.raises(SelectorConfigError) as exc_info:
            compile_selector("section[")
        assert exc_info.value.selector == "section["


class TestExtractMainContent:
    def test_returns_inner_markup(self):
        markup = (
            '<div><section id="main-content"><p>Hello <b>world</b></p>'
            "</section></div>"
        )
        fragment = extract_main_content(markup, "section#main-content")
        assert fragment.markup == "<p>Hello <b>world</b></p>"

    def test_is_deterministic(self):
        markup = '<section id="main-content"><h1>Title</h1><p>x</p></section>'
        first = extract_main_content(markup, "section#main-content")
        second = extract_main_content(markup, "section#main-content")
        assert first == second

    def test_first_match_wins(self):
        markup = (
            '<section class="c"><p>first</p></section>'
            '<section class="c"><p>second</p></section>'
        )
        fragment = extract_main_content(markup, "section.c")
        assert fragment.markup == "<p>first</p>"

    def test_no_match(self):
        with pytest.raises(ContentNotFoundError) as exc_info:
            extract_main_content("<div><p>nothing</p></div>", "section#main-content")
        assert exc_info.value.selector == "section#main-content"
        assert "section#main-content" in str(exc_info.value)

    def test_empty_markup(self):
        with pytest.raises(ContentNotFoundError):
            extract_main_content("", "section#main-content")

    def test_malformed_selector_is_config_error(self):
        with pytest.raises(SelectorConfigError):
            extract_main_content('<section id="main-content"></section>', "section[")

    def test_rustdoc_page(self, struct_page_html):
        fragment = extract_main_content(struct_page_html, "section#main-content")
        assert "BoolDeserializer" in fragment.markup
        assert "logo-container" not in fragment.markup
        assert not fragment.markup.lstrip().startswith("<section")
