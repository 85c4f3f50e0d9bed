"""Shared fixtures: rustdoc page samples and in-memory collaborators."""

from __future__ import annotations

from typing import Dict, List

import pytest

from docsrs.document import RawPage
from docsrs.errors import HttpError

STRUCT_PAGE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
<title>BoolDeserializer in serde::de::value - Rust</title>
<script src="../../static.files/main.js"></script>
</head>
<body class="rustdoc struct">
<nav class="sidebar"><a class="logo-container" href="../../serde/index.html">serde</a></nav>
<main>
<section id="main-content" class="content">
<div class="main-heading">
<h1>Struct <span class="struct">BoolDeserializer</span></h1>
<rustdoc-toolbar><button id="settings-menu">Settings</button></rustdoc-toolbar>
</div>
<pre class="rust item-decl"><code>pub struct BoolDeserializer&lt;E&gt; { /* private fields */ }</code></pre>
<details class="toggle top-doc" open><summary class="hideme"><span>Expand description</span></summary>
<div class="docblock"><p>A deserializer holding a <code>bool</code>.</p>
<p>See <a href="../index.html">the module docs</a>.</p></div></details>
<SCRIPT type="text/javascript">
window.rootPath = "../../";
</SCRIPT>
<h2 id="implementations" class="section-header">Implementations<a href="#implementations" class="anchor">§</a></h2>
</section>
</main>
</body>
</html>
"""

ALL_ITEMS_HTML = """<!DOCTYPE html>
<html lang="en">
<body class="rustdoc mod sys">
<main>
<section id="main-content" class="content">
<div class="main-heading"><h1>List of all items</h1></div>
<h3 id="structs">Structs</h3>
<ul class="all-items"><li><a href="de/value/struct.BoolDeserializer.html">de::value::BoolDeserializer</a></li><li><a href="de/value/struct.StringDeserializer.html">de::value::StringDeserializer</a></li></ul>
<h3 id="enums">Enums</h3>
<ul class="all-items"><li><a href="de/enum.Unexpected.html">de::Unexpected</a></li></ul>
</section>
</main>
</body>
</html>
"""


class FakeFetcher:
    """Serves canned pages by URL and records every request."""

    def __init__(self, pages: Dict[str, str]):
        self.pages = pages
        self.requested: List[str] = []

    async def get(self, url: str) -> RawPage:
        self.requested.append(url)
        if url not in self.pages:
            raise HttpError(f"HTTP request error: 404 for {url}", url=url, status_code=404)
        return RawPage(url=url, body=self.pages[url])


@pytest.fixture
def struct_page_html() -> str:
    return STRUCT_PAGE_HTML


@pytest.fixture
def all_items_html() -> str:
    return ALL_ITEMS_HTML
