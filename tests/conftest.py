"""Test setup for wiki2term."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

ARTICLE_HTML = """<!DOCTYPE html>
<html>
<head><title>Rust (programming language) - Wikipedia</title></head>
<body>
<h1 id="firstHeading" class="firstHeading">Rust (programming language)</h1>
<div class="mw-parser-output">
<p><b>Rust</b> is a <a href="/wiki/General-purpose_programming_language">general-purpose</a>
programming language emphasizing <i>performance</i>.<sup class="reference"><a href="#cite_note-1">[1]</a></sup></p>
<div class="mw-heading mw-heading2"><h2 id="History">History</h2><span class="mw-editsection">[<a href="/w/index.php?action=edit">edit</a>]</span></div>
<p>Rust began as a project by <a href="/wiki/Graydon_Hoare">Graydon Hoare</a> at <a href="/wiki/Mozilla">Mozilla</a>.</p>
<h3 id="Early_years">Early years</h3>
<ul>
<li>First item with <a href="/wiki/Compiler">compiler</a>
<ul><li>Nested item</li></ul>
</li>
<li>Second item</li>
</ul>
<hr>
<h2 id="See_also">See also</h2>
<p><a>broken link</a> text</p>
<table><tr><td>Cell one</td><td>Cell two</td></tr></table>
</div>
</body>
</html>
"""


@pytest.fixture
def article_html() -> str:
    """A small MediaWiki-style article page."""
    return ARTICLE_HTML
