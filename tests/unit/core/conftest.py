"""Shared fixtures for core unit tests"""

import pytest
from markdown_it import MarkdownIt

from surfdoc.core.diagnostics import collecting


@pytest.fixture(name="md")
def md_fixture():
    return MarkdownIt("commonmark")


@pytest.fixture(name="diagnostics")
def diagnostics_fixture():
    """Collect diagnostics reported by resolvers called directly in a test."""
    with collecting() as diagnostics:
        yield diagnostics
