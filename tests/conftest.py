"""Root test configuration: shared sample documents and environment isolation"""

import pytest

from surfdoc.config import Settings


SAMPLE_DOC = """\
---
title: Launch Plan
type: plan
status: active
tags: [launch, q3]
---

# Launch Plan

::toc[depth=2]
::

::callout[type=warning title="Heads up"]
Ship before Friday.
::

::data[format=table sortable]
| Name | Owner |
|------|-------|
| API | brady |
::

::tasks
- [x] Write brief
- [ ] Fix bug @brady
::

## Risks

::metric[label="MRR" value="$2K" trend=up]
::

::hero-image[src="hero.png"]

::page[route="/docs" title="Docs"]
## Docs home

:::callout[type=tip]
Nested tip.
:::
::
"""

SAMPLE_KINDS = [
    "markdown", "toc", "callout", "data", "tasks", "markdown", "metric", "hero-image", "page",
]

CANONICAL_DOC = """\
# Title

::callout[type=info]
Body
::
"""

NON_CANONICAL_DOC = """\
::callout[title="Hi" type=warning]
Body
::
"""

WARNING_DOC = """\
::callout[type=shout]
Loud.
::
"""


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Drop SURFDOC_* variables so settings come from defaults unless a test sets them."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"SURFDOC_{name.upper()}", raising=False)


@pytest.fixture(name="sample_doc")
def sample_doc_fixture():
    return SAMPLE_DOC


@pytest.fixture(name="write_doc")
def write_doc_fixture(tmp_path):
    """Return a helper that writes text to tmp_path/<name> and returns the path."""
    def _write(text: str, name: str = "doc.surf"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture(name="sample_kinds")
def sample_kinds_fixture():
    return list(SAMPLE_KINDS)


@pytest.fixture(name="canonical_doc")
def canonical_doc_fixture():
    return CANONICAL_DOC


@pytest.fixture(name="non_canonical_doc")
def non_canonical_doc_fixture():
    return NON_CANONICAL_DOC


@pytest.fixture(name="warning_doc")
def warning_doc_fixture():
    return WARNING_DOC
