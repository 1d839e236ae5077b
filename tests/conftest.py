"""Shared fixtures for snuts tests."""

from __future__ import annotations

import textwrap

import pytest

from snuts.tree.service import TreeService


@pytest.fixture
def service() -> TreeService:
    return TreeService()


@pytest.fixture
def parse(service):
    """Parse dedented source; returns (tree, text)."""

    def _parse(code: str, path: str = "sample.test.js"):
        text = textwrap.dedent(code)
        return service.parse(text, path), text

    return _parse
