from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable, List

import pytest

from bindingdoc.models import NativeModule
from tests._fixtures.model_builder import native_fn, native_impl, native_module, native_struct


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Write a .bindingdoc.yml into tmp_path and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / ".bindingdoc.yml"
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def rustscale_modules() -> List[NativeModule]:
    """A small crate exporting a class with methods, a free function and an internal module."""
    return [
        native_module(
            "rustscale",
            native_fn("version", returns="&'static str"),
            doc="Root of the rustscale crate.",
        ),
        native_module(
            "rustscale::handlers",
            native_struct("RequestHandler", exposed="Handler", doc="Handles requests."),
            native_impl(
                "RequestHandler",
                native_fn("new", [("capacity", "usize")], "Self", exposed="__new__"),
                native_fn(
                    "handle",
                    [("&self", "Self"), ("py", "Python<'_>"), ("payload", "&PyDict")],
                    "PyResult<Vec<String>>",
                ),
            ),
            native_fn("parse_request", [("raw", "&[u8]")], "PyResult<Option<i64>>"),
            doc="Request handlers.",
        ),
        native_module(
            "rustscale::internal",
            native_fn("helper", [("value", "u32")], "u32", exported=False),
        ),
    ]
