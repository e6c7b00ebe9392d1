"""Tests for the header-colon docstring grammar."""

from __future__ import annotations

from bindingdoc.docstrings import DocstringStyle, detect_style, parse_docstring
from bindingdoc.models import ParamDoc, RaisesDoc, ReturnDoc

FETCH_DOC = """Fetch rows from the table.

    Runs a query against the open connection
    and returns the matching rows.

    Args:
        table (str): Name of the table.
        limit (int): Maximum number of rows
            to return.
        verbose: Log each row.

    Returns:
        List[dict]: The matching rows.

    Raises:
        KeyError: If the table is unknown.
        ValueError: If limit is negative.
    """


def test_header_colon_docstring_is_detected() -> None:
    assert detect_style(FETCH_DOC) is DocstringStyle.HEADER_COLON


def test_summary_and_description_stop_at_first_section() -> None:
    parsed = parse_docstring(FETCH_DOC)

    assert parsed.summary == "Fetch rows from the table."
    assert parsed.description == (
        "Runs a query against the open connection\nand returns the matching rows."
    )


def test_params_capture_types_and_continuations() -> None:
    parsed = parse_docstring(FETCH_DOC)

    assert parsed.params == (
        ParamDoc(name="table", type="str", description="Name of the table."),
        ParamDoc(name="limit", type="int", description="Maximum number of rows to return."),
        ParamDoc(name="verbose", type=None, description="Log each row."),
    )


def test_returns_type_is_taken_from_text_before_colon() -> None:
    parsed = parse_docstring(FETCH_DOC)

    assert parsed.returns == ReturnDoc(type="List[dict]", description="The matching rows.")


def test_raises_are_keyed_by_error_type() -> None:
    parsed = parse_docstring(FETCH_DOC)

    assert parsed.raises == (
        RaisesDoc(error_type="KeyError", description="If the table is unknown."),
        RaisesDoc(error_type="ValueError", description="If limit is negative."),
    )


def test_returns_without_type_keeps_whole_line() -> None:
    parsed = parse_docstring(
        """Write rows.

        Returns:
            A mapping: keyed by table name.
        """
    )

    assert parsed.returns == ReturnDoc(type=None, description="A mapping: keyed by table name.")


def test_returns_plain_description() -> None:
    parsed = parse_docstring(
        """Write rows.

        Returns:
            The number of rows written.
        """
    )

    assert parsed.returns == ReturnDoc(type=None, description="The number of rows written.")


def test_unknown_word_colon_lines_do_not_open_sections() -> None:
    parsed = parse_docstring(
        """Explain the cache.

        The value it Returns: is cached.
        Caveat: entries expire hourly.
        """
    )

    assert parsed.summary == "Explain the cache."
    assert parsed.description == "The value it Returns: is cached.\nCaveat: entries expire hourly."
    assert parsed.returns is None
    assert parsed.params == ()


def test_examples_keep_fenced_blocks_whole() -> None:
    parsed = parse_docstring(
        """Run it.

        Examples:
            >>> run(1)
            2

            ```python
            run(2)

            run(3)
            ```
        """
    )

    assert parsed.examples == (
        "    >>> run(1)\n    2",
        "    ```python\n    run(2)\n\n    run(3)\n    ```",
    )
