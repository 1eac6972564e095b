"""
Two-Section Code Emitter
========================

An append-only text sink with two independent buffers:

- **header**: the program prologue and variable declarations
- **body**: translated statements and the epilogue

The parser discovers variables in the middle of the body but C needs
them declared first, so declarations go to the header buffer while
statements keep flowing into the body. The final artifact is always
the header followed by the body.

Usage
-----
>>> emitter = Emitter()
>>> emitter.append_header_line("#include <stdio.h>")
>>> emitter.append_body("x = ")
>>> emitter.append_body_line("1;")
>>> emitter.text
'#include <stdio.h>\\nx = 1;\\n'
"""

import logging

logger = logging.getLogger(__name__)


class Emitter:
    """
    Accumulates generated code in a header and a body section.

    There is no reordering and no deduplication; callers are responsible
    for emitting each declaration once.
    """

    LINE_TERMINATOR = "\n"
    ENCODING = "utf-8"

    def __init__(self):
        self._header: list[str] = []
        self._body: list[str] = []

    # =========================================================================
    # Appending
    # =========================================================================

    def append_body(self, text: str) -> None:
        """Append a fragment to the body without ending the line."""
        self._body.append(text)

    def append_body_line(self, text: str = "") -> None:
        """Append a fragment to the body and terminate the line."""
        self._body.append(text + self.LINE_TERMINATOR)

    def append_header_line(self, text: str = "") -> None:
        """Append a complete line to the header."""
        self._header.append(text + self.LINE_TERMINATOR)

    # =========================================================================
    # Output
    # =========================================================================

    @property
    def header(self) -> str:
        """Current header section text."""
        return "".join(self._header)

    @property
    def body(self) -> str:
        """Current body section text."""
        return "".join(self._body)

    @property
    def text(self) -> str:
        """The artifact as text: header followed by body."""
        return self.header + self.body

    def materialize(self) -> bytes:
        """
        Return the encoded artifact: header followed by body.

        The buffers are left intact, so materializing twice gives the
        same bytes.
        """
        data = self.text.encode(self.ENCODING)
        logger.debug(
            f"Materialized {len(self._header)} header and "
            f"{len(self._body)} body fragments ({len(data)} bytes)"
        )
        return data
