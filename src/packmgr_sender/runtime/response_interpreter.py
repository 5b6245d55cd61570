"""Streaming interpretation of package manager responses.

The package manager answers an install request with a line oriented text body.
One line carries the outcome::

    <status code="200">ok</status>

Lines starting with ``E `` carry error details. The interpreter folds the
stream line by line: the last status line decides the verdict and every
detail line of the whole stream is appended to it.
"""

import codecs
import logging
import re
from typing import List, Optional, Tuple

from .config import INVALID_RESPONSE_MESSAGE
from .exceptions import DeliveryError, SubmissionRejected, UnrecognizedResponse

logger = logging.getLogger(__name__)

# Message ends at the closing tag, or at end of line when there is none.
RE_STATUS = re.compile(r'code="(?P<code>[0-9]+)">(?P<message>[^<]*)')
DETAIL_PREFIX = "E "


class ResponseInterpreter:
    """Derive a pass/fail verdict from a streamed package manager response.

    Usage:
        interpreter = ResponseInterpreter(host)
        async for chunk in response.aiter_bytes():
            interpreter.feed(chunk)
        interpreter.finish()
        interpreter.error_message  # "" on success
    """

    def __init__(self, host: str = ""):
        self.host = host
        self.lines: List[str] = []
        self.status: Optional[Tuple[str, str]] = None
        self.details: List[str] = []
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""
        self._finished = False

        logger.debug(f"Output from {host}:")

    def feed(self, chunk: bytes) -> None:
        """Decode a chunk and process every line it completes."""
        text = self._pending + self._decoder.decode(chunk)
        *complete, self._pending = text.split("\n")
        for line in complete:
            self._process_line(line)

    def finish(self) -> None:
        """Flush buffered text at end of stream."""
        if self._finished:
            return
        self._finished = True

        text = self._pending + self._decoder.decode(b"", final=True)
        self._pending = ""
        if text:
            self._process_line(text)

    def _process_line(self, line: str) -> None:
        line = line.replace("\r", "")
        self.lines.append(line)
        logger.debug(f"  {line}")

        if line.startswith(DETAIL_PREFIX):
            self.details.append(line[len(DETAIL_PREFIX):])

        match = RE_STATUS.search(line)
        if match is not None:
            self.status = (match.group("code"), match.group("message"))

    @property
    def succeeded(self) -> bool:
        return self.error_message == ""

    @property
    def error_message(self) -> str:
        """Verdict so far: empty on success, otherwise a failure description."""
        if self.status is None:
            return INVALID_RESPONSE_MESSAGE

        code, message = self.status
        verdict = "" if code == "200" else message
        for detail in self.details:
            verdict += f"\n{detail}"
        return verdict

    def error(self) -> Optional[DeliveryError]:
        """Verdict as an exception, or None when the installation succeeded."""
        message = self.error_message
        if message == "":
            return None
        if self.status is None:
            return UnrecognizedResponse(message)
        return SubmissionRejected(message)
