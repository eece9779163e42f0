# adapters/formatters.py
from __future__ import annotations
import asyncio
import logging
import shlex
from typing import List, Optional

from codegen.errors import FormatterError
from codegen.settings import Settings, get_settings
from core.ports import CodeFormatter

logger = logging.getLogger(__name__)

_QUOTES = "'\"`"
_OPEN = "({["
_CLOSE = ")}]"
# a line break next to these can become a space without changing how
# automatic semicolon insertion reads the code
_JOIN_AFTER = "({[,;"
_JOIN_BEFORE = ")}],"


def _split_statements(code: str) -> List[str]:
    """
    Collapse whitespace runs outside string literals and split on top-level
    semicolons. A run becomes one space, except that a run holding a line
    break keeps a single newline unless it follows one of `({[,;` or
    precedes one of `)}],`. Generated code carries no comments, so none are
    recognised here.
    """
    statements: List[str] = []
    buf: List[str] = []
    quote: Optional[str] = None
    escape = False
    pending_space = False
    pending_newline = False
    depth = 0

    for ch in code:
        if quote:
            buf.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == quote:
                quote = None
            continue
        if ch.isspace():
            pending_space = True
            pending_newline = pending_newline or ch in "\r\n"
            continue
        if pending_space and buf:
            keep_break = pending_newline and buf[-1] not in _JOIN_AFTER and ch not in _JOIN_BEFORE
            buf.append("\n" if keep_break else " ")
        pending_space = False
        pending_newline = False
        buf.append(ch)
        if ch in _QUOTES:
            quote = ch
        elif ch in _OPEN:
            depth += 1
        elif ch in _CLOSE:
            depth = max(depth - 1, 0)
        elif ch == ";" and depth == 0:
            statements.append("".join(buf))
            buf = []

    tail = "".join(buf).strip()
    if tail:
        statements.append(tail)
    return statements


class CompactFormatter:
    """One statement per line, blank line between statements."""

    async def format(self, code: str) -> str:
        statements = _split_statements(code)
        if not statements:
            return ""
        return "\n\n".join(statements) + "\n"


class PrettierFormatter:
    """Pipes the code through `prettier --parser typescript`."""

    def __init__(self, command: str = "npx prettier", timeout: float = 30.0) -> None:
        self.command = command
        self.timeout = timeout

    async def format(self, code: str) -> str:
        argv = shlex.split(self.command) + ["--parser", "typescript"]
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise FormatterError(f"Could not start formatter '{self.command}': {e}") from e

        try:
            out, err = await asyncio.wait_for(proc.communicate(code.encode("utf-8")), self.timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            logger.error("Formatter '%s' timed out after %ss", self.command, self.timeout)
            raise FormatterError(f"Formatter '{self.command}' timed out after {self.timeout}s") from None

        if proc.returncode != 0:
            message = err.decode("utf-8", errors="replace").strip()
            logger.error("Formatter '%s' failed (exit=%s): %s", self.command, proc.returncode, message)
            raise FormatterError(f"Formatter '{self.command}' failed: {message}")
        return out.decode("utf-8")


def get_formatter(name: Optional[str] = None, settings: Optional[Settings] = None) -> CodeFormatter:
    settings = settings or get_settings()
    key = (name or settings.SCHEMA_FORMATTER).lower()
    if key == "compact":
        return CompactFormatter()
    if key == "prettier":
        return PrettierFormatter(settings.PRETTIER_BIN, settings.FORMATTER_TIMEOUT)
    raise FormatterError(f"Unknown formatter '{key}'. Use one of: compact | prettier")
