"""AWS credentials file sink."""

from __future__ import annotations

import configparser
import io
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from ....application.exceptions import DeliveryError
from ....application.ports import DeliveryReceipt
from ....domain.value_objects import OutputMode
from .base import BaseCredentialSink

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ....domain.entities import Credential
    from ....domain.value_objects import DeliveryTarget

SECTION_HEADER = configparser.RawConfigParser.SECTCRE
COMMENT_PREFIXES = ("#", ";")


class ProfileFileCredentialSink(BaseCredentialSink):
    """
    Write credentials into a named section of an INI credentials file.

    The section named after the credential's app is replaced in place; the
    lines of every other section, comments included, are kept verbatim. The
    file is rewritten through a temporary file in the same directory so a
    failed write leaves the old file intact.
    """

    FILE_MODE = 0o600

    def deliver(self, credential: Credential, target: DeliveryTarget) -> DeliveryReceipt:
        """Update the app's section in the target file."""
        if target.mode is not OutputMode.FILE or not target.path:
            msg = f"profile file sink cannot deliver to '{target.mode}'"
            raise DeliveryError(msg)

        section = credential.app_name
        block = self._render_section(section, credential.as_profile())

        path = self._expand(target.path)
        content = self._read(path)
        self._write(path, self._replace_section(content, section, block))
        self._logger.info("Updated section [%s] in %s", section, path)

        return DeliveryReceipt(mode=OutputMode.FILE, path=str(path))

    @staticmethod
    def _expand(raw_path: str) -> Path:
        try:
            return Path(raw_path).expanduser()
        except RuntimeError as e:
            msg = f"expanding config file path: {e}"
            raise DeliveryError(msg) from e

    @staticmethod
    def _parser() -> configparser.RawConfigParser:
        parser = configparser.RawConfigParser()
        parser.optionxform = str  # type: ignore[assignment, method-assign]
        return parser

    def _render_section(self, section: str, values: Mapping[str, str]) -> str:
        """Render one section as INI text, followed by a blank line."""
        if not section.strip() or any(c in section for c in "[]\r\n"):
            msg = f"app name {section!r} cannot be used as a credentials file section"
            raise DeliveryError(msg)

        parser = self._parser()
        try:
            parser.add_section(section)
        except ValueError as e:
            msg = f"app name '{section}' cannot be used as a credentials file section: {e}"
            raise DeliveryError(msg) from e

        for key, value in values.items():
            parser.set(section, key, value)

        buffer = io.StringIO()
        parser.write(buffer)
        return buffer.getvalue()

    def _read(self, path: Path) -> str:
        """Return the current file content, refusing files that do not parse."""
        if not path.exists():
            return ""

        try:
            content = path.read_text(encoding="utf-8")
            self._parser().read_string(content, source=str(path))
        except (OSError, configparser.Error) as e:
            msg = f"reading credentials file {path}: {e}"
            raise DeliveryError(msg) from e
        return content

    @staticmethod
    def _replace_section(content: str, section: str, block: str) -> str:
        """
        Swap the lines of ``section`` for ``block``.

        The block takes the old section's position, or is appended when the
        section is new. Comment lines between the old section's last option
        and the next header introduce that header, so they are kept.
        """
        kept: list[str] = []
        trailing_comments: list[str] = []
        insert_at: int | None = None
        skipping = False

        for line in content.splitlines(keepends=True):
            stripped = line.strip()
            header = SECTION_HEADER.match(stripped)
            if header:
                if skipping:
                    kept.extend(trailing_comments)
                    trailing_comments = []
                skipping = header.group("header") == section
                if skipping:
                    if insert_at is None:
                        insert_at = len(kept)
                    continue
            elif skipping:
                if stripped.startswith(COMMENT_PREFIXES):
                    trailing_comments.append(line)
                elif stripped:
                    trailing_comments = []
                continue
            kept.append(line)

        if skipping:
            kept.extend(trailing_comments)

        if insert_at is None:
            if kept and not kept[-1].endswith("\n"):
                kept[-1] += "\n"
            if kept and kept[-1].strip():
                kept.append("\n")
            insert_at = len(kept)

        kept.insert(insert_at, block)
        return "".join(kept).rstrip("\n") + "\n"

    def _write(self, path: Path, content: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", text=True)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                os.chmod(tmp_name, self.FILE_MODE)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            msg = f"writing credentials to file: {e}"
            raise DeliveryError(msg) from e
