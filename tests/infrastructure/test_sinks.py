"""Tests for the shell and profile file credential sinks."""

from __future__ import annotations

import configparser
import io
import stat
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from credbroker.application.exceptions import DeliveryError
from credbroker.application.ports import DeliveryReceipt
from credbroker.domain.entities import Credential
from credbroker.domain.value_objects import DeliveryTarget, OutputMode
from credbroker.infrastructure.adapters import ProfileFileCredentialSink, ShellCredentialSink


def make_credential(app_name: str, key: str) -> Credential:
    return Credential(
        access_key_id=key,
        secret_access_key=f"{key}-secret",
        session_token=f"{key}-token",
        expiration=datetime(2030, 1, 1, tzinfo=UTC) + timedelta(hours=1),
        app_name=app_name,
    )


class TestShellCredentialSink:
    """Tests for ShellCredentialSink."""

    def test_posix_export_syntax(self, credential: Credential) -> None:
        stream = io.StringIO()

        receipt = ShellCredentialSink(stream, windows=False).deliver(credential, DeliveryTarget.shell())

        assert stream.getvalue() == (
            "export AWS_ACCESS_KEY_ID=ASIAEXAMPLE\n"
            "export AWS_SECRET_ACCESS_KEY=wJalrXUtnFEMI/K7MDENG\n"
            "export AWS_SESSION_TOKEN=FwoGZXIvYXdzEXAMPLE\n"
        )
        assert receipt.mode is OutputMode.SHELL
        assert receipt.path is None

    def test_windows_set_syntax(self, credential: Credential) -> None:
        stream = io.StringIO()

        ShellCredentialSink(stream, windows=True).deliver(credential, DeliveryTarget.shell())

        assert stream.getvalue().splitlines() == [
            "set AWS_ACCESS_KEY_ID=ASIAEXAMPLE",
            "set AWS_SECRET_ACCESS_KEY=wJalrXUtnFEMI/K7MDENG",
            "set AWS_SESSION_TOKEN=FwoGZXIvYXdzEXAMPLE",
        ]

    def test_values_are_shell_quoted(self) -> None:
        credential = make_credential("prod", "ASIA KEY")

        lines = ShellCredentialSink(windows=False).render(credential)

        assert lines[0] == "export AWS_ACCESS_KEY_ID='ASIA KEY'"

    def test_rejects_file_target(self, credential: Credential, tmp_path: Path) -> None:
        with pytest.raises(DeliveryError):
            ShellCredentialSink(io.StringIO()).deliver(credential, DeliveryTarget.file(str(tmp_path / "creds")))


class TestProfileFileCredentialSink:
    """Tests for ProfileFileCredentialSink."""

    def test_creates_file_and_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / ".aws" / "credentials"

        receipt = ProfileFileCredentialSink().deliver(make_credential("prod", "ASIAPROD"), DeliveryTarget.file(str(path)))

        parser = configparser.RawConfigParser()
        parser.read(path)
        assert dict(parser["prod"]) == {
            "aws_access_key_id": "ASIAPROD",
            "aws_secret_access_key": "ASIAPROD-secret",
            "aws_session_token": "ASIAPROD-token",
            "aws_expiration": "2030-01-01T01:00:00Z",
        }
        assert receipt == DeliveryReceipt(mode=OutputMode.FILE, path=str(path))
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_other_sections_are_preserved(self, tmp_path: Path) -> None:
        """Writing 'prod' after 'staging' leaves 'staging' untouched."""
        path = tmp_path / "credentials"
        sink = ProfileFileCredentialSink()
        target = DeliveryTarget.file(str(path))

        sink.deliver(make_credential("staging", "ASIASTAGING"), target)
        staging_before = path.read_text()
        sink.deliver(make_credential("prod", "ASIAPROD"), target)

        content = path.read_text()
        assert staging_before.strip() in content
        parser = configparser.RawConfigParser()
        parser.read(path)
        assert parser.sections() == ["staging", "prod"]
        assert parser["staging"]["aws_access_key_id"] == "ASIASTAGING"

    def test_section_is_replaced_not_merged(self, tmp_path: Path) -> None:
        path = tmp_path / "credentials"
        path.write_text("[prod]\naws_access_key_id = OLD\nregion = eu-west-1\n\n[default]\nAWS_Profile_Key = Keep\n")

        ProfileFileCredentialSink().deliver(make_credential("prod", "ASIANEW"), DeliveryTarget.file(str(path)))

        parser = configparser.RawConfigParser()
        parser.optionxform = str  # type: ignore[assignment, method-assign]
        parser.read(path)
        assert parser["prod"]["aws_access_key_id"] == "ASIANEW"
        assert "region" not in parser["prod"]
        assert parser["default"]["AWS_Profile_Key"] == "Keep"

    def test_comments_in_other_sections_are_kept(self, tmp_path: Path) -> None:
        """Other sections are kept line for line, comments included."""
        path = tmp_path / "credentials"
        staging = "[staging]\n# long-lived key for CI, do not rotate\naws_access_key_id = STAGE\n"
        path.write_text(staging)

        ProfileFileCredentialSink().deliver(make_credential("prod", "ASIAPROD"), DeliveryTarget.file(str(path)))

        content = path.read_text()
        assert content.startswith(staging + "\n[prod]\n")
        assert "aws_access_key_id = ASIAPROD\n" in content

    def test_section_replaced_in_place(self, tmp_path: Path) -> None:
        path = tmp_path / "credentials"
        path.write_text(
            "; managed by hand\n"
            "[default]\naws_access_key_id = DEFAULTKEY\n\n"
            "[prod]\naws_access_key_id = OLD\n# notes for the next section\n"
            "[staging]\naws_access_key_id = STAGE ; inline\n"
        )

        ProfileFileCredentialSink().deliver(make_credential("prod", "ASIANEW"), DeliveryTarget.file(str(path)))

        content = path.read_text()
        assert content.startswith("; managed by hand\n[default]\naws_access_key_id = DEFAULTKEY\n\n[prod]\n")
        assert content.endswith("# notes for the next section\n[staging]\naws_access_key_id = STAGE ; inline\n")
        assert "OLD" not in content
        parser = configparser.RawConfigParser()
        parser.read(path)
        assert parser.sections() == ["default", "prod", "staging"]
        assert parser["prod"]["aws_access_key_id"] == "ASIANEW"

    def test_rewriting_same_section_is_stable(self, tmp_path: Path) -> None:
        path = tmp_path / "credentials"
        sink = ProfileFileCredentialSink()
        target = DeliveryTarget.file(str(path))

        sink.deliver(make_credential("staging", "ASIASTAGING"), target)
        sink.deliver(make_credential("prod", "ASIAPROD"), target)
        first = path.read_text()
        sink.deliver(make_credential("prod", "ASIAPROD"), target)

        assert path.read_text() == first

    def test_default_section_name_is_rejected(self, tmp_path: Path) -> None:
        """An app named like configparser's defaults section fails as a delivery error."""
        path = tmp_path / "credentials"
        path.write_text("[staging]\naws_access_key_id = STAGE\n")

        with pytest.raises(DeliveryError, match="cannot be used as a credentials file section"):
            ProfileFileCredentialSink().deliver(make_credential("DEFAULT", "ASIAKEY"), DeliveryTarget.file(str(path)))

        assert path.read_text() == "[staging]\naws_access_key_id = STAGE\n"

    def test_home_directory_expanded(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))

        receipt = ProfileFileCredentialSink().deliver(
            make_credential("prod", "ASIAPROD"), DeliveryTarget.file("~/.aws/credentials")
        )

        assert receipt.path == str(tmp_path / ".aws" / "credentials")
        assert (tmp_path / ".aws" / "credentials").exists()

    def test_unparseable_file_is_not_overwritten(self, tmp_path: Path) -> None:
        path = tmp_path / "credentials"
        path.write_text("aws_access_key_id = no section header\n")

        with pytest.raises(DeliveryError, match="reading credentials file"):
            ProfileFileCredentialSink().deliver(make_credential("prod", "ASIAPROD"), DeliveryTarget.file(str(path)))

        assert path.read_text() == "aws_access_key_id = no section header\n"

    def test_write_failure(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("")

        with pytest.raises(DeliveryError, match="writing credentials to file"):
            ProfileFileCredentialSink().deliver(
                make_credential("prod", "ASIAPROD"), DeliveryTarget.file(str(blocker / "credentials"))
            )
