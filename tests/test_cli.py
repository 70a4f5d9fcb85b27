"""Tests for the console front end."""

from securemsg import cli


class TestDemo:

    def test_demo_reports_secure_then_breaches(self, capsys) -> None:
        assert cli.main(["demo", "--message", "ola"]) == 0

        output = capsys.readouterr().out
        assert "[✓] SECURE" in output
        assert "plaintext: ola" in output
        assert output.count("=> [✗] BREACH") == 3
        for reason in ("certificate_invalid", "hash_mismatch", "signature_invalid"):
            assert f"reason: {reason}" in output


class TestInteractive:

    def test_session(self, monkeypatch, capsys) -> None:
        commands = iter([
            "verify bob",
            "send alice ola",
            "verify alice",
            "verify bob",
            "tamper",
            "verify bob",
            "send carol hi",
            "exit",
        ])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(commands))

        assert cli.main(["interactive"]) == 0

        output = capsys.readouterr().out
        assert "No message to verify" in output
        assert "cannot verify their own message" in output
        assert "plaintext: ola" in output
        assert "[✗] BREACH" in output
        assert "Unknown party" in output
