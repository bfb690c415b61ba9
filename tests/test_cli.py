import io
import pytest

from authkeys.cli import main
from authkeys.config import Settings, default_keys_path


def test_print_file(ssh2_file, capsys):
    assert main([str(ssh2_file)]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0].startswith("ssh-rsa AAAAB3NzaC1yc2E")
    assert len(out.splitlines()) == 2


def test_edit_and_write(ssh2_file, capsys):
    rc = main([str(ssh2_file), "--set-option", "no-pty", "--delete-option", "from",
               "--comment", "managed", "--write"])
    assert rc == 0
    assert capsys.readouterr().out == ""
    assert ssh2_file.read_text() == (
        "no-pty ssh-rsa AAAAB3NzaC1yc2EAAAADAQABAAABAQC7 managed\n"
        "no-pty ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAI managed\n"
    )


def test_list(ssh1_file, capsys):
    assert main([str(ssh1_file), "--list"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "0\tssh-1 1024\t-\tcarol@example.com"
    assert lines[1] == "1\tssh-1 2048\tcommand,no-port-forwarding\tdave@example.com"


def test_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("no-pty ssh-rsa AAAA me\n"))
    assert main(["-", "--add-option", "from=x"]) == 0
    assert capsys.readouterr().out == 'no-pty,from="x" ssh-rsa AAAA me\n'


def test_missing_file_exit_code(tmp_path, capsys):
    assert main([str(tmp_path / "missing")]) == 2
    assert "error: cannot open" in capsys.readouterr().err


def test_default_path_from_env(tmp_path):
    assert default_keys_path({"HOME": str(tmp_path)}) == tmp_path / ".ssh" / "authorized_keys"
    assert default_keys_path({"AUTHKEYS_FILE": "/x/keys", "HOME": "/h"}).as_posix() == "/x/keys"


def test_settings_from_env(tmp_path):
    s = Settings.from_env({"HOME": str(tmp_path), "AUTHKEYS_LOG_LEVEL": "debug"})
    assert s.log_level == "DEBUG"
    assert s.keys_path == tmp_path / ".ssh" / "authorized_keys"


def test_bad_log_level_flag(ssh2_file, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(ssh2_file), "--log-level", "loud"])
    assert exc.value.code == 2
    assert "--log-level" in capsys.readouterr().err


def test_log_level_flag_is_case_insensitive(ssh2_file):
    assert main([str(ssh2_file), "--log-level", "debug"]) == 0


def test_bad_log_level_from_env(ssh2_file, monkeypatch, capsys):
    monkeypatch.setenv("AUTHKEYS_LOG_LEVEL", "loud")
    with pytest.raises(SystemExit) as exc:
        main([str(ssh2_file)])
    assert exc.value.code == 2
    assert "invalid log level" in capsys.readouterr().err
