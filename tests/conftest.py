import logging

import pytest

SSH2_LINES = [
    '# keys for deploy',
    'ssh-rsa AAAAB3NzaC1yc2EAAAADAQABAAABAQC7 alice@example.com laptop key',
    '',
    'no-pty,from="a.example.com",from="b.example.com" ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAI bob@example.com',
]

SSH1_LINES = [
    '1024 35 1234567890123456789 carol@example.com',
    'command="uptime",no-port-forwarding 2048 65537 9876543210 dave@example.com',
]


@pytest.fixture
def ssh2_file(tmp_path):
    path = tmp_path / "authorized_keys"
    path.write_text("\n".join(SSH2_LINES) + "\n")
    return path


@pytest.fixture
def ssh1_file(tmp_path):
    path = tmp_path / "authorized_keys"
    path.write_text("\n".join(SSH1_LINES) + "\n")
    return path


@pytest.fixture(autouse=True)
def reset_authkeys_logger():
    yield
    logger = logging.getLogger("authkeys")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
