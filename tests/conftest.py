from pathlib import Path

import pytest

from histsuggest.config import Config
from histsuggest.decoder import Shell

FAKE_HISTORY = [
    "cat spam",
    "cat SPAM",
    "git add .",
    "git add . --dry-run",
    "git push origin master",
    "git rebase -i HEAD~2",
    "git checkout -b tests",
    "grep -r spam .",
    "ping -c 10 www.google.com",
    "ls -la",
    "lsusb",
    "lspci",
    "sudo reboot",
    "source .venv/bin/activate",
    "deactivate",
    "pytest",
    "cargo test",
    "xfce4-panel -r",
    "nano .gitignore",
    "sudo dkms add .",
    "cd ~/Downloads",
    "make -j4",
    "gpg --card-status",
    "echo šampion",
    "nano .github/workflows/build.yml",
    "cd /home/bwk/",
]


@pytest.fixture
def fake_history():
    return list(FAKE_HISTORY)


@pytest.fixture
def config(tmp_path: Path):
    return Config(
        shell=Shell.BASH,
        history_path=tmp_path / ".bash_history",
        favorites_path=tmp_path / ".config" / "histsuggest" / ".bash_favorites",
        prompt="bwk@host$",
    )
