import subprocess, sys


def test_cli_help():
    r = subprocess.run(
        [sys.executable, "-m", "taskdb.cli", "--help"], capture_output=True, text=True
    )
    assert r.returncode == 0 and "Initialize external resources" in r.stdout


def test_bootstrap_help_lists_mongo():
    r = subprocess.run(
        [sys.executable, "-m", "taskdb.cli", "bootstrap", "--help"],
        capture_output=True,
        text=True,
    )
    assert r.returncode == 0 and "mongo" in r.stdout
