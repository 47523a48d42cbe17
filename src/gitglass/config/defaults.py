"""Starter .gitglass.toml template."""

DEFAULT_TOML = """\
# gitglass configuration
version = "1.0"

[repo]
# path = "."              # working tree to expose; GIT_REPO_PATH overrides

[git]
executable = "git"
timeout = 30              # seconds per git command; process group killed on expiry
max_output_mb = 10        # larger output is reported as a failure

[log]
default_limit = 20        # commits returned when no valid limit is given
file_default_limit = 10   # same, for per-file history

[server]
host = "127.0.0.1"
port = 3000               # PORT overrides
"""
