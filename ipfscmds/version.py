"""Package version."""

VERSION = "0.4.10"
REPO_VERSION = 5
