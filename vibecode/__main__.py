"""Allow ``python -m vibecode start <projectName>``."""

from vibecode.cli import run

run()
