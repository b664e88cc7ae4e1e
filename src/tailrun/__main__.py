"""Allow ``python -m tailrun``."""

from tailrun.cli import app

if __name__ == "__main__":
    app(prog_name="tailrun")
