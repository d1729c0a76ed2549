"""Allow ``python -m gitgum``."""

from gitgum.cli.main import run

if __name__ == "__main__":
    run()
