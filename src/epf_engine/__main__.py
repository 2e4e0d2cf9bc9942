"""Entry point for running the command line interface."""

from epf_engine.cli import main

if __name__ == "__main__":
    main()
