"""Entry point for running fwatch as a module.

Usage:
    python -m fwatch settings.yaml build/ --interval 0.5
"""

from fwatch.cli import main

if __name__ == "__main__":
    main()
