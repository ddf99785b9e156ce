"""
ghostcal - GitHub-style activity calendar for coding sessions

Shows YOU vs AI activity day-by-day. A Ghost Day is a day where the
agent track logged hours while the human track logged none.

Quick Start:
    pip install -e .
    ghostcal
    ghostcal --input activity.json --weeks 52
"""

from ghostcal.cli.cli import main

if __name__ == "__main__":
    main()
