"""Allow `python -m projector`."""

from projector.cli import run

run()
