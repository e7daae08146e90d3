"""Allow running the CLI as: python -m projector_core <command>."""

from projector_core.pipeline.cli import main

main()
