"""Allow ``python -m autodoc``."""

from .cli import main

main()
