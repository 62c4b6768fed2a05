"""Allow `python -m conlangkit`."""

import sys

from .cli import main

sys.exit(main())
