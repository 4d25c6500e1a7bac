"""Allow ``python -m pray``."""

import sys

from pray.presentation.cli import main

sys.exit(main())
