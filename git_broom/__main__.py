"""Allow ``python -m git_broom``."""

import sys

from git_broom.cli.main import main

sys.exit(main())
