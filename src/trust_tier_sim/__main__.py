"""Allow ``python -m trust_tier_sim``."""

import sys

from trust_tier_sim.cli import main

sys.exit(main())
