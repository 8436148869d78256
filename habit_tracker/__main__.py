import sys

from habit_tracker.cli import main

sys.exit(main())
