import sys

from hunkview.entry_points import main

sys.exit(main())
