import sys

from ssa_exporter.main import main

sys.exit(main())
