import sys
from thermolink.cli import main

sys.exit(main())
