import sys

from .cli import hashreport_main

sys.exit(hashreport_main())
