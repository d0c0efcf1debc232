import sys

from logtemplate.cli import main

sys.exit(main())
