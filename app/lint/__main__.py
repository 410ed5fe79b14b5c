import sys

from app.lint.cli import main

sys.exit(main())
