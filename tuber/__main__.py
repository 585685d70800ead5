import sys

from tuber.cli import main


sys.exit(main())
