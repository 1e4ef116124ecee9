import sys

from myshell.shell import main

sys.exit(main())
