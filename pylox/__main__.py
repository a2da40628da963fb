import sys

from pylox.lox import main

sys.exit(main())
