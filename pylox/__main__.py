import sys

from pylox.lox import main

if __name__ == "__main__":
    sys.exit(main())
