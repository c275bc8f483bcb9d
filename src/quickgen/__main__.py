import sys

from quickgen.cli import main

if __name__ == '__main__':
    sys.exit(main())
