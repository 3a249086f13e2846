import sys

from mini_dom_parser.cli import main

sys.exit(main())
