import sys

from svgsketch.main import main

sys.exit(main())
