import sys

from raytracer.cli import main

sys.exit(main())
