import sys

from fbsprocessor.main import main

sys.exit(main())
