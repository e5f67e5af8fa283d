import sys

from mounthelper.app import main

sys.exit(main())
