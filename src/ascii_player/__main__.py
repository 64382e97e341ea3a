import sys

from ascii_player.cli import main


sys.exit(main())
