import sys

from blackjack.console import main

sys.exit(main())
