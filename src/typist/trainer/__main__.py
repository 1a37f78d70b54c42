import sys

from typist.trainer.cli import main

sys.exit(main())
