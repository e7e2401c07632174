import sys

from pump_sniper.cli import main

if __name__ == "__main__":
    sys.exit(main())
