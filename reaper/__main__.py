import sys
from reaper.main import main

if __name__ == "__main__":
    sys.exit(main())
