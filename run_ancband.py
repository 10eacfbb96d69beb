import sys
import os

# Ensure the current directory is strictly in the Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.insert(0, current_dir)

from ancband.app import main

if __name__ == "__main__":
    sys.exit(main())
