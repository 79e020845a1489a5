import os
import sys

# Make the flat modules under repository/ importable from a plain checkout
REPO = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'repository'))
if REPO not in sys.path:
	sys.path.insert(0, REPO)
